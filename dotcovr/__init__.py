# -*- coding:utf-8 -*-

#  ************************** Copyrights and license ***************************
#
# This file is part of dotcovr 1.0, a parsing tool for dotCover coverage reports.
#
# _____________________________________________________________________________
#
# Copyright (c) 2024-2025 the dotcovr authors
#
# This software is distributed under the 3-clause BSD License.
# For more information, see the README.rst file.
#
# ****************************************************************************

"""Parse dotCover XML coverage reports into a normalized coverage model."""
