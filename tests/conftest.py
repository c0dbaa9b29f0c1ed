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

from pathlib import Path

from lxml import etree
import pytest


# A report with two assemblies, the first one contains
# - a class in a namespace with a property, a lambda and an async method,
# - a compiler generated type which is not a class of its own,
# - a class without a namespace,
# - a class without any statement.
DOTCOVER_REPORT = r"""
<Root CoveredStatements="6" TotalStatements="8" CoveragePercent="75" ReportType="Xml" DotCoverVersion="2023.3.3">
  <Assembly Name="Calculator" CoveredStatements="5" TotalStatements="7" CoveragePercent="71">
    <Namespace Name="Calculator.Core">
      <Type Name="Adder">
        <Method Name="Add(System.Int32,System.Int32):System.Int32">
          <Statement FileIndex="1" Line="10" Column="9" EndLine="12" EndColumn="10" Covered="True" />
          <Statement FileIndex="1" Line="11" Column="13" EndLine="11" EndColumn="26" Covered="False" />
        </Method>
        <Method Name="get_Count():System.Int32">
          <Statement FileIndex="1" Line="5" Column="27" EndLine="5" EndColumn="31" Covered="False" />
        </Method>
        <Method Name="&lt;Process&gt;b__4_0(System.Object):System.Void">
          <Statement FileIndex="1" Line="14" Column="35" EndLine="14" EndColumn="50" Covered="True" />
        </Method>
        <Type Name="&lt;DoWork&gt;d__3">
          <Method Name="MoveNext():System.Void">
            <Statement FileIndex="1" Line="20" Column="9" EndLine="22" EndColumn="10" Covered="True" />
          </Method>
        </Type>
      </Type>
      <Type Name="&lt;&gt;c__DisplayClass1_0">
        <Method Name="&lt;Run&gt;b__0():System.Void">
          <Statement FileIndex="1" Line="30" Column="9" EndLine="30" EndColumn="20" Covered="True" />
        </Method>
      </Type>
    </Namespace>
    <Namespace Name="Calculator.Empty">
      <Type Name="Marker" />
    </Namespace>
    <Type Name="Program">
      <Method Name="Main(System.String[]):System.Void">
        <Statement FileIndex="2" Line="3" Column="5" EndLine="4" EndColumn="6" Covered="True" />
      </Method>
    </Type>
  </Assembly>
  <Assembly Name="Calculator.Tests" CoveredStatements="1" TotalStatements="1" CoveragePercent="100">
    <Namespace Name="Calculator.Tests">
      <Type Name="AdderTests">
        <Method Name="AddsNumbers():System.Void">
          <Statement FileIndex="3" Line="7" Column="9" EndLine="7" EndColumn="40" Covered="True" />
        </Method>
      </Type>
    </Namespace>
  </Assembly>
  <FileIndices>
    <File Index="1" Name="C:\src\Calculator\Adder.cs" ChecksumAlgorithm="SHA256" Checksum="00" />
    <File Index="2" Name="C:\src\Calculator\Program.cs" ChecksumAlgorithm="SHA256" Checksum="00" />
    <File Index="3" Name="C:\src\Tests\AdderTests.cs" ChecksumAlgorithm="SHA256" Checksum="00" />
  </FileIndices>
</Root>
"""


@pytest.fixture
def dotcover_report() -> etree._Element:
    """The parsed example report."""
    return etree.fromstring(DOTCOVER_REPORT)


@pytest.fixture
def dotcover_report_file(tmp_path: Path) -> Path:
    """The example report as file in a temporary directory."""
    filename = tmp_path / "report.xml"
    filename.write_text(DOTCOVER_REPORT.lstrip(), encoding="utf-8")
    return filename
