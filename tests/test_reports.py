"""
tests/test_reports.py
──────────────────────
Tests for the text and Excel report generator.
"""
import pandas as pd
import pytest

from src.data.store import WaterSourceRepository
from src.reports.generator import (
    REPORT_HEADERS,
    SHEET_NAME,
    HistoricalReportGenerator,
    UnsupportedFormatError,
)


@pytest.fixture
def generator(repository, tmp_path, now):
    return HistoricalReportGenerator(repository, output_dir=tmp_path, clock=lambda: now)


class TestTextReport:
    def test_header_and_sources(self, generator):
        text = generator.generate_report()
        lines = text.splitlines()
        assert lines[0] == "Water Management System - Historical Report"
        assert lines[1] == "Generated at: 01/06/2024 12:00:00"
        assert "Total water sources: 3" in lines
        assert "Source ID: 2" in lines
        assert "Type: WELL" in lines
        assert "Location: East River" in lines
        assert "Capacity: 1000.0 m³" in lines
        assert "Current quality: FAIR" in lines
        assert text.count("-" * 40) == 3

    def test_empty_repository(self, tmp_path):
        text = HistoricalReportGenerator(WaterSourceRepository(), output_dir=tmp_path).generate_report()
        assert "Total water sources: 0" in text


class TestExcelExport:
    def test_writes_workbook(self, generator, tmp_path):
        path = generator.export_report("EXCEL")
        assert path == tmp_path / "water_sources_report_20240601_120000.xlsx"
        df = pd.read_excel(path, sheet_name=SHEET_NAME, engine="openpyxl")
        assert list(df.columns) == REPORT_HEADERS
        assert list(df["ID"]) == [1, 2, 3]
        assert list(df["Type"]) == ["RIVER", "WELL", "RIVER"]
        assert df.loc[2, "Quality"] == "FAIR"

    def test_format_is_case_insensitive(self, generator):
        assert generator.export_report("excel").exists()

    @pytest.mark.parametrize("fmt", ["PDF", "csv", "", None])
    def test_unsupported_format(self, generator, fmt):
        with pytest.raises(UnsupportedFormatError, match="Unsupported format"):
            generator.export_report(fmt)
