"""
src/reports/generator.py
────────────────────────
Water source reports.

  generate_report()       plain-text summary of every source
  export_report("EXCEL")  .xlsx workbook, one row per source

Both read a snapshot of the repository, in repository list order.
"""
from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pandas as pd
from openpyxl.utils import get_column_letter

from config.settings import settings
from src.data.store import WaterSourceRepository
from src.utils.logger import get_logger

logger = get_logger(__name__)

REPORT_HEADERS = ["ID", "Type", "Location", "Capacity", "Quality"]
SHEET_NAME = "Water Sources Report"
SEPARATOR = "-" * 40


class UnsupportedFormatError(ValueError):
    """Raised for any export format other than EXCEL."""


class HistoricalReportGenerator:

    SUPPORTED_FORMATS = ("EXCEL",)

    def __init__(
        self,
        repository: WaterSourceRepository,
        output_dir: str | Path = settings.REPORT_DIR,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._repository = repository
        self._output_dir = Path(output_dir)
        self._clock = clock

    def generate_report(self) -> str:
        sources = self._repository.list()
        lines = [
            "Water Management System - Historical Report",
            f"Generated at: {self._clock().strftime('%d/%m/%Y %H:%M:%S')}",
            "",
            f"Total water sources: {len(sources)}",
            "",
        ]
        for s in sources:
            lines += [
                f"Source ID: {s.id}",
                f"Type: {s.kind.name}",
                f"Location: {s.location}",
                f"Capacity: {s.capacity} m³",
                f"Current quality: {s.quality.name}",
                SEPARATOR,
            ]
        return "\n".join(lines) + "\n"

    def report_frame(self) -> pd.DataFrame:
        """The export table: REPORT_HEADERS columns, one row per source."""
        rows = [
            [s.id, s.kind.name, s.location, s.capacity, s.quality.name]
            for s in self._repository.list()
        ]
        return pd.DataFrame(rows, columns=REPORT_HEADERS)

    def export_report(self, format: str) -> Path:
        """
        Export the report.

        Args:
            format: Only "EXCEL" (any case) is supported

        Returns:
            Path of the written file

        Raises:
            UnsupportedFormatError: for any other format
        """
        if not isinstance(format, str) or format.upper() not in self.SUPPORTED_FORMATS:
            raise UnsupportedFormatError(f"Unsupported format: {format}")
        return self._export_excel()

    def _export_excel(self) -> Path:
        df = self.report_frame()
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path = self._output_dir / f"water_sources_report_{self._clock().strftime('%Y%m%d_%H%M%S')}.xlsx"

        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
            sheet = writer.sheets[SHEET_NAME]
            for i, column in enumerate(df.columns, start=1):
                width = max([len(str(column))] + [len(str(v)) for v in df[column]])
                sheet.column_dimensions[get_column_letter(i)].width = width + 2

        logger.info("Exported %d sources to %s", len(df), path)
        return path
