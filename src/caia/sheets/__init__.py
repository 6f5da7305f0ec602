"""Spreadsheet engine integration."""

from .client import DEFAULT_SHEET, WorkbookClient, parse_cell_notation
from .models import CellValue, ValueKind, classify_row, classify_token

__all__ = [
    "DEFAULT_SHEET",
    "WorkbookClient",
    "parse_cell_notation",
    "CellValue",
    "ValueKind",
    "classify_row",
    "classify_token",
]
