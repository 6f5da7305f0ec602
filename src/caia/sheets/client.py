"""Spreadsheet document access on top of openpyxl."""

import logging
import re
from pathlib import Path
from typing import Any, Union

from openpyxl import Workbook, load_workbook
from openpyxl.utils import column_index_from_string
from openpyxl.utils.exceptions import IllegalCharacterError
from openpyxl.worksheet.worksheet import Worksheet

from ..errors import MutationError
from .models import CellValue, ValueKind

logger = logging.getLogger(__name__)

DEFAULT_SHEET = "Sheet1"

_CELL_PATTERN = re.compile(r"([A-Za-z]{1,3})([1-9]\d*)")


def parse_cell_notation(cell: str) -> tuple[str, int]:
    """Parse A1 notation into column letters and row number."""
    match = _CELL_PATTERN.fullmatch(cell.strip())
    if not match:
        raise ValueError(f"Invalid cell notation: {cell!r}")
    return match.group(1).upper(), int(match.group(2))


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _trim_row(values: tuple) -> list:
    row = list(values)
    while row and _is_empty(row[-1]):
        row.pop()
    return row


class WorkbookClient:
    """Opens, creates, mutates and saves workbooks."""

    def new_workbook(self) -> Workbook:
        """Create an in-memory workbook holding one empty default sheet."""
        workbook = Workbook()
        workbook.active.title = DEFAULT_SHEET
        return workbook

    def open_workbook(self, path: Path, read_only: bool = False, data_only: bool = False) -> Workbook:
        """Open an existing workbook.

        ``data_only`` loads the cached result of formula cells instead of the
        formula text.
        """
        try:
            return load_workbook(path, read_only=read_only, data_only=data_only)
        except Exception as e:
            # Damaged files surface as zip, parser, key or value errors
            raise MutationError(f"Failed to open workbook {path}: {e}") from e

    def save(self, workbook: Workbook, path: Path) -> None:
        try:
            workbook.save(path)
        except (OSError, ValueError) as e:
            raise MutationError(f"Failed to save workbook {path}: {e}") from e
        logger.info(f"Saved workbook {path}")

    def get_sheet(self, workbook: Workbook, sheet_name: str) -> Worksheet:
        if sheet_name not in workbook.sheetnames:
            raise MutationError(f"Sheet '{sheet_name}' does not exist")
        return workbook[sheet_name]

    def create_sheet(self, workbook: Workbook, sheet_name: str) -> Worksheet:
        """Add a sheet; an existing sheet of that name is an error."""
        if sheet_name in workbook.sheetnames:
            raise MutationError(f"Sheet '{sheet_name}' already exists")
        try:
            return workbook.create_sheet(title=sheet_name)
        except ValueError as e:
            raise MutationError(f"Failed to create sheet '{sheet_name}': {e}") from e

    def set_cell(self, workbook: Workbook, sheet_name: str, cell: str, value: Any) -> None:
        sheet = self.get_sheet(workbook, sheet_name)
        try:
            column, row = parse_cell_notation(cell)
            target = sheet.cell(row=row, column=column_index_from_string(column))
        except ValueError as e:
            raise MutationError(f"Failed to set cell {cell} in sheet '{sheet_name}': {e}") from e
        self._write(target, value, sheet_name)

    def row_count(self, sheet: Worksheet) -> int:
        """Index of the last row that holds a value, 0 for an empty sheet."""
        if isinstance(sheet, Worksheet):
            # Walk back from the sheet bounds; usually stops on the first row
            for index in range(sheet.max_row, 0, -1):
                (values,) = sheet.iter_rows(min_row=index, max_row=index, values_only=True)
                if any(not _is_empty(value) for value in values):
                    return index
            return 0

        # Read-only sheets stream their rows, so a single forward pass is cheapest
        count = 0
        for index, values in enumerate(sheet.iter_rows(values_only=True), start=1):
            if any(not _is_empty(value) for value in values):
                count = index
        return count

    def append_row(self, workbook: Workbook, sheet_name: str, values: list[CellValue]) -> int:
        """Write ``values`` on the row after the last non-empty one and return its index."""
        sheet = self.get_sheet(workbook, sheet_name)
        row_index = self.row_count(sheet) + 1
        for column, cell_value in enumerate(values, start=1):
            self._write(sheet.cell(row=row_index, column=column), cell_value, sheet_name)
        logger.debug(f"Appended {len(values)} values to row {row_index} of '{sheet_name}'")
        return row_index

    def read_rows(self, workbook: Workbook, sheet_name: str) -> list[list]:
        """All rows up to the last non-empty one, trailing empty cells trimmed."""
        sheet = self.get_sheet(workbook, sheet_name)
        rows = [_trim_row(values) for values in sheet.iter_rows(values_only=True)]
        while rows and not rows[-1]:
            rows.pop()
        return rows

    def summarize(self, path: Path) -> tuple[list[str], dict[str, int]]:
        """Sheet names and per-sheet row counts of the workbook at ``path``."""
        workbook = self.open_workbook(path, read_only=True)
        try:
            names = list(workbook.sheetnames)
            return names, {name: self.row_count(workbook[name]) for name in names}
        except Exception as e:
            # Read-only sheets are parsed lazily, so damage can surface here
            raise MutationError(f"Failed to read workbook {path}: {e}") from e
        finally:
            workbook.close()

    def _write(self, target, value: Union[CellValue, Any], sheet_name: str) -> None:
        kind = None
        if isinstance(value, CellValue):
            kind, value = value.kind, value.value
        try:
            target.value = value
        except (ValueError, IllegalCharacterError) as e:
            raise MutationError(
                f"Failed to write {target.coordinate} in sheet '{sheet_name}': {e}"
            ) from e
        # Text is stored literally, never as a formula
        if isinstance(value, str) and kind in (None, ValueKind.TEXT):
            target.data_type = "s"
