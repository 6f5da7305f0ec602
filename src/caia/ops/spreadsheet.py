"""Create, edit and read spreadsheet documents."""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from openpyxl import Workbook

from ..errors import MutationError
from ..sheets import DEFAULT_SHEET, WorkbookClient, classify_row
from .models import ExecutionResult, Instruction, SheetActionType, SheetOperation, Verb

logger = logging.getLogger(__name__)


class SpreadsheetMutator:
    """Applies create, edit and read instructions to workbooks.

    Each instruction opens (or creates) its workbook, applies the actions in
    order against that one in-memory document and saves it once at the end.
    Nothing is written when an action fails.
    """

    def __init__(
        self,
        root: Union[str, Path] = ".",
        client: Optional[WorkbookClient] = None,
    ):
        self.root = Path(root)
        self.client = client or WorkbookClient()

    def resolve(self, filename: str) -> Path:
        return self.root / filename

    def execute(self, instruction: Instruction) -> ExecutionResult:
        verb = instruction.verb
        if verb is Verb.CREATE:
            return self.create(instruction.filename, instruction.actions)
        if verb is Verb.EDIT:
            return self.edit(instruction.filename, instruction.actions)
        if verb is Verb.READ:
            return self.read(instruction.filename, instruction.actions)
        raise MutationError(f"unknown operation: {instruction.operation}")

    def create(self, filename: str, actions: list[SheetOperation]) -> ExecutionResult:
        path = self.resolve(filename)
        workbook = self.client.new_workbook()
        for action in actions:
            self._apply(workbook, action, skip_default_sheet=True)
        self.client.save(workbook, path)

        print(f"\nExcel file created: {filename}")
        return ExecutionResult(
            success=True,
            operation=Verb.CREATE.value,
            filename=filename,
            message=f"Created {filename} with {len(actions)} sheet operations",
        )

    def edit(self, filename: str, actions: list[SheetOperation]) -> ExecutionResult:
        path = self.resolve(filename)
        workbook = self.client.open_workbook(path)
        for action in actions:
            self._apply(workbook, action, skip_default_sheet=False)
        self.client.save(workbook, path)

        print(f"\nChanges saved to: {filename}")
        return ExecutionResult(
            success=True,
            operation=Verb.EDIT.value,
            filename=filename,
            message=f"Applied {len(actions)} operations to {filename}",
        )

    def read(self, filename: str, actions: list[SheetOperation]) -> ExecutionResult:
        path = self.resolve(filename)
        workbook = self.client.open_workbook(path, data_only=True)
        rows_by_sheet: dict[str, list[list[Any]]] = {}
        try:
            for action in actions:
                if action.kind != SheetActionType.READ_SHEET.value:
                    continue
                rows = self.client.read_rows(workbook, action.sheet)
                rows_by_sheet[action.sheet] = rows

                print(f"\nReading sheet '{action.sheet}' from {filename}:\n")
                for index, row in enumerate(rows, start=1):
                    print(f"Row {index}: {row}")
        finally:
            workbook.close()

        return ExecutionResult(
            success=True,
            operation=Verb.READ.value,
            filename=filename,
            message=f"Read {len(rows_by_sheet)} sheets from {filename}",
            rows=rows_by_sheet,
        )

    def _apply(self, workbook: Workbook, action: SheetOperation, skip_default_sheet: bool) -> None:
        kind = action.kind
        if kind == SheetActionType.CREATE_SHEET.value:
            # A new workbook already has the default sheet
            if skip_default_sheet and action.sheet == DEFAULT_SHEET:
                return
            self.client.create_sheet(workbook, action.sheet)
        elif kind == SheetActionType.SET_CELL.value:
            self.client.set_cell(workbook, action.sheet, action.cell, action.value)
        elif kind == SheetActionType.ADD_ROW.value:
            if action.row:
                self.client.append_row(workbook, action.sheet, classify_row(action.row))
        else:
            logger.debug(f"Ignoring sheet action '{kind}' on '{action.sheet}'")
