"""Confirm and execute validated instructions."""

import logging
from pathlib import Path
from typing import Optional, Union

from ..errors import MutationError
from .files import FileMutator
from .models import ExecutionResult, Instruction, Verb
from .preview import ConfirmationGate
from .spreadsheet import SpreadsheetMutator

logger = logging.getLogger(__name__)


class InstructionExecutor:
    """Routes each instruction through the confirmation gate to a mutator.

    Failures never escape :meth:`execute`; they come back as an unsuccessful
    ExecutionResult so the rest of the batch still runs.
    """

    def __init__(
        self,
        root: Union[str, Path] = ".",
        gate: Optional[ConfirmationGate] = None,
        file_mutator: Optional[FileMutator] = None,
        spreadsheet_mutator: Optional[SpreadsheetMutator] = None,
    ):
        self.gate = gate or ConfirmationGate()
        self.file_mutator = file_mutator or FileMutator(root)
        self.spreadsheet_mutator = spreadsheet_mutator or SpreadsheetMutator(root)

    def describe(self, instruction: Instruction) -> str:
        """One-line summary printed before the instruction is confirmed."""
        verb = instruction.verb
        if verb is Verb.CREATE and instruction.is_spreadsheet:
            return (
                f"Preparing to create Excel file: {instruction.filename} "
                f"with {len(instruction.actions)} sheet operations"
            )
        if verb is Verb.CREATE:
            return f"Preparing to create file: {instruction.filename}"
        if verb is Verb.EDIT:
            return f"Preparing to edit file: {instruction.filename}"
        return f"Preparing to read file: {instruction.filename}"

    def execute(self, instruction: Instruction) -> ExecutionResult:
        if not self.gate.confirm(instruction):
            return ExecutionResult(
                success=False,
                operation=instruction.operation,
                filename=instruction.filename,
                message="Operation cancelled by user.",
                cancelled=True,
            )

        mutator = self.spreadsheet_mutator if instruction.is_spreadsheet else self.file_mutator
        try:
            result = mutator.execute(instruction)
        except MutationError as e:
            logger.error(f"{instruction.operation} of {instruction.filename} failed: {e}")
            return ExecutionResult(
                success=False,
                operation=instruction.operation,
                filename=instruction.filename,
                errors=[str(e)],
            )
        except Exception as e:
            logger.error(f"Error applying {instruction.filename}: {e}", exc_info=True)
            return ExecutionResult(
                success=False,
                operation=instruction.operation,
                filename=instruction.filename,
                errors=[str(e)],
            )

        logger.info(f"{instruction.operation} of {instruction.filename} succeeded")
        return result

    def execute_all(self, instructions: list[Instruction]) -> list[ExecutionResult]:
        """Execute instructions in order, reporting each outcome."""
        results = []
        for instruction in instructions:
            print(f"\n{self.describe(instruction)}")
            result = self.execute(instruction)
            if result.success:
                print(f"Successfully handled operation for {instruction.filename}")
            elif not result.cancelled:
                print(f"Error performing operation: {'; '.join(result.errors)}")
            results.append(result)
        return results
