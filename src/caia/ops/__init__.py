"""Turning model responses into file and spreadsheet changes."""

from .apply import InstructionExecutor
from .decoder import decode_instruction, is_executable, parse_instructions
from .extractor import extract_candidates, iter_candidates
from .files import FileMutator, normalize_content
from .models import (
    SPREADSHEET_EXTENSIONS,
    ExecutionResult,
    Instruction,
    SheetActionType,
    SheetOperation,
    Verb,
    is_spreadsheet_path,
)
from .preview import ConfirmationGate, truncate_preview
from .spreadsheet import SpreadsheetMutator

__all__ = [
    "InstructionExecutor",
    "decode_instruction",
    "is_executable",
    "parse_instructions",
    "extract_candidates",
    "iter_candidates",
    "FileMutator",
    "normalize_content",
    "SPREADSHEET_EXTENSIONS",
    "ExecutionResult",
    "Instruction",
    "SheetActionType",
    "SheetOperation",
    "Verb",
    "is_spreadsheet_path",
    "ConfirmationGate",
    "truncate_preview",
    "SpreadsheetMutator",
]
