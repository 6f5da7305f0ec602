"""Create, edit and read plain files."""

import logging
from pathlib import Path
from typing import Union

from ..errors import MutationError
from .models import ExecutionResult, Instruction, Verb

logger = logging.getLogger(__name__)

ESCAPED_NEWLINE = "\\n"


def normalize_content(content: str) -> str:
    """Turn each literal backslash-n pair into a newline.

    One left-to-right pass: text produced by a replacement is never
    scanned again.
    """
    return content.replace(ESCAPED_NEWLINE, "\n")


class FileMutator:
    """Applies create, edit and read instructions to ordinary files."""

    def __init__(self, root: Union[str, Path] = "."):
        self.root = Path(root)

    def resolve(self, filename: str) -> Path:
        return self.root / filename

    def execute(self, instruction: Instruction) -> ExecutionResult:
        """Run ``instruction``; I/O failures raise MutationError."""
        verb = instruction.verb
        if verb is Verb.CREATE:
            return self.create(instruction.filename, instruction.content)
        if verb is Verb.EDIT:
            return self.edit(instruction.filename, instruction.content)
        if verb is Verb.READ:
            return self.read(instruction.filename)
        raise MutationError(f"unknown operation: {instruction.operation}")

    def create(self, filename: str, content: str) -> ExecutionResult:
        path = self.resolve(filename)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MutationError(f"error creating directory: {e}") from e
        self._write(path, content)
        return ExecutionResult(
            success=True,
            operation=Verb.CREATE.value,
            filename=filename,
            message=f"Created {filename}",
        )

    def edit(self, filename: str, content: str) -> ExecutionResult:
        self._write(self.resolve(filename), content)
        return ExecutionResult(
            success=True,
            operation=Verb.EDIT.value,
            filename=filename,
            message=f"Updated {filename}",
        )

    def read(self, filename: str) -> ExecutionResult:
        path = self.resolve(filename)
        try:
            with open(path, encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise MutationError(f"error reading file: {e}") from e

        print(f"\nContents of {filename}:\n\n{content}")
        return ExecutionResult(
            success=True,
            operation=Verb.READ.value,
            filename=filename,
            message=f"Read {len(content)} characters from {filename}",
            content=content,
        )

    def _write(self, path: Path, content: str) -> None:
        try:
            # newline="" keeps the normalized newlines byte-for-byte
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(normalize_content(content))
        except OSError as e:
            raise MutationError(f"error writing file: {e}") from e
        logger.info(f"Wrote {path}")
