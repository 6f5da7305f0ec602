"""Preview pending instructions and ask the operator for confirmation."""

import logging
from typing import Callable

from .models import Instruction, Verb

logger = logging.getLogger(__name__)

AFFIRMATIVE_RESPONSES = frozenset({"y", "yes"})
DEFAULT_PREVIEW_CHARS = 200


def truncate_preview(content: str, limit: int = DEFAULT_PREVIEW_CHARS) -> str:
    """First ``limit`` characters of ``content``, with ``...`` appended when cut."""
    if len(content) > limit:
        return content[:limit] + "..."
    return content


class ConfirmationGate:
    """Blocks on operator input before a create or edit is applied."""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        preview_chars: int = DEFAULT_PREVIEW_CHARS,
    ):
        self.input_func = input_func
        self.preview_chars = preview_chars

    def build_prompt(self, instruction: Instruction) -> str:
        """Human-readable question describing what ``instruction`` will do."""
        verb = instruction.verb
        if verb not in (Verb.CREATE, Verb.EDIT):
            return (
                f"\nDo you want to perform '{instruction.operation}' operation "
                f"on '{instruction.filename}'? (y/n): "
            )

        if instruction.is_spreadsheet:
            count = len(instruction.actions)
            if verb is Verb.CREATE:
                return (
                    f"\nDo you want to create Excel file '{instruction.filename}' "
                    f"with {count} sheet operations? (y/n): "
                )
            return (
                f"\nDo you want to edit Excel file '{instruction.filename}' "
                f"with {count} operations? (y/n): "
            )

        preview = truncate_preview(instruction.content, self.preview_chars)
        return (
            f"\nDo you want to {verb.value} '{instruction.filename}' with the following content?"
            f"\n\nPreview:\n{preview}\n\n(y/n): "
        )

    def confirm(self, instruction: Instruction) -> bool:
        """Return True to proceed. Reads always proceed without asking."""
        if instruction.is_read:
            return True

        try:
            response = self.input_func(self.build_prompt(instruction))
        except (EOFError, OSError) as e:
            logger.warning(f"Could not read confirmation for {instruction.filename}: {e}")
            print(f"Error reading response: {e}")
            response = ""

        approved = response.strip().lower() in AFFIRMATIVE_RESPONSES
        if not approved:
            print("Operation cancelled by user.")
        logger.info(
            f"Operator {'approved' if approved else 'declined'} "
            f"{instruction.operation} of {instruction.filename}"
        )
        return approved
