"""Decode and validate instruction candidates."""

import logging

from pydantic import ValidationError

from ..errors import InstructionDecodeError
from .extractor import iter_candidates
from .models import Instruction, Verb

logger = logging.getLogger(__name__)


def decode_instruction(candidate: str) -> Instruction:
    """Decode one candidate span into an Instruction.

    Raises:
        InstructionDecodeError: the span is not JSON or has the wrong shape.
    """
    try:
        return Instruction.model_validate_json(candidate)
    except ValidationError as e:
        reason = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'input'}: {error['msg']}"
            for error in e.errors()
        )
        raise InstructionDecodeError(candidate, reason) from e


def is_executable(instruction: Instruction) -> bool:
    """Whether a decoded instruction carries everything its verb needs."""
    if not instruction.operation or not instruction.filename:
        return False
    if instruction.verb is Verb.READ:
        return True
    if instruction.verb in (Verb.CREATE, Verb.EDIT):
        return bool(instruction.content) or len(instruction.actions) > 0
    return False


def parse_instructions(text: str) -> list[Instruction]:
    """Extract, decode and validate every instruction embedded in ``text``.

    Decode failures are reported and skipped; incomplete instructions are
    dropped without a report.
    """
    instructions = []
    for candidate in iter_candidates(text):
        try:
            instruction = decode_instruction(candidate)
        except InstructionDecodeError as e:
            logger.warning(f"Skipping undecodable candidate ({len(candidate)} chars): {e.reason}")
            print(f"\nError parsing JSON: {e.reason}")
            continue

        if not is_executable(instruction):
            logger.debug(
                f"Dropping incomplete instruction: operation={instruction.operation!r} "
                f"filename={instruction.filename!r}"
            )
            continue

        instructions.append(instruction)
        if instruction.is_read:
            print(f"\nFound valid read action for file: {instruction.filename}")
        else:
            print(f"\nFound valid action for file: {instruction.filename}")

    return instructions
