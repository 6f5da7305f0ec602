"""Data models for spreadsheet operations."""

import math
import re
from enum import Enum
from typing import Union

from pydantic import BaseModel

# Spellings accepted as booleans, checked after the numeric parse.
TRUE_TOKENS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_TOKENS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


class ValueKind(str, Enum):
    """Kinds a row token can be typed as."""

    NUMBER = "number"
    BOOLEAN = "boolean"
    TEXT = "text"


class CellValue(BaseModel):
    """A typed value ready to be written to a cell."""

    kind: ValueKind
    value: Union[bool, int, float, str]

    @classmethod
    def text(cls, token: str) -> "CellValue":
        return cls(kind=ValueKind.TEXT, value=token)


def _parse_number(token: str) -> Union[int, float, None]:
    # float() tolerates surrounding whitespace and digit separators; those stay text
    if token != token.strip() or "_" in token:
        return None
    try:
        number = float(token)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    if _INTEGER_PATTERN.fullmatch(token):
        return int(token)
    return number


def classify_token(token: str) -> CellValue:
    """Type a raw row token.

    The order is fixed: a token that parses as a finite number becomes a
    NUMBER, otherwise one of the accepted boolean spellings becomes a
    BOOLEAN, otherwise the token is kept unchanged as TEXT. Never raises.
    """
    number = _parse_number(token)
    if number is not None:
        return CellValue(kind=ValueKind.NUMBER, value=number)
    if token in TRUE_TOKENS:
        return CellValue(kind=ValueKind.BOOLEAN, value=True)
    if token in FALSE_TOKENS:
        return CellValue(kind=ValueKind.BOOLEAN, value=False)
    return CellValue.text(token)


def classify_row(tokens: list[str]) -> list[CellValue]:
    """Type each token of a row independently."""
    return [classify_token(token) for token in tokens]
