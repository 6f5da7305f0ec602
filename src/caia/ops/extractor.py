"""Locate JSON objects embedded in free-form model responses."""

from typing import Iterator

OPEN_BRACE = "{"
CLOSE_BRACE = "}"
QUOTE = '"'
ESCAPE = "\\"


def _find_span_end(text: str, start: int) -> int:
    """Return the index just past the brace closing the one at ``start``, or -1.

    Single pass with three pieces of state: nesting depth, whether the scan
    is inside a quoted string, and whether the previous character was an
    escape. Braces inside strings do not count and an escaped quote does
    not end a string.
    """
    depth = 1
    in_string = False
    escaped = False
    position = start + 1
    length = len(text)

    while position < length and depth > 0:
        char = text[position]
        if escaped:
            escaped = False
        elif char == ESCAPE:
            escaped = True
        elif char == QUOTE:
            in_string = not in_string
        elif not in_string:
            if char == OPEN_BRACE:
                depth += 1
            elif char == CLOSE_BRACE:
                depth -= 1
        position += 1

    return position if depth == 0 else -1


def iter_candidates(text: str) -> Iterator[str]:
    """Yield each top-level balanced ``{...}`` span of ``text`` in order.

    An opening brace that is never closed is skipped and the scan resumes
    on the following character, so unbalanced input still terminates.
    """
    position = 0
    while True:
        start = text.find(OPEN_BRACE, position)
        if start == -1:
            return
        end = _find_span_end(text, start)
        if end == -1:
            position = start + 1
            continue
        yield text[start:end]
        position = end


def extract_candidates(text: str) -> list[str]:
    return list(iter_candidates(text))
