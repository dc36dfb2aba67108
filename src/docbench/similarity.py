"""Edit-distance based text similarity between source and converted text."""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Collapse whitespace runs to a single space, trim and lowercase.

    Parameters
    ----------
    text : str | None
        Raw extracted text. ``None`` is treated as empty.

    Returns
    -------
    str
        Normalized text.
    """
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip().lower()


def levenshtein_distance(left: str, right: str) -> int:
    """Return the unit-cost edit distance between two strings.

    Uses the full dynamic-programming recurrence, keeping two rows of the
    table at a time. Runs in ``O(len(left) * len(right))`` time.
    """
    if left == right:
        return 0
    if not left:
        return len(right)
    if not right:
        return len(left)

    previous = list(range(len(right) + 1))
    for i, left_char in enumerate(left, start=1):
        current = [i] + [0] * len(right)
        for j, right_char in enumerate(right, start=1):
            if left_char == right_char:
                current[j] = previous[j - 1]
            else:
                current[j] = min(previous[j], current[j - 1], previous[j - 1]) + 1
        previous = current
    return previous[-1]


def similarity(left: str | None, right: str | None) -> float:
    """Compute normalized text similarity in ``[0.0, 1.0]``.

    Parameters
    ----------
    left : str | None
        First text, usually extracted from the source document.
    right : str | None
        Second text, usually extracted from the converted output.

    Returns
    -------
    float
        ``1 - distance / max(len(left), len(right))`` over the normalized
        strings, floored at ``0.0``. Identical (including both empty)
        normalized strings score ``1.0``.
    """
    a = normalize_text(left)
    b = normalize_text(right)
    if a == b:
        return 1.0

    longest = max(len(a), len(b))
    distance = levenshtein_distance(a, b)
    return max(0.0, 1.0 - distance / longest)
