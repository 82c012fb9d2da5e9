"""Clean up model output that ignored the "no markdown fences" rule."""

from __future__ import annotations

import re

_OPENING_FENCE = re.compile(
    r"^\s*```(?:tsx|jsx|javascript|typescript|react)?", re.IGNORECASE
)
_CLOSING_FENCE = re.compile(r"```\s*\Z")


def sanitize_code(text: str) -> str:
    """Strip one leading code fence (plus language tag) and one trailing fence.

    Whitespace before the opening fence and after the closing fence is
    tolerated; the result is the same as anchoring the fences at the very
    start and end, since the text is stripped afterwards anyway.  Runs once;
    nested or malformed fencing inside the code is left alone.
    """
    text = _OPENING_FENCE.sub("", text, count=1)
    text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()
