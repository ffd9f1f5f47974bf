"""Permissive numeric conversion for operator-supplied text.

Both helpers parse the longest numeric prefix of the input after
leading whitespace and fall back to zero when there is none, so
``"42abc"`` is 42 and ``"abc"`` is 0.  No error is ever raised.
"""

from __future__ import annotations

import re

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)", re.ASCII)
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.ASCII,
)


def lenient_int(text: str) -> int:
    """Convert the leading integer in *text*, or return ``0``."""
    match = _INT_PREFIX.match(text)
    if match is None:
        return 0
    return int(match.group(1))


def lenient_float(text: str) -> float:
    """Convert the leading decimal number in *text*, or return ``0.0``."""
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group(1))
