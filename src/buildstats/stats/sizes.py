"""Human-readable byte sizes."""

from __future__ import annotations

import math

_UNITS = ("bytes", "KiB", "MiB", "GiB")


def format_size(size: int | float) -> str:
    """Format a byte count with three significant digits.

    Examples: ``0 bytes``, ``198 bytes``, ``1.89 KiB``, ``1020 bytes``.
    """
    if not isinstance(size, (int, float)) or math.isnan(size) or math.isinf(size) or size <= 0:
        return "0 bytes"
    index = min(int(math.log(size) / math.log(1024)), len(_UNITS) - 1)
    value = float(f"{size / 1024**index:.3g}")
    return f"{value:g} {_UNITS[index]}"
