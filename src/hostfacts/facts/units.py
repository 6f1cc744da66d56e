"""Unit conversions for fact values."""

from typing import Any


def bytes_to_mb(value: Any) -> float | None:
    """Convert a byte count to megabytes rounded to two decimals."""
    if value is None:
        return None
    return round(int(value) / (1024.0 * 1024.0), 2)


def bytes_to_human_readable(value: Any) -> str | None:
    """Format a byte count as e.g. '1.50 GiB'."""
    if value is None:
        return None

    amount = float(value)
    for unit in ("bytes", "KiB", "MiB", "GiB", "TiB", "PiB"):
        if amount < 1024.0 or unit == "PiB":
            break
        amount /= 1024.0

    if unit == "bytes":
        return f"{int(amount)} bytes"
    return f"{amount:.2f} {unit}"
