"""Human-readable byte size parsing and formatting."""

import math
import re


# Single letters and SI symbols are decimal, "i" symbols are binary
_UNITS = {
    "": 1,
    "b": 1,
    "k": 1000,
    "kb": 1000,
    "ki": 1024,
    "kib": 1024,
    "m": 1000 ** 2,
    "mb": 1000 ** 2,
    "mi": 1024 ** 2,
    "mib": 1024 ** 2,
    "g": 1000 ** 3,
    "gb": 1000 ** 3,
    "gi": 1024 ** 3,
    "gib": 1024 ** 3,
    "t": 1000 ** 4,
    "tb": 1000 ** 4,
    "ti": 1024 ** 4,
    "tib": 1024 ** 4,
    "p": 1000 ** 5,
    "pb": 1000 ** 5,
    "pi": 1024 ** 5,
    "pib": 1024 ** 5,
}

_SIZE_RE = re.compile(r"^([0-9][0-9,]*(?:\.[0-9]+)?)\s*([a-zA-Z]*)$")

_SI_SUFFIXES = ["B", "kB", "MB", "GB", "TB", "PB", "EB"]


def parse_bytes(value: str) -> int:
    """Parse a size such as '20GB', '20G', '1.5 TiB' or '512' into bytes.

    Raises:
        ValueError: if the value is not a recognised size
    """
    match = _SIZE_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid size: {value!r}")

    number, unit = match.groups()
    multiplier = _UNITS.get(unit.lower())
    if multiplier is None:
        raise ValueError(f"Unknown size unit: {unit!r}")

    return int(float(number.replace(",", "")) * multiplier)


def format_bytes(size: int) -> str:
    """Format a byte count with SI units, e.g. 20000000000 -> '20 GB'."""
    if size < 10:
        return f"{size} B"

    exponent = 0
    while exponent < len(_SI_SUFFIXES) - 1 and size >= 1000 ** (exponent + 1):
        exponent += 1
    value = math.floor(size / (1000 ** exponent) * 10 + 0.5) / 10
    if value < 10:
        return f"{value:.1f} {_SI_SUFFIXES[exponent]}"
    return f"{value:.0f} {_SI_SUFFIXES[exponent]}"
