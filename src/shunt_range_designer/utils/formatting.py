"""
Display helpers: SI-prefixed formatting and parsing of values.
"""

import re
from typing import List, Tuple

# (scale, symbol), ascending
SI_PREFIXES: List[Tuple[float, str]] = [
    (1e-12, "p"),
    (1e-9, "n"),
    (1e-6, "μ"),
    (1e-3, "m"),
    (1.0, ""),
    (1e3, "k"),
    (1e6, "M"),
]

_SUFFIX_SCALE = {
    "p": 1e-12,
    "n": 1e-9,
    "u": 1e-6,
    "μ": 1e-6,
    "µ": 1e-6,
    "m": 1e-3,
    "k": 1e3,
    "K": 1e3,
    "M": 1e6,
}

_VALUE_PATTERN = re.compile(
    r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([pnuμµmkKM]?)\s*(?:Ω|ohm|ohms|A|V|W|%)?\s*$"
)


def format_value(value: float, unit: str) -> str:
    """
    Format a value with the SI prefix that puts it in [1, 1000).

    Precision follows the scaled mantissa, not the unscaled value: 3
    decimals below 1, then 2, 1 and 0 from 1, 10 and 100 upward. So 0.15 A
    prints as "150 mA" rather than "150.000 mA".

    >>> format_value(0.0015, "A")
    '1.50 mA'
    """
    abs_value = abs(value)

    scale, symbol = SI_PREFIXES[0]
    if abs_value >= SI_PREFIXES[-1][0]:
        scale, symbol = SI_PREFIXES[-1]
    else:
        for candidate_scale, candidate_symbol in SI_PREFIXES:
            if candidate_scale <= abs_value < candidate_scale * 1000:
                scale, symbol = candidate_scale, candidate_symbol
                break

    mantissa = value / scale
    precision = 3
    if abs(mantissa) >= 1:
        precision = 2
    if abs(mantissa) >= 10:
        precision = 1
    if abs(mantissa) >= 100:
        precision = 0

    return f"{mantissa:.{precision}f} {symbol}{unit}"


def parse_value(text: str) -> float:
    """
    Parse a number with an optional SI suffix and unit ("4.7k", "10mΩ").

    Raises:
        ValueError: If the text is not a number
    """
    match = _VALUE_PATTERN.match(text)
    if not match:
        raise ValueError(f"Cannot parse value: {text!r}")

    number, suffix = match.groups()
    return float(number) * _SUFFIX_SCALE.get(suffix, 1.0)


def resolution_permille(resolution: float, max_current: float) -> float:
    """Current resolution as per-mille of the target full scale."""
    if max_current <= 0:
        return 0.0
    return resolution * 1000 / max_current
