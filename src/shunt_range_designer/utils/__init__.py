"""
Utility modules for Shunt Range Designer.

Provides the candidate catalog constants and display formatting.
"""

from shunt_range_designer.utils.formatting import (
    format_value,
    parse_value,
    resolution_permille,
)

__all__ = [
    "format_value",
    "parse_value",
    "resolution_permille",
]
