"""
Core design modules.

Modules:
- models: Pydantic data models
- calculator: Per-range electrical characteristics
- search: Greedy resistor selection over the catalog
- validator: Inter-range overlap and validity
- designer: Recompute-all-then-validate orchestration
"""

from shunt_range_designer.core.models import (
    GlobalConfig,
    OverlapInfo,
    RangeConfig,
    DesignResult,
)
from shunt_range_designer.core.calculator import compute_range, compute_range_for
from shunt_range_designer.core.search import select_resistances, select_first_resistance
from shunt_range_designer.core.validator import validate_ranges, check_overlap
from shunt_range_designer.core.designer import design_ranges, RangeDesigner
from shunt_range_designer.core.exceptions import (
    ShuntDesignerError,
    ConfigurationError,
    ExportError,
    ImportValidationError,
)

__all__ = [
    # Data models
    "GlobalConfig",
    "OverlapInfo",
    "RangeConfig",
    "DesignResult",
    # Computation
    "compute_range",
    "compute_range_for",
    "select_resistances",
    "select_first_resistance",
    "validate_ranges",
    "check_overlap",
    "design_ranges",
    "RangeDesigner",
    # Errors
    "ShuntDesignerError",
    "ConfigurationError",
    "ExportError",
    "ImportValidationError",
]
