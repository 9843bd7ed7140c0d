"""
Range designer.

Ties the search engine, calculator and validator together. The global
config plus the per-range resistances and tolerances are the only state;
any change recomputes every range and then validates the whole sequence
before a new DesignResult is published.
"""

from typing import List, Optional, Sequence, Any
import math
import logging

from pydantic import ValidationError

from shunt_range_designer.core.calculator import compute_range_for
from shunt_range_designer.core.exceptions import ConfigurationError
from shunt_range_designer.core.models import DesignResult, GlobalConfig
from shunt_range_designer.core.search import select_resistances
from shunt_range_designer.core.validator import validate_ranges
from shunt_range_designer.utils.constants import (
    RESISTOR_VALUES,
    RESISTOR_TOLERANCES,
    DEFAULT_TOLERANCE_PERCENT,
)

logger = logging.getLogger(__name__)


def design_ranges(
    config: GlobalConfig,
    resistances: Optional[Sequence[float]] = None,
    tolerances: Optional[Sequence[float]] = None,
) -> DesignResult:
    """
    Compute and validate a complete design.

    Args:
        config: Global design parameters
        resistances: One resistance per range; searched when omitted
        tolerances: One tolerance per range; defaults to 0.1 %

    Returns:
        Validated DesignResult
    """
    if resistances is None:
        resistances = select_resistances(config)
    if tolerances is None:
        tolerances = [DEFAULT_TOLERANCE_PERCENT] * config.num_ranges

    if len(resistances) != config.num_ranges or len(tolerances) != config.num_ranges:
        raise ConfigurationError(
            f"Expected {config.num_ranges} resistances and tolerances, "
            f"got {len(resistances)} and {len(tolerances)}"
        )

    ranges = [
        compute_range_for(config, resistance, tolerance, index)
        for index, (resistance, tolerance) in enumerate(zip(resistances, tolerances))
    ]
    validated = validate_ranges(ranges, config.min_current_target)

    return DesignResult(global_config=config, ranges=validated)


class RangeDesigner:
    """
    Stateful front end for interactive editing.

    Holds the global config and per-range overrides and always exposes a
    fully validated `result`. Edits are applied to a copy of the state and
    only committed once the recomputation has finished.
    """

    def __init__(
        self,
        config: GlobalConfig,
        catalog: Sequence[float] = RESISTOR_VALUES,
        tolerance_grades: Sequence[float] = RESISTOR_TOLERANCES,
        default_tolerance: float = DEFAULT_TOLERANCE_PERCENT,
    ):
        self.catalog = tuple(catalog)
        self.tolerance_grades = tuple(tolerance_grades)
        self.default_tolerance = default_tolerance
        self._config = config
        self._resistances: List[float] = select_resistances(config, self.catalog)
        self._tolerances: List[float] = [default_tolerance] * config.num_ranges
        self._result = design_ranges(config, self._resistances, self._tolerances)
        logger.info(f"Initial design: {self._result.to_summary_dict()}")

    @property
    def config(self) -> GlobalConfig:
        return self._config

    @property
    def result(self) -> DesignResult:
        return self._result

    def set_resistance(self, index: int, resistance: float) -> DesignResult:
        """Manually replace one range's resistor (catalog values only)."""
        self._check_index(index)
        value = _match_choice(resistance, self.catalog)
        if value is None:
            raise ConfigurationError(f"{resistance} ohm is not a catalog resistance")
        for other, existing in enumerate(self._resistances):
            if other != index and existing == value:
                raise ConfigurationError(f"{value} ohm is already used by range {other}")

        resistances = list(self._resistances)
        resistances[index] = value
        return self._commit(self._config, resistances, self._tolerances)

    def set_tolerance(self, index: int, tolerance: float) -> DesignResult:
        """Manually change one range's tolerance grade."""
        self._check_index(index)
        value = _match_choice(tolerance, self.tolerance_grades)
        if value is None:
            raise ConfigurationError(f"{tolerance}% is not a standard tolerance grade")

        tolerances = list(self._tolerances)
        tolerances[index] = value
        return self._commit(self._config, self._resistances, tolerances)

    def update_global(self, **changes: Any) -> DesignResult:
        """
        Change global parameters.

        Re-runs the resistor search and resets tolerances to the default,
        since the range count or the ideal resistances may have changed.
        """
        try:
            config = GlobalConfig(**{**self._config.model_dump(), **changes})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid global parameters: {e}") from e

        resistances = select_resistances(config, self.catalog)
        tolerances = [self.default_tolerance] * config.num_ranges
        return self._commit(config, resistances, tolerances)

    def regenerate(self) -> DesignResult:
        """Re-run the resistor search, keeping the chosen tolerances."""
        resistances = select_resistances(self._config, self.catalog)
        return self._commit(self._config, resistances, self._tolerances)

    def _commit(
        self,
        config: GlobalConfig,
        resistances: Sequence[float],
        tolerances: Sequence[float],
    ) -> DesignResult:
        result = design_ranges(config, resistances, tolerances)

        self._config = config
        self._resistances = list(resistances)
        self._tolerances = list(tolerances)
        self._result = result

        if not result.is_valid:
            logger.info(f"Design has invalid ranges: {result.invalid_indices}")
        return result

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._config.num_ranges:
            raise ConfigurationError(
                f"Range index {index} out of bounds (0..{self._config.num_ranges - 1})"
            )


def _match_choice(value: float, choices: Sequence[float]) -> Optional[float]:
    """Catalog entry equal to value up to float noise ("100m" * 1e-3)."""
    for choice in choices:
        if math.isclose(value, choice, rel_tol=1e-9):
            return choice
    return None
