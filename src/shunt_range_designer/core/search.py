"""
Resistor search engine.

Greedy selection of one catalog resistor per range. Range 0 gets the
largest catalog value that still reaches the requested maximum current;
every following range takes the largest unused value whose ceiling still
overlaps the floor of the range before it.

The forward scan stops at the first candidate that fails to overlap. This
assumes overlap holds for a contiguous run of candidates and then fails
for good as resistance grows, which is true for the closed-form
calculator. With other calculators the early stop still applies; the
result is not a global optimum.
"""

from typing import Callable, List, Optional, Sequence, Set
import logging

import numpy as np

from shunt_range_designer.core.calculator import compute_range
from shunt_range_designer.core.models import GlobalConfig, RangeConfig
from shunt_range_designer.utils.constants import (
    RESISTOR_VALUES,
    DEFAULT_TOLERANCE_PERCENT,
)

logger = logging.getLogger(__name__)

RangeCalculator = Callable[..., RangeConfig]


def select_first_resistance(ideal_resistance: float, catalog: Sequence[float]) -> int:
    """
    Index of the resistor for the highest-current range.

    Picks the catalog entry nearest to the ideal value (first one on ties),
    then steps down while it is still above the ideal value, so the range
    never falls short of the requested maximum current.
    """
    values = np.asarray(catalog, dtype=float)
    index = int(np.argmin(np.abs(values - ideal_resistance)))

    while values[index] > ideal_resistance and index > 0:
        index -= 1

    return index


def select_resistances(
    config: GlobalConfig,
    catalog: Sequence[float] = RESISTOR_VALUES,
    calculator: RangeCalculator = compute_range,
) -> List[float]:
    """
    Propose one resistance per range.

    Args:
        config: Global design parameters
        catalog: Ascending candidate resistances (ohm)
        calculator: Range calculator, same signature as compute_range

    Returns:
        List of num_ranges resistances, index 0 first. Never raises for
        a non-empty catalog; a badly overlapping design is left for the
        validator to flag.

    Raises:
        ValueError: If the catalog is empty
    """
    if not catalog:
        raise ValueError("Resistor catalog is empty")

    def evaluate(resistance: float, is_first: bool, is_last: bool) -> RangeConfig:
        return calculator(
            resistance,
            DEFAULT_TOLERANCE_PERCENT,
            config.adc_bits,
            config.bus_voltage,
            config.adc_resolution_volt_per_lsb,
            config.hysteresis_factor,
            is_first_range=is_first,
            is_last_range=is_last,
        )

    ideal = config.full_scale_voltage / config.max_current_target
    current_index = select_first_resistance(ideal, catalog)
    logger.debug(f"Range 0: ideal {ideal:.6g} ohm -> {catalog[current_index]} ohm")

    resistances = [catalog[current_index]]
    used: Set[int] = {current_index}

    for i in range(1, config.num_ranges):
        reference = evaluate(catalog[current_index], i == 1, False)
        is_last = i == config.num_ranges - 1

        best_index: Optional[int] = None
        index = current_index
        while index < len(catalog) - 1:
            index += 1
            if index in used:
                continue

            candidate = evaluate(catalog[index], False, is_last)
            if candidate.up_threshold > reference.down_threshold:
                best_index = index
            else:
                break

        if best_index is None:
            best_index = _fallback_index(current_index, used, len(catalog))
            if best_index is None:
                logger.warning(f"Range {i}: catalog exhausted, reusing {catalog[current_index]} ohm")
                resistances.append(catalog[current_index])
                continue
            logger.warning(
                f"Range {i}: no catalog value overlaps range {i - 1}, "
                f"using {catalog[best_index]} ohm"
            )

        current_index = best_index
        used.add(best_index)
        resistances.append(catalog[best_index])
        logger.debug(f"Range {i}: selected {catalog[best_index]} ohm")

    return resistances


def _fallback_index(current_index: int, used: Set[int], size: int) -> Optional[int]:
    """Nearest unused entry, preferring larger values."""
    for index in range(current_index + 1, size):
        if index not in used:
            return index
    for index in range(current_index - 1, -1, -1):
        if index not in used:
            return index
    return None
