"""
Overlap validator.

Annotates an ordered range sequence with neighbour overlap and validity.
Validity is a property of the whole sequence, so it is always evaluated
over all ranges at once.
"""

from typing import List, Sequence
import logging

from shunt_range_designer.core.models import OverlapInfo, RangeConfig

logger = logging.getLogger(__name__)


def check_overlap(upper: RangeConfig, lower: RangeConfig) -> bool:
    """
    True when `lower` (the next, more sensitive range) hands over to `upper`
    without a gap: the lower range's ceiling is above the upper range's floor.
    """
    return upper.down_threshold < lower.up_threshold


def validate_ranges(ranges: Sequence[RangeConfig], min_current_target: float) -> List[RangeConfig]:
    """
    Return copies of `ranges` annotated with OverlapInfo.

    Args:
        ranges: Ranges ordered from highest to lowest current
        min_current_target: Current (A) the last range must reach down to

    Returns:
        New RangeConfig objects; the inputs are not modified.
    """
    count = len(ranges)
    annotated: List[RangeConfig] = []

    for i, config in enumerate(ranges):
        with_next = check_overlap(config, ranges[i + 1]) if i < count - 1 else None
        with_prev = check_overlap(ranges[i - 1], config) if i > 0 else None
        reaches_floor = config.down_threshold <= min_current_target

        if count == 1:
            is_valid = reaches_floor
        elif i == 0:
            is_valid = bool(with_next)
        elif i == count - 1:
            is_valid = bool(with_prev) and reaches_floor
        else:
            is_valid = bool(with_next) and bool(with_prev)

        if not is_valid:
            logger.debug(
                f"Range {i} invalid: next={with_next} prev={with_prev} "
                f"floor={config.down_threshold:.3e} A"
            )

        annotated.append(config.model_copy(update={
            "overlap": OverlapInfo(
                overlaps_with_next=with_next,
                overlaps_with_prev=with_prev,
                is_valid=is_valid,
            )
        }))

    return annotated
