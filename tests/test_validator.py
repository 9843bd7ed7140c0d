"""
Tests for the overlap validator.
"""
import pytest

from conftest import make_config
from shunt_range_designer.core.calculator import compute_range_for
from shunt_range_designer.core.validator import check_overlap, validate_ranges


def _build(config, resistances):
    return [
        compute_range_for(config, resistance, 0.1, index)
        for index, resistance in enumerate(resistances)
    ]


class TestOverlapAnnotation:
    """Neighbour flags and validity per position."""

    def test_reference_design_valid(self, reference_config):
        ranges = validate_ranges(_build(reference_config, [0.1, 5.0, 200.0]),
                                 reference_config.min_current_target)

        assert [r.overlap.is_valid for r in ranges] == [True, True, True]
        assert ranges[0].overlap.overlaps_with_prev is None
        assert ranges[0].overlap.overlaps_with_next is True
        assert ranges[1].overlap.overlaps_with_prev is True
        assert ranges[1].overlap.overlaps_with_next is True
        assert ranges[2].overlap.overlaps_with_prev is True
        assert ranges[2].overlap.overlaps_with_next is None

    def test_gap_invalidates_both_neighbours(self, reference_config):
        """Range 1 at 10 ohm tops out below range 0's floor."""
        ranges = validate_ranges(_build(reference_config, [0.1, 10.0, 200.0]),
                                 reference_config.min_current_target)

        assert ranges[1].up_threshold <= ranges[0].down_threshold
        assert ranges[0].overlap.overlaps_with_next is False
        assert ranges[0].overlap.is_valid is False
        assert ranges[1].overlap.overlaps_with_prev is False
        assert ranges[1].overlap.is_valid is False
        assert ranges[2].overlap.is_valid is True

    def test_last_range_must_reach_floor(self):
        """Overlap alone is not enough: the last floor must be <= the global minimum."""
        config = make_config(num_ranges=2, min_current_target_nanoamp=1)
        ranges = validate_ranges(_build(config, [0.1, 5.0]), config.min_current_target)

        # 2.5 uV / 5 ohm = 500 nA > 1 nA
        assert ranges[1].overlap.overlaps_with_prev is True
        assert ranges[1].overlap.is_valid is False
        assert ranges[0].overlap.is_valid is True

    def test_floor_comparison_inclusive(self, reference_config):
        ranges = _build(reference_config, [0.1, 5.0, 200.0])
        floor = ranges[-1].down_threshold
        annotated = validate_ranges(ranges, floor)
        assert annotated[-1].overlap.is_valid is True

    def test_mirrored_flags_agree(self, reference_config):
        ranges = validate_ranges(_build(reference_config, [0.1, 10.0, 20.0]),
                                 reference_config.min_current_target)
        for upper, lower in zip(ranges, ranges[1:]):
            assert upper.overlap.overlaps_with_next == lower.overlap.overlaps_with_prev


class TestBoundaries:
    """Single-range and empty sequences."""

    def test_single_range_valid_when_floor_reached(self):
        config = make_config(num_ranges=1, max_current_target=0.01)
        ranges = validate_ranges(_build(config, [10.0]), config.min_current_target)

        assert ranges[0].down_threshold == pytest.approx(2.5e-7)
        assert ranges[0].overlap.is_valid is True
        assert ranges[0].overlap.overlaps_with_next is None
        assert ranges[0].overlap.overlaps_with_prev is None

    def test_single_range_invalid_when_floor_missed(self):
        config = make_config(num_ranges=1)
        ranges = validate_ranges(_build(config, [0.1]), config.min_current_target)

        # 2.5 uV / 0.1 ohm = 25 uA > 1 uA
        assert ranges[0].overlap.is_valid is False

    def test_empty_sequence(self):
        assert validate_ranges([], 1e-6) == []


class TestPurity:
    """Validation never changes its inputs."""

    def test_inputs_untouched(self, reference_config):
        ranges = _build(reference_config, [0.1, 10.0, 200.0])
        snapshot = [r.model_dump() for r in ranges]

        validate_ranges(ranges, reference_config.min_current_target)

        assert [r.model_dump() for r in ranges] == snapshot

    def test_electrical_fields_preserved(self, reference_config):
        ranges = _build(reference_config, [0.1, 5.0, 200.0])
        annotated = validate_ranges(ranges, reference_config.min_current_target)

        for before, after in zip(ranges, annotated):
            assert before.model_dump(exclude={"overlap"}) == after.model_dump(exclude={"overlap"})

    def test_check_overlap_strict(self, reference_config):
        upper, lower = _build(reference_config, [0.1, 5.0, 200.0])[:2]
        assert check_overlap(upper, lower) is True
        touching = lower.model_copy(update={"up_threshold": upper.down_threshold})
        assert check_overlap(upper, touching) is False
