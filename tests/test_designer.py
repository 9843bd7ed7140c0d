"""
Tests for the range designer: full recomputation, manual edits and global
parameter changes.
"""
import pytest
from pydantic import ValidationError

from conftest import make_config
from shunt_range_designer.core.designer import RangeDesigner, design_ranges
from shunt_range_designer.core.exceptions import ConfigurationError
from shunt_range_designer.core.models import GlobalConfig
from shunt_range_designer.utils.constants import DEFAULT_TOLERANCE_PERCENT


def _electrical(range_config):
    return range_config.model_dump(exclude={"overlap"})


class TestDesignRanges:
    """Stateless design computation."""

    def test_reference_design(self, reference_design):
        assert reference_design.resistances == [0.1, 5.0, 200.0]
        assert reference_design.tolerances == [DEFAULT_TOLERANCE_PERCENT] * 3
        assert reference_design.is_valid
        assert reference_design.invalid_indices == []

    def test_range0_covers_target(self, reference_design):
        r0 = reference_design.ranges[0]
        assert r0.theoretical_max_current == pytest.approx(1.6384)
        assert r0.theoretical_max_current >= reference_design.global_config.max_current_target

    def test_ordering_invariants(self, reference_design):
        ranges = reference_design.ranges
        for r in ranges:
            assert r.theoretical_min_current < r.theoretical_max_current
            assert r.down_threshold <= r.up_threshold
        for higher, lower in zip(ranges, ranges[1:]):
            assert lower.theoretical_max_current < higher.theoretical_max_current
            assert lower.up_threshold > higher.down_threshold

    def test_last_range_reaches_minimum(self, reference_design):
        floor = reference_design.ranges[-1].down_threshold
        assert floor <= reference_design.global_config.min_current_target

    def test_coverage(self, reference_design):
        coverage = reference_design.coverage
        assert coverage["max_current"] == reference_design.ranges[0].up_threshold
        assert coverage["min_current"] == reference_design.ranges[-1].down_threshold

    def test_shunt_voltage_drop(self, reference_design):
        r0, r1, _ = reference_design.ranges
        # Range 0 switches up at full scale, so the drop is the ADC full scale
        assert r0.shunt_voltage_drop == pytest.approx(reference_design.global_config.full_scale_voltage)
        assert r1.shunt_voltage_drop == pytest.approx(r1.up_threshold * 5.0)
        assert r1.shunt_voltage_drop < r0.shunt_voltage_drop

    def test_explicit_resistances(self, reference_config):
        result = design_ranges(reference_config, [0.1, 2.0, 100.0], [1.0, 0.5, 0.1])
        assert result.resistances == [0.1, 2.0, 100.0]
        assert result.tolerances == [1.0, 0.5, 0.1]

    def test_length_mismatch_rejected(self, reference_config):
        with pytest.raises(ConfigurationError):
            design_ranges(reference_config, [0.1, 5.0])

    def test_deterministic(self, reference_config):
        assert design_ranges(reference_config) == design_ranges(reference_config)


class TestManualEdits:
    """Single-range edits recompute and revalidate everything."""

    def test_resistance_gap_flags_range(self, designer):
        before = designer.result
        after = designer.set_resistance(1, 10.0)

        assert after.ranges[1].overlap.overlaps_with_prev is False
        assert after.ranges[1].overlap.is_valid is False
        assert not after.is_valid
        assert 1 in after.invalid_indices

        # Other ranges keep their computed values
        assert _electrical(after.ranges[0]) == _electrical(before.ranges[0])
        assert _electrical(after.ranges[2]) == _electrical(before.ranges[2])

    def test_resistance_edit_accepts_float_noise(self, designer):
        result = designer.set_resistance(2, 100 * 1e-3 * 1000)
        assert result.resistances[2] == 100.0

    def test_non_catalog_resistance_rejected(self, designer):
        with pytest.raises(ConfigurationError):
            designer.set_resistance(1, 4700.0)
        assert designer.result.resistances == [0.1, 5.0, 200.0]

    @pytest.mark.parametrize("index,value", [(1, 0.1), (2, 5.0), (0, 200.0)])
    def test_duplicate_resistance_rejected(self, designer, index, value):
        with pytest.raises(ConfigurationError, match="already used"):
            designer.set_resistance(index, value)
        assert designer.result.resistances == [0.1, 5.0, 200.0]
        assert len(set(designer.result.resistances)) == 3

    def test_same_value_on_same_range_allowed(self, designer):
        result = designer.set_resistance(1, 5.0)
        assert result.resistances == [0.1, 5.0, 200.0]

    def test_tolerance_edit_changes_error_only(self, designer):
        before = designer.result
        after = designer.set_tolerance(0, 5.0)

        assert after.ranges[0].resistance_tolerance_percent == 5.0
        assert after.ranges[0].max_theoretical_error_percent > before.ranges[0].max_theoretical_error_percent
        assert after.ranges[0].up_threshold == before.ranges[0].up_threshold
        assert after.ranges[1] == before.ranges[1]

    def test_non_standard_tolerance_rejected(self, designer):
        with pytest.raises(ConfigurationError):
            designer.set_tolerance(0, 3.0)

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_index_out_of_bounds(self, designer, index):
        with pytest.raises(ConfigurationError):
            designer.set_resistance(index, 1.0)
        with pytest.raises(ConfigurationError):
            designer.set_tolerance(index, 1.0)

    def test_result_matches_stateless_design(self, designer):
        designer.set_resistance(1, 2.0)
        designer.set_tolerance(2, 1.0)

        expected = design_ranges(designer.config, [0.1, 2.0, 200.0], [0.1, 0.1, 1.0])
        assert designer.result == expected


class TestGlobalChanges:
    """Global parameter changes re-run the search."""

    def test_more_ranges(self, designer):
        result = designer.update_global(num_ranges=4)

        assert len(result.ranges) == 4
        assert result.resistances[:3] == [0.1, 5.0, 200.0]
        assert result.global_config.num_ranges == 4

    def test_tolerances_reset(self, designer):
        designer.set_tolerance(1, 2.0)
        result = designer.update_global(hysteresis_factor=0.05)
        assert result.tolerances == [DEFAULT_TOLERANCE_PERCENT] * 3

    def test_invalid_change_rejected_and_state_kept(self, designer):
        before = designer.result
        with pytest.raises(ConfigurationError):
            designer.update_global(num_ranges=9)
        assert designer.result == before

    def test_regenerate_keeps_tolerances(self, designer):
        designer.set_resistance(1, 10.0)
        designer.set_tolerance(2, 1.0)

        result = designer.regenerate()

        assert result.resistances == [0.1, 5.0, 200.0]
        assert result.tolerances == [0.1, 0.1, 1.0]
        assert result.is_valid

    def test_custom_default_tolerance(self, reference_config):
        designer = RangeDesigner(reference_config, default_tolerance=1.0)
        assert designer.result.tolerances == [1.0, 1.0, 1.0]


class TestGlobalConfig:
    """Input validation at the model boundary."""

    def test_derived_quantities(self, reference_config):
        assert reference_config.full_scale_voltage == pytest.approx(0.16384)
        assert reference_config.min_current_target == pytest.approx(1e-6)

    @pytest.mark.parametrize("field,value", [
        ("num_ranges", 0),
        ("num_ranges", 9),
        ("adc_bits", 7),
        ("adc_bits", 25),
        ("adc_resolution_volt_per_lsb", 0.0),
        ("bus_voltage", 0.05),
        ("bus_voltage", 40.0),
        ("max_current_target", 0.0001),
        ("max_current_target", 101.0),
        ("min_current_target_nanoamp", 0.5),
        ("min_current_target_nanoamp", 2000.0),
        ("hysteresis_factor", 0.0),
        ("hysteresis_factor", 1.0),
    ])
    def test_out_of_range_rejected(self, field, value):
        with pytest.raises(ValidationError):
            make_config(**{field: value})

    def test_camel_case_aliases(self):
        config = GlobalConfig.model_validate({
            "numRanges": 2,
            "adcBits": 12,
            "adcResolutionVoltPerLsb": 1e-3,
            "busVoltage": 5.0,
            "maxCurrentTarget": 2.0,
            "minCurrentTargetNanoamp": 100,
            "hysteresisFactor": 0.05,
        })
        assert config.num_ranges == 2
        assert config.adc_bits == 12

    def test_immutable(self, reference_config):
        with pytest.raises(ValidationError):
            reference_config.num_ranges = 5
