"""
Range characteristics calculator.

Maps one sense resistor plus the ADC parameters to the full set of derived
quantities for a single measurement range. Pure functions, no state.
"""

import logging

import numpy as np

from shunt_range_designer.core.models import GlobalConfig, RangeConfig

logger = logging.getLogger(__name__)


def compute_range(
    resistance: float,
    tolerance_percent: float,
    adc_bits: int,
    bus_voltage: float,
    adc_resolution_volt_per_lsb: float,
    hysteresis_factor: float,
    is_first_range: bool = False,
    is_last_range: bool = False,
) -> RangeConfig:
    """
    Compute the electrical characteristics of one range.

    Args:
        resistance: Sense resistance in ohms (> 0)
        tolerance_percent: Resistor tolerance in percent
        adc_bits: ADC bit depth
        bus_voltage: Supply voltage driving the load (V)
        adc_resolution_volt_per_lsb: Shunt voltage per ADC step (V)
        hysteresis_factor: Fraction of full scale used as switching margin
        is_first_range: Highest-current range (ceiling is not discounted)
        is_last_range: Lowest-current range (floor is not discounted)

    Returns:
        RangeConfig with a neutral overlap annotation. Degenerate load
        resistances are clamped to zero rather than raised.
    """
    full_scale_voltage = adc_resolution_volt_per_lsb * 2 ** adc_bits

    max_current = full_scale_voltage / resistance
    min_current = adc_resolution_volt_per_lsb / resistance

    up_threshold = max_current * (1 - hysteresis_factor)
    down_threshold = max_current * hysteresis_factor
    if is_first_range:
        up_threshold = max_current
    if is_last_range:
        down_threshold = min_current

    # Load resistance = (Vbus - shunt drop) / current
    min_load = _load_resistance(bus_voltage, up_threshold, resistance)
    max_load = _load_resistance(bus_voltage, down_threshold, resistance)

    # Worst-case error: toleranced shunt against the smallest load
    if min_load > 0:
        max_error = resistance * (1 + tolerance_percent / 100) / min_load * 100
    else:
        max_error = 0.0

    return RangeConfig(
        resistance=resistance,
        resistance_tolerance_percent=tolerance_percent,
        theoretical_max_current=max_current,
        theoretical_min_current=min_current,
        current_resolution=min_current,
        up_threshold=up_threshold,
        down_threshold=down_threshold,
        min_load_resistance=min_load,
        max_load_resistance=max_load,
        max_theoretical_error_percent=max_error,
        max_power_dissipation=up_threshold ** 2 * resistance,
    )


def compute_range_for(
    config: GlobalConfig,
    resistance: float,
    tolerance_percent: float,
    index: int,
) -> RangeConfig:
    """Compute a range at a given position in a design described by config."""
    return compute_range(
        resistance,
        tolerance_percent,
        config.adc_bits,
        config.bus_voltage,
        config.adc_resolution_volt_per_lsb,
        config.hysteresis_factor,
        is_first_range=index == 0,
        is_last_range=index == config.num_ranges - 1,
    )


def _load_resistance(bus_voltage: float, current: float, resistance: float) -> float:
    """Load that draws `current` at `bus_voltage` in series with the shunt."""
    if current <= 0:
        return 0.0

    value = (bus_voltage - current * resistance) / current
    if not np.isfinite(value) or value <= 0:
        logger.debug(f"Load resistance clamped to 0 (R={resistance}, I={current})")
        return 0.0
    return float(value)
