"""
Pydantic data models for Shunt Range Designer.

Python code uses snake_case field names; the exported JSON uses the
camelCase aliases (numRanges, upThreshold, ...).
"""

from typing import List, Optional, Dict, Any

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

from shunt_range_designer.utils.constants import (
    MIN_RANGES,
    MAX_RANGES,
    MIN_ADC_BITS,
    MAX_ADC_BITS,
    MIN_BUS_VOLTAGE,
    MAX_BUS_VOLTAGE,
    MIN_CURRENT_TARGET,
    MAX_CURRENT_TARGET,
    MIN_FLOOR_NANOAMP,
    MAX_FLOOR_NANOAMP,
    NANOAMP,
)


# ============================================================================
# Base Model
# ============================================================================

class BaseDesignModel(BaseModel):
    """Base model with common configuration."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        validate_default=True,
    )


# ============================================================================
# Global Configuration
# ============================================================================

class GlobalConfig(BaseDesignModel):
    """
    Global design parameters.

    Supplied by the caller for one computation pass. Out-of-range values
    are rejected here, so everything downstream can assume sane inputs.
    """
    num_ranges: int = Field(..., ge=MIN_RANGES, le=MAX_RANGES, description="Number of ranges")
    adc_bits: int = Field(..., ge=MIN_ADC_BITS, le=MAX_ADC_BITS, description="ADC bit depth")
    adc_resolution_volt_per_lsb: float = Field(..., gt=0, description="ADC resolution (V/LSB)")
    bus_voltage: float = Field(..., ge=MIN_BUS_VOLTAGE, le=MAX_BUS_VOLTAGE, description="Bus voltage (V)")
    max_current_target: float = Field(
        ..., ge=MIN_CURRENT_TARGET, le=MAX_CURRENT_TARGET, description="Maximum current to measure (A)"
    )
    min_current_target_nanoamp: float = Field(
        ..., ge=MIN_FLOOR_NANOAMP, le=MAX_FLOOR_NANOAMP, description="Minimum current to measure (nA)"
    )
    hysteresis_factor: float = Field(..., gt=0, lt=1, description="Hysteresis band fraction")

    @property
    def full_scale_voltage(self) -> float:
        """Largest shunt voltage the ADC can digitize."""
        return self.adc_resolution_volt_per_lsb * 2 ** self.adc_bits

    @property
    def min_current_target(self) -> float:
        """Minimum current target in amperes."""
        return self.min_current_target_nanoamp * NANOAMP


# ============================================================================
# Range Data
# ============================================================================

class OverlapInfo(BaseDesignModel):
    """Overlap of a range with its neighbours. None means no such neighbour."""
    overlaps_with_next: Optional[bool] = None
    overlaps_with_prev: Optional[bool] = None
    is_valid: bool = False


class RangeConfig(BaseDesignModel):
    """
    Derived electrical characteristics of one measurement range.

    Index 0 is the highest-current range. Instances are rebuilt from scratch
    on every change; the overlap annotation is only meaningful after the
    whole sequence has been validated.
    """
    resistance: float = Field(..., gt=0, description="Sense resistance (ohm)")
    resistance_tolerance_percent: float = Field(..., ge=0, description="Resistor tolerance (%)")

    # Theoretical window
    theoretical_max_current: float = Field(..., description="Full-scale current (A)")
    theoretical_min_current: float = Field(..., description="One-LSB current (A)")
    current_resolution: float = Field(..., description="Current per LSB (A)")

    # Hysteresis-adjusted window
    up_threshold: float = Field(..., description="Switch-up current (A)")
    down_threshold: float = Field(..., description="Switch-down current (A)")

    # Load and error
    min_load_resistance: float = Field(..., ge=0, description="Smallest load (ohm), 0 if undefined")
    max_load_resistance: float = Field(..., ge=0, description="Largest load (ohm), 0 if undefined")
    max_theoretical_error_percent: float = Field(..., ge=0, description="Worst-case error (%)")
    max_power_dissipation: float = Field(..., ge=0, description="Shunt dissipation at full scale (W)")

    overlap: OverlapInfo = Field(default_factory=OverlapInfo)

    @property
    def is_valid(self) -> bool:
        return self.overlap.is_valid

    @property
    def shunt_voltage_drop(self) -> float:
        """Voltage across the shunt at the switch-up current."""
        return self.up_threshold * self.resistance


# ============================================================================
# Design Result
# ============================================================================

class DesignResult(BaseDesignModel):
    """A global configuration together with its validated range sequence."""
    global_config: GlobalConfig
    ranges: List[RangeConfig] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True when every range is valid (complete, gap-free coverage)."""
        return bool(self.ranges) and all(r.overlap.is_valid for r in self.ranges)

    @property
    def resistances(self) -> List[float]:
        return [r.resistance for r in self.ranges]

    @property
    def tolerances(self) -> List[float]:
        return [r.resistance_tolerance_percent for r in self.ranges]

    @property
    def invalid_indices(self) -> List[int]:
        return [i for i, r in enumerate(self.ranges) if not r.overlap.is_valid]

    @property
    def coverage(self) -> Optional[Dict[str, float]]:
        """Actual measurable span (lowest floor to highest ceiling)."""
        if not self.ranges:
            return None
        return {
            "min_current": self.ranges[-1].down_threshold,
            "max_current": self.ranges[0].up_threshold,
        }

    def to_summary_dict(self) -> Dict[str, Any]:
        """Convert to summary dictionary for display/logging."""
        return {
            "num_ranges": len(self.ranges),
            "resistances": self.resistances,
            "valid": self.is_valid,
            "invalid_ranges": self.invalid_indices,
        }
