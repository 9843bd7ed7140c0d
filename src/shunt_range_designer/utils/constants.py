"""
Constants for Shunt Range Designer.

Candidate catalog of standard sense-resistor values and tolerance grades,
plus application-wide defaults.
"""

from typing import Final, Tuple

# Application info
APP_NAME: Final[str] = "Shunt Range Designer"
APP_VERSION: Final[str] = "1.0.0"

# Export schema version
FORMAT_VERSION: Final[str] = "1.0"
EXPORT_FILENAME_PREFIX: Final[str] = "current_measurement_config"

# Standard sense-resistor values in ohms, 1 mOhm to 1 MOhm (1-2-5 series).
# Ascending order is relied upon by the resistor search.
RESISTOR_VALUES: Final[Tuple[float, ...]] = (
    0.001, 0.002, 0.005,
    0.01, 0.02, 0.05,
    0.1, 0.2, 0.5,
    1.0, 2.0, 5.0,
    10.0, 20.0, 50.0,
    100.0, 200.0, 500.0,
    1000.0, 2000.0, 5000.0,
    10000.0, 20000.0, 50000.0,
    100000.0, 200000.0, 500000.0,
    1000000.0,
)

# Standard resistor tolerance grades in percent
RESISTOR_TOLERANCES: Final[Tuple[float, ...]] = (
    0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0,
)

DEFAULT_TOLERANCE_PERCENT: Final[float] = 0.1

# GlobalConfig bounds
MIN_RANGES: Final[int] = 1
MAX_RANGES: Final[int] = 8
MIN_ADC_BITS: Final[int] = 8
MAX_ADC_BITS: Final[int] = 24
MIN_BUS_VOLTAGE: Final[float] = 0.1
MAX_BUS_VOLTAGE: Final[float] = 36.0
MIN_CURRENT_TARGET: Final[float] = 0.001   # A
MAX_CURRENT_TARGET: Final[float] = 100.0   # A
MIN_FLOOR_NANOAMP: Final[float] = 1.0
MAX_FLOOR_NANOAMP: Final[float] = 1000.0

# GlobalConfig defaults (3 ranges, 16-bit ADC at 2.5 uV/LSB)
DEFAULT_NUM_RANGES: Final[int] = 3
DEFAULT_ADC_BITS: Final[int] = 16
DEFAULT_ADC_RESOLUTION: Final[float] = 2.5e-6  # V/LSB
DEFAULT_BUS_VOLTAGE: Final[float] = 3.3
DEFAULT_MAX_CURRENT: Final[float] = 1.0
DEFAULT_MIN_CURRENT_NANOAMP: Final[float] = 1000.0
DEFAULT_HYSTERESIS_FACTOR: Final[float] = 0.01

NANOAMP: Final[float] = 1e-9
