"""
Shunt Range Designer

Plans multi-range current measurement: picks one standard sense resistor
per range, derives each range's electrical limits and checks that the
ranges overlap across the requested current span.
"""

__version__ = "1.0.0"

from .config import get_config, Config
from .utils.constants import APP_NAME
from .core.models import GlobalConfig, RangeConfig, OverlapInfo, DesignResult
from .core.designer import RangeDesigner, design_ranges

__all__ = [
    'get_config',
    'Config',
    'APP_NAME',
    'GlobalConfig',
    'RangeConfig',
    'OverlapInfo',
    'DesignResult',
    'RangeDesigner',
    'design_ranges',
]
