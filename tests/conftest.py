"""
Pytest configuration and shared fixtures for Shunt Range Designer tests.
"""
import pytest
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from shunt_range_designer.core.models import GlobalConfig
from shunt_range_designer.core.designer import RangeDesigner, design_ranges


REFERENCE_PARAMS = {
    "num_ranges": 3,
    "adc_bits": 16,
    "adc_resolution_volt_per_lsb": 2.5e-6,
    "bus_voltage": 3.3,
    "max_current_target": 1.0,
    "min_current_target_nanoamp": 1000,
    "hysteresis_factor": 0.01,
}


def make_config(**overrides) -> GlobalConfig:
    """Reference configuration with selected parameters replaced."""
    return GlobalConfig(**{**REFERENCE_PARAMS, **overrides})


@pytest.fixture
def reference_config():
    """3 ranges, 16-bit ADC at 2.5 uV/LSB, 3.3 V bus, 1 A to 1 uA."""
    return make_config()


@pytest.fixture
def reference_design(reference_config):
    """Validated design for the reference configuration."""
    return design_ranges(reference_config)


@pytest.fixture
def designer(reference_config):
    """Interactive designer seeded with the reference configuration."""
    return RangeDesigner(reference_config)


@pytest.fixture
def config_file(tmp_path):
    """Application config file with default settings."""
    from shunt_range_designer.config import Config

    path = tmp_path / "config.yaml"
    config = Config()
    config.export.output_directory = tmp_path / "exports"
    config.save(path)
    return path
