"""
JSON export for Shunt Range Designer.

Writes a design as a versioned JSON document:
- format version and ISO-8601 timestamp
- global configuration snapshot
- range sequence with overlap annotations

Values are raw floats (SI units, no suffixes) and survive a round trip
unchanged.
"""

import json
import logging
from datetime import datetime, date, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, ValidationError

from shunt_range_designer.core.designer import design_ranges
from shunt_range_designer.core.exceptions import ExportError, ImportValidationError
from shunt_range_designer.core.models import (
    BaseDesignModel,
    DesignResult,
    GlobalConfig,
    RangeConfig,
)
from shunt_range_designer.utils.constants import FORMAT_VERSION, EXPORT_FILENAME_PREFIX

logger = logging.getLogger(__name__)

SUPPORTED_VERSIONS = (FORMAT_VERSION,)


class DesignExport(BaseDesignModel):
    """On-disk schema of an exported design."""
    version: str = Field(default=FORMAT_VERSION)
    timestamp: datetime
    global_config: GlobalConfig
    ranges: List[RangeConfig]

    def to_result(self) -> DesignResult:
        return DesignResult(global_config=self.global_config, ranges=self.ranges)


def export_design(result: DesignResult, timestamp: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Build the export document for a design.

    Args:
        result: Validated design
        timestamp: Export time (defaults to now, UTC)

    Returns:
        JSON-compatible dictionary with camelCase keys
    """
    document = DesignExport(
        timestamp=timestamp or datetime.now(timezone.utc),
        global_config=result.global_config,
        ranges=result.ranges,
    )
    return document.model_dump(mode="json", by_alias=True)


def design_to_json(result: DesignResult, indent: int = 2, timestamp: Optional[datetime] = None) -> str:
    """Serialize a design to a JSON string."""
    return json.dumps(export_design(result, timestamp), indent=indent)


def save_design(
    result: DesignResult,
    output_path: Union[str, Path],
    indent: int = 2,
) -> Path:
    """
    Write a design to disk.

    If output_path is an existing directory a dated filename is generated
    inside it.

    Raises:
        ExportError: If the file cannot be written
    """
    output_path = Path(output_path)
    if output_path.is_dir():
        output_path = output_path / generate_export_filename()

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(design_to_json(result, indent=indent), encoding="utf-8")
    except OSError as e:
        logger.error(f"Design export failed: {e}")
        raise ExportError(f"Export failed: {e}") from e

    logger.info(f"Exported design to: {output_path}")
    return output_path


def parse_export(data: Union[str, bytes, Dict[str, Any]]) -> DesignExport:
    """
    Parse an export document, keeping its version and timestamp.

    Raises:
        ImportValidationError: On malformed JSON, unknown version or
            inconsistent content
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ImportValidationError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ImportValidationError("Export document must be a JSON object")

    version = data.get("version")
    if version not in SUPPORTED_VERSIONS:
        raise ImportValidationError(f"Unsupported export version: {version!r}")

    try:
        document = DesignExport.model_validate(data)
    except ValidationError as e:
        raise ImportValidationError(f"Invalid design export: {e}") from e

    expected = document.global_config.num_ranges
    if len(document.ranges) != expected:
        raise ImportValidationError(
            f"Export declares {expected} ranges but contains {len(document.ranges)}"
        )

    return document


def parse_design(data: Union[str, bytes, Dict[str, Any]]) -> DesignResult:
    """Parse an export document into a DesignResult."""
    return parse_export(data).to_result()


def load_design(path: Union[str, Path]) -> DesignResult:
    """
    Read an exported design from disk.

    Raises:
        ImportValidationError: If the file is missing or invalid
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ImportValidationError(f"Cannot read {path}: {e}") from e

    result = parse_design(text)
    logger.info(f"Loaded design from {path}: {result.to_summary_dict()}")
    return result


def revalidate(result: DesignResult) -> DesignResult:
    """Recompute a design from its resistances and tolerances."""
    return design_ranges(result.global_config, result.resistances, result.tolerances)


def generate_export_filename(export_date: Optional[date] = None) -> str:
    """Generate a dated export filename."""
    export_date = export_date or datetime.now(timezone.utc).date()
    return f"{EXPORT_FILENAME_PREFIX}_{export_date.isoformat()}.json"
