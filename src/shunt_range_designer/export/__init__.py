"""
Export modules.

JSON-only export of a design (version, timestamp, global config, ranges).
"""

from shunt_range_designer.export.json_export import (
    DesignExport,
    export_design,
    design_to_json,
    save_design,
    parse_export,
    parse_design,
    load_design,
    revalidate,
    generate_export_filename,
)

__all__ = [
    "DesignExport",
    "export_design",
    "design_to_json",
    "save_design",
    "parse_export",
    "parse_design",
    "load_design",
    "revalidate",
    "generate_export_filename",
]
