"""
Custom exceptions for Shunt Range Designer.

The range computation itself never raises: invalid designs are reported
through the overlap flags. These exceptions cover the input boundary only
(manual edits, config files, exported designs).
"""


class ShuntDesignerError(Exception):
    """Base exception for all shunt range designer errors."""
    pass


class ConfigurationError(ShuntDesignerError):
    """Raised when a manual edit or configuration value is invalid."""
    pass


class ExportError(ShuntDesignerError):
    """Raised when a design cannot be written."""
    pass


class ImportValidationError(ShuntDesignerError):
    """Raised when an exported design cannot be read back."""
    pass
