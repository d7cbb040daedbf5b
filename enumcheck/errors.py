from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when an enum specification is structurally invalid."""
