"""
System failure error classifications.

These exceptions represent failures outside the simulation arithmetic:
snapshot persistence and configuration problems.
"""

from typing import Any, Dict, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class PersistenceError(SystemFailureError):
    """File system persistence failures."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target


class SnapshotError(PersistenceError):
    """Snapshot data is malformed or has an unsupported version."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        kwargs.setdefault("operation", "restore")
        super().__init__(message, **kwargs)
        self.field = field


class ConfigurationError(SystemFailureError):
    """Configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
