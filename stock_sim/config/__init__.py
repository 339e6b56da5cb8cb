"""Configuration defaults, loading and validation."""

from .defaults import SimulationConfig, get_default_config
from .loader import ConfigLoader, load_config
from .validation import ConfigValidator, ValidationError

__all__ = [
    "SimulationConfig",
    "get_default_config",
    "ConfigLoader",
    "load_config",
    "ConfigValidator",
    "ValidationError",
]
