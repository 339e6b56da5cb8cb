"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..errors import ConfigurationError
from .defaults import (
    HistoryParams,
    LoggingParams,
    MarketParams,
    PricingParams,
    SimulationConfig,
    get_default_config,
)
from .validation import ConfigValidator

CONFIG_FILENAME = "market.yaml"

_SECTIONS = {
    "market": MarketParams,
    "pricing": PricingParams,
    "history": HistoryParams,
    "logging": LoggingParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: SimulationConfig

    @classmethod
    def create(cls, config_dir: Optional[Union[str, Path]] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from market.yaml in the config directory."""
        config_file = self.config_dir / CONFIG_FILENAME

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            file_config = yaml.safe_load(f)

        if file_config is None:
            return {}
        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"{config_file} must contain a mapping",
                context={"path": str(config_file)}
            )
        return file_config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. market.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> SimulationConfig:
        """Merge, validate and build the typed configuration."""
        merged = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            error_msgs = [f"{err.section}.{err.field}: {err.message} (got: {err.value!r})"
                          for err in errors]
            raise ConfigurationError(
                "Invalid simulation configuration: " + "; ".join(error_msgs),
                errors=errors
            )

        return build_config(merged)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def build_config(config: dict[str, Any]) -> SimulationConfig:
    """Build a SimulationConfig from a merged dictionary, ignoring unknown keys."""
    sections = {}
    for name, params_cls in _SECTIONS.items():
        known = {f.name for f in fields(params_cls)}
        values = {k: v for k, v in config.get(name, {}).items() if k in known}
        sections[name] = params_cls(**values)
    return SimulationConfig(**sections)


def load_config(
    config_dir: Optional[Union[str, Path]] = None,
    overrides: Optional[dict[str, Any]] = None
) -> SimulationConfig:
    """Load the simulation configuration from defaults, file and overrides."""
    return ConfigLoader.create(config_dir).load(overrides)
