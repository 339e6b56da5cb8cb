"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_STRATEGIES = {"random_walk", "trend"}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    section: str
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_market_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate market parameters."""
        errors = []

        if "stock_count" in params:
            value = params["stock_count"]
            if not _is_int(value) or value < 0:
                errors.append(ValidationError(
                    section="market",
                    field="stock_count",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "page_size" in params:
            value = params["page_size"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    section="market",
                    field="page_size",
                    message="Must be a positive integer",
                    value=value
                ))

        if "seed" in params:
            value = params["seed"]
            if value is not None and not _is_int(value):
                errors.append(ValidationError(
                    section="market",
                    field="seed",
                    message="Must be an integer or null",
                    value=value
                ))

        low = params.get("min_initial_price")
        high = params.get("max_initial_price")
        for field_name, value in (("min_initial_price", low), ("max_initial_price", high)):
            if field_name in params and (not _is_number(value) or value <= 0):
                errors.append(ValidationError(
                    section="market",
                    field=field_name,
                    message="Must be a positive number",
                    value=value
                ))
        if _is_number(low) and _is_number(high) and low > high:
            errors.append(ValidationError(
                section="market",
                field="min_initial_price",
                message="Must not exceed max_initial_price",
                value=low
            ))

        low = params.get("min_volatility")
        high = params.get("max_volatility")
        for field_name, value in (("min_volatility", low), ("max_volatility", high)):
            if field_name in params and (not _is_number(value) or value < 0):
                errors.append(ValidationError(
                    section="market",
                    field=field_name,
                    message="Must be a non-negative number",
                    value=value
                ))
        if _is_number(low) and _is_number(high) and low > high:
            errors.append(ValidationError(
                section="market",
                field="min_volatility",
                message="Must not exceed max_volatility",
                value=low
            ))

        return errors

    @staticmethod
    def validate_pricing_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate pricing parameters."""
        errors = []

        if "strategy" in params:
            value = params["strategy"]
            if value not in _STRATEGIES:
                errors.append(ValidationError(
                    section="pricing",
                    field="strategy",
                    message=f"Must be one of {sorted(_STRATEGIES)}",
                    value=value
                ))

        if "default_volatility" in params:
            value = params["default_volatility"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    section="pricing",
                    field="default_volatility",
                    message="Must be a non-negative number",
                    value=value
                ))

        if "trend_chance" in params:
            value = params["trend_chance"]
            if not _is_number(value) or value < 0 or value > 1:
                errors.append(ValidationError(
                    section="pricing",
                    field="trend_chance",
                    message="Must be a number between 0 and 1",
                    value=value
                ))

        for field_name in ("trend_min_steps", "trend_max_steps"):
            if field_name in params:
                value = params[field_name]
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        section="pricing",
                        field=field_name,
                        message="Must be a positive integer",
                        value=value
                    ))

        low = params.get("trend_min_steps")
        high = params.get("trend_max_steps")
        if _is_int(low) and _is_int(high) and low > high:
            errors.append(ValidationError(
                section="pricing",
                field="trend_min_steps",
                message="Must not exceed trend_max_steps",
                value=low
            ))

        if "trend_max_pct" in params:
            value = params["trend_max_pct"]
            if not _is_number(value) or value <= 0 or value >= 1:
                errors.append(ValidationError(
                    section="pricing",
                    field="trend_max_pct",
                    message="Must be a number between 0 and 1 (exclusive)",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_history_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate history parameters."""
        errors = []

        for field_name in ("weekly_window", "monthly_window"):
            if field_name in params:
                value = params[field_name]
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        section="history",
                        field=field_name,
                        message="Must be a positive integer",
                        value=value
                    ))

        if "retention_days" in params:
            value = params["retention_days"]
            monthly = params.get("monthly_window", 30)
            if value is not None:
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        section="history",
                        field="retention_days",
                        message="Must be a positive integer or null",
                        value=value
                    ))
                elif _is_int(monthly) and value < monthly:
                    # Retention shorter than the longest window loses anchors
                    errors.append(ValidationError(
                        section="history",
                        field="retention_days",
                        message="Must be at least monthly_window",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in _LOG_LEVELS:
                errors.append(ValidationError(
                    section="logging",
                    field="level",
                    message=f"Must be one of {sorted(_LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    section="logging",
                    field="format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "market" in config:
            errors.extend(ConfigValidator.validate_market_params(config["market"]))

        if "pricing" in config:
            errors.extend(ConfigValidator.validate_pricing_params(config["pricing"]))

        if "history" in config:
            errors.extend(ConfigValidator.validate_history_params(config["history"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
