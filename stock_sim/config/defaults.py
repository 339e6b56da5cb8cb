"""Default configuration parameters for the market simulation."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MarketParams:
    """Registry and display parameters."""
    stock_count: int = 20                            # Generated stocks at startup
    page_size: int = 5                               # Display slots per page
    seed: Optional[int] = None                       # Seed for generation and pricing
    min_initial_price: float = 5.0
    max_initial_price: float = 500.0
    min_volatility: float = 0.005                   # Per-stock volatility drawn from this range
    max_volatility: float = 0.04


@dataclass(frozen=True)
class PricingParams:
    """Price movement model parameters."""
    strategy: str = "trend"                          # "random_walk" or "trend"
    default_volatility: float = 0.02                 # Std dev of relative move per tick
    trend_chance: float = 0.01                       # Chance per tick to start a trend
    trend_min_steps: int = 60                        # Shortest trend duration in ticks
    trend_max_steps: int = 1440                      # Longest trend duration in ticks
    trend_max_pct: float = 0.25                      # Largest target move of a trend


@dataclass(frozen=True)
class HistoryParams:
    """Historical ledger parameters."""
    weekly_window: int = 7                           # Days back for weekly change
    monthly_window: int = 30                         # Days back for monthly change
    retention_days: Optional[int] = 60               # None keeps the full history


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class SimulationConfig:
    """Complete simulation configuration."""
    market: MarketParams
    pricing: PricingParams
    history: HistoryParams
    logging: LoggingParams


def get_default_config() -> SimulationConfig:
    """Get the default configuration instance."""
    return SimulationConfig(
        market=MarketParams(),
        pricing=PricingParams(),
        history=HistoryParams(),
        logging=LoggingParams(),
    )
