"""
Price movement module.

Pluggable, seedable pricing strategies and the engine that applies them to
stocks once per tick, committing historical records on day boundaries.
"""

from .engine import AdvanceOutcome, PriceEngine
from .strategies import (
    BasePricingStrategy,
    FixedStrategy,
    RandomWalkStrategy,
    TrendStrategy,
    build_strategy,
)

__all__ = [
    "AdvanceOutcome",
    "PriceEngine",
    "BasePricingStrategy",
    "FixedStrategy",
    "RandomWalkStrategy",
    "TrendStrategy",
    "build_strategy",
]
