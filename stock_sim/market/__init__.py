"""
Market module.

Stock registry, paginated views over it, the simulation clock and synthetic
stock generation.
"""

from .clock import SimulationClock, TimeChangedArgs
from .generator import StockGenerator
from .pagination import StockPagination
from .registry import StockRegistry

__all__ = [
    "SimulationClock",
    "TimeChangedArgs",
    "StockGenerator",
    "StockPagination",
    "StockRegistry",
]
