"""
Logging configuration and utilities for the simulation engine.
"""
from .config import configure_logging, get_logger, get_tick_logger

__all__ = ["configure_logging", "get_logger", "get_tick_logger"]
