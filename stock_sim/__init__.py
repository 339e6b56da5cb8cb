"""
Stock Sim - Synthetic Stock Market Simulation Engine

Advances a registry of synthetic securities tick by tick from an external
clock, keeps a bounded daily history per security and exposes derived
statistics and paged views for display consumers.
"""

__version__ = "0.1.0"
__author__ = "Stock Sim Team"
