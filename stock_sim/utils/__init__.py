"""
Utility functions module.

Time Semantics:
- Simulated timestamps from the external clock are ALWAYS authoritative
- Historical records carry day granularity (datetime.date)
- Record ages are whole days between calendar dates
"""
