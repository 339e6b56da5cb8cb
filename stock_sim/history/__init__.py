"""
Historical data module.

Per-stock, date-ordered ledger of daily opening prices answering
"most recent record at least N days old" queries.
"""

from .ledger import HistoricalLedger
from .records import HistoricalRecord

__all__ = ["HistoricalLedger", "HistoricalRecord"]
