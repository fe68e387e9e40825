"""
Client Ledger

An in-process client ledger that applies credit/debit transactions under a
single lock and flushes balances to dated, sequentially numbered snapshot
files. All monetary values use Decimal.
"""

__version__ = "1.0.0"
