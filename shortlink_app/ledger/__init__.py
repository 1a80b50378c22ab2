"""
Click ledger module.

Append-only log of click events per shortcode. The registry establishes that
a shortcode exists before it touches the ledger.
"""

from .strategies import ClickLedgerStrategy, InMemoryClickLedger

__all__ = [
    "ClickLedgerStrategy",
    "InMemoryClickLedger",
]
