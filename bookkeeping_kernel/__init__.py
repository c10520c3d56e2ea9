"""
Bookkeeping Kernel

An in-memory, pure-functional double-entry bookkeeping engine with:
- Immutable operations, accounts, journal entries and ledgers
- Natural-balance driven sign arithmetic
- Deterministic merge, prune and reversal of entries
- All-or-nothing posting across multiple ledgers
"""

__version__ = "0.1.0"
