"""
Unified Payments

Domestic and international transfer initiation with shared field validation,
deterministic fee computation and an in-memory transfer ledger.
"""

__version__ = "1.0.0"
