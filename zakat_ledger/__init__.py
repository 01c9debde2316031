"""Zakat Ledger — donation intake and distribution tracking backend.

Invariants:
    - Package root holds metadata only (import side-effects prohibited)
"""

__version__ = "1.0.0"
