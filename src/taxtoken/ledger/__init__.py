"""Ledger — балансы, supply, allowances, gating администратора и журнал."""

from .journal import Journaled, atomic
from .ledger import ZERO_ADDRESS, Ledger, LedgerSnapshot

__all__ = [
    "Ledger",
    "LedgerSnapshot",
    "ZERO_ADDRESS",
    "Journaled",
    "atomic",
]
