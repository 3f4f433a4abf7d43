"""
Математические примитивы: tier schedules и share split.

Все функции чистые и детерминированные.
"""

from .schedule import (
    FEE_TIERS,
    HOLDING_CAP_TIERS,
    HOLDING_GUARD_WINDOW_SEC,
    current_tax_percent,
    is_holding_guard_active,
    max_holding,
)
from .shares import ConversionSplit, split_conversion

__all__ = [
    # Schedules
    "FEE_TIERS",
    "HOLDING_CAP_TIERS",
    "HOLDING_GUARD_WINDOW_SEC",
    "current_tax_percent",
    "is_holding_guard_active",
    "max_holding",
    # Shares
    "ConversionSplit",
    "split_conversion",
]
