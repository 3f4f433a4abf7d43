"""
taxtoken — протокольный слой fungible актива с налогом на трансфер

- Time-tiered налог на покупки и продажи через liquidity pool
- Anti-sniper holding cap в первые 24 часа торговли
- Swap-and-liquify накопленного налога в ликвидность и выплаты stakeholder'ам
"""

from taxtoken.core.domain.config import FeeShareConfig, TokenConfig
from taxtoken.engine import ConversionReport, TaxToken
from taxtoken.errors import (
    AlreadyOpenError,
    ExternalConversionError,
    MaxHoldingExceededError,
    TaxTokenError,
    TradingClosedError,
)

__all__ = [
    "TaxToken",
    "TokenConfig",
    "FeeShareConfig",
    "ConversionReport",
    "TaxTokenError",
    "TradingClosedError",
    "MaxHoldingExceededError",
    "AlreadyOpenError",
    "ExternalConversionError",
]
