"""
Domain models и value objects.

Содержит единицы, конфигурацию, состояние запуска и события.
"""

from taxtoken.core.domain.clock import SYSTEM_CLOCK, BlockClock, pinned
from taxtoken.core.domain.config import ADDRESS_PATTERN, FeeShareConfig, TokenConfig
from taxtoken.core.domain.events import (
    Approval,
    ExemptionUpdated,
    NativeReceived,
    SwapAndLiquify,
    TradingOpened,
    Transfer,
    TransferReceipt,
)
from taxtoken.core.domain.state import (
    ConversionState,
    ExemptionKind,
    ExemptionRegistry,
    TradingWindow,
)
from taxtoken.core.domain.units import (
    BPS_DENOMINATOR,
    DEFAULT_DECIMALS,
    ONE_DAY_SEC,
    ONE_HOUR_SEC,
    ONE_MINUTE_SEC,
    PERCENT_DENOMINATOR,
    bps_of,
    percent_of,
    to_base_units,
    validate_amount,
)

__all__ = [
    # Units module
    "ONE_MINUTE_SEC",
    "ONE_HOUR_SEC",
    "ONE_DAY_SEC",
    "BPS_DENOMINATOR",
    "PERCENT_DENOMINATOR",
    "DEFAULT_DECIMALS",
    "to_base_units",
    "bps_of",
    "percent_of",
    "validate_amount",
    # Clock
    "BlockClock",
    "SYSTEM_CLOCK",
    "pinned",
    # Config
    "ADDRESS_PATTERN",
    "FeeShareConfig",
    "TokenConfig",
    # State
    "TradingWindow",
    "ConversionState",
    "ExemptionKind",
    "ExemptionRegistry",
    # Events
    "TransferReceipt",
    "Transfer",
    "Approval",
    "TradingOpened",
    "ExemptionUpdated",
    "SwapAndLiquify",
    "NativeReceived",
]
