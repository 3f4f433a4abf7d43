"""Exchange — интерфейс router'а и офлайн симулятор constant-product пула."""

from .router import Router, TokenHandle
from .simulator import (
    MINIMUM_LIQUIDITY,
    ConstantProductRouter,
    PairState,
    derive_address,
    get_amount_out,
    quote,
)

__all__ = [
    "Router",
    "TokenHandle",
    "ConstantProductRouter",
    "PairState",
    "MINIMUM_LIQUIDITY",
    "derive_address",
    "get_amount_out",
    "quote",
]
