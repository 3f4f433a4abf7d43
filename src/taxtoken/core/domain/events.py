"""Events и receipts — неизменяемые записи о выполненных операциях."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TransferReceipt:
    """Результат трансфера через interceptor."""

    sender: str
    recipient: str
    amount: int
    fee: int
    net_amount: int
    tax_percent: int
    conversion_triggered: bool


# =============================================================================
# EVENT LOG
# =============================================================================


@dataclass(frozen=True)
class Transfer:
    sender: str
    recipient: str
    amount: int


@dataclass(frozen=True)
class Approval:
    owner: str
    spender: str
    amount: int


@dataclass(frozen=True)
class TradingOpened:
    opened_at: float


@dataclass(frozen=True)
class ExemptionUpdated:
    kind: str
    account: str
    exempt: bool


@dataclass(frozen=True)
class SwapAndLiquify:
    tokens_swapped: int
    settlement_received: int
    tokens_into_liquidity: int
    lp_tokens: int
    lp_recipient: Optional[str]


@dataclass(frozen=True)
class NativeReceived:
    sender: str
    amount: int
