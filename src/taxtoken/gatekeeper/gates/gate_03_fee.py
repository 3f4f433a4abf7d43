"""GATE 3: Fee

Налог взимается только если:
- ни отправитель, ни получатель не fee-exempt
- одна из сторон — liquidity pool (покупка или продажа)

fee = amount * current_tax_percent(elapsed) // 100. Peer-трансферы без налога.
"""

from dataclasses import dataclass
from typing import Optional

from taxtoken.core.domain.units import percent_of
from taxtoken.core.math.schedule import current_tax_percent
from taxtoken.errors import TradingNotOpenError


@dataclass(frozen=True)
class Gate03Result:
    """Результат GATE 3."""

    fee_charged: bool
    tax_percent: int  # 0 если налог не взимается
    fee: int
    net_amount: int
    details: str


class Gate03Fee:
    """GATE 3: Fee computation."""

    def evaluate(
        self,
        elapsed_sec: Optional[float],
        sender_fee_exempt: bool,
        recipient_fee_exempt: bool,
        involves_pool: bool,
        amount: int,
    ) -> Gate03Result:
        """Оценка GATE 3.

        Args:
            elapsed_sec: время с открытия торговли (None если закрыта)
            sender_fee_exempt: fee-exempt ли отправитель
            recipient_fee_exempt: fee-exempt ли получатель
            involves_pool: одна из сторон — liquidity pool
            amount: сумма трансфера

        Returns:
            Gate03Result

        Raises:
            TradingNotOpenError: налог применим, но торговля закрыта
                (недостижимо после GATE 0)
        """
        if sender_fee_exempt or recipient_fee_exempt:
            return Gate03Result(
                fee_charged=False,
                tax_percent=0,
                fee=0,
                net_amount=amount,
                details="No fee: exempt party",
            )

        if not involves_pool:
            return Gate03Result(
                fee_charged=False,
                tax_percent=0,
                fee=0,
                net_amount=amount,
                details="No fee: peer-to-peer transfer",
            )

        if elapsed_sec is None:
            raise TradingNotOpenError("Fee requested while trading window is closed")

        tax_percent = current_tax_percent(elapsed_sec)
        fee = percent_of(amount, tax_percent)
        return Gate03Result(
            fee_charged=fee > 0,
            tax_percent=tax_percent,
            fee=fee,
            net_amount=amount - fee,
            details=f"Fee {fee} ({tax_percent}%) at elapsed {elapsed_sec:.0f}s",
        )
