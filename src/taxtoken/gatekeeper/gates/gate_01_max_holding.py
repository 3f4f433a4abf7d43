"""GATE 1: Max Holding (anti-sniper)

- Применяется только при покупке: отправитель — liquidity pool
- Только пока elapsed < 24h с момента открытия торговли
- Только для получателей без holding-cap exemption
- Проверка: balance(to) + amount <= max_holding(elapsed, total_supply)

Peer-трансферы и продажи не ограничиваются.
"""

from dataclasses import dataclass
from typing import Optional

from taxtoken.core.math.schedule import max_holding


@dataclass(frozen=True)
class Gate01Result:
    """Результат GATE 1."""

    transfer_allowed: bool
    block_reason: str

    guard_applied: bool
    max_holding: Optional[int]  # None если guard не применялся
    resulting_balance: int

    details: str


class Gate01MaxHolding:
    """GATE 1: Max holding.

    Порядок проверок:
    1. Торговля закрыта / не покупка / получатель exempt → пропуск без guard
    2. elapsed >= 24h → пропуск без guard
    3. balance + amount > cap → блокировка
    """

    def evaluate(
        self,
        trading_open: bool,
        elapsed_sec: Optional[float],
        is_buy: bool,
        recipient_cap_exempt: bool,
        recipient_balance: int,
        amount: int,
        total_supply: int,
    ) -> Gate01Result:
        """Оценка GATE 1.

        Args:
            trading_open: открыто ли окно торговли
            elapsed_sec: время с открытия (None если закрыто)
            is_buy: отправитель — liquidity pool
            recipient_cap_exempt: holding-cap exemption получателя
            recipient_balance: текущий баланс получателя
            amount: сумма трансфера (gross)
            total_supply: total supply

        Returns:
            Gate01Result с решением о допуске
        """
        resulting_balance = recipient_balance + amount

        if not trading_open or elapsed_sec is None or not is_buy or recipient_cap_exempt:
            return Gate01Result(
                transfer_allowed=True,
                block_reason="",
                guard_applied=False,
                max_holding=None,
                resulting_balance=resulting_balance,
                details="PASS: holding guard not applicable",
            )

        cap = max_holding(elapsed_sec, total_supply)
        if cap is None:
            return Gate01Result(
                transfer_allowed=True,
                block_reason="",
                guard_applied=False,
                max_holding=None,
                resulting_balance=resulting_balance,
                details=f"PASS: holding guard window elapsed ({elapsed_sec:.0f}s)",
            )

        if resulting_balance > cap:
            return Gate01Result(
                transfer_allowed=False,
                block_reason="max_holding_exceeded",
                guard_applied=True,
                max_holding=cap,
                resulting_balance=resulting_balance,
                details=f"Resulting balance {resulting_balance} exceeds cap {cap}",
            )

        return Gate01Result(
            transfer_allowed=True,
            block_reason="",
            guard_applied=True,
            max_holding=cap,
            resulting_balance=resulting_balance,
            details=f"PASS: resulting balance {resulting_balance} <= cap {cap}",
        )
