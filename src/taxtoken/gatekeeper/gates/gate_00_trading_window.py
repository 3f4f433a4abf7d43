"""GATE 0: Trading Window

- Первый gate в цепочке трансфера
- Пока торговля закрыта, пропускаются только трансферы, где отправитель или
  получатель fee-exempt (администратор добавляет ликвидность, раздаёт аллокации)
- После открытия пропускает всё
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Gate00Result:
    """Результат GATE 0."""

    transfer_allowed: bool
    block_reason: str

    trading_open: bool
    exempt_party: bool

    details: str


class Gate00TradingWindow:
    """GATE 0: Trading window.

    Stateless: состояние окна передаётся в evaluate.
    """

    def evaluate(
        self,
        trading_open: bool,
        sender_fee_exempt: bool,
        recipient_fee_exempt: bool,
    ) -> Gate00Result:
        """Оценка GATE 0.

        Args:
            trading_open: открыто ли окно торговли
            sender_fee_exempt: fee-exempt ли отправитель
            recipient_fee_exempt: fee-exempt ли получатель

        Returns:
            Gate00Result с решением о допуске
        """
        exempt_party = sender_fee_exempt or recipient_fee_exempt

        if trading_open:
            return Gate00Result(
                transfer_allowed=True,
                block_reason="",
                trading_open=True,
                exempt_party=exempt_party,
                details="PASS: trading open",
            )

        if exempt_party:
            return Gate00Result(
                transfer_allowed=True,
                block_reason="",
                trading_open=False,
                exempt_party=True,
                details="PASS: trading closed, exempt party involved",
            )

        return Gate00Result(
            transfer_allowed=False,
            block_reason="trading_closed",
            trading_open=False,
            exempt_party=False,
            details="Trading is not open and neither party is fee-exempt",
        )
