"""GATE 2: Conversion Trigger

Решает, запускать ли ConversionPipeline перед выполнением трансфера:
- конверсия сейчас не выполняется (reentrancy latch снят)
- получатель — liquidity pool (продажа)
- собственный баланс контракта >= порога (и не нулевой)

Конвертируется весь собственный баланс контракта.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Gate02Result:
    """Результат GATE 2."""

    convert: bool
    conversion_amount: int  # 0 если конверсия не запускается
    reason: str
    details: str


class Gate02ConversionTrigger:
    """GATE 2: Conversion trigger. Никогда не блокирует трансфер."""

    def evaluate(
        self,
        conversion_in_progress: bool,
        recipient_is_pool: bool,
        contract_holding: int,
        threshold: int,
    ) -> Gate02Result:
        """Оценка GATE 2.

        Args:
            conversion_in_progress: состояние reentrancy latch
            recipient_is_pool: получатель — liquidity pool
            contract_holding: собственный баланс контракта
            threshold: порог конверсии

        Returns:
            Gate02Result
        """
        if conversion_in_progress:
            return Gate02Result(
                convert=False,
                conversion_amount=0,
                reason="in_progress",
                details="Conversion already in progress, trigger skipped",
            )

        if not recipient_is_pool:
            return Gate02Result(
                convert=False,
                conversion_amount=0,
                reason="not_a_sell",
                details="Recipient is not the liquidity pool",
            )

        if contract_holding == 0 or contract_holding < threshold:
            return Gate02Result(
                convert=False,
                conversion_amount=0,
                reason="below_threshold",
                details=f"Contract holding {contract_holding} < threshold {threshold}",
            )

        return Gate02Result(
            convert=True,
            conversion_amount=contract_holding,
            reason="threshold_reached",
            details=f"Contract holding {contract_holding} >= threshold {threshold}",
        )
