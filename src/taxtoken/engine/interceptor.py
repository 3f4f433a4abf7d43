"""
TransferInterceptor — оркестратор, вызываемый на каждый трансфер

Порядок:
1. GATE 0 trading window → TradingClosedError
2. GATE 1 max holding (только покупки, < 24h) → MaxHoldingExceededError
3. Баланс отправителя → InsufficientBalanceError
4. GATE 2 conversion trigger → ConversionPipeline ДО доставки текущего трансфера
5. GATE 3 fee
6. raw transfer fee → контракт (если fee > 0), затем amount − fee → получатель

Interceptor не откатывает состояние сам: atomic обеспечивает вызывающий
(TaxToken) через журнал.
"""

import logging
from typing import Callable, Optional

from taxtoken.core.domain.events import TransferReceipt
from taxtoken.core.domain.state import ConversionState, ExemptionRegistry, TradingWindow
from taxtoken.errors import (
    InsufficientBalanceError,
    InvalidTransferError,
    MaxHoldingExceededError,
    TradingClosedError,
)
from taxtoken.gatekeeper.gates import (
    Gate00TradingWindow,
    Gate01MaxHolding,
    Gate02ConversionTrigger,
    Gate03Fee,
)
from taxtoken.ledger.ledger import Ledger

from .conversion import ConversionPipeline

logger = logging.getLogger(__name__)


class TransferInterceptor:
    """Применяет gates, налог и конверсию к каждому трансферу."""

    def __init__(
        self,
        ledger: Ledger,
        window: TradingWindow,
        exemptions: ExemptionRegistry,
        conversion_state: ConversionState,
        pipeline: ConversionPipeline,
        contract_address: str,
        pool_address: str,
        clock: Callable[[], float],
    ):
        self._ledger = ledger
        self._window = window
        self._exemptions = exemptions
        self._conversion_state = conversion_state
        self._pipeline = pipeline
        self._contract = contract_address
        self._pool = pool_address
        self._clock = clock

        self.gate00 = Gate00TradingWindow()
        self.gate01 = Gate01MaxHolding()
        self.gate02 = Gate02ConversionTrigger()
        self.gate03 = Gate03Fee()

    def intercept(self, sender: str, recipient: str, amount: int) -> TransferReceipt:
        """Трансфер amount от sender к recipient с налогом и guard'ами.

        Args:
            sender: отправитель
            recipient: получатель
            amount: gross сумма (base units, > 0)

        Returns:
            TransferReceipt

        Raises:
            InvalidTransferError: пустой адрес или amount <= 0
            InsufficientBalanceError: баланса отправителя недостаточно
            TradingClosedError: GATE 0
            MaxHoldingExceededError: GATE 1
            ExternalConversionError: сбой конверсии на GATE 2
        """
        self._validate(sender, recipient, amount)

        trading_open = self._window.is_open()
        elapsed_sec: Optional[float] = None
        if trading_open:
            elapsed_sec = self._window.elapsed_since_open(self._clock())

        sender_fee_exempt = self._exemptions.is_fee_exempt(sender)
        recipient_fee_exempt = self._exemptions.is_fee_exempt(recipient)

        # 1. Trading window
        gate00 = self.gate00.evaluate(
            trading_open=trading_open,
            sender_fee_exempt=sender_fee_exempt,
            recipient_fee_exempt=recipient_fee_exempt,
        )
        if not gate00.transfer_allowed:
            logger.warning("Transfer %s → %s blocked: %s", sender, recipient, gate00.details)
            raise TradingClosedError(gate00.details)

        # 2. Max holding
        gate01 = self.gate01.evaluate(
            trading_open=trading_open,
            elapsed_sec=elapsed_sec,
            is_buy=sender == self._pool,
            recipient_cap_exempt=self._exemptions.is_holding_cap_exempt(recipient),
            recipient_balance=self._ledger.balance_of(recipient),
            amount=amount,
            total_supply=self._ledger.total_supply(),
        )
        if not gate01.transfer_allowed:
            logger.warning("Transfer %s → %s blocked: %s", sender, recipient, gate01.details)
            raise MaxHoldingExceededError(gate01.details)

        # Баланс отправителя, до конверсии
        balance = self._ledger.balance_of(sender)
        if balance < amount:
            raise InsufficientBalanceError(
                f"Balance of {sender} is {balance}, transfer requires {amount}"
            )

        # 3. Conversion до доставки текущего трансфера
        gate02 = self.gate02.evaluate(
            conversion_in_progress=self._conversion_state.in_progress,
            recipient_is_pool=recipient == self._pool,
            contract_holding=self._ledger.balance_of(self._contract),
            threshold=self._conversion_state.threshold_balance,
        )
        if gate02.convert:
            self._pipeline.convert(gate02.conversion_amount)

        # 4. Fee
        gate03 = self.gate03.evaluate(
            elapsed_sec=elapsed_sec,
            sender_fee_exempt=sender_fee_exempt,
            recipient_fee_exempt=recipient_fee_exempt,
            involves_pool=self._pool in (sender, recipient),
            amount=amount,
        )
        logger.debug("Transfer %s → %s amount=%s: %s", sender, recipient, amount, gate03.details)

        # 5. Исполнение
        if gate03.fee > 0:
            self._ledger.raw_transfer(sender, self._contract, gate03.fee)
        self._ledger.raw_transfer(sender, recipient, gate03.net_amount)

        return TransferReceipt(
            sender=sender,
            recipient=recipient,
            amount=amount,
            fee=gate03.fee,
            net_amount=gate03.net_amount,
            tax_percent=gate03.tax_percent,
            conversion_triggered=gate02.convert,
        )

    @staticmethod
    def _validate(sender: str, recipient: str, amount: int) -> None:
        if not sender or not recipient:
            raise InvalidTransferError("Transfer requires non-empty sender and recipient")
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidTransferError(f"Transfer amount must be a positive integer: {amount!r}")
