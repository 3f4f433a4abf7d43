"""
ConversionPipeline — swap-and-liquify накопленного налога

1. Split: liquidity часть (liquidity_share / total_shares) и payout часть
2. Половина liquidity части продаётся за settlement актив
3. Вторая половина + полученный settlement → ликвидность, LP → liquidity кошелёк
4. Payout часть → team / marketing по team_share : marketing_share

Reentrancy latch (ConversionState.in_progress) удерживается на всё время
выполнения и снимается на любом пути выхода. Slippage floor на swap'е не
применяется (min_amount_out = 0), deadline = текущее время.

Ошибка swap'а или add_liquidity поднимается как ExternalConversionError;
откат состояния выполняет журнал вызывающей операции.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Tuple

from taxtoken.core.domain.clock import SYSTEM_CLOCK
from taxtoken.core.domain.config import FeeShareConfig
from taxtoken.core.domain.events import SwapAndLiquify
from taxtoken.core.domain.state import ConversionState
from taxtoken.core.domain.units import validate_amount
from taxtoken.core.math.shares import ConversionSplit, split_conversion
from taxtoken.errors import (
    ConversionInProgressError,
    ExternalConversionError,
    InsufficientBalanceError,
)
from taxtoken.exchange.router import Router
from taxtoken.ledger.ledger import Ledger

logger = logging.getLogger(__name__)


# =============================================================================
# MODELS
# =============================================================================


@dataclass(frozen=True)
class StakeholderWallets:
    """Кошельки-получатели конверсии. Задаются при конструировании, setter'ов нет."""

    team: str
    marketing: str
    liquidity: str  # Получатель LP токенов
    pool: str  # Liquidity pool пары token / settlement


@dataclass(frozen=True)
class ConversionReport:
    """Результат одного выполнения конверсии."""

    split: ConversionSplit
    settlement_received: int
    liquidity_token_used: int
    liquidity_settlement_used: int
    lp_tokens: int


# =============================================================================
# PIPELINE
# =============================================================================


class ConversionPipeline:
    """Swap-and-liquify с reentrancy guard."""

    def __init__(
        self,
        ledger: Ledger,
        router: Router,
        state: ConversionState,
        contract_address: str,
        settlement_asset: str,
        wallets: StakeholderWallets,
        shares: FeeShareConfig,
        clock: Callable[[], float] = SYSTEM_CLOCK,
    ):
        self._ledger = ledger
        self._router = router
        self.state = state
        self._contract = contract_address
        self._settlement_asset = settlement_asset
        self.wallets = wallets
        self.shares = shares
        self._clock = clock

    @contextmanager
    def _locked(self) -> Iterator[None]:
        """Scoped reentrancy latch: acquire на входе, release на любом выходе."""
        if self.state.in_progress:
            raise ConversionInProgressError("Conversion is already in progress")
        self.state.in_progress = True
        try:
            yield
        finally:
            self.state.in_progress = False

    def convert(self, token_amount: int) -> ConversionReport:
        """
        Конверсия token_amount из собственного баланса контракта.

        Args:
            token_amount: Сумма для конверсии (base units)

        Returns:
            ConversionReport

        Raises:
            ConversionInProgressError: повторный вход во время конверсии
            InsufficientBalanceError: у контракта меньше token_amount
            ExternalConversionError: swap или add_liquidity завершились ошибкой
        """
        validate_amount(token_amount)

        with self._locked():
            holding = self._ledger.balance_of(self._contract)
            if token_amount > holding:
                raise InsufficientBalanceError(
                    f"Contract holds {holding}, conversion requires {token_amount}"
                )

            split = split_conversion(token_amount, self.shares)

            try:
                settlement_received = self._swap_for_settlement(split.tokens_to_swap)
                token_used, settlement_used, lp_tokens = 0, 0, 0
                if settlement_received > 0 and split.tokens_for_liquidity > 0:
                    token_used, settlement_used, lp_tokens = self._add_liquidity(
                        split.tokens_for_liquidity, settlement_received
                    )
            except Exception as e:
                logger.warning("Conversion of %s tokens failed: %s", token_amount, e)
                raise ExternalConversionError(
                    f"External conversion of {token_amount} tokens failed: {e}"
                ) from e

            if split.team_amount > 0:
                self._ledger.raw_transfer(self._contract, self.wallets.team, split.team_amount)
            if split.marketing_amount > 0:
                self._ledger.raw_transfer(
                    self._contract, self.wallets.marketing, split.marketing_amount
                )

            self._ledger.emit(
                SwapAndLiquify(
                    tokens_swapped=split.tokens_to_swap,
                    settlement_received=settlement_received,
                    tokens_into_liquidity=token_used,
                    lp_tokens=lp_tokens,
                    lp_recipient=self.wallets.liquidity if lp_tokens else None,
                )
            )

        logger.info(
            "Converted %s tokens: swapped %s for %s settlement, liquidity %s/%s, "
            "team %s, marketing %s",
            token_amount,
            split.tokens_to_swap,
            settlement_received,
            token_used,
            settlement_used,
            split.team_amount,
            split.marketing_amount,
        )
        return ConversionReport(
            split=split,
            settlement_received=settlement_received,
            liquidity_token_used=token_used,
            liquidity_settlement_used=settlement_used,
            lp_tokens=lp_tokens,
        )

    def _swap_for_settlement(self, tokens_to_swap: int) -> int:
        if tokens_to_swap == 0:
            return 0
        self._ledger.approve(self._contract, self._router.address, tokens_to_swap)
        amounts = self._router.swap_exact_in_for_out(
            sender=self._contract,
            amount_in=tokens_to_swap,
            min_amount_out=0,
            path=[self._contract, self._settlement_asset],
            recipient=self._contract,
            deadline=self._clock(),
        )
        return amounts[-1]

    def _add_liquidity(self, token_amount: int, settlement_amount: int) -> Tuple[int, int, int]:
        self._ledger.approve(self._contract, self._router.address, token_amount)
        return self._router.add_liquidity(
            sender=self._contract,
            asset_a=self._contract,
            asset_b=self._settlement_asset,
            amount_a_desired=token_amount,
            amount_b_desired=settlement_amount,
            amount_a_min=0,
            amount_b_min=0,
            lp_recipient=self.wallets.liquidity,
            deadline=self._clock(),
        )
