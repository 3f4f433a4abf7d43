"""
TaxToken — fungible актив с налогом на трансфер, anti-sniper guard'ом и
swap-and-liquify

Фасад над ledger, TradingWindow, ExemptionRegistry, TransferInterceptor и
ConversionPipeline. Все изменяющие операции atomic: ledger и (если
поддерживает журнал) router откатываются при любой ошибке.

Интерфейс администратора:
- open_trading (однократно)
- set_fee_exempt / set_holding_cap_exempt (идемпотентно)
- manual_convert
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional

from taxtoken.core.domain.clock import SYSTEM_CLOCK, pinned
from taxtoken.core.domain.config import ADDRESS_PATTERN, TokenConfig
from taxtoken.core.domain.events import (
    ExemptionUpdated,
    NativeReceived,
    TradingOpened,
    TransferReceipt,
)
from taxtoken.core.domain.state import (
    ConversionState,
    ExemptionKind,
    ExemptionRegistry,
    TradingWindow,
)
from taxtoken.core.domain.units import validate_amount
from taxtoken.core.math.schedule import current_tax_percent, max_holding
from taxtoken.errors import InvalidAddressError
from taxtoken.exchange.router import Router
from taxtoken.ledger.journal import atomic
from taxtoken.ledger.ledger import Ledger, LedgerSnapshot

from .conversion import ConversionPipeline, ConversionReport, StakeholderWallets
from .interceptor import TransferInterceptor

logger = logging.getLogger(__name__)

STATE_SCHEMA_VERSION = "1"


class TaxToken:
    """Актив с перехватом каждого трансфера.

    Args:
        config: конфигурация конструирования (фиксирована)
        router: внешний router; пара token / settlement создаётся здесь
        administrator: адрес администратора
        address: собственный адрес токена (он же держатель налога)
        clock: источник времени (секунды)
    """

    def __init__(
        self,
        config: TokenConfig,
        router: Router,
        administrator: str,
        address: str,
        clock: Callable[[], float] = SYSTEM_CLOCK,
    ):
        self.config = config
        self.address = address
        self._clock = clock
        self._router = router
        self._ledger = Ledger(administrator)

        self.window = TradingWindow()
        self.exemptions = ExemptionRegistry()
        self.conversion_state = ConversionState(threshold_balance=config.conversion_threshold)

        self.pair_address = router.create_pair(self, config.settlement_asset)
        self.wallets = StakeholderWallets(
            team=config.team_wallet,
            marketing=config.marketing_wallet,
            liquidity=config.liquidity_wallet,
            pool=self.pair_address,
        )

        self._pipeline = ConversionPipeline(
            ledger=self._ledger,
            router=router,
            state=self.conversion_state,
            contract_address=address,
            settlement_asset=config.settlement_asset,
            wallets=self.wallets,
            shares=config.fee_shares,
            clock=clock,
        )
        self._interceptor = TransferInterceptor(
            ledger=self._ledger,
            window=self.window,
            exemptions=self.exemptions,
            conversion_state=self.conversion_state,
            pipeline=self._pipeline,
            contract_address=address,
            pool_address=self.pair_address,
            clock=clock,
        )

        for account in (administrator, address, config.mint_to, config.team_wallet,
                        config.marketing_wallet):
            self.exemptions.set(ExemptionKind.FEE, account, True)
        for account in (administrator, address, config.mint_to, self.pair_address,
                        router.address):
            self.exemptions.set(ExemptionKind.HOLDING_CAP, account, True)

        self._ledger.mint(config.mint_to, config.total_supply)
        logger.info(
            "Deployed %s (%s) at %s, supply=%s, pair=%s, threshold=%s",
            config.name,
            config.symbol,
            address,
            config.total_supply,
            self.pair_address,
            self.conversion_threshold,
        )

    # =========================================================================
    # Metadata / views
    # =========================================================================

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def symbol(self) -> str:
        return self.config.symbol

    @property
    def decimals(self) -> int:
        return self.config.decimals

    @property
    def administrator(self) -> str:
        return self._ledger.administrator

    @property
    def conversion_threshold(self) -> int:
        return self.conversion_state.threshold_balance

    @property
    def events(self) -> List[object]:
        return list(self._ledger.events)

    def total_supply(self) -> int:
        return self._ledger.total_supply()

    def balance_of(self, account: str) -> int:
        return self._ledger.balance_of(account)

    def holders(self) -> Dict[str, int]:
        return self._ledger.holders()

    def allowance(self, owner: str, spender: str) -> int:
        return self._ledger.allowance(owner, spender)

    def is_fee_exempt(self, account: str) -> bool:
        return self.exemptions.is_fee_exempt(account)

    def is_holding_cap_exempt(self, account: str) -> bool:
        return self.exemptions.is_holding_cap_exempt(account)

    def current_tax_percent(self) -> Optional[int]:
        """Текущий налог для taxable трансферов; None пока торговля закрыта."""
        if not self.window.is_open():
            return None
        return current_tax_percent(self.window.elapsed_since_open(self._clock()))

    def current_max_holding(self) -> Optional[int]:
        """Текущий holding cap; None если торговля закрыта или окно guard'а прошло."""
        if not self.window.is_open():
            return None
        elapsed = self.window.elapsed_since_open(self._clock())
        return max_holding(elapsed, self.total_supply())

    # =========================================================================
    # Transfers
    # =========================================================================

    def transfer(self, sender: str, recipient: str, amount: int) -> TransferReceipt:
        """Трансфер от имени sender (msg.sender)."""
        with pinned(self._clock), atomic(self._ledger, self._router):
            return self._interceptor.intercept(sender, recipient, amount)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        self._ledger.approve(owner, spender, amount)

    def transfer_from(
        self, spender: str, owner: str, recipient: str, amount: int
    ) -> TransferReceipt:
        """Трансфер от имени owner по allowance spender'а.

        Raises:
            InsufficientAllowanceError: allowance меньше amount
        """
        with pinned(self._clock), atomic(self._ledger, self._router):
            self._ledger.spend_allowance(owner, spender, amount)
            return self._interceptor.intercept(owner, recipient, amount)

    # =========================================================================
    # Administration
    # =========================================================================

    def open_trading(self, caller: str) -> float:
        """Однократное открытие торговли.

        Returns:
            opened_at

        Raises:
            UnauthorizedError: caller не администратор
            AlreadyOpenError: торговля уже открыта (opened_at не меняется)
        """
        self._ledger.require_administrator(caller)
        self.window.open(self._clock())
        self._ledger.emit(TradingOpened(opened_at=self.window.opened_at))
        return self.window.opened_at

    def set_fee_exempt(self, caller: str, account: str, exempt: bool) -> None:
        self._set_exemption(caller, ExemptionKind.FEE, account, exempt)

    def set_holding_cap_exempt(self, caller: str, account: str, exempt: bool) -> None:
        self._set_exemption(caller, ExemptionKind.HOLDING_CAP, account, exempt)

    def _set_exemption(
        self, caller: str, kind: ExemptionKind, account: str, exempt: bool
    ) -> None:
        self._ledger.require_administrator(caller)
        if not isinstance(account, str) or not re.fullmatch(ADDRESS_PATTERN, account):
            raise InvalidAddressError(f"Invalid account address: {account!r}")
        if self.exemptions.set(kind, account, exempt):
            self._ledger.emit(ExemptionUpdated(kind=kind.value, account=account, exempt=exempt))
            logger.info("%s exemption for %s set to %s", kind.value, account, exempt)

    def manual_convert(self, caller: str) -> Optional[ConversionReport]:
        """Конверсия всего собственного баланса независимо от порога.

        Returns:
            ConversionReport, либо None если конвертировать нечего
        """
        self._ledger.require_administrator(caller)
        holding = self.balance_of(self.address)
        if holding == 0:
            return None
        with pinned(self._clock), atomic(self._ledger, self._router):
            return self._pipeline.convert(holding)

    # =========================================================================
    # Native currency
    # =========================================================================

    def receive_native(self, sender: str, amount: int) -> None:
        """Приём нативного актива без обработки (pass-through)."""
        validate_amount(amount)
        self._ledger.emit(NativeReceived(sender=sender, amount=amount))

    # =========================================================================
    # Snapshots
    # =========================================================================

    def snapshot(self) -> LedgerSnapshot:
        return self._ledger.snapshot()

    def restore(self, snapshot: LedgerSnapshot) -> None:
        self._ledger.restore(snapshot)

    def state_snapshot(self) -> Dict[str, Any]:
        """JSON-совместимый снапшот состояния запуска (контракт token_state)."""
        return {
            "schema_version": STATE_SCHEMA_VERSION,
            "name": self.name,
            "symbol": self.symbol,
            "address": self.address,
            "pair_address": self.pair_address,
            "total_supply": self.total_supply(),
            "contract_holding": self.balance_of(self.address),
            "trading": {
                "enabled": self.window.enabled,
                "opened_at": self.window.opened_at,
            },
            "conversion": {
                "in_progress": self.conversion_state.in_progress,
                "threshold_balance": self.conversion_state.threshold_balance,
            },
            "current_tax_percent": self.current_tax_percent(),
            "current_max_holding": self.current_max_holding(),
        }
