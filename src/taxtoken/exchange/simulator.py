"""
ConstantProductRouter — офлайн симулятор constant-product пула (x * y = k)

Поведение router'а и пары в стиле Uniswap V2:
- swap fee 0.3% (997 / 1000)
- MINIMUM_LIQUIDITY навсегда блокируется при первом mint'е LP
- add_liquidity по оптимальному соотношению резервов
- fee-on-transfer aware: входящая сумма = баланс пары − сохранённый резерв
- swap с нулевым выходом отклоняется (INSUFFICIENT_OUTPUT_AMOUNT) даже при
  min_amount_out = 0; конверсия с таким swap'ом завершается ExternalConversionError

Токены забираются через transfer_from токена, поэтому fee- и reentrancy-логика
токена выполняется так же, как при реальном исполнении. Settlement актив
моделируется как нативный баланс внутри симулятора.

Все публичные изменяющие вызовы atomic: при ошибке откатываются и состояние
симулятора, и ledger токена.
"""

import copy
import hashlib
import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Final, List, Sequence, Tuple

from taxtoken.core.domain.clock import SYSTEM_CLOCK, pinned
from taxtoken.core.domain.units import validate_amount
from taxtoken.errors import ExchangeError
from taxtoken.ledger.journal import atomic
from taxtoken.ledger.ledger import ZERO_ADDRESS

from .router import TokenHandle

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

MINIMUM_LIQUIDITY: Final[int] = 1_000

SWAP_FEE_NUMERATOR: Final[int] = 997
SWAP_FEE_DENOMINATOR: Final[int] = 1_000


# =============================================================================
# PURE AMM MATH
# =============================================================================


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """Выход swap'а для constant-product пула с комиссией 0.3%.

    Raises:
        ExchangeError: при нулевом входе или пустом пуле
    """
    if amount_in <= 0:
        raise ExchangeError("INSUFFICIENT_INPUT_AMOUNT")
    if reserve_in <= 0 or reserve_out <= 0:
        raise ExchangeError("INSUFFICIENT_LIQUIDITY")
    amount_in_with_fee = amount_in * SWAP_FEE_NUMERATOR
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * SWAP_FEE_DENOMINATOR + amount_in_with_fee
    return numerator // denominator


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Эквивалент amount_a в активе b по текущему соотношению резервов."""
    if amount_a <= 0:
        raise ExchangeError("INSUFFICIENT_AMOUNT")
    if reserve_a <= 0 or reserve_b <= 0:
        raise ExchangeError("INSUFFICIENT_LIQUIDITY")
    return amount_a * reserve_b // reserve_a


def derive_address(*parts: str) -> str:
    """Детерминированный адрес из набора строк."""
    digest = hashlib.sha256("|".join(parts).encode("utf-8")).hexdigest()
    return "0x" + digest[:40]


# =============================================================================
# PAIR STATE
# =============================================================================


@dataclass
class PairState:
    """Состояние пары token / settlement."""

    address: str
    token_asset: str
    settlement_asset: str
    reserve_token: int = 0
    reserve_native: int = 0
    total_lp: int = 0
    lp_balances: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class RouterSnapshot:
    pairs: Dict[str, PairState]
    native_balances: Dict[str, int]


# =============================================================================
# ROUTER
# =============================================================================


class ConstantProductRouter:
    """Router + пары constant-product в одном объекте."""

    def __init__(
        self,
        address: str,
        settlement_asset: str,
        clock: Callable[[], float] = SYSTEM_CLOCK,
    ):
        self.address = address
        self.settlement_asset = settlement_asset
        self._clock = clock
        self._tokens: Dict[str, TokenHandle] = {}
        self._pairs: Dict[str, PairState] = {}  # pair address → state
        self._native: Dict[str, int] = {}

    # -------------------------------------------------------------------------
    # Pairs
    # -------------------------------------------------------------------------

    def create_pair(self, token: TokenHandle, settlement_asset: str) -> str:
        """Создание пары и регистрация токена.

        Raises:
            ExchangeError: если settlement актив чужой или пара уже существует
        """
        if settlement_asset != self.settlement_asset:
            raise ExchangeError(f"Unsupported settlement asset: {settlement_asset}")
        address = self.pair_address(token.address, settlement_asset)
        if address in self._pairs:
            raise ExchangeError("PAIR_EXISTS")
        self._tokens[token.address] = token
        self._pairs[address] = PairState(
            address=address,
            token_asset=token.address,
            settlement_asset=settlement_asset,
        )
        logger.info("Created pair %s for %s/%s", address, token.address, settlement_asset)
        return address

    def pair_address(self, asset_a: str, asset_b: str) -> str:
        first, second = sorted((asset_a, asset_b))
        return derive_address(self.address, first, second)

    def get_reserves(self, pair_address: str) -> Tuple[int, int]:
        """(reserve_token, reserve_native) пары."""
        pair = self._pair_by_address(pair_address)
        return pair.reserve_token, pair.reserve_native

    def lp_balance_of(self, pair_address: str, account: str) -> int:
        return self._pair_by_address(pair_address).lp_balances.get(account, 0)

    def total_lp(self, pair_address: str) -> int:
        return self._pair_by_address(pair_address).total_lp

    # -------------------------------------------------------------------------
    # Native balances
    # -------------------------------------------------------------------------

    def native_balance_of(self, account: str) -> int:
        return self._native.get(account, 0)

    def deposit_native(self, account: str, amount: int) -> None:
        """Зачисление нативного актива извне (funding кошельков)."""
        validate_amount(amount)
        self._native[account] = self.native_balance_of(account) + amount

    # -------------------------------------------------------------------------
    # Swap
    # -------------------------------------------------------------------------

    def swap_exact_in_for_out(
        self,
        sender: str,
        amount_in: int,
        min_amount_out: int,
        path: Sequence[str],
        recipient: str,
        deadline: float,
    ) -> List[int]:
        """Swap точного входа на выход по прямому пути [asset_in, asset_out].

        Returns:
            [amount_in, amount_out]

        Raises:
            ExchangeError: EXPIRED, INSUFFICIENT_OUTPUT_AMOUNT, INSUFFICIENT_LIQUIDITY,
                неподдерживаемый путь
        """
        if len(path) != 2:
            raise ExchangeError("Only direct two-asset paths are supported")
        asset_in, asset_out = path
        pair = self._pair_for(asset_in, asset_out)
        token = self._tokens[pair.token_asset]

        with pinned(self._clock), atomic(self, token):
            self._check_deadline(deadline)
            if asset_in == pair.token_asset:
                token.transfer_from(self.address, sender, pair.address, amount_in)
                actual_in = token.balance_of(pair.address) - pair.reserve_token
                amount_out = get_amount_out(actual_in, pair.reserve_token, pair.reserve_native)
                self._check_output(amount_out, min_amount_out)
                pair.reserve_token += actual_in
                pair.reserve_native -= amount_out
                self._pay_native(recipient, amount_out)
            else:
                self._debit_native(sender, amount_in)
                amount_out = get_amount_out(amount_in, pair.reserve_native, pair.reserve_token)
                self._check_output(amount_out, min_amount_out)
                pair.reserve_native += amount_in
                token.transfer(pair.address, recipient, amount_out)
                pair.reserve_token = token.balance_of(pair.address)

        logger.debug("Swap %s %s → %s %s", amount_in, asset_in, amount_out, asset_out)
        return [amount_in, amount_out]

    # -------------------------------------------------------------------------
    # Liquidity
    # -------------------------------------------------------------------------

    def add_liquidity(
        self,
        sender: str,
        asset_a: str,
        asset_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        lp_recipient: str,
        deadline: float,
    ) -> Tuple[int, int, int]:
        """Добавление ликвидности по оптимальному соотношению резервов.

        Неиспользованный остаток остаётся у sender'а.

        Returns:
            (used_a, used_b, liquidity) в порядке активов вызывающего

        Raises:
            ExchangeError: EXPIRED, INSUFFICIENT_A_AMOUNT / INSUFFICIENT_B_AMOUNT,
                INSUFFICIENT_LIQUIDITY_MINTED
        """
        pair = self._pair_for(asset_a, asset_b)
        token = self._tokens[pair.token_asset]

        token_first = asset_a == pair.token_asset
        if token_first:
            token_desired, native_desired = amount_a_desired, amount_b_desired
            token_min, native_min = amount_a_min, amount_b_min
        else:
            token_desired, native_desired = amount_b_desired, amount_a_desired
            token_min, native_min = amount_b_min, amount_a_min

        with pinned(self._clock), atomic(self, token):
            self._check_deadline(deadline)
            token_amount, native_amount = self._optimal_amounts(
                pair, token_desired, native_desired, token_min, native_min
            )
            token.transfer_from(self.address, sender, pair.address, token_amount)
            self._debit_native(sender, native_amount)
            token_in = token.balance_of(pair.address) - pair.reserve_token
            liquidity = self._mint_lp(pair, token_in, native_amount, lp_recipient)
            pair.reserve_token += token_in
            pair.reserve_native += native_amount

        logger.debug(
            "Added liquidity %s token / %s native, minted %s LP to %s",
            token_amount,
            native_amount,
            liquidity,
            lp_recipient,
        )
        if token_first:
            return token_amount, native_amount, liquidity
        return native_amount, token_amount, liquidity

    # -------------------------------------------------------------------------
    # Journal
    # -------------------------------------------------------------------------

    def snapshot(self) -> RouterSnapshot:
        return RouterSnapshot(
            pairs=copy.deepcopy(self._pairs),
            native_balances=dict(self._native),
        )

    def restore(self, snapshot: RouterSnapshot) -> None:
        # Объекты PairState мутируются на месте, чтобы ссылки в текущих
        # вызовах оставались валидными
        for address, saved in snapshot.pairs.items():
            pair = self._pairs.get(address)
            if pair is None:
                self._pairs[address] = copy.deepcopy(saved)
                continue
            pair.reserve_token = saved.reserve_token
            pair.reserve_native = saved.reserve_native
            pair.total_lp = saved.total_lp
            pair.lp_balances = dict(saved.lp_balances)
        for address in set(self._pairs) - set(snapshot.pairs):
            del self._pairs[address]
        self._native = dict(snapshot.native_balances)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _check_deadline(self, deadline: float) -> None:
        if deadline < self._clock():
            raise ExchangeError("EXPIRED")

    @staticmethod
    def _check_output(amount_out: int, min_amount_out: int) -> None:
        # Нулевой выход отклоняется при любом min_amount_out
        if amount_out <= 0 or amount_out < min_amount_out:
            raise ExchangeError("INSUFFICIENT_OUTPUT_AMOUNT")

    def _pair_for(self, asset_a: str, asset_b: str) -> PairState:
        address = self.pair_address(asset_a, asset_b)
        if address not in self._pairs:
            raise ExchangeError(f"No pair for {asset_a}/{asset_b}")
        return self._pairs[address]

    def _pair_by_address(self, pair_address: str) -> PairState:
        if pair_address not in self._pairs:
            raise ExchangeError(f"Unknown pair: {pair_address}")
        return self._pairs[pair_address]

    @staticmethod
    def _optimal_amounts(
        pair: PairState,
        token_desired: int,
        native_desired: int,
        token_min: int,
        native_min: int,
    ) -> Tuple[int, int]:
        if pair.reserve_token == 0 and pair.reserve_native == 0:
            return token_desired, native_desired

        native_optimal = quote(token_desired, pair.reserve_token, pair.reserve_native)
        if native_optimal <= native_desired:
            if native_optimal < native_min:
                raise ExchangeError("INSUFFICIENT_B_AMOUNT")
            return token_desired, native_optimal

        token_optimal = quote(native_desired, pair.reserve_native, pair.reserve_token)
        if token_optimal < token_min:
            raise ExchangeError("INSUFFICIENT_A_AMOUNT")
        return token_optimal, native_desired

    @staticmethod
    def _mint_lp(pair: PairState, token_in: int, native_in: int, lp_recipient: str) -> int:
        if pair.total_lp == 0:
            liquidity = math.isqrt(token_in * native_in) - MINIMUM_LIQUIDITY
            if liquidity > 0:
                pair.lp_balances[ZERO_ADDRESS] = MINIMUM_LIQUIDITY
                pair.total_lp = MINIMUM_LIQUIDITY
        else:
            liquidity = min(
                token_in * pair.total_lp // pair.reserve_token,
                native_in * pair.total_lp // pair.reserve_native,
            )
        if liquidity <= 0:
            raise ExchangeError("INSUFFICIENT_LIQUIDITY_MINTED")
        pair.lp_balances[lp_recipient] = pair.lp_balances.get(lp_recipient, 0) + liquidity
        pair.total_lp += liquidity
        return liquidity

    def _debit_native(self, account: str, amount: int) -> None:
        balance = self.native_balance_of(account)
        if balance < amount:
            raise ExchangeError(
                f"INSUFFICIENT_NATIVE_BALANCE: {account} has {balance}, needs {amount}"
            )
        self._native[account] = balance - amount

    def _pay_native(self, recipient: str, amount: int) -> None:
        self._native[recipient] = self.native_balance_of(recipient) + amount
        token = self._tokens.get(recipient)
        if token is not None:
            token.receive_native(self.address, amount)
