"""Общие fixtures: ручные часы, конфигурация, router и токен с ликвидностью."""

import pytest

from taxtoken.core.domain.clock import BlockClock
from taxtoken.core.domain.config import TokenConfig
from taxtoken.core.domain.units import to_base_units
from taxtoken.engine import TaxToken
from taxtoken.exchange import ConstantProductRouter


def addr(n: int) -> str:
    """Детерминированный адрес для тестов."""
    return "0x" + f"{n:040x}"


ADMIN = addr(1)
TOKEN = addr(2)
ROUTER = addr(3)
WETH = addr(4)
TEAM = addr(5)
MARKETING = addr(6)
LIQUIDITY = addr(7)
ALICE = addr(8)
BOB = addr(9)
CAROL = addr(10)

SUPPLY = to_base_units(1_111_111)
START_TS = 1_700_000_000.0

POOL_TOKENS = to_base_units(500_000)
POOL_NATIVE = to_base_units(100)


def tokens(amount: int) -> int:
    return to_base_units(amount)


class ManualClock:
    """Источник времени, управляемый тестом."""

    def __init__(self, now: float = START_TS):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def manual_clock():
    return ManualClock()


@pytest.fixture
def clock(manual_clock):
    return BlockClock(manual_clock)


@pytest.fixture
def config():
    return TokenConfig(
        name="Launch Token",
        symbol="LNCH",
        total_supply=SUPPLY,
        settlement_asset=WETH,
        team_wallet=TEAM,
        marketing_wallet=MARKETING,
        liquidity_wallet=LIQUIDITY,
        mint_to=ADMIN,
    )


@pytest.fixture
def router(clock):
    return ConstantProductRouter(ROUTER, WETH, clock=clock)


@pytest.fixture
def token(config, router, clock):
    return TaxToken(config, router, administrator=ADMIN, address=TOKEN, clock=clock)


def seed_pool(token, router, clock) -> None:
    """Администратор добавляет начальную ликвидность 500k токенов / 100 native."""
    router.deposit_native(ADMIN, POOL_NATIVE)
    token.approve(ADMIN, ROUTER, POOL_TOKENS)
    router.add_liquidity(
        ADMIN, TOKEN, WETH, POOL_TOKENS, POOL_NATIVE, 0, 0, ADMIN, clock()
    )


@pytest.fixture
def seeded_token(token, router, clock):
    """Токен с ликвидностью, торговля ещё закрыта."""
    seed_pool(token, router, clock)
    return token


@pytest.fixture
def launched_token(seeded_token, manual_clock):
    """Токен с ликвидностью и открытой торговлей (T0 = START_TS)."""
    seeded_token.open_trading(ADMIN)
    return seeded_token


def buy(token, router, clock, buyer: str, native_in: int):
    """Покупка через router: native → токены."""
    router.deposit_native(buyer, native_in)
    return router.swap_exact_in_for_out(buyer, native_in, 0, [WETH, TOKEN], buyer, clock())


def sell(token, router, clock, seller: str, amount: int):
    """Продажа через router: токены → native."""
    token.approve(seller, ROUTER, amount)
    return router.swap_exact_in_for_out(seller, amount, 0, [TOKEN, WETH], seller, clock())
