"""
Тесты интерфейса администратора и view-методов TaxToken

Проверяет:
- Развёртывание: эмиссия, пара, exemptions по умолчанию
- open_trading: только администратор, однократно
- Идемпотентные exemption setter'ы
- Приём нативного актива
"""

import pytest

from taxtoken.core.domain.events import ExemptionUpdated, NativeReceived, TradingOpened
from taxtoken.errors import AlreadyOpenError, InvalidAddressError, UnauthorizedError
from tests.conftest import (
    ADMIN,
    ALICE,
    LIQUIDITY,
    MARKETING,
    ROUTER,
    START_TS,
    SUPPLY,
    TEAM,
    TOKEN,
)


class TestDeployment:
    """Состояние после конструирования."""

    def test_metadata(self, token):
        assert token.name == "Launch Token"
        assert token.symbol == "LNCH"
        assert token.decimals == 18
        assert token.administrator == ADMIN

    def test_supply_minted(self, token):
        assert token.total_supply() == SUPPLY
        assert token.holders() == {ADMIN: SUPPLY}

    def test_threshold(self, token):
        assert token.conversion_threshold == 555_555_500_000_000_000_000

    @pytest.mark.parametrize("account", [ADMIN, TOKEN, TEAM, MARKETING])
    def test_default_fee_exemptions(self, token, account):
        assert token.is_fee_exempt(account)

    def test_default_cap_exemptions(self, token):
        assert token.is_holding_cap_exempt(token.pair_address)
        assert token.is_holding_cap_exempt(ROUTER)
        assert token.is_holding_cap_exempt(TOKEN)

    def test_regular_accounts_not_exempt(self, token):
        assert not token.is_fee_exempt(ALICE)
        assert not token.is_fee_exempt(LIQUIDITY)
        assert not token.is_fee_exempt(token.pair_address)
        assert not token.is_holding_cap_exempt(ALICE)

    def test_views_closed(self, token):
        assert token.current_tax_percent() is None
        assert token.current_max_holding() is None


class TestOpenTrading:
    """Однократное открытие торговли."""

    def test_open(self, token):
        opened_at = token.open_trading(ADMIN)
        assert opened_at == START_TS
        assert token.window.is_open()
        assert token.events[-1] == TradingOpened(opened_at=START_TS)

    def test_unauthorized(self, token):
        with pytest.raises(UnauthorizedError):
            token.open_trading(ALICE)
        assert not token.window.is_open()

    def test_twice(self, token, manual_clock):
        token.open_trading(ADMIN)
        manual_clock.advance(600)
        with pytest.raises(AlreadyOpenError):
            token.open_trading(ADMIN)
        assert token.window.opened_at == START_TS

    def test_views_follow_schedule(self, token, manual_clock):
        token.open_trading(ADMIN)
        assert token.current_tax_percent() == 45
        manual_clock.advance(10 * 60)
        assert token.current_tax_percent() == 10
        assert token.current_max_holding() == SUPPLY * 50 // 10_000
        manual_clock.advance(86_400)
        assert token.current_tax_percent() == 4
        assert token.current_max_holding() is None


class TestExemptions:
    """Exemption setter'ы."""

    def test_set_and_clear(self, token):
        token.set_fee_exempt(ADMIN, ALICE, True)
        assert token.is_fee_exempt(ALICE)
        token.set_fee_exempt(ADMIN, ALICE, False)
        assert not token.is_fee_exempt(ALICE)

    def test_idempotent_single_event(self, token):
        token.set_holding_cap_exempt(ADMIN, ALICE, True)
        token.set_holding_cap_exempt(ADMIN, ALICE, True)
        updates = [e for e in token.events if isinstance(e, ExemptionUpdated)]
        assert updates == [ExemptionUpdated(kind="holding_cap", account=ALICE, exempt=True)]

    @pytest.mark.parametrize("account", ["", "0x1234", "alice", TOKEN + "0"])
    def test_malformed_account_rejected(self, token, account):
        events_before = len(token.events)
        with pytest.raises(InvalidAddressError):
            token.set_fee_exempt(ADMIN, account, True)
        with pytest.raises(InvalidAddressError):
            token.set_holding_cap_exempt(ADMIN, account, True)
        assert not token.is_fee_exempt(account)
        assert len(token.events) == events_before

    def test_unauthorized(self, token):
        with pytest.raises(UnauthorizedError):
            token.set_fee_exempt(ALICE, ALICE, True)
        with pytest.raises(UnauthorizedError):
            token.set_holding_cap_exempt(ALICE, ALICE, True)
        assert not token.is_fee_exempt(ALICE)


class TestNative:
    """Приём нативного актива."""

    def test_receive(self, token):
        token.receive_native(ALICE, 10**18)
        assert token.events[-1] == NativeReceived(sender=ALICE, amount=10**18)
        assert token.holders() == {ADMIN: SUPPLY}

    def test_negative_rejected(self, token):
        with pytest.raises(ValueError):
            token.receive_native(ALICE, -1)
