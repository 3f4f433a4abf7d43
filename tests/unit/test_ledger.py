"""Тесты Ledger и журнала atomic."""

import pytest

from taxtoken.core.domain.events import Approval, Transfer
from taxtoken.errors import (
    InsufficientAllowanceError,
    InsufficientBalanceError,
    UnauthorizedError,
)
from taxtoken.ledger import ZERO_ADDRESS, Journaled, Ledger, atomic


@pytest.fixture
def ledger():
    ledger = Ledger("admin")
    ledger.mint("alice", 1_000)
    return ledger


class TestLedger:
    """Базовые примитивы."""

    def test_mint(self, ledger):
        assert ledger.balance_of("alice") == 1_000
        assert ledger.total_supply() == 1_000
        assert ledger.events == [Transfer(sender=ZERO_ADDRESS, recipient="alice", amount=1_000)]

    def test_raw_transfer(self, ledger):
        ledger.raw_transfer("alice", "bob", 400)
        assert ledger.holders() == {"alice": 600, "bob": 400}
        assert ledger.total_supply() == 1_000

    def test_raw_transfer_insufficient(self, ledger):
        with pytest.raises(InsufficientBalanceError):
            ledger.raw_transfer("alice", "bob", 1_001)

    def test_holders_skip_empty(self, ledger):
        ledger.raw_transfer("alice", "bob", 1_000)
        assert ledger.holders() == {"bob": 1_000}

    def test_allowance(self, ledger):
        ledger.approve("alice", "router", 300)
        assert ledger.events[-1] == Approval(owner="alice", spender="router", amount=300)
        ledger.spend_allowance("alice", "router", 100)
        assert ledger.allowance("alice", "router") == 200
        with pytest.raises(InsufficientAllowanceError):
            ledger.spend_allowance("alice", "router", 201)

    def test_require_administrator(self, ledger):
        ledger.require_administrator("admin")
        with pytest.raises(UnauthorizedError):
            ledger.require_administrator("alice")

    def test_empty_administrator_rejected(self):
        with pytest.raises(ValueError):
            Ledger("")


class TestAtomic:
    """Журнал: всё или ничего."""

    def test_ledger_is_journaled(self, ledger):
        assert isinstance(ledger, Journaled)

    def test_commit(self, ledger):
        with atomic(ledger):
            ledger.raw_transfer("alice", "bob", 100)
        assert ledger.balance_of("bob") == 100

    def test_rollback_restores_state_and_events(self, ledger):
        events_before = list(ledger.events)
        with pytest.raises(RuntimeError):
            with atomic(ledger):
                ledger.raw_transfer("alice", "bob", 100)
                ledger.approve("alice", "router", 5)
                raise RuntimeError("boom")
        assert ledger.holders() == {"alice": 1_000}
        assert ledger.allowance("alice", "router") == 0
        assert ledger.events == events_before

    def test_nested_inner_failure_only_rolls_back_inner(self, ledger):
        with atomic(ledger):
            ledger.raw_transfer("alice", "bob", 100)
            with pytest.raises(InsufficientBalanceError):
                with atomic(ledger):
                    ledger.raw_transfer("alice", "carol", 50)
                    ledger.raw_transfer("alice", "carol", 10_000)
        assert ledger.holders() == {"alice": 900, "bob": 100}

    def test_non_journaled_participants_ignored(self, ledger):
        with pytest.raises(RuntimeError):
            with atomic(ledger, object()):
                ledger.raw_transfer("alice", "bob", 1)
                raise RuntimeError("boom")
        assert ledger.balance_of("bob") == 0
