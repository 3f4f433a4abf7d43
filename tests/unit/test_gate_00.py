"""
Unit tests для GATE 0: Trading Window

Проверяет:
- Торговля открыта → всё пропускается
- Торговля закрыта → только трансферы с fee-exempt стороной
"""

import pytest

from taxtoken.gatekeeper.gates import Gate00TradingWindow


@pytest.fixture
def gate():
    return Gate00TradingWindow()


class TestGate00Open:
    """Окно открыто."""

    @pytest.mark.parametrize("sender_exempt,recipient_exempt", [
        (False, False), (True, False), (False, True), (True, True),
    ])
    def test_everything_passes(self, gate, sender_exempt, recipient_exempt):
        result = gate.evaluate(True, sender_exempt, recipient_exempt)
        assert result.transfer_allowed
        assert result.block_reason == ""
        assert result.trading_open


class TestGate00Closed:
    """Окно закрыто."""

    def test_non_exempt_blocked(self, gate):
        result = gate.evaluate(False, False, False)
        assert not result.transfer_allowed
        assert result.block_reason == "trading_closed"
        assert not result.exempt_party

    def test_exempt_sender_passes(self, gate):
        result = gate.evaluate(False, True, False)
        assert result.transfer_allowed
        assert result.exempt_party

    def test_exempt_recipient_passes(self, gate):
        result = gate.evaluate(False, False, True)
        assert result.transfer_allowed
        assert not result.trading_open
