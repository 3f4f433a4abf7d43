"""Тесты BlockClock."""

from taxtoken.core.domain.clock import BlockClock, pinned


class _Ticker:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        self.now += 1.0
        return self.now


def test_unpinned_reads_source():
    clock = BlockClock(_Ticker())
    assert clock() == 101.0
    assert clock() == 102.0


def test_pinned_time_is_stable():
    clock = BlockClock(_Ticker())
    with clock.pinned() as ts:
        assert clock() == ts
        assert clock() == ts


def test_nested_pin_keeps_outer_timestamp():
    clock = BlockClock(_Ticker())
    with clock.pinned() as outer:
        with clock.pinned() as inner:
            assert inner == outer
        assert clock() == outer
    assert clock() != outer


def test_pinned_helper_noop_for_plain_callable():
    ticker = _Ticker()
    with pinned(ticker):
        assert ticker() == 101.0
        assert ticker() == 102.0
