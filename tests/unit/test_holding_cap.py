"""Тесты HoldingGuard.

Coverage:
- Cap по tier'ам как доля total supply
- Окно 24h
- Монотонность внутри окна
"""

import pytest

from taxtoken.core.domain.units import ONE_DAY_SEC, ONE_MINUTE_SEC, to_base_units
from taxtoken.core.math.schedule import is_holding_guard_active, max_holding

SUPPLY = to_base_units(1_111_111)


class TestMaxHolding:
    """Cap по tier'ам."""

    @pytest.mark.parametrize(
        "elapsed_sec, bps",
        [
            (0, 10),
            (59, 10),
            (ONE_MINUTE_SEC, 25),
            (10 * ONE_MINUTE_SEC - 1, 25),
            (10 * ONE_MINUTE_SEC, 50),
            (15 * ONE_MINUTE_SEC - 1, 50),
            (15 * ONE_MINUTE_SEC, 200),
            (ONE_DAY_SEC - 1, 200),
        ],
    )
    def test_cap_fraction(self, elapsed_sec, bps):
        assert max_holding(elapsed_sec, SUPPLY) == SUPPLY * bps // 10_000

    def test_first_minute_cap_is_one_tenth_percent(self):
        """0.1% от 1,111,111 токенов = 1,111.111 токенов."""
        assert max_holding(30, SUPPLY) == 1_111_111 * 10**15

    def test_floor_division(self):
        assert max_holding(0, 9_999) == 9

    def test_no_cap_after_window(self):
        assert max_holding(ONE_DAY_SEC, SUPPLY) is None
        assert max_holding(10 * ONE_DAY_SEC, SUPPLY) is None


class TestWindow:
    """Окно holding guard."""

    def test_active_inside_window(self):
        assert is_holding_guard_active(0)
        assert is_holding_guard_active(ONE_DAY_SEC - 1)

    def test_inactive_after_window(self):
        assert not is_holding_guard_active(ONE_DAY_SEC)

    def test_non_decreasing_inside_window(self):
        grid = range(0, ONE_DAY_SEC, 97)
        caps = [max_holding(t, SUPPLY) for t in grid]
        assert all(a <= b for a, b in zip(caps, caps[1:]))


def test_negative_elapsed_rejected():
    with pytest.raises(ValueError):
        max_holding(-5, SUPPLY)
