"""
Tier schedules — FeeScheduleEngine и HoldingGuard

Обе политики — упорядоченные таблицы interval → value на elapsed времени с
момента открытия торговли. Интервалы полуоткрытые [start, end): граница
принадлежит следующему tier'у. Lookup — bisect по отсортированному списку
границ.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Налог принимает значения только из {45, 25, 10, 6, 4}
2. Налог не возрастает со временем (плато 45% на [0, 3min))
3. Holding cap не убывает со временем внутри окна [0, 24h)
4. После 24h holding cap не применяется
"""

from bisect import bisect_right
from typing import Final, Optional, Sequence, Tuple

from taxtoken.core.domain.units import ONE_DAY_SEC, ONE_MINUTE_SEC, bps_of


# =============================================================================
# FEE SCHEDULE
# =============================================================================

# (начало интервала, налог %). Tier'ы [0,1min) и [1min,3min) намеренно
# совпадают и не схлопываются.
FEE_TIERS: Final[Tuple[Tuple[int, int], ...]] = (
    (0, 45),
    (1 * ONE_MINUTE_SEC, 45),
    (3 * ONE_MINUTE_SEC, 25),
    (10 * ONE_MINUTE_SEC, 10),
    (15 * ONE_MINUTE_SEC, 6),
    (ONE_DAY_SEC, 4),
)


# =============================================================================
# HOLDING CAP
# =============================================================================

# Окно, в котором применяется holding cap
HOLDING_GUARD_WINDOW_SEC: Final[int] = ONE_DAY_SEC

# (начало интервала, cap в bps от total supply)
HOLDING_CAP_TIERS: Final[Tuple[Tuple[int, int], ...]] = (
    (0, 10),  # 0.1%
    (1 * ONE_MINUTE_SEC, 25),  # 0.25%
    (10 * ONE_MINUTE_SEC, 50),  # 0.5%
    (15 * ONE_MINUTE_SEC, 200),  # 2%
)


def _lookup(tiers: Sequence[Tuple[int, int]], elapsed_sec: float) -> int:
    """Значение tier'а, которому принадлежит elapsed_sec."""
    if elapsed_sec < 0:
        raise ValueError(f"Elapsed time cannot be negative: {elapsed_sec}")
    starts = [start for start, _ in tiers]
    index = bisect_right(starts, elapsed_sec) - 1
    return tiers[index][1]


def current_tax_percent(elapsed_sec: float) -> int:
    """
    Налог в процентах для elapsed времени с момента открытия торговли.

    Чистая функция, без side effects.

    Args:
        elapsed_sec: Время с момента открытия (секунды, >= 0)

    Returns:
        Налог в целых процентах

    Raises:
        ValueError: Если elapsed_sec отрицательный
    """
    return _lookup(FEE_TIERS, elapsed_sec)


def is_holding_guard_active(elapsed_sec: float) -> bool:
    """True пока elapsed время внутри окна holding guard (< 24h)."""
    return 0 <= elapsed_sec < HOLDING_GUARD_WINDOW_SEC


def max_holding(elapsed_sec: float, total_supply: int) -> Optional[int]:
    """
    Максимально допустимый баланс получателя при покупке.

    Args:
        elapsed_sec: Время с момента открытия (секунды, >= 0)
        total_supply: Total supply (base units)

    Returns:
        Cap в base units (floor), либо None если guard уже не применяется
        (elapsed >= 24h)

    Raises:
        ValueError: Если elapsed_sec или total_supply отрицательные
    """
    cap_bps = _lookup(HOLDING_CAP_TIERS, elapsed_sec)
    if not is_holding_guard_active(elapsed_sec):
        return None
    return bps_of(total_supply, cap_bps)
