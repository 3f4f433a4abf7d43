"""
Units — единицы времени, базовые единицы токена и basis points

Единственный допустимый способ преобразований между:
- целыми токенами и base units (10^decimals)
- долями в basis points и абсолютными суммами
- timestamp'ами и elapsed временем (секунды)

Вся арифметика над суммами целочисленная (floor division), float для сумм
ЗАПРЕЩЁН: ни одна единица не должна теряться или дублироваться.
"""

from typing import Final


# =============================================================================
# ВРЕМЯ (секунды)
# =============================================================================

ONE_MINUTE_SEC: Final[int] = 60
ONE_HOUR_SEC: Final[int] = 60 * ONE_MINUTE_SEC
ONE_DAY_SEC: Final[int] = 24 * ONE_HOUR_SEC


# =============================================================================
# ДОЛИ
# =============================================================================

# Знаменатель для basis points (1 bps = 0.01%)
BPS_DENOMINATOR: Final[int] = 10_000

# Знаменатель для процентов налога
PERCENT_DENOMINATOR: Final[int] = 100

# Decimals по умолчанию (как у большинства ERC-20 активов)
DEFAULT_DECIMALS: Final[int] = 18


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def to_base_units(tokens: int, decimals: int = DEFAULT_DECIMALS) -> int:
    """
    Конверсия: целые токены → base units.

    Args:
        tokens: Количество целых токенов
        decimals: Decimals актива

    Returns:
        tokens * 10^decimals

    Raises:
        ValueError: Если tokens или decimals отрицательные
    """
    if tokens < 0:
        raise ValueError(f"Token amount cannot be negative: {tokens}")
    if decimals < 0:
        raise ValueError(f"Decimals cannot be negative: {decimals}")
    return tokens * 10**decimals


def bps_of(amount: int, bps: int) -> int:
    """
    Доля суммы в basis points (floor).

    Args:
        amount: Базовая сумма (base units)
        bps: Доля в basis points

    Returns:
        amount * bps // 10_000
    """
    validate_amount(amount)
    if bps < 0:
        raise ValueError(f"Basis points cannot be negative: {bps}")
    return amount * bps // BPS_DENOMINATOR


def percent_of(amount: int, percent: int) -> int:
    """
    Доля суммы в процентах (floor).

    Используется для налога: fee = amount * tax_percent // 100.
    """
    validate_amount(amount)
    if not 0 <= percent <= PERCENT_DENOMINATOR:
        raise ValueError(f"Percent must be within [0, 100]: {percent}")
    return amount * percent // PERCENT_DENOMINATOR


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_amount(amount: int) -> None:
    """
    Проверка, что сумма — неотрицательное целое.

    Raises:
        ValueError: Если сумма отрицательная или не int
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"Amount must be an integer number of base units: {amount!r}")
    if amount < 0:
        raise ValueError(f"Amount cannot be negative: {amount}")
