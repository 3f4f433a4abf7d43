"""
Share split — разделение накопленного налога при конверсии

Вся арифметика целочисленная (floor). Остатки от floor всегда уходят во
«вторую» часть пары, поэтому сумма частей равна исходной сумме:

    tokens_for_liquidity + tokens_to_swap + team_amount + marketing_amount
        == token_amount
"""

from dataclasses import dataclass

from taxtoken.core.domain.config import FeeShareConfig
from taxtoken.core.domain.units import validate_amount


@dataclass(frozen=True)
class ConversionSplit:
    """Результат разделения суммы конверсии."""

    token_amount: int

    # Liquidity часть (liquidity_share / total_shares)
    liquidity_portion: int
    tokens_for_liquidity: int  # Остаётся как token-сторона пары
    tokens_to_swap: int  # Продаётся за settlement актив (получает лишнюю единицу)

    # Payout часть
    other_portion: int
    team_amount: int
    marketing_amount: int


def split_conversion(token_amount: int, shares: FeeShareConfig) -> ConversionSplit:
    """
    Разделение суммы конверсии на liquidity и payout части.

    1. liquidity_portion = token_amount * liquidity_share // total_shares
    2. tokens_for_liquidity = liquidity_portion // 2, tokens_to_swap — остаток
    3. team_amount = other_portion * team_share // (team_share + marketing_share),
       marketing_amount — остаток

    Args:
        token_amount: Сумма для конверсии (base units)
        shares: Конфигурация долей

    Returns:
        ConversionSplit

    Raises:
        ValueError: Если token_amount отрицательный
    """
    validate_amount(token_amount)

    liquidity_portion = token_amount * shares.liquidity_share // shares.total_shares
    other_portion = token_amount - liquidity_portion

    tokens_for_liquidity = liquidity_portion // 2
    tokens_to_swap = liquidity_portion - tokens_for_liquidity

    payout_shares = shares.team_share + shares.marketing_share
    team_amount = other_portion * shares.team_share // payout_shares
    marketing_amount = other_portion - team_amount

    return ConversionSplit(
        token_amount=token_amount,
        liquidity_portion=liquidity_portion,
        tokens_for_liquidity=tokens_for_liquidity,
        tokens_to_swap=tokens_to_swap,
        other_portion=other_portion,
        team_amount=team_amount,
        marketing_amount=marketing_amount,
    )
