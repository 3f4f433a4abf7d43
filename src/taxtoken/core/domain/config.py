"""
TokenConfig — конфигурация токена, фиксированная на время жизни инстанса

Immutable Pydantic модели. Полная совместимость с JSON Schema
(contracts/schema/token_config.json).
"""

from pydantic import BaseModel, Field, model_validator

from .units import BPS_DENOMINATOR, DEFAULT_DECIMALS, bps_of

ADDRESS_PATTERN = "^0x[0-9a-fA-F]{40}$"


# =============================================================================
# FEE SHARES
# =============================================================================


class FeeShareConfig(BaseModel):
    """
    Разделение налога standard-эпохи на team / marketing / liquidity.

    Инвариант: team_share + marketing_share + liquidity_share == total_shares,
    все доли > 0.
    """

    team_share: int = Field(2, gt=0, description="Доля команды")
    marketing_share: int = Field(1, gt=0, description="Доля маркетинга")
    liquidity_share: int = Field(1, gt=0, description="Доля ликвидности")
    total_shares: int = Field(4, gt=0, description="Знаменатель долей")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_total(self) -> "FeeShareConfig":
        parts = self.team_share + self.marketing_share + self.liquidity_share
        if parts != self.total_shares:
            raise ValueError(
                f"Shares must sum to total_shares: {parts} != {self.total_shares}"
            )
        return self


# =============================================================================
# TOKEN CONFIG
# =============================================================================


class TokenConfig(BaseModel):
    """
    Конфигурация токена на момент конструирования.

    Кошельки stakeholder'ов задаются один раз: setter'ов нет.
    """

    # Метаданные актива
    name: str = Field(..., min_length=1, description="Название актива")
    symbol: str = Field(..., min_length=1, description="Тикер актива")
    decimals: int = Field(DEFAULT_DECIMALS, ge=0, le=36, description="Decimals")
    total_supply: int = Field(..., gt=0, description="Total supply (base units)")

    # Связанный settlement актив (например, WETH)
    settlement_asset: str = Field(..., pattern=ADDRESS_PATTERN)

    # Stakeholder кошельки
    team_wallet: str = Field(..., pattern=ADDRESS_PATTERN)
    marketing_wallet: str = Field(..., pattern=ADDRESS_PATTERN)
    liquidity_wallet: str = Field(
        ..., pattern=ADDRESS_PATTERN, description="Получатель LP токенов"
    )
    mint_to: str = Field(..., pattern=ADDRESS_PATTERN, description="Получатель эмиссии")

    # Порог конверсии (доля supply в bps, 5 = 0.05%)
    conversion_threshold_bps: int = Field(5, gt=0, le=BPS_DENOMINATOR)

    fee_shares: FeeShareConfig = Field(default_factory=FeeShareConfig)

    model_config = {"frozen": True}

    @property
    def conversion_threshold(self) -> int:
        """Порог накопленного налога для запуска конверсии (base units)."""
        return bps_of(self.total_supply, self.conversion_threshold_bps)
