"""
Launch state — изменяемое состояние, которым владеет административный компонент

- TradingWindow: disabled → enabled ровно один раз, необратимо
- ConversionState: reentrancy latch и порог конверсии
- ExemptionRegistry: флаги fee-exempt и holding-cap-exempt

Состояние передаётся в interceptor по ссылке, глобального состояния нет.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Set

from taxtoken.errors import AlreadyOpenError, TradingNotOpenError

logger = logging.getLogger(__name__)


# =============================================================================
# TRADING WINDOW
# =============================================================================


@dataclass
class TradingWindow:
    """Окно торговли.

    Переход disabled → enabled происходит ровно один раз; opened_at фиксируется
    в момент перехода и больше не меняется.
    """

    enabled: bool = False
    opened_at: Optional[float] = None

    def open(self, now: float) -> None:
        """Открытие торговли.

        Args:
            now: текущий timestamp (секунды)

        Raises:
            AlreadyOpenError: если окно уже открыто (состояние не меняется)
        """
        if self.enabled:
            raise AlreadyOpenError(f"Trading already opened at {self.opened_at}")
        self.enabled = True
        self.opened_at = now
        logger.info("Trading window opened at %s", now)

    def is_open(self) -> bool:
        return self.enabled

    def elapsed_since_open(self, now: float) -> float:
        """Время с момента открытия (секунды, не меньше 0).

        Raises:
            TradingNotOpenError: если окно ещё не открыто
        """
        if not self.enabled or self.opened_at is None:
            raise TradingNotOpenError("Trading window is not open")
        return max(now - self.opened_at, 0.0)


# =============================================================================
# CONVERSION STATE
# =============================================================================


@dataclass
class ConversionState:
    """Состояние конверсии.

    in_progress — reentrancy latch: True только на время одного выполнения
    ConversionPipeline, сбрасывается на любом пути выхода.
    """

    threshold_balance: int
    in_progress: bool = False

    def __post_init__(self) -> None:
        if self.threshold_balance < 0:
            raise ValueError(
                f"Conversion threshold cannot be negative: {self.threshold_balance}"
            )


# =============================================================================
# EXEMPTIONS
# =============================================================================


class ExemptionKind(str, Enum):
    """Тип exemption флага."""

    FEE = "fee"
    HOLDING_CAP = "holding_cap"


@dataclass
class ExemptionRegistry:
    """Флаги exemption по аккаунтам.

    Мутируются только администратором (gating выполняет TaxToken).
    Setter'ы идемпотентны.
    """

    fee_exempt: Set[str] = field(default_factory=set)
    holding_cap_exempt: Set[str] = field(default_factory=set)

    def _bucket(self, kind: ExemptionKind) -> Set[str]:
        if kind == ExemptionKind.FEE:
            return self.fee_exempt
        return self.holding_cap_exempt

    def set(self, kind: ExemptionKind, account: str, exempt: bool) -> bool:
        """Установка флага.

        Returns:
            True если состояние изменилось
        """
        bucket = self._bucket(kind)
        before = account in bucket
        if exempt:
            bucket.add(account)
        else:
            bucket.discard(account)
        return before != exempt

    def is_fee_exempt(self, account: str) -> bool:
        return account in self.fee_exempt

    def is_holding_cap_exempt(self, account: str) -> bool:
        return account in self.holding_cap_exempt
