"""
Taxonomy ошибок токена

Все ошибки терминальны для запрошенной операции: локального восстановления нет,
исключение поднимается к вызывающему синхронно, состояние откатывается журналом.
"""


class TaxTokenError(Exception):
    """Базовый класс для всех ошибок токена."""


# =============================================================================
# TRADING WINDOW
# =============================================================================


class TradingClosedError(TaxTokenError):
    """Трансфер между non-exempt сторонами до открытия торговли."""


class AlreadyOpenError(TaxTokenError):
    """Повторная попытка открыть торговлю."""


class TradingNotOpenError(TaxTokenError):
    """Запрос elapsed времени при закрытом окне."""


# =============================================================================
# TRANSFER GUARDS
# =============================================================================


class MaxHoldingExceededError(TaxTokenError):
    """Покупка превышает текущий holding cap получателя."""


class InvalidTransferError(TaxTokenError, ValueError):
    """Некорректные параметры трансфера (нулевая сумма, пустой адрес)."""


class InvalidAddressError(TaxTokenError, ValueError):
    """Адрес не соответствует формату 0x + 40 hex."""


# =============================================================================
# LEDGER
# =============================================================================


class UnauthorizedError(TaxTokenError):
    """Вызов привилегированной операции не администратором."""


class InsufficientBalanceError(TaxTokenError):
    """Баланс отправителя меньше суммы трансфера."""


class InsufficientAllowanceError(TaxTokenError):
    """Allowance spender'а меньше суммы transfer_from."""


# =============================================================================
# CONVERSION / EXCHANGE
# =============================================================================


class ConversionInProgressError(TaxTokenError):
    """Прямой повторный вход в ConversionPipeline."""


class ExchangeError(TaxTokenError):
    """Отказ внешнего router'а (deadline, output, ликвидность)."""


class ExternalConversionError(TaxTokenError):
    """Swap или add_liquidity внутри конверсии завершился ошибкой."""
