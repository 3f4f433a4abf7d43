"""Gatekeeper — система гейтов для допуска трансфера к исполнению.

Фиксированный порядок: GATE 0 → GATE 1 → GATE 2 → GATE 3.
"""

from .gates import (
    Gate00Result,
    Gate00TradingWindow,
    Gate01MaxHolding,
    Gate01Result,
    Gate02ConversionTrigger,
    Gate02Result,
    Gate03Fee,
    Gate03Result,
)

__all__ = [
    "Gate00TradingWindow",
    "Gate00Result",
    "Gate01MaxHolding",
    "Gate01Result",
    "Gate02ConversionTrigger",
    "Gate02Result",
    "Gate03Fee",
    "Gate03Result",
]
