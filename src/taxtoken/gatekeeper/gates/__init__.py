"""Gates — индивидуальные гейты трансфера.

- GATE 0: Trading window
- GATE 1: Max holding (anti-sniper, только покупки)
- GATE 2: Conversion trigger (только продажи)
- GATE 3: Fee
"""

from .gate_00_trading_window import Gate00Result, Gate00TradingWindow
from .gate_01_max_holding import Gate01MaxHolding, Gate01Result
from .gate_02_conversion_trigger import Gate02ConversionTrigger, Gate02Result
from .gate_03_fee import Gate03Fee, Gate03Result

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
