"""
BlockClock — время исполнения, зафиксированное на одну atomic операцию

Внутри одной операции (трансфер вместе с вложенной конверсией и вызовами
router'а) все участники видят один и тот же timestamp, как в одном блоке.
Поэтому deadline = «сейчас» никогда не истекает внутри своей операции.
"""

import time
from contextlib import contextmanager, nullcontext
from typing import Callable, ContextManager, Iterator, Optional


class BlockClock:
    """Источник времени с поддержкой pinning (вложенный pin сохраняет внешний)."""

    def __init__(self, source: Callable[[], float] = time.time):
        self._source = source
        self._pinned: Optional[float] = None
        self._depth = 0

    def __call__(self) -> float:
        if self._pinned is not None:
            return self._pinned
        return self._source()

    @contextmanager
    def pinned(self) -> Iterator[float]:
        if self._depth == 0:
            self._pinned = self._source()
        self._depth += 1
        try:
            yield self._pinned
        finally:
            self._depth -= 1
            if self._depth == 0:
                self._pinned = None


# Общий экземпляр по умолчанию для токена и router'а
SYSTEM_CLOCK = BlockClock()


def pinned(clock: Callable[[], float]) -> ContextManager:
    """pin для BlockClock, no-op для произвольного callable."""
    if isinstance(clock, BlockClock):
        return clock.pinned()
    return nullcontext()
