"""Journal — atomic выполнение составной операции над несколькими участниками."""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Journaled(Protocol):
    """Участник журнала: умеет снять снапшот и восстановиться из него."""

    def snapshot(self) -> Any: ...

    def restore(self, snapshot: Any) -> None: ...


@contextmanager
def atomic(*participants: Any) -> Iterator[None]:
    """Все-или-ничего для блока операций.

    Снимает снапшоты участников, поддерживающих Journaled; при любом исключении
    восстанавливает их в обратном порядке и пробрасывает исключение дальше.
    Участники без snapshot/restore пропускаются.
    """
    journaled = [p for p in participants if isinstance(p, Journaled)]
    snapshots = [(p, p.snapshot()) for p in journaled]
    try:
        yield
    except BaseException:
        for participant, snapshot in reversed(snapshots):
            participant.restore(snapshot)
        logger.debug("Rolled back %d journaled participant(s)", len(snapshots))
        raise
