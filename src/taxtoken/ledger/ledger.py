"""
Ledger — базовые примитивы учёта баланса

Внешний коллаборатор для interceptor'а: хранение балансов, supply, allowances,
raw transfer без fee-логики, gating администратора и event log.

Поддерживает snapshot/restore для журнала (atomic откат составной операции).
"""

import copy
from dataclasses import dataclass
from typing import Dict, List, Tuple

from taxtoken.core.domain.events import Approval, Transfer
from taxtoken.core.domain.units import validate_amount
from taxtoken.errors import (
    InsufficientAllowanceError,
    InsufficientBalanceError,
    InvalidTransferError,
    UnauthorizedError,
)

# Адрес-источник эмиссии в event log
ZERO_ADDRESS = "0x" + "0" * 40


@dataclass(frozen=True)
class LedgerSnapshot:
    """Снапшот ledger для отката."""

    balances: Dict[str, int]
    allowances: Dict[Tuple[str, str], int]
    total_supply: int
    event_count: int


class Ledger:
    """Ledger одного fungible актива.

    Инвариант: сумма всех балансов == total_supply.
    """

    def __init__(self, administrator: str):
        if not administrator:
            raise ValueError("Administrator address must be non-empty")
        self.administrator = administrator
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}
        self._total_supply = 0
        self.events: List[object] = []

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def total_supply(self) -> int:
        return self._total_supply

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def holders(self) -> Dict[str, int]:
        """Копия ненулевых балансов."""
        return {account: bal for account, bal in self._balances.items() if bal > 0}

    # -------------------------------------------------------------------------
    # Изменение
    # -------------------------------------------------------------------------

    def mint(self, account: str, amount: int) -> None:
        validate_amount(amount)
        if not account:
            raise InvalidTransferError("Cannot mint to an empty address")
        self._balances[account] = self.balance_of(account) + amount
        self._total_supply += amount
        self.emit(Transfer(sender=ZERO_ADDRESS, recipient=account, amount=amount))

    def raw_transfer(self, sender: str, recipient: str, amount: int) -> None:
        """Перемещение баланса без fee-логики.

        Raises:
            InsufficientBalanceError: если баланса отправителя недостаточно
        """
        validate_amount(amount)
        balance = self.balance_of(sender)
        if balance < amount:
            raise InsufficientBalanceError(
                f"Balance of {sender} is {balance}, transfer requires {amount}"
            )
        self._balances[sender] = balance - amount
        self._balances[recipient] = self.balance_of(recipient) + amount
        self.emit(Transfer(sender=sender, recipient=recipient, amount=amount))

    def approve(self, owner: str, spender: str, amount: int) -> None:
        validate_amount(amount)
        if not owner or not spender:
            raise InvalidTransferError("Approve requires non-empty owner and spender")
        self._allowances[(owner, spender)] = amount
        self.emit(Approval(owner=owner, spender=spender, amount=amount))

    def spend_allowance(self, owner: str, spender: str, amount: int) -> None:
        """Списание allowance перед transfer_from.

        Raises:
            InsufficientAllowanceError: если allowance недостаточно
        """
        current = self.allowance(owner, spender)
        if current < amount:
            raise InsufficientAllowanceError(
                f"Allowance of {spender} over {owner} is {current}, requires {amount}"
            )
        self._allowances[(owner, spender)] = current - amount

    def emit(self, event: object) -> None:
        self.events.append(event)

    # -------------------------------------------------------------------------
    # Авторизация
    # -------------------------------------------------------------------------

    def require_administrator(self, caller: str) -> None:
        """onlyAdministrator gating.

        Raises:
            UnauthorizedError: если caller не администратор
        """
        if caller != self.administrator:
            raise UnauthorizedError(f"{caller} is not the administrator")

    # -------------------------------------------------------------------------
    # Журнал
    # -------------------------------------------------------------------------

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            balances=dict(self._balances),
            allowances=dict(self._allowances),
            total_supply=self._total_supply,
            event_count=len(self.events),
        )

    def restore(self, snapshot: LedgerSnapshot) -> None:
        self._balances = copy.copy(snapshot.balances)
        self._allowances = copy.copy(snapshot.allowances)
        self._total_supply = snapshot.total_supply
        del self.events[snapshot.event_count:]
