"""Router interface — внешний exchange, потребляемый ConversionPipeline."""

from typing import Any, List, Protocol, Sequence, Tuple


class TokenHandle(Protocol):
    """Что router'у нужно от токена, чтобы забирать и отдавать токены пула."""

    address: str

    def balance_of(self, account: str) -> int: ...

    def transfer(self, sender: str, recipient: str, amount: int) -> Any: ...

    def transfer_from(
        self, spender: str, owner: str, recipient: str, amount: int
    ) -> Any: ...

    def receive_native(self, sender: str, amount: int) -> None: ...


class Router(Protocol):
    """Router пары token / settlement актив.

    Все вызовы синхронные. deadline сравнивается с текущим временем router'а;
    просроченный вызов отклоняется целиком.
    """

    address: str
    settlement_asset: str

    def create_pair(self, token: TokenHandle, settlement_asset: str) -> str: ...

    def pair_address(self, asset_a: str, asset_b: str) -> str: ...

    def swap_exact_in_for_out(
        self,
        sender: str,
        amount_in: int,
        min_amount_out: int,
        path: Sequence[str],
        recipient: str,
        deadline: float,
    ) -> List[int]: ...

    def add_liquidity(
        self,
        sender: str,
        asset_a: str,
        asset_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        lp_recipient: str,
        deadline: float,
    ) -> Tuple[int, int, int]: ...
