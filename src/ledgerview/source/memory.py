"""
In-memory chain state.

Useful for testing and for replaying fixtures: state is recorded per height
and a query at height H sees the most recent value recorded at or below H.
"""

from __future__ import annotations

import bisect
import threading
from typing import Any

from ledgerview.errors import ChainStateNotFoundError
from ledgerview.models.chain import AccountBalance, ChainDeposit, ChainProposal
from ledgerview.models.coin import Coin
from ledgerview.source.base import ChainStateAccessor


class _Versioned:
    """Values of one key, indexed by the height they were recorded at."""

    def __init__(self) -> None:
        self._heights: list[int] = []
        self._values: list[Any] = []

    def put(self, height: int, value: Any) -> None:
        pos = bisect.bisect_left(self._heights, height)
        if pos < len(self._heights) and self._heights[pos] == height:
            self._values[pos] = value
        else:
            self._heights.insert(pos, height)
            self._values.insert(pos, value)

    def at(self, height: int, default: Any = None) -> Any:
        pos = bisect.bisect_right(self._heights, height)
        if pos == 0:
            return default
        return self._values[pos - 1]


class InMemoryChainState(ChainStateAccessor):
    """
    In-memory implementation of ChainStateAccessor.

    Heights above the latest recorded height (or below 1) are unknown and
    fail with ChainStateNotFoundError.
    """

    def __init__(self) -> None:
        self._balances: dict[str, _Versioned] = {}
        self._supply: dict[str, _Versioned] = {}
        self._proposals: dict[int, _Versioned] = {}
        self._deposits: dict[int, _Versioned] = {}
        self._latest_height = 0
        self._lock = threading.Lock()

    # ========== Recording ==========

    def _record(self, table: dict[Any, _Versioned], key: Any, height: int, value: Any) -> None:
        with self._lock:
            table.setdefault(key, _Versioned()).put(height, value)
            self._latest_height = max(self._latest_height, height)

    def set_balance(self, address: str, coins: list[Coin] | tuple[Coin, ...], height: int) -> None:
        self._record(self._balances, address, height, tuple(coins))

    def set_supply(self, coin: Coin, height: int) -> None:
        self._record(self._supply, coin.denom, height, coin)

    def set_proposal(self, proposal: ChainProposal, height: int) -> None:
        self._record(self._proposals, proposal.proposal_id, height, proposal)

    def set_deposits(self, proposal_id: int, deposits: list[ChainDeposit], height: int) -> None:
        self._record(self._deposits, proposal_id, height, list(deposits))

    def _check_height(self, height: int) -> None:
        if height < 1 or height > self._latest_height:
            raise ChainStateNotFoundError(
                f"height {height} is not available (latest {self._latest_height})",
                height=height,
            )

    # ========== ChainStateAccessor ==========

    def get_balances(self, addresses: list[str], height: int) -> list[AccountBalance]:
        with self._lock:
            self._check_height(height)
            return [
                AccountBalance(
                    address=address,
                    balance=self._balances[address].at(height, ()) if address in self._balances else (),
                    height=height,
                )
                for address in addresses
            ]

    def get_supply(self, height: int, denom: str) -> Coin:
        with self._lock:
            self._check_height(height)
            if denom not in self._supply:
                return Coin(denom=denom, amount="0")
            coin: Coin = self._supply[denom].at(height, Coin(denom=denom, amount="0"))
            return coin

    def get_account_balance(self, address: str, height: int) -> tuple[Coin, ...]:
        return self.get_balances([address], height)[0].balance

    def proposal(self, height: int, proposal_id: int) -> ChainProposal:
        with self._lock:
            self._check_height(height)
            versions = self._proposals.get(proposal_id)
            proposal = versions.at(height) if versions is not None else None
            if proposal is None:
                raise ChainStateNotFoundError(
                    f"proposal {proposal_id} not found at height {height}",
                    height=height,
                )
            return proposal  # type: ignore[no-any-return]

    def proposal_deposits(self, height: int, proposal_id: int) -> list[ChainDeposit]:
        with self._lock:
            self._check_height(height)
            versions = self._deposits.get(proposal_id)
            if versions is None:
                return []
            return list(versions.at(height, []))
