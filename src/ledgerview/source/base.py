"""
ChainStateAccessor interface.

This module defines the abstract interface for point-in-time reads of chain
state. Every query is pinned to a height so a projection is deterministic
regardless of how far the chain has progressed since.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ledgerview.models.chain import AccountBalance, ChainDeposit, ChainProposal
    from ledgerview.models.coin import Coin


class ChainStateAccessor(ABC):
    """Abstract interface for height-pinned chain state queries."""

    # ========== Bank Queries ==========

    @abstractmethod
    def get_balances(self, addresses: list[str], height: int) -> list[AccountBalance]:
        """
        Get the balances of several accounts.

        Args:
            addresses: Account addresses in native encoding
            height: Height to query at

        Returns:
            One AccountBalance per address, in input order

        Raises:
            ChainStateNotFoundError: If the height is unknown
        """
        pass

    @abstractmethod
    def get_supply(self, height: int, denom: str) -> Coin:
        """
        Get the total supply of a denomination.

        Raises:
            ChainStateNotFoundError: If the height is unknown
        """
        pass

    @abstractmethod
    def get_account_balance(self, address: str, height: int) -> tuple[Coin, ...]:
        """
        Get the balance of a single account.

        Raises:
            ChainStateNotFoundError: If the height is unknown
        """
        pass

    # ========== Governance Queries ==========

    @abstractmethod
    def proposal(self, height: int, proposal_id: int) -> ChainProposal:
        """
        Get a proposal as it was at a height.

        Raises:
            ChainStateNotFoundError: If the height or proposal is unknown
        """
        pass

    @abstractmethod
    def proposal_deposits(self, height: int, proposal_id: int) -> list[ChainDeposit]:
        """
        Get all deposits on a proposal as they were at a height.

        Each entry carries the depositor's cumulative amount.

        Raises:
            ChainStateNotFoundError: If the height is unknown
        """
        pass
