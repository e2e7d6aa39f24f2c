"""
Chain-side types returned by a ChainStateAccessor.

These mirror the chain's query responses. They are inputs to the
projectors, never stored as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ledgerview.models.coin import Coin, coins_from_dicts, parse_time


@dataclass(frozen=True)
class AccountBalance:
    """Balance of one account at a height."""

    address: str
    balance: tuple[Coin, ...]
    height: int


@dataclass(frozen=True)
class ChainProposal:
    """
    A governance proposal as queried from the chain at a height.

    Attributes:
        proposal_id: Numeric proposal id
        content: Raw polymorphic content (JSON object carrying "@type")
        status: Status name as reported by the chain
        submit_time: When the proposal was submitted
        deposit_end_time: End of the deposit period
        voting_start_time: Start of the voting period
        voting_end_time: End of the voting period
        total_deposit: Total deposit at the queried height
    """

    proposal_id: int
    content: dict[str, Any]
    status: str
    submit_time: datetime
    deposit_end_time: datetime
    voting_start_time: datetime
    voting_end_time: datetime
    total_deposit: tuple[Coin, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChainProposal:
        """Create a proposal from the chain's REST/JSON form."""
        return cls(
            proposal_id=int(data["proposal_id"]),
            content=dict(data["content"]),
            status=str(data["status"]),
            submit_time=parse_time(data["submit_time"]),
            deposit_end_time=parse_time(data["deposit_end_time"]),
            voting_start_time=parse_time(data["voting_start_time"]),
            voting_end_time=parse_time(data["voting_end_time"]),
            total_deposit=coins_from_dicts(data.get("total_deposit")),
        )


@dataclass(frozen=True)
class ChainDeposit:
    """A depositor's cumulative deposit on a proposal, in native encoding."""

    proposal_id: int
    depositor: str
    amount: tuple[Coin, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChainDeposit:
        """Create a deposit from the chain's REST/JSON form."""
        return cls(
            proposal_id=int(data["proposal_id"]),
            depositor=str(data["depositor"]),
            amount=coins_from_dicts(data.get("amount")),
        )
