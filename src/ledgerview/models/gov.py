"""
Governance records: proposals, deposits and votes.

Records are immutable values built by the GovernanceProjector and handed
to a StateSink. Every address field is already in the target network's
encoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from ledgerview.errors import MessageDecodeError
from ledgerview.models.coin import Coin

if TYPE_CHECKING:
    from ledgerview.codec.content import ProposalContent

# Schema-version marker written with every deposit and vote.
# TODO: confirm with downstream consumers whether this becomes a real version field.
DEPOSIT_SCHEMA_VERSION = 1
VOTE_SCHEMA_VERSION = 1


class VoteOption(Enum):
    """
    Vote options, valued by their chain enum names.

    Votes are stored under these names (``VOTE_OPTION_YES`` rather than
    ``Yes``), the same text the chain prints for a vote option, so the
    stored column can be compared with chain queries without mapping.
    """

    UNSPECIFIED = "VOTE_OPTION_UNSPECIFIED"
    YES = "VOTE_OPTION_YES"
    ABSTAIN = "VOTE_OPTION_ABSTAIN"
    NO = "VOTE_OPTION_NO"
    NO_WITH_VETO = "VOTE_OPTION_NO_WITH_VETO"

    @classmethod
    def parse(cls, value: str | int | VoteOption) -> VoteOption:
        """
        Parse a vote option from its chain name, short name or number.

        Accepts "VOTE_OPTION_YES", "Yes", "yes", "NoWithVeto", 1, "1".

        Raises:
            MessageDecodeError: If the value is not a known option
        """
        if isinstance(value, VoteOption):
            return value

        text = str(value).strip()
        if text.isdigit():
            members = list(cls)
            number = int(text)
            if number < len(members):
                return members[number]
            raise MessageDecodeError(f"unknown vote option: {value!r}")

        key = text.upper().replace("VOTE_OPTION_", "")
        key = key.replace("_", "")
        for option in cls:
            if option.name.replace("_", "") == key:
                return option
        raise MessageDecodeError(f"unknown vote option: {value!r}")


@dataclass(frozen=True)
class Proposal:
    """A governance proposal, recorded once at submission."""

    proposal_id: int
    proposal_route: str
    proposal_type: str
    content: ProposalContent
    status: str
    submit_time: datetime
    deposit_end_time: datetime
    voting_start_time: datetime
    voting_end_time: datetime
    proposer_address: str


@dataclass(frozen=True)
class Deposit:
    """
    A depositor's cumulative deposit on a proposal.

    ``height`` is the block the amount was read at. A row is only replaced
    by one observed at the same or a later height.
    """

    proposal_id: int
    depositor_address: str
    amount: tuple[Coin, ...]
    height: int
    version: int = DEPOSIT_SCHEMA_VERSION


@dataclass(frozen=True)
class Vote:
    """A voter's latest choice on a proposal."""

    proposal_id: int
    voter_address: str
    option: VoteOption
    version: int = VOTE_SCHEMA_VERSION
