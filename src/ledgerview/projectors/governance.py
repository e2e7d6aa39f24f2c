"""
Governance projector.

Projects proposal submissions, deposits and votes. Submissions are
corroborated by the submit_proposal event and a height-pinned proposal
query; deposits by the chain's deposit list for the proposal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ledgerview.codec.content import unpack_content
from ledgerview.config import AddressPrefixes
from ledgerview.errors import AttributeDecodeError, DepositNotFoundError
from ledgerview.messages import MsgDeposit, MsgSubmitProposal, MsgVote
from ledgerview.models.gov import Deposit, Proposal, Vote
from ledgerview.projectors.base import DomainProjector, Route

if TYPE_CHECKING:
    from ledgerview.messages import Message
    from ledgerview.persistence.store import StateSink
    from ledgerview.source.base import ChainStateAccessor
    from ledgerview.tx import Tx

EVENT_SUBMIT_PROPOSAL = "submit_proposal"
ATTRIBUTE_PROPOSAL_ID = "proposal_id"

MAX_UINT64 = 2**64 - 1


def parse_proposal_id(value: str, height: int) -> int:
    """
    Parse a proposal id attribute as an unsigned 64-bit integer.

    Raises:
        AttributeDecodeError: If the value is not a decimal uint64
    """
    if not value.isascii() or not value.isdigit() or int(value) > MAX_UINT64:
        raise AttributeDecodeError(f"invalid proposal id {value!r} at height {height}")
    return int(value)


class GovernanceProjector(DomainProjector):
    """
    Projects governance messages into proposals, deposits and votes.

    Example:
        projector = GovernanceProjector(sink, source, AddressPrefixes.for_account_prefix("like"))
        projector.handle_msg_vote(tx, msg)
    """

    MODULE = "gov"

    def __init__(
        self,
        sink: StateSink,
        source: ChainStateAccessor,
        prefixes: AddressPrefixes | None = None,
        logger: Any = None,
    ) -> None:
        super().__init__(sink, prefixes, logger)
        self.source = source

    def routes(self) -> dict[type[Message], Route]:
        return {
            MsgSubmitProposal: lambda index, msg, tx: self.handle_msg_submit_proposal(tx, index, msg),
            MsgDeposit: lambda index, msg, tx: self.handle_msg_deposit(tx, msg),
            MsgVote: lambda index, msg, tx: self.handle_msg_vote(tx, msg),
        }

    def handle_msg_submit_proposal(self, tx: Tx, index: int, msg: MsgSubmitProposal) -> None:
        """
        Store a newly submitted proposal and its initial deposit.

        The proposal id comes from the submit_proposal event of the message;
        status and timestamps come from the chain at the transaction height.

        Raises:
            LookupFailedError: If the event, the attribute or the proposal is missing
            DecodeError: If the id, the content or the proposer cannot be decoded
        """
        event = tx.find_event_by_type(index, EVENT_SUBMIT_PROPOSAL)
        proposal_id = parse_proposal_id(tx.find_attribute_by_key(event, ATTRIBUTE_PROPOSAL_ID), tx.height)

        chain_proposal = self.source.proposal(tx.height, proposal_id)
        subject = f"proposal {proposal_id}"
        with self.decoding("content", tx.height, subject):
            content = unpack_content(chain_proposal.content)
        with self.decoding("proposer address", tx.height, subject):
            proposer = self.to_account_address(msg.proposer)

        proposal = Proposal(
            proposal_id=proposal_id,
            proposal_route=content.proposal_route,
            proposal_type=content.proposal_type,
            content=content,
            status=chain_proposal.status,
            submit_time=chain_proposal.submit_time,
            deposit_end_time=chain_proposal.deposit_end_time,
            voting_start_time=chain_proposal.voting_start_time,
            voting_end_time=chain_proposal.voting_end_time,
            proposer_address=proposer,
        )
        deposit = Deposit(
            proposal_id=proposal_id,
            depositor_address=proposer,
            amount=msg.initial_deposit,
            height=tx.height,
        )

        self.sink.save_proposals([proposal])
        self.sink.save_deposits([deposit])

        self.logger.info(
            "proposal_submitted",
            height=tx.height,
            proposal_id=proposal_id,
            proposer=proposer,
            proposal_type=proposal.proposal_type,
            status=proposal.status,
        )

    def handle_msg_deposit(self, tx: Tx, msg: MsgDeposit) -> None:
        """
        Store the depositor's cumulative deposit as reported by the chain.

        Raises:
            DepositNotFoundError: If the chain has no deposit from the depositor
        """
        with self.decoding("depositor address", tx.height, f"proposal {msg.proposal_id}"):
            depositor = self.to_account_address(msg.depositor)

        deposits = self.source.proposal_deposits(tx.height, msg.proposal_id)
        match = next((d for d in deposits if d.depositor == msg.depositor), None)
        if match is None:
            raise DepositNotFoundError(
                f"no deposit from {msg.depositor} found for proposal {msg.proposal_id} at height {tx.height}",
                height=tx.height,
            )

        self.sink.save_deposits(
            [
                Deposit(
                    proposal_id=msg.proposal_id,
                    depositor_address=depositor,
                    amount=match.amount,
                    height=tx.height,
                )
            ]
        )

        self.logger.info(
            "proposal_deposit",
            height=tx.height,
            proposal_id=msg.proposal_id,
            depositor=depositor,
        )

    def handle_msg_vote(self, tx: Tx, msg: MsgVote) -> None:
        """Store a vote. Votes are self-sufficient; no chain query is made."""
        with self.decoding("voter address", tx.height, f"proposal {msg.proposal_id}"):
            voter = self.to_account_address(msg.voter)

        self.sink.save_vote(Vote(proposal_id=msg.proposal_id, voter_address=voter, option=msg.option))

        self.logger.info(
            "proposal_vote",
            height=tx.height,
            proposal_id=msg.proposal_id,
            voter=voter,
            option=msg.option.value,
        )
