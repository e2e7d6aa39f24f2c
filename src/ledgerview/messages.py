"""
Decoded message types consumed by the projection layer.

This module defines the closed family of chain messages the projectors
track. Messages arrive already decoded from transactions; each class knows
its protobuf type URL so JSON-decoded transactions can be mapped onto it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from ledgerview.codec.registry import TYPE_KEY
from ledgerview.errors import MessageDecodeError
from ledgerview.models.coin import Coin, coins_from_dicts
from ledgerview.models.gov import VoteOption
from ledgerview.models.staking import CommissionRates, Description


@dataclass
class Message:
    """
    Base class for all decoded messages.

    Subclasses set TYPE_URL and implement from_dict().
    """

    TYPE_URL: ClassVar[str] = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Message:
        raise NotImplementedError


@dataclass
class UnknownMessage(Message):
    """
    A message whose type URL is not tracked.

    Kept so transactions decode completely; the dispatcher ignores it.
    """

    type_url: str = ""
    data: dict[str, Any] = field(default_factory=dict, repr=False)


# ============================================================================
# Governance messages
# ============================================================================


@dataclass
class MsgSubmitProposal(Message):
    """
    Message submitting a governance proposal with an initial deposit.

    The proposal id is not part of the message; it is emitted in the
    submit_proposal event.
    """

    TYPE_URL: ClassVar[str] = "/cosmos.gov.v1beta1.MsgSubmitProposal"

    content: dict[str, Any] = field(default_factory=dict)
    initial_deposit: tuple[Coin, ...] = field(default_factory=tuple)
    proposer: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MsgSubmitProposal:
        return cls(
            content=dict(data["content"]),
            initial_deposit=coins_from_dicts(data.get("initial_deposit")),
            proposer=str(data["proposer"]),
        )


@dataclass
class MsgDeposit(Message):
    """Message adding a deposit to a proposal. Amount is the increment only."""

    TYPE_URL: ClassVar[str] = "/cosmos.gov.v1beta1.MsgDeposit"

    proposal_id: int = 0
    depositor: str = ""
    amount: tuple[Coin, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MsgDeposit:
        return cls(
            proposal_id=int(data["proposal_id"]),
            depositor=str(data["depositor"]),
            amount=coins_from_dicts(data.get("amount")),
        )


@dataclass
class MsgVote(Message):
    """Message casting a vote on a proposal."""

    TYPE_URL: ClassVar[str] = "/cosmos.gov.v1beta1.MsgVote"

    proposal_id: int = 0
    voter: str = ""
    option: VoteOption = VoteOption.UNSPECIFIED

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MsgVote:
        return cls(
            proposal_id=int(data["proposal_id"]),
            voter=str(data["voter"]),
            option=VoteOption.parse(data["option"]),
        )


# ============================================================================
# Staking messages
# ============================================================================


@dataclass
class MsgCreateValidator(Message):
    """
    Message creating a validator with its self delegation.

    The consensus public key is kept in its JSON "Any" form and decoded by
    the staking projector.
    """

    TYPE_URL: ClassVar[str] = "/cosmos.staking.v1beta1.MsgCreateValidator"

    description: Description = field(default_factory=Description)
    commission: CommissionRates = field(
        default_factory=lambda: CommissionRates(rate="0", max_rate="0", max_change_rate="0")
    )
    min_self_delegation: str = "1"
    delegator_address: str = ""
    validator_address: str = ""
    pubkey: dict[str, Any] = field(default_factory=dict)
    value: Coin | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MsgCreateValidator:
        return cls(
            description=Description.from_dict(data.get("description") or {}),
            commission=CommissionRates.from_dict(data["commission"]),
            min_self_delegation=str(data["min_self_delegation"]),
            delegator_address=str(data["delegator_address"]),
            validator_address=str(data["validator_address"]),
            pubkey=dict(data["pubkey"]),
            value=Coin.from_dict(data["value"]) if data.get("value") else None,
        )


# ============================================================================
# Message Registry
# ============================================================================


# Map of type URLs to classes for deserialization
MESSAGE_TYPES: dict[str, type[Message]] = {
    MsgSubmitProposal.TYPE_URL: MsgSubmitProposal,
    MsgDeposit.TYPE_URL: MsgDeposit,
    MsgVote.TYPE_URL: MsgVote,
    MsgCreateValidator.TYPE_URL: MsgCreateValidator,
}


def get_message_type_name(message: Message) -> str:
    """Get the type name for a message."""
    return message.__class__.__name__


def create_message_from_dict(data: dict[str, Any]) -> Message:
    """
    Create a message from its JSON "Any" representation.

    Untracked type URLs yield an UnknownMessage rather than an error, so a
    transaction mixing tracked and untracked messages still decodes.

    Args:
        data: Dictionary carrying "@type" and the message fields

    Returns:
        A Message instance

    Raises:
        MessageDecodeError: If "@type" is missing or a tracked message is malformed
    """
    if TYPE_KEY not in data:
        raise MessageDecodeError(f"message is missing its {TYPE_KEY} field")

    type_url = str(data[TYPE_KEY])
    if type_url not in MESSAGE_TYPES:
        return UnknownMessage(type_url=type_url, data=dict(data))

    message_class = MESSAGE_TYPES[type_url]
    try:
        return message_class.from_dict(data)
    except MessageDecodeError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise MessageDecodeError(f"malformed {message_class.__name__} message", cause=e) from e
