"""Shared pytest fixtures for projector and sink tests."""

from __future__ import annotations

import base64
import hashlib
from collections.abc import Generator
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from ledgerview.address import encode_address
from ledgerview.codec.content import TextProposal
from ledgerview.config import AddressPrefixes, reset_projector_config
from ledgerview.models.chain import ChainProposal
from ledgerview.models.gov import Proposal
from ledgerview.models.staking import Description, Validator, ValidatorDescription
from ledgerview.persistence.connection import close_all_pools
from ledgerview.persistence.memory import InMemoryStateSink
from ledgerview.source.memory import InMemoryChainState
from ledgerview.tx import EventAttribute, StringEvent, Tx, TxLog


@pytest.fixture(autouse=True)
def reset_shared_state() -> Generator[None, None, None]:
    """Close shared connection pools and reset config between tests for isolation."""
    yield
    close_all_pools()
    reset_projector_config()


# =============================================================================
# Addresses and keys
# =============================================================================

ALICE_BYTES = bytes(range(1, 21))
BOB_BYTES = bytes(range(101, 121))
OPERATOR_BYTES = bytes(range(41, 61))

ED25519_KEY = bytes(range(32))
ED25519_KEY_B64 = base64.b64encode(ED25519_KEY).decode("ascii")
ED25519_CONSENSUS_BYTES = hashlib.sha256(ED25519_KEY).digest()[:20]


def cosmos_address(payload: bytes) -> str:
    """Encode a payload under the source chain's account prefix."""
    return encode_address("cosmos", payload)


def like_address(payload: bytes) -> str:
    """Encode a payload under the target network's account prefix."""
    return encode_address("like", payload)


@pytest.fixture
def prefixes() -> AddressPrefixes:
    return AddressPrefixes.for_account_prefix("like")


# =============================================================================
# Collaborators
# =============================================================================


@pytest.fixture
def sink() -> InMemoryStateSink:
    return InMemoryStateSink()


@pytest.fixture
def chain_state() -> InMemoryChainState:
    return InMemoryChainState()


@pytest.fixture
def logger() -> MagicMock:
    """Stand-in structured logger; tests assert on the emitted events."""
    mock = MagicMock()
    mock.bind.return_value = mock
    return mock


# =============================================================================
# Builders
# =============================================================================

T0 = datetime(2021, 6, 1, 10, 0, tzinfo=timezone.utc)
T1 = datetime(2021, 6, 15, 10, 0, tzinfo=timezone.utc)
T2 = datetime(2021, 6, 29, 10, 0, tzinfo=timezone.utc)

TEXT_CONTENT = {
    "@type": "/cosmos.gov.v1beta1.TextProposal",
    "title": "Raise the bar",
    "description": "A signalling proposal",
}


def make_chain_proposal(
    proposal_id: int = 42,
    status: str = "PROPOSAL_STATUS_VOTING_PERIOD",
    content: dict[str, object] | None = None,
) -> ChainProposal:
    return ChainProposal(
        proposal_id=proposal_id,
        content=dict(content or TEXT_CONTENT),
        status=status,
        submit_time=T0,
        deposit_end_time=T1,
        voting_start_time=T1,
        voting_end_time=T2,
    )


def make_tx(
    height: int = 100,
    events: list[tuple[str, list[tuple[str, str]]]] | None = None,
    msg_index: int = 0,
    messages: list[object] | None = None,
) -> Tx:
    """Build a successful transaction whose message at msg_index emitted the given events."""
    string_events = tuple(
        StringEvent(type=event_type, attributes=tuple(EventAttribute(k, v) for k, v in attributes))
        for event_type, attributes in (events or [("message", [("action", "test")])])
    )
    return Tx(
        height=height,
        hash="A1B2C3",
        messages=list(messages or []),  # type: ignore[arg-type]
        logs=[TxLog(msg_index=msg_index, events=string_events)],
    )


# =============================================================================
# Stored records
# =============================================================================


def make_proposal(status: str = "PROPOSAL_STATUS_DEPOSIT_PERIOD") -> Proposal:
    return Proposal(
        proposal_id=1,
        proposal_route="gov",
        proposal_type="Text",
        content=TextProposal(title="Title", description="Body"),
        status=status,
        submit_time=T0,
        deposit_end_time=T1,
        voting_start_time=T1,
        voting_end_time=T2,
        proposer_address="like1proposer",
    )


def make_validator(height: int, max_rate: str = "0.2") -> Validator:
    return Validator(
        consensus_address="likevalcons1abc",
        operator_address="likevaloper1abc",
        consensus_pubkey="PubKeyEd25519{00}",
        self_delegate_address="like1abc",
        max_change_rate="0.01",
        max_rate=max_rate,
        height=height,
    )


def make_description(height: int, moniker: str) -> ValidatorDescription:
    return ValidatorDescription(
        operator_address="likevaloper1abc",
        description=Description(moniker=moniker),
        avatar_url="",
        height=height,
    )
