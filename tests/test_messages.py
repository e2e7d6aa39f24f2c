"""Tests for decoded message types and the type URL registry."""

import pytest

from ledgerview.errors import MessageDecodeError
from ledgerview.messages import (
    MESSAGE_TYPES,
    MsgCreateValidator,
    MsgDeposit,
    MsgSubmitProposal,
    MsgVote,
    UnknownMessage,
    create_message_from_dict,
    get_message_type_name,
)
from ledgerview.models.coin import Coin
from ledgerview.models.gov import VoteOption
from tests.conftest import ED25519_KEY_B64, TEXT_CONTENT


class TestCreateMessageFromDict:
    """Tests for create_message_from_dict()."""

    def test_submit_proposal(self) -> None:
        msg = create_message_from_dict(
            {
                "@type": "/cosmos.gov.v1beta1.MsgSubmitProposal",
                "content": TEXT_CONTENT,
                "initial_deposit": [{"denom": "nanolike", "amount": "1000"}],
                "proposer": "cosmos1proposer",
            }
        )
        assert isinstance(msg, MsgSubmitProposal)
        assert msg.initial_deposit == (Coin("nanolike", "1000"),)
        assert msg.content["title"] == "Raise the bar"

    def test_deposit(self) -> None:
        msg = create_message_from_dict(
            {
                "@type": "/cosmos.gov.v1beta1.MsgDeposit",
                "proposal_id": "3",
                "depositor": "cosmos1depositor",
                "amount": [{"denom": "nanolike", "amount": "5"}],
            }
        )
        assert isinstance(msg, MsgDeposit)
        assert msg.proposal_id == 3

    def test_create_validator(self) -> None:
        msg = create_message_from_dict(
            {
                "@type": "/cosmos.staking.v1beta1.MsgCreateValidator",
                "description": {"moniker": "node-1", "identity": "ABCDEF0123456789"},
                "commission": {"rate": "0.1", "max_rate": "0.2", "max_change_rate": "0.01"},
                "min_self_delegation": "1",
                "delegator_address": "cosmos1delegator",
                "validator_address": "cosmosvaloper1operator",
                "pubkey": {"@type": "/cosmos.crypto.ed25519.PubKey", "key": ED25519_KEY_B64},
                "value": {"denom": "nanolike", "amount": "1000000"},
            }
        )
        assert isinstance(msg, MsgCreateValidator)
        assert msg.description.moniker == "node-1"
        assert msg.commission.max_change_rate == "0.01"
        assert msg.value == Coin("nanolike", "1000000")

    def test_create_validator_null_description_fields(self) -> None:
        """JSON nulls in the description become empty strings."""
        msg = create_message_from_dict(
            {
                "@type": "/cosmos.staking.v1beta1.MsgCreateValidator",
                "description": {"moniker": "node-1", "identity": None, "website": None, "details": 7},
                "commission": {"rate": "0.1", "max_rate": "0.2", "max_change_rate": "0.01"},
                "min_self_delegation": "1",
                "delegator_address": "cosmos1delegator",
                "validator_address": "cosmosvaloper1operator",
                "pubkey": {"@type": "/cosmos.crypto.ed25519.PubKey", "key": ED25519_KEY_B64},
                "value": {"denom": "nanolike", "amount": "1000000"},
            }
        )
        assert isinstance(msg, MsgCreateValidator)
        assert msg.description.identity == ""
        assert msg.description.website == ""
        assert msg.description.security_contact == ""
        assert msg.description.details == "7"

    def test_unknown_type_is_kept(self) -> None:
        """Untracked messages decode to UnknownMessage instead of failing."""
        msg = create_message_from_dict({"@type": "/cosmos.bank.v1beta1.MsgSend", "amount": []})
        assert isinstance(msg, UnknownMessage)
        assert msg.type_url == "/cosmos.bank.v1beta1.MsgSend"

    def test_missing_type_fails(self) -> None:
        with pytest.raises(MessageDecodeError):
            create_message_from_dict({"proposal_id": "1"})

    def test_malformed_message_wraps_cause(self) -> None:
        with pytest.raises(MessageDecodeError) as exc_info:
            create_message_from_dict({"@type": "/cosmos.gov.v1beta1.MsgDeposit", "proposal_id": "x"})
        assert exc_info.value.cause is not None

    def test_registry_covers_tracked_messages(self) -> None:
        assert set(MESSAGE_TYPES.values()) == {MsgSubmitProposal, MsgDeposit, MsgVote, MsgCreateValidator}

    def test_type_name(self) -> None:
        assert get_message_type_name(MsgVote()) == "MsgVote"


class TestVoteOption:
    """Tests for VoteOption.parse()."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("VOTE_OPTION_YES", VoteOption.YES),
            ("Yes", VoteOption.YES),
            ("yes", VoteOption.YES),
            ("NoWithVeto", VoteOption.NO_WITH_VETO),
            ("VOTE_OPTION_NO_WITH_VETO", VoteOption.NO_WITH_VETO),
            (2, VoteOption.ABSTAIN),
            ("3", VoteOption.NO),
        ],
    )
    def test_accepted_forms(self, value: object, expected: VoteOption) -> None:
        assert VoteOption.parse(value) is expected  # type: ignore[arg-type]

    def test_unknown_name_fails(self) -> None:
        with pytest.raises(MessageDecodeError):
            VoteOption.parse("Maybe")

    def test_out_of_range_number_fails(self) -> None:
        with pytest.raises(MessageDecodeError):
            VoteOption.parse(9)
