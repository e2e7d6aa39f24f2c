"""Tests for polymorphic proposal content and public key decoding."""

import base64
import hashlib

import pytest

from ledgerview.codec import (
    CONTENT_REGISTRY,
    PUBKEY_REGISTRY,
    CommunityPoolSpendProposal,
    Ed25519PubKey,
    ParameterChangeProposal,
    Secp256k1PubKey,
    SoftwareUpgradeProposal,
    TextProposal,
    unpack_content,
    unpack_pubkey,
)
from ledgerview.errors import ContentDecodeError, PubKeyDecodeError
from ledgerview.models.coin import Coin
from tests.conftest import ED25519_KEY, ED25519_KEY_B64, TEXT_CONTENT


class TestUnpackContent:
    """Tests for proposal content decoding."""

    def test_text_proposal(self) -> None:
        content = unpack_content(TEXT_CONTENT)
        assert isinstance(content, TextProposal)
        assert content.title == "Raise the bar"
        assert content.proposal_route == "gov"
        assert content.proposal_type == "Text"

    def test_parameter_change(self) -> None:
        content = unpack_content(
            {
                "@type": "/cosmos.params.v1beta1.ParameterChangeProposal",
                "title": "Lower deposit",
                "description": "",
                "changes": [{"subspace": "gov", "key": "depositparams", "value": "{}"}],
            }
        )
        assert isinstance(content, ParameterChangeProposal)
        assert content.proposal_route == "params"
        assert content.changes[0].subspace == "gov"

    def test_software_upgrade(self) -> None:
        content = unpack_content(
            {
                "@type": "/cosmos.upgrade.v1beta1.SoftwareUpgradeProposal",
                "title": "v2",
                "description": "upgrade",
                "plan": {"name": "v2", "height": "123456", "info": ""},
            }
        )
        assert isinstance(content, SoftwareUpgradeProposal)
        assert content.plan.height == 123456
        assert content.to_dict()["plan"]["height"] == "123456"

    def test_community_pool_spend(self) -> None:
        content = unpack_content(
            {
                "@type": "/cosmos.distribution.v1beta1.CommunityPoolSpendProposal",
                "title": "Fund",
                "description": "grant",
                "recipient": "cosmos1recipient",
                "amount": [{"denom": "nanolike", "amount": "100"}],
            }
        )
        assert isinstance(content, CommunityPoolSpendProposal)
        assert content.amount == (Coin("nanolike", "100"),)
        assert content.proposal_type == "CommunityPoolSpend"

    def test_to_dict_keeps_type_url(self) -> None:
        assert unpack_content(TEXT_CONTENT).to_dict() == TEXT_CONTENT

    def test_unknown_type_fails(self) -> None:
        with pytest.raises(ContentDecodeError, match="unsupported"):
            unpack_content({"@type": "/example.Unknown", "title": "x"})

    def test_missing_type_fails(self) -> None:
        with pytest.raises(ContentDecodeError):
            unpack_content({"title": "x"})

    def test_malformed_fields_fail(self) -> None:
        """A missing required field is wrapped, not leaked as KeyError."""
        with pytest.raises(ContentDecodeError) as exc_info:
            unpack_content({"@type": "/cosmos.gov.v1beta1.TextProposal"})
        assert isinstance(exc_info.value.cause, KeyError)

    def test_registry_lists_variants(self) -> None:
        assert "/cosmos.gov.v1beta1.TextProposal" in CONTENT_REGISTRY
        assert len(CONTENT_REGISTRY.type_urls()) == 5


class TestUnpackPubKey:
    """Tests for consensus public key decoding."""

    def test_ed25519(self) -> None:
        key = unpack_pubkey({"@type": "/cosmos.crypto.ed25519.PubKey", "key": ED25519_KEY_B64})
        assert isinstance(key, Ed25519PubKey)
        assert key.key == ED25519_KEY
        assert key.address() == hashlib.sha256(ED25519_KEY).digest()[:20]

    def test_ed25519_string_form(self) -> None:
        key = Ed25519PubKey(ED25519_KEY)
        assert str(key) == "PubKeyEd25519{" + ED25519_KEY.hex().upper() + "}"

    def test_secp256k1_string_form(self) -> None:
        raw = bytes([2]) + bytes(range(32))
        key = unpack_pubkey(
            {"@type": "/cosmos.crypto.secp256k1.PubKey", "key": base64.b64encode(raw).decode("ascii")}
        )
        assert isinstance(key, Secp256k1PubKey)
        assert str(key).startswith("PubKeySecp256k1{02")

    def test_to_dict_round_trip(self) -> None:
        key = Ed25519PubKey(ED25519_KEY)
        assert unpack_pubkey(key.to_dict()) == key

    def test_wrong_key_length_fails(self) -> None:
        with pytest.raises(PubKeyDecodeError, match="length"):
            unpack_pubkey(
                {"@type": "/cosmos.crypto.ed25519.PubKey", "key": base64.b64encode(b"short").decode("ascii")}
            )

    def test_invalid_base64_fails(self) -> None:
        with pytest.raises(PubKeyDecodeError):
            unpack_pubkey({"@type": "/cosmos.crypto.ed25519.PubKey", "key": "!!not base64!!"})

    def test_unsupported_key_type_fails(self) -> None:
        with pytest.raises(PubKeyDecodeError, match="unsupported"):
            unpack_pubkey({"@type": "/cosmos.crypto.sr25519.PubKey", "key": ED25519_KEY_B64})

    def test_registry_has_two_variants(self) -> None:
        assert PUBKEY_REGISTRY.type_urls() == [
            "/cosmos.crypto.ed25519.PubKey",
            "/cosmos.crypto.secp256k1.PubKey",
        ]
