"""Decoding of polymorphic chain payloads (proposal content, public keys)."""

from ledgerview.codec.content import (
    CONTENT_REGISTRY,
    CancelSoftwareUpgradeProposal,
    CommunityPoolSpendProposal,
    ParamChange,
    ParameterChangeProposal,
    Plan,
    ProposalContent,
    SoftwareUpgradeProposal,
    TextProposal,
    unpack_content,
)
from ledgerview.codec.pubkey import (
    PUBKEY_REGISTRY,
    Ed25519PubKey,
    PubKey,
    Secp256k1PubKey,
    unpack_pubkey,
)
from ledgerview.codec.registry import TYPE_KEY, TypeRegistry

__all__ = [
    "CONTENT_REGISTRY",
    "PUBKEY_REGISTRY",
    "TYPE_KEY",
    "CancelSoftwareUpgradeProposal",
    "CommunityPoolSpendProposal",
    "Ed25519PubKey",
    "ParamChange",
    "ParameterChangeProposal",
    "Plan",
    "ProposalContent",
    "PubKey",
    "Secp256k1PubKey",
    "SoftwareUpgradeProposal",
    "TextProposal",
    "TypeRegistry",
    "unpack_content",
    "unpack_pubkey",
]
