"""
ledgerview - message-to-state projection layer for Cosmos SDK chains.

This package turns decoded transaction messages plus their event logs into
normalized governance and staking records, with full support for:
- Type-keyed dispatch of decoded messages
- Event and height-pinned chain state corroboration
- Bech32 re-encoding of every stored address
- In-memory, SQLite and PostgreSQL persistence with idempotent upserts
"""

__version__ = "0.1.0"

from ledgerview.address import convert_address_prefix, decode_address, encode_address
from ledgerview.config import AddressPrefixes, ProjectorConfig, get_projector_config
from ledgerview.dispatch import MessageDispatcher, MessageHandler
from ledgerview.keybase import AvatarResolver, KeybaseAvatarResolver, StaticAvatarResolver
from ledgerview.messages import MsgCreateValidator, MsgDeposit, MsgSubmitProposal, MsgVote
from ledgerview.persistence import InMemoryStateSink, StateSink, create_sink
from ledgerview.projectors import GovernanceProjector, StakingProjector
from ledgerview.source import ChainStateAccessor, InMemoryChainState, RemoteChainState
from ledgerview.tx import Tx

__all__ = [
    "__version__",
    # Addresses
    "convert_address_prefix",
    "decode_address",
    "encode_address",
    # Configuration
    "AddressPrefixes",
    "ProjectorConfig",
    "get_projector_config",
    # Dispatch
    "MessageDispatcher",
    "MessageHandler",
    "Tx",
    # Messages
    "MsgCreateValidator",
    "MsgDeposit",
    "MsgSubmitProposal",
    "MsgVote",
    # Projectors
    "GovernanceProjector",
    "StakingProjector",
    # Collaborators
    "AvatarResolver",
    "KeybaseAvatarResolver",
    "StaticAvatarResolver",
    "ChainStateAccessor",
    "InMemoryChainState",
    "RemoteChainState",
    "StateSink",
    "InMemoryStateSink",
    "create_sink",
]
