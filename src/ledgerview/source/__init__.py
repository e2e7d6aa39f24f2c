"""Point-in-time chain state accessors."""

from ledgerview.source.base import ChainStateAccessor
from ledgerview.source.memory import InMemoryChainState
from ledgerview.source.remote import RemoteChainState

__all__ = [
    "ChainStateAccessor",
    "InMemoryChainState",
    "RemoteChainState",
]
