"""ledgerview error hierarchy.

All error classes are re-exported here. Import from ``ledgerview.errors``.
"""

from ledgerview.errors.base import LedgerViewBaseException, LedgerViewError
from ledgerview.errors.decode import (
    AddressDecodeError,
    AttributeDecodeError,
    ContentDecodeError,
    DecodeError,
    MessageDecodeError,
    PubKeyDecodeError,
)
from ledgerview.errors.dependency import (
    AvatarLookupError,
    ChainStateUnavailableError,
    ExternalDependencyError,
    SinkError,
)
from ledgerview.errors.lookup import (
    AmbiguousEventError,
    AttributeNotFoundError,
    ChainStateNotFoundError,
    DepositNotFoundError,
    EventNotFoundError,
    LookupFailedError,
)
from ledgerview.errors.permanent import ConfigurationError, PermanentError
from ledgerview.errors.transient import TransientError
from ledgerview.errors.utils import is_permanent, is_transient

__all__ = [
    "AddressDecodeError",
    "AmbiguousEventError",
    "AttributeDecodeError",
    "AttributeNotFoundError",
    "AvatarLookupError",
    "ChainStateNotFoundError",
    "ChainStateUnavailableError",
    "ConfigurationError",
    "ContentDecodeError",
    "DecodeError",
    "DepositNotFoundError",
    "EventNotFoundError",
    "ExternalDependencyError",
    "LedgerViewBaseException",
    "LedgerViewError",
    "LookupFailedError",
    "MessageDecodeError",
    "PermanentError",
    "PubKeyDecodeError",
    "SinkError",
    "TransientError",
    "is_permanent",
    "is_transient",
]
