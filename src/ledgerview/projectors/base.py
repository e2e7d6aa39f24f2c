"""
Base class for domain projectors.

A projector turns a decoded message plus its transaction context into
domain records and writes them through a StateSink. Projectors hold no
state between calls: everything they need is passed in or fetched fresh
at the transaction height.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, ClassVar

from ledgerview.address import convert_address_prefix
from ledgerview.config import AddressPrefixes
from ledgerview.errors import DecodeError
from ledgerview.logging import projector_logger

if TYPE_CHECKING:
    from ledgerview.messages import Message
    from ledgerview.persistence.store import StateSink
    from ledgerview.tx import Tx

Route = Callable[[int, Any, "Tx"], None]


class DomainProjector(ABC):
    """
    Base projector with the address helpers every domain needs.

    Subclasses set MODULE and implement routes().
    """

    MODULE: ClassVar[str] = ""

    def __init__(
        self,
        sink: StateSink,
        prefixes: AddressPrefixes | None = None,
        logger: Any = None,
    ) -> None:
        self.sink = sink
        self.prefixes = prefixes or AddressPrefixes()
        self.logger = logger if logger is not None else projector_logger(self.MODULE)

    @abstractmethod
    def routes(self) -> dict[type[Message], Route]:
        """Return the message types this projector handles, mapped to (index, message, tx) callables."""
        pass

    @contextmanager
    def decoding(self, what: str, height: int, subject: str = "") -> Iterator[None]:
        """
        Name what was being decoded, and where, on any DecodeError raised inside.

        The error keeps its type; the original becomes its cause.

        Example:
            with self.decoding("voter address", tx.height, f"proposal {msg.proposal_id}"):
                voter = self.to_account_address(msg.voter)
        """
        try:
            yield
        except DecodeError as e:
            where = f"at height {height}" + (f" for {subject}" if subject else "")
            raise type(e)(f"error while decoding {what} {where}", cause=e) from e

    # ========== Address Re-encoding ==========

    def to_account_address(self, address: str) -> str:
        return convert_address_prefix(self.prefixes.account, address)

    def to_operator_address(self, address: str) -> str:
        return convert_address_prefix(self.prefixes.validator_operator, address)
