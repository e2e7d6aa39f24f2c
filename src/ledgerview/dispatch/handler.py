"""
Base message handler class.

A handler projects one kind of decoded message. The dispatcher keys its
registry on message_type, so each kind is bound to exactly one handler.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

from ledgerview.messages import Message

if TYPE_CHECKING:
    from ledgerview.tx import Tx

M = TypeVar("M", bound=Message)


class MessageHandler(ABC, Generic[M]):
    """
    Base class for message handlers.

    Each handler processes a specific type of message.
    """

    @property
    @abstractmethod
    def message_type(self) -> type[M]:
        """Return the type of message this handler processes."""
        pass

    @abstractmethod
    def handle(self, index: int, message: M, tx: Tx) -> None:
        """
        Handle a message.

        Args:
            index: Position of the message inside the transaction
            message: The message to handle
            tx: The transaction that carried the message
        """
        pass
