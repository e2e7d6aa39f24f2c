"""
Message dispatcher.

Routes each decoded message to the single handler registered for its
exact class. Untracked kinds are ignored. Handler errors propagate to the
caller unchanged; retry policy belongs to the indexing host.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from ledgerview.dispatch.handler import MessageHandler
from ledgerview.errors import ConfigurationError
from ledgerview.logging import tx_context
from ledgerview.messages import Message, get_message_type_name

if TYPE_CHECKING:
    from ledgerview.projectors.base import DomainProjector
    from ledgerview.tx import Tx

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Message)


class MessageDispatcher:
    """
    Type-keyed registry of message handlers.

    Example:
        dispatcher = MessageDispatcher()
        dispatcher.register_projector(GovernanceProjector(sink, source, prefixes))
        dispatcher.register_projector(StakingProjector(sink, prefixes, avatars))
        dispatcher.dispatch_tx(tx)
    """

    def __init__(self) -> None:
        self._handlers: dict[type[Message], MessageHandler[Any]] = {}

    def register_handler(self, handler: MessageHandler[Any]) -> None:
        """
        Register a message handler.

        Args:
            handler: The handler to register

        Raises:
            ConfigurationError: If a handler is already bound to the message type
        """
        message_type = handler.message_type
        if message_type in self._handlers:
            raise ConfigurationError(f"a handler for {message_type.__name__} is already registered")
        self._handlers[message_type] = handler
        logger.debug("Registered handler for %s", message_type.__name__)

    def register_handler_func(
        self,
        message_type: type[M],
        handler_func: Callable[[int, M, Tx], None],
    ) -> None:
        """
        Register a handler function for a message type.

        Args:
            message_type: The type of message to handle
            handler_func: Function called with (index, message, tx)
        """

        class FuncHandler(MessageHandler[M]):
            @property
            def message_type(self) -> type[M]:
                return message_type

            def handle(self, index: int, message: M, tx: Tx) -> None:
                handler_func(index, message, tx)

        self.register_handler(FuncHandler())

    def register_projector(self, projector: DomainProjector) -> None:
        """Register every route a projector exposes."""
        for message_type, handler_func in projector.routes().items():
            self.register_handler_func(message_type, handler_func)

    def handled_types(self) -> list[type[Message]]:
        """Return the message types with a registered handler."""
        return list(self._handlers)

    def dispatch(self, index: int, message: Message, tx: Tx) -> None:
        """
        Dispatch one message of a transaction.

        Transactions without event logs carry no verifiable state and are
        skipped entirely.

        Args:
            index: Position of the message inside the transaction
            message: The decoded message
            tx: The transaction that carried the message
        """
        if not tx.logs:
            logger.debug("Skipping message %d of tx %s: no event logs", index, tx.hash)
            return

        handler = self._handlers.get(type(message))
        if handler is None:
            logger.debug("No handler for %s, ignoring", get_message_type_name(message))
            return

        handler.handle(index, message, tx)

    def dispatch_tx(self, tx: Tx) -> None:
        """
        Dispatch every message of a transaction, in order.

        Events logged by the handlers carry the transaction's height and hash.
        """
        with tx_context(tx.height, tx.hash):
            for index, message in enumerate(tx.messages):
                self.dispatch(index, message, tx)
