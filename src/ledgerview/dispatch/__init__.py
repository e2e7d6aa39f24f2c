"""Type-keyed routing of decoded messages to projectors."""

from ledgerview.dispatch.dispatcher import MessageDispatcher
from ledgerview.dispatch.handler import MessageHandler

__all__ = ["MessageDispatcher", "MessageHandler"]
