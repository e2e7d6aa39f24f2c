"""
Transaction context handed to the dispatcher.

A Tx carries the block height, its decoded messages and the per-message
event logs emitted during execution. Event and attribute lookups have
exactly-one semantics: zero matches and multiple matches are both errors,
so a projector never guesses among candidates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ledgerview.errors import AmbiguousEventError, AttributeNotFoundError, EventNotFoundError
from ledgerview.messages import Message, create_message_from_dict
from ledgerview.models.coin import parse_time


@dataclass(frozen=True)
class EventAttribute:
    key: str
    value: str


@dataclass(frozen=True)
class StringEvent:
    """An emitted event: a type and its ordered key/value attributes."""

    type: str
    attributes: tuple[EventAttribute, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StringEvent:
        return cls(
            type=str(data["type"]),
            attributes=tuple(
                EventAttribute(key=str(a["key"]), value=str(a.get("value", "")))
                for a in data.get("attributes") or ()
            ),
        )


@dataclass(frozen=True)
class TxLog:
    """Events emitted while executing the message at msg_index."""

    msg_index: int
    events: tuple[StringEvent, ...] = ()
    log: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any], position: int = 0) -> TxLog:
        return cls(
            msg_index=int(data.get("msg_index", position)),
            events=tuple(StringEvent.from_dict(e) for e in data.get("events") or ()),
            log=str(data.get("log", "")),
        )


@dataclass
class Tx:
    """
    A transaction as seen by the projection layer.

    Attributes:
        height: Block height the transaction was included at
        hash: Transaction hash (hex)
        messages: Decoded messages, in transaction order
        logs: Per-message event logs; empty for failed transactions
        timestamp: Block time, when known
    """

    height: int
    hash: str = ""
    messages: list[Message] = field(default_factory=list)
    logs: list[TxLog] = field(default_factory=list)
    timestamp: datetime | None = None

    @property
    def successful(self) -> bool:
        return bool(self.logs)

    def find_event_by_type(self, index: int, event_type: str) -> StringEvent:
        """
        Find the single event of a type emitted by the message at index.

        Args:
            index: Position of the message inside the transaction
            event_type: Event type to look for

        Returns:
            The matching event

        Raises:
            EventNotFoundError: If no event of that type was emitted
            AmbiguousEventError: If more than one event of that type was emitted
        """
        matches = [
            event
            for log in self.logs
            if log.msg_index == index
            for event in log.events
            if event.type == event_type
        ]
        if not matches:
            raise EventNotFoundError(
                f"no {event_type} event found for message {index} in tx {self.hash or '<unknown>'}",
                height=self.height,
                index=index,
            )
        if len(matches) > 1:
            raise AmbiguousEventError(
                f"{len(matches)} {event_type} events found for message {index} in tx {self.hash or '<unknown>'}",
                height=self.height,
                index=index,
            )
        return matches[0]

    def find_attribute_by_key(self, event: StringEvent, key: str) -> str:
        """
        Get the value of the single attribute with the given key.

        Raises:
            AttributeNotFoundError: If the event has no such attribute
            AmbiguousEventError: If the key appears more than once
        """
        values = [attr.value for attr in event.attributes if attr.key == key]
        if not values:
            raise AttributeNotFoundError(
                f"no {key} attribute found inside {event.type} event in tx {self.hash or '<unknown>'}",
                height=self.height,
            )
        if len(values) > 1:
            raise AmbiguousEventError(
                f"{len(values)} {key} attributes found inside {event.type} event in tx {self.hash or '<unknown>'}",
                height=self.height,
            )
        return values[0]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tx:
        """
        Create a transaction from its JSON form.

        Expected shape: {"height", "txhash", "timestamp", "tx": {"body": {"messages": [...]}},
        "logs": [{"msg_index", "events": [{"type", "attributes": [{"key", "value"}]}]}]}
        """
        body = (data.get("tx") or {}).get("body") or {}
        timestamp = data.get("timestamp")
        return cls(
            height=int(data["height"]),
            hash=str(data.get("txhash", "")),
            messages=[create_message_from_dict(m) for m in body.get("messages") or ()],
            logs=[TxLog.from_dict(log, position) for position, log in enumerate(data.get("logs") or ())],
            timestamp=parse_time(timestamp) if timestamp else None,
        )
