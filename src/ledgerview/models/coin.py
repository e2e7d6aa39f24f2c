"""
Coin amounts and RFC 3339 timestamps as they appear on chain.

Amounts are integer strings in the chain's JSON encoding and are kept as
strings so no precision is lost on the way to the store.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

_FRACTION_RE = re.compile(r"\.(\d+)")


@dataclass(frozen=True)
class Coin:
    """A denomination and an integer amount."""

    denom: str
    amount: str

    def to_dict(self) -> dict[str, str]:
        """Convert coin to dictionary for storage."""
        return {"denom": self.denom, "amount": self.amount}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Coin:
        """Create coin from its JSON form."""
        return cls(denom=str(data["denom"]), amount=str(data["amount"]))


def coins_from_dicts(data: Iterable[dict[str, Any]] | None) -> tuple[Coin, ...]:
    """Build a tuple of coins from a JSON coin list (None yields no coins)."""
    return tuple(Coin.from_dict(item) for item in data or ())


def coins_to_dicts(coins: Iterable[Coin]) -> list[dict[str, str]]:
    """Convert coins to a JSON-serializable list."""
    return [coin.to_dict() for coin in coins]


def parse_time(value: str | datetime) -> datetime:
    """
    Parse an RFC 3339 timestamp into an aware UTC datetime.

    Chain timestamps carry nanosecond fractions ("2021-06-01T10:00:00.123456789Z");
    the fraction is truncated to microseconds.

    Raises:
        ValueError: If the value is not a valid timestamp
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
