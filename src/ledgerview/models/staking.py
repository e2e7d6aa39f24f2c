"""
Staking records: validators, their descriptions and commissions.

Commission rates are decimal strings (e.g. "0.100000000000000000") exactly
as the chain encodes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Description:
    """Free-form validator description fields."""

    moniker: str = ""
    identity: str = ""
    website: str = ""
    security_contact: str = ""
    details: str = ""

    def to_dict(self) -> dict[str, str]:
        """Convert description to dictionary for storage."""
        return {
            "moniker": self.moniker,
            "identity": self.identity,
            "website": self.website,
            "security_contact": self.security_contact,
            "details": self.details,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Description:
        """Create description from its JSON form."""
        return cls(
            moniker=str(data.get("moniker") or ""),
            identity=str(data.get("identity") or ""),
            website=str(data.get("website") or ""),
            security_contact=str(data.get("security_contact") or ""),
            details=str(data.get("details") or ""),
        )


@dataclass(frozen=True)
class CommissionRates:
    """Initial commission parameters declared at validator creation."""

    rate: str
    max_rate: str
    max_change_rate: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CommissionRates:
        """Create commission rates from their JSON form."""
        return cls(
            rate=str(data["rate"]),
            max_rate=str(data["max_rate"]),
            max_change_rate=str(data["max_change_rate"]),
        )


@dataclass(frozen=True)
class Validator:
    """Validator identity, keyed by operator address."""

    consensus_address: str
    operator_address: str
    consensus_pubkey: str
    self_delegate_address: str
    max_change_rate: str
    max_rate: str
    height: int


@dataclass(frozen=True)
class ValidatorDescription:
    """Validator description with its resolved avatar URL."""

    operator_address: str
    description: Description
    avatar_url: str
    height: int


@dataclass(frozen=True)
class ValidatorCommission:
    """Validator commission rate and minimum self delegation."""

    operator_address: str
    commission: str
    min_self_delegation: str
    height: int
