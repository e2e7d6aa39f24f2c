"""
Governance proposal content variants.

Proposal content is a closed family: each variant declares its type URL,
the router route that executes it and its proposal type. Unknown type URLs
fail decoding with ContentDecodeError.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from typing import Any, ClassVar

from ledgerview.codec.registry import TYPE_KEY, TypeRegistry
from ledgerview.errors import ContentDecodeError
from ledgerview.models.coin import Coin, coins_from_dicts, coins_to_dicts


@dataclass(frozen=True)
class ProposalContent(ABC):
    """Base class of all proposal content variants."""

    TYPE_URL: ClassVar[str] = ""
    ROUTE: ClassVar[str] = ""
    TYPE: ClassVar[str] = ""

    title: str
    description: str

    @property
    def proposal_route(self) -> str:
        return self.ROUTE

    @property
    def proposal_type(self) -> str:
        return self.TYPE

    def to_dict(self) -> dict[str, Any]:
        """Convert content back to its JSON "Any" form for storage."""
        data: dict[str, Any] = {TYPE_KEY: self.TYPE_URL, "title": self.title, "description": self.description}
        data.update(self._extra_fields())
        return data

    def _extra_fields(self) -> dict[str, Any]:
        return {}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProposalContent:
        return cls(title=str(data["title"]), description=str(data.get("description", "")))


CONTENT_REGISTRY: TypeRegistry[ProposalContent] = TypeRegistry("proposal content", ContentDecodeError)


@CONTENT_REGISTRY.variant
@dataclass(frozen=True)
class TextProposal(ProposalContent):
    """A signalling proposal with no on-chain effect."""

    TYPE_URL: ClassVar[str] = "/cosmos.gov.v1beta1.TextProposal"
    ROUTE: ClassVar[str] = "gov"
    TYPE: ClassVar[str] = "Text"


@dataclass(frozen=True)
class ParamChange:
    subspace: str
    key: str
    value: str


@CONTENT_REGISTRY.variant
@dataclass(frozen=True)
class ParameterChangeProposal(ProposalContent):
    TYPE_URL: ClassVar[str] = "/cosmos.params.v1beta1.ParameterChangeProposal"
    ROUTE: ClassVar[str] = "params"
    TYPE: ClassVar[str] = "ParameterChange"

    changes: tuple[ParamChange, ...] = field(default_factory=tuple)

    def _extra_fields(self) -> dict[str, Any]:
        return {
            "changes": [
                {"subspace": c.subspace, "key": c.key, "value": c.value} for c in self.changes
            ]
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParameterChangeProposal:
        return cls(
            title=str(data["title"]),
            description=str(data.get("description", "")),
            changes=tuple(
                ParamChange(subspace=str(c["subspace"]), key=str(c["key"]), value=str(c["value"]))
                for c in data.get("changes") or ()
            ),
        )


@dataclass(frozen=True)
class Plan:
    """An upgrade plan: name, target height and free-form info."""

    name: str
    height: int
    info: str = ""


@CONTENT_REGISTRY.variant
@dataclass(frozen=True)
class SoftwareUpgradeProposal(ProposalContent):
    TYPE_URL: ClassVar[str] = "/cosmos.upgrade.v1beta1.SoftwareUpgradeProposal"
    ROUTE: ClassVar[str] = "upgrade"
    TYPE: ClassVar[str] = "SoftwareUpgrade"

    plan: Plan = field(default_factory=lambda: Plan(name="", height=0))

    def _extra_fields(self) -> dict[str, Any]:
        return {"plan": {"name": self.plan.name, "height": str(self.plan.height), "info": self.plan.info}}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SoftwareUpgradeProposal:
        plan = data["plan"]
        return cls(
            title=str(data["title"]),
            description=str(data.get("description", "")),
            plan=Plan(name=str(plan["name"]), height=int(plan["height"]), info=str(plan.get("info", ""))),
        )


@CONTENT_REGISTRY.variant
@dataclass(frozen=True)
class CancelSoftwareUpgradeProposal(ProposalContent):
    TYPE_URL: ClassVar[str] = "/cosmos.upgrade.v1beta1.CancelSoftwareUpgradeProposal"
    ROUTE: ClassVar[str] = "upgrade"
    TYPE: ClassVar[str] = "CancelSoftwareUpgrade"


@CONTENT_REGISTRY.variant
@dataclass(frozen=True)
class CommunityPoolSpendProposal(ProposalContent):
    TYPE_URL: ClassVar[str] = "/cosmos.distribution.v1beta1.CommunityPoolSpendProposal"
    ROUTE: ClassVar[str] = "distribution"
    TYPE: ClassVar[str] = "CommunityPoolSpend"

    recipient: str = ""
    amount: tuple[Coin, ...] = field(default_factory=tuple)

    def _extra_fields(self) -> dict[str, Any]:
        return {"recipient": self.recipient, "amount": coins_to_dicts(self.amount)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CommunityPoolSpendProposal:
        return cls(
            title=str(data["title"]),
            description=str(data.get("description", "")),
            recipient=str(data["recipient"]),
            amount=coins_from_dicts(data.get("amount")),
        )


def unpack_content(data: dict[str, Any]) -> ProposalContent:
    """
    Decode proposal content from its JSON "Any" form.

    Raises:
        ContentDecodeError: If the type is unknown or the content is malformed
    """
    return CONTENT_REGISTRY.unpack(data)
