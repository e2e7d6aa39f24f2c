"""
Registry for polymorphic payloads keyed by protobuf type URL.

Chain payloads such as proposal content and public keys arrive in their
JSON "Any" form: an object whose "@type" names the concrete variant. A
TypeRegistry maps each type URL to the class that decodes it, so decoding
is a lookup over a closed family rather than a chain of isinstance checks.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Protocol, TypeVar

from ledgerview.errors import DecodeError

logger = logging.getLogger(__name__)

TYPE_KEY = "@type"


class Decodable(Protocol):
    """A variant class that knows its type URL and decodes its JSON form."""

    TYPE_URL: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Any: ...


T = TypeVar("T", bound=Decodable)


class TypeRegistry(Generic[T]):
    """
    Registry of the variants of one polymorphic payload family.

    Example:
        registry: TypeRegistry[ProposalContent] = TypeRegistry("proposal content", ContentDecodeError)

        @registry.variant
        class TextProposal(ProposalContent):
            TYPE_URL = "/cosmos.gov.v1beta1.TextProposal"
            ...

        content = registry.unpack({"@type": "/cosmos.gov.v1beta1.TextProposal", ...})
    """

    def __init__(self, family: str, error_type: type[DecodeError] = DecodeError) -> None:
        self.family = family
        self.error_type = error_type
        self._variants: dict[str, type[T]] = {}

    def register(self, variant: type[T]) -> None:
        """
        Register a variant class under its TYPE_URL.

        Args:
            variant: The variant class to register
        """
        if variant.TYPE_URL in self._variants:
            logger.warning("Overwriting %s registration: %s", self.family, variant.TYPE_URL)
        self._variants[variant.TYPE_URL] = variant
        logger.debug("Registered %s variant: %s", self.family, variant.TYPE_URL)

    def variant(self, cls: type[T]) -> type[T]:
        """Class decorator form of register()."""
        self.register(cls)
        return cls

    def resolve(self, type_url: str) -> type[T]:
        """
        Get the variant class registered for a type URL.

        Raises:
            DecodeError: (of this registry's error_type) if the type URL is unknown
        """
        if type_url not in self._variants:
            raise self.error_type(f"unsupported {self.family} type: {type_url!r}")
        return self._variants[type_url]

    def unpack(self, data: dict[str, Any]) -> T:
        """
        Decode a JSON "Any" object into its registered variant.

        Args:
            data: Object carrying "@type" and the variant's fields

        Returns:
            The decoded variant instance

        Raises:
            DecodeError: (of this registry's error_type) if the type is unknown
                or the fields are malformed
        """
        if not isinstance(data, dict) or TYPE_KEY not in data:
            raise self.error_type(f"{self.family} is missing its {TYPE_KEY} field")

        variant = self.resolve(str(data[TYPE_KEY]))
        try:
            decoded: T = variant.from_dict(data)
        except self.error_type:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise self.error_type(
                f"malformed {self.family} of type {variant.TYPE_URL!r}", cause=e
            ) from e
        return decoded

    def type_urls(self) -> list[str]:
        """List all registered type URLs."""
        return sorted(self._variants)

    def __contains__(self, type_url: object) -> bool:
        return type_url in self._variants
