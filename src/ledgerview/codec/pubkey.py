"""
Validator consensus public keys.

Keys arrive as JSON "Any" objects: {"@type": "/cosmos.crypto.ed25519.PubKey",
"key": "<base64>"}. Each variant derives its 20-byte address the way the
chain does, so the consensus address can be rebuilt under any prefix.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from ledgerview.codec.registry import TYPE_KEY, TypeRegistry
from ledgerview.errors import PubKeyDecodeError

ADDRESS_LENGTH = 20


@dataclass(frozen=True)
class PubKey(ABC):
    """Base class of all supported public key types."""

    TYPE_URL: ClassVar[str] = ""
    KEY_NAME: ClassVar[str] = ""
    KEY_SIZE: ClassVar[int] = 0

    key: bytes

    def __post_init__(self) -> None:
        if len(self.key) != self.KEY_SIZE:
            raise PubKeyDecodeError(
                f"invalid {self.KEY_NAME} key length: expected {self.KEY_SIZE} bytes, got {len(self.key)}"
            )

    @abstractmethod
    def address(self) -> bytes:
        """Return the 20-byte address derived from the key."""

    def __str__(self) -> str:
        return f"{self.KEY_NAME}{{{self.key.hex().upper()}}}"

    def to_dict(self) -> dict[str, str]:
        return {TYPE_KEY: self.TYPE_URL, "key": base64.b64encode(self.key).decode("ascii")}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PubKey:
        try:
            key = base64.b64decode(str(data["key"]), validate=True)
        except binascii.Error as e:
            raise PubKeyDecodeError(f"{cls.KEY_NAME} key is not valid base64", cause=e) from e
        return cls(key=key)


PUBKEY_REGISTRY: TypeRegistry[PubKey] = TypeRegistry("public key", PubKeyDecodeError)


@PUBKEY_REGISTRY.variant
@dataclass(frozen=True)
class Ed25519PubKey(PubKey):
    """Tendermint ed25519 consensus key; address is truncated SHA-256."""

    TYPE_URL: ClassVar[str] = "/cosmos.crypto.ed25519.PubKey"
    KEY_NAME: ClassVar[str] = "PubKeyEd25519"
    KEY_SIZE: ClassVar[int] = 32

    def address(self) -> bytes:
        return hashlib.sha256(self.key).digest()[:ADDRESS_LENGTH]


@PUBKEY_REGISTRY.variant
@dataclass(frozen=True)
class Secp256k1PubKey(PubKey):
    """Compressed secp256k1 key; address is RIPEMD-160 of SHA-256."""

    TYPE_URL: ClassVar[str] = "/cosmos.crypto.secp256k1.PubKey"
    KEY_NAME: ClassVar[str] = "PubKeySecp256k1"
    KEY_SIZE: ClassVar[int] = 33

    def address(self) -> bytes:
        sha = hashlib.sha256(self.key).digest()
        try:
            return hashlib.new("ripemd160", sha).digest()
        except ValueError as e:
            raise PubKeyDecodeError("ripemd160 is not available in this Python build", cause=e) from e


def unpack_pubkey(data: dict[str, Any]) -> PubKey:
    """
    Decode a public key from its JSON "Any" form.

    Raises:
        PubKeyDecodeError: If the key type is unsupported or the key is malformed
    """
    return PUBKEY_REGISTRY.unpack(data)
