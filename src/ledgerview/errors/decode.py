"""Decode errors: malformed addresses, polymorphic payloads or messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ledgerview.errors.permanent import PermanentError

if TYPE_CHECKING:
    from ledgerview.error_codes import ErrorCode


class DecodeError(PermanentError):
    """A payload could not be decoded."""

    code: int = 300

    @property
    def error_code(self) -> ErrorCode:
        """Get the semantic error code for this exception."""
        if self._error_code is not None:
            return self._error_code
        from ledgerview.error_codes import ErrorCode

        return ErrorCode.DECODE_FAILED


class AddressDecodeError(DecodeError):
    """The address is not valid bech32, or cannot be encoded under the target prefix."""

    code: int = 301


class ContentDecodeError(DecodeError):
    """The proposal content is not a known content variant or is malformed."""

    code: int = 302


class PubKeyDecodeError(DecodeError):
    """The public key type is unsupported or the key bytes are malformed."""

    code: int = 303


class MessageDecodeError(DecodeError):
    """A message dictionary could not be turned into a message type."""

    code: int = 304


class AttributeDecodeError(DecodeError):
    """An event attribute value does not parse as the expected type."""

    code: int = 305
