"""Lookup errors: expected events, attributes or on-chain records are absent."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ledgerview.errors.permanent import PermanentError

if TYPE_CHECKING:
    from ledgerview.error_codes import ErrorCode


class LookupFailedError(PermanentError):
    """An expected piece of corroborating state could not be found.

    Contains the height and the message index (when known) for
    troubleshooting.
    """

    code: int = 200

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        cause: Exception | None = None,
        height: int | None = None,
        index: int | None = None,
    ) -> None:
        super().__init__(message, code=code, cause=cause)
        self.height = height
        self.index = index

    @property
    def error_code(self) -> ErrorCode:
        """Get the semantic error code for this exception."""
        if self._error_code is not None:
            return self._error_code
        from ledgerview.error_codes import ErrorCode

        return ErrorCode.LOOKUP_FAILED


class EventNotFoundError(LookupFailedError):
    """No event of the requested type was emitted for the message."""

    code: int = 201


class AmbiguousEventError(LookupFailedError):
    """More than one event (or attribute) matched where exactly one was expected."""

    code: int = 202


class AttributeNotFoundError(LookupFailedError):
    """The event does not carry the requested attribute key."""

    code: int = 203


class DepositNotFoundError(LookupFailedError):
    """The chain does not corroborate a deposit claimed by a message."""

    code: int = 204


class ChainStateNotFoundError(LookupFailedError):
    """The chain state accessor has nothing for the requested height or id."""

    code: int = 205
