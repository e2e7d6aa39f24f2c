"""Permanent (non-retryable) errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ledgerview.errors.base import LedgerViewError

if TYPE_CHECKING:
    from ledgerview.error_codes import ErrorCode


class PermanentError(LedgerViewError):
    """Non-retryable errors.

    Replaying the same message against the same height will fail the same
    way. The host decides whether to skip the message or halt indexing.
    """

    code: int = 102


class ConfigurationError(PermanentError):
    """Invalid configuration.

    Raised during initialization when prefixes, timeouts or handler
    registrations are invalid.
    """

    code: int = 104

    @property
    def error_code(self) -> ErrorCode:
        """Get the semantic error code for this exception."""
        if self._error_code is not None:
            return self._error_code
        from ledgerview.error_codes import ErrorCode

        return ErrorCode.CONFIGURATION_INVALID
