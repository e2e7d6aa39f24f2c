"""Transient (retryable) errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ledgerview.errors.base import LedgerViewError

if TYPE_CHECKING:
    from ledgerview.error_codes import ErrorCode


class TransientError(LedgerViewError):
    """Retryable errors.

    These errors indicate temporary conditions that may resolve on retry:
    - Network timeouts
    - Connection refused
    - Server errors (5xx)
    - Database lock contention

    ledgerview never retries internally. The indexing host may re-deliver
    the message; every write path is an idempotent upsert.
    """

    code: int = 101

    @property
    def error_code(self) -> ErrorCode:
        """Get the semantic error code for this exception."""
        if self._error_code is not None:
            return self._error_code
        from ledgerview.error_codes import ErrorCode

        return ErrorCode.NETWORK_ERROR
