"""External dependency errors: accessor, sink and avatar lookup failures."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ledgerview.errors.transient import TransientError

if TYPE_CHECKING:
    from ledgerview.error_codes import ErrorCode


class ExternalDependencyError(TransientError):
    """A call to a collaborator outside the projection layer failed."""

    code: int = 500

    @property
    def error_code(self) -> ErrorCode:
        """Get the semantic error code for this exception."""
        if self._error_code is not None:
            return self._error_code
        from ledgerview.error_codes import ErrorCode

        return ErrorCode.DEPENDENCY_FAILED


class AvatarLookupError(ExternalDependencyError):
    """The identity service could not resolve an avatar URL."""

    code: int = 501


class ChainStateUnavailableError(ExternalDependencyError):
    """The chain state accessor could not be reached or returned a server error."""

    code: int = 502


class SinkError(ExternalDependencyError):
    """The state sink failed to persist a record."""

    code: int = 503

    @property
    def error_code(self) -> ErrorCode:
        """Get the semantic error code for this exception."""
        if self._error_code is not None:
            return self._error_code
        from ledgerview.error_codes import ErrorCode

        return ErrorCode.STORAGE_FAILED
