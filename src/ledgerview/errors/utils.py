"""Error utility functions."""

from __future__ import annotations

import errno
import http.client
import socket
import sqlite3
import urllib.error

from ledgerview.errors.permanent import PermanentError
from ledgerview.errors.transient import TransientError

_TRANSIENT_STDLIB_TYPES = (
    ConnectionError,
    TimeoutError,
    socket.timeout,
    socket.gaierror,
    http.client.RemoteDisconnected,
    urllib.error.URLError,
)

_TRANSIENT_ERRNO_VALUES = frozenset(
    {
        errno.ECONNREFUSED,
        errno.ECONNRESET,
        errno.ECONNABORTED,
        errno.ETIMEDOUT,
        errno.EHOSTUNREACH,
        errno.ENETUNREACH,
    }
)


def is_transient(error: Exception) -> bool:
    """Check if an error is transient and may succeed when the host retries.

    Checks the error itself and its cause chain (__cause__).
    Permanent classification takes precedence over transient.

    Args:
        error: The exception to check

    Returns:
        True if the error is transient
    """
    if isinstance(error, TransientError):
        return True

    if isinstance(error, PermanentError):
        return False

    if isinstance(error, _TRANSIENT_STDLIB_TYPES):
        return True

    if isinstance(error, OSError) and error.errno in _TRANSIENT_ERRNO_VALUES:
        return True

    if isinstance(error, sqlite3.OperationalError) and "locked" in str(error).lower():
        return True

    cause = getattr(error, "__cause__", None)
    if cause is not None and cause is not error:
        return is_transient(cause)

    return False


def is_permanent(error: Exception) -> bool:
    """Check if an error is permanent and will fail again on replay.

    Args:
        error: The exception to check

    Returns:
        True if the error is permanent
    """
    if isinstance(error, PermanentError):
        return True

    if isinstance(error, TransientError):
        return False

    if isinstance(error, (ValueError, TypeError, AttributeError, KeyError, IndexError)):
        return True

    cause = getattr(error, "__cause__", None)
    if cause is not None and cause is not error:
        return is_permanent(cause)

    return False
