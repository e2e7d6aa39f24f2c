"""
Structured error codes for ledgerview.

Provides semantic error classification and exception chain traversal so the
indexing host can route failures (retry, skip, halt) without string matching
on messages.

Usage:
    from ledgerview.error_codes import ErrorCode, classify_error, error_chain

    try:
        dispatcher.dispatch(index, msg, tx)
    except Exception as e:
        code = classify_error(e)
        if code == ErrorCode.DEPENDENCY_FAILED:
            # Retry the block later
            pass
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Semantic error codes for categorizing projection failures.

    Each code maps to a category of failure that the calling host can
    handle programmatically:

    - LOOKUP_FAILED: an expected event, attribute or on-chain record is absent
    - DECODE_FAILED: a malformed address, proposal content, public key or message
    - DEPENDENCY_FAILED: an accessor, sink or avatar lookup call failed
    """

    # General errors
    UNKNOWN = "UNKNOWN"
    SYSTEM_ERROR = "SYSTEM_ERROR"

    # Projection errors
    LOOKUP_FAILED = "LOOKUP_FAILED"
    DECODE_FAILED = "DECODE_FAILED"
    DEPENDENCY_FAILED = "DEPENDENCY_FAILED"

    # Storage errors
    STORAGE_FAILED = "STORAGE_FAILED"

    # Configuration errors
    CONFIGURATION_INVALID = "CONFIGURATION_INVALID"

    # Network errors
    NETWORK_ERROR = "NETWORK_ERROR"


def error_chain(error: Exception) -> list[Exception]:
    """Traverse __cause__ chain, return list from root to leaf.

    Args:
        error: The exception to traverse

    Returns:
        List of exceptions from root cause to the provided exception.
        If no cause chain exists, returns a list with just the error.
    """
    chain: list[Exception] = []
    current: Exception | None = error

    while current is not None:
        chain.append(current)
        cause = getattr(current, "__cause__", None)
        if cause is current:
            break
        current = cause

    chain.reverse()
    return chain


def find_in_chain(error: Exception, error_type: type) -> Exception | None:
    """Find first error of given type in cause chain.

    Args:
        error: The exception to search from
        error_type: The type of exception to find

    Returns:
        The first exception of the given type, or None if not found.
    """
    for exc in error_chain(error):
        if isinstance(exc, error_type):
            return exc
    return None


def classify_error(error: Exception) -> ErrorCode:
    """Map any exception to an ErrorCode for routing/alerting.

    Uses the explicit error_code of ledgerview exceptions first, then
    name-based heuristics for foreign exceptions (sqlite3, psycopg, urllib).

    Args:
        error: The exception to classify

    Returns:
        The most appropriate ErrorCode for the exception.
    """
    if hasattr(error, "error_code"):
        return error.error_code  # type: ignore[no-any-return]

    for exc in error_chain(error):
        if hasattr(exc, "error_code"):
            return exc.error_code  # type: ignore[no-any-return]

    error_type = type(error).__name__.lower()
    error_module = type(error).__module__.lower() if type(error).__module__ else ""

    if any(
        pattern in error_type
        for pattern in ["timeout", "connection", "network", "socket", "http", "url"]
    ):
        return ErrorCode.NETWORK_ERROR

    if any(pattern in error_type for pattern in ["decode", "parse", "invalid", "bech32"]):
        return ErrorCode.DECODE_FAILED

    if "notfound" in error_type or "not_found" in error_type or error_type == "keyerror":
        return ErrorCode.LOOKUP_FAILED

    if any(pattern in error_type for pattern in ["config", "setting", "environment"]):
        return ErrorCode.CONFIGURATION_INVALID

    if error_module.startswith(("sqlite3", "psycopg")):
        return ErrorCode.STORAGE_FAILED

    return ErrorCode.UNKNOWN
