"""Tests for the error hierarchy, error codes and classification helpers."""

import sqlite3
import urllib.error

import pytest

from ledgerview.error_codes import ErrorCode, classify_error, error_chain, find_in_chain
from ledgerview.errors import (
    AddressDecodeError,
    AmbiguousEventError,
    AttributeDecodeError,
    AvatarLookupError,
    ChainStateNotFoundError,
    ChainStateUnavailableError,
    ConfigurationError,
    DecodeError,
    DepositNotFoundError,
    EventNotFoundError,
    ExternalDependencyError,
    LedgerViewError,
    LookupFailedError,
    PermanentError,
    SinkError,
    TransientError,
    is_permanent,
    is_transient,
)


class TestHierarchy:
    """Tests for the exception tree."""

    @pytest.mark.parametrize(
        "error_type",
        [EventNotFoundError, AmbiguousEventError, DepositNotFoundError, ChainStateNotFoundError],
    )
    def test_lookup_errors_are_permanent(self, error_type: type[LookupFailedError]) -> None:
        error = error_type("missing", height=10, index=2)
        assert isinstance(error, PermanentError)
        assert error.height == 10
        assert error.index == 2
        assert error.error_code is ErrorCode.LOOKUP_FAILED

    def test_decode_errors(self) -> None:
        for error_type in (AddressDecodeError, AttributeDecodeError):
            error = error_type("bad")
            assert isinstance(error, DecodeError)
            assert isinstance(error, PermanentError)
            assert error.error_code is ErrorCode.DECODE_FAILED

    def test_dependency_errors_are_transient(self) -> None:
        for error_type in (AvatarLookupError, ChainStateUnavailableError, SinkError):
            assert issubclass(error_type, ExternalDependencyError)
            assert issubclass(error_type, TransientError)
        assert AvatarLookupError("x").error_code is ErrorCode.DEPENDENCY_FAILED
        assert SinkError("x").error_code is ErrorCode.STORAGE_FAILED

    def test_everything_is_a_ledgerview_error(self) -> None:
        assert issubclass(ConfigurationError, LedgerViewError)
        assert issubclass(SinkError, LedgerViewError)

    def test_str_includes_code_and_cause(self) -> None:
        error = DepositNotFoundError("no deposit from cosmos1a", cause=KeyError("cosmos1a"))
        text = str(error)
        assert "no deposit from cosmos1a" in text
        assert "code=204" in text
        assert "caused by" in text

    def test_explicit_error_code_wins(self) -> None:
        error = SinkError("x", error_code=ErrorCode.NETWORK_ERROR)
        assert error.error_code is ErrorCode.NETWORK_ERROR


class TestErrorChain:
    """Tests for error_chain() and find_in_chain()."""

    def test_chain_is_root_to_leaf(self) -> None:
        root = sqlite3.OperationalError("disk I/O error")
        leaf = SinkError("failed to save vote", cause=root)
        leaf.__cause__ = root
        assert error_chain(leaf) == [root, leaf]

    def test_find_in_chain(self) -> None:
        root = urllib.error.URLError("refused")
        leaf = ChainStateUnavailableError("GET failed", cause=root)
        leaf.__cause__ = root
        assert find_in_chain(leaf, urllib.error.URLError) is root
        assert find_in_chain(leaf, KeyError) is None


class TestClassifyError:
    """Tests for classify_error()."""

    def test_uses_error_code_of_ledgerview_errors(self) -> None:
        assert classify_error(EventNotFoundError("x")) is ErrorCode.LOOKUP_FAILED
        assert classify_error(ConfigurationError("x")) is ErrorCode.CONFIGURATION_INVALID

    def test_foreign_errors_by_name(self) -> None:
        assert classify_error(TimeoutError("slow")) is ErrorCode.NETWORK_ERROR
        assert classify_error(KeyError("k")) is ErrorCode.LOOKUP_FAILED
        assert classify_error(sqlite3.OperationalError("boom")) is ErrorCode.STORAGE_FAILED

    def test_unknown(self) -> None:
        assert classify_error(RuntimeError("?")) is ErrorCode.UNKNOWN


class TestIsTransient:
    """Tests for is_transient() and is_permanent()."""

    def test_ledgerview_errors(self) -> None:
        assert is_transient(ChainStateUnavailableError("x"))
        assert not is_transient(DepositNotFoundError("x"))
        assert is_permanent(AddressDecodeError("x"))
        assert not is_permanent(AvatarLookupError("x"))

    def test_stdlib_errors(self) -> None:
        assert is_transient(ConnectionResetError())
        assert is_transient(sqlite3.OperationalError("database is locked"))
        assert is_permanent(ValueError("bad"))

    def test_follows_cause_chain(self) -> None:
        wrapper = RuntimeError("wrapped")
        wrapper.__cause__ = TimeoutError("slow")
        assert is_transient(wrapper)
