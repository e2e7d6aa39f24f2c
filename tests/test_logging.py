"""Tests for structured logging output."""

import json
import sys
from collections.abc import Generator

import pytest
import structlog

import ledgerview.logging as ledgerview_logging
from ledgerview.logging import configure_logging, projector_logger, tx_context


@pytest.fixture(autouse=True)
def restore_structlog() -> Generator[None, None, None]:
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    ledgerview_logging._configured = False


class TestJsonLogging:
    """Tests for configure_logging(json_format=True)."""

    def test_event_carries_module_and_transaction(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_format=True, logger_factory=structlog.PrintLoggerFactory(sys.stdout))
        logger = projector_logger("gov")

        with tx_context(130, "DEADBEEF"):
            logger.info("proposal_vote", proposal_id=7, option="VOTE_OPTION_YES")

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "proposal_vote"
        assert record["level"] == "info"
        assert record["module"] == "gov"
        assert record["height"] == 130
        assert record["tx_hash"] == "DEADBEEF"
        assert record["proposal_id"] == 7
        assert "timestamp" in record

    def test_level_filters_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_format=True, logger_factory=structlog.PrintLoggerFactory(sys.stdout))
        logger = projector_logger("staking")

        logger.debug("validator_created", operator_address="likevaloper1abc")

        assert capsys.readouterr().out == ""


class TestTxContext:
    """Tests for tx_context()."""

    def test_nested_contexts_restore_outer_values(self) -> None:
        with tx_context(10, "AA"):
            with tx_context(11, "BB"):
                assert structlog.contextvars.get_contextvars() == {"height": 11, "tx_hash": "BB"}
            assert structlog.contextvars.get_contextvars() == {"height": 10, "tx_hash": "AA"}
        assert structlog.contextvars.get_contextvars() == {}
