"""Tests for MessageDispatcher routing."""

from unittest.mock import MagicMock

import pytest
import structlog

from ledgerview.dispatch import MessageDispatcher, MessageHandler
from ledgerview.errors import ConfigurationError, DepositNotFoundError
from ledgerview.messages import MsgDeposit, MsgSubmitProposal, MsgVote, UnknownMessage
from ledgerview.models.gov import VoteOption
from ledgerview.projectors import GovernanceProjector
from ledgerview.tx import Tx
from tests.conftest import make_tx


class RecordingHandler(MessageHandler[MsgVote]):
    """Handler that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, MsgVote, Tx]] = []

    @property
    def message_type(self) -> type[MsgVote]:
        return MsgVote

    def handle(self, index: int, message: MsgVote, tx: Tx) -> None:
        self.calls.append((index, message, tx))


class TestDispatch:
    """Tests for MessageDispatcher.dispatch()."""

    def setup_method(self) -> None:
        self.dispatcher = MessageDispatcher()
        self.handler = RecordingHandler()
        self.dispatcher.register_handler(self.handler)

    def test_routes_by_message_class(self) -> None:
        tx = make_tx()
        msg = MsgVote(proposal_id=1, voter="cosmos1x", option=VoteOption.YES)
        self.dispatcher.dispatch(0, msg, tx)
        assert self.handler.calls == [(0, msg, tx)]

    def test_empty_logs_is_noop(self) -> None:
        """Transactions without event logs are skipped entirely."""
        tx = Tx(height=10, logs=[])
        self.dispatcher.dispatch(0, MsgVote(), tx)
        assert self.handler.calls == []

    def test_unknown_kind_is_ignored(self) -> None:
        self.dispatcher.dispatch(0, UnknownMessage(type_url="/cosmos.bank.v1beta1.MsgSend"), make_tx())
        self.dispatcher.dispatch(0, MsgDeposit(), make_tx())
        assert self.handler.calls == []

    def test_handler_errors_propagate_unchanged(self) -> None:
        error = DepositNotFoundError("no deposit")
        failing = MagicMock(side_effect=error)
        self.dispatcher.register_handler_func(MsgDeposit, failing)

        with pytest.raises(DepositNotFoundError) as exc_info:
            self.dispatcher.dispatch(0, MsgDeposit(), make_tx())
        assert exc_info.value is error
        assert failing.call_count == 1

    def test_dispatch_tx_uses_message_positions(self) -> None:
        first = MsgVote(proposal_id=1)
        second = MsgVote(proposal_id=2)
        tx = make_tx(messages=[first, UnknownMessage(), second])

        self.dispatcher.dispatch_tx(tx)

        assert [(index, msg) for index, msg, _ in self.handler.calls] == [(0, first), (2, second)]


class TestTransactionContext:
    """Tests for the logging context bound while a transaction is dispatched."""

    def setup_method(self) -> None:
        self.dispatcher = MessageDispatcher()
        self.seen: list[dict[str, object]] = []
        self.dispatcher.register_handler_func(
            MsgVote, lambda index, msg, tx: self.seen.append(structlog.contextvars.get_contextvars())
        )

    def test_handlers_see_height_and_hash(self) -> None:
        self.dispatcher.dispatch_tx(make_tx(height=777, messages=[MsgVote(), MsgVote()]))

        assert self.seen == [{"height": 777, "tx_hash": "A1B2C3"}] * 2
        assert structlog.contextvars.get_contextvars() == {}

    def test_context_is_restored_after_handler_error(self) -> None:
        self.dispatcher.register_handler_func(MsgDeposit, MagicMock(side_effect=DepositNotFoundError("no deposit")))
        structlog.contextvars.bind_contextvars(height=1, worker="indexer-1")
        try:
            with pytest.raises(DepositNotFoundError):
                self.dispatcher.dispatch_tx(make_tx(height=900, messages=[MsgDeposit()]))

            assert structlog.contextvars.get_contextvars() == {"height": 1, "worker": "indexer-1"}
        finally:
            structlog.contextvars.clear_contextvars()

class TestRegistration:
    """Tests for handler registration."""

    def test_duplicate_registration_fails(self) -> None:
        dispatcher = MessageDispatcher()
        dispatcher.register_handler(RecordingHandler())
        with pytest.raises(ConfigurationError):
            dispatcher.register_handler(RecordingHandler())

    def test_register_handler_func(self) -> None:
        dispatcher = MessageDispatcher()
        seen: list[int] = []
        dispatcher.register_handler_func(MsgVote, lambda index, msg, tx: seen.append(msg.proposal_id))

        dispatcher.dispatch(0, MsgVote(proposal_id=9), make_tx())

        assert seen == [9]
        assert dispatcher.handled_types() == [MsgVote]

    def test_register_projector_binds_all_routes(self) -> None:
        dispatcher = MessageDispatcher()
        dispatcher.register_projector(GovernanceProjector(MagicMock(), MagicMock(), logger=MagicMock()))
        assert set(dispatcher.handled_types()) == {MsgSubmitProposal, MsgDeposit, MsgVote}

    def test_register_projector_twice_fails(self) -> None:
        dispatcher = MessageDispatcher()
        projector = GovernanceProjector(MagicMock(), MagicMock(), logger=MagicMock())
        dispatcher.register_projector(projector)
        with pytest.raises(ConfigurationError):
            dispatcher.register_projector(projector)
