"""
SQLite state sink.

Lightweight persistence using SQLite for development, tests and small
deployments. Each sink owns one connection per thread.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from ledgerview.errors import SinkError
from ledgerview.models.gov import Deposit, Proposal, Vote
from ledgerview.models.staking import Validator, ValidatorCommission, ValidatorDescription
from ledgerview.persistence.connection import connect_sqlite, sqlite_path
from ledgerview.persistence.converters import (
    commission_to_row,
    deposit_to_row,
    description_to_row,
    proposal_to_row,
    validator_to_row,
    vote_to_row,
)
from ledgerview.persistence.schema import create_tables
from ledgerview.persistence.store import StateSink

logger = logging.getLogger(__name__)

UPSERT_PROPOSAL = """
INSERT INTO proposal (
    id, proposal_route, proposal_type, title, description, content, status,
    submit_time, deposit_end_time, voting_start_time, voting_end_time, proposer_address
) VALUES (
    :id, :proposal_route, :proposal_type, :title, :description, :content, :status,
    :submit_time, :deposit_end_time, :voting_start_time, :voting_end_time, :proposer_address
)
ON CONFLICT (id) DO UPDATE SET
    proposal_route = excluded.proposal_route,
    proposal_type = excluded.proposal_type,
    title = excluded.title,
    description = excluded.description,
    content = excluded.content,
    status = excluded.status,
    submit_time = excluded.submit_time,
    deposit_end_time = excluded.deposit_end_time,
    voting_start_time = excluded.voting_start_time,
    voting_end_time = excluded.voting_end_time,
    proposer_address = excluded.proposer_address
"""

UPSERT_DEPOSIT = """
INSERT INTO proposal_deposit (proposal_id, depositor_address, amount, height, version)
VALUES (:proposal_id, :depositor_address, :amount, :height, :version)
ON CONFLICT (proposal_id, depositor_address) DO UPDATE SET
    amount = excluded.amount,
    height = excluded.height,
    version = excluded.version
WHERE excluded.height >= proposal_deposit.height
"""

UPSERT_VOTE = """
INSERT INTO proposal_vote (proposal_id, voter_address, option, version)
VALUES (:proposal_id, :voter_address, :option, :version)
ON CONFLICT (proposal_id, voter_address) DO UPDATE SET
    option = excluded.option,
    version = excluded.version
"""

UPSERT_VALIDATOR = """
INSERT INTO validator (
    operator_address, consensus_address, consensus_pubkey, self_delegate_address,
    max_change_rate, max_rate, height
) VALUES (
    :operator_address, :consensus_address, :consensus_pubkey, :self_delegate_address,
    :max_change_rate, :max_rate, :height
)
ON CONFLICT (operator_address) DO UPDATE SET
    consensus_address = excluded.consensus_address,
    consensus_pubkey = excluded.consensus_pubkey,
    self_delegate_address = excluded.self_delegate_address,
    max_change_rate = excluded.max_change_rate,
    max_rate = excluded.max_rate,
    height = excluded.height
WHERE excluded.height >= validator.height
"""

UPSERT_DESCRIPTION = """
INSERT INTO validator_description (
    operator_address, moniker, identity, avatar_url, website, security_contact, details, height
) VALUES (
    :operator_address, :moniker, :identity, :avatar_url, :website, :security_contact, :details, :height
)
ON CONFLICT (operator_address) DO UPDATE SET
    moniker = excluded.moniker,
    identity = excluded.identity,
    avatar_url = excluded.avatar_url,
    website = excluded.website,
    security_contact = excluded.security_contact,
    details = excluded.details,
    height = excluded.height
WHERE excluded.height >= validator_description.height
"""

UPSERT_COMMISSION = """
INSERT INTO validator_commission (operator_address, commission, min_self_delegation, height)
VALUES (:operator_address, :commission, :min_self_delegation, :height)
ON CONFLICT (operator_address) DO UPDATE SET
    commission = excluded.commission,
    min_self_delegation = excluded.min_self_delegation,
    height = excluded.height
WHERE excluded.height >= validator_commission.height
"""


def _sqlite_params(row: dict[str, Any]) -> dict[str, Any]:
    """SQLite stores timestamps as ISO 8601 text."""
    return {key: value.isoformat() if isinstance(value, datetime) else value for key, value in row.items()}


class SqliteStateSink(StateSink):
    """
    SQLite implementation of StateSink.

    Features:
    - Native ON CONFLICT upserts, so every save is idempotent
    - JSON stored as TEXT strings
    - One connection per thread, opened on first use; with :memory: each
      thread therefore sees its own database
    """

    def __init__(
        self,
        connection_string: str,
        create_tables: bool = False,
    ) -> None:
        """
        Initialize the sink.

        Args:
            connection_string: SQLite connection string (e.g., sqlite:///./ledgerview.db)
            create_tables: Whether to create tables if they don't exist
        """
        self.connection_string = connection_string
        self.db_path = sqlite_path(connection_string)
        self._local = threading.local()

        conn = self._get_connection()
        conn.execute("SELECT 1")

        if create_tables:
            self._create_tables()

    def _get_connection(self) -> sqlite3.Connection:
        conn: sqlite3.Connection | None = getattr(self._local, "conn", None)
        if conn is None:
            conn = connect_sqlite(self.db_path)
            self._local.conn = conn
        return conn

    def _create_tables(self) -> None:
        create_tables(self._get_connection())

    def close(self) -> None:
        """Close SQLite connection for the current thread."""
        conn = getattr(self._local, "conn", None)
        if conn is not None:
            conn.close()
            self._local.conn = None

    @contextmanager
    def _write(self, what: str) -> Iterator[sqlite3.Connection]:
        """Run one write batch in a transaction, mapping errors to SinkError."""
        conn = self._get_connection()
        try:
            with conn:
                yield conn
        except sqlite3.Error as e:
            raise SinkError(f"failed to save {what}", cause=e) from e

    def save_proposals(self, proposals: list[Proposal]) -> None:
        if not proposals:
            return
        with self._write(f"{len(proposals)} proposal(s)") as conn:
            conn.executemany(UPSERT_PROPOSAL, [_sqlite_params(proposal_to_row(p)) for p in proposals])
        logger.debug("Saved %d proposal(s)", len(proposals))

    def save_deposits(self, deposits: list[Deposit]) -> None:
        if not deposits:
            return
        with self._write(f"{len(deposits)} deposit(s)") as conn:
            conn.executemany(UPSERT_DEPOSIT, [_sqlite_params(deposit_to_row(d)) for d in deposits])
        logger.debug("Saved %d deposit(s)", len(deposits))

    def save_vote(self, vote: Vote) -> None:
        with self._write(f"vote on proposal {vote.proposal_id}") as conn:
            conn.execute(UPSERT_VOTE, vote_to_row(vote))

    def save_validator_data(self, validator: Validator) -> None:
        with self._write(f"validator {validator.operator_address}") as conn:
            conn.execute(UPSERT_VALIDATOR, validator_to_row(validator))

    def save_validator_description(self, description: ValidatorDescription) -> None:
        with self._write(f"description of validator {description.operator_address}") as conn:
            conn.execute(UPSERT_DESCRIPTION, description_to_row(description))

    def save_validator_commission(self, commission: ValidatorCommission) -> None:
        with self._write(f"commission of validator {commission.operator_address}") as conn:
            conn.execute(UPSERT_COMMISSION, commission_to_row(commission))
