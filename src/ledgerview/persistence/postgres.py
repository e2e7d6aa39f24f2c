"""
PostgreSQL state sink.

Uses psycopg 3 through a psycopg_pool pool shared by every sink on the
same DSN. JSON columns are JSONB and timestamps are TIMESTAMPTZ.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import psycopg

from ledgerview.errors import SinkError
from ledgerview.models.gov import Deposit, Proposal, Vote
from ledgerview.models.staking import Validator, ValidatorCommission, ValidatorDescription
from ledgerview.persistence.connection import close_postgres_pool, get_postgres_pool
from ledgerview.persistence.converters import (
    commission_to_row,
    deposit_to_row,
    description_to_row,
    proposal_to_row,
    validator_to_row,
    vote_to_row,
)
from ledgerview.persistence.schema import POSTGRES_SCHEMA
from ledgerview.persistence.store import StateSink

logger = logging.getLogger(__name__)

UPSERT_PROPOSAL = """
INSERT INTO proposal (
    id, proposal_route, proposal_type, title, description, content, status,
    submit_time, deposit_end_time, voting_start_time, voting_end_time, proposer_address
) VALUES (
    %(id)s, %(proposal_route)s, %(proposal_type)s, %(title)s, %(description)s,
    %(content)s::jsonb, %(status)s, %(submit_time)s, %(deposit_end_time)s,
    %(voting_start_time)s, %(voting_end_time)s, %(proposer_address)s
)
ON CONFLICT (id) DO UPDATE SET
    proposal_route = EXCLUDED.proposal_route,
    proposal_type = EXCLUDED.proposal_type,
    title = EXCLUDED.title,
    description = EXCLUDED.description,
    content = EXCLUDED.content,
    status = EXCLUDED.status,
    submit_time = EXCLUDED.submit_time,
    deposit_end_time = EXCLUDED.deposit_end_time,
    voting_start_time = EXCLUDED.voting_start_time,
    voting_end_time = EXCLUDED.voting_end_time,
    proposer_address = EXCLUDED.proposer_address
"""

UPSERT_DEPOSIT = """
INSERT INTO proposal_deposit (proposal_id, depositor_address, amount, height, version)
VALUES (%(proposal_id)s, %(depositor_address)s, %(amount)s::jsonb, %(height)s, %(version)s)
ON CONFLICT (proposal_id, depositor_address) DO UPDATE SET
    amount = EXCLUDED.amount,
    height = EXCLUDED.height,
    version = EXCLUDED.version
WHERE proposal_deposit.height <= EXCLUDED.height
"""

UPSERT_VOTE = """
INSERT INTO proposal_vote (proposal_id, voter_address, option, version)
VALUES (%(proposal_id)s, %(voter_address)s, %(option)s, %(version)s)
ON CONFLICT (proposal_id, voter_address) DO UPDATE SET
    option = EXCLUDED.option,
    version = EXCLUDED.version
"""

UPSERT_VALIDATOR = """
INSERT INTO validator (
    operator_address, consensus_address, consensus_pubkey, self_delegate_address,
    max_change_rate, max_rate, height
) VALUES (
    %(operator_address)s, %(consensus_address)s, %(consensus_pubkey)s, %(self_delegate_address)s,
    %(max_change_rate)s, %(max_rate)s, %(height)s
)
ON CONFLICT (operator_address) DO UPDATE SET
    consensus_address = EXCLUDED.consensus_address,
    consensus_pubkey = EXCLUDED.consensus_pubkey,
    self_delegate_address = EXCLUDED.self_delegate_address,
    max_change_rate = EXCLUDED.max_change_rate,
    max_rate = EXCLUDED.max_rate,
    height = EXCLUDED.height
WHERE validator.height <= EXCLUDED.height
"""

UPSERT_DESCRIPTION = """
INSERT INTO validator_description (
    operator_address, moniker, identity, avatar_url, website, security_contact, details, height
) VALUES (
    %(operator_address)s, %(moniker)s, %(identity)s, %(avatar_url)s, %(website)s,
    %(security_contact)s, %(details)s, %(height)s
)
ON CONFLICT (operator_address) DO UPDATE SET
    moniker = EXCLUDED.moniker,
    identity = EXCLUDED.identity,
    avatar_url = EXCLUDED.avatar_url,
    website = EXCLUDED.website,
    security_contact = EXCLUDED.security_contact,
    details = EXCLUDED.details,
    height = EXCLUDED.height
WHERE validator_description.height <= EXCLUDED.height
"""

UPSERT_COMMISSION = """
INSERT INTO validator_commission (operator_address, commission, min_self_delegation, height)
VALUES (%(operator_address)s, %(commission)s, %(min_self_delegation)s, %(height)s)
ON CONFLICT (operator_address) DO UPDATE SET
    commission = EXCLUDED.commission,
    min_self_delegation = EXCLUDED.min_self_delegation,
    height = EXCLUDED.height
WHERE validator_commission.height <= EXCLUDED.height
"""


def _libpq_dsn(connection_string: str) -> str:
    """Strip a SQLAlchemy-style driver suffix, which libpq does not accept."""
    return connection_string.replace("postgresql+psycopg://", "postgresql://", 1)


class PostgresStateSink(StateSink):
    """
    PostgreSQL implementation of StateSink.

    Each save borrows a connection from the DSN's pool and commits before
    returning it. Closing one sink closes the pool for every sink on the DSN.
    """

    def __init__(
        self,
        connection_string: str,
        create_tables: bool = False,
    ) -> None:
        """
        Initialize the sink.

        Args:
            connection_string: PostgreSQL connection string
            create_tables: Whether to create tables if they don't exist
        """
        self.connection_string = _libpq_dsn(connection_string)
        self._pool = get_postgres_pool(self.connection_string)

        if create_tables:
            self._create_tables()

    def _create_tables(self) -> None:
        """Create database tables if they don't exist."""
        with self._write("schema") as cur:
            for statement in POSTGRES_SCHEMA.split(";"):
                statement = statement.strip()
                if statement:
                    cur.execute(statement)

    def close(self) -> None:
        """Close the pool shared by sinks on this DSN."""
        close_postgres_pool(self.connection_string)

    @contextmanager
    def _write(self, what: str) -> Iterator[Any]:
        """Yield a cursor inside one committed transaction, mapping errors to SinkError."""
        try:
            with self._pool.connection() as conn:
                with conn.cursor() as cur:
                    yield cur
                conn.commit()
        except psycopg.Error as e:
            raise SinkError(f"failed to save {what}", cause=e) from e

    def save_proposals(self, proposals: list[Proposal]) -> None:
        if not proposals:
            return
        with self._write(f"{len(proposals)} proposal(s)") as cur:
            cur.executemany(UPSERT_PROPOSAL, [proposal_to_row(p) for p in proposals])
        logger.debug("Saved %d proposal(s)", len(proposals))

    def save_deposits(self, deposits: list[Deposit]) -> None:
        if not deposits:
            return
        with self._write(f"{len(deposits)} deposit(s)") as cur:
            cur.executemany(UPSERT_DEPOSIT, [deposit_to_row(d) for d in deposits])
        logger.debug("Saved %d deposit(s)", len(deposits))

    def save_vote(self, vote: Vote) -> None:
        with self._write(f"vote on proposal {vote.proposal_id}") as cur:
            cur.execute(UPSERT_VOTE, vote_to_row(vote))

    def save_validator_data(self, validator: Validator) -> None:
        with self._write(f"validator {validator.operator_address}") as cur:
            cur.execute(UPSERT_VALIDATOR, validator_to_row(validator))

    def save_validator_description(self, description: ValidatorDescription) -> None:
        with self._write(f"description of validator {description.operator_address}") as cur:
            cur.execute(UPSERT_DESCRIPTION, description_to_row(description))

    def save_validator_commission(self, commission: ValidatorCommission) -> None:
        with self._write(f"commission of validator {commission.operator_address}") as cur:
            cur.execute(UPSERT_COMMISSION, commission_to_row(commission))
