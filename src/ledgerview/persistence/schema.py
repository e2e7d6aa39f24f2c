"""Database schema for the SQL sinks.

Both dialects share table and column names; they differ only in types.
Deposit and validator tables carry the height they were observed at so an
older replay never overwrites newer data.
"""

from __future__ import annotations

import sqlite3

SQLITE_SCHEMA = """
CREATE TABLE IF NOT EXISTS proposal (
    id INTEGER PRIMARY KEY,
    proposal_route TEXT NOT NULL,
    proposal_type TEXT NOT NULL,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    content TEXT NOT NULL,
    status TEXT NOT NULL,
    submit_time TEXT NOT NULL,
    deposit_end_time TEXT NOT NULL,
    voting_start_time TEXT NOT NULL,
    voting_end_time TEXT NOT NULL,
    proposer_address TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS proposal_deposit (
    proposal_id INTEGER NOT NULL,
    depositor_address TEXT NOT NULL,
    amount TEXT NOT NULL DEFAULT '[]',
    height INTEGER NOT NULL,
    version INTEGER NOT NULL DEFAULT 1,
    PRIMARY KEY (proposal_id, depositor_address)
);

CREATE TABLE IF NOT EXISTS proposal_vote (
    proposal_id INTEGER NOT NULL,
    voter_address TEXT NOT NULL,
    option TEXT NOT NULL,
    version INTEGER NOT NULL DEFAULT 1,
    PRIMARY KEY (proposal_id, voter_address)
);

CREATE TABLE IF NOT EXISTS validator (
    operator_address TEXT PRIMARY KEY,
    consensus_address TEXT NOT NULL UNIQUE,
    consensus_pubkey TEXT NOT NULL,
    self_delegate_address TEXT NOT NULL,
    max_change_rate TEXT NOT NULL,
    max_rate TEXT NOT NULL,
    height INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS validator_description (
    operator_address TEXT PRIMARY KEY,
    moniker TEXT,
    identity TEXT,
    avatar_url TEXT,
    website TEXT,
    security_contact TEXT,
    details TEXT,
    height INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS validator_commission (
    operator_address TEXT PRIMARY KEY,
    commission TEXT NOT NULL,
    min_self_delegation TEXT NOT NULL,
    height INTEGER NOT NULL
);
"""

POSTGRES_SCHEMA = """
CREATE TABLE IF NOT EXISTS proposal (
    id BIGINT PRIMARY KEY,
    proposal_route TEXT NOT NULL,
    proposal_type TEXT NOT NULL,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    content JSONB NOT NULL,
    status TEXT NOT NULL,
    submit_time TIMESTAMPTZ NOT NULL,
    deposit_end_time TIMESTAMPTZ NOT NULL,
    voting_start_time TIMESTAMPTZ NOT NULL,
    voting_end_time TIMESTAMPTZ NOT NULL,
    proposer_address TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS proposal_deposit (
    proposal_id BIGINT NOT NULL,
    depositor_address TEXT NOT NULL,
    amount JSONB NOT NULL DEFAULT '[]'::jsonb,
    height BIGINT NOT NULL,
    version INTEGER NOT NULL DEFAULT 1,
    PRIMARY KEY (proposal_id, depositor_address)
);

CREATE TABLE IF NOT EXISTS proposal_vote (
    proposal_id BIGINT NOT NULL,
    voter_address TEXT NOT NULL,
    option TEXT NOT NULL,
    version INTEGER NOT NULL DEFAULT 1,
    PRIMARY KEY (proposal_id, voter_address)
);

CREATE TABLE IF NOT EXISTS validator (
    operator_address TEXT PRIMARY KEY,
    consensus_address TEXT NOT NULL UNIQUE,
    consensus_pubkey TEXT NOT NULL,
    self_delegate_address TEXT NOT NULL,
    max_change_rate TEXT NOT NULL,
    max_rate TEXT NOT NULL,
    height BIGINT NOT NULL
);

CREATE TABLE IF NOT EXISTS validator_description (
    operator_address TEXT PRIMARY KEY,
    moniker TEXT,
    identity TEXT,
    avatar_url TEXT,
    website TEXT,
    security_contact TEXT,
    details TEXT,
    height BIGINT NOT NULL
);

CREATE TABLE IF NOT EXISTS validator_commission (
    operator_address TEXT PRIMARY KEY,
    commission TEXT NOT NULL,
    min_self_delegation TEXT NOT NULL,
    height BIGINT NOT NULL
);
"""


def create_tables(conn: sqlite3.Connection) -> None:
    """Create all tables in a SQLite database."""
    conn.executescript(SQLITE_SCHEMA)
    conn.commit()
