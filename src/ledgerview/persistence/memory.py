"""
In-memory state sink.

Useful for testing and development.
"""

from __future__ import annotations

import threading

from ledgerview.models.gov import Deposit, Proposal, Vote
from ledgerview.models.staking import Validator, ValidatorCommission, ValidatorDescription
from ledgerview.persistence.store import StateSink


class InMemoryStateSink(StateSink):
    """
    In-memory implementation of StateSink.

    Thread-safe storage keyed exactly like the SQL backends, so tests can
    assert upsert semantics. Records are immutable, so no copies are needed.
    """

    def __init__(self) -> None:
        self.proposals: dict[int, Proposal] = {}
        self.deposits: dict[tuple[int, str], Deposit] = {}
        self.votes: dict[tuple[int, str], Vote] = {}
        self.validators: dict[str, Validator] = {}
        self.descriptions: dict[str, ValidatorDescription] = {}
        self.commissions: dict[str, ValidatorCommission] = {}
        self._lock = threading.Lock()

    def save_proposals(self, proposals: list[Proposal]) -> None:
        with self._lock:
            for proposal in proposals:
                self.proposals[proposal.proposal_id] = proposal

    def save_deposits(self, deposits: list[Deposit]) -> None:
        with self._lock:
            for deposit in deposits:
                key = (deposit.proposal_id, deposit.depositor_address)
                existing = self.deposits.get(key)
                if existing is None or existing.height <= deposit.height:
                    self.deposits[key] = deposit

    def save_vote(self, vote: Vote) -> None:
        with self._lock:
            self.votes[(vote.proposal_id, vote.voter_address)] = vote

    def save_validator_data(self, validator: Validator) -> None:
        with self._lock:
            existing = self.validators.get(validator.operator_address)
            if existing is None or existing.height <= validator.height:
                self.validators[validator.operator_address] = validator

    def save_validator_description(self, description: ValidatorDescription) -> None:
        with self._lock:
            existing = self.descriptions.get(description.operator_address)
            if existing is None or existing.height <= description.height:
                self.descriptions[description.operator_address] = description

    def save_validator_commission(self, commission: ValidatorCommission) -> None:
        with self._lock:
            existing = self.commissions.get(commission.operator_address)
            if existing is None or existing.height <= commission.height:
                self.commissions[commission.operator_address] = commission

    def snapshot(self) -> dict[str, dict[object, object]]:
        """Return a copy of every table, for comparing store states."""
        with self._lock:
            return {
                "proposals": dict(self.proposals),
                "deposits": dict(self.deposits),
                "votes": dict(self.votes),
                "validators": dict(self.validators),
                "descriptions": dict(self.descriptions),
                "commissions": dict(self.commissions),
            }
