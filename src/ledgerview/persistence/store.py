"""
StateSink interface.

This module defines the abstract interface for persisting projected
records. All storage backends must implement this interface.

Every save is an idempotent upsert keyed by the record's natural identity:

    Proposal              proposal_id
    Deposit               (proposal_id, depositor_address)
    Vote                  (proposal_id, voter_address)
    Validator             operator_address
    ValidatorDescription  operator_address
    ValidatorCommission   operator_address

Saving the same record twice leaves the store unchanged. The three
validator records are independent: any subset may be saved, in any order.
Deposits and validator-scoped rows are only replaced by rows observed at
the same or a later height.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ledgerview.models.gov import Deposit, Proposal, Vote
    from ledgerview.models.staking import Validator, ValidatorCommission, ValidatorDescription


class StateSink(ABC):
    """Abstract interface for projected state persistence."""

    # ========== Governance ==========

    @abstractmethod
    def save_proposals(self, proposals: list[Proposal]) -> None:
        """
        Upsert proposals by proposal id.

        Args:
            proposals: The proposals to save
        """
        pass

    @abstractmethod
    def save_deposits(self, deposits: list[Deposit]) -> None:
        """
        Upsert deposits by (proposal id, depositor).

        A deposit observed at a lower height than the stored one is ignored.

        Args:
            deposits: The deposits to save
        """
        pass

    @abstractmethod
    def save_vote(self, vote: Vote) -> None:
        """
        Upsert a vote by (proposal id, voter); a later vote replaces an earlier one.

        Args:
            vote: The vote to save
        """
        pass

    # ========== Staking ==========

    @abstractmethod
    def save_validator_data(self, validator: Validator) -> None:
        """
        Upsert a validator by operator address.

        Args:
            validator: The validator to save
        """
        pass

    @abstractmethod
    def save_validator_description(self, description: ValidatorDescription) -> None:
        """
        Upsert a validator description by operator address.

        Args:
            description: The description to save
        """
        pass

    @abstractmethod
    def save_validator_commission(self, commission: ValidatorCommission) -> None:
        """
        Upsert a validator commission by operator address.

        Args:
            commission: The commission to save
        """
        pass

    # ========== Lifecycle ==========

    def close(self) -> None:
        """Release backend resources. No-op by default."""
        pass
