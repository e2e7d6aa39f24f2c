"""Conversion of projected records into SQL row parameters."""

from __future__ import annotations

import json
from typing import Any

from ledgerview.models.coin import coins_to_dicts
from ledgerview.models.gov import Deposit, Proposal, Vote
from ledgerview.models.staking import Validator, ValidatorCommission, ValidatorDescription


def proposal_to_row(proposal: Proposal) -> dict[str, Any]:
    """Convert a proposal to row parameters. Content is stored as JSON."""
    return {
        "id": proposal.proposal_id,
        "proposal_route": proposal.proposal_route,
        "proposal_type": proposal.proposal_type,
        "title": proposal.content.title,
        "description": proposal.content.description,
        "content": json.dumps(proposal.content.to_dict(), sort_keys=True),
        "status": proposal.status,
        "submit_time": proposal.submit_time,
        "deposit_end_time": proposal.deposit_end_time,
        "voting_start_time": proposal.voting_start_time,
        "voting_end_time": proposal.voting_end_time,
        "proposer_address": proposal.proposer_address,
    }


def deposit_to_row(deposit: Deposit) -> dict[str, Any]:
    return {
        "proposal_id": deposit.proposal_id,
        "depositor_address": deposit.depositor_address,
        "amount": json.dumps(coins_to_dicts(deposit.amount)),
        "height": deposit.height,
        "version": deposit.version,
    }


def vote_to_row(vote: Vote) -> dict[str, Any]:
    return {
        "proposal_id": vote.proposal_id,
        "voter_address": vote.voter_address,
        "option": vote.option.value,
        "version": vote.version,
    }


def validator_to_row(validator: Validator) -> dict[str, Any]:
    return {
        "operator_address": validator.operator_address,
        "consensus_address": validator.consensus_address,
        "consensus_pubkey": validator.consensus_pubkey,
        "self_delegate_address": validator.self_delegate_address,
        "max_change_rate": validator.max_change_rate,
        "max_rate": validator.max_rate,
        "height": validator.height,
    }


def description_to_row(description: ValidatorDescription) -> dict[str, Any]:
    row: dict[str, Any] = {
        "operator_address": description.operator_address,
        "avatar_url": description.avatar_url,
        "height": description.height,
    }
    row.update(description.description.to_dict())
    return row


def commission_to_row(commission: ValidatorCommission) -> dict[str, Any]:
    return {
        "operator_address": commission.operator_address,
        "commission": commission.commission,
        "min_self_delegation": commission.min_self_delegation,
        "height": commission.height,
    }
