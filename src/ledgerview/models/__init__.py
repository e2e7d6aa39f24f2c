"""Domain records and chain-side types."""

from ledgerview.models.chain import AccountBalance, ChainDeposit, ChainProposal
from ledgerview.models.coin import Coin, coins_from_dicts, coins_to_dicts, parse_time
from ledgerview.models.gov import (
    DEPOSIT_SCHEMA_VERSION,
    VOTE_SCHEMA_VERSION,
    Deposit,
    Proposal,
    Vote,
    VoteOption,
)
from ledgerview.models.staking import (
    CommissionRates,
    Description,
    Validator,
    ValidatorCommission,
    ValidatorDescription,
)

__all__ = [
    "DEPOSIT_SCHEMA_VERSION",
    "VOTE_SCHEMA_VERSION",
    "AccountBalance",
    "ChainDeposit",
    "ChainProposal",
    "Coin",
    "CommissionRates",
    "Deposit",
    "Description",
    "Proposal",
    "Validator",
    "ValidatorCommission",
    "ValidatorDescription",
    "Vote",
    "VoteOption",
    "coins_from_dicts",
    "coins_to_dicts",
    "parse_time",
]
