"""Domain projectors: messages in, records out."""

from ledgerview.projectors.base import DomainProjector
from ledgerview.projectors.governance import GovernanceProjector
from ledgerview.projectors.staking import StakingProjector

__all__ = ["DomainProjector", "GovernanceProjector", "StakingProjector"]
