"""
Projector configuration for ledgerview.

Provides the address prefixes used to re-encode every stored address, plus
settings for the external collaborators (avatar lookup, REST accessor),
with support for loading from environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from ledgerview.errors import ConfigurationError

DEFAULT_ACCOUNT_PREFIX = "like"
DEFAULT_KEYBASE_URL = "https://keybase.io/_/api/1.0"


@dataclass(frozen=True)
class AddressPrefixes:
    """Bech32 prefixes of the target network, one per address class.

    Attributes:
        account: Prefix for account addresses (proposers, depositors, voters,
            self-delegators)
        validator_operator: Prefix for validator operator addresses
        validator_consensus: Prefix for validator consensus addresses
    """

    account: str = DEFAULT_ACCOUNT_PREFIX
    validator_operator: str = DEFAULT_ACCOUNT_PREFIX + "valoper"
    validator_consensus: str = DEFAULT_ACCOUNT_PREFIX + "valcons"

    def __post_init__(self) -> None:
        for name in ("account", "validator_operator", "validator_consensus"):
            value = getattr(self, name)
            if not value or value != value.lower():
                raise ConfigurationError(f"invalid {name} prefix: {value!r}")

    @classmethod
    def for_account_prefix(cls, account: str) -> AddressPrefixes:
        """Derive the Cosmos SDK prefix family from an account prefix.

        Example:
            AddressPrefixes.for_account_prefix("cosmos")
            # -> cosmos, cosmosvaloper, cosmosvalcons
        """
        return cls(
            account=account,
            validator_operator=account + "valoper",
            validator_consensus=account + "valcons",
        )


@dataclass
class ProjectorConfig:
    """Settings for the projection layer.

    Environment Variables:
        LEDGERVIEW_ACCOUNT_PREFIX: Account prefix (default: like)
        LEDGERVIEW_VALOPER_PREFIX: Operator prefix (default: <account>valoper)
        LEDGERVIEW_VALCONS_PREFIX: Consensus prefix (default: <account>valcons)
        LEDGERVIEW_KEYBASE_URL: Keybase API base URL
        LEDGERVIEW_AVATAR_TIMEOUT_S: Avatar lookup timeout in seconds (default: 10)
        LEDGERVIEW_REST_URL: Chain REST endpoint for RemoteChainState (default: empty)
        LEDGERVIEW_REST_TIMEOUT_S: REST request timeout in seconds (default: 30)
        LEDGERVIEW_REST_RETRIES: Retries for REST requests (default: 0)

    Attributes:
        prefixes: Target network address prefixes
        keybase_url: Base URL of the identity lookup service
        avatar_timeout_seconds: Timeout of one avatar lookup call
        rest_url: Base URL of the chain REST endpoint
        rest_timeout_seconds: Timeout of one REST call
        rest_retries: Retries on transient REST failures, 0 disables
    """

    prefixes: AddressPrefixes = field(default_factory=AddressPrefixes)
    keybase_url: str = DEFAULT_KEYBASE_URL
    avatar_timeout_seconds: float = 10.0
    rest_url: str = ""
    rest_timeout_seconds: float = 30.0
    rest_retries: int = 0

    def __post_init__(self) -> None:
        if self.avatar_timeout_seconds <= 0:
            raise ConfigurationError("avatar_timeout_seconds must be positive")
        if self.rest_timeout_seconds <= 0:
            raise ConfigurationError("rest_timeout_seconds must be positive")
        if self.rest_retries < 0:
            raise ConfigurationError("rest_retries must not be negative")

    @classmethod
    def from_env(cls) -> ProjectorConfig:
        """Load configuration from environment variables with defaults.

        Returns:
            ProjectorConfig with values loaded from environment or defaults
        """
        account = os.getenv("LEDGERVIEW_ACCOUNT_PREFIX", DEFAULT_ACCOUNT_PREFIX)
        try:
            return cls(
                prefixes=AddressPrefixes(
                    account=account,
                    validator_operator=os.getenv("LEDGERVIEW_VALOPER_PREFIX", account + "valoper"),
                    validator_consensus=os.getenv("LEDGERVIEW_VALCONS_PREFIX", account + "valcons"),
                ),
                keybase_url=os.getenv("LEDGERVIEW_KEYBASE_URL", DEFAULT_KEYBASE_URL),
                avatar_timeout_seconds=float(os.getenv("LEDGERVIEW_AVATAR_TIMEOUT_S", "10")),
                rest_url=os.getenv("LEDGERVIEW_REST_URL", ""),
                rest_timeout_seconds=float(os.getenv("LEDGERVIEW_REST_TIMEOUT_S", "30")),
                rest_retries=int(os.getenv("LEDGERVIEW_REST_RETRIES", "0")),
            )
        except ValueError as e:
            raise ConfigurationError("invalid ledgerview environment configuration", cause=e) from e


# Singleton for default projector config (loaded lazily)
_default_projector_config: ProjectorConfig | None = None


def get_projector_config() -> ProjectorConfig:
    """Get the default ProjectorConfig, loading from environment on first call.

    Returns:
        The singleton ProjectorConfig instance
    """
    global _default_projector_config
    if _default_projector_config is None:
        _default_projector_config = ProjectorConfig.from_env()
    return _default_projector_config


def reset_projector_config() -> None:
    """Reset the projector config singleton. Useful for testing."""
    global _default_projector_config
    _default_projector_config = None
