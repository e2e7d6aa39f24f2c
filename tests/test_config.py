"""Tests for projector configuration."""

import os
from unittest.mock import patch

import pytest

from ledgerview.config import (
    DEFAULT_KEYBASE_URL,
    AddressPrefixes,
    ProjectorConfig,
    get_projector_config,
    reset_projector_config,
)
from ledgerview.errors import ConfigurationError


class TestAddressPrefixes:
    """Tests for AddressPrefixes."""

    def test_defaults(self) -> None:
        prefixes = AddressPrefixes()
        assert (prefixes.account, prefixes.validator_operator, prefixes.validator_consensus) == (
            "like",
            "likevaloper",
            "likevalcons",
        )

    def test_for_account_prefix(self) -> None:
        prefixes = AddressPrefixes.for_account_prefix("cosmos")
        assert prefixes.validator_operator == "cosmosvaloper"
        assert prefixes.validator_consensus == "cosmosvalcons"

    @pytest.mark.parametrize("bad", ["", "Like"])
    def test_invalid_prefix_rejected(self, bad: str) -> None:
        with pytest.raises(ConfigurationError):
            AddressPrefixes(account=bad)


class TestProjectorConfig:
    """Tests for ProjectorConfig validation and environment loading."""

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            ProjectorConfig(avatar_timeout_seconds=0)
        with pytest.raises(ConfigurationError):
            ProjectorConfig(rest_timeout_seconds=-1)

    def test_negative_retries_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            ProjectorConfig(rest_retries=-1)

    @patch.dict(os.environ, {}, clear=True)
    def test_from_env_defaults(self) -> None:
        config = ProjectorConfig.from_env()
        assert config.prefixes == AddressPrefixes()
        assert config.keybase_url == DEFAULT_KEYBASE_URL
        assert config.rest_url == ""
        assert config.rest_retries == 0

    @patch.dict(
        os.environ,
        {
            "LEDGERVIEW_ACCOUNT_PREFIX": "cosmos",
            "LEDGERVIEW_VALCONS_PREFIX": "cosmoscons",
            "LEDGERVIEW_AVATAR_TIMEOUT_S": "2.5",
            "LEDGERVIEW_REST_URL": "https://rest.example",
            "LEDGERVIEW_REST_RETRIES": "3",
        },
        clear=True,
    )
    def test_from_env_overrides(self) -> None:
        config = ProjectorConfig.from_env()
        assert config.prefixes.account == "cosmos"
        assert config.prefixes.validator_operator == "cosmosvaloper"
        assert config.prefixes.validator_consensus == "cosmoscons"
        assert config.avatar_timeout_seconds == 2.5
        assert config.rest_url == "https://rest.example"
        assert config.rest_retries == 3

    @patch.dict(os.environ, {"LEDGERVIEW_REST_TIMEOUT_S": "soon"}, clear=True)
    def test_from_env_invalid_number(self) -> None:
        with pytest.raises(ConfigurationError):
            ProjectorConfig.from_env()

    @patch.dict(os.environ, {"LEDGERVIEW_ACCOUNT_PREFIX": "cosmos"}, clear=True)
    def test_singleton_is_lazy_and_resettable(self) -> None:
        reset_projector_config()
        first = get_projector_config()
        assert get_projector_config() is first
        assert first.prefixes.account == "cosmos"

        reset_projector_config()
        assert get_projector_config() is not first
