"""
Remote chain state over the Cosmos SDK REST gateway.

Every request pins its height with the x-cosmos-block-height header, so
answers describe the chain exactly as it was when the transaction executed.
Uses only urllib for HTTP, with optional retries through resilient-circuit.
"""

from __future__ import annotations

import json
import logging
from datetime import timedelta
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from resilient_circuit import ExponentialDelay, RetryWithBackoffPolicy
from resilient_circuit.exceptions import RetryLimitReached

from ledgerview.errors import ChainStateNotFoundError, ChainStateUnavailableError
from ledgerview.models.chain import AccountBalance, ChainDeposit, ChainProposal
from ledgerview.models.coin import Coin, coins_from_dicts
from ledgerview.source.base import ChainStateAccessor

logger = logging.getLogger(__name__)

HEIGHT_HEADER = "x-cosmos-block-height"
PAGE_LIMIT = 100


class RemoteChainState(ChainStateAccessor):
    """
    ChainStateAccessor backed by a node's REST (LCD) endpoint.

    Error mapping:
        4xx responses -> ChainStateNotFoundError (unknown height or id)
        5xx, network errors, undecodable bodies -> ChainStateUnavailableError

    Example:
        source = RemoteChainState("https://rest.example.org", timeout=10)
        proposal = source.proposal(height=1200, proposal_id=42)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retries: int = 0,
        retry_delay: float = 1.0,
    ) -> None:
        """
        Args:
            base_url: REST endpoint base URL
            timeout: Per-request timeout in seconds
            retries: Retries on ChainStateUnavailableError, 0 disables
            retry_delay: Initial backoff delay in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retries = retries
        self._retry_policy = RetryWithBackoffPolicy(
            max_retries=retries,
            backoff=ExponentialDelay(
                min_delay=timedelta(seconds=retry_delay),
                max_delay=timedelta(seconds=retry_delay * 10),
                factor=2,
                jitter=0.1,
            ),
            should_handle=lambda e: isinstance(e, ChainStateUnavailableError),
        )

    # ========== HTTP ==========

    def _fetch(self, path: str, height: int, params: dict[str, str] | None = None) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        if params:
            url = f"{url}?{urlencode(params)}"
        request = Request(url, headers={HEIGHT_HEADER: str(height), "Accept": "application/json"})
        logger.debug("GET %s at height %d", url, height)

        try:
            with urlopen(request, timeout=self.timeout) as response:
                body = response.read()
        except HTTPError as e:
            if 400 <= e.code < 500:
                raise ChainStateNotFoundError(
                    f"GET {path} at height {height} returned HTTP {e.code}",
                    height=height,
                    cause=e,
                ) from e
            raise ChainStateUnavailableError(
                f"GET {path} at height {height} returned HTTP {e.code}", cause=e
            ) from e
        except (URLError, TimeoutError, OSError) as e:
            raise ChainStateUnavailableError(f"GET {path} at height {height} failed", cause=e) from e

        try:
            data = json.loads(body)
        except ValueError as e:
            raise ChainStateUnavailableError(
                f"GET {path} at height {height} returned invalid JSON", cause=e
            ) from e
        if not isinstance(data, dict):
            raise ChainStateUnavailableError(f"GET {path} at height {height} returned a non-object body")
        return data

    def _get(self, path: str, height: int, params: dict[str, str] | None = None) -> dict[str, Any]:
        if self.retries <= 0:
            return self._fetch(path, height, params)

        @self._retry_policy
        def attempt() -> dict[str, Any]:
            return self._fetch(path, height, params)

        try:
            return attempt()  # type: ignore[no-any-return]
        except RetryLimitReached as e:
            cause = e.__cause__
            if isinstance(cause, ChainStateUnavailableError):
                raise cause from e
            raise ChainStateUnavailableError(f"GET {path} at height {height} exhausted retries", cause=e) from e

    def _get_paginated(self, path: str, height: int, field: str) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        params = {"pagination.limit": str(PAGE_LIMIT)}
        while True:
            data = self._get(path, height, params)
            items.extend(data.get(field) or ())
            next_key = (data.get("pagination") or {}).get("next_key")
            if not next_key:
                return items
            params = {"pagination.limit": str(PAGE_LIMIT), "pagination.key": next_key}

    # ========== Bank Queries ==========

    def get_balances(self, addresses: list[str], height: int) -> list[AccountBalance]:
        return [
            AccountBalance(address=address, balance=self.get_account_balance(address, height), height=height)
            for address in addresses
        ]

    def get_supply(self, height: int, denom: str) -> Coin:
        data = self._get("/cosmos/bank/v1beta1/supply/by_denom", height, {"denom": denom})
        amount = data.get("amount") or {"denom": denom, "amount": "0"}
        return Coin.from_dict(amount)

    def get_account_balance(self, address: str, height: int) -> tuple[Coin, ...]:
        balances = self._get_paginated(f"/cosmos/bank/v1beta1/balances/{quote(address)}", height, "balances")
        return coins_from_dicts(balances)

    # ========== Governance Queries ==========

    def proposal(self, height: int, proposal_id: int) -> ChainProposal:
        data = self._get(f"/cosmos/gov/v1beta1/proposals/{proposal_id}", height)
        if "proposal" not in data:
            raise ChainStateNotFoundError(f"proposal {proposal_id} not found at height {height}", height=height)
        try:
            return ChainProposal.from_dict(data["proposal"])
        except (KeyError, TypeError, ValueError) as e:
            raise ChainStateUnavailableError(
                f"malformed proposal {proposal_id} at height {height}", cause=e
            ) from e

    def proposal_deposits(self, height: int, proposal_id: int) -> list[ChainDeposit]:
        deposits = self._get_paginated(f"/cosmos/gov/v1beta1/proposals/{proposal_id}/deposits", height, "deposits")
        try:
            return [ChainDeposit.from_dict(d) for d in deposits]
        except (KeyError, TypeError, ValueError) as e:
            raise ChainStateUnavailableError(
                f"malformed deposits of proposal {proposal_id} at height {height}", cause=e
            ) from e
