"""
Validator avatar resolution.

Validators declare a Keybase identity (a 16-character key suffix) in their
description. The avatar shown by explorers is the primary picture of the
Keybase user owning that key.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from ledgerview.config import DEFAULT_KEYBASE_URL
from ledgerview.errors import AvatarLookupError

logger = logging.getLogger(__name__)


class AvatarResolver(ABC):
    """Resolves a validator identity string to an avatar URL."""

    @abstractmethod
    def get_avatar_url(self, identity: str) -> str:
        """
        Return the avatar URL for an identity, or "" when there is none.

        Raises:
            AvatarLookupError: If the lookup service fails
        """
        pass


class StaticAvatarResolver(AvatarResolver):
    """Resolver backed by a fixed identity -> URL mapping. Never touches the network."""

    def __init__(self, avatars: dict[str, str] | None = None) -> None:
        self.avatars = dict(avatars or {})

    def get_avatar_url(self, identity: str) -> str:
        return self.avatars.get(identity, "")


class KeybaseAvatarResolver(AvatarResolver):
    """
    Avatar lookup through the Keybase user lookup API.

    Example:
        resolver = KeybaseAvatarResolver(timeout=5)
        url = resolver.get_avatar_url("5A5B7E2A1F1B9C3D")
    """

    def __init__(self, base_url: str = DEFAULT_KEYBASE_URL, timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def get_avatar_url(self, identity: str) -> str:
        if not identity:
            return ""

        query = urlencode({"key_suffix": identity, "fields": "pictures"})
        url = f"{self.base_url}/user/lookup.json?{query}"
        request = Request(url, headers={"Accept": "application/json"})
        logger.debug("Looking up avatar for identity %s", identity)

        try:
            with urlopen(request, timeout=self.timeout) as response:
                data = json.loads(response.read())
        except HTTPError as e:
            raise AvatarLookupError(
                f"avatar lookup for identity {identity} returned HTTP {e.code}", cause=e
            ) from e
        except (URLError, TimeoutError, OSError) as e:
            raise AvatarLookupError(f"avatar lookup for identity {identity} failed", cause=e) from e
        except ValueError as e:
            raise AvatarLookupError(
                f"avatar lookup for identity {identity} returned invalid JSON", cause=e
            ) from e

        return _primary_picture(identity, data)


def _primary_picture(identity: str, data: Any) -> str:
    if not isinstance(data, dict):
        raise AvatarLookupError(f"avatar lookup for identity {identity} returned a non-object body")

    status = data.get("status") or {}
    code = status.get("code", 0)
    if code != 0:
        raise AvatarLookupError(
            f"avatar lookup for identity {identity} failed with status {code}: {status.get('desc', '')}"
        )

    users = data.get("them") or []
    if not users or not isinstance(users[0], dict):
        return ""

    pictures = users[0].get("pictures") or {}
    primary = pictures.get("primary") or {}
    return str(primary.get("url", ""))
