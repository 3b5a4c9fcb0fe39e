"""Optional remote mirror of the snapshot document.

The contract is two calls:

- ``fetch_one() -> Snapshot | None`` — None means "no record yet".
- ``upsert_one(snapshot)`` — replace the remote record in full.

Both raise :class:`RemoteMirrorError` on any failure.  Callers (the
persistent store) treat every error as "use the local copy".

:class:`HttpRemoteMirror` talks to a PostgREST-style table endpoint
holding a single row ``{id, data}``.  No URL or key configured means
local-only mode, which is normal and not an error.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from snipvault.domain.models import Snapshot

if TYPE_CHECKING:
    from snipvault.config.models import RemoteConfig

logger = logging.getLogger(__name__)

_LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


class RemoteMirrorError(Exception):
    """Error reading from or writing to the remote mirror."""


class RemoteMirror(Protocol):
    def fetch_one(self) -> Snapshot | None: ...

    def upsert_one(self, snapshot: Snapshot) -> None: ...

    def close(self) -> None: ...


class HttpRemoteMirror:
    """HTTP client for a single-row snapshot table."""

    def __init__(
        self,
        url: str,
        api_key: str,
        *,
        table: str = "snipvault",
        row_id: int = 1,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        base_url = url.rstrip("/")

        # Refuse non-HTTPS for remote hosts (the key would be sent in cleartext)
        if not base_url.startswith("https://"):
            host = urlparse(base_url).hostname or ""
            if host not in _LOCAL_HOSTS:
                msg = (
                    f"Remote mirror URL must use HTTPS (got {base_url}). "
                    "Use HTTPS to protect the API key, or use localhost for development."
                )
                raise ValueError(msg)

        self._path = f"/rest/v1/{table}"
        self._row_id = row_id
        self._client = httpx.Client(
            base_url=base_url,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def fetch_one(self) -> Snapshot | None:
        """GET the snapshot row. None if the row or its data is absent."""
        try:
            resp = self._client.get(
                self._path,
                params={"select": "data", "id": f"eq.{self._row_id}"},
            )
            resp.raise_for_status()
            rows: Any = resp.json()
        except httpx.HTTPError as e:
            raise RemoteMirrorError(f"Remote fetch failed: {e}") from e
        except ValueError as e:
            raise RemoteMirrorError(f"Remote fetch returned invalid JSON: {e}") from e

        if not isinstance(rows, list) or not rows:
            return None
        data = rows[0].get("data") if isinstance(rows[0], dict) else None
        if not data:
            return None
        try:
            return Snapshot.from_document(data)
        except ValidationError as e:
            raise RemoteMirrorError(f"Remote snapshot is malformed: {e}") from e

    def upsert_one(self, snapshot: Snapshot) -> None:
        """POST the snapshot row, replacing any existing one."""
        try:
            resp = self._client.post(
                self._path,
                json={"id": self._row_id, "data": snapshot.to_document()},
                headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteMirrorError(
                f"Remote upsert rejected: {e.response.status_code} {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise RemoteMirrorError(f"Remote upsert failed: {e}") from e

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()


def build_remote_mirror(config: RemoteConfig) -> HttpRemoteMirror | None:
    """Create the configured mirror, or None for local-only mode.

    A misconfigured mirror is logged and treated as absent.
    """
    logger.debug(
        "Remote mirror config: has_url=%s has_key=%s",
        bool(config.url),
        config.api_key is not None,
    )
    if not config.enabled:
        return None
    assert config.url is not None
    assert config.api_key is not None
    try:
        return HttpRemoteMirror(
            config.url,
            config.api_key.get_secret_value(),
            table=config.table,
            row_id=config.row_id,
            timeout=config.timeout,
        )
    except ValueError as e:
        logger.warning("Remote mirror disabled: %s", e)
        return None
