"""PersistentStore — durable read/write of the whole snapshot.

Local copy: one JSON document in the SQLite ``documents`` table under
:data:`SNAPSHOT_KEY`.  Remote copy (optional): a :class:`RemoteMirror`.

- ``read()`` waits for pending pushes, then prefers the remote record and
  falls back to the local copy on any remote error, including "no record
  yet".  ``None`` means first run.
- ``write()`` commits the local copy synchronously, then pushes to the
  remote mirror on a single background worker (inline with ``sync=True``),
  so pushes land in write order.

INVARIANT: Remote failures are logged, never raised to the caller.

There is no locking between overlapping read-modify-write cycles; the
last ``write()`` replaces the whole snapshot.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING

from pydantic import ValidationError

from snipvault.domain.models import Snapshot
from snipvault.infrastructure.database.documents import read_document, write_document
from snipvault.infrastructure.remote import RemoteMirrorError

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from snipvault.infrastructure.remote import RemoteMirror

logger = logging.getLogger(__name__)

SNAPSHOT_KEY = "snipvault-v2"


class PersistentStore:
    """Whole-snapshot persistence with an optional best-effort remote mirror.

    Parameters:
        engine: SQLAlchemy engine with the ``documents`` table.
        remote: Remote mirror, or None for local-only mode.
        sync: Push to the remote mirror inline instead of in the background.
        push_timeout: Seconds to wait for each pending push when flushing.
    """

    def __init__(
        self,
        engine: Engine,
        *,
        remote: RemoteMirror | None = None,
        sync: bool = False,
        push_timeout: float = 30.0,
    ) -> None:
        self._engine = engine
        self._remote = remote
        self._push_timeout = push_timeout
        self._executor: ThreadPoolExecutor | None = None
        if remote is not None and not sync:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="snipvault-push"
            )
        self._futures: list[Future[None]] = []

    @property
    def remote(self) -> RemoteMirror | None:
        return self._remote

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def read(self) -> Snapshot | None:
        """Return the latest durable snapshot, or None if none was ever written."""
        if self._remote is not None:
            self.flush()
            try:
                remote_snapshot = self._remote.fetch_one()
            except RemoteMirrorError as exc:
                logger.warning("Remote read failed, using local copy: %s", exc)
            except Exception:
                logger.warning("Remote read failed unexpectedly, using local copy", exc_info=True)
            else:
                if remote_snapshot is not None:
                    return remote_snapshot
                logger.debug("No remote record yet, using local copy")
        return self.read_local()

    def read_local(self) -> Snapshot | None:
        """Return the local durable copy, or None."""
        with self._engine.connect() as conn:
            data = read_document(conn, SNAPSHOT_KEY)
        if data is None:
            return None
        try:
            return Snapshot.from_document(data)
        except ValidationError:
            logger.error("Local snapshot under %s is malformed", SNAPSHOT_KEY)
            raise

    def write(self, snapshot: Snapshot) -> None:
        """Persist *snapshot* locally, then mirror it remotely (best effort)."""
        with self._engine.begin() as conn:
            write_document(conn, SNAPSHOT_KEY, snapshot.to_document())

        if self._remote is None:
            return
        if self._executor is None:
            self._push(snapshot)
        else:
            self._futures = [f for f in self._futures if not f.done()]
            self._futures.append(self._executor.submit(self._push, snapshot))

    def flush(self) -> None:
        """Wait for in-flight remote pushes to finish."""
        for future in self._futures:
            try:
                future.result(timeout=self._push_timeout)
            except Exception:
                logger.debug("Remote push did not complete", exc_info=True)
        self._futures.clear()

    def close(self) -> None:
        """Flush pending pushes, stop the worker pool and close the mirror."""
        self.flush()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        if self._remote is not None:
            self._remote.close()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _push(self, snapshot: Snapshot) -> None:
        assert self._remote is not None
        try:
            self._remote.upsert_one(snapshot)
        except RemoteMirrorError as exc:
            logger.warning("Remote save failed, using local only: %s", exc)
        except Exception:
            logger.warning("Remote save failed unexpectedly, using local only", exc_info=True)
        else:
            logger.debug("Remote mirror updated")
