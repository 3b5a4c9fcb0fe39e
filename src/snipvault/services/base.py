"""BaseService — abstract foundation for all snipvault services.

Every service receives a :class:`Vault` at construction time.  Each
mutating operation is one cycle::

    snapshot = self._load()     # read + reconcile (seeds on first run)
    ...                         # mutate in memory
    self._commit(snapshot)      # write the whole snapshot

Cycles are not serialized against each other: two overlapping cycles
each write their own full snapshot and the later write wins.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from snipvault.services.result import ServiceResult

if TYPE_CHECKING:
    from snipvault.domain.models import Snapshot
    from snipvault.infrastructure.vault import Vault

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes."""

    def __init__(self, vault: Vault) -> None:
        self._vault = vault

    def _load(self) -> Snapshot:
        """Read the current snapshot and reconcile the default catalog into it.

        On first run (nothing stored yet) the full default catalog, items
        included, is seeded and written.  Categories added by a later
        reconciliation are written back so they are created only once.
        """
        store = self._vault.store
        reconciler = self._vault.reconciler
        deleted = self._vault.registry.names()

        snapshot = store.read()
        if snapshot is None:
            seeded = reconciler.initial_snapshot(deleted)
            logger.info(
                "Seeded new store: %d categories, %d items",
                len(seeded.categories),
                len(seeded.items),
            )
            store.write(seeded)
            return seeded

        reconciled = reconciler.reconcile(snapshot, deleted)
        if reconciled is not snapshot:
            added = len(reconciled.categories) - len(snapshot.categories)
            logger.debug("Reconciled %d missing default categories", added)
            store.write(reconciled)
        return reconciled

    def _commit(self, snapshot: Snapshot) -> None:
        """Replace the stored snapshot with *snapshot*."""
        self._vault.store.write(snapshot)

    @staticmethod
    def _fail(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        logger.debug("%s failed: %s", op, code)
        return ServiceResult.failure(op, code, message, **detail)
