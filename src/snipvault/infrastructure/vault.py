"""Vault — the single dependency injected into every service.

Owns the SQLite engine, the :class:`PersistentStore`, the
:class:`DeletedDefaultsRegistry`, and the :class:`SeedReconciler` built
over the default catalog.  The catalog and the registry are process-wide
state created here, once, and passed explicitly to the reconciler.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from snipvault.domain.catalog import DEFAULT_CATALOG, DefaultCatalog
from snipvault.domain.seeding import SeedReconciler
from snipvault.infrastructure.database.engine import init_database
from snipvault.infrastructure.registry import DeletedDefaultsRegistry
from snipvault.infrastructure.remote import build_remote_mirror
from snipvault.infrastructure.store import PersistentStore

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from snipvault.config.settings import SnipSettings
    from snipvault.infrastructure.remote import RemoteMirror

logger = logging.getLogger(__name__)


class Vault:
    """Repository bundling local storage, the remote mirror and seeding.

    Constructed once at CLI startup from :class:`SnipSettings`.  Services
    receive the Vault via their :class:`BaseService` constructor.

    Parameters:
        settings: Resolved settings.
        remote: Explicit mirror (overrides ``settings.remote``).
        catalog: Default catalog to reconcile against.
    """

    def __init__(
        self,
        settings: SnipSettings,
        *,
        remote: RemoteMirror | None = None,
        catalog: DefaultCatalog = DEFAULT_CATALOG,
    ) -> None:
        self._settings = settings
        self._engine: Engine = init_database(settings.db_path)
        mirror = remote if remote is not None else build_remote_mirror(settings.remote)
        if mirror is None:
            logger.debug("No remote mirror configured, running local-only")
        self._store = PersistentStore(
            self._engine,
            remote=mirror,
            sync=settings.sync,
            push_timeout=settings.store.push_timeout,
        )
        self._registry = DeletedDefaultsRegistry(self._engine, catalog)
        self._reconciler = SeedReconciler(catalog)

    @property
    def root(self) -> Path:
        return self._settings.root

    @property
    def settings(self) -> SnipSettings:
        return self._settings

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def store(self) -> PersistentStore:
        return self._store

    @property
    def registry(self) -> DeletedDefaultsRegistry:
        return self._registry

    @property
    def reconciler(self) -> SeedReconciler:
        return self._reconciler

    @property
    def catalog(self) -> DefaultCatalog:
        return self._reconciler.catalog

    def close(self) -> None:
        """Flush pending remote pushes and release the database."""
        self._store.close()
        self._engine.dispose()
