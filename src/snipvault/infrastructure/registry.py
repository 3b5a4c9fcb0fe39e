"""DeletedDefaultsRegistry — default categories the user has removed.

Stored as a JSON array of catalog names under :data:`REGISTRY_KEY` in the
local ``documents`` table.  Only catalog names are ever recorded (in their
catalog spelling); comparison is case-insensitive.  The set only grows,
except through :meth:`DeletedDefaultsRegistry.restore`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from snipvault.infrastructure.database.documents import read_document, write_document

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from snipvault.domain.catalog import DefaultCatalog

logger = logging.getLogger(__name__)

REGISTRY_KEY = "snipvault-deleted-defaults"


class DeletedDefaultsRegistry:
    """Durable set of removed default-category names."""

    def __init__(self, engine: Engine, catalog: DefaultCatalog) -> None:
        self._engine = engine
        self._catalog = catalog

    def names(self) -> frozenset[str]:
        """Current set of removed default names (catalog spelling)."""
        with self._engine.connect() as conn:
            data = read_document(conn, REGISTRY_KEY)
        if not isinstance(data, list):
            return frozenset()
        # Entries that are no longer catalog names are ignored.
        return frozenset(
            canonical
            for raw in data
            if isinstance(raw, str) and (canonical := self._catalog.canonical(raw)) is not None
        )

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        canonical = self._catalog.canonical(name)
        return canonical is not None and canonical in self.names()

    def record(self, name: str) -> bool:
        """Record *name* as removed if it is a catalog name.

        Returns True when *name* is a catalog name (whether or not it was
        already recorded), False when it was ignored.
        """
        canonical = self._catalog.canonical(name)
        if canonical is None:
            return False
        current = self.names()
        if canonical not in current:
            self._save(current | {canonical})
            logger.debug("Recorded deleted default category %r", canonical)
        return True

    def restore(self, name: str) -> bool:
        """Remove *name* from the registry. Returns True if it was present."""
        canonical = self._catalog.canonical(name)
        current = self.names()
        if canonical is None or canonical not in current:
            return False
        self._save(current - {canonical})
        logger.debug("Restored default category %r", canonical)
        return True

    def _save(self, names: frozenset[str]) -> None:
        ordered = [name for name in self._catalog.names if name in names]
        with self._engine.begin() as conn:
            write_document(conn, REGISTRY_KEY, ordered)
