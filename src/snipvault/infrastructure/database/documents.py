"""Whole-document reads and writes against the ``documents`` table.

The caller owns the transaction: pass a ``Connection`` obtained from
``engine.begin()`` (writes) or ``engine.connect()`` (reads).
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert

from snipvault.infrastructure.database.schema import documents

if TYPE_CHECKING:
    from sqlalchemy import Connection


def read_document(conn: Connection, key: str) -> Any | None:
    """Return the decoded JSON document stored under *key*, or None."""
    row = conn.execute(select(documents.c.data).where(documents.c.key == key)).first()
    if row is None:
        return None
    return json.loads(row.data)


def write_document(conn: Connection, key: str, value: Any) -> None:
    """Replace the document stored under *key* with *value*."""
    data = json.dumps(value, ensure_ascii=False)
    modified = datetime.now(UTC).isoformat()
    stmt = insert(documents).values(key=key, data=data, modified=modified)
    conn.execute(
        stmt.on_conflict_do_update(
            index_elements=[documents.c.key],
            set_={"data": stmt.excluded.data, "modified": stmt.excluded.modified},
        )
    )
