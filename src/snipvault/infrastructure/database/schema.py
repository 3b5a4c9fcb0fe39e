"""SQLAlchemy Core table definitions for the snipvault database.

The local durable cache is a small key/value document store: each row
holds one whole JSON document under a fixed storage key.
"""

from __future__ import annotations

from sqlalchemy import Column, MetaData, Table, Text

metadata = MetaData()

documents = Table(
    "documents",
    metadata,
    Column("key", Text, primary_key=True),
    Column("data", Text, nullable=False),  # JSON
    Column("modified", Text, nullable=False),
)
