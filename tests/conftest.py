"""Shared pytest fixtures and test helpers for snipvault tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from snipvault.config.settings import SnipSettings
from snipvault.domain.models import Category, Item, Snapshot
from snipvault.infrastructure.database.engine import init_database
from snipvault.infrastructure.remote import RemoteMirrorError
from snipvault.infrastructure.vault import Vault

STAMP = 1_700_000_000_000


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer config and remote credentials out of the tests."""
    monkeypatch.delenv("SNIPVAULT_CONFIG", raising=False)
    monkeypatch.delenv("SNIPVAULT_REMOTE__URL", raising=False)
    monkeypatch.delenv("SNIPVAULT_REMOTE__API_KEY", raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo the root-handler swap done by configure_logging() in CLI tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    snip = logging.getLogger("snipvault")
    snip_level = snip.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    snip.setLevel(snip_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with the documents table."""
    engine = init_database(tmp_path / "test.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def vault(tmp_path: Path) -> Iterator[Vault]:
    """Local-only vault on a temp directory, remote pushes inline."""
    settings = SnipSettings.from_cli(root=tmp_path, sync=True)
    v = Vault(settings)
    try:
        yield v
    finally:
        v.close()


@pytest.fixture
def _isolated_vault(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated vault.

    Use via ``@pytest.mark.usefixtures("_isolated_vault")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_category(cid: str, name: str | None = None, order: int = 1) -> Category:
    return Category(
        id=cid, name=name or cid, created_at=STAMP, updated_at=STAMP, order=order
    )


def make_item(
    iid: str,
    *,
    category_id: str = "",
    order: int = 1,
    favorite: bool = False,
    title: str | None = None,
    text: str = "",
) -> Item:
    return Item(
        id=iid,
        title=title if title is not None else iid,
        text=text,
        category_id=category_id,
        favorite=favorite,
        order=order,
        created_at=STAMP,
        updated_at=STAMP,
    )


def make_snapshot(
    categories: list[Category] | None = None, items: list[Item] | None = None
) -> Snapshot:
    return Snapshot(categories=categories or [], items=items or [])


def create_category(vault: Vault, name: str) -> dict[str, Any]:
    """Create a category via VaultService, asserting success."""
    from snipvault.services.vault import VaultService

    result = VaultService(vault).create_category(name)
    assert result.ok, result.error
    return result.data


def create_item(vault: Vault, title: str, **kwargs: Any) -> dict[str, Any]:
    """Create an item via VaultService, asserting success."""
    from snipvault.services.vault import VaultService

    result = VaultService(vault).create_item(title, **kwargs)
    assert result.ok, result.error
    return result.data


def item_order(vault: Vault, category_id: str | None = None) -> list[str]:
    """Item ids of *category_id* (all items when None) sorted by ``(order, id)``."""
    from snipvault.domain.ordering import ordered
    from snipvault.services.vault import VaultService

    snapshot = VaultService(vault).snapshot()
    items = [
        it for it in snapshot.items if category_id is None or it.category_id == category_id
    ]
    return [it.id for it in ordered(items)]


class FakeMirror:
    """In-memory remote mirror that can be told to fail."""

    def __init__(self, stored: Snapshot | None = None, *, fail: bool = False) -> None:
        self.stored = stored
        self.fail = fail
        self.pushes: list[Snapshot] = []
        self.closed = False

    def fetch_one(self) -> Snapshot | None:
        if self.fail:
            raise RemoteMirrorError("offline")
        return self.stored

    def upsert_one(self, snapshot: Snapshot) -> None:
        if self.fail:
            raise RemoteMirrorError("offline")
        self.pushes.append(snapshot)
        self.stored = snapshot

    def close(self) -> None:
        self.closed = True
