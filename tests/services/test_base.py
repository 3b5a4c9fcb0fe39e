"""Tests for BaseService — load/reconcile/commit cycle."""

from __future__ import annotations

from pathlib import Path

from snipvault.config.settings import SnipSettings
from snipvault.domain.catalog import DEFAULT_CATALOG
from snipvault.domain.models import Snapshot
from snipvault.infrastructure.vault import Vault
from snipvault.services.base import BaseService
from snipvault.services.transfer import TransferService
from snipvault.services.vault import VaultService
from tests.conftest import FakeMirror, make_category, make_snapshot


class _Probe(BaseService):
    def load(self) -> Snapshot:
        return self._load()


class TestLoad:
    def test_first_run_seeds_and_persists(self, vault: Vault) -> None:
        assert vault.store.read() is None
        snap = _Probe(vault).load()
        assert [c.name for c in snap.categories] == list(DEFAULT_CATALOG.names)
        assert [c.order for c in snap.categories] == list(range(1, 8))
        assert len(snap.items) == 21
        assert vault.store.read() == snap

    def test_second_load_is_stable(self, vault: Vault) -> None:
        first = _Probe(vault).load()
        assert _Probe(vault).load() == first

    def test_reconciled_categories_written_back(self, vault: Vault) -> None:
        vault.store.write(make_snapshot([make_category("mine", "Mine", order=1)]))
        first = _Probe(vault).load()
        second = _Probe(vault).load()
        assert len(first.categories) == 8
        # ids are generated once, then persisted
        assert [c.id for c in first.categories] == [c.id for c in second.categories]

    def test_deleted_defaults_not_seeded_first_run(self, vault: Vault) -> None:
        vault.registry.record("Coding")
        snap = _Probe(vault).load()
        assert "Coding" not in [c.name for c in snap.categories]

    def test_remote_snapshot_preferred(self, tmp_path: Path) -> None:
        remote = make_snapshot([make_category("r", "Remote", order=1)])
        mirror = FakeMirror(remote)
        v = Vault(SnipSettings.from_cli(root=tmp_path, sync=True), remote=mirror)
        try:
            snap = _Probe(v).load()
            assert snap.categories[0].name == "Remote"
            # reconciliation result pushed back to the mirror
            assert mirror.stored == snap
        finally:
            v.close()


class TestServiceInheritance:
    def test_services_extend_base(self) -> None:
        assert issubclass(VaultService, BaseService)
        assert issubclass(TransferService, BaseService)

    def test_vault_injection(self, vault: Vault) -> None:
        assert VaultService(vault)._vault is vault
