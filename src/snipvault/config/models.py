"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, snipvault.toml only contains
overrides.  A fresh install needs no config file at all (local-only mode).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    db_name: str = "snipvault.db"
    push_timeout: float = Field(default=30.0, gt=0)


class RemoteConfig(BaseModel):
    """[remote] section.

    The mirror is enabled only when both ``url`` and ``api_key`` are set.
    """

    model_config = {"frozen": True}

    url: str | None = None
    api_key: SecretStr | None = None
    table: str = "snipvault"
    row_id: int = 1
    timeout: float = 10.0

    @property
    def enabled(self) -> bool:
        return bool(self.url) and self.api_key is not None and bool(
            self.api_key.get_secret_value()
        )
