"""Static credential table loaded once at startup."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from recordstore.exceptions import ConfigError

log = logging.getLogger(__name__)


class Credential(BaseModel):
    """One ``id:password`` pair. Accepts ``Id``/``Password`` keys as well."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(alias="Id", min_length=1)
    password: str = Field(alias="Password")


class CredentialTable(Mapping[str, Credential]):
    """Read-only ``id -> Credential`` mapping. Never mutated after construction."""

    def __init__(self, credentials: Iterable[Credential | Mapping[str, Any]] = ()):
        table: dict[str, Credential] = {}
        for raw in credentials:
            try:
                cred = raw if isinstance(raw, Credential) else Credential.model_validate(raw)
            except ValidationError as exc:
                raise ConfigError(f"Malformed credential entry: {exc}") from exc
            if cred.id in table:
                raise ConfigError(f"Duplicate credential id '{cred.id}'")
            table[cred.id] = cred
        self._table = MappingProxyType(table)

    def __getitem__(self, key: str) -> Credential:
        return self._table[key]

    def __iter__(self):
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"CredentialTable(ids={sorted(self._table)})"


def load_credential_table(path: Path | str) -> CredentialTable:
    """Read credentials from a JSON file.

    The file holds either ``{"AppUsers": [...]}`` or a bare list. A missing
    file gives an empty table, which rejects every request.
    """
    path = Path(path)
    if not path.exists():
        log.warning("Credentials file %s not found; all requests will be rejected", path)
        return CredentialTable()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot read credentials file {path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("AppUsers", data.get("app_users"))
    if not isinstance(data, list):
        raise ConfigError(f"Credentials file {path} must contain a list of users")

    table = CredentialTable(data)
    log.info("Loaded %d credential(s) from %s", len(table), path)
    return table
