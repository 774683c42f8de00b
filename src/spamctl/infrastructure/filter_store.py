"""Filter providers: where managed filters live.

:class:`FilterProvider` is the capability the orchestrator needs.  The
remote analytics client is an external collaborator; the shipped
:class:`JsonFilterProvider` keeps filters in a local JSON document keyed by
account id, which serves offline use and tests.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from spamctl.domain.errors import ProviderError
from spamctl.domain.filters import ExistingFilter, FilterSpec

logger = logging.getLogger(__name__)


@runtime_checkable
class FilterProvider(Protocol):
    """CRUD access to an account's filters.  Failures raise ProviderError."""

    def list_filters(self, account_id: str) -> list[ExistingFilter]: ...

    def create(self, account_id: str, spec: FilterSpec) -> ExistingFilter: ...

    def update(self, account_id: str, filter_id: str, spec: FilterSpec) -> ExistingFilter: ...

    def remove(self, account_id: str, filter_id: str) -> None: ...


class JsonFilterProvider:
    """File-backed filter provider.

    Document layout::

        {"accounts": {"<account id>": [<filter>, ...]}, "next_id": 1}

    Every mutation rewrites the document atomically.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    # ------------------------------------------------------------------
    # FilterProvider
    # ------------------------------------------------------------------

    def list_accounts(self) -> list[str]:
        return sorted(self._load()["accounts"])

    def list_filters(self, account_id: str) -> list[ExistingFilter]:
        raw = self._load()["accounts"].get(account_id, [])
        return [self._parse(item, account_id) for item in raw]

    def create(self, account_id: str, spec: FilterSpec) -> ExistingFilter:
        doc = self._load()
        filter_id = str(doc["next_id"])
        now = datetime.now(UTC)
        created = ExistingFilter(
            **spec.spec().model_dump(),
            id=filter_id,
            account_id=account_id,
            created=now,
            updated=now,
        )
        doc["next_id"] += 1
        doc["accounts"].setdefault(account_id, []).append(created.model_dump(mode="json"))
        self._save(doc)
        logger.debug("Created filter %s (%s) in account %s", filter_id, spec.name, account_id)
        return created

    def update(self, account_id: str, filter_id: str, spec: FilterSpec) -> ExistingFilter:
        doc = self._load()
        items = doc["accounts"].get(account_id, [])
        index = self._index_of(items, account_id, filter_id)
        previous = self._parse(items[index], account_id)
        updated = ExistingFilter(
            **spec.spec().model_dump(),
            id=filter_id,
            account_id=account_id,
            created=previous.created,
            updated=datetime.now(UTC),
        )
        items[index] = updated.model_dump(mode="json")
        self._save(doc)
        logger.debug("Updated filter %s (%s) in account %s", filter_id, spec.name, account_id)
        return updated

    def remove(self, account_id: str, filter_id: str) -> None:
        doc = self._load()
        items = doc["accounts"].get(account_id, [])
        del items[self._index_of(items, account_id, filter_id)]
        self._save(doc)
        logger.debug("Removed filter %s from account %s", filter_id, account_id)

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    @staticmethod
    def _index_of(items: list[dict[str, Any]], account_id: str, filter_id: str) -> int:
        for index, item in enumerate(items):
            if isinstance(item, dict) and item.get("id") == filter_id:
                return index
        msg = f"Filter {filter_id!r} not found in account {account_id!r}"
        raise ProviderError(msg, account_id=account_id, filter_id=filter_id)

    def _parse(self, item: Any, account_id: str) -> ExistingFilter:
        try:
            return ExistingFilter.model_validate(item)
        except ValidationError as exc:
            msg = f"Malformed filter in account {account_id!r} of {self.path}: {exc}"
            raise ProviderError(msg, path=str(self.path), account_id=account_id) from exc

    def _load(self) -> dict[str, Any]:
        if not self.path.is_file():
            return {"accounts": {}, "next_id": 1}
        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            msg = f"Cannot read filter store {self.path}: {exc}"
            raise ProviderError(msg, path=str(self.path)) from exc

        if not isinstance(doc, dict):
            msg = f"Filter store {self.path} must hold a JSON object"
            raise ProviderError(msg, path=str(self.path))
        doc.setdefault("accounts", {})
        doc.setdefault("next_id", 1)
        accounts = doc["accounts"]
        if not isinstance(accounts, dict) or not all(
            isinstance(items, list) for items in accounts.values()
        ):
            msg = f"Filter store {self.path} has a malformed 'accounts' mapping"
            raise ProviderError(msg, path=str(self.path))
        if not isinstance(doc["next_id"], int):
            msg = f"Filter store {self.path} has a malformed 'next_id'"
            raise ProviderError(msg, path=str(self.path))
        return doc

    def _save(self, doc: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            msg = f"Cannot write filter store {self.path}: {exc}"
            raise ProviderError(msg, path=str(self.path)) from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(doc, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            msg = f"Cannot write filter store {self.path}: {exc}"
            raise ProviderError(msg, path=str(self.path)) from exc
