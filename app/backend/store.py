"""
Record store for the reflection backend.

Every entity lives in an id-keyed ``Collection`` queried with equality
``where`` filters, an ``order_by`` mapping of field -> "asc"/"desc" and an
optional ``limit``. ``Database`` keeps everything in memory; ``JsonFileDatabase``
writes the whole store to one JSON file after each change.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

from app.core.errors import DuplicateRecordError, RecordNotFoundError
from app.core.models import (
    Answer,
    CalendarConnection,
    Meeting,
    NotificationSettings,
    Question,
    Template,
    User,
)
from app.profile.models import UserProfile


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _matches(row: Dict[str, Any], where: Optional[Dict[str, Any]]) -> bool:
    if not where:
        return True
    return all(row.get(field) == value for field, value in where.items())


def _sort_key(value: Any):
    # None sorts after any real value in ascending order
    return (value is None, value)


class Collection(Generic[ModelT]):
    def __init__(self, name: str, model: Type[ModelT]):
        self.name = name
        self.model = model
        self._rows: Dict[str, Dict[str, Any]] = {}

    def _flush(self) -> None:
        """Hook for persistent stores; in-memory collections have nothing to write."""

    def list(
        self,
        where: Optional[Dict[str, Any]] = None,
        order_by: Optional[Dict[str, str]] = None,
        limit: Optional[int] = None,
    ) -> List[ModelT]:
        rows = [row for row in self._rows.values() if _matches(row, where)]
        # Stable sorts applied last key first give a multi-key ordering
        for field, direction in reversed(list((order_by or {}).items())):
            rows.sort(key=lambda r: _sort_key(r.get(field)), reverse=direction.lower() == "desc")
        if limit is not None:
            rows = rows[:limit]
        return [self.model.model_validate(row) for row in rows]

    def get(self, record_id: str) -> Optional[ModelT]:
        row = self._rows.get(record_id)
        if row is None:
            return None
        return self.model.model_validate(row)

    def create(self, record: ModelT) -> ModelT:
        record_id = getattr(record, "id")
        if record_id in self._rows:
            raise DuplicateRecordError(self.name, record_id)
        self._rows[record_id] = record.model_dump()
        self._flush()
        return self.model.model_validate(self._rows[record_id])

    def update(self, record_id: str, **changes: Any) -> ModelT:
        row = self._rows.get(record_id)
        if row is None:
            raise RecordNotFoundError(self.name, record_id)
        updated = self.model.model_validate({**row, **changes, "id": record_id})
        self._rows[record_id] = updated.model_dump()
        self._flush()
        return updated

    def delete(self, record_id: str) -> None:
        if record_id not in self._rows:
            raise RecordNotFoundError(self.name, record_id)
        del self._rows[record_id]
        self._flush()

    def count(self, where: Optional[Dict[str, Any]] = None) -> int:
        return sum(1 for row in self._rows.values() if _matches(row, where))

    def dump_rows(self) -> Dict[str, Dict[str, Any]]:
        return {
            record_id: self.model.model_validate(row).model_dump(mode="json")
            for record_id, row in self._rows.items()
        }

    def load_rows(self, raw_rows: Dict[str, Dict[str, Any]]) -> None:
        self._rows = {
            record_id: self.model.model_validate(raw).model_dump()
            for record_id, raw in raw_rows.items()
        }


class Database:
    """All collections of the reflection backend, held in memory."""

    def __init__(self) -> None:
        self.meetings: Collection[Meeting] = self._make_collection("meetings", Meeting)
        self.templates: Collection[Template] = self._make_collection("templates", Template)
        self.questions: Collection[Question] = self._make_collection("questions", Question)
        self.answers: Collection[Answer] = self._make_collection("answers", Answer)
        self.notification_settings: Collection[NotificationSettings] = self._make_collection(
            "notification_settings", NotificationSettings
        )
        self.user_profiles: Collection[UserProfile] = self._make_collection("user_profiles", UserProfile)
        self.users: Collection[User] = self._make_collection("users", User)
        self.calendar_connections: Collection[CalendarConnection] = self._make_collection(
            "calendar_connections", CalendarConnection
        )

    def _make_collection(self, name: str, model: Type[ModelT]) -> Collection[ModelT]:
        return Collection(name, model)

    def collections(self) -> List[Collection]:
        return [value for value in vars(self).values() if isinstance(value, Collection)]


class _JsonBackedCollection(Collection[ModelT]):
    def __init__(self, name: str, model: Type[ModelT], database: "JsonFileDatabase"):
        super().__init__(name, model)
        self._database = database

    def _flush(self) -> None:
        self._database.save()


class JsonFileDatabase(Database):
    """Database persisted as a single JSON document keyed by collection name."""

    def __init__(self, path: str):
        self.path = Path(path)
        self._loading = True
        super().__init__()
        self._load()
        self._loading = False

    def _make_collection(self, name: str, model: Type[ModelT]) -> Collection[ModelT]:
        return _JsonBackedCollection(name, model, self)

    def _load(self) -> None:
        if not self.path.exists():
            return
        with open(self.path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        for collection in self.collections():
            collection.load_rows(raw.get(collection.name, {}))

    def save(self) -> None:
        if self._loading:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {collection.name: collection.dump_rows() for collection in self.collections()}
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        os.replace(tmp_path, self.path)


def select_database(backend: str, path: Optional[str] = None) -> Database:
    """Build the store named by STORE_BACKEND ("memory" or "json")."""
    if backend == "memory":
        return Database()
    if backend == "json":
        if not path:
            raise ValueError("STORE_PATH is required for the json store")
        logger.info(f"Using JSON store at {path}")
        return JsonFileDatabase(path)
    raise ValueError(f"Unsupported STORE_BACKEND: {backend}")
