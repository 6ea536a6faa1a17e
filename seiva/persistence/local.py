"""
Local JSON-file backend.

Each collection lives in its own ``<name>.json`` document under the data
directory, as a list of camelCase records (the same shape the HTTP API
speaks). Datetimes are written as ISO-8601 UTC strings; attachments stay
inline as encoded strings. Disk I/O runs in a worker thread.
"""

import asyncio
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel

from seiva.core.logging import get_logger
from seiva.persistence.base import CollectionAdapter, DataBackend
from seiva.schemas.employee import Employee
from seiva.schemas.event import CalendarEvent
from seiva.schemas.student import Student
from seiva.schemas.transaction import Transaction

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class JsonCollection(CollectionAdapter[M]):
    """
    One collection stored as a JSON array.

    ``newest_first`` controls where inserts land so that ``load_all`` returns
    the same order the store keeps in memory.
    """

    def __init__(self, path: Path, model: Type[M], *, newest_first: bool = True, deletable: bool = False):
        self.path = path
        self.model = model
        self.name = path.stem
        self.newest_first = newest_first
        self.deletable = deletable
        self._lock = asyncio.Lock()

    # -- file access (runs in a thread) --

    def _read(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{self.path} does not contain a JSON array")
        return data

    def _write(self, records: List[Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".json.tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(records, f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(tmp, self.path)

    def _dump(self, entity: M) -> Dict[str, Any]:
        return entity.model_dump(mode="json", by_alias=True)

    @staticmethod
    def _index_of(records: List[Dict[str, Any]], entity_id: str) -> int:
        for i, record in enumerate(records):
            if record.get("id") == entity_id:
                return i
        return -1

    # -- contract --

    async def load_all(self) -> List[M]:
        records = await asyncio.to_thread(self._read)
        return [self.model.model_validate(r) for r in records]

    async def insert(self, entity: M) -> bool:
        record = self._dump(entity)

        def _insert() -> bool:
            records = self._read()
            if self._index_of(records, record["id"]) >= 0:
                return False
            if self.newest_first:
                records.insert(0, record)
            else:
                records.append(record)
            self._write(records)
            return True

        async with self._lock:
            return await asyncio.to_thread(_insert)

    async def update(self, entity: M) -> bool:
        record = self._dump(entity)

        def _update() -> bool:
            records = self._read()
            idx = self._index_of(records, record["id"])
            if idx < 0:
                return False
            records[idx] = record
            self._write(records)
            return True

        async with self._lock:
            return await asyncio.to_thread(_update)

    async def delete(self, entity_id: str) -> bool:
        if not self.deletable:
            return await super().delete(entity_id)

        def _delete() -> bool:
            records = self._read()
            idx = self._index_of(records, entity_id)
            if idx < 0:
                return False
            del records[idx]
            self._write(records)
            return True

        async with self._lock:
            return await asyncio.to_thread(_delete)


def create_local_backend(data_dir: os.PathLike) -> DataBackend:
    """Backend that keeps every collection in JSON files under ``data_dir``."""
    root = Path(data_dir)
    logger.info("Using local JSON backend", extra={"data_dir": str(root)})
    return DataBackend(
        students=JsonCollection(root / "students.json", Student),
        transactions=JsonCollection(root / "transactions.json", Transaction),
        events=JsonCollection(root / "events.json", CalendarEvent, newest_first=False, deletable=True),
        employees=JsonCollection(root / "employees.json", Employee),
    )
