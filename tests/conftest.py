"""Shared fixtures

`InMemoryRecordStore` is a dictionary-backed RecordStoreBaseDAO. Its insert
checks and writes under a lock, which gives it the same single-arbiter
semantics the Redis Lua script provides.
"""

import threading
from typing import Any

import pytest

from shortlinks.dao.base import RecordStoreBaseDAO
from shortlinks.dao.schema import get_schema
from shortlinks.dao.exceptions import UniquenessViolationError


class InMemoryRecordStore(RecordStoreBaseDAO):
    def __init__(self):
        self.records: dict[str, dict[str, dict[str, Any]]] = {}
        self.insert_calls: list[dict[str, Any]] = []
        self.find_calls: list[tuple[str, str, str]] = []
        self._lock = threading.Lock()

    def find_one(self, record_type, field, value, **kwargs):
        self.find_calls.append((record_type, field, value))
        for record in self.records.get(record_type, {}).values():
            if record.get(field) == value:
                return dict(record)
        return None

    def insert(self, record_type, fields, **kwargs):
        unique_field = get_schema(record_type).unique_field
        with self._lock:
            self.insert_calls.append(dict(fields))
            table = self.records.setdefault(record_type, {})
            if fields[unique_field] in table:
                raise UniquenessViolationError(f"Record '{record_type}' with {unique_field} '{fields[unique_field]}' already exists.")
            table[fields[unique_field]] = dict(fields)
        return self


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()
