import itertools
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional

from panel.core.clock import Clock
from panel.core.exceptions import ConflictError
from panel.storage.base import Repository, Storage


def _matches(row, filters: Dict[str, Any]) -> bool:
    for key, expected in filters.items():
        actual = getattr(row, key)
        if isinstance(expected, (list, tuple, set, frozenset)):
            if actual not in expected:
                return False
        elif actual != expected:
            return False
    return True


class MemoryRepository(Repository):
    """Rows kept in a dict, in insertion order, with ids from an injected counter."""

    def __init__(self, model, clock: Clock, ids: Iterator[int]):
        super().__init__(model, clock)
        self._ids = ids
        self._rows: Dict[int, Any] = {}
        self._defaults: Dict[str, Any] = {}
        self._unique: List[str] = []

        for column in model.__table__.columns:
            if column.primary_key:
                continue
            if column.unique:
                self._unique.append(column.key)
            default = column.default
            self._defaults[column.key] = default.arg if default is not None and default.is_scalar else None

    def _check_unique(self, values: Dict[str, Any], skip_id: Optional[int] = None) -> None:
        for key in self._unique:
            value = values.get(key)
            if value is None:
                continue
            for row in self._rows.values():
                if row.id != skip_id and getattr(row, key) == value:
                    raise ConflictError(f"{self.model.__name__} with this {key} already exists")

    def get(self, id: int):
        return self._rows.get(id)

    def list(self, filters=None, *, newest_first=False, order_by=None, limit=None):
        rows = [row for row in self._rows.values() if _matches(row, filters or {})]

        if newest_first:
            rows.sort(key=lambda r: (getattr(r, self.timestamp_field) or datetime.min, r.id), reverse=True)
        elif order_by:
            rows.sort(key=lambda r: (getattr(r, order_by), r.id))

        if limit is not None:
            rows = rows[:limit]
        return rows

    def count(self, **filters) -> int:
        return sum(1 for row in self._rows.values() if _matches(row, filters))

    def create(self, data: Dict[str, Any]):
        values = dict(self._defaults)
        values.update(self._stamped(data))
        self._check_unique(values)

        row = self.model(id=next(self._ids), **values)
        self._rows[row.id] = row
        return row

    def update(self, id: int, data: Dict[str, Any]):
        row = self._rows.get(id)
        if row is None:
            return None

        values = self._patch(data)
        self._check_unique(values, skip_id=id)
        for key, value in values.items():
            setattr(row, key, value)
        return row

    def delete(self, id: int) -> bool:
        return self._rows.pop(id, None) is not None


class MemoryStorage(Storage):
    """Process-local store, used when no DATABASE_URL is configured."""

    def __init__(self, clock: Optional[Clock] = None, id_factory: Callable[[], Iterator[int]] = None):
        self._id_factory = id_factory or (lambda: itertools.count(1))
        super().__init__(clock)

    def _repository(self, model) -> Repository:
        return MemoryRepository(model, lambda: self.clock(), self._id_factory())
