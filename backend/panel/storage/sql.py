import logging
from typing import Any, Dict, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from panel.core.clock import Clock
from panel.core.database import Base, build_engine, build_session_factory
from panel.core.exceptions import ConflictError
from panel.storage.base import Repository, Storage

logger = logging.getLogger(__name__)


class SQLRepository(Repository):
    """One short-lived session per operation."""

    def __init__(self, model, clock: Clock, session_factory):
        super().__init__(model, clock)
        self.session_factory = session_factory

    def _filtered(self, query, filters: Dict[str, Any]):
        for key, expected in filters.items():
            column = getattr(self.model, key)
            if isinstance(expected, (list, tuple, set, frozenset)):
                values = [v for v in expected if v is not None]
                clauses = [column.in_(values)] if values else []
                if len(values) != len(expected):
                    clauses.append(column.is_(None))
                query = query.filter(or_(*clauses))
            elif expected is None:
                query = query.filter(column.is_(None))
            else:
                query = query.filter(column == expected)
        return query

    def get(self, id: int):
        with self.session_factory() as db:
            return db.get(self.model, id)

    def list(self, filters=None, *, newest_first=False, order_by=None, limit=None):
        with self.session_factory() as db:
            query = self._filtered(db.query(self.model), filters or {})

            if newest_first:
                stamp = getattr(self.model, self.timestamp_field)
                query = query.order_by(stamp.desc(), self.model.id.desc())
            elif order_by:
                query = query.order_by(getattr(self.model, order_by), self.model.id)
            else:
                query = query.order_by(self.model.id)

            if limit is not None:
                query = query.limit(limit)
            return query.all()

    def count(self, **filters) -> int:
        with self.session_factory() as db:
            return self._filtered(db.query(self.model), filters).count()

    def _commit(self, db, obj):
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            logger.info("Integrity error on %s: %s", self.model.__tablename__, exc.orig)
            raise ConflictError(f"{self.model.__name__} violates a unique constraint") from exc
        db.refresh(obj)
        return obj

    def create(self, data: Dict[str, Any]):
        with self.session_factory() as db:
            obj = self.model(**self._stamped(data))
            db.add(obj)
            return self._commit(db, obj)

    def update(self, id: int, data: Dict[str, Any]):
        with self.session_factory() as db:
            obj = db.get(self.model, id)
            if obj is None:
                return None
            for key, value in self._patch(data).items():
                setattr(obj, key, value)
            return self._commit(db, obj)

    def delete(self, id: int) -> bool:
        with self.session_factory() as db:
            obj = db.get(self.model, id)
            if obj is None:
                return False
            db.delete(obj)
            db.commit()
            return True


class SQLStorage(Storage):
    """Relational backend (SQLite, PostgreSQL, MySQL) via SQLAlchemy."""

    def __init__(self, database_url: str, clock: Optional[Clock] = None, create_tables: bool = True):
        self.engine = build_engine(database_url)
        self.session_factory = build_session_factory(self.engine)
        super().__init__(clock)

        if create_tables:
            # Auto migrate (buat tabel kalau belum ada)
            Base.metadata.create_all(bind=self.engine)

    def _repository(self, model) -> Repository:
        return SQLRepository(model, lambda: self.clock(), self.session_factory)

    def close(self) -> None:
        self.engine.dispose()
