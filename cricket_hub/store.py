"""Generic document-store access over the SQL models.

Rows come back as plain dicts so callers (cache, feeds, adapters) never hold
ORM instances bound to a closed session.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from cricket_hub.models import ManualFixture, Post, Ranking

logger = logging.getLogger(__name__)

COLLECTIONS: dict[str, type] = {
    "posts": Post,
    "fixtures": ManualFixture,
    "icc_rankings": Ranking,
}


class StoreError(RuntimeError):
    pass


class StoreConflict(StoreError):
    """A write collided with a unique constraint (duplicate slug, match_id, ...)."""


def _row_to_dict(row, columns: Iterable[str] | None = None) -> dict[str, Any]:
    names = columns or [column.name for column in row.__table__.columns]
    return {name: getattr(row, name) for name in names}


class SqlDocumentStore:
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _model(self, collection: str):
        model = COLLECTIONS.get(collection)
        if model is None:
            raise StoreError(f"Unknown collection: {collection}")
        return model

    def _column(self, model, name: str):
        if name not in model.__table__.columns:
            raise StoreError(f"Unknown column {model.__tablename__}.{name}")
        return getattr(model, name)

    def _check_values(self, model, values: dict[str, Any]) -> None:
        unknown = sorted(set(values) - set(model.__table__.columns.keys()))
        if unknown:
            raise StoreError(f"Unknown columns for {model.__tablename__}: {', '.join(unknown)}")

    def _filtered(self, db: Session, model, filters: dict[str, Any] | None):
        query = db.query(model)
        for name, value in (filters or {}).items():
            query = query.filter(self._column(model, name) == value)
        return query

    def select(
        self,
        collection: str,
        *,
        filters: dict[str, Any] | None = None,
        search: str | None = None,
        search_fields: Iterable[str] = (),
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        columns: Iterable[str] | None = None,
    ) -> list[dict[str, Any]]:
        model = self._model(collection)
        column_names = list(columns) if columns else None
        for name in column_names or []:
            self._column(model, name)
        try:
            with self._session_factory() as db:
                query = self._filtered(db, model, filters)
                if search:
                    pattern = f"%{search}%"
                    query = query.filter(
                        or_(*[self._column(model, name).ilike(pattern) for name in search_fields])
                    )
                if order_by:
                    column = self._column(model, order_by)
                    query = query.order_by(column.desc() if descending else column.asc())
                if limit is not None:
                    query = query.limit(limit)
                return [_row_to_dict(row, column_names) for row in query.all()]
        except SQLAlchemyError as exc:
            logger.error("Select failed collection=%s error=%s", collection, exc)
            raise StoreError(f"Failed to read {collection}") from exc

    def select_one(self, collection: str, **filters: Any) -> dict[str, Any] | None:
        model = self._model(collection)
        try:
            with self._session_factory() as db:
                row = self._filtered(db, model, filters).first()
                return _row_to_dict(row) if row is not None else None
        except SQLAlchemyError as exc:
            logger.error("Select one failed collection=%s error=%s", collection, exc)
            raise StoreError(f"Failed to read {collection}") from exc

    def insert(self, collection: str, values: dict[str, Any]) -> dict[str, Any]:
        model = self._model(collection)
        self._check_values(model, values)
        try:
            with self._session_factory() as db:
                row = model(**values)
                db.add(row)
                db.commit()
                db.refresh(row)
                return _row_to_dict(row)
        except IntegrityError as exc:
            logger.warning("Insert conflict collection=%s error=%s", collection, exc.orig)
            raise StoreConflict(f"Duplicate value in {collection}") from exc
        except SQLAlchemyError as exc:
            logger.error("Insert failed collection=%s error=%s", collection, exc)
            raise StoreError(f"Failed to insert into {collection}") from exc

    def update(self, collection: str, filters: dict[str, Any], values: dict[str, Any]) -> int:
        model = self._model(collection)
        self._check_values(model, values)
        if not filters:
            raise StoreError("Refusing to update without filters")
        try:
            with self._session_factory() as db:
                rows = self._filtered(db, model, filters).all()
                for row in rows:
                    for name, value in values.items():
                        setattr(row, name, value)
                db.commit()
                return len(rows)
        except IntegrityError as exc:
            logger.warning("Update conflict collection=%s error=%s", collection, exc.orig)
            raise StoreConflict(f"Duplicate value in {collection}") from exc
        except SQLAlchemyError as exc:
            logger.error("Update failed collection=%s error=%s", collection, exc)
            raise StoreError(f"Failed to update {collection}") from exc

    def upsert(self, collection: str, values: dict[str, Any], key: str) -> dict[str, Any]:
        model = self._model(collection)
        self._check_values(model, values)
        if key not in values:
            raise StoreError(f"Upsert key {key} missing from values")
        try:
            with self._session_factory() as db:
                row = self._filtered(db, model, {key: values[key]}).one_or_none()
                if row is None:
                    row = model(**values)
                    db.add(row)
                else:
                    for name, value in values.items():
                        setattr(row, name, value)
                db.commit()
                db.refresh(row)
                return _row_to_dict(row)
        except IntegrityError as exc:
            logger.warning("Upsert conflict collection=%s error=%s", collection, exc.orig)
            raise StoreConflict(f"Duplicate value in {collection}") from exc
        except SQLAlchemyError as exc:
            logger.error("Upsert failed collection=%s error=%s", collection, exc)
            raise StoreError(f"Failed to upsert into {collection}") from exc

    def delete(self, collection: str, ids: Iterable[str]) -> int:
        model = self._model(collection)
        id_list = list(ids)
        if not id_list:
            return 0
        try:
            with self._session_factory() as db:
                deleted = (
                    db.query(model)
                    .filter(model.id.in_(id_list))
                    .delete(synchronize_session=False)
                )
                db.commit()
                return deleted
        except SQLAlchemyError as exc:
            logger.error("Delete failed collection=%s error=%s", collection, exc)
            raise StoreError(f"Failed to delete from {collection}") from exc

    def count(self, collection: str, filters: dict[str, Any] | None = None) -> int:
        model = self._model(collection)
        try:
            with self._session_factory() as db:
                return self._filtered(db, model, filters).count()
        except SQLAlchemyError as exc:
            logger.error("Count failed collection=%s error=%s", collection, exc)
            raise StoreError(f"Failed to count {collection}") from exc
