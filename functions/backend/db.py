"""
Document store abstraction over Firestore, SQL (Postgres) and an in-memory test implementation.

All three speak the same small vocabulary: documents are plain dicts addressed
by (collection, id), queried by a single equality filter with optional
ordering, and deleted in atomic batches.
"""

from __future__ import annotations

import copy
import json
import time
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional, Protocol

from google.cloud.firestore_v1 import Query
from google.cloud.firestore_v1.base_query import FieldFilter
from sqlalchemy import JSON, Column, Float, String, create_engine, select, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker


@dataclass
class StoredDocument:
    id: str
    data: dict


class DocumentStore(Protocol):
    """Interface for document database access."""

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        ...

    def add(self, collection: str, data: dict) -> str:
        ...

    def set(self, collection: str, doc_id: str, data: dict) -> None:
        ...

    def update(self, collection: str, doc_id: str, data: dict) -> None:
        ...

    def delete(self, collection: str, doc_id: str) -> None:
        ...

    def query(
        self,
        collection: str,
        *,
        where: Optional[tuple[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[StoredDocument]:
        ...

    def delete_batch(self, refs: list[tuple[str, str]]) -> None:
        ...

    def ping(self) -> None:
        ...


def _select(
    docs: list[StoredDocument],
    where: Optional[tuple[str, Any]],
    order_by: Optional[str],
    descending: bool,
    limit: Optional[int],
) -> list[StoredDocument]:
    """Applies Firestore-like filter/order/limit semantics to loaded documents."""
    if where:
        field_name, value = where
        docs = [doc for doc in docs if doc.data.get(field_name) == value]
    if order_by:
        # Firestore drops documents that lack the ordering field.
        docs = [doc for doc in docs if doc.data.get(order_by) is not None]
        docs.sort(key=lambda doc: doc.data[order_by], reverse=descending)
    if limit is not None:
        docs = docs[:limit]
    return docs


class InMemoryDocumentStore:
    """Simple in-memory document store for development and tests."""

    def __init__(self):
        self.collections: Dict[str, Dict[str, dict]] = {}

    def _collection(self, collection: str) -> Dict[str, dict]:
        return self.collections.setdefault(collection, {})

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        data = self._collection(collection).get(doc_id)
        return copy.deepcopy(data) if data is not None else None

    def add(self, collection: str, data: dict) -> str:
        doc_id = uuid.uuid4().hex
        self._collection(collection)[doc_id] = copy.deepcopy(data)
        return doc_id

    def set(self, collection: str, doc_id: str, data: dict) -> None:
        self._collection(collection)[doc_id] = copy.deepcopy(data)

    def update(self, collection: str, doc_id: str, data: dict) -> None:
        docs = self._collection(collection)
        if doc_id not in docs:
            raise KeyError(f"No document to update: {collection}/{doc_id}")
        docs[doc_id].update(copy.deepcopy(data))

    def delete(self, collection: str, doc_id: str) -> None:
        self._collection(collection).pop(doc_id, None)

    def query(
        self,
        collection: str,
        *,
        where: Optional[tuple[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[StoredDocument]:
        docs = [
            StoredDocument(id=doc_id, data=copy.deepcopy(data))
            for doc_id, data in self._collection(collection).items()
        ]
        return _select(docs, where, order_by, descending, limit)

    def delete_batch(self, refs: list[tuple[str, str]]) -> None:
        for collection, doc_id in refs:
            self.delete(collection, doc_id)

    def ping(self) -> None:
        return None

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.collections.clear()


class FirestoreDocumentStore:
    """Firestore-backed implementation wrapping a `firestore.client()` handle."""

    def __init__(self, client):
        self._db = client

    def _ref(self, collection: str, doc_id: str):
        return self._db.collection(collection).document(doc_id)

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        snapshot = self._ref(collection, doc_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    def add(self, collection: str, data: dict) -> str:
        _, doc_ref = self._db.collection(collection).add(data)
        return doc_ref.id

    def set(self, collection: str, doc_id: str, data: dict) -> None:
        self._ref(collection, doc_id).set(data)

    def update(self, collection: str, doc_id: str, data: dict) -> None:
        self._ref(collection, doc_id).update(data)

    def delete(self, collection: str, doc_id: str) -> None:
        self._ref(collection, doc_id).delete()

    def query(
        self,
        collection: str,
        *,
        where: Optional[tuple[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[StoredDocument]:
        query = self._db.collection(collection)
        if where:
            field_name, value = where
            query = query.where(filter=FieldFilter(field_name, "==", value))
        if order_by:
            direction = Query.DESCENDING if descending else Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
        if limit is not None:
            query = query.limit(limit)
        return [
            StoredDocument(id=snapshot.id, data=snapshot.to_dict())
            for snapshot in query.stream()
        ]

    def delete_batch(self, refs: list[tuple[str, str]]) -> None:
        batch = self._db.batch()
        for collection, doc_id in refs:
            batch.delete(self._ref(collection, doc_id))
        batch.commit()

    def ping(self) -> None:
        # Any round trip proves connectivity; the collection may be empty.
        list(self._db.collection("users").limit(1).stream())


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _json_dumps(value: Any) -> str:
    return json.dumps(value, default=_json_default)


class SqlDocumentStore:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).

    Documents live in one table keyed by (collection, id) with a JSON body;
    datetimes are stored as ISO-8601 strings.
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlDocumentStore")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
            json_serializer=_json_dumps,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        with self.Session() as session:
            row = session.get(DocumentRow, (collection, doc_id))
            return dict(row.data) if row else None

    def add(self, collection: str, data: dict) -> str:
        doc_id = uuid.uuid4().hex
        self.set(collection, doc_id, data)
        return doc_id

    def set(self, collection: str, doc_id: str, data: dict) -> None:
        with self.Session() as session:
            row = session.get(DocumentRow, (collection, doc_id))
            if row:
                row.data = dict(data)
            else:
                session.add(
                    DocumentRow(
                        collection=collection,
                        id=doc_id,
                        data=dict(data),
                        created_at=time.time(),
                    )
                )
            session.commit()

    def update(self, collection: str, doc_id: str, data: dict) -> None:
        with self.Session() as session:
            row = session.get(DocumentRow, (collection, doc_id))
            if not row:
                raise KeyError(f"No document to update: {collection}/{doc_id}")
            # Reassign so SQLAlchemy notices the JSON change.
            row.data = {**row.data, **data}
            session.commit()

    def delete(self, collection: str, doc_id: str) -> None:
        with self.Session() as session:
            row = session.get(DocumentRow, (collection, doc_id))
            if row:
                session.delete(row)
                session.commit()

    def query(
        self,
        collection: str,
        *,
        where: Optional[tuple[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[StoredDocument]:
        with self.Session() as session:
            stmt = (
                select(DocumentRow)
                .where(DocumentRow.collection == collection)
                .order_by(DocumentRow.created_at.asc())
            )
            rows = session.execute(stmt).scalars().all()
            docs = [StoredDocument(id=row.id, data=dict(row.data)) for row in rows]
        return _select(docs, where, order_by, descending, limit)

    def delete_batch(self, refs: list[tuple[str, str]]) -> None:
        with self.Session() as session:
            for collection, doc_id in refs:
                row = session.get(DocumentRow, (collection, doc_id))
                if row:
                    session.delete(row)
            session.commit()

    def ping(self) -> None:
        with self.Session() as session:
            session.execute(text("SELECT 1"))


Base = declarative_base()


class DocumentRow(Base):
    __tablename__ = "documents"

    collection = Column(String, primary_key=True)
    id = Column(String, primary_key=True)
    data = Column(JSON, nullable=False)
    created_at = Column(Float, nullable=False, index=True)
