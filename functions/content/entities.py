# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================


"""
Slug-addressed content shared by blog posts and case studies.

Slugs are unique per collection. The uniqueness check and the write that
follows are separate round trips, so two concurrent creates with the same
title can both succeed; this matches the single-operator usage of the site.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional, Type

from backend.db import DocumentStore, StoredDocument
from shared.errors import already_exists_error, not_found_error, validation_error
from shared.json_utils import convert_keys
from shared.records import from_document, to_document, utc_now
from shared.schemas import Payload
from shared.slugs import has_alphanumeric, slugify
from shared.types import Entity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityKind:
    """Describes one slug-addressed collection."""

    collection: str
    label: str
    record_type: Type[Entity]
    # Collections whose documents reference the parent by `parent_key` and are
    # deleted together with it.
    dependent_collections: tuple[str, ...] = ()
    parent_key: Optional[str] = None


class EntityRepository:
    def __init__(self, db: DocumentStore, kind: EntityKind):
        self.db = db
        self.kind = kind

    def _load(self, doc: StoredDocument) -> Entity:
        return from_document(self.kind.record_type, doc.data, id=doc.id)

    def _slug_for(self, title: str) -> str:
        slug = slugify(title)
        if not has_alphanumeric(slug):
            raise validation_error(
                "Validation error",
                [
                    {
                        "field": "title",
                        "message": "Title must contain at least one letter or digit",
                    }
                ],
            )
        return slug

    def _slug_holders(self, slug: str) -> list[StoredDocument]:
        return self.db.query(self.kind.collection, where=("slug", slug))

    def _conflict(self):
        return already_exists_error(
            f"A {self.kind.label.lower()} with this title already exists"
        )

    def get(self, entity_id: str) -> Optional[Entity]:
        data = self.db.get(self.kind.collection, entity_id)
        if data is None:
            return None
        return self._load(StoredDocument(id=entity_id, data=data))

    def get_by_slug(self, slug: str) -> Optional[Entity]:
        docs = self._slug_holders(slug)
        return self._load(docs[0]) if docs else None

    def list_all(self, published_only: bool = False) -> list[Entity]:
        docs = self.db.query(
            self.kind.collection,
            where=("published", True) if published_only else None,
            order_by="createdAt",
            descending=True,
        )
        return [self._load(doc) for doc in docs]

    def create(self, payload: Payload) -> Entity:
        """
        Inserts a new entity after checking that its slug is free.

        Raises:
            AppError: ALREADY_EXISTS if another entity already uses the slug,
                INVALID_ARGUMENT if the title yields an empty slug.
        """
        slug = self._slug_for(payload.title)
        if self._slug_holders(slug):
            raise self._conflict()

        now = utc_now()
        record = self.kind.record_type(
            id="", slug=slug, created_at=now, updated_at=now, **payload.model_dump()
        )
        record.id = self.db.add(self.kind.collection, to_document(record))
        logger.info("Created %s %s (%s)", self.kind.label, record.id, slug)
        return record

    def update(self, entity_id: str, payload: Payload) -> Entity:
        """
        Applies the supplied fields to an existing entity.

        The slug is recomputed only when the title changes; a slug held by the
        entity itself is not a conflict. Fields the caller omitted keep their
        stored values, and `id`/`createdAt` never change.
        """
        existing = self.get(entity_id)
        if existing is None:
            raise not_found_error(f"{self.kind.label} not found")

        slug = existing.slug
        if payload.title != existing.title:
            slug = self._slug_for(payload.title)
            if any(doc.id != entity_id for doc in self._slug_holders(slug)):
                raise self._conflict()

        changes = payload.model_dump(exclude_unset=True)
        changes.update(slug=slug, updated_at=utc_now())
        self.db.update(
            self.kind.collection, entity_id, convert_keys(changes, "snake_to_camel")
        )
        return dataclasses.replace(existing, **changes)

    def delete(self, entity_id: str) -> int:
        """
        Deletes an entity and its dependents in one atomic batch.

        Returns:
            int: The number of documents removed, parent included.
        """
        if self.db.get(self.kind.collection, entity_id) is None:
            raise not_found_error(f"{self.kind.label} not found")

        refs = [
            (collection, doc.id)
            for collection in self.kind.dependent_collections
            for doc in self.db.query(
                collection, where=(self.kind.parent_key, entity_id)
            )
        ]
        refs.append((self.kind.collection, entity_id))
        self.db.delete_batch(refs)
        logger.info(
            "Deleted %s %s with %d dependents",
            self.kind.label,
            entity_id,
            len(refs) - 1,
        )
        return len(refs)
