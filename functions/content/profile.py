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
The site owner's profile and its ordered sub-resources.

The profile is a single document (`profile/main`). Work experience, education
and skills live in their own collections, point back at it through
`profileId`, and are listed by their `order` field.
"""

import logging
from typing import Optional, Type

from accounts.gate import require_admin
from backend.db import DocumentStore
from backend.dependencies import Clients
from shared.errors import not_found_error, reraise_as_internal
from shared.firebase_constants import (
    EDUCATION_COLLECTION,
    PROFILE_COLLECTION,
    PROFILE_DOC_ID,
    SKILLS_COLLECTION,
    WORK_EXPERIENCES_COLLECTION,
)
from shared.json_utils import convert_keys
from shared.records import from_document, to_document, to_response, utc_now
from shared.schemas import (
    EducationPayload,
    Payload,
    ProfilePayload,
    SkillPayload,
    WorkExperiencePayload,
    validate,
)
from shared.types import Education, Identity, Profile, Skill, WorkExperience

logger = logging.getLogger(__name__)


def _load_profile(db: DocumentStore) -> Optional[Profile]:
    data = db.get(PROFILE_COLLECTION, PROFILE_DOC_ID)
    if data is None:
        return None
    return from_document(Profile, data)


def update_profile(clients: Clients, identity: Optional[Identity], data: dict) -> dict:
    """
    Creates the profile on first use, otherwise updates the supplied fields.

    Returns:
        dict: `{"success": True, "profile": ...}` with the stored profile.
    """
    require_admin(clients.db, identity)
    payload = validate(ProfilePayload, data)

    with reraise_as_internal("Error updating profile"):
        now = utc_now()
        if clients.db.get(PROFILE_COLLECTION, PROFILE_DOC_ID) is None:
            fields = payload.model_dump()
            fields.update(created_at=now, updated_at=now)
            clients.db.set(
                PROFILE_COLLECTION,
                PROFILE_DOC_ID,
                convert_keys(fields, "snake_to_camel"),
            )
            logger.info("Created profile")
        else:
            changes = payload.model_dump(exclude_unset=True)
            changes["updated_at"] = now
            clients.db.update(
                PROFILE_COLLECTION,
                PROFILE_DOC_ID,
                convert_keys(changes, "snake_to_camel"),
            )
        profile = _load_profile(clients.db)

    return {"success": True, "profile": to_response(profile)}


def _next_order(db: DocumentStore, collection: str) -> int:
    """One past the highest `order` in the collection, or 1 when it is empty."""
    docs = db.query(collection, order_by="order", descending=True, limit=1)
    if not docs:
        return 1
    return (docs[0].data.get("order") or 0) + 1


def _add_profile_item(
    clients: Clients,
    identity: Optional[Identity],
    data: dict,
    collection: str,
    schema: Type[Payload],
    record_type: type,
    action: str,
) -> dict:
    require_admin(clients.db, identity)
    payload = validate(schema, data)

    with reraise_as_internal(f"Error adding {action}"):
        if clients.db.get(PROFILE_COLLECTION, PROFILE_DOC_ID) is None:
            raise not_found_error("Profile not found. Please create a profile first.")

        fields = payload.model_dump()
        if fields.get("order") is None:
            fields["order"] = _next_order(clients.db, collection)
        now = utc_now()
        record = record_type(
            id="",
            profile_id=PROFILE_DOC_ID,
            created_at=now,
            updated_at=now,
            **fields,
        )
        record.id = clients.db.add(collection, to_document(record))

    return to_response(record)


def add_work_experience(
    clients: Clients, identity: Optional[Identity], data: dict
) -> dict:
    return _add_profile_item(
        clients,
        identity,
        data,
        WORK_EXPERIENCES_COLLECTION,
        WorkExperiencePayload,
        WorkExperience,
        "work experience",
    )


def add_education(clients: Clients, identity: Optional[Identity], data: dict) -> dict:
    return _add_profile_item(
        clients,
        identity,
        data,
        EDUCATION_COLLECTION,
        EducationPayload,
        Education,
        "education",
    )


def add_skill(clients: Clients, identity: Optional[Identity], data: dict) -> dict:
    return _add_profile_item(
        clients, identity, data, SKILLS_COLLECTION, SkillPayload, Skill, "skill"
    )


def _ordered(db: DocumentStore, collection: str, record_type: type) -> list[dict]:
    docs = db.query(collection, where=("profileId", PROFILE_DOC_ID), order_by="order")
    return [
        to_response(from_document(record_type, doc.data, id=doc.id)) for doc in docs
    ]


def get_profile(clients: Clients) -> dict:
    """Returns the profile with its work experience, education and skills."""
    with reraise_as_internal("Error fetching profile"):
        profile = _load_profile(clients.db)
        if profile is None:
            raise not_found_error("Profile not found")
        return {
            **to_response(profile),
            "workExperiences": _ordered(
                clients.db, WORK_EXPERIENCES_COLLECTION, WorkExperience
            ),
            "education": _ordered(clients.db, EDUCATION_COLLECTION, Education),
            "skills": _ordered(clients.db, SKILLS_COLLECTION, Skill),
        }
