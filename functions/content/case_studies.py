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


"""Case study operations. Sections and metrics are removed with their case study."""

from typing import Optional

from accounts.gate import require_admin
from backend.dependencies import Clients
from content.entities import EntityKind, EntityRepository
from shared.errors import not_found_error, reraise_as_internal
from shared.firebase_constants import (
    CASE_STUDIES_COLLECTION,
    CASE_STUDY_METRICS_COLLECTION,
    CASE_STUDY_SECTIONS_COLLECTION,
)
from shared.records import to_response
from shared.schemas import CaseStudyPayload, require_id, validate
from shared.types import CaseStudy, Identity

CASE_STUDIES = EntityKind(
    collection=CASE_STUDIES_COLLECTION,
    label="Case study",
    record_type=CaseStudy,
    dependent_collections=(
        CASE_STUDY_SECTIONS_COLLECTION,
        CASE_STUDY_METRICS_COLLECTION,
    ),
    parent_key="caseStudyId",
)


def _repository(clients: Clients) -> EntityRepository:
    return EntityRepository(clients.db, CASE_STUDIES)


def create_case_study(
    clients: Clients, identity: Optional[Identity], data: dict
) -> dict:
    require_admin(clients.db, identity)
    payload = validate(CaseStudyPayload, data)
    with reraise_as_internal("Error creating case study"):
        return to_response(_repository(clients).create(payload))


def update_case_study(
    clients: Clients, identity: Optional[Identity], data: dict
) -> dict:
    require_admin(clients.db, identity)
    case_study_id = require_id(data, "Case study")
    payload = validate(CaseStudyPayload, data)
    with reraise_as_internal("Error updating case study"):
        return to_response(_repository(clients).update(case_study_id, payload))


def delete_case_study(
    clients: Clients, identity: Optional[Identity], data: dict
) -> dict:
    require_admin(clients.db, identity)
    case_study_id = require_id(data, "Case study")
    with reraise_as_internal("Error deleting case study"):
        _repository(clients).delete(case_study_id)
    return {"success": True}


def list_case_studies(clients: Clients, published_only: bool = True) -> list[dict]:
    with reraise_as_internal("Error listing case studies"):
        case_studies = _repository(clients).list_all(published_only=published_only)
    return [to_response(case_study) for case_study in case_studies]


def get_case_study(clients: Clients, slug: str) -> dict:
    with reraise_as_internal("Error fetching case study"):
        case_study = _repository(clients).get_by_slug(slug)
    if case_study is None:
        raise not_found_error("Case study not found")
    return to_response(case_study)
