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


"""Contact form submissions: public intake, admin triage."""

import logging
from typing import Optional

from accounts.gate import require_admin
from backend.dependencies import Clients
from shared.errors import not_found_error, reraise_as_internal
from shared.firebase_constants import CONTACT_SUBMISSIONS_COLLECTION
from shared.records import from_document, to_document, to_response, utc_now
from shared.schemas import ContactFormPayload, require_id, validate
from shared.types import ContactSubmission, Identity

logger = logging.getLogger(__name__)


def submit_contact_form(
    clients: Clients, identity: Optional[Identity], data: dict
) -> dict:
    """Stores a submission from an anonymous visitor. No sign-in required."""
    payload = validate(ContactFormPayload, data)

    with reraise_as_internal("Error submitting contact form"):
        now = utc_now()
        submission = ContactSubmission(
            id="", read=False, created_at=now, updated_at=now, **payload.model_dump()
        )
        submission_id = clients.db.add(
            CONTACT_SUBMISSIONS_COLLECTION, to_document(submission)
        )

    logger.info("Received contact submission %s", submission_id)
    return {"success": True, "id": submission_id}


def _require_submission(clients: Clients, submission_id: str) -> None:
    if clients.db.get(CONTACT_SUBMISSIONS_COLLECTION, submission_id) is None:
        raise not_found_error("Contact submission not found")


def mark_contact_as_read(
    clients: Clients, identity: Optional[Identity], data: dict
) -> dict:
    require_admin(clients.db, identity)
    submission_id = require_id(data, "Contact submission")

    with reraise_as_internal("Error marking contact submission as read"):
        _require_submission(clients, submission_id)
        clients.db.update(
            CONTACT_SUBMISSIONS_COLLECTION,
            submission_id,
            {"read": True, "updatedAt": utc_now()},
        )

    return {"success": True}


def delete_contact_submission(
    clients: Clients, identity: Optional[Identity], data: dict
) -> dict:
    require_admin(clients.db, identity)
    submission_id = require_id(data, "Contact submission")

    with reraise_as_internal("Error deleting contact submission"):
        _require_submission(clients, submission_id)
        clients.db.delete(CONTACT_SUBMISSIONS_COLLECTION, submission_id)

    return {"success": True}


def list_contact_submissions(
    clients: Clients, identity: Optional[Identity]
) -> list[dict]:
    """Returns every submission, newest first."""
    require_admin(clients.db, identity)

    with reraise_as_internal("Error listing contact submissions"):
        docs = clients.db.query(
            CONTACT_SUBMISSIONS_COLLECTION, order_by="createdAt", descending=True
        )
        return [
            to_response(from_document(ContactSubmission, doc.data, id=doc.id))
            for doc in docs
        ]
