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


import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from content import contact
from shared.errors import AppError, ErrorKind
from shared.firebase_constants import CONTACT_SUBMISSIONS_COLLECTION
import main_testing_utils as testing

MESSAGE = {
    "name": "Grace",
    "email": "grace@example.com",
    "subject": "Hello",
    "message": "Loved the case study.",
}


class ContactTest(unittest.TestCase):

    def setUp(self):
        self.clients = testing.create_test_clients()

    def test_submit_without_identity(self):
        result = contact.submit_contact_form(self.clients, None, MESSAGE)

        self.assertTrue(result["success"])
        stored = self.clients.db.get(CONTACT_SUBMISSIONS_COLLECTION, result["id"])
        self.assertEqual(stored["email"], "grace@example.com")
        self.assertFalse(stored["read"])

    def test_submit_invalid(self):
        with self.assertRaises(AppError) as ctx:
            contact.submit_contact_form(
                self.clients, None, {**MESSAGE, "email": "grace", "message": ""}
            )
        self.assertEqual(ctx.exception.kind, ErrorKind.INVALID_ARGUMENT)
        self.assertEqual(
            sorted(d["field"] for d in ctx.exception.details), ["email", "message"]
        )

    def test_mark_as_read(self):
        submitted = contact.submit_contact_form(self.clients, None, MESSAGE)

        result = contact.mark_contact_as_read(
            self.clients, testing.admin(), {"id": submitted["id"]}
        )

        self.assertEqual(result, {"success": True})
        stored = self.clients.db.get(CONTACT_SUBMISSIONS_COLLECTION, submitted["id"])
        self.assertTrue(stored["read"])

    def test_mark_as_read_requires_admin(self):
        submitted = contact.submit_contact_form(self.clients, None, MESSAGE)
        with self.assertRaises(AppError) as ctx:
            contact.mark_contact_as_read(
                self.clients, testing.visitor(), {"id": submitted["id"]}
            )
        self.assertEqual(ctx.exception.kind, ErrorKind.PERMISSION_DENIED)

    def test_missing_submission(self):
        for operation in (contact.mark_contact_as_read, contact.delete_contact_submission):
            with self.assertRaises(AppError) as ctx:
                operation(self.clients, testing.admin(), {"id": "missing"})
            self.assertEqual(ctx.exception.kind, ErrorKind.NOT_FOUND)

            with self.assertRaises(AppError) as ctx:
                operation(self.clients, testing.admin(), {})
            self.assertEqual(ctx.exception.message, "Contact submission ID is required")

    def test_delete(self):
        submitted = contact.submit_contact_form(self.clients, None, MESSAGE)
        result = contact.delete_contact_submission(
            self.clients, testing.admin(), {"id": submitted["id"]}
        )
        self.assertEqual(result, {"success": True})
        self.assertIsNone(
            self.clients.db.get(CONTACT_SUBMISSIONS_COLLECTION, submitted["id"])
        )

    def test_list_newest_first(self):
        start = datetime(2025, 5, 1, tzinfo=timezone.utc)
        with patch(
            "content.contact.utc_now",
            side_effect=[start, start + timedelta(hours=1)],
        ):
            contact.submit_contact_form(self.clients, None, {**MESSAGE, "name": "Old"})
            contact.submit_contact_form(self.clients, None, {**MESSAGE, "name": "New"})

        submissions = contact.list_contact_submissions(self.clients, testing.admin())
        self.assertEqual([s["name"] for s in submissions], ["New", "Old"])

        with self.assertRaises(AppError) as ctx:
            contact.list_contact_submissions(self.clients, None)
        self.assertEqual(ctx.exception.kind, ErrorKind.UNAUTHENTICATED)


if __name__ == "__main__":
    unittest.main()
