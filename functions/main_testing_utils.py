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


"""Fixtures shared by the unit tests."""

import io

from PIL import Image

from backend.dependencies import Clients, build_in_memory_clients
from shared.firebase_constants import USERS_COLLECTION
from shared.records import utc_now
from shared.types import Identity, Role

ADMIN_UID = "admin-uid"
SUPER_ADMIN_UID = "super-admin-uid"
VISITOR_UID = "visitor-uid"


def create_test_clients() -> Clients:
    """In-memory clients with one admin and one super admin account."""
    clients = build_in_memory_clients()
    for uid, role in (
        (ADMIN_UID, Role.ADMIN),
        (SUPER_ADMIN_UID, Role.SUPER_ADMIN),
    ):
        clients.db.set(
            USERS_COLLECTION,
            uid,
            {"email": f"{uid}@example.com", "role": role.value, "createdAt": utc_now()},
        )
    return clients


def admin() -> Identity:
    return Identity(uid=ADMIN_UID)


def super_admin() -> Identity:
    return Identity(uid=SUPER_ADMIN_UID)


def visitor() -> Identity:
    return Identity(uid=VISITOR_UID)


def create_test_image(
    width: int = 640, height: int = 480, image_format: str = "PNG"
) -> bytes:
    image = Image.new("RGB", (width, height), color=(200, 80, 40))
    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    return buffer.getvalue()
