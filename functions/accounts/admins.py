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


"""Admin account management (super admins only)."""

from typing import Optional

from accounts.gate import require_super_admin
from backend.dependencies import Clients
from shared.errors import not_found_error, reraise_as_internal
from shared.firebase_constants import USERS_COLLECTION
from shared.records import to_document, utc_now
from shared.schemas import CreateAdminPayload, UpdateAdminRolePayload, validate
from shared.types import AdminAccount, Identity, Role


def create_admin(clients: Clients, identity: Optional[Identity], data: dict) -> dict:
    """
    Creates an auth user and records it in `users` with the admin role.

    New accounts always start as `admin`; promotion goes through
    update_admin_role.
    """
    require_super_admin(clients.db, identity)
    payload = validate(CreateAdminPayload, data)

    with reraise_as_internal("Error creating admin user"):
        uid = clients.auth.create_user(
            email=payload.email,
            password=payload.password,
            display_name=payload.display_name,
        )
        account = AdminAccount(
            uid=uid,
            email=payload.email,
            role=Role.ADMIN,
            created_at=utc_now(),
            created_by=identity.uid,
        )
        clients.db.set(
            USERS_COLLECTION,
            uid,
            to_document(account, exclude=("uid", "updated_at", "updated_by")),
        )

    return {"success": True, "uid": uid}


def update_admin_role(
    clients: Clients, identity: Optional[Identity], data: dict
) -> dict:
    require_super_admin(clients.db, identity)
    payload = validate(UpdateAdminRolePayload, data)

    with reraise_as_internal("Error updating admin role"):
        if clients.db.get(USERS_COLLECTION, payload.uid) is None:
            raise not_found_error("Admin user not found")
        clients.db.update(
            USERS_COLLECTION,
            payload.uid,
            {
                "role": payload.role.value,
                "updatedAt": utc_now(),
                "updatedBy": identity.uid,
            },
        )

    return {"success": True}
