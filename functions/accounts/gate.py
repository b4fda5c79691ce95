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
Role checks for callable and REST operations.

Roles are read from `users/{uid}` on every call; nothing is cached, so a
revoked role takes effect on the caller's next request.
"""

import logging
from typing import Any, Optional

from backend.db import DocumentStore
from shared.errors import internal_error, permission_denied_error, unauthenticated_error
from shared.firebase_constants import USERS_COLLECTION
from shared.types import Identity, Role

logger = logging.getLogger(__name__)

ADMIN_ROLES = frozenset({Role.ADMIN.value, Role.SUPER_ADMIN.value})
SUPER_ADMIN_ROLES = frozenset({Role.SUPER_ADMIN.value})


def identity_from_auth(auth_data: Any) -> Optional[Identity]:
    """
    Converts the Functions runtime's `req.auth` into an Identity.

    Args:
        auth_data: `https_fn.CallableRequest.auth`, None for anonymous callers.

    Returns:
        The caller's Identity, or None when the request carried no token.
    """
    if auth_data is None:
        return None
    return Identity(uid=auth_data.uid, claims=dict(auth_data.token or {}))


def require_role(
    db: DocumentStore,
    identity: Optional[Identity],
    roles: frozenset,
    message: str,
) -> Role:
    """
    Verifies that the caller is signed in and holds one of `roles`.

    Args:
        db: Store holding the `users` collection.
        identity: The verified caller, or None.
        roles: Accepted role values.
        message: PERMISSION_DENIED message for callers without a matching role.

    Returns:
        The caller's role. Only `role` is read from the account record.

    Raises:
        AppError: UNAUTHENTICATED without an identity, PERMISSION_DENIED when
            the account is missing or lacks the role, INTERNAL when the account
            record cannot be read.
    """
    if identity is None:
        raise unauthenticated_error()

    try:
        account = db.get(USERS_COLLECTION, identity.uid)
    except Exception as e:
        logger.exception("Failed to read account record for %s", identity.uid)
        raise internal_error("Error verifying user permissions", cause=e) from e

    if not account or account.get("role") not in roles:
        raise permission_denied_error(message)
    return Role(account["role"])


def require_admin(db: DocumentStore, identity: Optional[Identity]) -> Role:
    return require_role(db, identity, ADMIN_ROLES, "User must be an admin")


def require_super_admin(
    db: DocumentStore, identity: Optional[Identity]
) -> Role:
    return require_role(db, identity, SUPER_ADMIN_ROLES, "User must be a super admin")
