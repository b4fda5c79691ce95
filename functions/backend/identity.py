"""
Auth provider abstraction: ID token verification and user creation.

The callable surface receives already-verified identities from the Functions
runtime, so it only needs `create_user`; the REST surface also verifies bearer
tokens itself.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Optional, Protocol

from firebase_admin import auth

from shared.types import Identity


class InvalidTokenError(Exception):
    """Raised when a bearer token cannot be verified."""


class AuthClient(Protocol):
    def verify_id_token(self, token: str) -> Identity:
        ...

    def create_user(
        self, email: str, password: str, display_name: Optional[str] = None
    ) -> str:
        ...


@dataclass
class InMemoryAuthClient:
    """Test double: tokens map directly to uids, users are kept in a dict."""

    tokens: dict = field(default_factory=dict)
    users: dict = field(default_factory=dict)

    def issue_token(self, uid: str) -> str:
        token = f"token-{uid}-{uuid.uuid4().hex[:8]}"
        self.tokens[token] = uid
        return token

    def verify_id_token(self, token: str) -> Identity:
        uid = self.tokens.get(token)
        if uid is None:
            raise InvalidTokenError("Unknown token")
        return Identity(uid=uid, claims={"uid": uid})

    def create_user(
        self, email: str, password: str, display_name: Optional[str] = None
    ) -> str:
        if any(user["email"] == email for user in self.users.values()):
            raise ValueError(f"A user with email {email} already exists")
        uid = uuid.uuid4().hex
        self.users[uid] = {"email": email, "display_name": display_name}
        return uid


class FirebaseAuthClient:
    """Firebase Authentication via the Admin SDK (requires an initialized app)."""

    def verify_id_token(self, token: str) -> Identity:
        try:
            claims = auth.verify_id_token(token)
        except (ValueError, auth.InvalidIdTokenError, auth.ExpiredIdTokenError) as e:
            raise InvalidTokenError(str(e)) from e
        return Identity(uid=claims["uid"], claims=claims)

    def create_user(
        self, email: str, password: str, display_name: Optional[str] = None
    ) -> str:
        user_record = auth.create_user(
            email=email, password=password, display_name=display_name
        )
        return user_record.uid
