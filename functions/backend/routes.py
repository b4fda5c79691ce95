"""
HTTP routes for the REST API.

Every write delegates to the same operation the callable functions run; the
routes only translate paths, query strings and bearer tokens into an
identity and a payload.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Header, Query

from accounts import admins
from backend.config import get_settings
from backend.dependencies import Clients, get_clients
from backend.identity import InvalidTokenError
from backend.schemas import (
    AdminCreatedResponse,
    ContactSubmittedResponse,
    HealthResponse,
    SuccessResponse,
)
from content import blog_posts, case_studies, contact, profile
from shared.errors import unauthenticated_error
from shared.records import utc_now
from shared.types import Identity

logger = logging.getLogger(__name__)

router = APIRouter()


def get_identity(
    authorization: Optional[str] = Header(default=None),
    clients: Clients = Depends(get_clients),
) -> Optional[Identity]:
    """Resolves `Authorization: Bearer <token>`; None when the header is absent."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise unauthenticated_error("Invalid authorization header")
    try:
        return clients.auth.verify_id_token(token.strip())
    except InvalidTokenError as e:
        raise unauthenticated_error("Invalid or expired token") from e


@router.get("/health", response_model=HealthResponse)
def health(clients: Clients = Depends(get_clients)):
    settings = get_settings()
    database = {"configured": bool(settings.database_url), "status": "unknown"}
    if settings.database_url:
        try:
            clients.db.ping()
            database["status"] = "connected"
        except Exception as e:
            logger.warning("Database health check failed: %s", e)
            database.update(status="error", error=str(e) or type(e).__name__)
    return {
        "status": "ok",
        "timestamp": utc_now().isoformat(),
        "environment": settings.environment,
        "database": database,
    }


# Blog posts


@router.get("/blog-posts")
def list_blog_posts(
    published: bool = Query(default=False),
    clients: Clients = Depends(get_clients),
):
    return blog_posts.list_blog_posts(clients, published_only=published)


@router.get("/blog-posts/{slug}")
def get_blog_post(slug: str, clients: Clients = Depends(get_clients)):
    return blog_posts.get_blog_post(clients, slug)


@router.post("/blog-posts", status_code=201)
def create_blog_post(
    data: dict = Body(...),
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return blog_posts.create_blog_post(clients, identity, data)


@router.put("/blog-posts/{post_id}")
def update_blog_post(
    post_id: str,
    data: dict = Body(...),
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return blog_posts.update_blog_post(clients, identity, {**data, "id": post_id})


@router.delete("/blog-posts/{post_id}", response_model=SuccessResponse)
def delete_blog_post(
    post_id: str,
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return blog_posts.delete_blog_post(clients, identity, {"id": post_id})


# Case studies


@router.get("/case-studies")
def list_case_studies(
    published: bool = Query(default=False),
    clients: Clients = Depends(get_clients),
):
    return case_studies.list_case_studies(clients, published_only=published)


@router.get("/case-studies/{slug}")
def get_case_study(slug: str, clients: Clients = Depends(get_clients)):
    return case_studies.get_case_study(clients, slug)


@router.post("/case-studies", status_code=201)
def create_case_study(
    data: dict = Body(...),
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return case_studies.create_case_study(clients, identity, data)


@router.put("/case-studies/{case_study_id}")
def update_case_study(
    case_study_id: str,
    data: dict = Body(...),
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return case_studies.update_case_study(
        clients, identity, {**data, "id": case_study_id}
    )


@router.delete("/case-studies/{case_study_id}", response_model=SuccessResponse)
def delete_case_study(
    case_study_id: str,
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return case_studies.delete_case_study(clients, identity, {"id": case_study_id})


# Profile


@router.get("/profile")
def get_profile(clients: Clients = Depends(get_clients)):
    return profile.get_profile(clients)


@router.put("/profile")
def update_profile(
    data: dict = Body(...),
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return profile.update_profile(clients, identity, data)


@router.post("/profile/work-experience", status_code=201)
def add_work_experience(
    data: dict = Body(...),
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return profile.add_work_experience(clients, identity, data)


@router.post("/profile/education", status_code=201)
def add_education(
    data: dict = Body(...),
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return profile.add_education(clients, identity, data)


@router.post("/profile/skills", status_code=201)
def add_skill(
    data: dict = Body(...),
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return profile.add_skill(clients, identity, data)


# Contact


@router.post("/contact", response_model=ContactSubmittedResponse, status_code=201)
def submit_contact_form(
    data: dict = Body(...), clients: Clients = Depends(get_clients)
):
    return contact.submit_contact_form(clients, None, data)


@router.get("/contact")
def list_contact_submissions(
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return contact.list_contact_submissions(clients, identity)


@router.patch("/contact/{submission_id}/read", response_model=SuccessResponse)
def mark_contact_as_read(
    submission_id: str,
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return contact.mark_contact_as_read(clients, identity, {"id": submission_id})


@router.delete("/contact/{submission_id}", response_model=SuccessResponse)
def delete_contact_submission(
    submission_id: str,
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return contact.delete_contact_submission(clients, identity, {"id": submission_id})


# Admin accounts


@router.post("/admin", response_model=AdminCreatedResponse, status_code=201)
def create_admin(
    data: dict = Body(...),
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return admins.create_admin(clients, identity, data)


@router.put("/admin/{uid}/role", response_model=SuccessResponse)
def update_admin_role(
    uid: str,
    data: dict = Body(...),
    clients: Clients = Depends(get_clients),
    identity: Optional[Identity] = Depends(get_identity),
):
    return admins.update_admin_role(clients, identity, {**data, "uid": uid})
