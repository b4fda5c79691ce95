"""
Client wiring shared by the FastAPI app and the callable functions.

Entry points build a `Clients` bundle once and pass it to every operation;
nothing below the entry point reaches for a global SDK handle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import firebase_admin
from firebase_admin import firestore

from backend.config import Settings, get_settings
from backend.db import (
    DocumentStore,
    FirestoreDocumentStore,
    InMemoryDocumentStore,
    SqlDocumentStore,
)
from backend.identity import AuthClient, FirebaseAuthClient, InMemoryAuthClient
from backend.storage import FirebaseStorageClient, InMemoryStorageClient, StorageClient

logger = logging.getLogger(__name__)


@dataclass
class Clients:
    db: DocumentStore
    storage: StorageClient
    auth: AuthClient


def build_in_memory_clients() -> Clients:
    return Clients(
        db=InMemoryDocumentStore(),
        storage=InMemoryStorageClient(),
        auth=InMemoryAuthClient(),
    )


def build_firebase_clients(settings: Settings | None = None) -> Clients:
    """
    Clients for the Cloud Functions runtime: Firestore, Firebase Storage and Firebase Auth.

    Expects `firebase_admin.initialize_app()` to have run already.
    """
    settings = settings or get_settings()
    if settings.use_in_memory_backends:
        return build_in_memory_clients()
    return Clients(
        db=FirestoreDocumentStore(firestore.client()),
        storage=FirebaseStorageClient(bucket_name=settings.storage_bucket),
        auth=FirebaseAuthClient(),
    )


def build_rest_clients(settings: Settings | None = None) -> Clients:
    """
    Clients for the REST service: the relational store when DATABASE_URL is
    set, in-memory otherwise.
    """
    settings = settings or get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        logger.warning("DATABASE_URL not set; using in-memory document store")
        db: DocumentStore = InMemoryDocumentStore()
    else:
        db = SqlDocumentStore(settings.database_url)

    if settings.use_firebase_auth:
        try:
            firebase_admin.get_app()
        except ValueError:
            firebase_admin.initialize_app()
        auth_client: AuthClient = FirebaseAuthClient()
    else:
        auth_client = InMemoryAuthClient()

    # The REST surface never touches object storage.
    return Clients(db=db, storage=InMemoryStorageClient(), auth=auth_client)


_rest_clients: Clients | None = None


def get_clients() -> Clients:
    """
    Return a singleton client bundle so store state persists across requests.
    """
    global _rest_clients
    if _rest_clients:
        return _rest_clients
    _rest_clients = build_rest_clients()
    return _rest_clients
