"""
Storage abstraction for Firebase Storage (Cloud Storage buckets) and in-memory testing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Protocol
from urllib.parse import quote

from firebase_admin import storage


class StorageClient(Protocol):
    """Defines the operations the image pipeline needs from object storage."""

    def download_to_file(self, path: str, dest_path: str) -> None:
        ...

    def upload_file(
        self,
        src_path: str,
        dest_path: str,
        content_type: str,
        metadata: Optional[dict] = None,
    ) -> None:
        ...

    def signed_url(self, path: str, expires: datetime) -> str:
        ...

    def delete(self, path: str) -> None:
        ...

    def exists(self, path: str) -> bool:
        ...


@dataclass
class StoredObject:
    data: bytes
    content_type: str = "application/octet-stream"
    metadata: dict = field(default_factory=dict)


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    base_url: str = "https://example.test/storage"
    stored_objects: dict = None

    def __post_init__(self):
        if self.stored_objects is None:
            self.stored_objects = {}

    def put_bytes(
        self, path: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> None:
        self.stored_objects[path] = StoredObject(data=data, content_type=content_type)

    def get_object(self, path: str) -> StoredObject:
        stored = self.stored_objects.get(path)
        if stored is None:
            raise FileNotFoundError(path)
        return stored

    def download_to_file(self, path: str, dest_path: str) -> None:
        with open(dest_path, "wb") as f:
            f.write(self.get_object(path).data)

    def upload_file(
        self,
        src_path: str,
        dest_path: str,
        content_type: str,
        metadata: Optional[dict] = None,
    ) -> None:
        with open(src_path, "rb") as f:
            self.stored_objects[dest_path] = StoredObject(
                data=f.read(), content_type=content_type, metadata=dict(metadata or {})
            )

    def signed_url(self, path: str, expires: datetime) -> str:
        self.get_object(path)
        expiry = int(expires.timestamp())
        return f"{self.base_url}/{quote(path, safe='')}?op=get&expires={expiry}"

    def delete(self, path: str) -> None:
        self.get_object(path)
        del self.stored_objects[path]

    def exists(self, path: str) -> bool:
        return path in self.stored_objects


@dataclass
class FirebaseStorageClient:
    """
    Firebase Storage client backed by the default (or named) Cloud Storage bucket.

    Requires `firebase_admin.initialize_app()` to have been called.
    """

    bucket_name: Optional[str] = None

    def __post_init__(self):
        self._bucket = storage.bucket(self.bucket_name)

    def download_to_file(self, path: str, dest_path: str) -> None:
        self._bucket.blob(path).download_to_filename(dest_path)

    def upload_file(
        self,
        src_path: str,
        dest_path: str,
        content_type: str,
        metadata: Optional[dict] = None,
    ) -> None:
        blob = self._bucket.blob(dest_path)
        if metadata:
            blob.metadata = metadata
        blob.upload_from_filename(src_path, content_type=content_type)

    def signed_url(self, path: str, expires: datetime) -> str:
        # V2 signing; V4 caps expiration at seven days.
        return self._bucket.blob(path).generate_signed_url(
            expiration=expires, method="GET", version="v2"
        )

    def delete(self, path: str) -> None:
        self._bucket.blob(path).delete()

    def exists(self, path: str) -> bool:
        return self._bucket.blob(path).exists()
