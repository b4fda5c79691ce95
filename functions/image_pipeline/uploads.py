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
Automatic processing of images uploaded by admins.

Admin clients upload to `uploads/{uid}/{fileName}`; each upload is routed to a
folder by its file name, run through the pipeline with default options, and
recorded in the `images` collection.
"""

import logging
from typing import Optional

from accounts.gate import require_admin
from backend.dependencies import Clients
from image_pipeline.image_processing import process_image
from shared.errors import AppError, ErrorKind
from shared.firebase_constants import IMAGES_COLLECTION
from shared.records import to_document, utc_now
from shared.schemas import AutoProcessPayload, validate
from shared.types import Identity, StoredImage

logger = logging.getLogger(__name__)

UPLOADS_PREFIX = "uploads"

# Checked in order; the first substring found in the file name wins.
_FOLDER_RULES = (
    ("case-study", "case-studies"),
    ("blog", "blog-posts"),
    ("profile", "profile"),
)
DEFAULT_FOLDER = "misc"


def classify_folder(file_name: str) -> str:
    for marker, folder in _FOLDER_RULES:
        if marker in file_name:
            return folder
    return DEFAULT_FOLDER


def parse_upload_path(file_path: str) -> Optional[tuple[str, str]]:
    """Splits `uploads/{uid}/{fileName}` into (uid, fileName); None otherwise."""
    parts = file_path.split("/")
    if len(parts) != 3 or parts[0] != UPLOADS_PREFIX or not all(parts[1:]):
        return None
    return parts[1], parts[2]


def process_and_record(
    clients: Clients,
    file_path: str,
    content_type: str,
    file_name: str,
    uploaded_by: str,
) -> StoredImage:
    folder = classify_folder(file_name)
    result = process_image(
        clients.storage,
        file_path,
        folder,
        file_name,
        content_type=content_type,
    )
    image = StoredImage(
        original_path=result.original_path,
        optimized_path=result.optimized_path,
        thumbnail_path=result.thumbnail_path,
        content_type=content_type,
        folder=folder,
        uploaded_by=uploaded_by,
        created_at=utc_now(),
    )
    clients.db.add(IMAGES_COLLECTION, to_document(image, exclude=()))
    logger.info("Recorded image %s in %s", file_name, folder)
    return image


def auto_process(clients: Clients, identity: Optional[Identity], data: dict) -> dict:
    require_admin(clients.db, identity)
    payload = validate(AutoProcessPayload, data)
    image = process_and_record(
        clients,
        payload.file_path,
        payload.content_type,
        payload.file_name,
        uploaded_by=identity.uid,
    )
    return {
        "success": True,
        "originalPath": image.original_path,
        "optimizedPath": image.optimized_path,
        "thumbnailPath": image.thumbnail_path,
    }


def handle_finalized_upload(
    clients: Clients, file_path: str, content_type: Optional[str]
) -> Optional[StoredImage]:
    """
    Processes a newly finalized storage object if it is an admin's image upload.

    Objects outside `uploads/{uid}/`, and non-image objects, are ignored.
    Uploads from users without an admin role are deleted.

    Returns:
        The recorded StoredImage, or None when the object was skipped or removed.
    """
    if not content_type or not content_type.startswith("image/"):
        return None
    parsed = parse_upload_path(file_path)
    if parsed is None:
        return None
    uid, file_name = parsed

    try:
        require_admin(clients.db, Identity(uid=uid))
    except AppError as e:
        if e.kind != ErrorKind.PERMISSION_DENIED:
            raise
        logger.warning("Deleting upload %s from non-admin user %s", file_path, uid)
        clients.storage.delete(file_path)
        return None

    return process_and_record(clients, file_path, content_type, file_name, uid)
