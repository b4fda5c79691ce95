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


from __future__ import annotations

import logging
import mimetypes
import os
import tempfile
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Optional

from PIL import Image, ImageOps

from accounts.gate import require_admin
from backend.config import get_settings
from backend.dependencies import Clients
from backend.storage import StorageClient
from shared.errors import reraise_as_internal
from shared.firebase_constants import DOWNLOAD_TOKENS_METADATA_KEY
from shared.json_utils import convert_keys
from shared.schemas import ProcessImagePayload, validate
from shared.types import Identity

logger = logging.getLogger(__name__)

JPEG_CONTENT_TYPE = "image/jpeg"
ORIGINAL_VARIANT = "original"
OPTIMIZED_VARIANT = "optimized"
THUMBNAIL_VARIANT = "thumbnails"


@dataclass
class ProcessingOptions:
    generate_thumbnail: bool = True
    optimize_image: bool = True
    thumbnail_width: int = 300
    thumbnail_height: int = 300
    quality: int = 80


@dataclass
class ProcessedImage:
    original_url: str
    original_path: str
    optimized_url: str
    optimized_path: str
    thumbnail_url: str
    thumbnail_path: str


def variant_path(folder: str, variant: str, file_name: str) -> str:
    return f"images/{folder}/{variant}/{file_name}"


def guess_content_type(file_name: str) -> str:
    content_type, _ = mimetypes.guess_type(file_name)
    if content_type:
        return content_type
    extension = os.path.splitext(file_name)[1].lstrip(".").lower()
    return f"image/{extension}" if extension else "application/octet-stream"


def url_expiry() -> datetime:
    """Expiry for issued read URLs: January 1st of the configured year, UTC."""
    return datetime(get_settings().signed_url_expiry_year, 1, 1, tzinfo=timezone.utc)


def _download_token() -> dict:
    # Lets the Firebase console and client SDKs build download URLs.
    return {DOWNLOAD_TOKENS_METADATA_KEY: str(uuid.uuid4())}


def write_optimized(source_path: str, dest_path: str, quality: int) -> None:
    """Re-encodes an image as JPEG at `quality` without resizing."""
    with Image.open(source_path) as img:
        img.convert("RGB").save(dest_path, format="JPEG", quality=quality)


def write_thumbnail(
    source_path: str, dest_path: str, width: int, height: int, quality: int
) -> None:
    """Scales to cover `width` x `height`, crops around the center, saves as JPEG."""
    with Image.open(source_path) as img:
        thumbnail = ImageOps.fit(
            img.convert("RGB"),
            (width, height),
            method=Image.Resampling.LANCZOS,
            centering=(0.5, 0.5),
        )
        thumbnail.save(dest_path, format="JPEG", quality=quality)


def process_image(
    storage: StorageClient,
    temp_path: str,
    destination_folder: str,
    file_name: str,
    options: Optional[ProcessingOptions] = None,
    content_type: Optional[str] = None,
    expires: Optional[datetime] = None,
    scratch_root: Optional[str] = None,
) -> ProcessedImage:
    """
    Moves an uploaded image into the `images/` tree, with optional variants.

    The temporary object is downloaded into a scratch directory, stored as
    the original, optionally re-encoded (optimized) and cropped (thumbnail),
    and then deleted. Each stored variant gets a fresh download token and a
    long-lived read URL.

    Args:
        storage: Object storage holding `temp_path`.
        temp_path: Path of the uploaded object to process.
        destination_folder: Folder under `images/` for all variants.
        file_name: File name used for every variant.
        options: Variant switches, thumbnail size and JPEG quality.
        content_type: Content type of the stored original; guessed from
            `file_name` when omitted.
        expires: Expiry of the issued URLs; defaults to `url_expiry()`.
        scratch_root: Parent for the scratch directory (system temp by default).

    Returns:
        ProcessedImage: Paths and URLs. A skipped optimized variant reports
        the original's path and URL; a skipped thumbnail reports empty strings.

    Raises:
        AppError: INTERNAL if any download, encode or upload step fails.
            Variants uploaded before the failure are left in place.
    """
    options = options or ProcessingOptions()
    expires = expires or url_expiry()

    original_path = variant_path(destination_folder, ORIGINAL_VARIANT, file_name)
    optimized_path = original_path
    thumbnail_path = ""

    with reraise_as_internal("Error processing image"):
        with tempfile.TemporaryDirectory(dir=scratch_root) as scratch_dir:
            local_source = os.path.join(scratch_dir, "source")
            storage.download_to_file(temp_path, local_source)
            storage.upload_file(
                local_source,
                original_path,
                content_type or guess_content_type(file_name),
                metadata=_download_token(),
            )

            if options.optimize_image:
                optimized_path = variant_path(
                    destination_folder, OPTIMIZED_VARIANT, file_name
                )
                local_optimized = os.path.join(scratch_dir, "optimized.jpg")
                write_optimized(local_source, local_optimized, options.quality)
                storage.upload_file(
                    local_optimized,
                    optimized_path,
                    JPEG_CONTENT_TYPE,
                    metadata=_download_token(),
                )

            if options.generate_thumbnail:
                thumbnail_path = variant_path(
                    destination_folder, THUMBNAIL_VARIANT, file_name
                )
                local_thumbnail = os.path.join(scratch_dir, "thumbnail.jpg")
                write_thumbnail(
                    local_source,
                    local_thumbnail,
                    options.thumbnail_width,
                    options.thumbnail_height,
                    options.quality,
                )
                storage.upload_file(
                    local_thumbnail,
                    thumbnail_path,
                    JPEG_CONTENT_TYPE,
                    metadata=_download_token(),
                )

            storage.delete(temp_path)

        original_url = storage.signed_url(original_path, expires)
        optimized_url = (
            storage.signed_url(optimized_path, expires)
            if options.optimize_image
            else original_url
        )
        thumbnail_url = (
            storage.signed_url(thumbnail_path, expires)
            if options.generate_thumbnail
            else ""
        )

    logger.info("Processed image %s into images/%s", temp_path, destination_folder)
    return ProcessedImage(
        original_url=original_url,
        original_path=original_path,
        optimized_url=optimized_url,
        optimized_path=optimized_path,
        thumbnail_url=thumbnail_url,
        thumbnail_path=thumbnail_path,
    )


def process_image_request(
    clients: Clients, identity: Optional[Identity], data: dict
) -> dict:
    require_admin(clients.db, identity)
    payload = validate(ProcessImagePayload, data)
    result = process_image(
        clients.storage,
        payload.temp_path,
        payload.destination_folder,
        payload.file_name,
        ProcessingOptions(
            generate_thumbnail=payload.generate_thumbnail,
            optimize_image=payload.optimize_image,
            thumbnail_width=payload.thumbnail_width,
            thumbnail_height=payload.thumbnail_height,
            quality=payload.quality,
        ),
    )
    return convert_keys(asdict(result), "snake_to_camel")
