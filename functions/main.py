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

# Cloud functions for the portfolio backend: content, contact, admin and images.
#
# This file containing Python cloud functions must be named main.py.
# See https://cloud.google.com/run/docs/write-functions#python for more info.

# Standard library imports
from functools import lru_cache
from typing import Callable, Optional

# Third-party library imports
from firebase_admin import initialize_app
from firebase_functions import https_fn, logger, options, storage_fn

# Local application imports
from accounts import admins
from accounts.gate import identity_from_auth
from backend.config import get_settings
from backend.dependencies import Clients, build_firebase_clients
from content import blog_posts, case_studies, contact, profile
from image_pipeline import image_processing, uploads
from shared.errors import AppError, ErrorKind, to_https_error
from shared.types import Identity

Operation = Callable[[Clients, Optional[Identity], dict], dict]

initialize_app()


@lru_cache(maxsize=1)
def _clients() -> Clients:
    return build_firebase_clients()


def _invoke(req: https_fn.CallableRequest, operation: Operation) -> dict:
    """
    Runs an operation for a callable request and maps failures to HttpsError.

    Args:
        req (https_fn.CallableRequest): The request; `req.auth` is None for
            anonymous callers.
        operation: The operation to run with the caller's identity and payload.

    Returns:
        The operation's result, sent back to the client under `result`.
    """
    try:
        return operation(_clients(), identity_from_auth(req.auth), req.data)
    except AppError as e:
        if e.kind == ErrorKind.INTERNAL:
            logger.error(f"{operation.__name__} failed: {e.message} ({e.cause!r})")
        raise to_https_error(e) from e
    except Exception as e:
        logger.error(f"{operation.__name__} failed unexpectedly: {e!r}")
        raise to_https_error(e) from e


# Blog posts


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def create_blog_post(req: https_fn.CallableRequest) -> dict:
    return _invoke(req, blog_posts.create_blog_post)


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def update_blog_post(req: https_fn.CallableRequest) -> dict:
    return _invoke(req, blog_posts.update_blog_post)


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def delete_blog_post(req: https_fn.CallableRequest) -> dict:
    return _invoke(req, blog_posts.delete_blog_post)


# Case studies


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def create_case_study(req: https_fn.CallableRequest) -> dict:
    return _invoke(req, case_studies.create_case_study)


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def update_case_study(req: https_fn.CallableRequest) -> dict:
    return _invoke(req, case_studies.update_case_study)


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def delete_case_study(req: https_fn.CallableRequest) -> dict:
    """Deletes a case study together with its sections and metrics."""
    return _invoke(req, case_studies.delete_case_study)


# Profile


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def update_profile(req: https_fn.CallableRequest) -> dict:
    return _invoke(req, profile.update_profile)


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def add_work_experience(req: https_fn.CallableRequest) -> dict:
    return _invoke(req, profile.add_work_experience)


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def add_education(req: https_fn.CallableRequest) -> dict:
    return _invoke(req, profile.add_education)


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def add_skill(req: https_fn.CallableRequest) -> dict:
    return _invoke(req, profile.add_skill)


# Contact


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def submit_contact_form(req: https_fn.CallableRequest) -> dict:
    """
    Stores a contact form submission. Open to anonymous visitors.

    Args:
        req (https_fn.CallableRequest): The request, containing name, email,
            message and an optional subject.

    Returns:
        `{"success": True, "id": ...}` with the new submission's id.
    """
    return _invoke(req, contact.submit_contact_form)


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def mark_contact_as_read(req: https_fn.CallableRequest) -> dict:
    return _invoke(req, contact.mark_contact_as_read)


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def delete_contact_submission(req: https_fn.CallableRequest) -> dict:
    return _invoke(req, contact.delete_contact_submission)


# Admin accounts


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def create_admin(req: https_fn.CallableRequest) -> dict:
    return _invoke(req, admins.create_admin)


@https_fn.on_call(memory=options.MemoryOption.MB_512)
def update_admin_role(req: https_fn.CallableRequest) -> dict:
    return _invoke(req, admins.update_admin_role)


# Images


@https_fn.on_call(timeout_sec=300, memory=options.MemoryOption.GB_1)
def process_image(req: https_fn.CallableRequest) -> dict:
    """
    Moves an uploaded image into `images/{destinationFolder}/` with variants.

    Args:
        req (https_fn.CallableRequest): The request, containing tempPath,
            destinationFolder, fileName and optional processing options.

    Returns:
        Paths and long-lived URLs for the original, optimized and thumbnail
        variants.
    """
    return _invoke(req, image_processing.process_image_request)


@https_fn.on_call(timeout_sec=300, memory=options.MemoryOption.GB_1)
def auto_process(req: https_fn.CallableRequest) -> dict:
    return _invoke(req, uploads.auto_process)


@storage_fn.on_object_finalized(
    bucket=get_settings().storage_bucket,
    timeout_sec=300,
    memory=options.MemoryOption.GB_1,
)
def on_upload_finalized(
    event: storage_fn.CloudEvent[storage_fn.StorageObjectData],
) -> None:
    """Processes images that admins upload under `uploads/{uid}/`."""
    file_path = event.data.name
    image = uploads.handle_finalized_upload(
        _clients(), file_path, event.data.content_type
    )
    if image is not None:
        logger.info(f"Processed upload {file_path} into {image.folder}")
