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


"""Blog post operations."""

from typing import Optional

from accounts.gate import require_admin
from backend.dependencies import Clients
from content.entities import EntityKind, EntityRepository
from shared.errors import not_found_error, reraise_as_internal
from shared.firebase_constants import BLOG_POSTS_COLLECTION
from shared.records import to_response
from shared.schemas import BlogPostPayload, require_id, validate
from shared.types import BlogPost, Identity

BLOG_POSTS = EntityKind(
    collection=BLOG_POSTS_COLLECTION,
    label="Blog post",
    record_type=BlogPost,
)


def _repository(clients: Clients) -> EntityRepository:
    return EntityRepository(clients.db, BLOG_POSTS)


def create_blog_post(
    clients: Clients, identity: Optional[Identity], data: dict
) -> dict:
    require_admin(clients.db, identity)
    payload = validate(BlogPostPayload, data)
    with reraise_as_internal("Error creating blog post"):
        return to_response(_repository(clients).create(payload))


def update_blog_post(
    clients: Clients, identity: Optional[Identity], data: dict
) -> dict:
    require_admin(clients.db, identity)
    post_id = require_id(data, "Blog post")
    payload = validate(BlogPostPayload, data)
    with reraise_as_internal("Error updating blog post"):
        return to_response(_repository(clients).update(post_id, payload))


def delete_blog_post(
    clients: Clients, identity: Optional[Identity], data: dict
) -> dict:
    require_admin(clients.db, identity)
    post_id = require_id(data, "Blog post")
    with reraise_as_internal("Error deleting blog post"):
        _repository(clients).delete(post_id)
    return {"success": True}


def list_blog_posts(clients: Clients, published_only: bool = True) -> list[dict]:
    with reraise_as_internal("Error listing blog posts"):
        posts = _repository(clients).list_all(published_only=published_only)
    return [to_response(post) for post in posts]


def get_blog_post(clients: Clients, slug: str) -> dict:
    with reraise_as_internal("Error fetching blog post"):
        post = _repository(clients).get_by_slug(slug)
    if post is None:
        raise not_found_error("Blog post not found")
    return to_response(post)
