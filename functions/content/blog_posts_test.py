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


import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from content import blog_posts
from shared.errors import AppError, ErrorKind
from shared.firebase_constants import BLOG_POSTS_COLLECTION, USERS_COLLECTION
from shared.types import Identity
import main_testing_utils as testing


def _post(title: str, **fields) -> dict:
    return {"title": title, "summary": f"About {title}", "content": "Body", **fields}


class BlogPostWriteTest(unittest.TestCase):

    def setUp(self):
        self.clients = testing.create_test_clients()

    def create(self, payload: dict) -> dict:
        return blog_posts.create_blog_post(self.clients, testing.admin(), payload)

    def assertFails(self, kind: ErrorKind, operation, payload, identity=None):
        with self.assertRaises(AppError) as ctx:
            operation(self.clients, identity or testing.admin(), payload)
        self.assertEqual(ctx.exception.kind, kind)
        return ctx.exception

    def test_hello_world_lifecycle(self):
        created = self.create(_post("Hello World"))
        self.assertEqual(created["slug"], "hello-world")
        self.assertTrue(created["id"])
        self.assertFalse(created["published"])
        self.assertEqual(created["tags"], [])

        error = self.assertFails(
            ErrorKind.ALREADY_EXISTS, blog_posts.create_blog_post, _post("Hello World")
        )
        self.assertEqual(error.message, "A blog post with this title already exists")

        updated = blog_posts.update_blog_post(
            self.clients,
            testing.admin(),
            {"id": created["id"], **_post("Hello World Again")},
        )
        self.assertEqual(updated["id"], created["id"])
        self.assertEqual(updated["slug"], "hello-world-again")
        self.assertEqual(updated["createdAt"], created["createdAt"])

        stored = self.clients.db.get(BLOG_POSTS_COLLECTION, created["id"])
        self.assertEqual(stored["slug"], "hello-world-again")
        self.assertEqual(stored["title"], "Hello World Again")

    def test_stored_document_uses_camel_case(self):
        created = self.create(_post("Hello World", coverImage="cover.png"))
        stored = self.clients.db.get(BLOG_POSTS_COLLECTION, created["id"])
        self.assertEqual(stored["coverImage"], "cover.png")
        self.assertIn("createdAt", stored)
        self.assertNotIn("id", stored)

    def test_update_colliding_only_with_itself(self):
        created = self.create(_post("Hello World"))
        updated = blog_posts.update_blog_post(
            self.clients,
            testing.admin(),
            {"id": created["id"], **_post("Hello  World"), "summary": "New summary"},
        )
        self.assertEqual(updated["slug"], "hello-world")
        self.assertEqual(updated["summary"], "New summary")

    def test_update_to_slug_of_another_post(self):
        self.create(_post("Hello World"))
        other = self.create(_post("Second Post"))
        self.assertFails(
            ErrorKind.ALREADY_EXISTS,
            blog_posts.update_blog_post,
            {"id": other["id"], **_post("hello world")},
        )
        stored = self.clients.db.get(BLOG_POSTS_COLLECTION, other["id"])
        self.assertEqual(stored["slug"], "second-post")

    def test_update_keeps_fields_not_supplied(self):
        created = self.create(_post("Hello World", tags=["python"], featured=True))
        updated = blog_posts.update_blog_post(
            self.clients, testing.admin(), {"id": created["id"], **_post("Hello World")}
        )
        self.assertEqual(updated["tags"], ["python"])
        self.assertTrue(updated["featured"])

    def test_update_requires_id(self):
        error = self.assertFails(
            ErrorKind.INVALID_ARGUMENT, blog_posts.update_blog_post, _post("Hello")
        )
        self.assertEqual(error.message, "Blog post ID is required")

    def test_update_missing_post(self):
        error = self.assertFails(
            ErrorKind.NOT_FOUND,
            blog_posts.update_blog_post,
            {"id": "missing", **_post("Hello")},
        )
        self.assertEqual(error.message, "Blog post not found")

    def test_title_without_slug_characters(self):
        for title in ["???", "?? ??", "- -", "_ _"]:
            error = self.assertFails(
                ErrorKind.INVALID_ARGUMENT, blog_posts.create_blog_post, _post(title)
            )
            self.assertEqual(error.details[0]["field"], "title")
        self.assertEqual(self.clients.db.query(BLOG_POSTS_COLLECTION), [])

    def test_update_to_title_without_slug_characters(self):
        created = self.create(_post("Hello World"))
        self.assertFails(
            ErrorKind.INVALID_ARGUMENT,
            blog_posts.update_blog_post,
            {"id": created["id"], **_post("- -")},
        )
        stored = self.clients.db.get(BLOG_POSTS_COLLECTION, created["id"])
        self.assertEqual(stored["slug"], "hello-world")

    def test_admin_account_with_only_a_role(self):
        self.clients.db.set(USERS_COLLECTION, "console-admin", {"role": "admin"})
        created = blog_posts.create_blog_post(
            self.clients, Identity(uid="console-admin"), _post("Hello World")
        )
        self.assertEqual(created["slug"], "hello-world")

    def test_invalid_payload(self):
        error = self.assertFails(
            ErrorKind.INVALID_ARGUMENT, blog_posts.create_blog_post, {"title": "Hi"}
        )
        self.assertEqual(
            sorted(d["field"] for d in error.details), ["content", "summary"]
        )

    def test_delete(self):
        created = self.create(_post("Hello World"))
        result = blog_posts.delete_blog_post(
            self.clients, testing.admin(), {"id": created["id"]}
        )
        self.assertEqual(result, {"success": True})
        self.assertIsNone(self.clients.db.get(BLOG_POSTS_COLLECTION, created["id"]))

        self.assertFails(
            ErrorKind.NOT_FOUND, blog_posts.delete_blog_post, {"id": created["id"]}
        )

    def test_requires_admin(self):
        self.assertFails(
            ErrorKind.UNAUTHENTICATED,
            lambda clients, _, payload: blog_posts.create_blog_post(
                clients, None, payload
            ),
            _post("Hello World"),
        )
        self.assertFails(
            ErrorKind.PERMISSION_DENIED,
            blog_posts.create_blog_post,
            _post("Hello World"),
            identity=testing.visitor(),
        )
        self.assertEqual(self.clients.db.query(BLOG_POSTS_COLLECTION), [])


class BlogPostReadTest(unittest.TestCase):

    def setUp(self):
        self.clients = testing.create_test_clients()
        start = datetime(2025, 1, 1, tzinfo=timezone.utc)
        timestamps = [start + timedelta(days=day) for day in range(3)]
        with patch("content.entities.utc_now", side_effect=timestamps):
            for title, published in [
                ("First", True),
                ("Draft", False),
                ("Third", True),
            ]:
                blog_posts.create_blog_post(
                    self.clients, testing.admin(), _post(title, published=published)
                )

    def test_list_newest_first(self):
        posts = blog_posts.list_blog_posts(self.clients, published_only=False)
        self.assertEqual([p["title"] for p in posts], ["Third", "Draft", "First"])

    def test_list_published_only(self):
        posts = blog_posts.list_blog_posts(self.clients, published_only=True)
        self.assertEqual([p["title"] for p in posts], ["Third", "First"])

    def test_get_by_slug(self):
        post = blog_posts.get_blog_post(self.clients, "draft")
        self.assertEqual(post["title"], "Draft")
        self.assertEqual(post["createdAt"], "2025-01-02T00:00:00+00:00")

        with self.assertRaises(AppError) as ctx:
            blog_posts.get_blog_post(self.clients, "missing")
        self.assertEqual(ctx.exception.kind, ErrorKind.NOT_FOUND)


if __name__ == "__main__":
    unittest.main()
