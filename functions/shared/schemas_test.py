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

from shared.errors import AppError, ErrorKind
from shared.schemas import (
    BlogPostPayload,
    ContactFormPayload,
    ProcessImagePayload,
    ProfilePayload,
    SkillPayload,
    UpdateAdminRolePayload,
    require_id,
    validate,
)
from shared.types import Role


class ValidateTest(unittest.TestCase):

    def assertInvalid(self, schema, payload) -> AppError:
        with self.assertRaises(AppError) as ctx:
            validate(schema, payload)
        self.assertEqual(ctx.exception.kind, ErrorKind.INVALID_ARGUMENT)
        return ctx.exception

    def test_defaults_applied(self):
        post = validate(
            BlogPostPayload, {"title": "Hello", "summary": "S", "content": "C"}
        )
        self.assertFalse(post.featured)
        self.assertFalse(post.published)
        self.assertEqual(post.tags, [])
        self.assertIsNone(post.cover_image)

    def test_accepts_camel_and_snake_case_keys(self):
        base = {"title": "Hello", "summary": "S", "content": "C"}
        camel = validate(BlogPostPayload, {**base, "coverImage": "a.png"})
        snake = validate(BlogPostPayload, {**base, "cover_image": "a.png"})
        self.assertEqual(camel.cover_image, "a.png")
        self.assertEqual(snake.cover_image, "a.png")

    def test_unknown_keys_ignored(self):
        post = validate(
            BlogPostPayload,
            {"title": "Hello", "summary": "S", "content": "C", "id": "abc"},
        )
        self.assertFalse(hasattr(post, "id"))

    def test_errors_are_aggregated(self):
        error = self.assertInvalid(BlogPostPayload, {"title": ""})
        self.assertEqual(error.message, "Validation error")
        fields = sorted(detail["field"] for detail in error.details)
        self.assertEqual(fields, ["content", "summary", "title"])

    def test_email_format(self):
        error = self.assertInvalid(
            ContactFormPayload, {"name": "Ada", "email": "nope", "message": "Hi"}
        )
        self.assertEqual([d["field"] for d in error.details], ["email"])

    def test_url_format(self):
        error = self.assertInvalid(
            ProfilePayload,
            {"displayName": "Ada", "email": "ada@example.com", "website": "not a url"},
        )
        self.assertEqual([d["field"] for d in error.details], ["website"])
        self.assertIn("Invalid URL", error.details[0]["message"])

    def test_proficiency_bounds(self):
        skill = validate(SkillPayload, {"name": "Python", "category": "Languages"})
        self.assertEqual(skill.proficiency, 3)
        self.assertInvalid(
            SkillPayload, {"name": "Python", "category": "Languages", "proficiency": 6}
        )
        self.assertInvalid(
            SkillPayload, {"name": "Python", "category": "Languages", "proficiency": 0}
        )

    def test_image_option_bounds(self):
        base = {"tempPath": "tmp/a.png", "destinationFolder": "misc", "fileName": "a.png"}
        options = validate(ProcessImagePayload, base)
        self.assertEqual(options.quality, 80)
        self.assertEqual(options.thumbnail_width, 300)
        self.assertTrue(options.generate_thumbnail)
        self.assertInvalid(ProcessImagePayload, {**base, "quality": 101})
        self.assertInvalid(ProcessImagePayload, {**base, "thumbnailWidth": 0})

    def test_role_values(self):
        payload = validate(UpdateAdminRolePayload, {"uid": "u1", "role": "super_admin"})
        self.assertEqual(payload.role, Role.SUPER_ADMIN)
        self.assertInvalid(UpdateAdminRolePayload, {"uid": "u1", "role": "owner"})

    def test_payload_must_be_an_object(self):
        error = self.assertInvalid(BlogPostPayload, ["title"])
        self.assertEqual(error.message, "Request data must be an object")
        self.assertInvalid(BlogPostPayload, None)


class RequireIdTest(unittest.TestCase):

    def test_returns_id(self):
        self.assertEqual(require_id({"id": "abc"}, "Blog post"), "abc")
        self.assertEqual(require_id({"uid": "u1"}, "User", key="uid"), "u1")

    def test_missing_id(self):
        for payload in [{}, {"id": ""}, {"id": 7}, None]:
            with self.assertRaises(AppError) as ctx:
                require_id(payload, "Blog post")
            self.assertEqual(ctx.exception.kind, ErrorKind.INVALID_ARGUMENT)
            self.assertEqual(ctx.exception.message, "Blog post ID is required")


if __name__ == "__main__":
    unittest.main()
