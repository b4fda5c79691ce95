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

from shared.slugs import has_alphanumeric, slugify


class SlugifyTest(unittest.TestCase):

    def test_slugify_title(self):
        self.assertEqual(slugify("Hello World"), "hello-world")
        self.assertEqual(slugify("Hello World Again"), "hello-world-again")

    def test_whitespace_runs_become_one_hyphen(self):
        self.assertEqual(slugify("a \t\n b"), "a-b")
        # Leading and trailing whitespace is not trimmed.
        self.assertEqual(slugify("  padded  "), "-padded-")

    def test_strips_non_word_characters(self):
        self.assertEqual(slugify("C++ & Rust: A Guide!"), "c--rust-a-guide")
        self.assertEqual(slugify("snake_case title"), "snake_case-title")
        self.assertEqual(slugify("Café Olé"), "caf-ol")

    def test_title_without_word_characters(self):
        self.assertEqual(slugify("!!! ???"), "-")
        self.assertEqual(slugify("???"), "")

    def test_has_alphanumeric(self):
        self.assertTrue(has_alphanumeric("hello-world"))
        self.assertTrue(has_alphanumeric("-2025-"))
        for slug in ["", "-", "---", "_-_"]:
            self.assertFalse(has_alphanumeric(slug), slug)

    def test_idempotent(self):
        for title in ["Hello World", "C++ & Rust: A Guide!", "  padded  ", "Café"]:
            slug = slugify(title)
            self.assertEqual(slugify(slug), slug)


if __name__ == "__main__":
    unittest.main()
