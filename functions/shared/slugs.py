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


import re

_WHITESPACE = re.compile(r"\s+")
# Everything that is not an ASCII word character or a hyphen.
_NON_SLUG_CHARS = re.compile(r"[^\w-]+", re.ASCII)
_ALPHANUMERIC = re.compile(r"[a-z0-9]")


def slugify(title: str) -> str:
    """
    Derives a URL-safe identifier from a title.

    The title is lowercased, each run of whitespace becomes a single hyphen and
    anything that is not a word character or hyphen is dropped. A title with no
    letters or digits yields a slug without any either, e.g. "" or "-".

    Args:
        title (str): The title to convert.

    Returns:
        str: The slug, e.g. "Hello World!" -> "hello-world".
    """
    slug = _WHITESPACE.sub("-", title.lower())
    return _NON_SLUG_CHARS.sub("", slug)


def has_alphanumeric(slug: str) -> bool:
    """Whether the slug contains at least one letter or digit."""
    return bool(_ALPHANUMERIC.search(slug))
