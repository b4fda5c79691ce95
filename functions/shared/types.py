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


from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Dict, List, Optional


class Role(StrEnum):
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


@dataclass
class Identity:
    """The verified caller: the auth subject id plus its token claims."""

    uid: str
    claims: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Entity:
    """Fields shared by slug-addressed content (blog posts and case studies)."""

    id: str
    title: str
    summary: str
    slug: str
    cover_image: Optional[str] = None
    published_date: Any = None
    featured: bool = False
    published: bool = False
    tags: List[str] = field(default_factory=list)
    created_at: Any = None
    updated_at: Any = None


@dataclass
class BlogPost(Entity):
    content: Optional[str] = None


@dataclass
class CaseStudy(Entity):
    thumbnail_image: Optional[str] = None


@dataclass
class ContactSubmission:
    id: str
    name: str
    email: str
    message: str
    subject: Optional[str] = None
    read: bool = False
    created_at: Any = None
    updated_at: Any = None


@dataclass
class SocialLinks:
    linkedin: Optional[str] = None
    github: Optional[str] = None
    twitter: Optional[str] = None


@dataclass
class Profile:
    """The singleton site owner profile (document id "main")."""

    display_name: str
    email: str
    headline: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    social_links: Optional[SocialLinks] = None
    created_at: Any = None
    updated_at: Any = None


@dataclass
class WorkExperience:
    id: str
    profile_id: str
    company: str
    position: str
    start_date: str
    order: int
    description: Optional[str] = None
    end_date: Optional[str] = None
    current: bool = False
    created_at: Any = None
    updated_at: Any = None


@dataclass
class Education:
    id: str
    profile_id: str
    institution: str
    degree: str
    field: str
    start_date: str
    order: int
    end_date: Optional[str] = None
    created_at: Any = None
    updated_at: Any = None


@dataclass
class Skill:
    id: str
    profile_id: str
    name: str
    category: str
    order: int
    proficiency: int = 3
    created_at: Any = None
    updated_at: Any = None


@dataclass
class AdminAccount:
    uid: str
    email: str
    role: Role
    created_at: Any = None
    created_by: Optional[str] = None
    updated_at: Any = None
    updated_by: Optional[str] = None


@dataclass
class StoredImage:
    """Metadata for an auto-processed upload; the bytes live in storage."""

    original_path: str
    optimized_path: str
    thumbnail_path: str
    content_type: str
    folder: str
    uploaded_by: str
    created_at: Any = None
