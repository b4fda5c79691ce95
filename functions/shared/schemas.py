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
Request payload schemas.

Callers send camelCase keys (the JavaScript client convention); snake_case
keys are accepted as well. Unknown keys are ignored.
"""

from datetime import datetime
from typing import Annotated, Any, List, Optional, TypeVar

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel

from shared.errors import field_errors, validation_error
from shared.types import Role

_URL_ADAPTER = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        raise ValueError("Invalid URL")
    return value


NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]
UrlStr = Annotated[str, AfterValidator(_check_url)]


class Payload(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class BlogPostPayload(Payload):
    title: NonEmptyStr
    summary: NonEmptyStr
    content: NonEmptyStr
    cover_image: Optional[str] = None
    published_date: Optional[datetime] = None
    featured: bool = False
    published: bool = False
    tags: List[str] = Field(default_factory=list)


class CaseStudyPayload(Payload):
    title: NonEmptyStr
    summary: NonEmptyStr
    cover_image: Optional[str] = None
    thumbnail_image: Optional[str] = None
    published_date: Optional[datetime] = None
    featured: bool = False
    published: bool = False
    tags: List[str] = Field(default_factory=list)


class SocialLinksPayload(Payload):
    linkedin: Optional[UrlStr] = None
    github: Optional[UrlStr] = None
    twitter: Optional[UrlStr] = None


class ProfilePayload(Payload):
    display_name: NonEmptyStr
    email: EmailStr
    headline: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    website: Optional[UrlStr] = None
    social_links: Optional[SocialLinksPayload] = None


class WorkExperiencePayload(Payload):
    company: NonEmptyStr
    position: NonEmptyStr
    description: Optional[str] = None
    start_date: NonEmptyStr
    end_date: Optional[str] = None
    current: bool = False
    order: Optional[int] = None


class EducationPayload(Payload):
    institution: NonEmptyStr
    degree: NonEmptyStr
    field: NonEmptyStr
    start_date: NonEmptyStr
    end_date: Optional[str] = None
    order: Optional[int] = None


class SkillPayload(Payload):
    name: NonEmptyStr
    category: NonEmptyStr
    proficiency: int = Field(default=3, ge=1, le=5)
    order: Optional[int] = None


class ContactFormPayload(Payload):
    name: NonEmptyStr
    email: EmailStr
    subject: Optional[str] = None
    message: NonEmptyStr


class CreateAdminPayload(Payload):
    email: EmailStr
    password: Annotated[str, StringConstraints(min_length=8)]
    display_name: Optional[str] = None


class UpdateAdminRolePayload(Payload):
    uid: NonEmptyStr
    role: Role


class ProcessImagePayload(Payload):
    temp_path: NonEmptyStr
    destination_folder: NonEmptyStr
    file_name: NonEmptyStr
    generate_thumbnail: bool = True
    optimize_image: bool = True
    thumbnail_width: int = Field(default=300, ge=1)
    thumbnail_height: int = Field(default=300, ge=1)
    quality: int = Field(default=80, ge=1, le=100)


class AutoProcessPayload(Payload):
    file_path: NonEmptyStr
    content_type: NonEmptyStr
    file_name: NonEmptyStr


PayloadT = TypeVar("PayloadT", bound=Payload)


def validate(schema: type[PayloadT], payload: Any) -> PayloadT:
    """
    Validates a raw request payload against a schema.

    Every field violation is collected into a single INVALID_ARGUMENT error
    rather than stopping at the first one.

    Args:
        schema: The Payload subclass describing the expected shape.
        payload: The raw request data (normally a dict decoded from JSON).

    Returns:
        The validated model with defaults applied.

    Raises:
        AppError: INVALID_ARGUMENT with a `{field, message}` entry per violation.
    """
    if not isinstance(payload, dict):
        raise validation_error("Request data must be an object")
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise validation_error("Validation error", field_errors(e)) from e


def require_id(payload: Any, label: str, key: str = "id") -> str:
    """Returns the target document id from a payload, or fails INVALID_ARGUMENT."""
    doc_id = payload.get(key) if isinstance(payload, dict) else None
    if not doc_id or not isinstance(doc_id, str):
        raise validation_error(f"{label} ID is required")
    return doc_id
