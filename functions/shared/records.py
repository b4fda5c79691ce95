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


"""Conversion between record dataclasses, stored documents and responses."""

from dataclasses import asdict
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Iterable, Type, TypeVar

from dacite import Config, from_dict

from shared.json_utils import convert_keys
from shared.types import Role

RecordT = TypeVar("RecordT")

_DACITE_CONFIG = Config(check_types=False, cast=[Role])


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_document(record, exclude: Iterable[str] = ("id",)) -> dict:
    """Serializes a record dataclass into a camelCase document body."""
    data = asdict(record)
    for key in exclude:
        data.pop(key, None)
    return convert_keys(data, "snake_to_camel")


def from_document(data_class: Type[RecordT], document: dict, **extra) -> RecordT:
    """
    Loads a record dataclass from a camelCase document body.

    `extra` supplies fields that live outside the body, such as the document id.
    """
    data = convert_keys(document, "camel_to_snake")
    data.update(extra)
    return from_dict(data_class=data_class, data=data, config=_DACITE_CONFIG)


def json_safe(value: Any) -> Any:
    """Recursively converts datetimes and enums into JSON-friendly values."""
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(item) for item in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def to_response(record) -> dict:
    """Renders a record dataclass as the camelCase JSON returned to callers."""
    return json_safe(convert_keys(asdict(record), "snake_to_camel"))
