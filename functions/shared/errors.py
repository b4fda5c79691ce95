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


"""Error taxonomy shared by the callable and REST surfaces."""

import logging
from contextlib import contextmanager
from enum import StrEnum
from typing import Any, Optional

from firebase_functions import https_fn
from pydantic import ValidationError

logger = logging.getLogger(__name__)


class ErrorKind(StrEnum):
    UNAUTHENTICATED = "unauthenticated"
    PERMISSION_DENIED = "permission-denied"
    INVALID_ARGUMENT = "invalid-argument"
    NOT_FOUND = "not-found"
    ALREADY_EXISTS = "already-exists"
    INTERNAL = "internal"


class AppError(Exception):
    """
    A classified application failure.

    `details` is returned to the caller (e.g. per-field validation messages);
    `cause` is the underlying exception and is only ever logged.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: Any = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details
        self.cause = cause


def validation_error(message: str, details: Any = None) -> AppError:
    return AppError(ErrorKind.INVALID_ARGUMENT, message, details)


def unauthenticated_error(message: str = "User must be authenticated") -> AppError:
    return AppError(ErrorKind.UNAUTHENTICATED, message)


def permission_denied_error(message: str) -> AppError:
    return AppError(ErrorKind.PERMISSION_DENIED, message)


def not_found_error(message: str) -> AppError:
    return AppError(ErrorKind.NOT_FOUND, message)


def already_exists_error(message: str) -> AppError:
    return AppError(ErrorKind.ALREADY_EXISTS, message)


def internal_error(message: str, cause: Optional[BaseException] = None) -> AppError:
    return AppError(ErrorKind.INTERNAL, message, cause=cause)


def field_errors(error: ValidationError) -> list[dict]:
    """Flattens a pydantic ValidationError into `{field, message}` entries."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
        }
        for err in error.errors()
    ]


def classify(error: BaseException) -> AppError:
    """
    Coerces any exception into an AppError.

    Pydantic validation errors become INVALID_ARGUMENT with field details;
    anything unclassified becomes INTERNAL with the original attached as cause.
    """
    if isinstance(error, AppError):
        return error
    if isinstance(error, ValidationError):
        return validation_error("Validation error", field_errors(error))
    return internal_error("An unknown error occurred", cause=error)


_FUNCTIONS_ERROR_CODES = {
    ErrorKind.UNAUTHENTICATED: https_fn.FunctionsErrorCode.UNAUTHENTICATED,
    ErrorKind.PERMISSION_DENIED: https_fn.FunctionsErrorCode.PERMISSION_DENIED,
    ErrorKind.INVALID_ARGUMENT: https_fn.FunctionsErrorCode.INVALID_ARGUMENT,
    ErrorKind.NOT_FOUND: https_fn.FunctionsErrorCode.NOT_FOUND,
    ErrorKind.ALREADY_EXISTS: https_fn.FunctionsErrorCode.ALREADY_EXISTS,
    ErrorKind.INTERNAL: https_fn.FunctionsErrorCode.INTERNAL,
}

HTTP_STATUS_CODES = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.PERMISSION_DENIED: 403,
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.INTERNAL: 500,
}


def to_https_error(error: BaseException) -> https_fn.HttpsError:
    """Converts an exception into the HttpsError returned by callable functions."""
    if isinstance(error, https_fn.HttpsError):
        return error
    app_error = classify(error)
    return https_fn.HttpsError(
        _FUNCTIONS_ERROR_CODES[app_error.kind], app_error.message, app_error.details
    )


def to_error_body(app_error: AppError) -> dict:
    """Renders an AppError as the JSON body used by the REST surface."""
    body = {"kind": str(app_error.kind), "message": app_error.message}
    if app_error.details is not None:
        body["details"] = app_error.details
    return {"error": body}


@contextmanager
def reraise_as_internal(message: str):
    """
    Lets classified AppErrors through and wraps anything else as INTERNAL.

    The original exception is logged and attached as the cause.
    """
    try:
        yield
    except AppError:
        raise
    except Exception as e:
        logger.exception(message)
        raise internal_error(message, cause=e) from e
