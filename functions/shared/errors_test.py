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

from firebase_functions import https_fn
from pydantic import ValidationError

from shared import errors
from shared.errors import AppError, ErrorKind
from shared.schemas import ContactFormPayload


def _validation_error() -> ValidationError:
    try:
        ContactFormPayload.model_validate({"email": "not-an-email"})
    except ValidationError as e:
        return e
    raise AssertionError("payload unexpectedly validated")


class ClassifyTest(unittest.TestCase):

    def test_app_error_passes_through(self):
        error = errors.not_found_error("Blog post not found")
        self.assertIs(errors.classify(error), error)

    def test_validation_error_becomes_invalid_argument(self):
        classified = errors.classify(_validation_error())

        self.assertEqual(classified.kind, ErrorKind.INVALID_ARGUMENT)
        fields = {detail["field"] for detail in classified.details}
        self.assertEqual(fields, {"name", "email", "message"})

    def test_unclassified_error_becomes_generic_internal(self):
        cause = RuntimeError("connection reset by peer")
        classified = errors.classify(cause)

        self.assertEqual(classified.kind, ErrorKind.INTERNAL)
        self.assertEqual(classified.message, "An unknown error occurred")
        self.assertIs(classified.cause, cause)


class TranslationTest(unittest.TestCase):

    def test_to_https_error_maps_codes(self):
        expected = {
            ErrorKind.UNAUTHENTICATED: https_fn.FunctionsErrorCode.UNAUTHENTICATED,
            ErrorKind.PERMISSION_DENIED: https_fn.FunctionsErrorCode.PERMISSION_DENIED,
            ErrorKind.INVALID_ARGUMENT: https_fn.FunctionsErrorCode.INVALID_ARGUMENT,
            ErrorKind.NOT_FOUND: https_fn.FunctionsErrorCode.NOT_FOUND,
            ErrorKind.ALREADY_EXISTS: https_fn.FunctionsErrorCode.ALREADY_EXISTS,
            ErrorKind.INTERNAL: https_fn.FunctionsErrorCode.INTERNAL,
        }
        for kind, code in expected.items():
            https_error = errors.to_https_error(AppError(kind, "boom"))
            self.assertEqual(https_error.code, code)
            self.assertEqual(https_error.message, "boom")

    def test_to_https_error_keeps_details(self):
        https_error = errors.to_https_error(
            errors.validation_error("Validation error", [{"field": "title"}])
        )
        self.assertEqual(https_error.details, [{"field": "title"}])

    def test_to_https_error_hides_unclassified_messages(self):
        https_error = errors.to_https_error(KeyError("secret internals"))
        self.assertEqual(https_error.code, https_fn.FunctionsErrorCode.INTERNAL)
        self.assertEqual(https_error.message, "An unknown error occurred")

    def test_http_status_codes(self):
        self.assertEqual(errors.HTTP_STATUS_CODES[ErrorKind.UNAUTHENTICATED], 401)
        self.assertEqual(errors.HTTP_STATUS_CODES[ErrorKind.PERMISSION_DENIED], 403)
        self.assertEqual(errors.HTTP_STATUS_CODES[ErrorKind.INVALID_ARGUMENT], 400)
        self.assertEqual(errors.HTTP_STATUS_CODES[ErrorKind.NOT_FOUND], 404)
        self.assertEqual(errors.HTTP_STATUS_CODES[ErrorKind.ALREADY_EXISTS], 409)
        self.assertEqual(errors.HTTP_STATUS_CODES[ErrorKind.INTERNAL], 500)

    def test_to_error_body(self):
        self.assertEqual(
            errors.to_error_body(errors.already_exists_error("taken")),
            {"error": {"kind": "already-exists", "message": "taken"}},
        )
        body = errors.to_error_body(
            errors.validation_error("Validation error", [{"field": "email"}])
        )
        self.assertEqual(body["error"]["details"], [{"field": "email"}])


class ReraiseAsInternalTest(unittest.TestCase):

    def test_wraps_unexpected_errors(self):
        cause = OSError("disk full")
        with self.assertLogs("shared.errors", level="ERROR"):
            with self.assertRaises(AppError) as ctx:
                with errors.reraise_as_internal("Error creating blog post"):
                    raise cause

        self.assertEqual(ctx.exception.kind, ErrorKind.INTERNAL)
        self.assertEqual(ctx.exception.message, "Error creating blog post")
        self.assertIs(ctx.exception.cause, cause)

    def test_lets_app_errors_through(self):
        original = errors.permission_denied_error("User must be an admin")
        with self.assertRaises(AppError) as ctx:
            with errors.reraise_as_internal("Error creating blog post"):
                raise original
        self.assertIs(ctx.exception, original)


if __name__ == "__main__":
    unittest.main()
