"""Error Hierarchy — status codes, categories and the response envelope."""

import pytest

from zakat_ledger.core.errors import (
    AuthenticationError, ConflictError, DatabaseError, ErrorCategory,
    PermissionDeniedError, ReferenceNotFoundError, ResourceNotFoundError,
    StorageTimeoutError, ValidationFailedError,
)
from zakat_ledger.core.validation import FieldViolation


@pytest.mark.parametrize("error, status, category, retryable", [
    (ValidationFailedError([FieldViolation("items", "min_items", "x")]), 400,
     ErrorCategory.VALIDATION, False),
    (ReferenceNotFoundError("Donor", "42"), 422, ErrorCategory.REFERENCE, False),
    (ConflictError("dup"), 409, ErrorCategory.CONFLICT, False),
    (ResourceNotFoundError("Receipt", "7"), 404, ErrorCategory.RESOURCE_NOT_FOUND, False),
    (AuthenticationError(), 401, ErrorCategory.AUTHENTICATION, False),
    (PermissionDeniedError("viewer", "receipt:write"), 403, ErrorCategory.AUTHORIZATION, False),
    (DatabaseError("connection refused", "execute"), 503, ErrorCategory.DATABASE, True),
    (StorageTimeoutError(5.0), 504, ErrorCategory.TIMEOUT, True),
])
def test_error_table(error, status, category, retryable):
    assert error.http_status == status
    assert error.category == category
    assert error.retryable is retryable


def test_response_envelope():
    body = ReferenceNotFoundError("Beneficiary", "abc").to_response()["error"]
    assert body["code"] == "REFERENCE_NOT_FOUND"
    assert body["message"] == "Beneficiary 'abc' not found"
    assert body["category"] == "reference"
    assert body["retryable"] is False
    assert "timestamp" in body


def test_envelope_omits_empty_details():
    assert "details" not in ConflictError("dup").to_response()["error"]


def test_timeout_message_names_budget():
    assert StorageTimeoutError(5.0).message == "Database did not respond within 5s"
