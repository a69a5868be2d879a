"""Error Hierarchy — verifies stable codes, categories, and exception mapping.

Tests:
    - Numeric tags 200-220 are stable
    - Every ErrorCode has a category
    - error_for_code picks the right exception class and HTTP status
    - to_response carries the numeric error_code
"""

from dataclasses import fields

import pytest

from product_registry.core.errors import (
    AuthorizationError,
    CODE_CATEGORIES,
    CapacityError,
    ConfigError,
    ErrorCategory,
    ErrorCode,
    ErrorContext,
    FeeTransferError,
    FieldValidationError,
    StateError,
    error_for_code,
)


def test_stable_numeric_tags():
    assert ErrorCode.NOT_AUTHORIZED == 200
    assert ErrorCode.INVALID_SPECIES == 201
    assert ErrorCode.INVALID_ORIGIN == 202
    assert ErrorCode.INVALID_HARVEST_DATE == 203
    assert ErrorCode.INVALID_WEIGHT == 204
    assert ErrorCode.INVALID_DESCRIPTION == 205
    assert ErrorCode.INVALID_STATUS == 206
    assert ErrorCode.ALREADY_EXISTS == 207
    assert ErrorCode.NOT_FOUND == 208
    assert ErrorCode.INVALID_TIMESTAMP == 209
    assert ErrorCode.INVALID_LOCATION == 210
    assert ErrorCode.INVALID_CURRENCY == 211
    assert ErrorCode.INVALID_CERT_ID == 212
    assert ErrorCode.INVALID_UPDATE_PARAM == 213
    assert ErrorCode.MAX_PRODUCTS_EXCEEDED == 214
    assert ErrorCode.INVALID_ROLE == 215
    assert ErrorCode.ALREADY_LINKED == 216
    assert ErrorCode.INVALID_IMAGE_COUNT == 217
    assert ErrorCode.INVALID_IMAGE_URL == 218
    assert ErrorCode.INVALID_PRODUCT_ID == 219
    assert ErrorCode.NOT_ACTIVE == 220


def test_every_code_is_categorized():
    assert set(CODE_CATEGORIES) == set(ErrorCode)


def test_every_code_is_truthy():
    assert all(ErrorCode)


@pytest.mark.parametrize("code, exc_class, http_status", [
    (ErrorCode.INVALID_ROLE, AuthorizationError, 403),
    (ErrorCode.NOT_AUTHORIZED, AuthorizationError, 403),
    (ErrorCode.INVALID_WEIGHT, FieldValidationError, 400),
    (ErrorCode.MAX_PRODUCTS_EXCEEDED, CapacityError, 409),
    (ErrorCode.NOT_FOUND, StateError, 404),
    (ErrorCode.NOT_ACTIVE, StateError, 409),
    (ErrorCode.ALREADY_LINKED, StateError, 409),
    (ErrorCode.INVALID_UPDATE_PARAM, ConfigError, 400),
    (ErrorCode.FEE_TRANSFER_FAILED, FeeTransferError, 402),
])
def test_error_for_code(code, exc_class, http_status):
    exc = error_for_code(code)
    assert isinstance(exc, exc_class)
    assert exc.http_status == http_status
    assert exc.error_code == code


def test_field_validation_error_names_field():
    exc = error_for_code(ErrorCode.INVALID_HARVEST_DATE)
    assert exc.field == "harvest_date"


def test_to_response_envelope():
    exc = error_for_code(
        ErrorCode.NOT_ACTIVE,
        ErrorContext(operation="deactivate_product", product_id=1),
    )
    body = exc.to_response()["error"]
    assert body["code"] == "NOT_ACTIVE"
    assert body["error_code"] == 220
    assert body["category"] == ErrorCategory.STATE.value
    assert body["context"]["operation"] == "deactivate_product"
    assert body["context"]["product_id"] == 1


def test_error_context_fields():
    assert [f.name for f in fields(ErrorContext)] == [
        "timestamp", "operation", "caller", "product_id", "ledger_height",
    ]
