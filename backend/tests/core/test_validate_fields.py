"""Field Validation — tests for pure per-field predicates and check ordering.

Tests cover:
    - Each field's lower and upper bound (inclusive)
    - description is the only text field allowed to be empty
    - harvest_date may equal but not exceed the ledger height
    - currency is an exact, case-sensitive match
    - images: count checked before URLs; first bad URL wins
    - validate_creation_fields returns the FIRST failing rule in creation order
"""

import pytest

from product_registry.core.errors import ErrorCode
from product_registry.core.validate_fields import (
    check_currency,
    check_description,
    check_harvest_date,
    check_images,
    check_location,
    check_origin,
    check_species,
    check_weight,
    validate_creation_fields,
    validate_update_fields,
)


def _creation(**overrides) -> dict:
    fields = {
        "species": "Elephant Ivory",
        "origin": "Africa",
        "harvest_date": 100,
        "weight": 500,
        "description": "Large tusk",
        "location": "Savanna",
        "currency": "USD",
        "images": ["url1"],
        "current_height": 100,
    }
    fields.update(overrides)
    return fields


# ─── Text bounds ─────────────────────────────────────────────────

@pytest.mark.parametrize("check, max_length, code", [
    (check_species, 50, ErrorCode.INVALID_SPECIES),
    (check_origin, 100, ErrorCode.INVALID_ORIGIN),
    (check_location, 100, ErrorCode.INVALID_LOCATION),
])
def test_required_text_bounds(check, max_length, code):
    assert check("") == code
    assert check("a") is None
    assert check("a" * max_length) is None
    assert check("a" * (max_length + 1)) == code


def test_description_allows_empty():
    assert check_description("") is None


def test_description_upper_bound():
    assert check_description("d" * 500) is None
    assert check_description("d" * 501) == ErrorCode.INVALID_DESCRIPTION


def test_length_counts_characters_not_bytes():
    assert check_species("é" * 50) is None


# ─── Numeric rules ───────────────────────────────────────────────

def test_harvest_date_equal_to_height_passes():
    assert check_harvest_date(100, 100) is None


def test_harvest_date_after_height_fails():
    assert check_harvest_date(101, 100) == ErrorCode.INVALID_HARVEST_DATE


def test_weight_must_be_positive():
    assert check_weight(0) == ErrorCode.INVALID_WEIGHT
    assert check_weight(-5) == ErrorCode.INVALID_WEIGHT
    assert check_weight(1) is None


# ─── Currency ────────────────────────────────────────────────────

@pytest.mark.parametrize("currency", ["STX", "USD", "BTC"])
def test_currency_accepts_enumerated_values(currency):
    assert check_currency(currency) is None


@pytest.mark.parametrize("currency", ["usd", "EUR", "", "USD "])
def test_currency_rejects_everything_else(currency):
    assert check_currency(currency) == ErrorCode.INVALID_CURRENCY


# ─── Images ──────────────────────────────────────────────────────

def test_images_empty_list_passes():
    assert check_images([]) is None


def test_images_ten_valid_urls_pass():
    assert check_images([f"https://img/{i}" for i in range(10)]) is None


def test_images_eleven_fails_count():
    assert check_images(["url"] * 11) == ErrorCode.INVALID_IMAGE_COUNT


def test_images_count_checked_before_urls():
    assert check_images([""] * 11) == ErrorCode.INVALID_IMAGE_COUNT


def test_images_empty_url_fails():
    assert check_images(["ok", ""]) == ErrorCode.INVALID_IMAGE_URL


def test_images_url_length_bound():
    assert check_images(["u" * 200]) is None
    assert check_images(["u" * 201]) == ErrorCode.INVALID_IMAGE_URL


# ─── Chained validation ──────────────────────────────────────────

def test_validate_creation_fields_passes_valid_input():
    assert validate_creation_fields(**_creation()) is None


def test_validate_creation_images_before_species():
    error = validate_creation_fields(**_creation(images=["x"] * 11, species=""))
    assert error == ErrorCode.INVALID_IMAGE_COUNT


def test_validate_creation_species_before_origin():
    error = validate_creation_fields(**_creation(species="", origin=""))
    assert error == ErrorCode.INVALID_SPECIES


def test_validate_creation_harvest_before_weight():
    error = validate_creation_fields(**_creation(harvest_date=101, weight=0))
    assert error == ErrorCode.INVALID_HARVEST_DATE


def test_validate_creation_description_before_location():
    error = validate_creation_fields(
        **_creation(description="d" * 501, location=""),
    )
    assert error == ErrorCode.INVALID_DESCRIPTION


def test_validate_creation_currency_is_last():
    error = validate_creation_fields(**_creation(currency="EUR"))
    assert error == ErrorCode.INVALID_CURRENCY


def test_validate_update_fields_ignores_harvest_and_images():
    error = validate_update_fields(
        species="Rhino Horn", origin="Asia", weight=300,
        description="", location="Jungle", currency="BTC",
    )
    assert error is None


def test_validate_update_weight_before_description():
    error = validate_update_fields(
        species="Rhino Horn", origin="Asia", weight=0,
        description="d" * 501, location="Jungle", currency="BTC",
    )
    assert error == ErrorCode.INVALID_WEIGHT
