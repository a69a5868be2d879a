"""Field Validation — pure predicates for every product field.

Invariants:
    - All functions are PURE: no IO, no state, no side effects
    - Return ErrorCode on violation, None on success
    - validate_creation_fields / validate_update_fields chain checks — first error wins
    - Creation order: images, species, origin, harvest_date, weight,
      description, location, currency
    - description is the only text field allowed to be empty

Design Decisions:
    - Pure functions over a validator class: testable without fixtures
    - No aggregation of failures: the first failing rule determines the error
"""

from product_registry.core.domain_types import (
    Currency,
    DESCRIPTION_MAX_LENGTH,
    IMAGE_URL_MAX_LENGTH,
    LOCATION_MAX_LENGTH,
    MAX_IMAGES_PER_PRODUCT,
    ORIGIN_MAX_LENGTH,
    SPECIES_MAX_LENGTH,
)
from product_registry.core.errors import ErrorCode

_CURRENCIES = frozenset(c.value for c in Currency)


def _within(text: str, min_length: int, max_length: int) -> bool:
    return min_length <= len(text) <= max_length


def check_species(species: str) -> ErrorCode | None:
    if not _within(species, 1, SPECIES_MAX_LENGTH):
        return ErrorCode.INVALID_SPECIES
    return None


def check_origin(origin: str) -> ErrorCode | None:
    if not _within(origin, 1, ORIGIN_MAX_LENGTH):
        return ErrorCode.INVALID_ORIGIN
    return None


def check_harvest_date(harvest_date: int, current_height: int) -> ErrorCode | None:
    """Harvest cannot postdate the ledger height at creation."""
    if harvest_date > current_height:
        return ErrorCode.INVALID_HARVEST_DATE
    return None


def check_weight(weight: int) -> ErrorCode | None:
    if weight <= 0:
        return ErrorCode.INVALID_WEIGHT
    return None


def check_description(description: str) -> ErrorCode | None:
    if not _within(description, 0, DESCRIPTION_MAX_LENGTH):
        return ErrorCode.INVALID_DESCRIPTION
    return None


def check_location(location: str) -> ErrorCode | None:
    if not _within(location, 1, LOCATION_MAX_LENGTH):
        return ErrorCode.INVALID_LOCATION
    return None


def check_currency(currency: str) -> ErrorCode | None:
    if currency not in _CURRENCIES:
        return ErrorCode.INVALID_CURRENCY
    return None


def check_images(images: list[str]) -> ErrorCode | None:
    """Count first, then each URL in order."""
    if len(images) > MAX_IMAGES_PER_PRODUCT:
        return ErrorCode.INVALID_IMAGE_COUNT
    for url in images:
        if not _within(url, 1, IMAGE_URL_MAX_LENGTH):
            return ErrorCode.INVALID_IMAGE_URL
    return None


def validate_creation_fields(
    *,
    species: str,
    origin: str,
    harvest_date: int,
    weight: int,
    description: str,
    location: str,
    currency: str,
    images: list[str],
    current_height: int,
) -> ErrorCode | None:
    """Chain all creation field checks. Returns first error or None."""
    return (
        check_images(images)
        or check_species(species)
        or check_origin(origin)
        or check_harvest_date(harvest_date, current_height)
        or check_weight(weight)
        or check_description(description)
        or check_location(location)
        or check_currency(currency)
    )


def validate_update_fields(
    *,
    species: str,
    origin: str,
    weight: int,
    description: str,
    location: str,
    currency: str,
) -> ErrorCode | None:
    """Chain the mutable-field checks. Returns first error or None."""
    return (
        check_species(species)
        or check_origin(origin)
        or check_weight(weight)
        or check_description(description)
        or check_location(location)
        or check_currency(currency)
    )
