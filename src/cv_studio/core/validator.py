"""Pure field validation for submitted CV records.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic.  Values are checked exactly as
entered; no trimming or normalisation is applied.

Per-field checks return a :data:`~cv_studio.core.models.ValidationResult`;
:func:`validate_fields` runs all of them and collects every failure
instead of stopping at the first one.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from cv_studio.core.models import VALID, Invalid, ValidationResult
from cv_studio.exceptions import FieldError, RecordValidationError

NAME_MIN_LENGTH = 5
NAME_MAX_LENGTH = 20

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,4}$")

CARRIER_CODES: tuple[str, ...] = ("50", "51", "55", "70", "77", "99")
PHONE_PATTERN = re.compile(
    r"^(\+994|0)(" + "|".join(CARRIER_CODES) + r")([0-9]{7})$"
)

_CARRIERS = "|".join(CARRIER_CODES)
PHONE_FORMAT_MESSAGE = (
    f"Invalid phone number. Use format +994({_CARRIERS})XXXXXXX "
    f"or 0({_CARRIERS})XXXXXXX"
)


# ---------------------------------------------------------------------------
# Single-field checks
# ---------------------------------------------------------------------------

def validate_name(value: str) -> ValidationResult:
    """Require 5 to 20 characters (counted as code points)."""
    if not value:
        return Invalid("required", "This field is required!")
    if not NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH:
        return Invalid(
            "length",
            f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters!",
        )
    return VALID


def validate_email(value: str) -> ValidationResult:
    if not value:
        return Invalid("required", "Email is required!")
    if not EMAIL_PATTERN.fullmatch(value):
        return Invalid("format", "Invalid email address!")
    return VALID


def validate_phone(value: str) -> ValidationResult:
    """Accept ``+994`` or ``0``, a carrier code, then seven digits."""
    if not value:
        return Invalid("required", "Phone number is required!")
    if not PHONE_PATTERN.fullmatch(value):
        return Invalid("format", PHONE_FORMAT_MESSAGE)
    return VALID


def validate_image(value: str) -> ValidationResult:
    # Any non-empty string is accepted: remote URL or data URI.
    if not value:
        return Invalid("required", "Image is required!")
    return VALID


def validate_experience(value: str) -> ValidationResult:
    if not value:
        return Invalid("required", "Experience is required!")
    return VALID


FIELD_VALIDATORS: dict[str, Callable[[str], ValidationResult]] = {
    "fullName": validate_name,
    "email": validate_email,
    "phone": validate_phone,
    "image": validate_image,
    "experience": validate_experience,
}


# ---------------------------------------------------------------------------
# Aggregate check
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Outcome of validating all five fields of one submission."""

    errors: tuple[FieldError, ...]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise :class:`RecordValidationError` if any field failed."""
        if self.errors:
            raise RecordValidationError(self.errors)


def validate_fields(raw: Mapping[str, str]) -> ValidationReport:
    """Validate every field of *raw*, collecting all failures.

    Missing keys are treated as empty input.
    """
    errors: list[FieldError] = []
    for field_name, check in FIELD_VALIDATORS.items():
        result = check(raw.get(field_name) or "")
        if isinstance(result, Invalid):
            errors.append(FieldError(field_name, result.code, result.message))
    return ValidationReport(errors=tuple(errors))
