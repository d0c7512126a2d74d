# ABOUTME: Presence checks applied to admin profile form data before it is submitted.
# ABOUTME: Also provides the blank form template used when adding a new profile.

from collections.abc import Mapping
from typing import Any

from profile_directory.errors import ProfileValidationError

_REQUIRED_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("name", "name", "Name is required"),
    ("photo", "photo", "Photo URL is required"),
    ("shortBio", "short_bio", "Short bio is required"),
    ("fullBio", "full_bio", "Full bio is required"),
    ("address", "address", "Address is required"),
    ("latitude", "latitude", "Latitude is required"),
    ("longitude", "longitude", "Longitude is required"),
    ("company", "company", "Company is required"),
)


def empty_profile_form() -> dict[str, Any]:
    """Return a blank form in the camelCase document shape."""
    return {
        "name": "",
        "photo": "",
        "shortBio": "",
        "fullBio": "",
        "address": "",
        "latitude": 0,
        "longitude": 0,
        "contact": {
            "email": "",
            "phone": "",
            "social": {"twitter": "", "linkedin": "", "github": ""},
        },
        "interests": [],
        "skills": [],
        "education": [{"degree": "", "institution": "", "year": ""}],
        "company": "",
    }


def _lookup(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def validate_profile_form(data: Mapping[str, Any]) -> dict[str, str]:
    """Check that every required profile form value is present.

    Values are checked for presence only: empty strings, zero coordinates,
    and empty lists all count as missing, as does a contact or education entry
    that is not an object. Keys may be camelCase or snake_case.

    Args:
        data: Form data in the profile document shape.

    Returns:
        Mapping of field path to error message; empty when the form is valid.
    """
    errors: dict[str, str] = {}

    for alias, name, message in _REQUIRED_FIELDS:
        if not _lookup(data, alias, name):
            errors[alias] = message

    contact = data.get("contact")
    if not isinstance(contact, Mapping):
        contact = {}
    if not contact.get("email"):
        errors["contact.email"] = "Email is required"
    if not contact.get("phone"):
        errors["contact.phone"] = "Phone is required"

    if not data.get("skills"):
        errors["skills"] = "At least one skill is required"
    if not data.get("interests"):
        errors["interests"] = "At least one interest is required"

    education = data.get("education")
    first = education[0] if isinstance(education, list) and education else None
    if not isinstance(first, Mapping) or not first.get("degree") or not first.get("institution"):
        errors["education"] = "At least one education entry is required"

    return errors


def ensure_valid_profile_form(data: Mapping[str, Any]) -> None:
    """Raise if the form data is missing required values.

    Raises:
        ProfileValidationError: With the field errors from validate_profile_form.
    """
    errors = validate_profile_form(data)
    if errors:
        raise ProfileValidationError(errors)
