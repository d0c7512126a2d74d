# ABOUTME: Defines the search filter fields and the profile matching predicate.
# ABOUTME: Matching is case-insensitive substring search with no tokenization or ranking.

from enum import Enum

from profile_directory.models import Profile


class FilterField(str, Enum):
    """Profile attribute a search can be restricted to."""

    NAME = "name"
    LOCATION = "location"  # matched against the address
    SKILLS = "skills"
    INTERESTS = "interests"
    COMPANY = "company"

    @classmethod
    def parse(cls, value: "str | FilterField | None") -> "FilterField | None":
        """Coerce a raw filter value, mapping empty or unknown values to None.

        Only the exact field values are recognized; anything else, including
        a differently cased value, means "search every field".

        Args:
            value: A FilterField, its string value, or None/"".

        Returns:
            The matching FilterField, or None for "search every field".
        """
        if value is None or isinstance(value, FilterField):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


def _contains(value: str, needle: str) -> bool:
    return needle in value.lower()


def _any_contains(values: list[str], needle: str) -> bool:
    return any(needle in value.lower() for value in values)


def matches(profile: Profile, query: str, filter_by: FilterField | str | None = None) -> bool:
    """Check whether a profile matches a search query.

    An empty query matches every profile regardless of filter. Otherwise the
    lower-cased query must appear as a substring of the filtered field; with no
    (or an unrecognized) filter, any of name, short bio, address, company,
    skills or interests may match.

    Args:
        profile: The profile to test.
        query: The raw query string.
        filter_by: Optional field restriction.

    Returns:
        True if the profile matches.
    """
    if not query:
        return True

    needle = query.lower()
    field = FilterField.parse(filter_by)

    if field is FilterField.NAME:
        return _contains(profile.name, needle)
    if field is FilterField.LOCATION:
        return _contains(profile.address, needle)
    if field is FilterField.SKILLS:
        return _any_contains(profile.skills, needle)
    if field is FilterField.INTERESTS:
        return _any_contains(profile.interests, needle)
    if field is FilterField.COMPANY:
        return _contains(profile.company, needle)

    return (
        _contains(profile.name, needle)
        or _contains(profile.short_bio, needle)
        or _contains(profile.address, needle)
        or _contains(profile.company, needle)
        or _any_contains(profile.skills, needle)
        or _any_contains(profile.interests, needle)
    )


def filter_profiles(
    profiles: list[Profile], query: str, filter_by: FilterField | str | None = None
) -> list[Profile]:
    """Return the profiles matching a query, in their original order."""
    return [profile for profile in profiles if matches(profile, query, filter_by)]
