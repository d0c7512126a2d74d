# ABOUTME: Search package for profile directory search functionality.
# ABOUTME: Exports FilterField and the matching helpers.

from profile_directory.search.filters import (
    FilterField,
    filter_profiles,
    matches,
)

__all__ = ["FilterField", "filter_profiles", "matches"]
