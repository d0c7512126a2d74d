# ABOUTME: Display module for Rich terminal output formatting.
# ABOUTME: Exports listing, detail, map, status and error renderers.

from profile_directory.display.detail import render_profile_detail
from profile_directory.display.errors import (
    display_error,
    display_not_found,
    display_validation_errors,
)
from profile_directory.display.map import map_center, render_map
from profile_directory.display.status import (
    display_search_summary,
    render_notification,
    render_notifications,
)
from profile_directory.display.tables import ProfileTable

__all__ = [
    "ProfileTable",
    "display_error",
    "display_not_found",
    "display_search_summary",
    "display_validation_errors",
    "map_center",
    "render_map",
    "render_notification",
    "render_notifications",
    "render_profile_detail",
]
