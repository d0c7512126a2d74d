# ABOUTME: Models package for profile directory data structures.
# ABOUTME: Exports Profile, ProfileData and the nested contact/education models.

from profile_directory.models.profile import (
    SOCIAL_PLATFORMS,
    Education,
    Profile,
    ProfileContact,
    ProfileData,
    SocialLinks,
    document_keys,
)

__all__ = [
    "Education",
    "Profile",
    "ProfileContact",
    "ProfileData",
    "SOCIAL_PLATFORMS",
    "SocialLinks",
    "document_keys",
]
