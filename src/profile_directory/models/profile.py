# ABOUTME: Pydantic models for directory profiles and their nested contact/education parts.
# ABOUTME: Accepts the camelCase seed-file shape while exposing snake_case attributes.

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

SOCIAL_PLATFORMS = ("twitter", "linkedin", "github", "dribbble", "instagram", "medium")


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SocialLinks(_CamelModel):
    """Optional handles on social platforms, keyed by platform name."""

    twitter: str | None = None
    linkedin: str | None = None
    github: str | None = None
    dribbble: str | None = None
    instagram: str | None = None
    medium: str | None = None

    def present(self) -> dict[str, str]:
        """Return only the platforms that have a non-empty handle."""
        return {
            platform: handle
            for platform in SOCIAL_PLATFORMS
            if (handle := getattr(self, platform))
        }


class ProfileContact(_CamelModel):
    """Contact details for a profile."""

    email: str
    phone: str
    social: SocialLinks = Field(default_factory=SocialLinks)


class Education(_CamelModel):
    """A single education entry. Year is free text, as entered in the form."""

    degree: str
    institution: str
    year: str


class ProfileData(_CamelModel):
    """All profile fields except the store-assigned id."""

    name: str
    photo: Annotated[str, Field(description="Photo URL")]
    short_bio: Annotated[str, Field(alias="shortBio", description="Shown on cards")]
    full_bio: Annotated[str, Field(alias="fullBio", description="Shown on the detail view")]
    address: str
    latitude: float
    longitude: float
    contact: ProfileContact
    interests: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    company: str


class Profile(ProfileData):
    """A directory entry as held by the store."""

    id: int

    def to_document(self) -> dict:
        """Serialize to the camelCase document shape used by the seed file."""
        return self.model_dump(by_alias=True, mode="json")


def document_keys(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Rename attribute-style keys (short_bio) to document keys (shortBio).

    Keys that are already document keys, or unknown, pass through unchanged.
    """
    renamed: dict[str, Any] = {}
    for key, value in fields.items():
        field = Profile.model_fields.get(key)
        renamed[field.alias if field is not None and field.alias else key] = value
    return renamed
