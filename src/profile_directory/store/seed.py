# ABOUTME: Loads the static seed data file that initializes the profile store.
# ABOUTME: Validates every record against the Profile model before use.

import json
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from profile_directory.errors import SeedDataError
from profile_directory.models import Profile

_PROFILE_LIST = TypeAdapter(list[Profile])


def load_seed_profiles(path: Path) -> list[Profile]:
    """Load and validate seed profiles from a JSON file.

    Args:
        path: Path to a JSON array of camelCase profile documents.

    Returns:
        The profiles in file order.

    Raises:
        SeedDataError: If the file cannot be read, is not valid JSON, does not
            match the Profile shape, or repeats an id.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SeedDataError(f"Cannot read seed file {path}: {e}") from e

    try:
        profiles = _PROFILE_LIST.validate_python(json.loads(raw))
    except json.JSONDecodeError as e:
        raise SeedDataError(f"Seed file {path} is not valid JSON: {e}") from e
    except ValidationError as e:
        raise SeedDataError(f"Seed file {path} has invalid profiles: {e}") from e

    seen: set[int] = set()
    for profile in profiles:
        if profile.id in seen:
            raise SeedDataError(f"Seed file {path} repeats profile id {profile.id}")
        seen.add(profile.id)

    return profiles
