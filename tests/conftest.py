# ABOUTME: Shared pytest fixtures for profile-directory tests.
# ABOUTME: Provides sample profiles, zero-latency stores and a temporary seed file.

import json
from pathlib import Path
from typing import Any

import pytest

from profile_directory.logging_config import reset_logging
from profile_directory.models import Profile
from profile_directory.store import ProfileStore, StoreDelays


def _profile_document(profile_id: int | None = None, **overrides: Any) -> dict[str, Any]:
    """Build a complete camelCase profile document with sensible defaults."""
    document: dict[str, Any] = {
        "name": "Test Person",
        "photo": "https://example.com/photo.jpg",
        "shortBio": "Short bio",
        "fullBio": "A much longer biography.",
        "address": "Portland, OR",
        "latitude": 45.5152,
        "longitude": -122.6784,
        "contact": {
            "email": "test@example.com",
            "phone": "+1 555 0100",
            "social": {"github": "tester"},
        },
        "interests": ["Reading"],
        "skills": ["Testing"],
        "education": [{"degree": "BSc", "institution": "State University", "year": "2010"}],
        "company": "Test Co",
    }
    if profile_id is not None:
        document["id"] = profile_id
    document.update(overrides)
    return document


@pytest.fixture
def ada_and_grace() -> list[Profile]:
    """The two-profile directory used by the store scenario tests."""
    return [
        Profile.model_validate(
            _profile_document(
                1,
                name="Ada Lovelace",
                company="Analytical Engines",
                skills=["math"],
                interests=["poetry"],
                shortBio="First programmer",
                address="London, UK",
            )
        ),
        Profile.model_validate(
            _profile_document(
                2,
                name="Grace Hopper",
                company="Navy",
                skills=["cobol"],
                interests=["compilers"],
                shortBio="Rear admiral",
                address="Arlington, VA",
            )
        ),
    ]


@pytest.fixture
def store(ada_and_grace: list[Profile]) -> ProfileStore:
    """A zero-latency store seeded with Ada and Grace."""
    return ProfileStore(ada_and_grace, delays=StoreDelays.none())


@pytest.fixture
def new_profile_document() -> dict[str, Any]:
    """A valid profile document without an id."""
    return _profile_document(
        name="Margaret Hamilton",
        company="MIT Instrumentation Lab",
        skills=["software engineering", "assembly"],
        interests=["space"],
    )


@pytest.fixture
def seed_file(tmp_path: Path, ada_and_grace: list[Profile]) -> Path:
    """A seed file holding Ada and Grace."""
    path = tmp_path / "profiles.json"
    path.write_text(json.dumps([p.to_document() for p in ada_and_grace]), encoding="utf-8")
    return path


@pytest.fixture
def make_document():
    """Factory for complete profile documents: make_document(id=None, **overrides)."""
    return _profile_document


@pytest.fixture(autouse=True)
def fresh_logging():
    """Undo logging configuration done by CLI invocations, which bind to captured streams."""
    yield
    reset_logging()
