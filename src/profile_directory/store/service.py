# ABOUTME: In-memory profile store that simulates an asynchronous backend.
# ABOUTME: Provides CRUD and search over an ordered sequence with per-operation latency.

import asyncio
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from profile_directory.models import Profile, ProfileData, document_keys
from profile_directory.search.filters import FilterField, filter_profiles
from profile_directory.store.seed import load_seed_profiles

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StoreDelays:
    """Simulated latency, in seconds, for each store operation."""

    get_all: float = 0.5
    get_by_id: float = 0.3
    add: float = 0.5
    update: float = 0.5
    delete: float = 0.5
    search: float = 0.3

    @classmethod
    def none(cls) -> "StoreDelays":
        """Delays of zero for every operation."""
        return cls(0, 0, 0, 0, 0, 0)


class ProfileStore:
    """Sole owner of the canonical profile sequence.

    Mutations are applied as soon as an operation is called; the simulated
    delay only defers when the caller sees the result. Records handed out are
    copies, so callers cannot change store state without going through it.
    Missing records are reported with None/False, never with exceptions.
    """

    def __init__(
        self,
        profiles: Iterable[Profile] = (),
        delays: StoreDelays | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            profiles: Seed profiles, in display order.
            delays: Per-operation latency. Defaults to StoreDelays().
        """
        self._profiles: list[Profile] = [profile.model_copy(deep=True) for profile in profiles]
        self.delays = delays if delays is not None else StoreDelays()

    @classmethod
    def from_seed_file(cls, path: Path, delays: StoreDelays | None = None) -> "ProfileStore":
        """Create a store seeded from a JSON seed file.

        Args:
            path: Path to the JSON seed file.
            delays: Per-operation latency.

        Returns:
            A ProfileStore holding the seed profiles.

        Raises:
            SeedDataError: If the file is missing or malformed.
        """
        return cls(load_seed_profiles(path), delays=delays)

    def __len__(self) -> int:
        return len(self._profiles)

    async def _respond(self, delay: float, result: Any) -> Any:
        await asyncio.sleep(delay)
        return result

    def _index_of(self, profile_id: int) -> int | None:
        for index, profile in enumerate(self._profiles):
            if profile.id == profile_id:
                return index
        return None

    def _snapshot(self) -> list[Profile]:
        return [profile.model_copy(deep=True) for profile in self._profiles]

    async def get_all(self) -> list[Profile]:
        """Return every profile in store order."""
        return await self._respond(self.delays.get_all, self._snapshot())

    async def get_by_id(self, profile_id: int) -> Profile | None:
        """Look up a profile by id.

        Args:
            profile_id: The id to look for.

        Returns:
            A copy of the profile, or None if no profile has that id.
        """
        index = self._index_of(profile_id)
        found = self._profiles[index].model_copy(deep=True) if index is not None else None
        return await self._respond(self.delays.get_by_id, found)

    async def add(self, fields: ProfileData | Mapping[str, Any]) -> Profile:
        """Append a new profile, assigning the next id.

        The new id is one more than the largest id currently held, or 1 when
        the store is empty.

        Args:
            fields: Profile fields without an id.

        Returns:
            The stored profile including its assigned id.
        """
        data = fields if isinstance(fields, ProfileData) else ProfileData.model_validate(fields)
        new_id = max((profile.id for profile in self._profiles), default=0) + 1
        profile = Profile.model_validate({**data.model_dump(), "id": new_id})
        self._profiles.append(profile)
        logger.debug("profile_added", profile_id=new_id, name=profile.name)
        return await self._respond(self.delays.add, profile.model_copy(deep=True))

    async def update(self, profile_id: int, partial: Mapping[str, Any]) -> Profile | None:
        """Shallow-merge fields onto an existing profile, keeping its position.

        Nested values such as contact replace the stored value wholesale. An
        "id" key in partial is ignored.

        Args:
            profile_id: The profile to update.
            partial: Field values to apply, by attribute name or camelCase alias.

        Returns:
            The merged profile, or None if no profile has that id.
        """
        index = self._index_of(profile_id)
        if index is None:
            return await self._respond(self.delays.update, None)

        current = self._profiles[index].model_dump(by_alias=True)
        changes = {key: value for key, value in document_keys(partial).items() if key != "id"}
        merged = Profile.model_validate({**current, **changes, "id": profile_id})
        self._profiles[index] = merged
        logger.debug("profile_updated", profile_id=profile_id, fields=sorted(changes))
        return await self._respond(self.delays.update, merged.model_copy(deep=True))

    async def delete(self, profile_id: int) -> bool:
        """Remove a profile.

        Args:
            profile_id: The profile to remove.

        Returns:
            True if a profile was removed, False if none had that id.
        """
        initial_length = len(self._profiles)
        self._profiles = [profile for profile in self._profiles if profile.id != profile_id]
        removed = len(self._profiles) != initial_length
        if removed:
            logger.debug("profile_deleted", profile_id=profile_id)
        return await self._respond(self.delays.delete, removed)

    async def search(
        self, query: str, filter_by: FilterField | str | None = None
    ) -> list[Profile]:
        """Find profiles matching a query, in store order.

        Args:
            query: Case-insensitive substring to look for. Empty returns all.
            filter_by: Optional field restriction; unknown values search all fields.

        Returns:
            The matching profiles.
        """
        results = filter_profiles(self._snapshot(), query, filter_by)
        return await self._respond(self.delays.search, results)
