# ABOUTME: Session-lifetime profile state shared by every presentation component.
# ABOUTME: Mediates reads and writes against the ProfileStore and debounces search criteria.

from collections.abc import AsyncIterator, Callable, Mapping
from contextlib import asynccontextmanager
from types import TracebackType
from typing import Any, NoReturn

import structlog
from pydantic import BaseModel, ConfigDict

from profile_directory.controller.scheduling import Debouncer
from profile_directory.errors import OperationFailedError
from profile_directory.models import Profile, ProfileData
from profile_directory.search.filters import FilterField
from profile_directory.store.service import ProfileStore

logger = structlog.get_logger(__name__)

LOAD_ERROR = "Failed to load profiles. Please try again later."
SEARCH_ERROR = "Search failed. Please try again."
ADD_ERROR = "Failed to add profile. Please try again."
UPDATE_ERROR = "Failed to update profile. Please try again."
DELETE_ERROR = "Failed to delete profile. Please try again."

DEFAULT_DEBOUNCE_SECONDS = 0.3


class ProfileStateSnapshot(BaseModel):
    """Immutable view of the controller state at one point in time."""

    model_config = ConfigDict(frozen=True)

    profiles: tuple[Profile, ...]
    search_results: tuple[Profile, ...]
    loading: bool
    error: str | None
    search_query: str
    filter_by: FilterField | None


StateListener = Callable[[ProfileStateSnapshot], None]


class ProfileStateController:
    """Client-visible profile state for one application session.

    Holds the last full load (profiles), the last search outcome
    (search_results), loading/error flags and the active search criteria.
    Construct one per session, call start() before use and close() when the
    session ends, or use it as an async context manager.

    Operations may overlap. loading stays true until every outstanding store
    call sequence has finished, and search_results only accepts the result of
    the most recently started load or search, so a slow stale search cannot
    overwrite a fresher one. error is last-write-wins.
    """

    def __init__(
        self,
        store: ProfileStore,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        """Initialize the controller.

        Args:
            store: The store all reads and writes go through.
            debounce_seconds: Quiet window before changed criteria are searched.
        """
        self._store = store
        self.profiles: list[Profile] = []
        self.search_results: list[Profile] = []
        self.error: str | None = None
        self.search_query = ""
        self.filter_by: FilterField | None = None

        self._outstanding = 0
        self._search_seq = 0
        self._listeners: list[StateListener] = []
        self._debouncer = Debouncer(debounce_seconds, self.perform_search)

    async def __aenter__(self) -> "ProfileStateController":
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def loading(self) -> bool:
        """True while any store call sequence is outstanding."""
        return self._outstanding > 0

    @property
    def search_pending(self) -> bool:
        """True while a debounced search is waiting for its quiet window."""
        return self._debouncer.pending

    def snapshot(self) -> ProfileStateSnapshot:
        """Return an immutable copy of the current state."""
        return ProfileStateSnapshot(
            profiles=tuple(self.profiles),
            search_results=tuple(self.search_results),
            loading=self.loading,
            error=self.error,
            search_query=self.search_query,
            filter_by=self.filter_by,
        )

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called with a snapshot after every state change.

        Args:
            listener: Callable receiving a ProfileStateSnapshot.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    @asynccontextmanager
    async def _busy(self) -> AsyncIterator[None]:
        self._outstanding += 1
        self._notify()
        try:
            yield
        finally:
            self._outstanding -= 1
            self._notify()

    def _next_search_seq(self) -> int:
        self._search_seq += 1
        return self._search_seq

    def _fail(self, message: str, operation: str, cause: Exception) -> NoReturn:
        logger.exception("profile_operation_failed", operation=operation)
        self.error = message
        self._notify()
        raise OperationFailedError(message, operation=operation) from cause

    async def start(self) -> None:
        """Load the initial profile collection."""
        await self._load()

    async def close(self) -> None:
        """End the session: drop any pending search and wait for running ones."""
        await self._debouncer.aclose()
        self._listeners.clear()

    async def _load(self) -> None:
        seq = self._next_search_seq()
        async with self._busy():
            try:
                data = await self._store.get_all()
            except Exception:
                logger.exception("profiles_load_failed")
                self.error = LOAD_ERROR
                return

            self.profiles = data
            self.error = None
            if seq == self._search_seq:
                if self.search_query:
                    # Active criteria: results must still reflect the query.
                    await self.perform_search()
                else:
                    self.search_results = list(data)

    async def refresh_profiles(self) -> None:
        """Reload the full profile collection from the store."""
        await self._load()

    async def perform_search(self) -> None:
        """Search the store with the current criteria right away.

        Failures set error but are not raised.
        """
        seq = self._next_search_seq()
        query, filter_by = self.search_query, self.filter_by
        async with self._busy():
            try:
                results = await self._store.search(query, filter_by)
            except Exception:
                logger.exception("profile_search_failed", query=query, filter_by=filter_by)
                self.error = SEARCH_ERROR
                return

            if seq == self._search_seq:
                self.search_results = results
            else:
                logger.debug("stale_search_discarded", query=query, filter_by=filter_by)

    async def wait_for_search(self) -> None:
        """Wait for a pending debounced search to run and finish."""
        await self._debouncer.settled()

    def set_search_query(self, query: str) -> None:
        """Change the search query and schedule a debounced search.

        Must be called from within the running event loop.
        """
        if query == self.search_query:
            return
        self.search_query = query
        self._notify()
        self._debouncer.trigger()

    def set_filter_by(self, filter_by: FilterField | str | None) -> None:
        """Change the filter field and schedule a debounced search.

        Empty or unknown values clear the filter. Must be called from within
        the running event loop.
        """
        field = FilterField.parse(filter_by)
        if field == self.filter_by:
            return
        self.filter_by = field
        self._notify()
        self._debouncer.trigger()

    async def add_new_profile(self, fields: ProfileData | Mapping[str, Any]) -> Profile:
        """Add a profile through the store and reload profiles.

        Args:
            fields: Profile fields without an id.

        Returns:
            The stored profile with its assigned id.

        Raises:
            OperationFailedError: If the store call fails.
        """
        async with self._busy():
            try:
                created = await self._store.add(fields)
            except Exception as e:
                self._fail(ADD_ERROR, "add", e)
            await self._load()
            return created

    async def update_existing_profile(
        self, profile_id: int, partial: Mapping[str, Any]
    ) -> Profile | None:
        """Update a profile through the store and reload profiles if it existed.

        Args:
            profile_id: The profile to update.
            partial: Fields to shallow-merge onto the stored profile.

        Returns:
            The merged profile, or None if no profile has that id.

        Raises:
            OperationFailedError: If the store call fails.
        """
        async with self._busy():
            try:
                updated = await self._store.update(profile_id, partial)
            except Exception as e:
                self._fail(UPDATE_ERROR, "update", e)
            if updated is not None:
                await self._load()
            return updated

    async def remove_profile(self, profile_id: int) -> bool:
        """Delete a profile through the store and reload profiles if it existed.

        Args:
            profile_id: The profile to delete.

        Returns:
            True if a profile was removed.

        Raises:
            OperationFailedError: If the store call fails.
        """
        async with self._busy():
            try:
                removed = await self._store.delete(profile_id)
            except Exception as e:
                self._fail(DELETE_ERROR, "delete", e)
            if removed:
                await self._load()
            return removed

    async def get_profile(self, profile_id: int) -> Profile | None:
        """Fetch a single profile straight from the store.

        Detail views read the canonical record rather than the possibly stale
        profiles list.
        """
        async with self._busy():
            return await self._store.get_by_id(profile_id)
