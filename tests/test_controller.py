# ABOUTME: Tests for the session-lifetime ProfileStateController.
# ABOUTME: Covers loading, debounced search, mutations, failure handling and state propagation.

import asyncio
from pathlib import Path
from typing import Any

import pytest

from profile_directory.config import Settings
from profile_directory.controller import (
    ProfileStateController,
    ProfileStateSnapshot,
    profile_session,
)
from profile_directory.controller.state import (
    ADD_ERROR,
    DELETE_ERROR,
    LOAD_ERROR,
    SEARCH_ERROR,
    UPDATE_ERROR,
)
from profile_directory.errors import OperationFailedError
from profile_directory.models import Profile
from profile_directory.search.filters import FilterField
from profile_directory.store import ProfileStore, StoreDelays


class RecordingStore(ProfileStore):
    """ProfileStore that records calls and can be told to fail."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.calls: list[tuple] = []
        self.failing: set[str] = set()
        self.search_delays: dict[str, float] = {}

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise ConnectionError(f"{operation} unavailable")

    async def get_all(self) -> list[Profile]:
        self.calls.append(("get_all",))
        self._check("get_all")
        return await super().get_all()

    async def add(self, fields):
        self.calls.append(("add",))
        self._check("add")
        return await super().add(fields)

    async def update(self, profile_id, partial):
        self.calls.append(("update", profile_id))
        self._check("update")
        return await super().update(profile_id, partial)

    async def delete(self, profile_id):
        self.calls.append(("delete", profile_id))
        self._check("delete")
        return await super().delete(profile_id)

    async def search(self, query, filter_by=None):
        self.calls.append(("search", query, filter_by))
        self._check("search")
        await asyncio.sleep(self.search_delays.get(query, 0))
        return await super().search(query, filter_by)

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == operation)


@pytest.fixture
def recording_store(ada_and_grace: list[Profile]) -> RecordingStore:
    """A zero-latency recording store seeded with Ada and Grace."""
    return RecordingStore(ada_and_grace, delays=StoreDelays.none())


@pytest.fixture
async def controller(recording_store: RecordingStore):
    """A started controller with a short debounce window."""
    controller = ProfileStateController(recording_store, debounce_seconds=0.02)
    await controller.start()
    yield controller
    await controller.close()


class TestStart:
    """Tests for controller initialization."""

    async def test_start_loads_profiles_and_results(
        self, controller: ProfileStateController
    ) -> None:
        """Test that start populates both profiles and search results."""
        assert [p.id for p in controller.profiles] == [1, 2]
        assert [p.id for p in controller.search_results] == [1, 2]
        assert controller.error is None
        assert controller.loading is False

    async def test_initial_criteria(self, controller: ProfileStateController) -> None:
        """Test that criteria start empty."""
        assert controller.search_query == ""
        assert controller.filter_by is None

    async def test_start_failure_sets_error(self, recording_store: RecordingStore) -> None:
        """Test that a failed initial load records a generic message and keeps state."""
        recording_store.failing.add("get_all")
        controller = ProfileStateController(recording_store)
        await controller.start()
        assert controller.error == LOAD_ERROR
        assert controller.profiles == []
        assert controller.loading is False
        await controller.close()

    async def test_loading_true_while_loading(self, ada_and_grace: list[Profile]) -> None:
        """Test that loading is set while the initial load is outstanding."""
        store = ProfileStore(ada_and_grace, delays=StoreDelays(get_all=0.05))
        controller = ProfileStateController(store)
        task = asyncio.create_task(controller.start())
        await asyncio.sleep(0.01)
        assert controller.loading is True
        await task
        assert controller.loading is False

    async def test_refresh_clears_error(
        self, controller: ProfileStateController, recording_store: RecordingStore
    ) -> None:
        """Test that a successful reload clears an earlier error."""
        recording_store.failing.add("get_all")
        await controller.refresh_profiles()
        assert controller.error == LOAD_ERROR
        recording_store.failing.clear()
        await controller.refresh_profiles()
        assert controller.error is None


class TestDebouncedSearch:
    """Tests for search criteria changes."""

    async def test_query_change_schedules_search(
        self, controller: ProfileStateController, recording_store: RecordingStore
    ) -> None:
        """Test that changing the query runs a search after the window."""
        controller.set_search_query("grace")
        assert controller.search_pending
        await controller.wait_for_search()
        assert [p.id for p in controller.search_results] == [2]
        assert recording_store.count("search") == 1

    async def test_rapid_changes_search_once_with_latest(
        self, controller: ProfileStateController, recording_store: RecordingStore
    ) -> None:
        """Test that typing quickly produces a single search for the final text."""
        for partial in ["g", "gr", "gra", "grace"]:
            controller.set_search_query(partial)
            await asyncio.sleep(0.005)
        await controller.wait_for_search()
        searches = [call for call in recording_store.calls if call[0] == "search"]
        assert searches == [("search", "grace", None)]

    async def test_filter_change_schedules_search(
        self, controller: ProfileStateController, recording_store: RecordingStore
    ) -> None:
        """Test that changing the filter field also triggers a search."""
        controller.set_search_query("navy")
        controller.set_filter_by("skills")
        assert controller.filter_by is FilterField.SKILLS
        await controller.wait_for_search()
        assert controller.search_results == []
        assert recording_store.count("search") == 1

    async def test_unchanged_value_does_not_search(
        self, controller: ProfileStateController
    ) -> None:
        """Test that setting the same criteria again schedules nothing."""
        controller.set_search_query("")
        controller.set_filter_by(None)
        assert not controller.search_pending

    async def test_unknown_filter_clears_filter(self, controller: ProfileStateController) -> None:
        """Test that an unknown filter value means search every field."""
        controller.set_filter_by("company")
        controller.set_filter_by("hobbies")
        assert controller.filter_by is None

    async def test_perform_search_runs_immediately(
        self, controller: ProfileStateController, recording_store: RecordingStore
    ) -> None:
        """Test that perform_search uses the current criteria without waiting."""
        controller.search_query = "ada"
        await controller.perform_search()
        assert [p.id for p in controller.search_results] == [1]

    async def test_search_failure_sets_error_without_raising(
        self, controller: ProfileStateController, recording_store: RecordingStore
    ) -> None:
        """Test that a failed search is recorded but not raised."""
        recording_store.failing.add("search")
        await controller.perform_search()
        assert controller.error == SEARCH_ERROR
        assert controller.loading is False

    async def test_stale_search_does_not_overwrite(
        self, controller: ProfileStateController, recording_store: RecordingStore
    ) -> None:
        """Test that a slow earlier search cannot replace a newer result."""
        recording_store.search_delays["ada"] = 0.05
        controller.search_query = "ada"
        slow = asyncio.create_task(controller.perform_search())
        await asyncio.sleep(0)
        controller.search_query = "grace"
        await controller.perform_search()
        await slow
        assert [p.id for p in controller.search_results] == [2]

    async def test_close_cancels_pending_search(
        self, recording_store: RecordingStore
    ) -> None:
        """Test that ending the session drops a search still waiting for its window."""
        controller = ProfileStateController(recording_store, debounce_seconds=0.05)
        await controller.start()
        controller.set_search_query("ada")
        await controller.close()
        await asyncio.sleep(0.08)
        assert recording_store.count("search") == 0


class TestMutations:
    """Tests for add, update and remove."""

    async def test_add_reloads_profiles(
        self,
        controller: ProfileStateController,
        recording_store: RecordingStore,
        new_profile_document: dict,
    ) -> None:
        """Test that adding returns the new profile and refreshes profiles."""
        loads_before = recording_store.count("get_all")
        created = await controller.add_new_profile(new_profile_document)
        assert created.id == 3
        assert [p.id for p in controller.profiles] == [1, 2, 3]
        assert recording_store.count("get_all") == loads_before + 1
        assert controller.loading is False

    async def test_add_failure_sets_error_and_raises(
        self,
        controller: ProfileStateController,
        recording_store: RecordingStore,
        new_profile_document: dict,
    ) -> None:
        """Test that a failed add records the error and re-raises."""
        recording_store.failing.add("add")
        with pytest.raises(OperationFailedError) as exc_info:
            await controller.add_new_profile(new_profile_document)
        assert controller.error == ADD_ERROR
        assert exc_info.value.operation == "add"
        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert controller.loading is False

    async def test_update_reloads_profiles(self, controller: ProfileStateController) -> None:
        """Test that updating refreshes the profiles list."""
        updated = await controller.update_existing_profile(1, {"company": "Babbage Inc"})
        assert updated is not None
        assert controller.profiles[0].company == "Babbage Inc"

    async def test_update_missing_returns_none_without_reload(
        self, controller: ProfileStateController, recording_store: RecordingStore
    ) -> None:
        """Test that updating a missing id does not reload."""
        loads_before = recording_store.count("get_all")
        assert await controller.update_existing_profile(99, {"name": "x"}) is None
        assert recording_store.count("get_all") == loads_before

    async def test_update_failure_sets_error_and_raises(
        self, controller: ProfileStateController, recording_store: RecordingStore
    ) -> None:
        """Test that a failed update records the error and re-raises."""
        recording_store.failing.add("update")
        with pytest.raises(OperationFailedError):
            await controller.update_existing_profile(1, {"name": "x"})
        assert controller.error == UPDATE_ERROR

    async def test_invalid_update_is_an_operation_failure(
        self, controller: ProfileStateController
    ) -> None:
        """Test that a store-side validation error surfaces as OperationFailedError."""
        with pytest.raises(OperationFailedError):
            await controller.update_existing_profile(1, {"latitude": "north"})
        assert controller.error == UPDATE_ERROR

    async def test_remove_reloads_profiles(self, controller: ProfileStateController) -> None:
        """Test that removing refreshes the profiles list."""
        assert await controller.remove_profile(2) is True
        assert [p.id for p in controller.profiles] == [1]

    async def test_remove_missing_returns_false_without_reload(
        self, controller: ProfileStateController, recording_store: RecordingStore
    ) -> None:
        """Test that removing a missing id does not reload."""
        loads_before = recording_store.count("get_all")
        assert await controller.remove_profile(99) is False
        assert recording_store.count("get_all") == loads_before

    async def test_remove_failure_sets_error_and_raises(
        self, controller: ProfileStateController, recording_store: RecordingStore
    ) -> None:
        """Test that a failed delete records the error and re-raises."""
        recording_store.failing.add("delete")
        with pytest.raises(OperationFailedError):
            await controller.remove_profile(1)
        assert controller.error == DELETE_ERROR
        assert controller.loading is False

    async def test_loading_covers_chained_reload(
        self, ada_and_grace: list[Profile], new_profile_document: dict
    ) -> None:
        """Test that loading stays true until the reload after a mutation finishes."""
        store = ProfileStore(ada_and_grace, delays=StoreDelays(add=0.02, get_all=0.08))
        controller = ProfileStateController(store)
        task = asyncio.create_task(controller.add_new_profile(new_profile_document))
        await asyncio.sleep(0.05)
        assert len(store) == 3
        assert controller.loading is True
        await task
        assert controller.loading is False

    async def test_reload_keeps_active_search(
        self, controller: ProfileStateController, make_document
    ) -> None:
        """Test that results still reflect the active query after a mutation."""
        controller.set_search_query("grace")
        await controller.wait_for_search()
        await controller.add_new_profile(make_document(name="Grace Brewster"))
        assert [p.name for p in controller.search_results] == [
            "Grace Hopper",
            "Grace Brewster",
        ]
        assert len(controller.profiles) == 3


class TestStatePropagation:
    """Tests for snapshots and subscribers."""

    async def test_snapshot_reflects_state(self, controller: ProfileStateController) -> None:
        """Test that a snapshot copies the current state."""
        snapshot = controller.snapshot()
        assert isinstance(snapshot, ProfileStateSnapshot)
        assert [p.id for p in snapshot.profiles] == [1, 2]
        assert snapshot.loading is False
        assert snapshot.search_query == ""

    async def test_subscribers_receive_updates(self, controller: ProfileStateController) -> None:
        """Test that listeners see loading go up and back down around a call."""
        seen: list[ProfileStateSnapshot] = []
        controller.subscribe(seen.append)
        await controller.refresh_profiles()
        assert [s.loading for s in seen] == [True, False]

    async def test_unsubscribe(self, controller: ProfileStateController) -> None:
        """Test that an unsubscribed listener is no longer called."""
        seen: list[ProfileStateSnapshot] = []
        unsubscribe = controller.subscribe(seen.append)
        unsubscribe()
        await controller.refresh_profiles()
        assert seen == []

    async def test_criteria_changes_notify(self, controller: ProfileStateController) -> None:
        """Test that setting criteria notifies listeners right away."""
        seen: list[ProfileStateSnapshot] = []
        controller.subscribe(seen.append)
        controller.set_search_query("ada")
        assert seen[-1].search_query == "ada"
        await controller.wait_for_search()


class TestProfileSession:
    """Tests for the session helper."""

    async def test_session_yields_started_controller(self, seed_file: Path) -> None:
        """Test that a session seeds the store and starts the controller."""
        settings = Settings(
            seed_file=seed_file,
            get_all_delay_seconds=0,
            search_delay_seconds=0,
            search_debounce_seconds=0,
        )
        async with profile_session(settings) as controller:
            assert [p.name for p in controller.profiles] == ["Ada Lovelace", "Grace Hopper"]

    async def test_session_uses_given_store(self, store: ProfileStore) -> None:
        """Test that a session can run over an existing store."""
        settings = Settings(search_debounce_seconds=0)
        async with profile_session(settings, store=store) as controller:
            assert len(controller.profiles) == 2
