# ABOUTME: Controller package holding the shared, session-lifetime profile state.
# ABOUTME: Exports the state controller, its snapshot type, the debouncer and session helpers.

from profile_directory.controller.scheduling import Debouncer, Idle, Pending, ScheduledCall
from profile_directory.controller.session import build_store, profile_session
from profile_directory.controller.state import ProfileStateController, ProfileStateSnapshot

__all__ = [
    "Debouncer",
    "Idle",
    "Pending",
    "ProfileStateController",
    "ProfileStateSnapshot",
    "ScheduledCall",
    "build_store",
    "profile_session",
]
