# ABOUTME: Store package for the in-memory profile data-access layer.
# ABOUTME: Provides ProfileStore, its simulated delays and the seed loader.

from profile_directory.store.seed import load_seed_profiles
from profile_directory.store.service import ProfileStore, StoreDelays

__all__ = ["ProfileStore", "StoreDelays", "load_seed_profiles"]
