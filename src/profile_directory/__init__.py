# ABOUTME: Main package initialization for the profile directory application.
# ABOUTME: Exports version information from the installed distribution metadata.

from importlib.metadata import version

__version__ = version("profile-directory")
