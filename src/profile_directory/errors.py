# ABOUTME: Exception hierarchy for the profile directory application.
# ABOUTME: Covers failed store operations, form validation failures and bad seed data.


class ProfileDirectoryError(Exception):
    """Base exception for all profile directory errors.

    All custom exceptions inherit from this class so the CLI can handle
    application failures in one place.
    """

    pass


class OperationFailedError(ProfileDirectoryError):
    """Raised when a store call fails while the controller is mediating it.

    Attributes:
        operation: Name of the controller operation that failed.
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable, user-facing description of the failure.
            operation: Optional name of the failed operation (e.g. "add").
        """
        super().__init__(message)
        self.operation = operation


class ProfileValidationError(ProfileDirectoryError):
    """Raised when profile form data is missing required values.

    Attributes:
        errors: Mapping of field path (e.g. "contact.email") to message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Profile form has missing fields: {fields}")


class SeedDataError(ProfileDirectoryError):
    """Raised when the seed data file is missing or malformed."""

    pass
