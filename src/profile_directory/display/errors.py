# ABOUTME: Error display helpers for formatting error messages with Rich.
# ABOUTME: Provides panels for failed operations, missing profiles and form validation errors.

import traceback

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from profile_directory.errors import ProfileValidationError


def display_error(error: Exception, verbose: bool = False) -> Panel:
    """Format an error as a Rich Panel.

    Args:
        error: The exception to display.
        verbose: If True, include full traceback information.

    Returns:
        A Rich Panel containing formatted error information.
    """
    error_type = type(error).__name__
    error_message = str(error)

    content = Text()
    content.append(f"{error_type}: ", style="bold red")
    content.append(error_message, style="red")

    if verbose:
        content.append("\n\n")
        content.append("Traceback:", style="dim")
        content.append("\n")
        tb_text = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        content.append(tb_text, style="dim")

    return Panel(
        content,
        title="Error",
        border_style="red",
        padding=(1, 2),
    )


def display_not_found(profile_id: int) -> Panel:
    """Display a message for a profile id that is not in the directory.

    Args:
        profile_id: The id that was looked up.

    Returns:
        A Rich Panel suggesting how to find valid ids.
    """
    message = Text()
    message.append(f"No profile with id {profile_id}.\n\n", style="bold yellow")
    message.append("Run ", style="dim")
    message.append("profile-directory list", style="bold cyan")
    message.append(" to see the available profiles.", style="dim")

    return Panel(
        message,
        title="Profile Not Found",
        border_style="yellow",
        padding=(1, 2),
    )


def display_validation_errors(error: ProfileValidationError) -> Panel:
    """Display the missing fields of a rejected profile form.

    Args:
        error: The validation error carrying field messages.

    Returns:
        A Rich Panel listing each field and its message.
    """
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Field", style="bold")
    table.add_column("Message", style="red")
    for field, message in sorted(error.errors.items()):
        table.add_row(field, message)

    return Panel(
        table,
        title="Invalid Profile",
        border_style="red",
        padding=(1, 2),
    )
