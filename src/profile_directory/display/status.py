# ABOUTME: Status display functions for search summaries and session notifications.
# ABOUTME: Provides Rich panels and text for operation outcomes shown to users.

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from profile_directory.notifications import Notification, NotificationKind
from profile_directory.search.filters import FilterField

NOTIFICATION_STYLES: dict[NotificationKind, tuple[str, str]] = {
    NotificationKind.SUCCESS: ("green", "✔"),
    NotificationKind.ERROR: ("red", "✖"),
    NotificationKind.WARNING: ("yellow", "!"),
    NotificationKind.INFO: ("blue", "i"),
}


def display_search_summary(
    count: int,
    query: str,
    filter_by: FilterField | None = None,
) -> Panel:
    """Display a summary panel for search results.

    Args:
        count: Number of results found.
        query: The search query string.
        filter_by: The field the search was restricted to, if any.

    Returns:
        Rich Panel containing the search summary.
    """
    if count == 0:
        result_text = "[yellow]No profiles found[/yellow]"
    elif count == 1:
        result_text = "[green]1 profile found[/green]"
    else:
        result_text = f"[green]{count} profiles found[/green]"

    content = Text()
    content.append("Query: ", style="dim")
    content.append(f"{query or '(everything)'}\n", style="cyan")
    content.append("Field: ", style="dim")
    content.append(f"{filter_by.value if filter_by else 'all fields'}\n", style="cyan")
    content.append("Results: ", style="dim")
    content.append_text(Text.from_markup(result_text))

    return Panel(
        content,
        title="Search Summary",
        border_style="green" if count > 0 else "yellow",
        padding=(1, 2),
    )


def render_notification(notification: Notification) -> Text:
    """Render one notification as a single styled line."""
    color, icon = NOTIFICATION_STYLES[notification.kind]
    text = Text()
    text.append(f"{icon} ", style=f"bold {color}")
    text.append(notification.message, style=color)
    return text


def render_notifications(notifications: list[Notification]) -> Group | None:
    """Render the visible notifications, or None when there are none."""
    if not notifications:
        return None
    return Group(*(render_notification(n) for n in notifications))
