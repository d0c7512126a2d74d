# ABOUTME: Detail view of a single profile rendered as a Rich panel.
# ABOUTME: Shows bio, contact and social links, skills, interests and education.

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from profile_directory.models import Profile


def _section(title: str) -> Text:
    return Text(f"\n{title}", style="bold cyan")


def render_profile_detail(profile: Profile) -> Panel:
    """Render the full detail view of a profile.

    Args:
        profile: The profile to show.

    Returns:
        A Rich Panel titled with the profile name.
    """
    header = Text()
    header.append(profile.company, style="magenta")
    header.append("  ·  ", style="dim")
    header.append(profile.address, style="green")
    header.append(f"  ({profile.latitude:.4f}, {profile.longitude:.4f})", style="dim")

    contact = Table(show_header=False, box=None, padding=(0, 1))
    contact.add_column("Label", style="dim")
    contact.add_column("Value")
    contact.add_row("Email:", profile.contact.email)
    contact.add_row("Phone:", profile.contact.phone)
    for platform, handle in profile.contact.social.present().items():
        contact.add_row(f"{platform.capitalize()}:", handle)

    education = Table(show_header=False, box=None, padding=(0, 1))
    education.add_column("Degree", style="white")
    education.add_column("Institution", style="cyan")
    education.add_column("Year", style="dim")
    for entry in profile.education:
        education.add_row(entry.degree, entry.institution, entry.year)

    parts = [
        header,
        _section("About"),
        Text(profile.full_bio),
        _section("Contact"),
        contact,
        _section("Skills"),
        Text(", ".join(profile.skills) or "None listed", style="yellow"),
        _section("Interests"),
        Text(", ".join(profile.interests) or "None listed"),
        _section("Education"),
        education if profile.education else Text("None listed", style="dim"),
        Text(f"\nPhoto: {profile.photo}", style="dim"),
    ]

    return Panel(
        Group(*parts),
        title=f"{profile.name} [dim]#{profile.id}[/dim]",
        border_style="cyan",
        padding=(1, 2),
    )
