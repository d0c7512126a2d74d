# ABOUTME: Terminal stand-in for the profile map: marker list plus map centre.
# ABOUTME: Centres on the selected profile, else the first profile, else the continental US.

from rich.table import Table

from profile_directory.models import Profile

DEFAULT_CENTER = (39.8283, -98.5795)


def map_center(profiles: list[Profile], selected: Profile | None = None) -> tuple[float, float]:
    """Work out where the map should be centred.

    Args:
        profiles: Profiles shown as markers.
        selected: The profile the user picked, if any.

    Returns:
        A (latitude, longitude) pair.
    """
    if selected is not None:
        return (selected.latitude, selected.longitude)
    if profiles:
        return (profiles[0].latitude, profiles[0].longitude)
    return DEFAULT_CENTER


def render_map(profiles: list[Profile], selected: Profile | None = None) -> Table:
    """Render profile markers as a Rich table.

    Args:
        profiles: Profiles shown as markers.
        selected: Highlighted profile, if any.

    Returns:
        Rich Table of marker coordinates, titled with the map centre.
    """
    lat, lng = map_center(profiles, selected)
    table = Table(title=f"Map centred on ({lat:.4f}, {lng:.4f})")
    table.add_column("", width=2)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Location", style="green")
    table.add_column("Latitude", justify="right")
    table.add_column("Longitude", justify="right")

    for profile in profiles:
        is_selected = selected is not None and profile.id == selected.id
        table.add_row(
            "[bold red]●[/bold red]" if is_selected else "[blue]●[/blue]",
            str(profile.id),
            f"[bold]{profile.name}[/bold]" if is_selected else profile.name,
            profile.address,
            f"{profile.latitude:.4f}",
            f"{profile.longitude:.4f}",
        )

    return table
