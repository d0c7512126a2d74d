# ABOUTME: Command-line interface for browsing and administering the profile directory.
# ABOUTME: Provides list, show, search, map, add, update, delete and an interactive shell.

import asyncio
import json
import shlex
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, Any, TypeVar

import typer
from rich.console import Console
from rich.prompt import Confirm, Prompt

from profile_directory.config import get_settings
from profile_directory.controller import ProfileStateController, profile_session
from profile_directory.display import (
    ProfileTable,
    display_error,
    display_not_found,
    display_search_summary,
    display_validation_errors,
    render_map,
    render_notifications,
    render_profile_detail,
)
from profile_directory.errors import (
    OperationFailedError,
    ProfileValidationError,
    SeedDataError,
)
from profile_directory.forms import empty_profile_form, ensure_valid_profile_form
from profile_directory.logging_config import configure_logging
from profile_directory.models import Profile, document_keys
from profile_directory.notifications import NotificationCenter
from profile_directory.search.filters import FilterField

T = TypeVar("T")

app = typer.Typer(
    name="profile-directory",
    help="Browse, search, map and administer a directory of professional profiles.",
    add_completion=False,
)

console = Console()

state = {"verbose": False}

SHELL_HELP = """[bold cyan]Commands:[/bold cyan]
  [bold]list[/bold]                 show every profile
  [bold]results[/bold]              show the current search results
  [bold]search[/bold] TEXT          set the search query
  [bold]filter[/bold] FIELD|all     restrict search to name, location, skills, interests or company
  [bold]clear[/bold]                reset query and filter
  [bold]show[/bold] ID              show a profile in detail
  [bold]map[/bold] [ID]             show profile locations, optionally centred on one
  [bold]add[/bold] [FILE]           add a profile from a JSON file, or print a blank template
  [bold]edit[/bold] ID KEY=VALUE... change fields of a profile (quote values with spaces)
  [bold]delete[/bold] ID            delete a profile
  [bold]refresh[/bold]              reload profiles
  [bold]help[/bold]                 show this help
  [bold]quit[/bold]                 leave the shell (changes are lost)"""


def _run_in_session(operation: Callable[[ProfileStateController], Awaitable[T]]) -> T:
    """Run an operation against a freshly opened session controller.

    Exits with code 1 if the seed data cannot be loaded or the initial load fails.
    """

    async def runner() -> T:
        async with profile_session() as controller:
            if controller.error:
                console.print(f"[red]Error: {controller.error}[/red]")
                raise typer.Exit(code=1)
            return await operation(controller)

    try:
        return asyncio.run(runner())
    except SeedDataError as e:
        _print_error(e)
        raise typer.Exit(code=1) from None


def _print_error(error: Exception) -> None:
    console.print(display_error(error, verbose=state["verbose"]))


def _new_notification_center() -> NotificationCenter:
    return NotificationCenter(duration_seconds=get_settings().notification_duration_seconds)


def _print_notifications(center: NotificationCenter) -> None:
    rendered = render_notifications(center.active())
    if rendered is not None:
        console.print(rendered)


def _load_json_object(path: Path) -> dict[str, Any] | None:
    """Read a JSON object from a file, printing the problem if it is not one."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        _print_error(e)
        return None
    if not isinstance(data, dict):
        console.print("[red]Error: Profile file must contain a JSON object.[/red]")
        return None
    return data


def _parse_assignment(assignment: str) -> tuple[str, Any]:
    """Parse a key=value pair; values are read as JSON when possible.

    Args:
        assignment: Text like "company=Acme" or 'skills=["Go", "SQL"]'.

    Returns:
        The key and decoded value.

    Raises:
        typer.BadParameter: If there is no "=" or the key is empty.
    """
    key, sep, raw = assignment.partition("=")
    key = key.strip()
    if not sep or not key:
        raise typer.BadParameter(f"Expected key=value, got '{assignment}'")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return key, value


def _print_profiles(profiles: list[Profile], title: str) -> None:
    if profiles:
        console.print(ProfileTable().render(profiles, title=title))
    else:
        console.print("[yellow]No profiles found.[/yellow]")


async def _submit_new_profile(
    controller: ProfileStateController,
    center: NotificationCenter,
    data: dict[str, Any],
) -> Profile | None:
    """Validate admin form data and add it as a new profile.

    Prints validation errors and raises notifications for the outcome.

    Returns:
        The created profile, or None if the form was rejected or saving failed.
    """
    fields = {key: value for key, value in data.items() if key != "id"}
    try:
        ensure_valid_profile_form(fields)
    except ProfileValidationError as e:
        console.print(display_validation_errors(e))
        return None

    try:
        created = await controller.add_new_profile(fields)
    except OperationFailedError:
        center.error("Failed to save profile")
        return None
    center.success("Profile added successfully")
    return created


async def _submit_profile_changes(
    controller: ProfileStateController,
    center: NotificationCenter,
    profile_id: int,
    partial: dict[str, Any],
) -> Profile | None:
    """Validate the merged form for an existing profile and apply the changes.

    Returns:
        The updated profile, or None if it is missing, the merged form was
        rejected, or saving failed.
    """
    existing = await controller.get_profile(profile_id)
    if existing is None:
        console.print(display_not_found(profile_id))
        return None

    try:
        ensure_valid_profile_form({**existing.to_document(), **partial})
    except ProfileValidationError as e:
        console.print(display_validation_errors(e))
        return None

    try:
        updated = await controller.update_existing_profile(profile_id, partial)
    except OperationFailedError:
        center.error("Failed to save profile")
        return None
    if updated is None:
        center.error("Profile not found")
        return None
    center.success("Profile updated successfully")
    return updated


def _changes_from(assignments: list[str], base: dict[str, Any] | None = None) -> dict[str, Any]:
    """Merge key=value assignments onto base, using document keys and dropping id."""
    partial = dict(base or {})
    for assignment in assignments:
        key, value = _parse_assignment(assignment)
        partial[key] = value
    partial = document_keys(partial)
    partial.pop("id", None)
    return partial


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show tracebacks in error panels."),
    ] = False,
) -> None:
    """Profile directory CLI.

    Profiles are held in memory for the length of a command (or shell
    session) and seeded from a JSON data file.
    """
    state["verbose"] = verbose
    configure_logging(get_settings().log_level)
    if ctx.invoked_subcommand is None:
        console.print("[dim]Use --help to see available commands.[/dim]")


@app.command("list")
def list_profiles() -> None:
    """List every profile in directory order."""

    async def operation(controller: ProfileStateController) -> list[Profile]:
        return controller.profiles

    profiles = _run_in_session(operation)
    _print_profiles(profiles, title="Profiles")
    if profiles:
        console.print(f"[dim]{len(profiles)} profile(s).[/dim]")


@app.command()
def show(
    profile_id: Annotated[int, typer.Argument(help="Id of the profile to show.")],
) -> None:
    """Show the full details of one profile."""

    async def operation(controller: ProfileStateController) -> Profile | None:
        return await controller.get_profile(profile_id)

    profile = _run_in_session(operation)
    if profile is None:
        console.print(display_not_found(profile_id))
        raise typer.Exit(code=1)
    console.print(render_profile_detail(profile))


@app.command()
def search(
    query: Annotated[
        str,
        typer.Argument(help="Text to look for. Leave empty to match everything."),
    ] = "",
    filter_by: Annotated[
        FilterField | None,
        typer.Option(
            "--filter",
            "-f",
            case_sensitive=False,
            help="Restrict matching to one field.",
        ),
    ] = None,
) -> None:
    """Search profiles by name, location, skills, interests or company.

    Without --filter the query is matched against every field, including the
    short bio.
    """

    async def operation(controller: ProfileStateController) -> list[Profile]:
        controller.set_search_query(query)
        controller.set_filter_by(filter_by)
        await controller.wait_for_search()
        if controller.error:
            console.print(f"[red]Error: {controller.error}[/red]")
            raise typer.Exit(code=1)
        return controller.search_results

    results = _run_in_session(operation)
    _print_profiles(results, title="Search Results")
    console.print(display_search_summary(len(results), query, filter_by))


@app.command("map")
def map_view(
    select: Annotated[
        int | None,
        typer.Option("--select", "-s", help="Centre the map on this profile id."),
    ] = None,
) -> None:
    """Show where profiles are located."""

    async def operation(
        controller: ProfileStateController,
    ) -> tuple[list[Profile], Profile | None]:
        selected = await controller.get_profile(select) if select is not None else None
        return controller.profiles, selected

    profiles, selected = _run_in_session(operation)
    if select is not None and selected is None:
        console.print(display_not_found(select))
        raise typer.Exit(code=1)
    console.print(render_map(profiles, selected))


@app.command()
def add(
    file: Annotated[
        Path,
        typer.Option(
            "--file",
            "-f",
            exists=True,
            dir_okay=False,
            readable=True,
            help="JSON file with the new profile (camelCase keys, no id).",
        ),
    ],
) -> None:
    """Add a profile to the directory for this session."""
    data = _load_json_object(file)
    if data is None:
        raise typer.Exit(code=1)

    center = _new_notification_center()

    async def operation(controller: ProfileStateController) -> Profile | None:
        return await _submit_new_profile(controller, center, data)

    created = _run_in_session(operation)
    _print_notifications(center)
    if created is None:
        raise typer.Exit(code=1)
    _print_profiles([created], title="Added Profile")


@app.command()
def update(
    profile_id: Annotated[int, typer.Argument(help="Id of the profile to update.")],
    file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            exists=True,
            dir_okay=False,
            readable=True,
            help="JSON file with the fields to change.",
        ),
    ] = None,
    assignments: Annotated[
        list[str] | None,
        typer.Option(
            "--set",
            help="Field to change as key=value; values are parsed as JSON when possible.",
        ),
    ] = None,
) -> None:
    """Update fields of an existing profile for this session.

    Fields are replaced wholesale: giving a partial contact replaces the whole
    contact, including its social links.
    """
    base: dict[str, Any] = {}
    if file is not None:
        loaded = _load_json_object(file)
        if loaded is None:
            raise typer.Exit(code=1)
        base = loaded
    partial = _changes_from(assignments or [], base)

    if not partial:
        console.print("[red]Error: Nothing to update. Use --file or --set.[/red]")
        raise typer.Exit(code=1)

    center = _new_notification_center()

    async def operation(controller: ProfileStateController) -> Profile | None:
        return await _submit_profile_changes(controller, center, profile_id, partial)

    updated = _run_in_session(operation)
    _print_notifications(center)
    if updated is None:
        raise typer.Exit(code=1)
    console.print(render_profile_detail(updated))


@app.command()
def delete(
    profile_id: Annotated[int, typer.Argument(help="Id of the profile to delete.")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Delete without asking for confirmation."),
    ] = False,
) -> None:
    """Delete a profile for this session."""
    if not yes and not Confirm.ask(f"[bold]Delete profile {profile_id}?[/bold]"):
        console.print("[dim]Cancelled.[/dim]")
        raise typer.Exit(code=0)

    center = _new_notification_center()

    async def operation(controller: ProfileStateController) -> bool:
        try:
            removed = await controller.remove_profile(profile_id)
        except OperationFailedError:
            center.error("Failed to delete profile")
            return False
        if removed:
            center.success("Profile deleted successfully")
        else:
            center.error("Profile not found")
        return removed

    removed = _run_in_session(operation)
    _print_notifications(center)
    if not removed:
        raise typer.Exit(code=1)


def _parse_id(argument: str) -> int | None:
    try:
        return int(argument)
    except ValueError:
        console.print(f"[red]Not a profile id: '{argument}'[/red]")
        return None


def _split_arguments(argument: str) -> list[str] | None:
    try:
        return shlex.split(argument)
    except ValueError as e:
        console.print(f"[red]Could not read arguments: {e}[/red]")
        return None


def _parse_filter(argument: str) -> tuple[bool, FilterField | None]:
    """Read a shell filter argument.

    Returns:
        (ok, field): ok is False when the value names no known field.
    """
    if argument in ("", "all"):
        return True, None
    field = FilterField.parse(argument.lower())
    if field is None:
        valid = ", ".join(f.value for f in FilterField)
        console.print(
            f"[yellow]Unknown filter field '{argument}'. Use one of: {valid}, or all.[/yellow]"
        )
        return False, None
    return True, field


async def _shell_add(
    controller: ProfileStateController, center: NotificationCenter, argument: str
) -> None:
    args = _split_arguments(argument)
    if args is None:
        return
    if not args:
        console.print("[dim]Fill in this template, save it to a file, then run: add FILE[/dim]")
        console.print_json(data=empty_profile_form())
        return
    if len(args) > 1:
        console.print("[red]Usage: add FILE[/red]")
        return

    data = _load_json_object(Path(args[0]))
    if data is None:
        return
    created = await _submit_new_profile(controller, center, data)
    if created is not None:
        _print_profiles([created], title="Added Profile")


async def _shell_edit(
    controller: ProfileStateController, center: NotificationCenter, argument: str
) -> None:
    args = _split_arguments(argument)
    if args is None:
        return
    if len(args) < 2:
        console.print("[red]Usage: edit ID KEY=VALUE...[/red]")
        return

    profile_id = _parse_id(args[0])
    if profile_id is None:
        return
    try:
        partial = _changes_from(args[1:])
    except typer.BadParameter as e:
        console.print(f"[red]{e}[/red]")
        return
    if not partial:
        console.print("[red]Nothing to update.[/red]")
        return

    updated = await _submit_profile_changes(controller, center, profile_id, partial)
    if updated is not None:
        console.print(render_profile_detail(updated))


async def _shell_command(
    controller: ProfileStateController,
    center: NotificationCenter,
    command: str,
    argument: str,
) -> None:
    """Run one shell command against the session controller."""
    if command == "help":
        console.print(SHELL_HELP)
    elif command == "list":
        _print_profiles(controller.profiles, title="Profiles")
    elif command in ("results", "search", "filter", "clear"):
        if command == "search":
            controller.set_search_query(argument)
        elif command == "filter":
            ok, field = _parse_filter(argument)
            if not ok:
                return
            controller.set_filter_by(field)
        elif command == "clear":
            controller.set_search_query("")
            controller.set_filter_by(None)
        await controller.wait_for_search()
        _print_profiles(controller.search_results, title="Search Results")
        console.print(
            display_search_summary(
                len(controller.search_results), controller.search_query, controller.filter_by
            )
        )
    elif command == "show":
        profile_id = _parse_id(argument)
        if profile_id is None:
            return
        profile = await controller.get_profile(profile_id)
        if profile is None:
            console.print(display_not_found(profile_id))
        else:
            console.print(render_profile_detail(profile))
    elif command == "map":
        selected = None
        if argument:
            profile_id = _parse_id(argument)
            if profile_id is None:
                return
            selected = await controller.get_profile(profile_id)
            if selected is None:
                console.print(display_not_found(profile_id))
                return
        console.print(render_map(controller.profiles, selected))
    elif command == "add":
        await _shell_add(controller, center, argument)
    elif command == "edit":
        await _shell_edit(controller, center, argument)
    elif command == "delete":
        profile_id = _parse_id(argument)
        if profile_id is None:
            return
        try:
            removed = await controller.remove_profile(profile_id)
        except OperationFailedError:
            center.error("Failed to delete profile")
            return
        if removed:
            center.success("Profile deleted successfully")
        else:
            center.error("Profile not found")
    elif command == "refresh":
        await controller.refresh_profiles()
        if controller.error:
            center.error(controller.error)
        else:
            center.info(f"Loaded {len(controller.profiles)} profile(s)")
    else:
        console.print(f"[yellow]Unknown command '{command}'. Type 'help'.[/yellow]")


@app.command()
def shell() -> None:
    """Start an interactive session over one in-memory directory.

    Changes made during the session last until it ends.
    """
    center = _new_notification_center()

    async def operation(controller: ProfileStateController) -> None:
        console.print(
            f"[green]Loaded {len(controller.profiles)} profile(s).[/green] "
            "[dim]Type 'help' for commands.[/dim]"
        )
        while True:
            try:
                line = await asyncio.to_thread(
                    Prompt.ask,
                    "[bold cyan]profiles[/bold cyan]",
                    console=console,
                    default="",
                    show_default=False,
                )
            except (EOFError, KeyboardInterrupt):
                break

            command, _, argument = line.strip().partition(" ")
            command = command.lower()
            if not command:
                continue
            if command in ("quit", "exit"):
                break
            await _shell_command(controller, center, command, argument.strip())
            _print_notifications(center)

        console.print("[dim]Session closed. Changes were not saved.[/dim]")

    _run_in_session(operation)


if __name__ == "__main__":
    app()
