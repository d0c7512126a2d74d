# ABOUTME: Rich table rendering for profile listings.
# ABOUTME: Provides ProfileTable for the card listing and search results views.

from rich.table import Table

from profile_directory.models import Profile


class ProfileTable:
    """Renders Profile data as Rich tables.

    Each row is the card view of a profile: id, name, company, location,
    short bio and the first few skills.
    """

    MAX_BIO_LENGTH = 50
    MAX_COMPANY_LENGTH = 25
    MAX_LOCATION_LENGTH = 20
    MAX_SKILLS_SHOWN = 3

    def _truncate(self, text: str | None, max_length: int) -> str:
        """Truncate text to max length with ellipsis.

        Args:
            text: The text to truncate, or None.
            max_length: Maximum length before truncation.

        Returns:
            Truncated text with ellipsis, or empty string if None.
        """
        if not text:
            return ""
        if len(text) <= max_length:
            return text
        return text[: max_length - 3] + "..."

    def _format_skills(self, skills: list[str]) -> str:
        shown = skills[: self.MAX_SKILLS_SHOWN]
        extra = len(skills) - len(shown)
        text = ", ".join(shown)
        if extra > 0:
            text += f" [dim]+{extra}[/dim]"
        return text

    def render(self, profiles: list[Profile], title: str | None = None) -> Table:
        """Render profiles as a Rich Table.

        Args:
            profiles: Profiles to display, in display order.
            title: Optional title for the table.

        Returns:
            Rich Table with one row per profile.
        """
        table = Table(title=title, show_lines=False)

        table.add_column("ID", style="dim", width=4, justify="right")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Company", style="magenta", max_width=self.MAX_COMPANY_LENGTH)
        table.add_column("Location", style="green", max_width=self.MAX_LOCATION_LENGTH)
        table.add_column("Bio", style="white", max_width=self.MAX_BIO_LENGTH)
        table.add_column("Skills", style="yellow")

        for profile in profiles:
            table.add_row(
                str(profile.id),
                profile.name,
                self._truncate(profile.company, self.MAX_COMPANY_LENGTH),
                self._truncate(profile.address, self.MAX_LOCATION_LENGTH),
                self._truncate(profile.short_bio, self.MAX_BIO_LENGTH),
                self._format_skills(profile.skills),
            )

        return table
