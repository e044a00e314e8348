"""Experience timeline renderer and detail bodies."""

from typing import Iterable, Sequence

from portfolioview.renderers.base import DEFAULT_PLACEHOLDER, BaseRenderer
from portfolioview.sanitizer import escape_html
from portfolioview.schemas.content import ExperienceEntry

DEFAULT_DETAIL_SECTIONS = ("Responsibilities", "Architecture highlights", "Outcomes")
DETAILS_ATTRIBUTE = "data-experience-index"


def render_details(
    entry: ExperienceEntry,
    sections: Sequence[str] = DEFAULT_DETAIL_SECTIONS,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> str:
    """
    Render the modal body for an experience entry.

    Configured sections always appear, in order; a missing or empty one shows
    an explicit placeholder. Other sections present in the entry follow in
    source order.
    """
    names = list(sections) + [name for name in entry.details if name not in sections]
    parts = []
    for name in names:
        items = entry.details.get(name, ())
        if items:
            body = "<ul>" + "".join(f"<li>{escape_html(item)}</li>" for item in items) + "</ul>"
        else:
            body = f'<p class="muted detail-empty">{escape_html(placeholder)}</p>'
        parts.append(f'<section class="detail"><h4>{escape_html(name)}</h4>{body}</section>')
    return "".join(parts)


def details_annotation(entry: ExperienceEntry) -> str | None:
    """Role and period line shown under the modal title."""
    parts = [part.strip() for part in (entry.role, entry.when) if part.strip()]
    return " · ".join(parts) or None


class ExperienceRenderer(BaseRenderer):
    """Renders timeline items in source order, each with a Details button."""

    collection = "experience"
    error_title = "Could not load experience"

    def __init__(self, container, *, entries: Iterable[ExperienceEntry] = (), **kwargs):
        """
        Initialize renderer.

        Args:
            container: Timeline element
            entries: The full collection; Details buttons carry positions in it
        """
        super().__init__(container, **kwargs)
        self.entries = tuple(entries)
        self._positions = {id(entry): i for i, entry in enumerate(self.entries)}

    def entry_at(self, position: int) -> ExperienceEntry | None:
        if 0 <= position < len(self.entries):
            return self.entries[position]
        return None

    def render_record(self, entry: ExperienceEntry, index: int) -> str:
        position = self._positions.get(id(entry), index)
        return (
            '<li class="timeline-item">'
            f'<div class="when">{self.text(entry.when)}</div>'
            f"<h3>{escape_html(entry.title)}</h3>"
            f'<p class="role">{self.text(entry.role)}</p>'
            f'<div class="tags">{self.chips(entry.domains, "tag domain")}</div>'
            f"{self.bullet_list(entry.bullets)}"
            f'<div class="muted meta"><strong>Tools:</strong> {self.joined(entry.tools)}</div>'
            f'<button type="button" class="btn btn-ghost" {DETAILS_ATTRIBUTE}="{position}">Details</button>'
            "</li>"
        )
