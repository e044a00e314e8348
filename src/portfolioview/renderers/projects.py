"""Project grid renderer."""

from typing import Iterable, Literal

from pydantic import BaseModel

from portfolioview.filtering import sort_projects
from portfolioview.renderers.base import BaseRenderer
from portfolioview.sanitizer import escape_html, safe_url
from portfolioview.schemas.content import Project


class LinkAction(BaseModel):
    """One action button of a project card."""

    label: str
    target: str
    importance: Literal["primary", "ghost"] = "ghost"
    external: bool = True


def project_actions(project: Project) -> tuple[LinkAction, ...]:
    """Build the ordered action buttons of a project card."""
    links = project.links
    candidates = [
        ("GitHub", links.github, "ghost", True),
        ("Live", links.live, "primary", True),
        ("Case Study", links.case_study or links.writeup, "ghost", True),
        ("Blog", links.blog, "ghost", True),
        ("Build Guide", links.build_guide, "ghost", False),
    ]
    return tuple(
        LinkAction(label=label, target=target, importance=importance, external=external)
        for label, target, importance, external in candidates
        if target
    )


def status_slug(status: str) -> str:
    """CSS-safe modifier for a status badge, e.g. "in progress" -> "in-progress"."""
    slug = "".join(ch if ch.isalnum() else "-" for ch in status.strip().lower())
    return "-".join(part for part in slug.split("-") if part) or "unknown"


class ProjectRenderer(BaseRenderer):
    """Renders project cards: featured first, then by title."""

    collection = "projects"
    error_title = "Could not load projects"

    def order(self, records: Iterable[Project]) -> list[Project]:
        return sort_projects(records)

    def render_actions(self, actions: Iterable[LinkAction]) -> str:
        buttons = []
        for action in actions:
            css = "btn" if action.importance == "primary" else "btn btn-ghost"
            rel = ' target="_blank" rel="noreferrer"' if action.external else ""
            buttons.append(
                f'<a class="{css}" href="{safe_url(action.target)}"{rel}>{escape_html(action.label)}</a>'
            )
        return "".join(buttons)

    def render_record(self, project: Project, index: int) -> str:
        href = project.primary_href()
        classes = ["card", "project-card"]
        if project.featured:
            classes.append("is-featured")
        attrs = ""
        if href:
            classes.append("is-clickable")
            attrs = (
                f' data-href="{safe_url(href)}" tabindex="0" role="link"'
                f' aria-label="Open {escape_html(project.title)}"'
            )

        status = ""
        if project.status.strip():
            status = (
                f'<span class="status status-{status_slug(project.status)}">'
                f"{escape_html(project.status)}</span>"
            )

        tools = (*project.tools, *project.aws)
        css = " ".join(classes)
        return (
            f'<article class="{css}"{attrs}>'
            f"<h3>{escape_html(project.title)}</h3>{status}"
            f"<p>{self.text(project.description)}</p>"
            f'<div class="tags">{self.chips(project.tags)}</div>'
            '<div class="muted meta">'
            f"<strong>Focus:</strong> {self.joined(project.focus)}<br>"
            f"<strong>Tools:</strong> {self.joined(tools)}"
            "</div>"
            f'<div class="card-actions">{self.render_actions(project_actions(project))}</div>'
            "</article>"
        )
