"""Read-only self-check of the page's render state."""

from enum import Enum

from pydantic import BaseModel

from portfolioview.config import Config
from portfolioview.dom import Page
from portfolioview.sanitizer import escape_html
from portfolioview.schemas.content import ProjectLinks
from portfolioview.schemas.state import PageState

AUXILIARY_COLLECTIONS = ("kpis", "capabilities", "skills", "certs", "experience")


class DiagnosticStatus(str, Enum):
    """Outcome of one check."""

    OK = "ok"
    WARN = "warn"
    OFF = "off"


class DiagnosticRow(BaseModel):
    """One labeled status row."""

    label: str
    status: DiagnosticStatus
    detail: str = ""


def _child_count_row(page: Page, label: str, selector: str, minimum: int = 1) -> DiagnosticRow:
    element = page.query(selector)
    if element is None:
        return DiagnosticRow(label=label, status=DiagnosticStatus.OFF, detail=f"{selector} not found")
    count = len(element.element_children)
    status = DiagnosticStatus.OK if count >= minimum else DiagnosticStatus.WARN
    return DiagnosticRow(label=label, status=status, detail=f"{count} rendered")


def _presence_row(page: Page, label: str, selector: str) -> DiagnosticRow:
    present = page.query(selector) is not None
    return DiagnosticRow(
        label=label,
        status=DiagnosticStatus.OK if present else DiagnosticStatus.OFF,
        detail="present" if present else f"{selector} not found",
    )


def run_diagnostics(page: Page, state: PageState, config: Config | None = None) -> list[DiagnosticRow]:
    """
    Inspect the current page and state. Never mutates either.

    Returns:
        Rows in a fixed order, each classified ok / warn / off
    """
    config = config or Config()
    selectors = config.selectors
    rows = []

    projects = state.records("projects")
    if page.query(selectors.projects_grid) is None:
        rows.append(DiagnosticRow(label="Projects loaded", status=DiagnosticStatus.OFF, detail="grid not found"))
    elif state.load_error:
        rows.append(DiagnosticRow(label="Projects loaded", status=DiagnosticStatus.WARN, detail=state.load_error))
    else:
        rows.append(
            DiagnosticRow(
                label="Projects loaded",
                status=DiagnosticStatus.OK if projects else DiagnosticStatus.WARN,
                detail=f"{len(projects)} records",
            )
        )

    # The sentinel chip alone means no facet was derived
    rows.append(_child_count_row(page, "Filter chips", selectors.filters, minimum=2))
    rows.append(_presence_row(page, "Theme toggle", selectors.theme_toggle))
    rows.append(_presence_row(page, "Search input", selectors.search))

    link = config.rendering.required_link
    field = ProjectLinks.field_for(link)
    if field is None:
        rows.append(
            DiagnosticRow(
                label=f"Project {link} links", status=DiagnosticStatus.OFF, detail="unknown link field"
            )
        )
    else:
        rows.append(_required_link_row(projects, link, field))

    for name in AUXILIARY_COLLECTIONS:
        selector = selectors.for_collection(name)
        rows.append(_child_count_row(page, f"{name.capitalize()} section", selector))

    return rows


def _required_link_row(projects, link: str, field: str) -> DiagnosticRow:
    label = f"Project {link} links"
    if not projects:
        return DiagnosticRow(label=label, status=DiagnosticStatus.OFF, detail="no projects")
    missing = [p.title for p in projects if not getattr(p.links, field).strip()]
    if missing:
        return DiagnosticRow(
            label=label,
            status=DiagnosticStatus.WARN,
            detail=f"{len(missing)} of {len(projects)} missing",
        )
    return DiagnosticRow(label=label, status=DiagnosticStatus.OK, detail="all present")


def render_diagnostics(rows: list[DiagnosticRow]) -> str:
    """Markup for the diagnostics panel."""
    items = "".join(
        f'<li class="diag-row diag-{row.status.value}">'
        f'<span class="diag-label">{escape_html(row.label)}</span>'
        f'<span class="diag-status">{row.status.value.upper()}</span>'
        f'<span class="diag-detail muted">{escape_html(row.detail)}</span>'
        "</li>"
        for row in rows
    )
    return f'<ul class="diag-list">{items}</ul>'
