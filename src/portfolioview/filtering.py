"""Filter predicates for the filterable views."""

from dataclasses import dataclass
from typing import Callable, Iterable

from portfolioview.facets import locale_key
from portfolioview.schemas.content import ExperienceEntry, Project
from portfolioview.schemas.state import FilterState, ViewName


@dataclass(frozen=True)
class FilterView:
    """How one view extracts facet values and searchable text from a record."""

    name: ViewName
    facet_values: Callable[[object], Iterable[str]]
    search_fields: Callable[[object], Iterable[str]] | None = None


def _project_search_fields(project: Project) -> Iterable[str]:
    return (
        project.title,
        project.description,
        *project.focus,
        *project.tags,
        *project.tools,
        *project.aws,
    )


def _experience_search_fields(entry: ExperienceEntry) -> Iterable[str]:
    return (entry.title, entry.role, *entry.domains, *entry.tools, *entry.bullets)


PROJECTS_VIEW = FilterView(
    name=ViewName.PROJECTS,
    facet_values=lambda project: project.tags,
    search_fields=_project_search_fields,
)

EXPERIENCE_VIEW = FilterView(
    name=ViewName.EXPERIENCE,
    facet_values=lambda entry: entry.domains,
    search_fields=_experience_search_fields,
)

VIEWS = {view.name: view for view in (PROJECTS_VIEW, EXPERIENCE_VIEW)}


def facet_matches(record, state: FilterState, view: FilterView) -> bool:
    """True at the sentinel, else iff the record carries the active facet exactly."""
    if state.active_facet == state.sentinel:
        return True
    return state.active_facet in tuple(view.facet_values(record))


def text_matches(record, state: FilterState, view: FilterView) -> bool:
    """Case-insensitive substring match of the trimmed query over searchable fields."""
    query = state.query.strip().lower()
    if not query or view.search_fields is None:
        return True
    haystack = " ".join(view.search_fields(record)).lower()
    return query in haystack


def matches(record, state: FilterState, view: FilterView) -> bool:
    """Facet predicate AND text predicate."""
    return facet_matches(record, state, view) and text_matches(record, state, view)


def apply_filter(records: Iterable, state: FilterState, view: FilterView) -> tuple:
    """Select matching records, keeping source order."""
    return tuple(record for record in records if matches(record, state, view))


def sort_projects(projects: Iterable[Project]) -> list[Project]:
    """Featured first, then by title; ``sorted`` is stable so ties keep source order."""
    return sorted(projects, key=lambda p: (not p.featured, locale_key(p.title)))
