"""Page and filter state schema definitions."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from portfolioview.schemas.content import ContentCollection

SENTINEL = "All"


class ViewName(str, Enum):
    """Filterable views of the page."""

    PROJECTS = "projects"
    EXPERIENCE = "experience"


class FilterState(BaseModel):
    """Selected facet and search query of one filterable view."""

    active_facet: str = SENTINEL
    query: str = ""
    sentinel: str = SENTINEL

    def is_unrestricted(self) -> bool:
        """True when neither the facet nor the query restricts the view."""
        return self.active_facet == self.sentinel and not self.query.strip()


class PageState(BaseModel):
    """Everything the page controller owns for the lifetime of a page."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    collections: dict[str, ContentCollection] = Field(default_factory=dict)
    facets: dict[ViewName, tuple[str, ...]] = Field(default_factory=dict)
    filters: dict[ViewName, FilterState] = Field(default_factory=dict)
    load_generation: int = 0
    load_error: str | None = None

    def records(self, name: str) -> tuple:
        """Records of a loaded collection, or an empty tuple."""
        collection = self.collections.get(name)
        return collection.records if collection is not None else ()
