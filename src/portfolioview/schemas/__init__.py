"""Pydantic schemas for portfolioview data models."""

from portfolioview.schemas.content import (
    KPI,
    PRIMARY_HREF_PRIORITY,
    RECORD_TYPES,
    Capability,
    Certification,
    ContentCollection,
    ContentRecord,
    ExperienceEntry,
    Project,
    ProjectLinks,
    SkillGroup,
)
from portfolioview.schemas.state import SENTINEL, FilterState, PageState, ViewName

__all__ = [
    # Content records
    "ContentRecord",
    "Project",
    "ProjectLinks",
    "ExperienceEntry",
    "Capability",
    "SkillGroup",
    "Certification",
    "KPI",
    "ContentCollection",
    "RECORD_TYPES",
    "PRIMARY_HREF_PRIORITY",
    # State
    "FilterState",
    "PageState",
    "ViewName",
    "SENTINEL",
]
