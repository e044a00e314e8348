"""Collection renderers."""

from portfolioview.renderers.auxiliary import (
    CapabilityRenderer,
    CertificationRenderer,
    KPIRenderer,
    SkillRenderer,
)
from portfolioview.renderers.base import BaseRenderer
from portfolioview.renderers.experience import ExperienceRenderer, render_details
from portfolioview.renderers.projects import LinkAction, ProjectRenderer, project_actions

__all__ = [
    "BaseRenderer",
    "ProjectRenderer",
    "ExperienceRenderer",
    "KPIRenderer",
    "CapabilityRenderer",
    "SkillRenderer",
    "CertificationRenderer",
    "LinkAction",
    "project_actions",
    "render_details",
    "create_renderer",
    "RENDERERS",
]

RENDERERS: dict[str, type[BaseRenderer]] = {
    "projects": ProjectRenderer,
    "experience": ExperienceRenderer,
    "kpis": KPIRenderer,
    "capabilities": CapabilityRenderer,
    "skills": SkillRenderer,
    "certs": CertificationRenderer,
}


def create_renderer(collection: str, container, **kwargs) -> BaseRenderer:
    """
    Create the renderer for a collection name.

    Args:
        collection: Collection name (e.g., "projects")
        container: Target element
        **kwargs: Passed to the renderer constructor

    Raises:
        KeyError: If no renderer exists for the collection
    """
    if collection not in RENDERERS:
        raise KeyError(f"No renderer for collection: {collection}")
    return RENDERERS[collection](container, **kwargs)
