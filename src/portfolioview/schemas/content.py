"""Content record schema definitions."""

from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Link roles that make a project card navigable, in priority order
PRIMARY_HREF_PRIORITY = ("case_study", "writeup", "page", "blog")


def coerce_text(value: Any) -> str:
    """Coerce a loosely typed scalar to a string; anything else becomes empty."""
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def coerce_text_list(value: Any) -> tuple[str, ...]:
    """Coerce a string or list of scalars to a tuple of non-empty strings."""
    if isinstance(value, str):
        return (value,) if value.strip() else ()
    if not isinstance(value, (list, tuple)):
        return ()
    items = (coerce_text(item) for item in value)
    return tuple(item for item in items if item.strip())


class ContentRecord(BaseModel):
    """Base for all content records: immutable, unknown fields ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


def _required_title(value: Any) -> str:
    text = coerce_text(value).strip()
    if not text:
        raise ValueError("title is required")
    return text


class ProjectLinks(ContentRecord):
    """Outbound links of a project, each optional."""

    github: str = ""
    live: str = ""
    case_study: str = Field("", validation_alias=AliasChoices("caseStudy", "case_study"))
    writeup: str = ""
    blog: str = ""
    build_guide: str = Field(
        "", validation_alias=AliasChoices("buildGuide", "build guide", "build_guide")
    )

    @field_validator("*", mode="before")
    @classmethod
    def coerce_links(cls, v):
        """Non-string link values become empty."""
        return v.strip() if isinstance(v, str) else ""

    @classmethod
    def field_for(cls, key: str) -> str | None:
        """Attribute name for a link key given as field name or source alias."""
        for name, info in cls.model_fields.items():
            alias = info.validation_alias
            if isinstance(alias, AliasChoices):
                aliases = [choice for choice in alias.choices if isinstance(choice, str)]
            else:
                aliases = [alias] if isinstance(alias, str) else []
            if key == name or key in aliases:
                return name
        return None


class Project(ContentRecord):
    """A portfolio project card."""

    title: str
    description: str = Field("", validation_alias=AliasChoices("description", "summary"))
    tags: tuple[str, ...] = ()
    tools: tuple[str, ...] = ()
    aws: tuple[str, ...] = ()
    focus: tuple[str, ...] = ()
    status: str = ""
    featured: bool = False
    page: str = ""
    links: ProjectLinks = Field(default_factory=ProjectLinks)

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v):
        return _required_title(v)

    @field_validator("description", "status", "page", mode="before")
    @classmethod
    def coerce_strings(cls, v):
        return coerce_text(v)

    @field_validator("tags", "tools", "aws", "focus", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        """Normalise a single string or a list to a tuple of strings."""
        return coerce_text_list(v)

    @field_validator("featured", mode="before")
    @classmethod
    def coerce_featured(cls, v):
        return v is True

    @field_validator("links", mode="before")
    @classmethod
    def coerce_link_map(cls, v):
        return v if isinstance(v, dict) else {}

    def primary_href(self) -> str | None:
        """
        Return the single navigation target of this card.

        Checks caseStudy, writeup, page and blog in that order and returns the
        first non-empty trimmed value, or None when the card is not navigable.
        """
        for role in PRIMARY_HREF_PRIORITY:
            source = self if role == "page" else self.links
            value = getattr(source, role).strip()
            if value:
                return value
        return None


class ExperienceEntry(ContentRecord):
    """A position on the experience timeline."""

    title: str
    role: str = ""
    when: str = ""
    domains: tuple[str, ...] = ()
    tools: tuple[str, ...] = ()
    bullets: tuple[str, ...] = ()
    details: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v):
        return _required_title(v)

    @field_validator("role", "when", mode="before")
    @classmethod
    def coerce_strings(cls, v):
        return coerce_text(v)

    @field_validator("domains", "tools", "bullets", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        return coerce_text_list(v)

    @field_validator("details", mode="before")
    @classmethod
    def coerce_details(cls, v):
        """Keep string-keyed sections; section bodies become tuples of strings."""
        if not isinstance(v, dict):
            return {}
        return {str(name): coerce_text_list(items) for name, items in v.items()}


class Capability(ContentRecord):
    """A capability area with supporting items."""

    title: str
    description: str = ""
    items: tuple[str, ...] = ()

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v):
        return _required_title(v)

    @field_validator("description", mode="before")
    @classmethod
    def coerce_strings(cls, v):
        return coerce_text(v)

    @field_validator("items", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        return coerce_text_list(v)


class SkillGroup(ContentRecord):
    """A named group of skills."""

    group: str = Field(..., validation_alias=AliasChoices("group", "title"))
    items: tuple[str, ...] = ()

    @field_validator("group", mode="before")
    @classmethod
    def validate_group(cls, v):
        return _required_title(v)

    @field_validator("items", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        return coerce_text_list(v)


class Certification(ContentRecord):
    """A certification badge."""

    name: str = Field(..., validation_alias=AliasChoices("name", "title"))
    issuer: str = ""
    year: str = ""
    url: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v):
        return _required_title(v)

    @field_validator("issuer", "year", "url", mode="before")
    @classmethod
    def coerce_strings(cls, v):
        return coerce_text(v)


class KPI(ContentRecord):
    """A headline metric."""

    label: str
    value: str = ""
    note: str = ""

    @field_validator("label", mode="before")
    @classmethod
    def validate_label(cls, v):
        return _required_title(v)

    @field_validator("value", "note", mode="before")
    @classmethod
    def coerce_strings(cls, v):
        return coerce_text(v)


RECORD_TYPES: dict[str, type[ContentRecord]] = {
    "projects": Project,
    "experience": ExperienceEntry,
    "kpis": KPI,
    "capabilities": Capability,
    "skills": SkillGroup,
    "certs": Certification,
}


@dataclass(frozen=True)
class ContentCollection:
    """An ordered, immutable sequence of records of one schema."""

    name: str
    source: str
    records: tuple[Any, ...] = ()

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)
