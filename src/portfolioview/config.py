"""Configuration loading and management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from portfolioview.exceptions import ConfigError

DEFAULT_COLLECTIONS = ["projects", "experience", "kpis", "capabilities", "skills", "certs"]


class DataConfig(BaseModel):
    """Where content collections come from."""

    base: str = "./data"
    collections: list[str] = Field(default_factory=lambda: list(DEFAULT_COLLECTIONS))
    timeout_seconds: float = 10.0


class SelectorConfig(BaseModel):
    """Selectors of the page elements the pipeline binds to."""

    projects_grid: str = "#projectsGrid"
    filters: str = "#filters"
    search: str = "#projectSearch"
    tag_select: str = "#tagSelect"
    count: str = "#projectCount"
    kpis: str = "#kpis"
    capabilities: str = "#capabilities"
    skills: str = "#skills"
    certs: str = "#certs"
    experience: str = "#experienceTimeline"
    domain_select: str = "#domainSelect"
    modal: str = "#modal"
    modal_title: str = "#modalTitle"
    modal_command: str = "#modalCmd"
    modal_body: str = "#modalBody"
    modal_dismiss: str = "[data-close]"
    diagnostics_trigger: str = "#diagBtn"
    diagnostics_panel: str = "#diagPanel"
    theme_toggle: str = "#themeToggle"

    def for_collection(self, name: str) -> str | None:
        """Container selector for a collection name, if it has one."""
        mapping = {
            "projects": self.projects_grid,
            "experience": self.experience,
            "kpis": self.kpis,
            "capabilities": self.capabilities,
            "skills": self.skills,
            "certs": self.certs,
        }
        return mapping.get(name)


class RenderingConfig(BaseModel):
    """Rendering options."""

    placeholder: str = "—"
    sentinel: str = "All"
    detail_sections: list[str] = Field(
        default_factory=lambda: ["Responsibilities", "Architecture highlights", "Outcomes"]
    )
    required_link: str = "github"


class Config(BaseModel):
    """portfolioview configuration model."""

    data: DataConfig = Field(default_factory=DataConfig)
    selectors: SelectorConfig = Field(default_factory=SelectorConfig)
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    logging: dict[str, str] = Field(default_factory=lambda: {"level": "info"})


def load_config(config_path: str | Path = "./portfolioview.yaml") -> Config:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return Config(**data)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file: {e}") from e
    except Exception as e:
        raise ConfigError(f"Error loading configuration: {e}") from e
