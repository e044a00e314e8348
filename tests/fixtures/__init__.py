"""Test fixtures and sample data."""

import json
from pathlib import Path
from unittest.mock import MagicMock

from portfolioview.config import Config
from portfolioview.controller import PageController
from portfolioview.dom import DEFAULT_PAGE_SKELETON, Page
from portfolioview.loader import CollectionLoader

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent
DATA_DIR = FIXTURES_DIR / "data"
BASE_URL = "https://portfolio.example.com/data"

__all__ = [
    "FIXTURES_DIR",
    "DATA_DIR",
    "BASE_URL",
    "load_sample_json",
    "create_mock_response",
    "create_mock_session",
    "create_sample_controller",
]


def load_sample_json(name: str) -> list:
    """Load a sample collection as raw JSON."""
    with open(DATA_DIR / f"{name}.json", encoding="utf-8") as f:
        return json.load(f)


def create_mock_response(status_code: int = 200, body: str = "[]") -> MagicMock:
    """
    Create a mocked requests response.

    Args:
        status_code: HTTP status code
        body: Response text
    """
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = body
    return response


def create_mock_session(routes: dict[str, tuple[int, str]] | None = None) -> MagicMock:
    """
    Create a mocked requests session.

    Args:
        routes: Maps collection file names (e.g. "projects.json") to
            ``(status_code, body)``; anything else answers 404
    """
    routes = routes or {}

    def get(url, headers=None, timeout=None):
        filename = url.rsplit("/", 1)[-1]
        status, body = routes.get(filename, (404, "Not Found"))
        return create_mock_response(status, body)

    session = MagicMock()
    session.get = MagicMock(side_effect=get)
    return session


def create_sample_controller(
    markup: str = DEFAULT_PAGE_SKELETON,
    data_dir: Path = DATA_DIR,
    config: Config | None = None,
    initialise: bool = True,
) -> PageController:
    """
    Create a page controller over the sample collections.

    Args:
        markup: Page skeleton
        data_dir: Directory of collection files
        config: Optional configuration
        initialise: Load and render before returning
    """
    config = config or Config()
    loader = CollectionLoader(data_dir)
    controller = PageController(Page(markup), config, loader)
    if initialise:
        controller.initialise()
    return controller
