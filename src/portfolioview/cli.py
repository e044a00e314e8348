"""CLI entry point for portfolioview."""

import logging
import sys
from pathlib import Path

import click
import structlog
from dotenv import load_dotenv

from portfolioview import __version__
from portfolioview.config import Config, load_config
from portfolioview.controller import PageController
from portfolioview.dom import DEFAULT_PAGE_SKELETON, Page
from portfolioview.exceptions import (
    ConfigError,
    LoadError,
    ParseError,
    SchemaError,
    TransportError,
)
from portfolioview.loader import CollectionLoader
from portfolioview.schemas.state import ViewName

# Load environment variables from .env file
load_dotenv()

logger = structlog.get_logger(__name__)


def _stderr_logger(*args):
    # Resolve sys.stderr per logger so redirected streams are honoured
    return structlog.PrintLogger(sys.stderr)


def configure_logging(verbose: bool = False, level: str = "warning") -> None:
    """Console logging on stderr so rendered output on stdout stays clean."""
    threshold = logging.DEBUG if verbose else logging.getLevelName(level.upper())
    if not isinstance(threshold, int):
        threshold = logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        logger_factory=_stderr_logger,
    )


def report_error(error: Exception, step: str) -> None:
    """Show a categorised error with suggestions."""
    if isinstance(error, TransportError):
        category = "Transport Error"
        suggestions = [
            "• Check that the data location is correct",
            "• A missing file or non-2xx response aborts the whole page",
            "• Run the command again once the source is reachable",
        ]
        if error.status_code:
            suggestions.insert(0, f"• Status code: {error.status_code}")
    elif isinstance(error, ParseError):
        category = "Parse Error"
        suggestions = ["• The collection file is not valid JSON"]
    elif isinstance(error, SchemaError):
        category = "Schema Error"
        suggestions = ["• A collection file must contain a JSON array of objects"]
    elif isinstance(error, ConfigError):
        category = "Configuration Error"
        suggestions = ["• Check your configuration file"]
    else:
        category = "Unexpected Error"
        suggestions = ["• Check the error message above for details"]

    click.echo(f"\n{'=' * 60}", err=True)
    click.echo(f"❌ Error: {category}", err=True)
    click.echo(f"{'=' * 60}", err=True)
    click.echo(f"   Step: {step}", err=True)
    click.echo(f"   Error Type: {type(error).__name__}", err=True)
    click.echo(f"   Message: {error}", err=True)
    if isinstance(error, LoadError) and error.path:
        click.echo(f"   Source: {error.path}", err=True)
    click.echo("\n💡 Suggestions:", err=True)
    for suggestion in suggestions:
        click.echo(f"   {suggestion}", err=True)


def build_config(config_path: Path | None, data: str | None) -> Config:
    cfg = load_config(config_path) if config_path else Config()
    if config_path:
        verbose = click.get_current_context().find_root().params.get("verbose", False)
        configure_logging(verbose, cfg.logging.get("level", "warning"))
    if data:
        cfg.data.base = data
    return cfg


def build_controller(cfg: Config, page_path: Path | None) -> PageController:
    markup = page_path.read_text(encoding="utf-8") if page_path else DEFAULT_PAGE_SKELETON
    page = Page(markup)
    loader = CollectionLoader(cfg.data.base, timeout_seconds=cfg.data.timeout_seconds)
    return PageController(page, cfg, loader)


def initialise_or_abort(controller: PageController) -> None:
    try:
        controller.initialise(raise_errors=True)
    except LoadError as e:
        report_error(e, "loading collections")
        raise click.Abort()


data_option = click.option(
    "--data", "-d", envvar="PORTFOLIOVIEW_DATA", default=None,
    help="Data directory or base URL holding the JSON collections",
)
config_option = click.option(
    "--config", "-c", "config_path", default=None, type=click.Path(exists=True, path_type=Path),
    help="Configuration file (YAML)",
)
page_option = click.option(
    "--page", "-p", "page_path", default=None, type=click.Path(exists=True, path_type=Path),
    help="Page skeleton HTML (defaults to the built-in skeleton)",
)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug logging")
def cli(verbose: bool):
    """portfolioview: render portfolio content collections into page views."""
    configure_logging(verbose)


@cli.command()
@data_option
@config_option
@page_option
@click.option("--tag", "-t", default=None, help="Show only projects with this tag")
@click.option("--query", "-q", default=None, help="Search text applied to projects")
@click.option("--output", "-o", default=None, type=click.Path(path_type=Path),
              help="Write the page here instead of stdout")
def render(data: str | None, config_path: Path | None, page_path: Path | None,
           tag: str | None, query: str | None, output: Path | None):
    """Render the page from the content collections."""
    try:
        cfg = build_config(config_path, data)
        controller = build_controller(cfg, page_path)
    except ConfigError as e:
        report_error(e, "configuration")
        raise click.Abort()

    initialise_or_abort(controller)

    if tag:
        controller.set_facet(ViewName.PROJECTS, tag)
    if query:
        search = controller.element(cfg.selectors.search)
        if search is not None:
            controller.page.type_text(search, query)
        else:
            controller.set_query(ViewName.PROJECTS, query)

    logger.debug("Render metrics", metrics=controller.metrics.get_summary())
    html = controller.page.to_html()
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(html, encoding="utf-8")
        shown = len(controller.filtered(ViewName.PROJECTS))
        click.echo(f"✅ Wrote {output} ({shown} projects shown)")
    else:
        click.echo(html)


@cli.command()
@data_option
@config_option
@click.option("--view", type=click.Choice([v.value for v in ViewName]), default=ViewName.PROJECTS.value,
              help="Which view's facets to list")
def facets(data: str | None, config_path: Path | None, view: str):
    """List the facet values of a view."""
    try:
        cfg = build_config(config_path, data)
    except ConfigError as e:
        report_error(e, "configuration")
        raise click.Abort()

    controller = build_controller(cfg, None)
    initialise_or_abort(controller)

    values = controller.state.facets.get(ViewName(view), ())
    if not values:
        click.echo(f"No {view} loaded", err=True)
        return
    for value in values:
        click.echo(value)


@cli.command()
@data_option
@config_option
@page_option
def diagnose(data: str | None, config_path: Path | None, page_path: Path | None):
    """Render the page and print its self-check."""
    try:
        cfg = build_config(config_path, data)
        controller = build_controller(cfg, page_path)
    except ConfigError as e:
        report_error(e, "configuration")
        raise click.Abort()

    # Diagnostics also describe a failed load, so errors are not fatal here
    controller.initialise()
    icons = {"ok": "✅", "warn": "⚠️ ", "off": "⏸️ "}
    for row in controller.show_diagnostics():
        click.echo(f"{icons[row.status.value]} [{row.status.value.upper():4}] {row.label}: {row.detail}")


if __name__ == "__main__":
    cli()
