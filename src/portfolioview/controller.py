"""Page controller: owns page state and drives load, filter and render."""

import time

import structlog

from portfolioview.activation import CardActivationController
from portfolioview.config import Config
from portfolioview.diagnostics import DiagnosticRow, render_diagnostics, run_diagnostics
from portfolioview.dom import Element, Event, Page
from portfolioview.exceptions import LoadError, MissingTargetError
from portfolioview.facets import build_facets
from portfolioview.filtering import VIEWS, apply_filter
from portfolioview.loader import CollectionLoader
from portfolioview.modal import ModalController
from portfolioview.renderers import BaseRenderer, ProjectRenderer, create_renderer
from portfolioview.renderers.controls import FACET_ATTRIBUTE, render_chips, render_options
from portfolioview.renderers.experience import DETAILS_ATTRIBUTE, details_annotation, render_details
from portfolioview.schemas.content import RECORD_TYPES
from portfolioview.schemas.state import FilterState, PageState, ViewName
from portfolioview.utils.metrics import RenderMetrics, timed_operation

logger = structlog.get_logger(__name__)


class PageController:
    """
    Loads the content collections and keeps the page's views in sync with
    the filter state.

    All state lives on ``self.state``; handlers and renderers receive it
    through this controller rather than through module globals.
    """

    def __init__(self, page: Page, config: Config | None = None, loader: CollectionLoader | None = None):
        """
        Initialize controller.

        Args:
            page: Page to render into
            config: Configuration (defaults apply when omitted)
            loader: Collection loader (built from ``config.data`` when omitted)
        """
        self.page = page
        self.config = config or Config()
        self.selectors = self.config.selectors
        self.loader = loader or CollectionLoader(
            self.config.data.base, timeout_seconds=self.config.data.timeout_seconds
        )
        self.state = PageState()
        self.activation = CardActivationController(page.navigate)
        self.metrics = RenderMetrics()
        self.renderers: dict[str, BaseRenderer] = {}
        self.logger = logger.bind(controller="PageController")
        self._handlers_bound = False

        try:
            self.modal: ModalController | None = ModalController(page, self.selectors)
        except MissingTargetError as e:
            self.logger.debug("Modal disabled", selector=e.selector)
            self.modal = None

    def element(self, selector: str) -> Element | None:
        """Optional page element; absence disables the feature that needs it."""
        try:
            return self.page.require(selector)
        except MissingTargetError as e:
            self.logger.debug("Feature disabled, element missing", selector=e.selector)
            return None

    def collections_to_load(self) -> list[str]:
        """Configured collections whose container exists on the page."""
        names = []
        for name in self.config.data.collections:
            selector = self.selectors.for_collection(name)
            if selector is not None and self.page.query(selector) is not None:
                names.append(name)
        return names

    # -- initialisation ----------------------------------------------------

    def initialise(self, raise_errors: bool = False) -> bool:
        """
        Load every needed collection, then render the whole page.

        Each call takes a new load generation. If ``initialise`` is entered
        again while this call's load is still running, for example from an
        event handler, only the newest call applies its result; the older
        one returns False without touching the page. Calls are not expected
        from other threads.

        Args:
            raise_errors: Re-raise a LoadError after the error card is shown

        Returns:
            True if the page was rendered from freshly loaded data
        """
        self.state.load_generation += 1
        generation = self.state.load_generation

        names = self.collections_to_load()
        if not names:
            self.logger.info("No content containers on page, nothing to load")
            return False

        try:
            with timed_operation("load", collections=names):
                collections = self.loader.load_all(names)
        except LoadError as e:
            if generation != self.state.load_generation:
                return False
            self.show_load_error(e)
            if raise_errors:
                raise
            return False

        if generation != self.state.load_generation:
            self.logger.info("Discarding superseded load", generation=generation)
            return False

        self.state.collections = collections
        self.state.load_error = None
        self._build_facets()
        self._build_renderers()
        self._bind_handlers()
        self.render_all()
        self.logger.info(
            "Page initialised",
            collections={name: len(c) for name, c in collections.items()},
        )
        return True

    def show_load_error(self, error: LoadError) -> None:
        """
        Replace the page content with one error card in the project grid.

        Every other collection container and facet control is emptied, and
        the filter state and renderers are dropped so later input events
        leave the error card in place.
        """
        self.logger.error(
            "Page initialisation failed",
            error=str(error),
            error_type=type(error).__name__,
            path=error.path,
        )
        self.state.load_error = str(error)
        self.state.collections = {}
        self.state.facets = {}
        self.state.filters = {}
        self.renderers = {}

        s = self.selectors
        containers = [s.for_collection(name) for name in RECORD_TYPES if name != "projects"]
        for selector in [*containers, s.filters, s.tag_select, s.domain_select]:
            control = self.element(selector)
            if control is not None:
                control.inner_html = ""

        grid = self.element(s.projects_grid)
        if grid is not None:
            ProjectRenderer(grid, count=self.element(s.count)).render_error(str(error))

    def _build_facets(self) -> None:
        sentinel = self.config.rendering.sentinel
        self.state.facets = {}
        self.state.filters = {}
        for view_name, view in VIEWS.items():
            if view_name.value not in self.state.collections:
                continue
            records = self.state.records(view_name.value)
            self.state.facets[view_name] = build_facets(records, view.facet_values, sentinel)
            self.state.filters[view_name] = FilterState(active_facet=sentinel, sentinel=sentinel)

    def _build_renderers(self) -> None:
        self.renderers = {}
        placeholder = self.config.rendering.placeholder
        for name in self.state.collections:
            container = self.element(self.selectors.for_collection(name))
            if container is None:
                continue
            kwargs = {"placeholder": placeholder}
            if name == "projects":
                kwargs.update(activation=self.activation, count=self.element(self.selectors.count))
            elif name == "experience":
                kwargs.update(entries=self.state.records(name))
            self.renderers[name] = create_renderer(name, container, **kwargs)

    def _bind_handlers(self) -> None:
        """Attach control handlers once; controls outlive every re-render."""
        if self._handlers_bound:
            return
        self._handlers_bound = True
        s = self.selectors

        chips = self.element(s.filters)
        if chips is not None:
            chips.add_event_listener("click", self._on_chip_click)

        tag_select = self.element(s.tag_select)
        if tag_select is not None:
            tag_select.add_event_listener(
                "change", lambda e: self.set_facet(ViewName.PROJECTS, e.target.value)
            )

        search = self.element(s.search)
        if search is not None:
            search.add_event_listener("input", lambda e: self.set_query(ViewName.PROJECTS, e.target.value))

        domain_select = self.element(s.domain_select)
        if domain_select is not None:
            domain_select.add_event_listener(
                "change", lambda e: self.set_facet(ViewName.EXPERIENCE, e.target.value)
            )

        timeline = self.element(s.experience)
        if timeline is not None:
            timeline.add_event_listener("click", self._on_details_click)

        trigger = self.element(s.diagnostics_trigger)
        if trigger is not None:
            trigger.add_event_listener("click", lambda e: self.show_diagnostics())

    # -- filter state ------------------------------------------------------

    def set_facet(self, view: ViewName, value: str) -> None:
        """Select a facet value and re-render the view."""
        if view not in self.state.filters:
            return
        self.state.filters[view].active_facet = value
        self.logger.debug("Facet selected", view=view.value, facet=value)
        self.render_view(view)

    def set_query(self, view: ViewName, text: str) -> None:
        """Update the search query and re-render the view (every call, no debounce)."""
        if view not in self.state.filters:
            return
        self.state.filters[view].query = text or ""
        self.render_view(view)

    def filtered(self, view: ViewName) -> tuple:
        """Records of a view that pass its current filter, in source order."""
        records = self.state.records(view.value)
        state = self.state.filters.get(view)
        if state is None or state.is_unrestricted():
            return tuple(records)
        return apply_filter(records, state, VIEWS[view])

    # -- rendering ---------------------------------------------------------

    def render_view(self, view: ViewName) -> int:
        """Re-render a filterable view and its facet controls."""
        self.render_controls(view)
        renderer = self.renderers.get(view.value)
        if renderer is None:
            return 0
        start = time.perf_counter()
        size = renderer.render(self.filtered(view))
        self.metrics.record(view.value, size, time.perf_counter() - start)
        return size

    def render_controls(self, view: ViewName) -> None:
        facets = self.state.facets.get(view)
        if facets is None:
            return
        active = self.state.filters[view].active_facet
        if view is ViewName.PROJECTS:
            chips = self.element(self.selectors.filters)
            if chips is not None:
                render_chips(chips, facets, active)
            select = self.element(self.selectors.tag_select)
        else:
            select = self.element(self.selectors.domain_select)
        if select is not None:
            render_options(select, facets, active)

    def render_all(self) -> None:
        for name, renderer in self.renderers.items():
            if name in {v.value for v in VIEWS}:
                self.render_view(ViewName(name))
            else:
                with timed_operation("render", view=name):
                    renderer.render(self.state.records(name))

    # -- handlers ----------------------------------------------------------

    def _on_chip_click(self, event: Event) -> None:
        chip = event.target.closest(f"[{FACET_ATTRIBUTE}]")
        if chip is not None:
            self.set_facet(ViewName.PROJECTS, chip.get_attribute(FACET_ATTRIBUTE))

    def _on_details_click(self, event: Event) -> None:
        button = event.target.closest(f"[{DETAILS_ATTRIBUTE}]")
        if button is None:
            return
        try:
            position = int(button.get_attribute(DETAILS_ATTRIBUTE))
        except (TypeError, ValueError):
            self.logger.warning("Bad details index", value=button.get_attribute(DETAILS_ATTRIBUTE))
            return
        self.open_details(position)

    def open_details(self, position: int) -> bool:
        """Open the modal with an experience entry's details."""
        renderer = self.renderers.get("experience")
        if self.modal is None or renderer is None:
            return False
        entry = renderer.entry_at(position)
        if entry is None:
            return False
        body = render_details(
            entry, self.config.rendering.detail_sections, self.config.rendering.placeholder
        )
        self.modal.open(entry.title, body, details_annotation(entry))
        return True

    def show_diagnostics(self) -> list[DiagnosticRow]:
        """Run the self-check and show it in the diagnostics panel, if any."""
        rows = run_diagnostics(self.page, self.state, self.config)
        panel = self.element(self.selectors.diagnostics_panel)
        if panel is not None:
            panel.inner_html = render_diagnostics(rows)
            panel.remove_attribute("hidden")
        return rows
