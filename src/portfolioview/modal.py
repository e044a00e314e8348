"""Detail overlay controller."""

from enum import Enum, auto

import structlog

from portfolioview.config import SelectorConfig
from portfolioview.dom import Element, Event, Page
from portfolioview.exceptions import MissingTargetError
from portfolioview.sanitizer import escape_html

logger = structlog.get_logger(__name__)


class ModalState(Enum):
    """Overlay states."""

    CLOSED = auto()
    OPEN = auto()


class ModalController:
    """Two-state overlay: receives a title, optional command line and body markup."""

    def __init__(self, page: Page, selectors: SelectorConfig | None = None):
        """
        Bind to the modal root and its regions.

        Raises:
            MissingTargetError: If the modal root or one of its regions is absent
        """
        selectors = selectors or SelectorConfig()
        self.page = page
        self.root = page.require(selectors.modal)
        self.title_el = self._region(selectors.modal_title)
        self.command_el = self._region(selectors.modal_command)
        self.body_el = self._region(selectors.modal_body)
        self.dismiss_selector = selectors.modal_dismiss
        self.state = ModalState.CLOSED
        self.logger = logger.bind(controller="ModalController")

        self.root.add_event_listener("click", self._on_click)
        # Escape is handled at document level so it works wherever focus is
        page.document.add_event_listener("keydown", self._on_keydown)

    def _region(self, selector: str) -> Element:
        element = self.root.query_selector(selector)
        if element is None:
            raise MissingTargetError(selector)
        return element

    @property
    def is_open(self) -> bool:
        return self.state is ModalState.OPEN

    def open(self, title: str, body_html: str, command: str | None = None) -> None:
        """
        Show the overlay. Opening while already open replaces the content.

        Args:
            title: Plain-text title (escaped here)
            body_html: Pre-rendered, already escaped body markup
            command: Optional plain-text command/annotation line
        """
        self.title_el.inner_html = escape_html(title)
        self.command_el.inner_html = escape_html(command) if command else ""
        self.body_el.inner_html = body_html
        self.root.set_attribute("aria-hidden", "false")
        self.root.add_class("is-open")
        self.page.scroll_locked = True
        self.state = ModalState.OPEN
        self.logger.debug("Modal opened", title=title)

    def close(self) -> None:
        """Hide the overlay and clear every region."""
        self.root.set_attribute("aria-hidden", "true")
        classes = [c for c in self.root.class_list if c != "is-open"]
        self.root.set_attribute("class", " ".join(classes))
        self.page.scroll_locked = False
        self.title_el.inner_html = ""
        self.command_el.inner_html = ""
        self.body_el.inner_html = ""
        if self.state is ModalState.OPEN:
            self.logger.debug("Modal closed")
        self.state = ModalState.CLOSED

    def _on_click(self, event: Event) -> None:
        dismiss = event.target.closest(self.dismiss_selector)
        if dismiss is not None and self.root.contains(dismiss):
            self.close()

    def _on_keydown(self, event: Event) -> None:
        if event.key == "Escape" and self.is_open:
            self.close()
