"""Keyboard and pointer activation of navigable cards."""

import weakref
from typing import Callable

import structlog

from portfolioview.dom import Element, Event

logger = structlog.get_logger(__name__)

# Constants
CARD_SELECTOR = "[data-href]"
NESTED_CONTROL_SELECTOR = "a, button"
ACTIVATION_KEYS = ("Enter", " ")


class CardActivationController:
    """
    Makes cards carrying ``data-href`` behave like links.

    Handling is delegated: one click and one keydown handler per container,
    installed on the first ``wire()`` call. Re-rendering replaces the cards but
    not the container, so later ``wire()`` calls only decorate the new cards.
    """

    def __init__(self, navigate: Callable[[str], None]):
        """
        Initialize controller.

        Args:
            navigate: Called with the target href when a card is activated
        """
        self.navigate = navigate
        self._wired: "weakref.WeakSet[Element]" = weakref.WeakSet()
        self.logger = logger.bind(controller="CardActivationController")

    def wire(self, container: Element) -> int:
        """
        Decorate every navigable card in the container and ensure delegation.

        Returns:
            Number of navigable cards found
        """
        cards = container.query_selector_all(CARD_SELECTOR)
        for card in cards:
            self._decorate(card)

        if container not in self._wired:
            container.add_event_listener("click", lambda e: self._on_click(container, e))
            container.add_event_listener("keydown", lambda e: self._on_keydown(container, e))
            self._wired.add(container)

        self.logger.debug("Wired cards", container=repr(container), count=len(cards))
        return len(cards)

    def _decorate(self, card: Element) -> None:
        card.set_attribute("tabindex", "0")
        card.set_attribute("role", "link")
        card.add_class("is-clickable")
        if not card.get_attribute("aria-label"):
            heading = card.query_selector("h3")
            label = heading.text_content.strip() if heading is not None else card.get_attribute("data-href")
            card.set_attribute("aria-label", f"Open {label}")

    def _resolve(self, container: Element, event: Event) -> str | None:
        """Return the href to follow, or None if the event belongs to a nested control."""
        card = event.target.closest(CARD_SELECTOR)
        if card is None or not container.contains(card):
            return None

        control = event.target.closest(NESTED_CONTROL_SELECTOR)
        if control is not None and card.contains(control) and control is not card:
            return None

        href = (card.get_attribute("data-href") or "").strip()
        return href or None

    def _on_click(self, container: Element, event: Event) -> None:
        href = self._resolve(container, event)
        if href:
            self.navigate(href)

    def _on_keydown(self, container: Element, event: Event) -> None:
        if event.key not in ACTIVATION_KEYS:
            return
        href = self._resolve(container, event)
        if href:
            event.prevent_default()
            self.navigate(href)
