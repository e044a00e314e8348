"""Base renderer interface."""

from abc import ABC, abstractmethod
from typing import Iterable

import structlog

from portfolioview.dom import Element
from portfolioview.sanitizer import escape_html

logger = structlog.get_logger(__name__)

# Constants
DEFAULT_PLACEHOLDER = "—"


class BaseRenderer(ABC):
    """
    Projects a sequence of records into a container.

    Every render is a total replacement: map each record to markup, join, and
    swap the container's children. Subclasses only supply the per-record markup
    and, where needed, an ordering.
    """

    collection: str = ""
    error_title: str = "Could not load content"

    def __init__(
        self,
        container: Element,
        *,
        placeholder: str = DEFAULT_PLACEHOLDER,
        activation=None,
        count: Element | None = None,
    ):
        """
        Initialize renderer.

        Args:
            container: Element whose children this renderer owns
            placeholder: Text shown for absent or empty fields
            activation: Optional CardActivationController re-wired after each render
            count: Optional element that receives the rendered record count
        """
        self.container = container
        self.placeholder = placeholder
        self.activation = activation
        self.count = count
        self.logger = logger.bind(renderer=self.__class__.__name__)

    @abstractmethod
    def render_record(self, record, index: int) -> str:
        """Return the markup for one record."""
        pass

    def order(self, records: Iterable) -> list:
        """Source order unless overridden."""
        return list(records)

    def render(self, records: Iterable) -> int:
        """
        Replace the container's content with the given records.

        Returns:
            Number of records rendered
        """
        ordered = self.order(records)
        self.container.inner_html = "".join(
            self.render_record(record, i) for i, record in enumerate(ordered)
        )

        if self.activation is not None:
            self.activation.wire(self.container)
        if self.count is not None:
            self.count.text_content = str(len(ordered))

        self.logger.debug("Rendered", collection=self.collection, count=len(ordered))
        return len(ordered)

    def render_error(self, message: str) -> None:
        """Replace the container's content with a single error card."""
        self.container.inner_html = (
            '<article class="card error-card" role="alert">'
            f"<h3>{escape_html(self.error_title)}</h3>"
            f'<p class="muted">{escape_html(message)}</p>'
            "</article>"
        )
        if self.count is not None:
            self.count.text_content = "0"

    # Helpers shared by all renderers

    def text(self, value: object) -> str:
        """Escaped text, or the placeholder when empty."""
        text = "" if value is None else str(value)
        return escape_html(text) if text.strip() else escape_html(self.placeholder)

    def joined(self, values: Iterable[str], sep: str = ", ") -> str:
        """Escaped, comma-joined values, or the placeholder when there are none."""
        return self.text(sep.join(values))

    def chips(self, values: Iterable[str], css_class: str = "tag") -> str:
        """One escaped ``span`` per value, or the placeholder."""
        items = [f'<span class="{css_class}">{escape_html(v)}</span>' for v in values]
        return "".join(items) if items else f'<span class="muted">{self.text("")}</span>'

    def bullet_list(self, values: Iterable[str], css_class: str = "bullets") -> str:
        """An escaped ``ul``, or the placeholder paragraph."""
        items = "".join(f"<li>{escape_html(v)}</li>" for v in values)
        if not items:
            return f'<p class="muted">{self.text("")}</p>'
        return f'<ul class="{css_class}">{items}</ul>'
