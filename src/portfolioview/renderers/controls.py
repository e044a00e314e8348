"""Facet controls: chip buttons and select options."""

from typing import Sequence

from portfolioview.dom import Element
from portfolioview.sanitizer import escape_html

FACET_ATTRIBUTE = "data-facet"


def render_chips(container: Element, facets: Sequence[str], active: str) -> None:
    """Replace the chip row; the active facet's chip is ``aria-pressed``."""
    container.inner_html = "".join(
        f'<button type="button" class="chip" {FACET_ATTRIBUTE}="{escape_html(facet)}"'
        f' aria-pressed="{"true" if facet == active else "false"}">{escape_html(facet)}</button>'
        for facet in facets
    )


def render_options(select: Element, facets: Sequence[str], active: str) -> None:
    """Replace a select control's options and mark the active one selected."""
    select.inner_html = "".join(
        f'<option value="{escape_html(facet)}"{" selected" if facet == active else ""}>'
        f"{escape_html(facet)}</option>"
        for facet in facets
    )
    select.value = active
