"""Facet index building and locale-aware ordering."""

import unicodedata
from typing import Callable, Iterable

from portfolioview.schemas.state import SENTINEL


def locale_key(value: str) -> tuple[str, str]:
    """
    Sort key approximating a locale comparator.

    Primary order ignores case and accents; ties fall back to the raw value so
    values differing only in case stay distinct and ordered deterministically.
    """
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), value


def build_facets(
    records: Iterable,
    selector: Callable[[object], Iterable[str]],
    sentinel: str = SENTINEL,
) -> tuple[str, ...]:
    """
    Build the facet index of a collection.

    Args:
        records: Loaded records
        selector: Returns the facet values of one record (zero or more)
        sentinel: Unrestricted value, always first

    Returns:
        The sentinel followed by the sorted, deduplicated facet values
    """
    values = {str(value) for record in records for value in selector(record)}
    values.discard(sentinel)
    return (sentinel, *sorted(values, key=locale_key))
