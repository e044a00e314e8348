"""Escaping of untrusted text before it is inserted into markup."""

from urllib.parse import urlsplit

_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)

UNSAFE_URL_SCHEMES = frozenset({"javascript", "data", "vbscript"})


def escape_html(value: object = "") -> str:
    """
    Escape a value for text or quoted-attribute context.

    ``None`` becomes the empty string; anything else is converted with ``str()``.
    ``&`` is replaced first, so an already escaped string is escaped again
    (``&amp;`` -> ``&amp;amp;``). Call this exactly once per value.
    """
    if value is None:
        return ""
    text = str(value)
    for raw, entity in _ESCAPES:
        text = text.replace(raw, entity)
    return text


def safe_url(url: object) -> str:
    """
    Sanitize a URL for use inside a quoted ``href`` attribute.

    Script-capable schemes are replaced with ``#``; the rest is attribute-escaped.
    """
    if url is None:
        return "#"
    text = str(url).strip()
    if not text:
        return "#"
    # Browsers ignore embedded whitespace/control characters in the scheme
    compact = "".join(ch for ch in text if ch > " ")
    try:
        scheme = urlsplit(compact).scheme.lower()
    except ValueError:
        return "#"
    if scheme in UNSAFE_URL_SCHEMES:
        return "#"
    return escape_html(text)
