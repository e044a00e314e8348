"""In-memory page model: an element tree with selectors and bubbling events."""

import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Callable, Iterator

import structlog

from portfolioview.exceptions import MissingTargetError
from portfolioview.sanitizer import escape_html

logger = structlog.get_logger(__name__)

VOID_ELEMENTS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

_SELECTOR_PART = re.compile(r"(?:\[[^\]]*\]|[^\s\[])+")
_SIMPLE_SELECTOR = re.compile(
    r"""(?P<tag>^[a-zA-Z][\w-]*)
      | \#(?P<id>[\w-]+)
      | \.(?P<cls>[\w-]+)
      | \[\s*(?P<attr>[\w-]+)\s*(?:=\s*(?P<quote>["']?)(?P<value>[^"'\]]*)(?P=quote))?\s*\]
    """,
    re.VERBOSE,
)


class TextNode:
    """A run of character data (stored unescaped)."""

    def __init__(self, data: str):
        self.data = data
        self.parent: "Element | None" = None

    def to_html(self) -> str:
        if self.parent is not None and self.parent.tag in RAW_TEXT_ELEMENTS:
            return self.data
        return escape_html(self.data)


@dataclass
class Event:
    """A dispatched UI event."""

    type: str
    target: "Element"
    key: str = ""
    current_target: "Element | None" = None
    default_prevented: bool = False
    propagation_stopped: bool = False
    detail: dict = field(default_factory=dict)

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


EventHandler = Callable[[Event], None]


class Element:
    """A node of the page tree."""

    def __init__(self, tag: str, attrs: dict[str, str] | None = None):
        self.tag = tag.lower()
        self.attrs: dict[str, str] = dict(attrs or {})
        self.children: list["Element | TextNode"] = []
        self.parent: "Element | None" = None
        self.listeners: dict[str, list[EventHandler]] = {}

    def __repr__(self) -> str:
        ident = f"#{self.attrs['id']}" if "id" in self.attrs else ""
        return f"<Element {self.tag}{ident}>"

    # -- attributes -------------------------------------------------------

    def get_attribute(self, name: str) -> str | None:
        return self.attrs.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        self.attrs[name] = str(value)

    def remove_attribute(self, name: str) -> None:
        self.attrs.pop(name, None)

    def has_attribute(self, name: str) -> bool:
        return name in self.attrs

    @property
    def class_list(self) -> list[str]:
        return self.attrs.get("class", "").split()

    def add_class(self, name: str) -> None:
        classes = self.class_list
        if name not in classes:
            classes.append(name)
            self.attrs["class"] = " ".join(classes)

    @property
    def value(self) -> str:
        return self.attrs.get("value", "")

    @value.setter
    def value(self, text: str) -> None:
        self.attrs["value"] = str(text)

    # -- tree -------------------------------------------------------------

    @property
    def element_children(self) -> list["Element"]:
        return [child for child in self.children if isinstance(child, Element)]

    def append(self, node: "Element | TextNode") -> None:
        node.parent = self
        self.children.append(node)

    def clear(self) -> None:
        for child in self.children:
            child.parent = None
        self.children = []

    def iter_descendants(self) -> Iterator["Element"]:
        for child in self.element_children:
            yield child
            yield from child.iter_descendants()

    def ancestors(self) -> Iterator["Element"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def contains(self, other: "Element") -> bool:
        """True if ``other`` is this element or one of its descendants."""
        return other is self or any(a is self for a in other.ancestors())

    @property
    def text_content(self) -> str:
        parts = []
        for child in self.children:
            parts.append(child.data if isinstance(child, TextNode) else child.text_content)
        return "".join(parts)

    @text_content.setter
    def text_content(self, text: str) -> None:
        self.clear()
        if text:
            self.append(TextNode(str(text)))

    @property
    def inner_html(self) -> str:
        return "".join(child.to_html() for child in self.children)

    @inner_html.setter
    def inner_html(self, markup: str) -> None:
        """Replace every child; listeners on the old children are dropped with them."""
        self.clear()
        for node in parse_fragment(markup):
            self.append(node)

    def to_html(self) -> str:
        attrs = "".join(
            f' {name}="{escape_html(value)}"' if value != "" else f" {name}"
            for name, value in self.attrs.items()
        )
        if self.tag in VOID_ELEMENTS:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{self.inner_html}</{self.tag}>"

    # -- selectors --------------------------------------------------------

    def matches(self, selector: str) -> bool:
        return any(_matches_group(self, group) for group in _split_groups(selector))

    def closest(self, selector: str) -> "Element | None":
        node: Element | None = self
        while node is not None:
            if node.matches(selector):
                return node
            node = node.parent
        return None

    def query_selector(self, selector: str) -> "Element | None":
        return next(iter(self.query_selector_all(selector)), None)

    def query_selector_all(self, selector: str) -> list["Element"]:
        groups = _split_groups(selector)
        return [el for el in self.iter_descendants() if any(_matches_group(el, g) for g in groups)]

    # -- events -----------------------------------------------------------

    def add_event_listener(self, event_type: str, handler: EventHandler) -> None:
        self.listeners.setdefault(event_type, []).append(handler)

    def remove_event_listener(self, event_type: str, handler: EventHandler) -> None:
        handlers = self.listeners.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def dispatch_event(self, event: Event) -> bool:
        """
        Deliver an event to this element, then bubble it through the ancestors.

        Returns False if a handler called ``prevent_default()``.
        """
        for node in (self, *self.ancestors()):
            event.current_target = node
            for handler in list(node.listeners.get(event.type, [])):
                handler(event)
            if event.propagation_stopped:
                break
        event.current_target = None
        return not event.default_prevented


def _split_groups(selector: str) -> list[list[str]]:
    groups = []
    for group in selector.split(","):
        parts = _SELECTOR_PART.findall(group.strip())
        if parts:
            groups.append(parts)
    return groups


def _matches_compound(element: Element, compound: str) -> bool:
    if compound == "*":
        return True
    pos = 0
    for match in _SIMPLE_SELECTOR.finditer(compound):
        if match.start() != pos:
            return False
        pos = match.end()
        if match.group("tag") and element.tag != match.group("tag").lower():
            return False
        if match.group("id") and element.attrs.get("id") != match.group("id"):
            return False
        if match.group("cls") and match.group("cls") not in element.class_list:
            return False
        if match.group("attr"):
            name = match.group("attr")
            if name not in element.attrs:
                return False
            if match.group("value") is not None and element.attrs[name] != match.group("value"):
                return False
    return pos == len(compound)


def _matches_group(element: Element, parts: list[str]) -> bool:
    """Match a descendant-combinator chain, right to left."""
    if not _matches_compound(element, parts[-1]):
        return False
    remaining = parts[:-1]
    node = element.parent
    while remaining and node is not None:
        if _matches_compound(node, remaining[-1]):
            remaining = remaining[:-1]
        node = node.parent
    return not remaining


class _TreeBuilder(HTMLParser):
    """Builds Element/TextNode trees from markup."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.root = Element("#fragment")
        self.stack = [self.root]

    def handle_starttag(self, tag, attrs):
        element = Element(tag, {name: value if value is not None else "" for name, value in attrs})
        self.stack[-1].append(element)
        if element.tag not in VOID_ELEMENTS:
            self.stack.append(element)

    def handle_startendtag(self, tag, attrs):
        element = Element(tag, {name: value if value is not None else "" for name, value in attrs})
        self.stack[-1].append(element)

    def handle_endtag(self, tag):
        tag = tag.lower()
        for depth in range(len(self.stack) - 1, 0, -1):
            if self.stack[depth].tag == tag:
                del self.stack[depth:]
                return
        # Stray end tag: ignored like a browser would

    def handle_data(self, data):
        if data:
            self.stack[-1].append(TextNode(data))


def parse_fragment(markup: str) -> list[Element | TextNode]:
    """Parse markup into detached top-level nodes."""
    builder = _TreeBuilder()
    builder.feed(markup or "")
    builder.close()
    nodes = list(builder.root.children)
    builder.root.clear()
    return nodes


DEFAULT_PAGE_SKELETON = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>Portfolio</title></head>
<body>
<header>
  <button id="themeToggle" type="button" aria-label="Toggle theme">Theme</button>
  <button id="diagBtn" type="button">Diagnostics</button>
</header>
<main>
  <section id="kpiSection"><div id="kpis" class="kpi-grid"></div></section>
  <section id="projects">
    <h2>Projects <span id="projectCount" class="count">0</span></h2>
    <input id="projectSearch" type="search" placeholder="Search projects" value="">
    <select id="tagSelect" aria-label="Filter by tag"></select>
    <div id="filters" class="chips"></div>
    <div id="projectsGrid" class="grid"></div>
  </section>
  <section id="capabilitiesSection"><div id="capabilities" class="grid"></div></section>
  <section id="skillsSection"><div id="skills" class="grid"></div></section>
  <section id="certsSection"><div id="certs" class="grid"></div></section>
  <section id="experience">
    <select id="domainSelect" aria-label="Filter by domain"></select>
    <ol id="experienceTimeline" class="timeline"></ol>
  </section>
  <aside id="diagPanel" class="diag" hidden></aside>
</main>
<div id="modal" class="modal" aria-hidden="true" role="dialog" aria-modal="true">
  <div class="modal-backdrop" data-close></div>
  <div class="modal-dialog">
    <button class="modal-close" type="button" data-close aria-label="Close">×</button>
    <h3 id="modalTitle"></h3>
    <code id="modalCmd"></code>
    <div id="modalBody"></div>
  </div>
</div>
</body>
</html>
"""


class Page:
    """The document a page controller renders into."""

    def __init__(self, markup: str = DEFAULT_PAGE_SKELETON, location: str = "/"):
        self.document = Element("#document")
        for node in parse_fragment(markup):
            self.document.append(node)
        self.location = location
        self.scroll_locked = False
        self.logger = logger.bind(page="Page")

    def query(self, selector: str) -> Element | None:
        return self.document.query_selector(selector)

    def query_all(self, selector: str) -> list[Element]:
        return self.document.query_selector_all(selector)

    def require(self, selector: str) -> Element:
        """Return the element for ``selector`` or raise MissingTargetError."""
        element = self.query(selector)
        if element is None:
            raise MissingTargetError(selector)
        return element

    def navigate(self, href: str) -> None:
        self.logger.info("Navigating", href=href)
        self.location = href

    # Convenience dispatchers used by the CLI and tests

    def click(self, element: Element) -> bool:
        return element.dispatch_event(Event("click", element))

    def press_key(self, element: Element, key: str) -> bool:
        return element.dispatch_event(Event("keydown", element, key=key))

    def type_text(self, element: Element, text: str) -> bool:
        element.value = text
        return element.dispatch_event(Event("input", element))

    def select(self, element: Element, value: str) -> bool:
        element.value = value
        return element.dispatch_event(Event("change", element))

    def to_html(self) -> str:
        return "<!DOCTYPE html>\n" + self.document.inner_html
