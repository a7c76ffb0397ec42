"""Markup tree access for the XML and HTML based screenplay formats.

Parsers never talk to ElementTree or BeautifulSoup directly. They ask a
``MarkupAccessorRegistry`` for the accessor serving a markup kind and walk the
returned ``MarkupNode`` tree. Callers can inject their own accessors, and a
kind with no accessor fails at the point of use.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from typing import Protocol
from xml.etree import ElementTree as ET

from bs4 import BeautifulSoup
from bs4.element import Tag

from screenplay_ingest.exceptions import (
    MarkupAccessorUnavailableError,
    MarkupParseError,
)

XML = "xml"
HTML = "html"


def local_name(tag: str) -> str:
    """Strip a ``{namespace}`` or ``prefix:`` qualifier from a tag name."""
    if tag.startswith("{"):
        tag = tag.rsplit("}", 1)[-1]
    return tag.rsplit(":", 1)[-1]


class MarkupNode(ABC):
    """An element in a parsed markup tree."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Element name without namespace qualifier."""

    @abstractmethod
    def get(self, attribute: str, default: str | None = None) -> str | None:
        """Return an attribute value."""

    @property
    @abstractmethod
    def text(self) -> str:
        """Concatenated text of the element and all its descendants."""

    @abstractmethod
    def children(self) -> list[MarkupNode]:
        """Direct child elements in document order."""

    @abstractmethod
    def iter(self) -> Iterator[MarkupNode]:
        """All descendant elements in document order, excluding this one."""

    def find_all(self, name: str) -> list[MarkupNode]:
        """Descendant elements whose local name equals ``name``."""
        return [node for node in self.iter() if node.name == name]

    def find(self, name: str) -> MarkupNode | None:
        """First descendant element named ``name``, if any."""
        return next((node for node in self.iter() if node.name == name), None)

    def has_class(self, token: str) -> bool:
        """Whether ``token`` is one of the element's class names."""
        return token in (self.get("class") or "").split()


class XmlNode(MarkupNode):
    """``MarkupNode`` backed by an ElementTree element."""

    def __init__(self, element: ET.Element) -> None:
        self._element = element

    @property
    def name(self) -> str:
        return local_name(self._element.tag)

    def get(self, attribute: str, default: str | None = None) -> str | None:
        return self._element.get(attribute, default)

    @property
    def text(self) -> str:
        return "".join(self._element.itertext())

    def children(self) -> list[MarkupNode]:
        return [XmlNode(child) for child in self._element]

    def iter(self) -> Iterator[MarkupNode]:
        walker = self._element.iter()
        next(walker)  # the element itself
        for element in walker:
            yield XmlNode(element)


class HtmlNode(MarkupNode):
    """``MarkupNode`` backed by a BeautifulSoup tag."""

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    @property
    def name(self) -> str:
        return local_name(self._tag.name or "")

    def get(self, attribute: str, default: str | None = None) -> str | None:
        value = self._tag.get(attribute)
        if value is None:
            return default
        # multi-valued attributes such as class come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    @property
    def text(self) -> str:
        return self._tag.get_text()

    def children(self) -> list[MarkupNode]:
        return [
            HtmlNode(child) for child in self._tag.children if isinstance(child, Tag)
        ]

    def iter(self) -> Iterator[MarkupNode]:
        for child in self._tag.descendants:
            if isinstance(child, Tag):
                yield HtmlNode(child)


class MarkupAccessor(Protocol):
    """Turns a markup string into a queryable tree."""

    kind: str

    def parse(self, markup: str) -> MarkupNode:
        """Parse ``markup`` and return its root node.

        Raises:
            MarkupParseError: If the markup is malformed
        """
        ...


class XmlMarkupAccessor:
    """XML accessor built on ``xml.etree.ElementTree``."""

    kind = XML

    def parse(self, markup: str) -> MarkupNode:
        try:
            root = ET.fromstring(markup.strip())
        except ET.ParseError as e:
            raise MarkupParseError(
                message="Malformed XML screenplay document",
                hint="Check that the file is a complete, well-formed export.",
                details={"kind": self.kind, "parser_error": str(e)},
            ) from e
        return XmlNode(root)


class HtmlMarkupAccessor:
    """HTML accessor built on BeautifulSoup with the stdlib ``html.parser``."""

    kind = HTML

    def __init__(self, features: str = "html.parser") -> None:
        self.features = features

    def parse(self, markup: str) -> MarkupNode:
        soup = BeautifulSoup(markup, self.features)
        # BeautifulSoup is itself a Tag, so the whole document is the root
        return HtmlNode(soup)


class MarkupAccessorRegistry:
    """Maps markup kinds to the accessors that parse them."""

    def __init__(self, accessors: Mapping[str, MarkupAccessor] | None = None) -> None:
        self._accessors: dict[str, MarkupAccessor] = dict(accessors or {})

    @classmethod
    def default(cls) -> MarkupAccessorRegistry:
        """Registry serving XML through ElementTree and HTML through BeautifulSoup."""
        return cls({XML: XmlMarkupAccessor(), HTML: HtmlMarkupAccessor()})

    def register(self, accessor: MarkupAccessor) -> None:
        self._accessors[accessor.kind] = accessor

    def get(self, kind: str) -> MarkupAccessor:
        """Return the accessor for ``kind``.

        Raises:
            MarkupAccessorUnavailableError: If nothing serves ``kind``
        """
        try:
            return self._accessors[kind]
        except KeyError:
            raise MarkupAccessorUnavailableError(kind) from None

    def __contains__(self, kind: object) -> bool:
        return kind in self._accessors
