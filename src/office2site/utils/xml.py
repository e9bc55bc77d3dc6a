#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/office2site/utils/xml.py
"""Generic XML tree for OOXML parts.

Parts are parsed with ``defusedxml`` and converted into :class:`XmlNode`, an
explicit tagged structure: every element keeps its attributes, its ordered
child elements (also reachable by tag name) and its text. Namespaced names are
rewritten with the conventional OOXML prefixes (``p:sp``, ``a:t``,
``r:embed``) so lookups read like the markup they walk.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional
from xml.etree.ElementTree import Element, ParseError

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from office2site.constants import OOXML_NAMESPACES
from office2site.exceptions import ElementNotFoundError, MalformedXmlError


def qualify_name(name: str) -> str:
    """Rewrite a Clark-notation name (``{uri}local``) to ``prefix:local``.

    Names in unknown namespaces are returned unchanged.

    Examples
    --------
    >>> qualify_name("{http://schemas.openxmlformats.org/drawingml/2006/main}t")
    'a:t'

    """
    if not name.startswith("{"):
        return name
    uri, _, local = name[1:].partition("}")
    prefix = OOXML_NAMESPACES.get(uri)
    if prefix is None:
        return name
    return f"{prefix}:{local}"


@dataclass
class XmlNode:
    """One parsed XML element.

    Parameters
    ----------
    tag : str
        Prefixed element name, e.g. ``"p:sp"``
    attrib : dict
        Attributes keyed by prefixed name
    children : list of XmlNode
        Child elements in document order
    text : str or None
        Text content directly inside the element, before the first child

    """

    tag: str
    attrib: dict[str, str] = field(default_factory=dict)
    children: list[XmlNode] = field(default_factory=list)
    text: Optional[str] = None

    def elements(self, tag: str) -> list[XmlNode]:
        """Return the direct children named ``tag``, in document order."""
        return [child for child in self.children if child.tag == tag]

    def first(self, tag: str) -> Optional[XmlNode]:
        """Return the first direct child named ``tag``, or None."""
        for child in self.children:
            if child.tag == tag:
                return child
        return None

    def find(self, *path: str) -> Optional[XmlNode]:
        """Follow a path of tag names through first matching children.

        Returns None as soon as one step has no match.
        """
        node: Optional[XmlNode] = self
        for tag in path:
            if node is None:
                return None
            node = node.first(tag)
        return node

    def require(self, *path: str) -> XmlNode:
        """Like :meth:`find` but raise when the path is absent.

        Raises
        ------
        ElementNotFoundError
            If any step of the path has no matching child.

        """
        node = self.find(*path)
        if node is None:
            raise ElementNotFoundError(path, self.tag)
        return node

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return an attribute value by prefixed name."""
        return self.attrib.get(name, default)

    def iter(self, tag: Optional[str] = None) -> Iterator[XmlNode]:
        """Yield this node and all descendants depth-first, optionally filtered by tag."""
        if tag is None or self.tag == tag:
            yield self
        for child in self.children:
            yield from child.iter(tag)

    def text_content(self) -> str:
        """Return the element's own text, or an empty string."""
        return self.text or ""


def _convert(element: Element) -> XmlNode:
    return XmlNode(
        tag=qualify_name(element.tag),
        attrib={qualify_name(key): value for key, value in element.attrib.items()},
        children=[_convert(child) for child in element],
        text=element.text,
    )


def parse_xml(text: str | bytes, part_name: Optional[str] = None) -> XmlNode:
    """Parse an XML document into an :class:`XmlNode` tree.

    Parameters
    ----------
    text : str or bytes
        XML document
    part_name : str, optional
        Archive entry the document came from, used in error messages

    Returns
    -------
    XmlNode
        The document element

    Raises
    ------
    MalformedXmlError
        If the document is not well-formed or uses forbidden constructs
        (entity declarations, external references).

    """
    if isinstance(text, str):
        # ElementTree rejects str input that still carries an encoding declaration
        text = text.encode("utf-8")
    where = f" in {part_name}" if part_name else ""
    try:
        root = ET.fromstring(text)
    except ParseError as e:
        raise MalformedXmlError(f"Malformed XML{where}: {e}", part_name=part_name, original_error=e) from e
    except DefusedXmlException as e:
        raise MalformedXmlError(f"Forbidden XML construct{where}: {e!r}", part_name=part_name, original_error=e) from e
    return _convert(root)
