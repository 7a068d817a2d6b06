"""RIVL markup document reader.

Turns the markup file into a small tree of DocElement records:
element name, ordered (name, value) attribute pairs, body text and
ordered child elements. Parsing itself is done by xml.etree.ElementTree;
this module only reshapes the result and checks the outer structure.
"""

import xml.etree.ElementTree as ET

from ..exceptions import FormatError
from .rivl_constants import ROOT_ELEMENT


class DocElement:
    """One element of a parsed RIVL document."""

    __slots__ = ('name', 'attributes', 'text', 'children')

    def __init__(self, name, attributes=None, text="", children=None):
        self.name = name
        self.attributes = attributes if attributes is not None else []  # list of (name, value)
        self.text = text
        self.children = children if children is not None else []

    def get(self, name, default=None):
        """Return the value of the first attribute called ``name``."""
        for attr_name, value in self.attributes:
            if attr_name == name:
                return value
        return default

    def has(self, name):
        return any(attr_name == name for attr_name, _ in self.attributes)

    def __repr__(self):
        return (
            f"DocElement({self.name!r}, attrs={len(self.attributes)}, "
            f"children={len(self.children)})"
        )


def _convert(elem):
    """Convert an ET.Element (and its subtree) to a DocElement."""
    # Body text is the element's own text plus the tails between children,
    # so it never includes text that belongs to a nested element.
    parts = [elem.text or ""]
    children = []
    for child in elem:
        if isinstance(child.tag, str):
            children.append(_convert(child))
        parts.append(child.tail or "")
    return DocElement(
        elem.tag,
        list(elem.attrib.items()),
        "".join(parts),
        children,
    )


def parse_document(source):
    """Parse RIVL markup from a path or file object and return the root DocElement.

    Raises:
        FormatError: if the markup is malformed, the outermost element is not
            BGFscene, or the scene has no declarations.
    """
    try:
        tree = ET.parse(source)
    except ET.ParseError as exc:
        raise FormatError(f"could not parse RIVL file: {exc}") from exc
    return _check_root(_convert(tree.getroot()))


def parse_document_string(text):
    """Parse RIVL markup held in a string."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise FormatError(f"could not parse RIVL file: {exc}") from exc
    return _check_root(_convert(root))


def _check_root(root):
    if root.name != ROOT_ELEMENT:
        raise FormatError(
            f"could not parse RIVL file: not in expected format "
            f"(root element is {root.name!r}, expected {ROOT_ELEMENT!r})"
        )
    if not root.children:
        raise FormatError("could not parse RIVL file: empty RIVL model")
    return root
