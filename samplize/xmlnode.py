"""
XML sample nodes and their serialization.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union
import xml.etree.ElementTree as ET
from xml.etree.ElementTree import Element, SubElement

from samplize.common import scalar_text

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
INDENT = '\t'


@dataclass
class XmlElement:
    """
    An element of an XML sample.

    Attributes:
        name: The display name, including any namespace prefix.
        attributes: Attribute values by attribute name, including ``xmlns`` declarations.
        content: A list of children (``XmlElement`` or character data) or a scalar body.
    """
    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    content: Any = None

    def append(self, child: Any) -> None:
        """Add a child. Lists are spliced in as siblings and ``None`` is ignored."""
        if child is None:
            return
        if not isinstance(self.content, list):
            self.content = [] if self.content is None else [self.content]
        if isinstance(child, list):
            for item in child:
                self.append(item)
        else:
            self.content.append(child)

    def renamed(self, name: str) -> 'XmlElement':
        """Return a copy of this element under another name."""
        return XmlElement(name, copy.deepcopy(self.attributes), copy.deepcopy(self.content))

    def children(self) -> List['XmlElement']:
        """Return the child elements, skipping character data."""
        if not isinstance(self.content, list):
            return []
        return [c for c in self.content if isinstance(c, XmlElement)]

    def find(self, name: str) -> Union['XmlElement', None]:
        """Return the first child element with the given name."""
        return next((c for c in self.children() if c.name == name), None)

    def to_element(self) -> Element:
        """Convert to an ElementTree element."""
        element = Element(self.name, _attribute_text(self.attributes))
        _fill(element, self.content)
        return element


def _attribute_text(attributes: Dict[str, Any]) -> Dict[str, str]:
    return {k: scalar_text(v) for k, v in attributes.items()}


def _add_text(element: Element, text: str) -> None:
    if len(element):
        last = element[-1]
        last.tail = (last.tail or '') + text
    else:
        element.text = (element.text or '') + text


def _fill(element: Element, content: Any) -> None:
    """
    Fill an element from sample content.

    Literal mappings become one child element per key and literal lists
    contribute each entry in turn, so literal examples nest the same way as
    generated ones.
    """
    if content is None:
        return
    if isinstance(content, XmlElement):
        child = SubElement(element, content.name, _attribute_text(content.attributes))
        _fill(child, content.content)
    elif isinstance(content, dict):
        for key, value in content.items():
            _fill(SubElement(element, str(key)), value)
    elif isinstance(content, list):
        for item in content:
            _fill(element, item)
    else:
        _add_text(element, scalar_text(content))


def render_xml(sample: Union[XmlElement, List[Any]]) -> str:
    """
    Serialize an XML sample with a declaration and tab indentation.

    A list of siblings is rendered one element after another.
    """
    roots = sample if isinstance(sample, list) else [sample]
    lines = [XML_DECLARATION]
    for root in roots:
        if isinstance(root, XmlElement):
            element = root.to_element()
            ET.indent(element, space=INDENT)
            lines.append(ET.tostring(element, encoding='unicode', short_empty_elements=False))
        elif root is not None:
            lines.append(scalar_text(root))
    return '\n'.join(lines)
