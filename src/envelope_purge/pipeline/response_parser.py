"""
Best-effort conversion of SOAP response bodies into plain dictionaries.

Conversion rules:
- Tag names are lower-cased and keep their namespace prefix (``s:body``)
- Attributes are preserved under the ``"$"`` key
- Text is trimmed and whitespace-normalized; it is stored under ``"_"``
  when the element also has children or attributes
- Repeated child tags collapse into a list
- The root element is not wrapped: its contents are returned directly
"""

import re
from typing import Any

from lxml import etree

_WHITESPACE = re.compile(r'\s+')
# lxml refuses str input that still carries an encoding declaration
_XML_DECLARATION = re.compile(r'^<\?xml[^>]*\?>')
XML_NS = 'http://www.w3.org/XML/1998/namespace'

# No DTD/entity expansion or network access for untrusted remote bodies
_PARSER = etree.XMLParser(
    resolve_entities=False,
    no_network=True,
    remove_comments=True,
    remove_pis=True,
    huge_tree=False,
)


class ResponseParseError(ValueError):
    """The response body is not well-formed XML."""


def _normalize(text: str | None) -> str:
    if not text:
        return ''
    return _WHITESPACE.sub(' ', text).strip()


def _tag_name(element: etree._Element) -> str:
    qname = etree.QName(element)
    if element.prefix:
        return f'{element.prefix}:{qname.localname}'.lower()
    return qname.localname.lower()


def _attr_name(element: etree._Element, name: str) -> str:
    qname = etree.QName(name)
    if qname.namespace == XML_NS:
        return f'xml:{qname.localname}'
    if qname.namespace:
        for prefix, uri in element.nsmap.items():
            if uri == qname.namespace and prefix:
                return f'{prefix}:{qname.localname}'
    return qname.localname


def _convert(element: etree._Element) -> dict[str, Any] | str:
    """Convert one element into a string (leaf) or dictionary."""
    node: dict[str, Any] = {}

    # Namespace declarations are surfaced like ordinary attributes
    attrs: dict[str, str] = {}
    parent_nsmap = element.getparent().nsmap if element.getparent() is not None else {}
    for prefix, uri in element.nsmap.items():
        if parent_nsmap.get(prefix) != uri:
            attrs[f'xmlns:{prefix}' if prefix else 'xmlns'] = uri
    for name, value in element.attrib.items():
        attrs[_attr_name(element, name)] = value
    if attrs:
        node['$'] = attrs

    text_parts = [element.text or '']
    for child in element.iterchildren(tag=etree.Element):
        text_parts.append(child.tail or '')
        key = _tag_name(child)
        value = _convert(child)
        if key in node:
            if not isinstance(node[key], list):
                node[key] = [node[key]]
            node[key].append(value)
        else:
            node[key] = value

    text = _normalize(' '.join(text_parts))
    if not node:
        return text
    if text:
        node['_'] = text
    return node


def parse_soap_response(body: bytes | str) -> dict[str, Any] | str:
    """
    Parse a SOAP response body into a nested dictionary.

    Pass the raw bytes whenever they are available: lxml then decodes them
    with the BOM or the encoding named in the XML declaration. Already
    decoded text is parsed as-is with its declaration removed.

    Args:
        body: Raw response bytes, or decoded response text

    Returns:
        The root element's contents (dictionary, or text for a bare leaf root)

    Raises:
        ResponseParseError: If the body is empty or not well-formed XML
    """
    if not body or not body.strip():
        raise ResponseParseError('Response body is empty')

    if isinstance(body, str):
        source: bytes | str = _XML_DECLARATION.sub('', body.strip(), count=1)
    else:
        source = body

    try:
        root = etree.fromstring(source, parser=_PARSER)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise ResponseParseError(f'Response body is not valid XML: {e}') from e

    return _convert(root)
