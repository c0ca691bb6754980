"""Conversion of XML parts into plain nested mappings.

The shape mirrors what generic XML-to-object converters produce:

* the result is ``{root_tag: node}``
* tag and attribute names keep their source prefix (``w:p``, ``xml:space``)
* attributes and namespace declarations are merged into the element mapping
* an element without attributes or child elements collapses to its text
* text next to attributes or child elements is stored under ``TEXT_KEY``
* repeated child tags become a list in document order
"""

from typing import Union

from lxml import etree

from word_parser.exceptions import XmlParseError

TEXT_KEY = "_"

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

# TextLeaf is a plain str, Element a dict of tag -> node or list of nodes
ParsedNode = Union[str, dict]


def _make_parser() -> etree.XMLParser:
    # lxml parsers are not shared across threads
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
        huge_tree=False,
    )


def parse_xml(markup: Union[str, bytes]) -> ParsedNode:
    """Parse an XML part into a ParsedNode tree.

    Args:
        markup: Raw XML as bytes (preferred, honours the declared encoding)
            or text

    Returns:
        Mapping with the root tag as its single key

    Raises:
        XmlParseError: If the markup is empty or not well-formed
    """
    if isinstance(markup, str):
        markup = markup.encode("utf-8")

    try:
        root = etree.fromstring(markup, parser=_make_parser())
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise XmlParseError(f"Malformed XML: {exc}") from exc

    if root is None:
        raise XmlParseError("Malformed XML: document has no root element")

    return {_tag_name(root): _convert(root, {})}


def _tag_name(element) -> str:
    localname = etree.QName(element).localname
    return f"{element.prefix}:{localname}" if element.prefix else localname


def _attribute_name(element, key: str) -> str:
    qname = etree.QName(key)
    if qname.namespace is None:
        return qname.localname
    if qname.namespace == XML_NAMESPACE:
        return f"xml:{qname.localname}"
    for prefix, uri in element.nsmap.items():
        if prefix and uri == qname.namespace:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def _add_child(node: dict, name: str, value) -> None:
    if name not in node:
        node[name] = value
    elif isinstance(node[name], list):
        node[name].append(value)
    else:
        node[name] = [node[name], value]


def _convert(element, parent_nsmap: dict) -> ParsedNode:
    node: dict = {}

    for prefix, uri in element.nsmap.items():
        if parent_nsmap.get(prefix) != uri:
            node[f"xmlns:{prefix}" if prefix else "xmlns"] = uri

    for key, value in element.attrib.items():
        node[_attribute_name(element, key)] = value

    text_parts = [element.text or ""]
    for child in element:
        if isinstance(child.tag, str):
            _add_child(node, _tag_name(child), _convert(child, element.nsmap))
        text_parts.append(child.tail or "")
    text = "".join(text_parts)

    if not node:
        return text
    if text.strip():
        node[TEXT_KEY] = text
    return node
