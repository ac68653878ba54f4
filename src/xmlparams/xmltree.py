"""
Helpers for the handful of XML operations the serializers and the parameter store need: parsing,
building elements, finding direct children, reading text and writing documents out. Everything
is done with lxml; the rest of the package never touches the parser or writer directly.
"""
import logging
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from lxml import etree

from xmlparams import config
from xmlparams.exceptions import MalformedDocument

logger = logging.getLogger(__name__)

# A sink or source can be a path or a binary file object
Target = Union[str, Path, BinaryIO]

# don't resolve entities or go out to the network when reading parameter files
_parser = etree.XMLParser(resolve_entities=False, no_network=True)


def parse(data: Union[bytes, str], source: Optional[str] = None) -> etree._ElementTree:
    """Parse a document held in memory, raising MalformedDocument if it isn't well-formed. The source
    is only used in the error message."""
    if isinstance(data, str):
        # lxml refuses str input with an encoding declaration, so go via bytes
        data = data.encode('utf-8')
    try:
        root = etree.fromstring(data, parser=_parser)
    except etree.XMLSyntaxError as e:
        raise MalformedDocument(str(e), source) from e
    return root.getroottree()


def read(source: Target) -> bytes:
    """Read the whole of a source (a path or binary file) into memory"""
    if isinstance(source, (str, Path)):
        with open(source, 'rb') as f:
            return f.read()
    return source.read()


def new_document(root_tag: str) -> etree._ElementTree:
    """Create a document consisting of just a root element"""
    return etree.ElementTree(etree.Element(root_tag))


def create_element(tag: str) -> etree._Element:
    """Create a new, empty element"""
    return etree.Element(tag)


def create_field(tag: str, text: str) -> etree._Element:
    """Create an element of the form <tag>text</tag>"""
    e = etree.Element(tag)
    e.text = text
    return e


def create_comment(text: str) -> etree._Comment:
    """Create a comment. XML doesn't allow "--" inside a comment, or a comment ending in "-", so we
    break up double hyphens and pad the text with spaces."""
    while '--' in text:
        text = text.replace('--', '- -')
    return etree.Comment(f" {text} ")


def is_valid_name(name) -> bool:
    """True if the string can be used as an element name"""
    if not isinstance(name, str):
        return False
    try:
        etree.Element(name)
    except ValueError:
        return False
    return True


def is_valid_text(text) -> bool:
    """True if the string can be the text of an element (no NULs or control characters other than
    tab, newline and carriage return)"""
    if not isinstance(text, str):
        return False
    try:
        etree.Element("x").text = text
    except ValueError:
        return False
    return True


def direct_children(parent: etree._Element, tag: Optional[str] = None) -> List[etree._Element]:
    """Return the child elements of a node, optionally only those with a given tag. Comments and
    processing instructions are skipped (their tag isn't a string)."""
    return [c for c in parent if isinstance(c.tag, str) and (tag is None or c.tag == tag)]


def first_direct_child(parent: etree._Element, tag: str) -> Optional[etree._Element]:
    """Return the first child element with the given tag, or None. Only direct children are
    considered - so in
    ```
    <root><name><last>Smith</last></name><last>Jones</last></root>
    ```
    first_direct_child(root, "last") is the "Jones" element.
    """
    for c in parent:
        if isinstance(c.tag, str) and c.tag == tag:
            return c
    return None


def get_content(node: etree._Element) -> Optional[str]:
    """Return the text of a node, or None if it has none"""
    return node.text


def _prepare(tree: etree._ElementTree, options: Optional[dict]) -> dict:
    """merge the options with those from config, indenting the tree if we are pretty printing."""
    opts = config.getOutputOptions()
    if options:
        opts.update(options)
    if opts['pretty_print']:
        etree.indent(tree, space=' ' * opts['indent'])
    return opts


def tostring(tree: etree._ElementTree, options: Optional[dict] = None) -> bytes:
    """Serialise a document to bytes, using the output options from the config (possibly
    overridden by those passed in)"""
    opts = _prepare(tree, options)
    return etree.tostring(tree, pretty_print=opts['pretty_print'], encoding=opts['encoding'],
                          xml_declaration=opts['xml_declaration'])


def write(tree: etree._ElementTree, sink: Target, options: Optional[dict] = None):
    """Write a document to a path or a binary file object."""
    data = tostring(tree, options)
    if isinstance(sink, (str, Path)):
        logger.debug(f"Writing {len(data)} bytes to {sink}")
        with open(sink, 'wb') as f:
            f.write(data)
    else:
        sink.write(data)
