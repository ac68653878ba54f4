from abc import ABC, abstractmethod
from typing import Any, Optional

from lxml import etree

from xmlparams import xmltree

# the attribute (and its value) which marks an element as representing None
NULL_ATTRIBUTE = "null"
NULL_TRUE = "true"


class Serializer(ABC):
    """This is the base class for serializers. A serializer converts between values of exactly one
    type and XML elements. There are three kinds, each of which is a subclass:

    * SimpleSerializer - the value is written as the text of the element, e.g. <n>12</n>
    * ArraySerializer - a list of values handled by a SimpleSerializer, written as a sequence of <item> children
    * ObjectSerializer - an object with named fields, each with its own serializer, written as a child per field

    None is handled here rather than in the subclasses: it's always written as an empty element with
    a null="true" attribute, and an element with that attribute always reads back as None. The subclasses
    only ever see values which aren't None.
    """

    value_type: type    # the type of the values this serializer handles
    _type_name: Optional[str]

    def __init__(self, value_type: type, type_name: Optional[str] = None):
        self.value_type = value_type
        self._type_name = type_name

    @property
    def type_name(self) -> str:
        """A readable name for the type handled, used in messages and documentation"""
        return self._type_name or self.value_type.__name__

    def check(self, value) -> bool:
        """True if the (non-None) value is of the type this serializer handles. Subclasses may
        refine this - CHARACTER wants strings of length 1, for example. Note that bool is a
        subclass of int in Python, but we don't want True to be a valid integer or float."""
        if isinstance(value, bool) and self.value_type in (int, float):
            return False
        return isinstance(value, self.value_type)

    def to_node(self, tag: str, value: Any) -> etree._Element:
        """Create an element called tag which represents the value, which may be None."""
        if value is None:
            e = xmltree.create_element(tag)
            e.set(NULL_ATTRIBUTE, NULL_TRUE)
            return e
        return self._non_null_to_node(tag, value)

    def from_node(self, node: etree._Element) -> Any:
        """Read the value represented by an element, which may be None. Raises ParseError if the
        element doesn't represent a value of our type."""
        if self.is_null_node(node):
            return None
        return self._node_to_non_null(node)

    @staticmethod
    def is_null_node(node: etree._Element) -> bool:
        return node.get(NULL_ATTRIBUTE) == NULL_TRUE

    @abstractmethod
    def _non_null_to_node(self, tag: str, value: Any) -> etree._Element:
        """Create an element for a value which is guaranteed not to be None"""
        raise NotImplementedError("_non_null_to_node not implemented")

    @abstractmethod
    def _node_to_non_null(self, node: etree._Element) -> Any:
        """Read a value from an element which doesn't have the null marker"""
        raise NotImplementedError("_node_to_non_null not implemented")

    def describe(self, value) -> str:
        """Return a readable string for a value of this type, used when printing schemas and
        parameters. The default is just str()."""
        return str(value)

    def __repr__(self):
        return f"{self.type_name} serializer"
