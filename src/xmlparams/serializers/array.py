from typing import Any, List, Optional, Sequence

from lxml import etree

from xmlparams import xmltree
from xmlparams.serializers import simple
from xmlparams.serializers.base import Serializer
from xmlparams.serializers.simple import SimpleSerializer

# the tag used for each element of an array
ITEM_TAG = "item"


class ArraySerializer(Serializer):
    """Serializer for lists of values which are all handled by the same SimpleSerializer (the component).
    An array is written as an element with one <item> child per value, in order:
    ```
    <vals>
        <item>1</item>
        <item null="true"/>
        <item>3</item>
    </vals>
    ```
    Each item can be None, as shown. An empty list is an element with no children, which is
    not the same thing as None.

    Values are read back as lists, but tuples are accepted when writing or setting a parameter.
    """

    component: SimpleSerializer

    def __init__(self, component: SimpleSerializer, type_name: Optional[str] = None):
        if not isinstance(component, SimpleSerializer):
            raise TypeError(f"Array components must be handled by a SimpleSerializer, not {component}")
        super().__init__(list, type_name or f"{component.type_name}[]")
        self.component = component

    def check(self, value) -> bool:
        if not isinstance(value, (list, tuple)):
            return False
        return all(v is None or self.component.check(v) for v in value)

    def _non_null_to_node(self, tag: str, value: Sequence[Any]) -> etree._Element:
        root = xmltree.create_element(tag)
        for v in value:
            root.append(self.component.to_node(ITEM_TAG, v))
        return root

    def _node_to_non_null(self, node: etree._Element) -> List[Any]:
        return [self.component.from_node(e) for e in xmltree.direct_children(node, ITEM_TAG)]

    def serialize(self, values: Optional[Sequence[Any]]) -> Optional[List[str]]:
        """Convert a list of values into a list of strings using the component's serialize(),
        or None if the list is None."""
        if values is None:
            return None
        return [self.component.serialize(v) for v in values]

    def deserialize(self, strings: Sequence[str]) -> List[Any]:
        """Convert a list of strings into a list of values using the component's deserialize().
        The first failure raises ParseError."""
        return [self.component.deserialize(s) for s in strings]

    def describe(self, value) -> str:
        if value is None:
            return "null"
        return f"[{', '.join(self.serialize(value))}]"


BOOLEAN_ARRAY = ArraySerializer(simple.BOOLEAN)
BYTE_ARRAY = ArraySerializer(simple.BYTE)
CHARACTER_ARRAY = ArraySerializer(simple.CHARACTER)
FLOAT_ARRAY = ArraySerializer(simple.FLOAT)
INTEGER_ARRAY = ArraySerializer(simple.INTEGER)
LONG_ARRAY = ArraySerializer(simple.LONG)
SHORT_ARRAY = ArraySerializer(simple.SHORT)
STRING_ARRAY = ArraySerializer(simple.STRING)
