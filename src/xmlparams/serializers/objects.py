"""
Serializers for user-defined objects. Rather than subclassing, you describe the object:

* which fields should be written, and the serializer for each;
* how to split an object into a dict of field values (decompose);
* how to build an object from such a dict (compose).

For example:
```
pointSerializer = ObjectSerializer(
    Point,
    {"x": FLOAT, "y": FLOAT},
    decompose=lambda p: {"x": p.x, "y": p.y},
    compose=lambda d: Point(d["x"], d["y"]))
```
Fields which aren't listed aren't written, and are ignored if they turn up in a file - think of
them as transient. For dataclasses, dataclass_serializer() will write the decompose and compose
functions for you.
"""
import dataclasses
from typing import Any, Callable, Dict, Mapping

from lxml import etree

from xmlparams import xmltree
from xmlparams.exceptions import IncompleteFields, ParseError
from xmlparams.serializers.base import Serializer


class ObjectSerializer(Serializer):
    fields: Dict[str, Serializer]   # declared fields in the order they are written
    decompose: Callable[[Any], Mapping[str, Any]]
    compose: Callable[[Dict[str, Any]], Any]

    def __init__(self, value_type: type,
                 fields: Mapping[str, Serializer],
                 decompose: Callable[[Any], Mapping[str, Any]],
                 compose: Callable[[Dict[str, Any]], Any],
                 type_name=None):
        super().__init__(value_type, type_name)
        for k, v in fields.items():
            if not isinstance(v, Serializer):
                raise TypeError(f"Field {k} of {self.type_name}: {v} is not a Serializer")
            if not xmltree.is_valid_name(k):
                raise ValueError(f"Field {k} of {self.type_name} is not a valid XML name")
        self.fields = dict(fields)
        self.decompose = decompose
        self.compose = compose

    def _check_complete(self, values: Mapping[str, Any]):
        missing = [k for k in self.fields if k not in values]
        if missing:
            raise IncompleteFields(self.type_name, missing)

    def check(self, value) -> bool:
        """The value must be of our type, and each declared field must be None or valid for its serializer"""
        if not super().check(value):
            return False
        values = self.decompose(value)
        for k, ser in self.fields.items():
            if k not in values:
                return False
            v = values[k]
            if v is not None and not ser.check(v):
                return False
        return True

    def _non_null_to_node(self, tag: str, value: Any) -> etree._Element:
        root = xmltree.create_element(tag)
        values = self.decompose(value)
        self._check_complete(values)
        for k, ser in self.fields.items():
            root.append(ser.to_node(k, values[k]))
        return root

    def _node_to_non_null(self, node: etree._Element) -> Any:
        values = {}
        for child in xmltree.direct_children(node):
            ser = self.fields.get(child.tag)
            if ser is not None:    # anything undeclared is skipped
                values[child.tag] = ser.from_node(child)
        self._check_complete(values)
        try:
            return self.compose(values)
        except ParseError:
            raise
        except Exception as e:
            # the fields were fine but the object rejected them
            raise ParseError(f"<{node.tag}>", f"a {self.type_name}", str(e)) from e


def dataclass_serializer(cls, type_name=None, **fields: Serializer) -> ObjectSerializer:
    """Build an ObjectSerializer for a dataclass. The keyword arguments give the serializers for
    the fields to be written, in order; any other fields must have defaults because they'll be
    left to those when the object is rebuilt."""
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls} is not a dataclass")
    names = {f.name for f in dataclasses.fields(cls)}
    for k in fields:
        if k not in names:
            raise ValueError(f"{cls.__name__} has no field {k}")

    def decompose(obj):
        return {k: getattr(obj, k) for k in fields}

    def compose(values):
        return cls(**values)

    return ObjectSerializer(cls, fields, decompose, compose, type_name=type_name)
