"""
Serializers for values simple enough to be written as a single string - numbers, booleans, strings
and so on. Subclass SimpleSerializer and implement deserialize() to handle a new type; serialize()
defaults to str(), which is usually enough. Ready-made instances for the common types are at the
bottom of the file.
"""
from abc import abstractmethod
from enum import Enum
from typing import Any, Optional, Type

from lxml import etree

from xmlparams import xmltree
from xmlparams.exceptions import ParseError
from xmlparams.serializers.base import Serializer


class SimpleSerializer(Serializer):
    """Base class for serializers which write a value as the text of an element"""

    def serialize(self, value: Any) -> str:
        """Convert a value into a string. None becomes "null", although it never reaches here when
        we are writing XML (it's handled by the null marker)."""
        if value is None:
            return "null"
        return str(value)

    @abstractmethod
    def deserialize(self, s: str) -> Any:
        """Convert a string into a value, raising ParseError if it can't be done"""
        raise NotImplementedError("deserialize not implemented")

    def _non_null_to_node(self, tag: str, value: Any) -> etree._Element:
        return xmltree.create_field(tag, self.serialize(value))

    def _node_to_non_null(self, node: etree._Element) -> Any:
        # an element with no text at all (<x/>) holds the empty string - that's what the empty string
        # is written as. Whether that's acceptable is up to deserialize().
        s = xmltree.get_content(node)
        return self.deserialize("" if s is None else s)

    def describe(self, value) -> str:
        return self.serialize(value)


class BooleanSerializer(SimpleSerializer):
    """Booleans are written as true/false, but will be read from any of the strings below, in any case."""
    TRUES = ("true", "t", "yes", "y", "1")
    FALSES = ("false", "f", "no", "n", "0")

    def __init__(self):
        super().__init__(bool)

    def serialize(self, value: Any) -> str:
        if value is None:
            return "null"
        return "true" if value else "false"

    def deserialize(self, s: str) -> bool:
        v = s.lower()
        if v in self.TRUES:
            return True
        if v in self.FALSES:
            return False
        raise ParseError(s, "a boolean", f"expected one of {','.join(self.TRUES + self.FALSES)}")


class IntegerSerializer(SimpleSerializer):
    """Integers, optionally restricted to a given number of bits (signed). Python ints are unbounded,
    so INTEGER has no limits, but BYTE, SHORT and LONG check that values fit."""

    bits: Optional[int]

    def __init__(self, type_name: str = "int", bits: Optional[int] = None):
        super().__init__(int, type_name)
        self.bits = bits

    def in_range(self, v: int) -> bool:
        if self.bits is None:
            return True
        limit = 1 << (self.bits - 1)
        return -limit <= v < limit

    def check(self, value) -> bool:
        return super().check(value) and self.in_range(value)

    def deserialize(self, s: str) -> int:
        try:
            v = int(s)
        except ValueError as e:
            raise ParseError(s, f"a {self.type_name}", "incorrect number format") from e
        if not self.in_range(v):
            raise ParseError(s, f"a {self.type_name}", f"out of range for {self.bits} bits")
        return v


class FloatSerializer(SimpleSerializer):
    def __init__(self):
        super().__init__(float)

    def serialize(self, value: Any) -> str:
        if value is None:
            return "null"
        # repr gives the shortest string which reads back to the same float
        return repr(float(value))

    def deserialize(self, s: str) -> float:
        try:
            return float(s)
        except ValueError as e:
            raise ParseError(s, "a float", "incorrect number format") from e


class CharacterSerializer(SimpleSerializer):
    """Single characters, which in Python are just strings of length one"""

    def __init__(self):
        super().__init__(str, "char")

    def check(self, value) -> bool:
        return isinstance(value, str) and len(value) == 1 and xmltree.is_valid_text(value)

    def deserialize(self, s: str) -> str:
        if len(s) != 1:
            raise ParseError(s, "a char", "must be exactly one character")
        return s


class StringSerializer(SimpleSerializer):
    def __init__(self):
        super().__init__(str)

    def check(self, value) -> bool:
        # strings lxml can't write as text aren't valid values
        return isinstance(value, str) and xmltree.is_valid_text(value)

    def deserialize(self, s: str) -> str:
        return s


class EnumSerializer(SimpleSerializer):
    """Serializer for any Enum subclass; members are written by name. Subclass SimpleSerializer
    instead if you want something else, like the values."""

    def __init__(self, enum_class: Type[Enum]):
        super().__init__(enum_class)

    def serialize(self, value: Any) -> str:
        if value is None:
            return "null"
        return value.name

    def deserialize(self, s: str) -> Enum:
        try:
            return self.value_type[s]
        except KeyError as e:
            names = ','.join(m.name for m in self.value_type)
            raise ParseError(s, f"a {self.type_name}", f"valid names are {names}") from e


#
# Serializers for the usual types
#

BOOLEAN = BooleanSerializer()
BYTE = IntegerSerializer("byte", 8)
SHORT = IntegerSerializer("short", 16)
INTEGER = IntegerSerializer()
LONG = IntegerSerializer("long", 64)
FLOAT = FloatSerializer()
CHARACTER = CharacterSerializer()
STRING = StringSerializer()
