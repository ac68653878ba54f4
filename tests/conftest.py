"""
Assorted test fixtures, mainly schemas and the types used in them
"""
import dataclasses
from enum import Enum
from typing import List, Optional

import pytest

from xmlparams.parameters import ParamsSchema
from xmlparams.serializers import BOOLEAN, INTEGER_ARRAY, STRING, STRING_ARRAY, INTEGER, FLOAT, \
    dataclass_serializer


@dataclasses.dataclass
class MyObject:
    b: bool
    s: Optional[str]
    array: Optional[List[int]]
    transient: int = 0      # not serialized


class Colour(Enum):
    RED = 1
    GREEN = 2
    BLUE = 3


MY_OBJECT = dataclass_serializer(MyObject, "MyObject", b=BOOLEAN, s=STRING, array=INTEGER_ARRAY)


@pytest.fixture
def simple_schema():
    """The schema used in the flag/vals example: a required boolean and an optional list of ints"""
    s = ParamsSchema(1, "config")
    s.add_param("flag", BOOLEAN, "a flag")
    s.add_optional_param("vals", INTEGER_ARRAY, [1, 2], "some values")
    return s


@pytest.fixture
def mixed_schema():
    """A schema with one of most kinds of parameter"""
    s = ParamsSchema(2, "mixed")
    s.add_param("name", STRING, "the name")
    s.add_param("count", INTEGER)
    s.add_optional_param("ratio", FLOAT, 0.5, "a ratio")
    s.add_optional_param("tags", STRING_ARRAY, ["a", "b"])
    s.add_optional_param("obj", MY_OBJECT, None, "an object")
    return s
