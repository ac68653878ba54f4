import pytest
from lxml import etree

from xmlparams.exceptions import ParseError
from xmlparams.serializers import ArraySerializer, INTEGER_ARRAY, STRING_ARRAY, BOOLEAN_ARRAY, FLOAT_ARRAY, \
    BYTE_ARRAY, CHARACTER_ARRAY, INTEGER, STRING, ITEM_TAG
from xmlparams.serializers.objects import ObjectSerializer


def roundtrip(ser, value):
    node = etree.fromstring(etree.tostring(ser.to_node("x", value)))
    return ser.from_node(node)


def test_array_structure():
    node = INTEGER_ARRAY.to_node("vals", [1, None, 3])
    assert etree.tostring(node) == b'<vals><item>1</item><item null="true"/><item>3</item></vals>'


def test_array_roundtrip_preserves_order():
    assert roundtrip(INTEGER_ARRAY, [5, 3, 9, 1]) == [5, 3, 9, 1]
    assert roundtrip(STRING_ARRAY, ["z", "a", "", "m"]) == ["z", "a", "", "m"]
    assert roundtrip(BOOLEAN_ARRAY, [True, False, True]) == [True, False, True]
    assert roundtrip(FLOAT_ARRAY, [1.5, -0.25]) == [1.5, -0.25]


def test_empty_and_null_arrays():
    # an empty list has no items, but is not the same as null
    node = INTEGER_ARRAY.to_node("x", [])
    assert len(node) == 0
    assert node.get("null") is None
    assert roundtrip(INTEGER_ARRAY, []) == []
    assert roundtrip(INTEGER_ARRAY, None) is None


def test_null_items():
    assert roundtrip(STRING_ARRAY, [None, "a", None]) == [None, "a", None]


def test_tuples_written_as_lists():
    assert INTEGER_ARRAY.check((1, 2))
    assert roundtrip(INTEGER_ARRAY, (1, 2)) == [1, 2]


def test_array_check():
    assert INTEGER_ARRAY.check([1, 2, None])
    assert not INTEGER_ARRAY.check([1, "2"])
    assert not INTEGER_ARRAY.check([True])
    assert not INTEGER_ARRAY.check(1)
    assert not STRING_ARRAY.check("abc")    # a string is a sequence, but not a list
    assert not BYTE_ARRAY.check([1000])


def test_other_children_ignored():
    # only <item> children are items; comments and other tags are skipped
    node = etree.fromstring('<x><item>1</item><!-- two --><other>9</other><item>3</item></x>')
    assert INTEGER_ARRAY.from_node(node) == [1, 3]


def test_bad_item():
    node = etree.fromstring('<x><item>1</item><item>one</item></x>')
    with pytest.raises(ParseError):
        INTEGER_ARRAY.from_node(node)


def test_bulk_serialize():
    assert INTEGER_ARRAY.serialize([1, None, 3]) == ["1", "null", "3"]
    assert INTEGER_ARRAY.serialize(None) is None
    assert INTEGER_ARRAY.deserialize(["4", "5"]) == [4, 5]
    assert CHARACTER_ARRAY.deserialize(["a", "b"]) == ["a", "b"]
    with pytest.raises(ParseError):
        INTEGER_ARRAY.deserialize(["4", "x", "6"])


def test_describe():
    assert INTEGER_ARRAY.describe([1, 2]) == "[1, 2]"
    assert INTEGER_ARRAY.describe([]) == "[]"
    assert INTEGER_ARRAY.describe(None) == "null"


def test_components_must_be_simple():
    obj = ObjectSerializer(dict, {"a": INTEGER}, lambda d: d, lambda d: d)
    with pytest.raises(TypeError):
        ArraySerializer(obj)
    with pytest.raises(TypeError):
        ArraySerializer(INTEGER_ARRAY)
    custom = ArraySerializer(STRING, "names")
    assert custom.type_name == "names"
    assert ITEM_TAG == "item"
