import pytest
from lxml import etree

from conftest import Colour
from xmlparams import xmltree
from xmlparams.exceptions import ParseError
from xmlparams.serializers import BOOLEAN, BYTE, SHORT, INTEGER, LONG, FLOAT, CHARACTER, STRING, EnumSerializer, \
    STRING_ARRAY, NULL_ATTRIBUTE


def roundtrip(ser, value):
    """Write a value to an element and read it back, via text so we know it survives being saved"""
    node = ser.to_node("x", value)
    node = etree.fromstring(etree.tostring(node))
    return ser.from_node(node)


def test_scalar_roundtrips():
    assert roundtrip(BOOLEAN, True) is True
    assert roundtrip(BOOLEAN, False) is False
    assert roundtrip(INTEGER, 42) == 42
    assert roundtrip(INTEGER, -7) == -7
    assert roundtrip(INTEGER, 10 ** 30) == 10 ** 30
    assert roundtrip(FLOAT, 3.14) == 3.14
    assert roundtrip(FLOAT, 0.1 + 0.2) == 0.1 + 0.2
    assert roundtrip(CHARACTER, 'q') == 'q'
    assert roundtrip(STRING, "hello world") == "hello world"
    assert roundtrip(STRING, "<&>\"'") == "<&>\"'"


def test_empty_string_is_not_null():
    node = STRING.to_node("x", "")
    assert node.get(NULL_ATTRIBUTE) is None
    assert roundtrip(STRING, "") == ""


def test_null_roundtrips():
    for ser in (BOOLEAN, BYTE, SHORT, INTEGER, LONG, FLOAT, CHARACTER, STRING, EnumSerializer(Colour)):
        node = ser.to_node("x", None)
        assert node.get(NULL_ATTRIBUTE) == "true"
        assert node.text is None
        assert len(node) == 0
        assert roundtrip(ser, None) is None


def test_null_marker_wins_over_content():
    # if the null marker is there, the content is ignored
    node = etree.fromstring('<x null="true">12</x>')
    assert INTEGER.from_node(node) is None
    # and null="false" isn't the marker at all
    node = etree.fromstring('<x null="false">12</x>')
    assert INTEGER.from_node(node) == 12


def test_boolean_vocabulary():
    for s in ("true", "TRUE", "True", "t", "T", "yes", "YES", "y", "1"):
        assert BOOLEAN.deserialize(s) is True
    for s in ("false", "FALSE", "f", "no", "No", "n", "N", "0"):
        assert BOOLEAN.deserialize(s) is False
    for s in ("", "maybe", "2", "on", " true"):
        with pytest.raises(ParseError):
            BOOLEAN.deserialize(s)
    assert BOOLEAN.serialize(True) == "true"
    assert BOOLEAN.serialize(False) == "false"


def test_parse_errors():
    with pytest.raises(ParseError) as e:
        INTEGER.deserialize("twelve")
    assert e.value.text == "twelve"
    assert "int" in e.value.expected

    with pytest.raises(ParseError):
        FLOAT.deserialize("")
    with pytest.raises(ParseError):
        CHARACTER.deserialize("ab")
    with pytest.raises(ParseError):
        CHARACTER.deserialize("")

    # ParseError is also a ValueError
    with pytest.raises(ValueError):
        INTEGER.deserialize("1.5")


def test_parse_error_from_node():
    node = etree.fromstring('<x>abc</x>')
    with pytest.raises(ParseError):
        INTEGER.from_node(node)
    # an empty element holds an empty string, which isn't an int
    node = etree.fromstring('<x/>')
    with pytest.raises(ParseError):
        INTEGER.from_node(node)
    assert STRING.from_node(node) == ""


def test_bounded_integers():
    assert BYTE.deserialize("127") == 127
    assert BYTE.deserialize("-128") == -128
    with pytest.raises(ParseError):
        BYTE.deserialize("128")
    with pytest.raises(ParseError):
        SHORT.deserialize("32768")
    assert SHORT.deserialize("-32768") == -32768
    assert LONG.deserialize(str(2 ** 63 - 1)) == 2 ** 63 - 1
    with pytest.raises(ParseError):
        LONG.deserialize(str(2 ** 63))

    assert BYTE.check(100)
    assert not BYTE.check(300)
    assert INTEGER.check(2 ** 100)


def test_check():
    assert INTEGER.check(1)
    assert not INTEGER.check(True)     # bools aren't ints here
    assert not INTEGER.check(1.0)
    assert FLOAT.check(1.0)
    assert not FLOAT.check(1)
    assert not FLOAT.check(False)
    assert BOOLEAN.check(False)
    assert not BOOLEAN.check(0)
    assert CHARACTER.check('a')
    assert not CHARACTER.check('ab')
    assert STRING.check("")
    assert not STRING.check(None)


def test_float_format():
    assert FLOAT.serialize(0.1) == "0.1"
    assert FLOAT.serialize(1e100) == "1e+100"
    assert FLOAT.deserialize("1e-3") == 0.001
    assert FLOAT.deserialize("-2") == -2.0


def test_enum():
    ser = EnumSerializer(Colour)
    assert ser.type_name == "Colour"
    assert ser.serialize(Colour.GREEN) == "GREEN"
    assert ser.deserialize("BLUE") is Colour.BLUE
    assert roundtrip(ser, Colour.RED) is Colour.RED
    assert ser.check(Colour.RED)
    assert not ser.check(1)
    with pytest.raises(ParseError):
        ser.deserialize("PURPLE")


def test_type_names():
    assert BOOLEAN.type_name == "bool"
    assert INTEGER.type_name == "int"
    assert BYTE.type_name == "byte"
    assert FLOAT.type_name == "float"
    assert CHARACTER.type_name == "char"
    assert STRING.type_name == "str"
    assert STRING_ARRAY.type_name == "str[]"


def test_to_node_text():
    node = INTEGER.to_node("count", 12)
    assert node.tag == "count"
    assert xmltree.get_content(node) == "12"
    assert etree.tostring(node) == b"<count>12</count>"


def test_strings_must_be_xml_text():
    # control characters (other than tab, newline and CR) and NULs can't be written as XML text
    assert STRING.check("tab\tnewline\ncr\r")
    assert STRING.check("unicode é\U0001F600")
    assert not STRING.check("a\x01b")
    assert not STRING.check("nul\x00")
    assert not STRING_ARRAY.check(["ok", "bad\x1f"])
    assert CHARACTER.check("\t")
    assert not CHARACTER.check("\x07")
    assert xmltree.is_valid_text("")
    assert not xmltree.is_valid_text(None)
