"""
Serializers convert values of a single type to and from XML elements. There are three kinds: simple
(a value as text), array (a list of simple values) and object (named fields, each with its own
serializer). The commonly used ones are imported here.
"""

from xmlparams.serializers.base import Serializer, NULL_ATTRIBUTE
from xmlparams.serializers.simple import SimpleSerializer, EnumSerializer, \
    BOOLEAN, BYTE, SHORT, INTEGER, LONG, FLOAT, CHARACTER, STRING
from xmlparams.serializers.array import ArraySerializer, ITEM_TAG, \
    BOOLEAN_ARRAY, BYTE_ARRAY, CHARACTER_ARRAY, FLOAT_ARRAY, INTEGER_ARRAY, LONG_ARRAY, SHORT_ARRAY, STRING_ARRAY
from xmlparams.serializers.objects import ObjectSerializer, dataclass_serializer
from xmlparams.serializers.dates import DateSerializer, DurationSerializer, DateArraySerializer, \
    DurationArraySerializer
