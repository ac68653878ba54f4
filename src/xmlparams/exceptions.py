"""Exceptions raised by the serializers, schemas and parameter stores.

Everything here is a ParametersException, so callers can catch the whole family at once. Several
also inherit from the builtin exception a Python programmer would expect (KeyError for an unknown key,
TypeError for a wrong type, ValueError for unparseable text) so that generic handlers still work.
"""
from typing import Iterable, Optional


class ParametersException(Exception):
    """Base class for all exceptions in this package"""
    def __init__(self, message):
        super().__init__(message)


class MalformedDocument(ParametersException, ValueError):
    """The source is not well-formed XML, or its root has no usable version attribute. Not recoverable."""
    def __init__(self, message, source: Optional[str] = None):
        if source is not None:
            message = f"{source}: {message}"
        super().__init__(message)
        self.source = source


class UnknownKey(ParametersException, KeyError):
    """The key is not in the active schema - always a programming error."""
    def __init__(self, key):
        super().__init__(f"The key '{key}' is not in the parameters schema")
        self.key = key

    def __str__(self):
        # KeyError would otherwise show the repr of the message
        return self.args[0]


class MissingParameter(ParametersException):
    """A required parameter has no value when it is read or saved."""
    def __init__(self, key):
        super().__init__(f"The parameter '{key}' is required and missing")
        self.key = key


class ParameterTypeMismatch(ParametersException, TypeError):
    """A value's type disagrees with the type declared for (or requested from) a parameter."""
    def __init__(self, key, expected, actual):
        super().__init__(f"Parameter '{key}': expected {expected}, got {actual}")
        self.key = key
        self.expected = expected
        self.actual = actual


class ParseError(ParametersException, ValueError):
    """Some text doesn't have the lexical form of the type we are trying to read. We keep the text
    and a description of what we expected, so the caller can build their own message."""
    def __init__(self, text, expected, reason: Optional[str] = None):
        msg = f"Cannot parse '{text}' as {expected}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
        self.text = text
        self.expected = expected


class IncompleteFields(ParseError):
    """An object is missing some of the fields its serializer declares."""
    def __init__(self, type_name, missing: Iterable[str]):
        self.missing = sorted(missing)
        # skip ParseError's constructor, there is no text to quote
        ParametersException.__init__(self, f"Object of type {type_name} is missing fields: {', '.join(self.missing)}")
        self.text = None
        self.expected = type_name


class LockedSchema(ParametersException):
    """Thrown when we try to add to a schema which a Parameters object is using."""
    def __init__(self, name):
        super().__init__(f"Trying to modify schema '{name}', which is in use by at least one Parameters object")
        self.name = name


class InvalidKey(ParametersException, ValueError):
    """Keys are used as XML element names, so they have to be valid ones."""
    def __init__(self, key):
        super().__init__(f"The key '{key}' is not a valid XML name, thus not a valid parameter name")
        self.key = key


class SerializerUsageError(ParametersException, TypeError):
    """A text-level operation was used on a parameter whose serializer can't do it (e.g. setting
    a list of strings on a parameter which isn't an array)."""
    def __init__(self, key, needed, serializer):
        super().__init__(f"This operation needs a parameter defined with a {needed}, '{key}' uses a {serializer}")
        self.key = key


class SpecificationNotMet(ParametersException):
    """Raised by save and load when the data doesn't meet the schema. The underlying exception,
    if any, is chained as __cause__."""
    def __init__(self, message, key: Optional[str] = None):
        super().__init__(message)
        self.key = key
