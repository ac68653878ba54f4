import dataclasses
from typing import Any, Optional

from xmlparams import xmltree
from xmlparams.exceptions import InvalidKey, ParameterTypeMismatch
from xmlparams.serializers.base import Serializer


@dataclasses.dataclass(frozen=True, eq=False)
class ParamSpec:
    """This holds the information for a single parameter in a schema: its key, the serializer for
    its type, whether it's required, its default if not, and an optional description which is
    written as a comment when the parameters are saved.

    The default of a required parameter is never used - if a required parameter has no value
    that's an error, it doesn't quietly get the default."""
    key: str
    serializer: Serializer
    required: bool = True
    default: Any = None
    description: Optional[str] = None

    def __post_init__(self):
        """Check the spec is valid"""
        if self.key is None:
            raise ValueError("The parameter's key cannot be None")
        if not isinstance(self.serializer, Serializer):
            raise ValueError(f"Parameter {self.key}: {self.serializer} is not a Serializer")
        # the key has to work as an element name
        if not xmltree.is_valid_name(self.key):
            raise InvalidKey(self.key)
        if not self.required and self.default is not None and not self.serializer.check(self.default):
            raise ParameterTypeMismatch(self.key, self.serializer.type_name, type(self.default).__name__)

    def __eq__(self, other):
        """Two specs are equal if they have the same key, the very same serializer, and equal
        requirement, default and description. Defaults are compared by value."""
        if not isinstance(other, ParamSpec):
            return NotImplemented
        return (self.key == other.key and
                self.serializer is other.serializer and
                self.required == other.required and
                self.default == other.default and
                self.description == other.description)

    def __hash__(self):
        # defaults are left out, they are often lists
        return hash((self.key, id(self.serializer), self.required, self.description))

    def __str__(self):
        s = f"{self.key} [{self.serializer.type_name}]"
        if not self.required:
            s += f" (optional, default={self.serializer.describe(self.default)})"
        if self.description is not None:
            s += f" // {self.description}"
        return s
