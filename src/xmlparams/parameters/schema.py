import logging
from typing import Any, Dict, Iterator, List, Optional

from xmlparams import config
from xmlparams.exceptions import LockedSchema, UnknownKey
from xmlparams.parameters.spec import ParamSpec
from xmlparams.serializers.base import Serializer

logger = logging.getLogger(__name__)


class SchemaLease:
    """Returned by ParamsSchema.lease(). While a lease is held the schema can't be changed. Release it
    with release(), or use it as a context manager. Releasing twice does nothing."""

    def __init__(self, schema: 'ParamsSchema'):
        self.schema = schema
        self.released = False

    def release(self):
        if not self.released:
            self.released = True
            self.schema._unlock()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()

    def __repr__(self):
        return f"SchemaLease({self.schema.name} v{self.schema.version}{', released' if self.released else ''})"


class ParamsSchema:
    """Describes the parameters a program needs: each has a unique key, a serializer for its type,
    and is either required or optional with a default. Parameters may also have a short description.

    The schema has a name, which becomes the root element of saved files, and a version number,
    which is written to the file so that the right schema can be chosen when it is read back - a
    Parameters object can be given several versions of a schema.

    Schemas are built up with add_param(), add_optional_param() and add_all(). Once a Parameters
    object is using a schema it holds a lease on it, and the schema can't be changed until every
    such lease has been released.
    """

    name: str
    version: int
    keys: List[str]     # the keys in the order they were added
    specs: Dict[str, ParamSpec]
    _lock_count: int

    def __init__(self, version: int, name: Optional[str] = None):
        if isinstance(version, bool) or not isinstance(version, int) or version < 0:
            raise ValueError(f"Schema version must be a non-negative integer, not {version}")
        self.name = name if name is not None else config.getDefaultSchemaName()
        self.version = version
        self.keys = []
        self.specs = {}
        self._lock_count = 0

    @property
    def locked(self) -> bool:
        return self._lock_count > 0

    def lease(self) -> SchemaLease:
        """Lock the schema against changes until the returned lease is released"""
        self._lock_count += 1
        return SchemaLease(self)

    def _unlock(self):
        self._lock_count -= 1

    def _check_lock(self):
        if self.locked:
            raise LockedSchema(self.name)

    def add(self, spec: ParamSpec):
        """Add a spec to the schema. Raises LockedSchema if the schema is in use, and ValueError if
        the spec is None or the key already exists."""
        self._check_lock()
        if spec is None:
            raise ValueError("A parameter specification cannot be None")
        if spec.key in self.specs:
            raise ValueError(f"A parameter with the key '{spec.key}' already exists in schema {self.name}")
        self.specs[spec.key] = spec
        self.keys.append(spec.key)

    def add_param(self, key: str, serializer: Serializer, description: Optional[str] = None):
        """Add a required parameter"""
        self.add(ParamSpec(key, serializer, True, None, description))

    def add_optional_param(self, key: str, serializer: Serializer, default: Any, description: Optional[str] = None):
        """Add an optional parameter, which takes the default value if it isn't set"""
        self.add(ParamSpec(key, serializer, False, default, description))

    def add_all(self, other: 'ParamsSchema'):
        """Add all the specs in another schema, in its order. This is all or nothing: if any key is
        already present nothing is added."""
        self._check_lock()
        if other is None:
            raise ValueError("The specified schema cannot be None")
        clashes = [k for k in other.keys if k in self.specs]
        if clashes:
            raise ValueError(f"Schema {self.name} already contains the keys {','.join(clashes)}")
        for k in other.keys:
            self.add(other.specs[k])

    def is_superset_of(self, other: 'ParamsSchema') -> bool:
        """True if every spec in the other schema is also in this one, and equal."""
        if other is None:
            raise ValueError("The specified schema cannot be None")
        for k, spec in other.specs.items():
            if self.specs.get(k) != spec:
                return False
        return True

    def spec(self, key: str) -> ParamSpec:
        """Return the spec for a key - raises UnknownKey on failure"""
        try:
            return self.specs[key]
        except KeyError as e:
            raise UnknownKey(key) from e

    def __contains__(self, key):
        return key in self.specs

    def __iter__(self) -> Iterator[ParamSpec]:
        return (self.specs[k] for k in self.keys)

    def __len__(self):
        return len(self.keys)

    def __str__(self):
        lines = [f"Schema '{self.name}' (version {self.version}):"]
        lines += [str(self.specs[k]) for k in self.keys]
        return "\n".join(lines)

    def __repr__(self):
        return f"ParamsSchema({self.name}, version={self.version}, {len(self)} params)"
