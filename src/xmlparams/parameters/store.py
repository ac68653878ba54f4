"""
The Parameters class holds the values of a set of parameters described by a schema, and can save them to
and load them from XML files.

The workflow is as follows:

* build one or more versions of a ParamsSchema
* create a Parameters object from them (it will use the newest version)
* either set values or load them from a file - loading switches to whichever schema version the file
  was written with
* get values, and perhaps save them

Every value stored has been checked against the serializer for its key, so what comes out of get() is
always of the declared type (or None).
"""
import copy
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from jinja2 import Template
from lxml import etree

from xmlparams import xmltree
from xmlparams.exceptions import MissingParameter, ParameterTypeMismatch, ParseError, SerializerUsageError, \
    SpecificationNotMet, MalformedDocument
from xmlparams.parameters.schema import ParamsSchema, SchemaLease
from xmlparams.parameters.spec import ParamSpec
from xmlparams.serializers import simple
from xmlparams.serializers.array import ArraySerializer
from xmlparams.serializers.base import Serializer
from xmlparams.serializers.simple import SimpleSerializer

logger = logging.getLogger(__name__)

# the attribute of the root element which holds the schema version
VERSION_ATTRIBUTE = "version"


class Parameters:
    schema_versions: Dict[int, ParamsSchema]    # in order of version
    schema: ParamsSchema                        # the active schema
    _values: Dict[str, Any]
    _leases: List[SchemaLease]

    def __init__(self, *schemas: ParamsSchema):
        """Create an empty set of parameters which can use any of the schemas given, which must all have
        different versions. The newest version is used until something is loaded. Each schema is locked
        against changes until dispose() is called (or the with-block ends, if used as a context manager)."""
        if not schemas:
            raise ValueError("At least one schema must be given")
        versions = {}
        for s in schemas:
            if s.version in versions:
                raise ValueError(f"Cannot specify 2 schemas for the same version ({s.version})")
            versions[s.version] = s
        self.schema_versions = {v: versions[v] for v in sorted(versions)}
        self.schema = self.schema_versions[max(versions)]
        self._values = {}
        self._leases = [s.lease() for s in self.schema_versions.values()]

    @classmethod
    def from_file(cls, source: xmltree.Target, *schemas: ParamsSchema,
                  template_data: Optional[Dict[str, Any]] = None) -> 'Parameters':
        """Create a Parameters object from some schemas and load a file into it"""
        p = cls(*schemas)
        try:
            p.load(source, template_data)
        except Exception:
            p.dispose()
            raise
        return p

    def dispose(self):
        """Release the schemas so they can be modified again. Don't use the object after this."""
        for lease in self._leases:
            lease.release()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.dispose()

    def is_consistent_with(self, other: ParamsSchema) -> bool:
        """True if this object can safely be used as if it had been created with the other schema"""
        return self.schema.is_superset_of(other)

    def _spec(self, key) -> ParamSpec:
        return self.schema.spec(key)

    #
    # values
    #

    def get(self, key: str, serializer: Optional[Serializer] = None) -> Any:
        """Return the value of a parameter. If it hasn't been set and has a default, the default
        is stored and returned. If a serializer is given, the value must be of its type.
        Raises UnknownKey, MissingParameter or ParameterTypeMismatch."""
        spec = self._spec(key)
        if key not in self._values:
            if spec.required:
                raise MissingParameter(key)
            logger.debug(f"Using default for {key}")
            # copy it, it might be mutable and it belongs to the schema
            self._values[key] = copy.copy(spec.default)
        value = self._values[key]
        if serializer is not None and value is not None and not serializer.check(value):
            raise ParameterTypeMismatch(key, serializer.type_name, spec.serializer.type_name)
        return value

    def __getitem__(self, key):
        return self.get(key)

    def set(self, key: str, value: Any) -> Any:
        """Set the value of a parameter, returning the previous value (None if there wasn't one).
        Raises UnknownKey if the key isn't in the schema and ParameterTypeMismatch if the value
        isn't of the right type; None is always allowed."""
        spec = self._spec(key)
        if value is not None and not spec.serializer.check(value):
            raise ParameterTypeMismatch(key, spec.serializer.type_name, type(value).__name__)
        old = self._values.get(key)
        self._values[key] = value
        return old

    def __setitem__(self, key, value):
        self.set(key, value)

    def is_set(self, key: str) -> bool:
        """True if the parameter has a value (which may be a default that has been read)"""
        self._spec(key)
        return key in self._values

    def deserialize_and_set(self, key: str, serialized: Union[str, Sequence[str]]) -> Any:
        """Set a parameter from its string form: a single string for a parameter handled by a
        SimpleSerializer, a list of strings for one handled by an ArraySerializer. Returns the
        previous value. Raises ParseError if the strings can't be read."""
        ser = self._spec(key).serializer
        if isinstance(serialized, str):
            if not isinstance(ser, SimpleSerializer):
                raise SerializerUsageError(key, "SimpleSerializer", ser)
            value = ser.deserialize(serialized)
        else:
            if not isinstance(ser, ArraySerializer):
                raise SerializerUsageError(key, "ArraySerializer", ser)
            value = ser.deserialize(serialized)
        return self.set(key, value)

    def get_serialized(self, key: str) -> str:
        """Return the string form of a parameter handled by a SimpleSerializer"""
        ser = self._spec(key).serializer
        if not isinstance(ser, SimpleSerializer):
            raise SerializerUsageError(key, "SimpleSerializer", ser)
        return ser.serialize(self.get(key))

    def get_serialized_array(self, key: str) -> Optional[List[str]]:
        """Return the string forms of a parameter handled by an ArraySerializer (None if the
        value is None)"""
        ser = self._spec(key).serializer
        if not isinstance(ser, ArraySerializer):
            raise SerializerUsageError(key, "ArraySerializer", ser)
        return ser.serialize(self.get(key))

    # typed getters for the common types; all can raise ParameterTypeMismatch

    def get_boolean(self, key: str) -> Optional[bool]:
        return self.get(key, simple.BOOLEAN)

    def get_string(self, key: str) -> Optional[str]:
        return self.get(key, simple.STRING)

    def get_character(self, key: str) -> Optional[str]:
        return self.get(key, simple.CHARACTER)

    def get_integer(self, key: str) -> Optional[int]:
        return self.get(key, simple.INTEGER)

    def get_byte(self, key: str) -> Optional[int]:
        return self.get(key, simple.BYTE)

    def get_short(self, key: str) -> Optional[int]:
        return self.get(key, simple.SHORT)

    def get_long(self, key: str) -> Optional[int]:
        return self.get(key, simple.LONG)

    def get_float(self, key: str) -> Optional[float]:
        return self.get(key, simple.FLOAT)

    #
    # saving
    #

    def to_tree(self) -> etree._ElementTree:
        """Build the XML document for the parameters. Raises SpecificationNotMet if a required
        parameter is missing."""
        tree = xmltree.new_document(self.schema.name)
        root = tree.getroot()
        root.set(VERSION_ATTRIBUTE, str(self.schema.version))
        for spec in self.schema:
            if spec.description is not None:
                root.append(xmltree.create_comment(spec.description))
            try:
                value = self.get(spec.key)
            except MissingParameter as e:
                raise SpecificationNotMet(str(e), spec.key) from e
            root.append(spec.serializer.to_node(spec.key, value))
        return tree

    def save(self, sink: xmltree.Target, options: Optional[dict] = None):
        """Save the parameters to a path or binary file. The whole document is built before anything
        is written, so if a required parameter is missing (SpecificationNotMet) nothing is."""
        tree = self.to_tree()
        logger.info(f"Saving parameters {self.schema.name} v{self.schema.version} to {sink}")
        xmltree.write(tree, sink, options)

    def dumps(self, options: Optional[dict] = None) -> bytes:
        """Return the XML document for the parameters as bytes"""
        return xmltree.tostring(self.to_tree(), options)

    #
    # loading
    #

    def load(self, source: xmltree.Target, template_data: Optional[Dict[str, Any]] = None) -> 'Parameters':
        """Load parameters from a path or binary file, returns self for fluent use. If template_data
        is given, the file is run through Jinja2 templating with that data before it is parsed."""
        name = str(source) if isinstance(source, (str, Path)) else getattr(source, 'name', '(stream)')
        logger.info(f"Loading parameters from {name}")
        return self.parse(xmltree.read(source), template_data, source_name=name)

    def parse(self, data: Union[bytes, str], template_data: Optional[Dict[str, Any]] = None,
              source_name: Optional[str] = None) -> 'Parameters':
        """Load parameters from a document in memory, returns self for fluent use. The document is
        read with the schema whose version it carries, which becomes the active schema. If anything
        goes wrong the object is left as it was."""
        if template_data is not None:
            if isinstance(data, bytes):
                data = data.decode('utf-8')
            data = Template(data).render(template_data)

        root = xmltree.parse(data, source_name).getroot()
        version_str = root.get(VERSION_ATTRIBUTE)
        if version_str is None:
            raise MalformedDocument(f"No version specified (the root needs a '{VERSION_ATTRIBUTE}' attribute)",
                                    source_name)
        # ASCII digits only
        if not re.fullmatch(r'[0-9]+', version_str):
            raise MalformedDocument(f"Invalid version '{version_str}'", source_name)
        version = int(version_str)
        schema = self.schema_versions.get(version)
        if schema is None:
            raise SpecificationNotMet(f"No schema available to read version {version} of the parameters")
        logger.debug(f"Using schema {schema.name} version {version}")

        values = self._values_for(schema)
        for spec in schema:
            node = xmltree.first_direct_child(root, spec.key)
            if node is None:
                if spec.required:
                    raise SpecificationNotMet(f"The parameter '{spec.key}' is required and missing", spec.key)
                continue
            try:
                value = spec.serializer.from_node(node)
            except ParseError as e:
                raise SpecificationNotMet(f"The parameter '{spec.key}' does not have the format of "
                                          f"its type ({spec.serializer.type_name})", spec.key) from e
            if value is not None and not spec.serializer.check(value):
                e = ParameterTypeMismatch(spec.key, spec.serializer.type_name, type(value).__name__)
                raise SpecificationNotMet(f"The parameter '{spec.key}' was read as the wrong type", spec.key) from e
            values[spec.key] = value

        self.schema = schema
        self._values = values
        return self

    def _values_for(self, schema: ParamsSchema) -> Dict[str, Any]:
        """Return the current values which are still valid under another schema"""
        values = {}
        for k, v in self._values.items():
            if k in schema and (v is None or schema.specs[k].serializer.check(v)):
                values[k] = v
            else:
                logger.warning(f"Dropping value of {k}, which is not valid in schema version {schema.version}")
        return values

    #
    # display
    #

    def _describe(self, key):
        # don't use get() here, printing shouldn't fill in defaults
        spec = self._spec(key)
        if key in self._values:
            return spec.serializer.describe(self._values[key])
        if spec.required:
            return "(missing)"
        return f"{spec.serializer.describe(spec.default)} (default)"

    def __str__(self):
        return "\n".join(f"{k}: {self._describe(k)}" for k in self.schema.keys)

    def __repr__(self):
        return f"Parameters({self.schema.name} v{self.schema.version})"
