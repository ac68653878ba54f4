"""
This package contains the parameter schema and store.

A ParamsSchema is a principled, self-describing list of parameters - each with a key, a serializer
for its type, and a default if it is optional. The Parameters class holds values for a schema
(or for one of several versions of it) and reads and writes them as XML documents.
"""

from xmlparams.parameters.spec import ParamSpec
from xmlparams.parameters.schema import ParamsSchema, SchemaLease
from xmlparams.parameters.store import Parameters, VERSION_ATTRIBUTE
