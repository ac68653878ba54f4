import logging
import pkgutil

# the application using the package configures logging, we just log to our own loggers
logger = logging.getLogger(__name__)

# get version data, which consists of something like
#   0.0.0  ISO-DATE CODE NAME
tmp = pkgutil.get_data('xmlparams', 'VERSION.txt')
if tmp is None:
    raise ValueError('cannot find VERSION.txt')

# this string gets turned into xmlparams.__fullversion__, while xmlparams.__version__
# is just the number part (0.0.0 in the example).

__fullversion__ = tmp.decode('utf-8').strip()
__version__ = __fullversion__.split(maxsplit=1)[0]

from xmlparams.exceptions import ParametersException, MalformedDocument, UnknownKey, MissingParameter, \
    ParameterTypeMismatch, ParseError, IncompleteFields, LockedSchema, InvalidKey, SerializerUsageError, \
    SpecificationNotMet
from xmlparams.serializers import *
from xmlparams.parameters import ParamSpec, ParamsSchema, SchemaLease, Parameters
