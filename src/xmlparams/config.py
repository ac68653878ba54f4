"""Configuration data. This is read from the defaults.ini asset, and then overridden by site.cfg in the
current directory, the user's ~/.xmlparams.ini and finally any file named in the XMLPARAMS_INI
environment variable. The accessors below are what the rest of the package uses."""
import configparser
import logging
import os

from xmlparams.assets import getAssetAsFile

logger = logging.getLogger(__name__)

USER_CONFIG = os.path.expanduser('~/.xmlparams.ini')

# create the config parser. No interpolation, because the date formats are full of % signs.
data = configparser.ConfigParser(interpolation=None)
data.optionxform = str  # make it case sensitive

# load the defaults.ini file first
data.read_file(getAssetAsFile('defaults.ini'))
# and then the site.cfg and user's .xmlparams.ini file, overriding the defaults
_paths = ['site.cfg', USER_CONFIG]
if 'XMLPARAMS_INI' in os.environ:
    _paths.append(os.environ['XMLPARAMS_INI'])
_read = data.read(_paths, encoding='utf_8')
logger.debug(f"Configuration read from defaults and {_read}")


def str2bool(s):
    """intelligently (heh) convert a string to a bool - for use in config data"""
    return s.lower() in ["yes", "1", "y", "true", "t", "on"]


def getDefaultSchemaName() -> str:
    """The root element name used for schemas which aren't given a name"""
    return data['Default'].get('schema_name', 'parameters')


def getOutputOptions() -> dict:
    """Return the options used when writing XML, as a dict with keys pretty_print, indent, encoding
    and xml_declaration"""
    sec = data['Output']
    return {
        'pretty_print': str2bool(sec.get('pretty_print', 'yes')),
        'indent': int(sec.get('indent', '4')),
        'encoding': sec.get('encoding', 'UTF-8'),
        'xml_declaration': str2bool(sec.get('xml_declaration', 'yes'))
    }


def getDateFormat():
    """The strftime format used by date serializers which aren't given one, or None for ISO-8601"""
    fmt = data['Dates'].get('date_format', '').strip()
    return fmt or None


def getDurationFormat() -> str:
    """The format used by duration serializers which aren't given one"""
    return data['Dates'].get('duration_format', '%H:%M:%S').strip() or '%H:%M:%S'


def save():
    """Write the current configuration into the user's config file"""
    with open(USER_CONFIG, 'w') as f:
        data.write(f)
