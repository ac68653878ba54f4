import pytest

import xmlparams
from xmlparams import config
from xmlparams.assets import getAssetAsString
from xmlparams.parameters import ParamsSchema, Parameters
from xmlparams.serializers import BOOLEAN, DateSerializer


@pytest.fixture
def override():
    """Lets a test change config values; they are put back afterwards"""
    saved = {s: dict(config.data[s]) for s in config.data.sections()}
    yield config.data
    for s, vals in saved.items():
        config.data[s] = vals


def test_defaults_asset():
    s = getAssetAsString("defaults.ini")
    assert "[Output]" in s
    with pytest.raises(OSError):
        getAssetAsString("nonexistent.ini")


def test_str2bool():
    assert config.str2bool("Yes")
    assert config.str2bool("on")
    assert not config.str2bool("off")
    assert not config.str2bool("")


def test_version():
    assert xmlparams.__version__
    assert xmlparams.__fullversion__.startswith(xmlparams.__version__)


def test_schema_name(override):
    override['Default']['schema_name'] = 'settings'
    assert ParamsSchema(1).name == 'settings'
    # an explicit name always wins
    assert ParamsSchema(1, 'mine').name == 'mine'


def test_output_options(override):
    override['Output']['pretty_print'] = 'no'
    override['Output']['xml_declaration'] = 'no'
    s = ParamsSchema(1, "c")
    s.add_param("flag", BOOLEAN)
    with Parameters(s) as p:
        p.set("flag", True)
        assert p.dumps() == b'<c version="1"><flag>true</flag></c>'
        # options passed in override the config
        assert p.dumps({'xml_declaration': True}).startswith(b"<?xml")


def test_indent(override):
    override['Output']['indent'] = '2'
    override['Output']['xml_declaration'] = 'no'
    s = ParamsSchema(1, "c")
    s.add_param("flag", BOOLEAN)
    with Parameters(s) as p:
        p.set("flag", True)
        assert p.dumps() == b'<c version="1">\n  <flag>true</flag>\n</c>\n'


def test_date_format(override):
    assert DateSerializer().fmt is None
    override['Dates']['date_format'] = '%Y/%m/%d'
    assert config.getDateFormat() == '%Y/%m/%d'
    assert DateSerializer().fmt == '%Y/%m/%d'
    assert config.getDurationFormat() == '%H:%M:%S'


def test_logging_left_to_application():
    import importlib
    import logging

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    importlib.reload(xmlparams)
    # importing the package doesn't touch the root logger
    assert root.handlers == handlers
    assert root.level == level
    assert logging.getLogger('xmlparams').handlers == []
