import dataclasses
from configparser import ConfigParser, ExtendedInterpolation
from unittest.mock import patch

import pytest
from nsidc.cellviz import config, constants

# Unit tests for the 'config' module functions.
#
# The test boundary is the config module's interface with the filesystem, so
# the tests mock os.path.exists where a configuration file or shapes file
# would otherwise need to exist.


@pytest.fixture
def expected_keys():
    return set(
        [
            "shapes_file",
            "min_level",
            "max_level",
            "max_cells",
            "output_file",
            "tokens_file",
            "theme",
        ]
    )


@pytest.fixture
def cfg_parser():
    cp = ConfigParser(interpolation=ExtendedInterpolation())
    cp["Source"] = {"shapes_file": "/data/shapes.geojson"}
    cp["Covering"] = {"min_level": 2, "max_level": 14, "max_cells": 80}
    cp["Destination"] = {
        "output_file": "/output/here/covering.geojson",
        "tokens_file": "${output_file}.tokens",
    }
    cp["Settings"] = {"theme": "night"}
    return cp


def test_config_parser_without_filename():
    with pytest.raises(ValueError):
        config.config_parser_factory(None)


def test_config_parser_with_missing_file():
    with pytest.raises(ValueError, match="nowhere.ini"):
        config.config_parser_factory("nowhere.ini")


@patch("nsidc.cellviz.config.os.path.exists", return_value=True)
def test_config_parser_return_type(mock):
    result = config.config_parser_factory("foo.ini")
    assert isinstance(result, ConfigParser)


def test_config_from_config_parser(cfg_parser, expected_keys):
    cfg = config.configuration(cfg_parser, {})

    assert isinstance(cfg, config.Config)
    assert set(cfg.__dict__) == expected_keys
    assert cfg.shapes_file == "/data/shapes.geojson"
    assert cfg.min_level == 2
    assert cfg.max_level == 14
    assert cfg.max_cells == 80
    assert cfg.theme == "night"


def test_config_interpolates_values(cfg_parser):
    cfg = config.configuration(cfg_parser, {})
    assert cfg.tokens_file == "/output/here/covering.geojson.tokens"


def test_config_from_example_file():
    cfg = config.configuration(config.config_parser_factory("./example/cellviz.ini"), {})

    assert cfg.shapes_file == "./example/shapes.geojson"
    assert cfg.max_level == 12
    assert cfg.theme == "day"


def test_get_configuration_value(cfg_parser):
    result = config._get_configuration_value("Source", "shapes_file", str, cfg_parser, {})
    assert result == cfg_parser.get("Source", "shapes_file")


def test_get_configuration_value_reads_integers(cfg_parser):
    result = config._get_configuration_value("Covering", "max_cells", int, cfg_parser, {})
    assert result == 80


def test_get_configuration_value_with_override(cfg_parser):
    overrides = {"shapes_file": "foobar"}
    result = config._get_configuration_value("Source", "shapes_file", str, cfg_parser, overrides)
    assert result == overrides["shapes_file"]


def test_get_configuration_value_ignores_empty_override(cfg_parser):
    overrides = {"max_cells": None}
    result = config._get_configuration_value("Covering", "max_cells", int, cfg_parser, overrides)
    assert result == 80


def test_overrides_take_precedence(cfg_parser):
    cfg = config.configuration(cfg_parser, {"max_level": 20, "theme": "day", "output_file": None})

    assert cfg.max_level == 20
    assert cfg.theme == "day"
    assert cfg.output_file == "/output/here/covering.geojson"


def test_blank_tokens_file_is_none(cfg_parser):
    cfg_parser.set("Destination", "tokens_file", "")
    cfg = config.configuration(cfg_parser, {})
    assert cfg.tokens_file is None


def test_non_integer_level_raises(cfg_parser):
    cfg_parser.set("Covering", "max_level", "fine")
    with pytest.raises(ValueError, match="Unable to read the configuration file"):
        config.configuration(cfg_parser, {})


@pytest.mark.parametrize(
    "section,option,expected",
    [
        ("Covering", "min_level", constants.DEFAULT_MIN_LEVEL),
        ("Covering", "max_level", constants.DEFAULT_MAX_LEVEL),
        ("Covering", "max_cells", constants.DEFAULT_MAX_CELLS),
        ("Destination", "output_file", constants.DEFAULT_OUTPUT_FILE),
        ("Destination", "tokens_file", None),
        ("Settings", "theme", constants.DEFAULT_THEME),
    ],
)
def test_configuration_has_good_defaults(cfg_parser, section, option, expected):
    cfg_parser.remove_option(section, option)
    result = config.configuration(cfg_parser, {})
    result_dict = dataclasses.asdict(result)
    assert result_dict[option] == expected


def test_configuration_with_missing_sections():
    cp = ConfigParser(interpolation=ExtendedInterpolation())
    cp["Source"] = {"shapes_file": "shapes.geojson"}

    cfg = config.configuration(cp, {})

    assert cfg.max_cells == constants.DEFAULT_MAX_CELLS
    assert cfg.theme == constants.DEFAULT_THEME


@patch("nsidc.cellviz.config.os.path.exists", return_value=True)
def test_validate_with_valid_checks(mock, cfg_parser):
    cfg = config.configuration(cfg_parser, {})
    valid, errors = config.validate(cfg)

    assert valid
    assert errors == []


@patch("nsidc.cellviz.config.os.path.exists", return_value=False)
def test_validate_with_invalid_checks(mock, cfg_parser):
    cfg = config.configuration(cfg_parser, {"min_level": 12, "max_level": 31, "max_cells": 0, "theme": "dusk"})
    valid, errors = config.validate(cfg)

    assert not valid
    assert len(errors) == 4


@patch("nsidc.cellviz.config.os.path.exists", return_value=True)
def test_validate_max_level_below_min_level(mock, cfg_parser):
    cfg = config.configuration(cfg_parser, {"min_level": 10, "max_level": 5})
    valid, errors = config.validate(cfg)

    assert not valid
    assert errors == ["The max_level must be between min_level and 30."]
