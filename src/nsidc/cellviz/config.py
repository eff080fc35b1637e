import configparser
import dataclasses
import os.path
from typing import Optional

from nsidc.cellviz import constants


@dataclasses.dataclass
class Config:
    shapes_file: str
    min_level: int
    max_level: int
    max_cells: int
    output_file: str
    tokens_file: Optional[str]
    theme: str

    def show(self):
        print()
        print('Using configuration:')
        for k, v in self.__dict__.items():
            print(f'  + {k}: {v}')


def config_parser_factory(configuration_file):
    """
    Returns a ConfigParser by reading the specified file.
    """
    if configuration_file is None or not os.path.exists(configuration_file):
        raise ValueError(f'Unable to find configuration file {configuration_file}')
    cfg_parser = configparser.ConfigParser(interpolation=configparser.ExtendedInterpolation())
    cfg_parser.read(configuration_file)
    return cfg_parser


def _get_configuration_value(section, name, value_type, config_parser, overrides):
    """
    Returns a value from the provided config parser; any value for the key that
    is provided in the 'overrides' dictionary will take precedence.
    """
    if overrides.get(name) is not None:
        return overrides.get(name)

    if value_type is int:
        return config_parser.getint(section, name)
    value = config_parser.get(section, name, fallback=None)
    return value if value else None


def configuration(config_parser, overrides):
    """
    Returns a valid Config object that is populated from the provided config
    parser, with values overriden with anything provided in 'overrides'.
    """
    config_parser['DEFAULT'] = {
        'min_level': constants.DEFAULT_MIN_LEVEL,
        'max_level': constants.DEFAULT_MAX_LEVEL,
        'max_cells': constants.DEFAULT_MAX_CELLS,
        'output_file': constants.DEFAULT_OUTPUT_FILE,
        'theme': constants.DEFAULT_THEME,
    }
    for section in [constants.SOURCE_SECTION_NAME, constants.COVERING_SECTION_NAME,
                    constants.DESTINATION_SECTION_NAME, constants.SETTINGS_SECTION_NAME]:
        if not config_parser.has_section(section):
            config_parser.add_section(section)

    try:
        return Config(
            _get_configuration_value(constants.SOURCE_SECTION_NAME, 'shapes_file', str, config_parser, overrides),
            _get_configuration_value(constants.COVERING_SECTION_NAME, 'min_level', int, config_parser, overrides),
            _get_configuration_value(constants.COVERING_SECTION_NAME, 'max_level', int, config_parser, overrides),
            _get_configuration_value(constants.COVERING_SECTION_NAME, 'max_cells', int, config_parser, overrides),
            _get_configuration_value(constants.DESTINATION_SECTION_NAME, 'output_file', str, config_parser, overrides),
            _get_configuration_value(constants.DESTINATION_SECTION_NAME, 'tokens_file', str, config_parser, overrides),
            _get_configuration_value(constants.SETTINGS_SECTION_NAME, 'theme', str, config_parser, overrides),
        )
    except ValueError as e:
        raise ValueError(f'Unable to read the configuration file: {e}') from e


def validate(configuration):
    """
    Validates each value in the configuration.
    """
    validations = [
        ['shapes_file', lambda f: f is not None and os.path.exists(f), 'The shapes_file does not exist.'],
        ['min_level', lambda level: 0 <= level <= constants.MAX_LEVEL, 'The min_level must be between 0 and 30.'],
        ['max_level', lambda level: configuration.min_level <= level <= constants.MAX_LEVEL,
         'The max_level must be between min_level and 30.'],
        ['max_cells', lambda count: count >= 1, 'The max_cells must be at least 1.'],
        ['theme', lambda name: name in constants.THEMES, 'The theme must be one of: day, night.'],
    ]
    errors = [msg for name, fn, msg in validations if not fn(getattr(configuration, name))]
    return len(errors) == 0, errors
