import configparser
import json
import logging
import os.path
import sys
from pathlib import Path
from typing import List

from funcy import decorator
from pyfiglet import Figlet
from rich.prompt import Confirm, Prompt

from nsidc.cellviz import cells, config, constants, features, regions
from nsidc.cellviz.models import Shape, ShapeMode


CONSOLE_FORMAT = "%(message)s"
LOGFILE_FORMAT = "%(asctime)s|%(levelname)s|%(name)s|%(message)s"

logger = logging.getLogger(constants.LOGGER_NAME)


def init_logging(logfile=constants.LOGFILE_NAME):
    logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    logfile_handler = logging.FileHandler(logfile, "w")
    logfile_handler.setLevel(logging.DEBUG)
    logfile_handler.setFormatter(logging.Formatter(LOGFILE_FORMAT))
    logger.addHandler(logfile_handler)


@decorator
def log(call):
    logger.debug(call._func.__name__)
    return call()


def banner():
    """
    Displays the name of this utility using incredible ASCII-art.
    """
    f = Figlet(font='slant')
    return f.renderText('cellviz')


def init_config(configuration_file):
    """
    Prompts the user for configuration values and then creates a valid configuration file.
    """
    print("""This utility will create a cell covering configuration file by prompting """
          """you for values for each of the configuration parameters.""")
    print()
    if not configuration_file:
        configuration_file = Prompt.ask("configuration file name", default="example.ini")
    else:
        print(f'Creating configuration file {configuration_file}')
        print()

    if os.path.exists(configuration_file):
        print(f'WARNING: The {configuration_file} already exists.')
        overwrite = Confirm.ask("Overwrite?")
        if not overwrite:
            print('Not overwriting existing file. Exiting.')
            exit(1)

    cfg_parser = configparser.ConfigParser()

    print()
    print(f'{constants.SOURCE_SECTION_NAME} Parameters')
    print('--------------------------------------------------')
    cfg_parser.add_section(constants.SOURCE_SECTION_NAME)
    cfg_parser.set(constants.SOURCE_SECTION_NAME, "shapes_file", Prompt.ask("Drawn shapes GeoJSON file", default="shapes.geojson"))
    print()

    print()
    print(f'{constants.COVERING_SECTION_NAME} Parameters')
    print('--------------------------------------------------')
    cfg_parser.add_section(constants.COVERING_SECTION_NAME)
    cfg_parser.set(constants.COVERING_SECTION_NAME, "min_level", Prompt.ask("Minimum cell level", default=str(constants.DEFAULT_MIN_LEVEL)))
    cfg_parser.set(constants.COVERING_SECTION_NAME, "max_level", Prompt.ask("Maximum cell level", default=str(constants.DEFAULT_MAX_LEVEL)))
    cfg_parser.set(constants.COVERING_SECTION_NAME, "max_cells", Prompt.ask("Maximum cells per shape", default=str(constants.DEFAULT_MAX_CELLS)))
    print()

    print()
    print(f'{constants.DESTINATION_SECTION_NAME} Parameters')
    print('--------------------------------------------------')
    cfg_parser.add_section(constants.DESTINATION_SECTION_NAME)
    cfg_parser.set(constants.DESTINATION_SECTION_NAME, "output_file", Prompt.ask("Output GeoJSON file", default=constants.DEFAULT_OUTPUT_FILE))
    cfg_parser.set(constants.DESTINATION_SECTION_NAME, "tokens_file", Prompt.ask("Cell token file (blank for none)", default=""))

    print()
    print(f'{constants.SETTINGS_SECTION_NAME} Parameters')
    print('--------------------------------------------------')
    cfg_parser.add_section(constants.SETTINGS_SECTION_NAME)
    cfg_parser.set(constants.SETTINGS_SECTION_NAME, "theme", Prompt.ask("Map theme", choices=list(constants.THEMES), default=constants.DEFAULT_THEME))

    print()
    print(f'Saving new configuration: {configuration_file}')
    with open(configuration_file, "tw") as file:
        cfg_parser.write(file)

    return configuration_file


def shape_from_feature(feature: dict) -> Shape:
    """
    A Shape from one GeoJSON feature of the drawing snapshot. Only the
    outer ring is used; modes other than the known drawing modes are
    treated as free-form polygons.
    """
    ring = [tuple(position[:2]) for position in feature["geometry"]["coordinates"][0]]
    mode_name = (feature.get("properties") or {}).get("mode", ShapeMode.POLYGON.value)
    try:
        mode = ShapeMode(mode_name)
    except ValueError:
        logger.warning(f"Unknown drawing mode '{mode_name}', covering it as a polygon")
        mode = ShapeMode.POLYGON
    return Shape(mode, ring)


@log
def read_shapes(shapes_file: str) -> List[Shape]:
    """
    Read drawn shapes from a GeoJSON FeatureCollection. Features without a
    Polygon geometry are ignored.
    """
    with open(shapes_file) as f:
        document = json.load(f)

    if document.get("type") != "FeatureCollection":
        raise ValueError(f"{shapes_file} is not a GeoJSON FeatureCollection")

    shapes = [shape_from_feature(feature)
              for feature in document.get("features", [])
              if (feature.get("geometry") or {}).get("type") == "Polygon"]
    logger.info(f"Read {len(shapes)} shapes from {shapes_file}")
    return shapes


@log
def write_collection(collection: dict, output_file: str) -> None:
    output_dir = Path(output_file).parent
    output_dir.mkdir(parents=True, exist_ok=True)
    with open(output_file, "tw") as f:
        json.dump(collection, f)
    logger.info(f"Wrote {len(collection['features'])} cell features to {output_file}")


def process(configuration: config.Config) -> None:
    """
    Covers the drawn shapes with cells and writes their features.
    """
    valid, errors = config.validate(configuration)
    if not valid:
        for error in errors:
            logger.error(error)
        raise Exception('Invalid configuration')

    shapes = read_shapes(configuration.shapes_file)
    cell_ids = regions.covering(
        shapes,
        min_level=configuration.min_level,
        max_level=configuration.max_level,
        max_cells=configuration.max_cells,
    )

    collection = features.feature_collection(
        features.cell_features(cell_ids),
        features.theme(configuration.theme),
    )
    write_collection(collection, configuration.output_file)

    if configuration.tokens_file:
        cells.write_tokens(configuration.tokens_file, cell_ids)


def render(configuration: config.Config, tokens_file: str) -> None:
    """
    Writes the features for a saved cell set. A malformed token aborts
    before anything is written.
    """
    cell_ids = cells.read_tokens(tokens_file)
    collection = features.feature_collection(
        features.cell_features(cell_ids),
        features.theme(configuration.theme),
    )
    write_collection(collection, configuration.output_file)
