import click

from nsidc.cellviz import cellviz
from nsidc.cellviz import config
from nsidc.cellviz import constants


@click.group(epilog="For detailed help on each command, run: cellviz COMMAND --help")
def cli():
    """The cellviz utility covers drawn shapes with S2 cells and writes
    the cells as polygons ready to draw on a longitude/latitude map."""
    pass


@cli.command()
@click.option('-c', '--config', help='Path to configuration file to create or replace')
def init(config):
    """Populates a configuration file based on user input."""
    click.echo(cellviz.banner())
    config = cellviz.init_config(config)
    click.echo(f'Initialized the cellviz configuration file {config}')


@cli.command()
@click.option('-c', '--config', 'config_filename', help='Path to configuration file to display', required=True)
def info(config_filename):
    """Summarizes the contents of a configuration file."""
    click.echo(cellviz.banner())
    configuration = config.configuration(config.config_parser_factory(config_filename), {})
    configuration.show()


@cli.command()
@click.option('-c', '--config', 'config_filename', help='Path to configuration file', required=True)
@click.option('--min-level', type=int, help='Coarsest cell level in the covering.')
@click.option('--max-level', type=int, help='Finest cell level in the covering.')
@click.option('--max-cells', type=int, help='Maximum number of cells per shape.')
@click.option('--theme', type=click.Choice(list(constants.THEMES)), help='Map color theme.')
@click.option('-o', '--output', 'output_file', help='GeoJSON file to write.')
def process(config_filename, min_level, max_level, max_cells, theme, output_file):
    """Covers the drawn shapes and writes the cell features."""
    click.echo(cellviz.banner())
    overrides = {
        'min_level': min_level,
        'max_level': max_level,
        'max_cells': max_cells,
        'theme': theme,
        'output_file': output_file,
    }
    try:
        configuration = config.configuration(config.config_parser_factory(config_filename), overrides)
        cellviz.init_logging()
        cellviz.process(configuration)
    except Exception as e:
        print("\nUnable to process data: " + str(e))
        exit(1)
    click.echo(f'Processed drawn shapes using the configuration file {config_filename}')


@cli.command()
@click.option('-c', '--config', 'config_filename', help='Path to configuration file', required=True)
@click.option('-t', '--tokens', 'tokens_file', help='File of saved cell tokens, one per line', required=True)
@click.option('-o', '--output', 'output_file', help='GeoJSON file to write.')
def render(config_filename, tokens_file, output_file):
    """Writes the cell features for a saved set of cell tokens."""
    click.echo(cellviz.banner())
    try:
        configuration = config.configuration(config.config_parser_factory(config_filename),
                                             {'output_file': output_file})
        cellviz.init_logging()
        cellviz.render(configuration, tokens_file)
    except Exception as e:
        print("\nUnable to render cells: " + str(e))
        exit(1)
    click.echo(f'Rendered cells from {tokens_file}')


if __name__ == "__main__":
    cli()
