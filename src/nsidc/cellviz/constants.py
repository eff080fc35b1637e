# Default configuration values
DEFAULT_MIN_LEVEL = 0
DEFAULT_MAX_LEVEL = 30
DEFAULT_MAX_CELLS = 200
DEFAULT_THEME = 'day'
DEFAULT_OUTPUT_FILE = 'covering.geojson'

# Configuration sections
SOURCE_SECTION_NAME = 'Source'
COVERING_SECTION_NAME = 'Covering'
DESTINATION_SECTION_NAME = 'Destination'
SETTINGS_SECTION_NAME = 'Settings'

# Logging
LOGGER_NAME = 'nsidc.cellviz'
LOGFILE_NAME = 'cellviz.log'

# Cell hierarchy
MAX_LEVEL = 30
POLAR_FACES = (2, 5)

# Great-circle interpolation
BASE_INTERPOLATION_POINTS = 20
POINTS_PER_LEVEL = 3
DATELINE_OFFSET = 10.0  # degrees
SEAM_TOLERANCE = 1e-9  # degrees

# Map themes: basemap style name and cell color
THEMES = {
    'day': {'basemap': 'white', 'cell_color': 'darkslategray'},
    'night': {'basemap': 'black', 'cell_color': 'yellow'},
}
FILL_OPACITY = 0.5
