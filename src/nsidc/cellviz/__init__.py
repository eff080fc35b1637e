__version__ = "v0.3.0"


__all__ = [
    "__version__",
    "cells",
    "cli",
    "config",
    "constants",
    "cellviz",
    "features",
    "models",
    "regions",
]

from . import cells
from . import cli
from . import config
from . import constants
from . import cellviz
from . import features
from . import models
from . import regions
