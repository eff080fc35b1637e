"""
Adapter around the s2sphere cell hierarchy.

Converts cells to the (longitude, latitude) degree tuples used by the
spatial modules, and encodes cell ids as tokens for saving and loading
cell sets.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List

import s2sphere

from nsidc.cellviz import constants
from nsidc.cellviz.models import Point

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"^[0-9a-fA-F]{1,16}$")


class ParseError(ValueError):
    """Raised when text cannot be decoded into a valid cell id."""

    def __init__(self, token: str, reason: str = "not a valid cell token"):
        self.token = token
        super().__init__(f"Unable to parse cell token '{token}': {reason}")


def lonlat(lat_lng: s2sphere.LatLng) -> Point:
    return (lat_lng.lng().degrees, lat_lng.lat().degrees)


def corners(cell: s2sphere.Cell) -> List[Point]:
    """
    The cell's four vertices as (lon, lat) tuples in the library's order.
    """
    return [lonlat(s2sphere.LatLng.from_point(cell.get_vertex(k))) for k in range(4)]


def center(cell: s2sphere.Cell) -> Point:
    return lonlat(s2sphere.LatLng.from_point(cell.get_center()))


def is_polar_face(cell: s2sphere.Cell) -> bool:
    """
    True for the root cells of the two faces that contain a pole.

    These are the only root cells whose four corners share one latitude.
    """
    return cell.level() == 0 and cell.face() in constants.POLAR_FACES


def token_from_cell_id(cell_id: s2sphere.CellId) -> str:
    return cell_id.to_token()


def cell_id_from_token(token: str) -> s2sphere.CellId:
    """
    Decode a token into a cell id.

    Raises:
        ParseError: If the token is not 1-16 hexadecimal characters or does
                    not decode to a valid cell
    """
    if not isinstance(token, str) or not TOKEN_PATTERN.match(token):
        raise ParseError(str(token), "expected 1 to 16 hexadecimal characters")

    cell_id = s2sphere.CellId.from_token(token.lower())
    if not cell_id.is_valid():
        raise ParseError(token)
    return cell_id


def cell_ids_from_tokens(tokens: Iterable[str]) -> List[s2sphere.CellId]:
    """
    Decode all tokens, or none of them.

    Raises:
        ParseError: For the first malformed token; no cell ids are returned
    """
    return [cell_id_from_token(token) for token in tokens]


def read_tokens(tokens_file: str) -> List[s2sphere.CellId]:
    """
    Load a saved cell set: one token per line, blank lines and lines
    starting with '#' are ignored.
    """
    lines = Path(tokens_file).read_text().splitlines()
    tokens = [line.strip() for line in lines]
    cell_ids = cell_ids_from_tokens(
        token for token in tokens if token and not token.startswith("#")
    )
    logger.info(f"Loaded {len(cell_ids)} cells from {tokens_file}")
    return cell_ids


def write_tokens(tokens_file: str, cell_ids: Iterable[s2sphere.CellId]) -> None:
    tokens = [token_from_cell_id(cell_id) for cell_id in cell_ids]
    Path(tokens_file).parent.mkdir(parents=True, exist_ok=True)
    with open(tokens_file, "tw") as f:
        for token in tokens:
            print(token, file=f)
    logger.info(f"Saved {len(tokens)} cell tokens to {tokens_file}")
