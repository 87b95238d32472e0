"""Maidenhead grid locator conversion, cell bounds and map grid overlays.

A locator is built from up to five 2-character pairs. Each pair subdivides
the cell of the previous one:

    pair  name                charset  cell (lon x lat)
    1     field               A-R      20° x 10°
    2     square              0-9      2° x 1°
    3     subsquare           a-x      5' x 2.5'
    4     extended square     0-9      30" x 15"
    5     extended subsquare  a-x      1.25" x 0.625"

All functions return None (or an empty list) for input they cannot convert;
nothing here raises for a malformed locator or an out-of-range coordinate.
"""

import math

from .models import PRECISIONS, Bounds, Coordinates, GridSquare, Location

FIELD_CHARS = "ABCDEFGHIJKLMNOPQR"
SUBSQUARE_CHARS = "abcdefghijklmnopqrstuvwx"
DIGITS = "0123456789"

# (charset, lon size, lat size) per pair, in locator order
LEVELS = (
    (FIELD_CHARS, 20.0, 10.0),
    (DIGITS, 2.0, 1.0),
    (SUBSQUARE_CHARS, 2 / 24, 1 / 24),
    (DIGITS, 2 / 240, 1 / 240),
    (SUBSQUARE_CHARS, 2 / 240 / 24, 1 / 240 / 24),
)

# Levels a map overlay can be drawn at
GRID_LEVELS = (2, 4, 6)

# Above this many cells a viewport is drawn at a coarser level
MAX_GRID_CELLS = 2500


def normalize_locator(locator: str) -> str | None:
    """Validate a locator and return its canonical form.

    Field letters are upper case, subsquare letters lower case, e.g.
    "jn88EE" -> "JN88ee".

    Args:
        locator: Any string, surrounding whitespace is ignored

    Returns:
        Canonical locator, or None if any pair is invalid
    """
    if not isinstance(locator, str):
        return None

    locator = locator.strip()
    if len(locator) not in PRECISIONS:
        return None

    normalized = ""
    for i in range(0, len(locator), 2):
        charset = LEVELS[i // 2][0]
        pair = locator[i:i + 2]
        pair = pair.upper() if charset is FIELD_CHARS else pair.lower()
        # Case folding can change length for some non-ASCII characters
        if len(pair) != 2 or pair[0] not in charset or pair[1] not in charset:
            return None
        normalized += pair

    return normalized


def is_valid_locator(locator: str) -> bool:
    return normalize_locator(locator) is not None


def locator_precision(locator: str) -> int | None:
    """Number of characters in a valid locator (2, 4, 6, 8 or 10)."""
    normalized = normalize_locator(locator)
    if normalized is None:
        return None
    return len(normalized)


def coordinates_to_locator(coords: Coordinates, precision: int = 6) -> str | None:
    """Convert coordinates to the locator of the cell containing them.

    Args:
        coords: Point to encode
        precision: Locator length, one of 2, 4, 6, 8, 10

    Returns:
        Canonical locator, or None if coordinates are out of range
    """
    if not isinstance(precision, int) or precision not in PRECISIONS:
        return None

    lat, lon = coords.latitude, coords.longitude
    # NaN fails both comparisons
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None

    lon += 180
    lat += 90

    locator = ""
    for charset, lon_size, lat_size in LEVELS[:precision // 2]:
        last = len(charset) - 1
        # Clamp so 90°N / 180°E and float noise at cell edges stay in the last cell
        lon_idx = min(max(int(lon // lon_size), 0), last)
        lat_idx = min(max(int(lat // lat_size), 0), last)
        locator += charset[lon_idx] + charset[lat_idx]
        lon -= lon_idx * lon_size
        lat -= lat_idx * lat_size

    return locator


def _cell_corner(normalized: str) -> tuple[float, float, float, float]:
    """South-west corner and size of the cell a canonical locator denotes.

    Returns:
        Tuple of (west, south, lon_size, lat_size)
    """
    west, south = -180.0, -90.0
    lon_size = lat_size = 0.0
    for i, (charset, lon_size, lat_size) in enumerate(LEVELS[:len(normalized) // 2]):
        west += charset.index(normalized[2 * i]) * lon_size
        south += charset.index(normalized[2 * i + 1]) * lat_size
    return west, south, lon_size, lat_size


def locator_to_coordinates(locator: str) -> Coordinates | None:
    """Convert a locator to the center of its cell.

    Args:
        locator: Maidenhead locator, 2 to 10 characters, any case

    Returns:
        Cell center, or None if the locator is invalid
    """
    normalized = normalize_locator(locator)
    if normalized is None:
        return None

    west, south, lon_size, lat_size = _cell_corner(normalized)
    return Coordinates(
        latitude=round(south + lat_size / 2, 8),
        longitude=round(west + lon_size / 2, 8),
    )


def grid_bounds(locator: str) -> GridSquare | None:
    """Edges and center of the cell a locator denotes."""
    normalized = normalize_locator(locator)
    if normalized is None:
        return None

    west, south, lon_size, lat_size = _cell_corner(normalized)
    return GridSquare(
        locator=normalized,
        bounds=Bounds(
            north=round(south + lat_size, 8),
            south=round(south, 8),
            east=round(west + lon_size, 8),
            west=round(west, 8),
        ),
        center=Coordinates(
            latitude=round(south + lat_size / 2, 8),
            longitude=round(west + lon_size / 2, 8),
        ),
    )


def _cell_range(low: float, high: float, offset: float, size: float) -> range:
    """Indices of the cells along one axis that overlap [low, high].

    Cells outside the world (e.g. a map panned past the antimeridian) are dropped.
    """
    count = round(2 * offset / size)
    start = max(math.floor((low + offset) / size), 0)
    end = min(math.ceil((high + offset) / size), count)
    return range(start, end)


def _viewport_cells(bounds: Bounds, level: int) -> tuple[range, range]:
    _, lon_size, lat_size = LEVELS[level // 2 - 1]
    cols = _cell_range(bounds.west, bounds.east, 180, lon_size)
    rows = _cell_range(bounds.south, bounds.north, 90, lat_size)
    return cols, rows


def _is_finite(bounds: Bounds) -> bool:
    return all(math.isfinite(v) for v in (bounds.north, bounds.south, bounds.east, bounds.west))


def effective_grid_level(bounds: Bounds, level: int, max_cells: int | None = MAX_GRID_CELLS) -> int | None:
    """Pick the level a viewport will actually be drawn at.

    The requested level is lowered (6 -> 4 -> 2) while the viewport would
    need more than max_cells cells. Level 2 has at most 324 cells and is
    always accepted.

    Args:
        bounds: Visible map area
        level: Requested level, one of 2, 4, 6
        max_cells: Cell budget, or None for no limit

    Returns:
        Level to use, or None if the requested level is not supported
    """
    if level not in GRID_LEVELS:
        return None
    if max_cells is None or not _is_finite(bounds):
        return level

    while level > GRID_LEVELS[0]:
        cols, rows = _viewport_cells(bounds, level)
        if len(cols) * len(rows) <= max_cells:
            break
        level -= 2
    return level


def generate_grids(bounds: Bounds, level: int, max_cells: int | None = MAX_GRID_CELLS) -> list[GridSquare]:
    """Generate every grid cell overlapping a map viewport.

    The viewport is widened to whole cells. If the cell count at the
    requested level exceeds max_cells, a coarser level is used instead
    (see effective_grid_level); the locator length of the returned
    squares tells which level was drawn.

    Args:
        bounds: Visible map area
        level: Requested level, one of 2, 4, 6
        max_cells: Cell budget, or None for no limit

    Returns:
        List of GridSquare, columns west to east, rows south to north.
        Empty for an unsupported level or non-finite bounds.
    """
    level = effective_grid_level(bounds, level, max_cells)
    if level is None or not _is_finite(bounds):
        return []

    _, lon_size, lat_size = LEVELS[level // 2 - 1]
    # Encoding needs at least a square; a field is its first two characters
    precision = max(level, 4)
    cols, rows = _viewport_cells(bounds, level)

    grids = []
    for col in cols:
        for row in rows:
            center = Coordinates(
                latitude=row * lat_size - 90 + lat_size / 2,
                longitude=col * lon_size - 180 + lon_size / 2,
            )
            locator = coordinates_to_locator(center, precision)
            if locator is None:
                continue
            grid = grid_bounds(locator[:level])
            if grid is not None:
                grids.append(grid)

    return grids


def location_from_locator(locator: str, label: str | None = None) -> Location | None:
    """Build a Location at the center of a locator's cell."""
    normalized = normalize_locator(locator)
    if normalized is None:
        return None
    return Location(
        locator=normalized,
        coordinates=locator_to_coordinates(normalized),
        precision=len(normalized),
        label=label,
    )


def location_from_coordinates(coords: Coordinates, precision: int = 6, label: str | None = None) -> Location | None:
    """Build a Location that keeps the exact coordinates plus their locator."""
    locator = coordinates_to_locator(coords, precision)
    if locator is None:
        return None
    return Location(locator=locator, coordinates=coords, precision=precision, label=label)
