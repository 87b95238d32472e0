"""QTH Locator - Maidenhead grid locators and great-circle QRB/QTF."""

__version__ = "0.1.0"

from .models import (
    PRECISIONS,
    Bounds,
    BearingResult,
    CalculationResult,
    Coordinates,
    DistanceResult,
    GridSquare,
    Location,
    PathResult,
)
from .maidenhead import (
    normalize_locator,
    is_valid_locator,
    locator_precision,
    coordinates_to_locator,
    locator_to_coordinates,
    grid_bounds,
    generate_grids,
    effective_grid_level,
    location_from_locator,
    location_from_coordinates,
)
from .geodesy import (
    calc_bearing,
    calc_distance_km,
    bearing_to_direction,
    distance,
    bearing,
    long_path_distance,
    long_path_bearing,
    calculate_qrb_qtf,
    great_circle_path,
    destination_point,
    midpoint,
)
from .validation import parse_coordinate, format_coordinate, validate_locator, validate_coordinates
from .batch import convert_locators, convert_coordinates, compare_locations
from .config import load_config, save_config

__all__ = [
    # Data model
    'PRECISIONS',
    'Bounds',
    'BearingResult',
    'CalculationResult',
    'Coordinates',
    'DistanceResult',
    'GridSquare',
    'Location',
    'PathResult',
    # Locator codec
    'normalize_locator',
    'is_valid_locator',
    'locator_precision',
    'coordinates_to_locator',
    'locator_to_coordinates',
    'grid_bounds',
    'generate_grids',
    'effective_grid_level',
    'location_from_locator',
    'location_from_coordinates',
    # Geodesy
    'calc_bearing',
    'calc_distance_km',
    'bearing_to_direction',
    'distance',
    'bearing',
    'long_path_distance',
    'long_path_bearing',
    'calculate_qrb_qtf',
    'great_circle_path',
    'destination_point',
    'midpoint',
    # Validation
    'parse_coordinate',
    'format_coordinate',
    'validate_locator',
    'validate_coordinates',
    # Batch
    'convert_locators',
    'convert_coordinates',
    'compare_locations',
    # Config
    'load_config',
    'save_config',
]
