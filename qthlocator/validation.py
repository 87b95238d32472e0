"""Input validation and coordinate text parsing/formatting.

Validators return message keys (e.g. "validation.invalidLocator"), never
display text; turning a key into a message is up to the caller.
"""

import math
import re

from .maidenhead import is_valid_locator
from .models import ValidationResult

REQUIRED = "validation.required"
INVALID_LOCATOR = "validation.invalidLocator"
INVALID_LATITUDE = "validation.invalidLatitude"
INVALID_LONGITUDE = "validation.invalidLongitude"

# 47°30'30"N, 47 30 30 N, -47°30'30"
DMS_RE = re.compile(r"^(-?)(\d+)[°\s]+(\d+)['′\s]+(\d+(?:\.\d+)?)?[\"″\s]*([NSEW])?$", re.IGNORECASE)
# 47°30.5'N, 47 30.5 N
DM_RE = re.compile(r"^(-?)(\d+)[°\s]+(\d+(?:\.\d+)?)['′\s]*([NSEW])?$", re.IGNORECASE)


def parse_coordinate(value: str) -> float | None:
    """Parse a latitude or longitude written as decimal, D M S or D M.

    Args:
        value: e.g. "48.2082", "48°12'29.5\"N", "16 22.4 E"

    Returns:
        Decimal degrees (S and W negative), or None if unparseable
    """
    if not isinstance(value, str):
        return None
    text = value.strip()

    try:
        decimal = float(text)
    except ValueError:
        pass
    else:
        return decimal if math.isfinite(decimal) else None

    match = DMS_RE.match(text)
    if match:
        sign, degrees, minutes, seconds, hemisphere = match.groups()
        result = int(degrees) + int(minutes) / 60 + float(seconds or 0) / 3600
        return _apply_sign(result, sign, hemisphere)

    match = DM_RE.match(text)
    if match:
        sign, degrees, minutes, hemisphere = match.groups()
        result = int(degrees) + float(minutes) / 60
        return _apply_sign(result, sign, hemisphere)

    return None


def _apply_sign(value: float, sign: str, hemisphere: str | None) -> float:
    if sign == "-":
        value = -value
    if hemisphere and hemisphere.upper() in ("S", "W"):
        value = -abs(value)
    return value


def format_coordinate(value: float, axis: str, fmt: str = "decimal") -> str:
    """Format a coordinate for display.

    Args:
        value: Decimal degrees
        axis: "latitude" or "longitude" (picks N/S or E/W)
        fmt: "decimal" (6 places) or "dms"

    Returns:
        e.g. "48.208200" or "48°12'29.5\"N"
    """
    if fmt == "decimal":
        return f"{value:.6f}"

    if axis == "latitude":
        hemisphere = "N" if value >= 0 else "S"
    else:
        hemisphere = "E" if value >= 0 else "W"

    # Work in tenths of a second so 59.96" carries into the next minute
    tenths = round(abs(value) * 36000)
    degrees, tenths = divmod(tenths, 36000)
    minutes, tenths = divmod(tenths, 600)
    return f"{degrees}°{minutes}'{tenths / 10:.1f}\"{hemisphere}"


def validate_locator(locator: str) -> ValidationResult:
    if not locator or not str(locator).strip():
        return ValidationResult(False, REQUIRED)
    if not is_valid_locator(locator):
        return ValidationResult(False, INVALID_LOCATOR)
    return ValidationResult(True)


def _to_number(value: str | float | None) -> float | None:
    if isinstance(value, str):
        return parse_coordinate(value)
    return value


def _validate_range(value: str | float | None, limit: float, error: str) -> ValidationResult:
    if value is None or (isinstance(value, str) and not value.strip()):
        return ValidationResult(False, REQUIRED)

    number = _to_number(value)
    if number is None or math.isnan(number) or not -limit <= number <= limit:
        return ValidationResult(False, error)
    return ValidationResult(True)


def validate_latitude(value: str | float | None) -> ValidationResult:
    return _validate_range(value, 90, INVALID_LATITUDE)


def validate_longitude(value: str | float | None) -> ValidationResult:
    return _validate_range(value, 180, INVALID_LONGITUDE)


def validate_coordinates(latitude: str | float | None, longitude: str | float | None) -> ValidationResult:
    """Validate a latitude/longitude pair, reporting the first problem found."""
    result = validate_latitude(latitude)
    if not result.valid:
        return result
    return validate_longitude(longitude)
