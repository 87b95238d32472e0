"""Batch conversion of locator/coordinate lists and multi-point comparison."""

import re
from typing import Iterable

from .geodesy import bearing, distance
from .maidenhead import coordinates_to_locator, locator_to_coordinates, normalize_locator
from .models import ComparisonResult, ConversionResult, Coordinates, Location
from .validation import INVALID_LOCATOR, validate_coordinates

INVALID_FORMAT = "batch.invalidFormat"  # expected "lat, lon"
CONVERSION_FAILED = "batch.conversionFailed"

SEPARATOR_RE = re.compile(r"[,;\s]+")


def _lines(text: str | Iterable[str]) -> list[str]:
    """Non-blank, stripped input lines."""
    if isinstance(text, str):
        text = text.splitlines()
    return [line.strip() for line in text if line.strip()]


def convert_locators(text: str | Iterable[str]) -> list[ConversionResult]:
    """Convert one locator per line to the center coordinates of its cell.

    Args:
        text: Multi-line string or iterable of lines; blank lines are skipped

    Returns:
        One ConversionResult per non-blank line, in input order
    """
    results = []
    for line in _lines(text):
        normalized = normalize_locator(line)
        if normalized is None:
            results.append(ConversionResult(input=line, error=INVALID_LOCATOR))
            continue

        coords = locator_to_coordinates(normalized)
        if coords is None:
            results.append(ConversionResult(input=line, error=CONVERSION_FAILED))
            continue

        results.append(ConversionResult(
            input=line,
            locator=normalized,
            latitude=coords.latitude,
            longitude=coords.longitude,
        ))
    return results


def convert_coordinates(text: str | Iterable[str], precision: int = 6) -> list[ConversionResult]:
    """Convert one "lat, lon" pair per line to a locator.

    Latitude and longitude may be separated by commas, semicolons or
    whitespace; anything after the second value is ignored.
    """
    results = []
    for line in _lines(text):
        parts = SEPARATOR_RE.split(line)
        if len(parts) < 2:
            results.append(ConversionResult(input=line, error=INVALID_FORMAT))
            continue

        try:
            lat, lon = float(parts[0]), float(parts[1])
        except ValueError:
            results.append(ConversionResult(input=line, error=INVALID_FORMAT))
            continue

        check = validate_coordinates(lat, lon)
        if not check.valid:
            results.append(ConversionResult(input=line, error=check.error))
            continue

        locator = coordinates_to_locator(Coordinates(lat, lon), precision)
        if locator is None:
            results.append(ConversionResult(input=line, error=CONVERSION_FAILED))
            continue

        results.append(ConversionResult(input=line, locator=locator, latitude=lat, longitude=lon))
    return results


def compare_locations(base: Location, targets: Iterable[Location]) -> list[ComparisonResult]:
    """Short-path distance and bearing from base to each target, nearest first."""
    results = [
        ComparisonResult(
            location=target,
            distance=distance(base.coordinates, target.coordinates),
            bearing=bearing(base.coordinates, target.coordinates),
        )
        for target in targets
    ]
    results.sort(key=lambda r: r.distance.kilometers)
    return results
