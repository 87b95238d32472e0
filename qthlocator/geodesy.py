"""Great-circle distance, bearing and path calculations on a spherical Earth."""

import math

from .models import (
    BearingResult,
    CalculationResult,
    Coordinates,
    DistanceResult,
    Location,
    PathResult,
)

EARTH_RADIUS_KM = 6371  # Mean radius
EARTH_CIRCUMFERENCE_KM = 40075
KM_TO_MILES = 0.621371
KM_PER_NAUTICAL_MILE = 1.852

DIRECTIONS = ["N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
              "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW"]


def calc_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate initial bearing from point 1 to point 2 in degrees.

    Args:
        lat1, lon1: Starting point latitude and longitude
        lat2, lon2: Ending point latitude and longitude

    Returns:
        Bearing in degrees (0-360)
    """
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])
    dlon = lon2 - lon1
    x = math.sin(dlon) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    bearing = math.atan2(x, y)
    return (math.degrees(bearing) + 360) % 360


def _central_angle(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine central angle between two points, in radians."""
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat/2)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon/2)**2
    a = min(a, 1.0)  # rounding can push antipodal points just past 1
    return 2 * math.atan2(math.sqrt(a), math.sqrt(1-a))


def calc_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate great-circle distance between two points in kilometers.

    Args:
        lat1, lon1: Starting point latitude and longitude
        lat2, lon2: Ending point latitude and longitude

    Returns:
        Distance in kilometers
    """
    return EARTH_RADIUS_KM * _central_angle(lat1, lon1, lat2, lon2)


def bearing_to_direction(bearing: float) -> str:
    """Convert bearing to compass direction.

    Args:
        bearing: Bearing in degrees, any range

    Returns:
        Compass direction (N, NNE, NE, etc.), "?" for NaN
    """
    if not math.isfinite(bearing):
        return "?"
    idx = round((bearing % 360) / 22.5) % 16
    return DIRECTIONS[idx]


def _distance_result(km: float) -> DistanceResult:
    # Each unit is rounded from the unrounded km value
    return DistanceResult(
        kilometers=round(km, 2),
        miles=round(km * KM_TO_MILES, 2),
        nautical_miles=round(km / KM_PER_NAUTICAL_MILE, 2),
    )


def _bearing_result(degrees: float) -> BearingResult:
    # 359.96 rounds to 360.0, which is north again
    return BearingResult(
        degrees=round(degrees % 360, 1) % 360,
        cardinal=bearing_to_direction(degrees),
    )


def distance(from_coords: Coordinates, to_coords: Coordinates) -> DistanceResult:
    """Short-path great-circle distance in km, statute miles and nautical miles."""
    km = calc_distance_km(from_coords.latitude, from_coords.longitude,
                          to_coords.latitude, to_coords.longitude)
    return _distance_result(km)


def bearing(from_coords: Coordinates, to_coords: Coordinates) -> BearingResult:
    """Initial short-path bearing with its 16-point compass label."""
    degrees = calc_bearing(from_coords.latitude, from_coords.longitude,
                           to_coords.latitude, to_coords.longitude)
    return _bearing_result(degrees)


def long_path_distance(short_path_km: float) -> DistanceResult:
    """Distance the other way around the globe.

    Uses a fixed mean circumference, which is what propagation estimates
    expect; it is not an ellipsoidal result.
    """
    return _distance_result(EARTH_CIRCUMFERENCE_KM - short_path_km)


def long_path_bearing(short_path_degrees: float) -> BearingResult:
    """Beam heading for the long path: the short-path bearing reversed."""
    return _bearing_result((short_path_degrees + 180) % 360)


def calculate_qrb_qtf(from_location: Location, to_location: Location) -> CalculationResult:
    """Distance (QRB) and beam heading (QTF) for both paths between two locations."""
    short_distance = distance(from_location.coordinates, to_location.coordinates)
    short_bearing = bearing(from_location.coordinates, to_location.coordinates)

    return CalculationResult(
        from_location=from_location,
        to_location=to_location,
        short_path=PathResult(distance=short_distance, bearing=short_bearing),
        long_path=PathResult(
            distance=long_path_distance(short_distance.kilometers),
            bearing=long_path_bearing(short_bearing.degrees),
        ),
    )


def _clamp_unit(x: float) -> float:
    # Keeps NaN as NaN, unlike min()/max()
    if x > 1:
        return 1.0
    if x < -1:
        return -1.0
    return x


def _wrap_longitude(lon: float) -> float:
    return (lon + 540) % 360 - 180


def destination_point(from_coords: Coordinates, distance_km: float, bearing_degrees: float) -> Coordinates:
    """Point reached by travelling distance_km along a great circle.

    Args:
        from_coords: Starting point
        distance_km: Distance to travel in km
        bearing_degrees: Initial bearing in degrees

    Returns:
        Destination, longitude wrapped into [-180, 180)
    """
    lat1 = math.radians(from_coords.latitude)
    lon1 = math.radians(from_coords.longitude)
    theta = math.radians(bearing_degrees)
    delta = distance_km / EARTH_RADIUS_KM

    lat2 = math.asin(_clamp_unit(
        math.sin(lat1) * math.cos(delta) + math.cos(lat1) * math.sin(delta) * math.cos(theta)
    ))
    lon2 = lon1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(lat1),
        math.cos(delta) - math.sin(lat1) * math.sin(lat2),
    )

    return Coordinates(
        latitude=math.degrees(lat2),
        longitude=_wrap_longitude(math.degrees(lon2)),
    )


def midpoint(from_coords: Coordinates, to_coords: Coordinates) -> Coordinates:
    """Halfway point along the great circle between two points."""
    lat1 = math.radians(from_coords.latitude)
    lon1 = math.radians(from_coords.longitude)
    lat2 = math.radians(to_coords.latitude)
    dlon = math.radians(to_coords.longitude - from_coords.longitude)

    bx = math.cos(lat2) * math.cos(dlon)
    by = math.cos(lat2) * math.sin(dlon)
    lat_m = math.atan2(math.sin(lat1) + math.sin(lat2),
                       math.sqrt((math.cos(lat1) + bx) ** 2 + by ** 2))
    lon_m = lon1 + math.atan2(by, math.cos(lat1) + bx)

    return Coordinates(
        latitude=math.degrees(lat_m),
        longitude=_wrap_longitude(math.degrees(lon_m)),
    )


def great_circle_path(from_coords: Coordinates, to_coords: Coordinates, steps: int = 100) -> list[Coordinates]:
    """Points along the great circle between two coordinates, for drawing.

    Both endpoints are included. Longitudes stay within [-180, 180], so a
    path crossing the antimeridian comes back as one sequence with a jump
    in longitude; the caller draws it as-is.

    Args:
        from_coords: Start of the path
        to_coords: End of the path
        steps: Number of points to return

    Returns:
        List of exactly `steps` Coordinates (empty if steps < 1)
    """
    if steps < 1:
        return []
    if steps == 1:
        return [from_coords]

    angle = _central_angle(from_coords.latitude, from_coords.longitude,
                           to_coords.latitude, to_coords.longitude)
    if angle == 0:
        return [from_coords] * steps

    sin_angle = math.sin(angle)
    if abs(sin_angle) < 1e-12:
        # Antipodal: every great circle connects the points, follow the initial bearing
        heading = calc_bearing(from_coords.latitude, from_coords.longitude,
                               to_coords.latitude, to_coords.longitude)
        total_km = angle * EARTH_RADIUS_KM
        return [destination_point(from_coords, total_km * i / (steps - 1), heading)
                for i in range(steps)]

    lat1 = math.radians(from_coords.latitude)
    lon1 = math.radians(from_coords.longitude)
    lat2 = math.radians(to_coords.latitude)
    lon2 = math.radians(to_coords.longitude)

    points = []
    for i in range(steps):
        f = i / (steps - 1)
        a = math.sin((1 - f) * angle) / sin_angle
        b = math.sin(f * angle) / sin_angle
        x = a * math.cos(lat1) * math.cos(lon1) + b * math.cos(lat2) * math.cos(lon2)
        y = a * math.cos(lat1) * math.sin(lon1) + b * math.cos(lat2) * math.sin(lon2)
        z = a * math.sin(lat1) + b * math.sin(lat2)
        points.append(Coordinates(
            latitude=math.degrees(math.atan2(z, math.sqrt(x * x + y * y))),
            longitude=math.degrees(math.atan2(y, x)),
        ))

    return points
