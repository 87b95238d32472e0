"""Value types shared by the locator codec and the geodesy engine."""

from dataclasses import asdict, dataclass

# Valid locator lengths: field, square, subsquare, extended square, extended subsquare
PRECISIONS = (2, 4, 6, 8, 10)


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Bounds:
    """Rectangular cell or viewport in degrees."""
    north: float
    south: float
    east: float
    west: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class GridSquare:
    locator: str
    bounds: Bounds
    center: Coordinates

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DistanceResult:
    kilometers: float
    miles: float
    nautical_miles: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class BearingResult:
    degrees: float
    cardinal: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PathResult:
    distance: DistanceResult
    bearing: BearingResult

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Location:
    """A point the user picked, either by locator or by coordinates."""
    locator: str
    coordinates: Coordinates
    precision: int
    label: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class CalculationResult:
    """Short and long path between two locations (QRB/QTF)."""
    from_location: Location
    to_location: Location
    short_path: PathResult
    long_path: PathResult

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ConversionResult:
    """One line of a batch conversion. Either error is set or the values are."""
    input: str
    locator: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ComparisonResult:
    location: Location
    distance: DistanceResult
    bearing: BearingResult

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: str | None = None
