"""qthloc - Maidenhead locator converter and QRB/QTF calculator

Locations can be given as a locator (JN88ee) or as "lat,lon"
(48.2082,16.3738 or 48°12'29"N,16°22'26"E).

Usage:
  qthloc convert JN88ee                    # locator -> cell center and bounds
  qthloc convert 48.2082 16.3738 -p 8      # coordinates -> locator
  qthloc qrb FN31pr                        # distance/heading from home locator
  qthloc qrb FN31pr --from JN88ee --yaml   # full result as YAML
  qthloc path JN88ee FN31pr --steps 20     # great-circle points as CSV
  qthloc grids 40 0 50 20 -l 4             # overlay cells for S W N E viewport
  qthloc batch locators.txt --csv          # one locator per line ("-" = stdin)
  qthloc batch coords.txt --coords         # one "lat, lon" per line
  qthloc compare JN88ee FN31pr IO91wm      # nearest first
  qthloc --dump-config                     # print default config
"""

import argparse
import csv
import re
import sys
from pathlib import Path

import yaml

from .batch import compare_locations, convert_coordinates, convert_locators
from .config import DEFAULT_CONFIG, load_config
from .geodesy import calculate_qrb_qtf, great_circle_path
from .maidenhead import (
    GRID_LEVELS,
    coordinates_to_locator,
    effective_grid_level,
    generate_grids,
    grid_bounds,
    location_from_coordinates,
    location_from_locator,
)
from .models import PRECISIONS, Bounds, Coordinates, DistanceResult, Location
from .validation import parse_coordinate, validate_coordinates

# config "units" -> (DistanceResult field, label)
UNITS = {
    "km": ("kilometers", "km"),
    "mi": ("miles", "mi"),
    "nm": ("nautical_miles", "nm"),
}


def fail(message: str):
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def resolve_location(text: str, precision: int = 6) -> Location | None:
    """Turn a locator or "lat,lon" argument into a Location."""
    location = location_from_locator(text)
    if location is not None:
        return location

    parts = [p for p in re.split(r"[,;]", text) if p.strip()]
    if len(parts) == 1:
        parts = text.split()
    if len(parts) != 2:
        return None

    lat, lon = parse_coordinate(parts[0]), parse_coordinate(parts[1])
    if not validate_coordinates(lat, lon).valid:
        return None
    return location_from_coordinates(Coordinates(lat, lon), precision)


def format_distance(result: DistanceResult, units: str) -> str:
    field, label = UNITS.get(units, UNITS["km"])
    return f"{getattr(result, field):.2f} {label}"


def describe(location: Location) -> str:
    c = location.coordinates
    return f"{location.locator} ({c.latitude:.4f}, {c.longitude:.4f})"


def cmd_convert(args, cfg):
    if len(args.values) == 1:
        grid = grid_bounds(args.values[0])
        if grid is None:
            fail(f"invalid locator: {args.values[0]}")
        b = grid.bounds
        print(f"Locator:  {grid.locator} ({len(grid.locator)} chars)")
        print(f"Center:   {grid.center.latitude:.6f}, {grid.center.longitude:.6f}")
        print(f"Bounds:   N {b.north:.6f}  S {b.south:.6f}  E {b.east:.6f}  W {b.west:.6f}")
        return

    if len(args.values) != 2:
        fail("convert takes a locator or a latitude and longitude")

    lat, lon = (parse_coordinate(v) for v in args.values)
    check = validate_coordinates(lat, lon)
    if not check.valid:
        fail(f"{check.error}: {' '.join(args.values)}")

    precision = args.precision or cfg["precision"]
    locator = coordinates_to_locator(Coordinates(lat, lon), precision)
    if locator is None:
        fail(f"could not convert {lat}, {lon} at precision {precision}")
    print(f"Locator:  {locator}")


def cmd_qrb(args, cfg):
    precision = cfg["precision"]
    origin = resolve_location(args.from_location or cfg["home_locator"], precision)
    target = resolve_location(args.to_location, precision)
    if origin is None:
        fail(f"invalid location: {args.from_location or cfg['home_locator']}")
    if target is None:
        fail(f"invalid location: {args.to_location}")

    result = calculate_qrb_qtf(origin, target)

    if args.yaml:
        print(yaml.safe_dump(result.to_dict(), default_flow_style=False, sort_keys=False), end="")
        return

    units = cfg["units"]
    short, long_ = result.short_path, result.long_path
    print(f"From:        {describe(origin)}")
    print(f"To:          {describe(target)}")
    print(f"Short path:  {format_distance(short.distance, units):>14}  "
          f"{short.bearing.degrees:5.1f}° {short.bearing.cardinal}")
    print(f"Long path:   {format_distance(long_.distance, units):>14}  "
          f"{long_.bearing.degrees:5.1f}° {long_.bearing.cardinal}")


def cmd_path(args, cfg):
    precision = cfg["precision"]
    origin = resolve_location(args.from_location, precision)
    target = resolve_location(args.to_location, precision)
    if origin is None or target is None:
        fail("both path endpoints must be valid locations")

    steps = args.steps if args.steps is not None else cfg["path_steps"]
    writer = csv.writer(sys.stdout)
    writer.writerow(["latitude", "longitude"])
    for point in great_circle_path(origin.coordinates, target.coordinates, steps):
        writer.writerow([f"{point.latitude:.6f}", f"{point.longitude:.6f}"])


def cmd_grids(args, cfg):
    bounds = Bounds(north=args.north, south=args.south, east=args.east, west=args.west)
    level = args.level or cfg["grid_level"]
    max_cells = args.max_cells if args.max_cells is not None else cfg["max_grid_cells"]

    used = effective_grid_level(bounds, level, max_cells)
    if used is None:
        fail(f"grid level must be one of {GRID_LEVELS}")
    if used != level:
        print(f"Note: viewport too large for level {level}, using level {used}", file=sys.stderr)

    writer = csv.writer(sys.stdout)
    writer.writerow(["locator", "south", "west", "north", "east"])
    for grid in generate_grids(bounds, level, max_cells):
        b = grid.bounds
        writer.writerow([grid.locator, b.south, b.west, b.north, b.east])


def cmd_batch(args, cfg):
    if str(args.file) == "-":
        text = sys.stdin.read()
    else:
        try:
            text = args.file.read_text()
        except OSError as e:
            fail(f"could not read {args.file}: {e}")

    if args.coords:
        results = convert_coordinates(text, args.precision or cfg["precision"])
    else:
        results = convert_locators(text)

    if args.csv:
        writer = csv.writer(sys.stdout)
        writer.writerow(["input", "locator", "latitude", "longitude"])
        for r in results:
            if r.ok:
                writer.writerow([r.input, r.locator, r.latitude, r.longitude])
        return

    for r in results:
        if r.ok:
            print(f"{r.input:<24} {r.locator:<10} {r.latitude:11.6f} {r.longitude:11.6f}")
        else:
            print(f"{r.input:<24} ! {r.error}")


def cmd_compare(args, cfg):
    precision = cfg["precision"]
    base = resolve_location(args.base, precision)
    if base is None:
        fail(f"invalid location: {args.base}")

    targets = []
    for text in args.targets:
        location = resolve_location(text, precision)
        if location is None:
            fail(f"invalid location: {text}")
        targets.append(location)

    print(f"From {describe(base)}:")
    for r in compare_locations(base, targets):
        print(f"  {r.location.locator:<10} {format_distance(r.distance, cfg['units']):>14}  "
              f"{r.bearing.degrees:5.1f}° {r.bearing.cardinal}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="qthloc", description="Maidenhead locator and QRB/QTF calculator")
    p.add_argument("--config", type=Path, help="Config file (default: search local/ and ~/.config/qthlocator/)")
    p.add_argument("--dump-config", action="store_true", help="Emit default config to stdout")
    sub = p.add_subparsers(dest="command")

    s = sub.add_parser("convert", help="Convert a locator or a coordinate pair")
    s.add_argument("values", nargs="+", help="LOCATOR or LAT LON")
    s.add_argument("-p", "--precision", type=int, choices=PRECISIONS, help="Locator length")
    s.set_defaults(func=cmd_convert)

    s = sub.add_parser("qrb", help="Short and long path distance and heading")
    s.add_argument("to_location", help="Locator or lat,lon")
    s.add_argument("-f", "--from", dest="from_location", help="Origin (default: home_locator)")
    s.add_argument("--yaml", action="store_true", help="Print full result as YAML")
    s.set_defaults(func=cmd_qrb)

    s = sub.add_parser("path", help="Great-circle path points as CSV")
    s.add_argument("from_location")
    s.add_argument("to_location")
    s.add_argument("-n", "--steps", type=int, help="Number of points")
    s.set_defaults(func=cmd_path)

    s = sub.add_parser("grids", help="Grid cells covering a viewport as CSV")
    s.add_argument("south", type=float)
    s.add_argument("west", type=float)
    s.add_argument("north", type=float)
    s.add_argument("east", type=float)
    s.add_argument("-l", "--level", type=int, help="Grid level: 2, 4 or 6")
    s.add_argument("--max-cells", type=int, help="Cell budget before dropping a level")
    s.set_defaults(func=cmd_grids)

    s = sub.add_parser("batch", help="Convert a file of locators or coordinates")
    s.add_argument("file", type=Path, help='Input file, "-" for stdin')
    s.add_argument("--coords", action="store_true", help='Input is "lat, lon" per line')
    s.add_argument("-p", "--precision", type=int, choices=PRECISIONS, help="Locator length")
    s.add_argument("--csv", action="store_true", help="CSV output (valid rows only)")
    s.set_defaults(func=cmd_batch)

    s = sub.add_parser("compare", help="Distance and heading from one location to several")
    s.add_argument("base")
    s.add_argument("targets", nargs="+")
    s.set_defaults(func=cmd_compare)

    return p


def main(argv: list[str] | None = None):
    p = build_parser()
    args = p.parse_args(argv)

    if args.dump_config:
        print(yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False), end="")
        sys.exit(0)

    if not args.command:
        p.error("a command is required unless --dump-config")

    cfg = load_config(args.config)
    args.func(args, cfg)


if __name__ == "__main__":
    main()
