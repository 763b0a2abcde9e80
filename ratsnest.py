#!/usr/bin/env python3
"""
Ratsnest Calculator - Compute the air wires still needed to connect each net.

Input is a JSON net description:

    {
        "units": "mm",
        "nets": {
            "GND": {"points": [[0, 0], [2.54, 0], [0, 2.54]], "edges": [[0, 1]]},
            "VCC": {"points": [[10, 10], [12, 10]]}
        }
    }

"points" are pad/via positions, "edges" are index pairs of points that are
already connected by copper. "units" is "mm" (default) or "nm". A document
without "nets" is treated as a single net named "net".

Examples:
    # Report air wires for all nets
    python ratsnest.py board_nets.json

    # Only some nets, save the result
    python ratsnest.py board_nets.json --nets "GND" "/USB*" --output airwires.json

    # Use in scripts: fail if anything is left unrouted
    python ratsnest.py board_nets.json --quiet --fail-on-unrouted
"""

import argparse
import fnmatch
import json
import sys
from typing import Dict, List, Optional, Tuple

from airwire_config import AirWireConfig, NmCoord
from airwire_constants import NM_PER_MM
from airwire_exceptions import AirWireError, InputFileError
from airwire_geometry import air_wires_to_geojson, total_air_wire_length_mm
from airwire_types import AirWire, Point, normalize_air_wires
from airwires_builder import build_air_wires

UNITS = {'mm': NM_PER_MM, 'nm': 1}

NetInput = Tuple[List[Point], List[Tuple[int, int]]]


def matches_any_pattern(name: str, patterns: List[str]) -> bool:
    """Check if a net name matches any of the given patterns (fnmatch style)."""
    for pattern in patterns:
        if fnmatch.fnmatch(name, pattern):
            return True
    return False


def parse_net(name: str, net: Dict, coord: NmCoord) -> NetInput:
    """Parse one net entry into points (nm) and known edges."""
    if not isinstance(net, dict) or 'points' not in net:
        raise InputFileError(f"Net '{name}': expected an object with a 'points' list")

    points = []
    for idx, xy in enumerate(net['points']):
        if not isinstance(xy, (list, tuple)) or len(xy) != 2:
            raise InputFileError(f"Net '{name}': point {idx} must be [x, y], got {xy!r}")
        try:
            points.append(Point(*coord.to_nm(float(xy[0]), float(xy[1]))))
        except (TypeError, ValueError):
            raise InputFileError(f"Net '{name}': point {idx} has non-numeric coordinates {xy!r}")

    edges = []
    for pair in net.get('edges', []):
        if (not isinstance(pair, (list, tuple)) or len(pair) != 2 or
                not all(isinstance(i, int) for i in pair)):
            raise InputFileError(f"Net '{name}': edge must be [index, index], got {pair!r}")
        edges.append((pair[0], pair[1]))

    return points, edges


def load_nets(path: str) -> Dict[str, NetInput]:
    """
    Load a JSON net description.

    Returns:
        Dict mapping net name -> (points, known edges)

    Raises:
        InputFileError: If the file cannot be read or is malformed
    """
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except OSError as e:
        raise InputFileError(f"Cannot read {path}: {e}")
    except json.JSONDecodeError as e:
        raise InputFileError(f"Invalid JSON in {path}: {e}")

    if not isinstance(data, dict):
        raise InputFileError(f"{path}: top level must be an object")

    units = data.get('units', 'mm')
    if units not in UNITS:
        raise InputFileError(f"{path}: unknown units '{units}' (expected one of {', '.join(UNITS)})")
    coord = NmCoord(UNITS[units])

    raw_nets = data['nets'] if 'nets' in data else {'net': data}
    if not isinstance(raw_nets, dict):
        raise InputFileError(f"{path}: 'nets' must be an object mapping net name to net")

    return {name: parse_net(name, net, coord) for name, net in raw_nets.items()}


def compute_net_air_wires(points: List[Point], edges: List[Tuple[int, int]],
                          config: AirWireConfig) -> List[AirWire]:
    """Build the air wires of one net."""
    return normalize_air_wires(build_air_wires(points, edges, config))


def air_wires_to_json(air_wires: List[AirWire]) -> List[List[List[float]]]:
    """Air wires as [[x1, y1], [x2, y2]] lists in mm."""
    return [[list(p1.to_mm()), list(p2.to_mm())] for p1, p2 in air_wires]


def run_ratsnest(input_file: str, net_patterns: Optional[List[str]] = None,
                 config: Optional[AirWireConfig] = None, quiet: bool = False,
                 output_file: Optional[str] = None,
                 geojson_file: Optional[str] = None) -> Dict[str, List[AirWire]]:
    """Compute air wires for the nets in a JSON file.

    Args:
        input_file: Path to the JSON net description
        net_patterns: Optional list of net name patterns (fnmatch style) to process
        config: Air-wire configuration (verbose output is taken from here)
        quiet: If True, only print a summary line
        output_file: If given, write air wires per net as JSON (mm)
        geojson_file: If given, write a GeoJSON FeatureCollection of all air wires

    Returns:
        Dict mapping net name -> normalized air wires, for processed nets
    """
    if config is None:
        config = AirWireConfig()

    if not quiet:
        print(f"Loading {input_file}...")
    nets = load_nets(input_file)

    names = [name for name in nets
             if not net_patterns or matches_any_pattern(name, net_patterns)]
    if not quiet:
        if net_patterns:
            print(f"Processing {len(names)} nets matching: {net_patterns}")
        else:
            print(f"Processing {len(names)} nets")

    results: Dict[str, List[AirWire]] = {}
    for name in names:
        points, edges = nets[name]
        if config.verbose:
            print(f"\n{name}: {len(points)} points, {len(edges)} known connections")
        results[name] = compute_net_air_wires(points, edges, config)

    unrouted = {name: aw for name, aw in results.items() if aw}
    total_wires = sum(len(aw) for aw in results.values())

    if quiet:
        print(f"{len(unrouted)} of {len(results)} nets need {total_wires} air wires")
    else:
        print("\n" + "=" * 60)
        if unrouted:
            print(f"{len(unrouted)} NETS NEED AIR WIRES:\n")
            for name, air_wires in unrouted.items():
                length = total_air_wire_length_mm(air_wires)
                print(f"  {name}: {len(air_wires)} air wires, {length:.3f}mm total")
                if config.verbose:
                    for p1, p2 in air_wires:
                        x1, y1 = p1.to_mm()
                        x2, y2 = p2.to_mm()
                        print(f"    ({x1:.4f}, {y1:.4f}) -> ({x2:.4f}, {y2:.4f})")
        else:
            print("ALL NETS FULLY CONNECTED!")
        print("=" * 60)

    if output_file:
        with open(output_file, 'w') as f:
            json.dump({'units': 'mm',
                       'nets': {name: air_wires_to_json(aw) for name, aw in results.items()}},
                      f, indent=2)
        if not quiet:
            print(f"Wrote {output_file}")

    if geojson_file:
        features = [{'type': 'Feature',
                     'properties': {'net': name, 'count': len(aw)},
                     'geometry': air_wires_to_geojson(aw)}
                    for name, aw in unrouted.items()]
        with open(geojson_file, 'w') as f:
            json.dump({'type': 'FeatureCollection', 'features': features}, f, indent=2)
        if not quiet:
            print(f"Wrote {geojson_file}")

    return results


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Compute air wires (ratsnest) for nets in a JSON description')
    parser.add_argument('input', help='Input JSON net description')
    parser.add_argument('--nets', '-n', nargs='+', default=None,
                        help='Net name patterns to process (fnmatch wildcards supported, e.g., "*USB*")')
    parser.add_argument('--output', '-o', default=None,
                        help='Write air wires per net to this JSON file')
    parser.add_argument('--geojson', default=None,
                        help='Write air wires as a GeoJSON FeatureCollection to this file')
    parser.add_argument('--collinear-tolerance', type=float, default=AirWireConfig.collinear_angle_tolerance,
                        help='Angle tolerance in radians for the collinear fallback (default: 1e-6)')
    parser.add_argument('--all-pairs', action='store_true',
                        help='Consider every pair of points instead of Delaunay edges (slow, for cross-checking)')
    parser.add_argument('--fail-on-unrouted', action='store_true',
                        help='Exit with code 1 if any net still needs air wires')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Only print a summary line')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Show per-net details and every air wire')

    args = parser.parse_args(argv)

    config = AirWireConfig(collinear_angle_tolerance=args.collinear_tolerance,
                           use_delaunay=not args.all_pairs,
                           verbose=args.verbose and not args.quiet)

    try:
        results = run_ratsnest(args.input, args.nets, config, args.quiet,
                               args.output, args.geojson)
    except AirWireError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if args.fail_on_unrouted and any(results.values()):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
