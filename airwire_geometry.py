"""
Geometry export of air wires for drawing and reporting.

Converts air wires to shapely line geometry in millimetres, so a renderer can
draw them as an overlay and reports can sum their lengths.
"""

from typing import Dict, List

from shapely.geometry import LineString, MultiLineString, mapping

from airwire_types import AirWire


def air_wire_to_line(air_wire: AirWire) -> LineString:
    """Convert one air wire to a LineString in mm (zero length if the points coincide)."""
    p1, p2 = air_wire
    return LineString([p1.to_mm(), p2.to_mm()])


def air_wires_to_geometry(air_wires: List[AirWire]) -> MultiLineString:
    """Convert air wires to a MultiLineString in mm, one part per air wire."""
    return MultiLineString([air_wire_to_line(aw) for aw in air_wires])


def total_air_wire_length_mm(air_wires: List[AirWire]) -> float:
    """Sum of air-wire lengths in mm."""
    if not air_wires:
        return 0.0
    return air_wires_to_geometry(air_wires).length


def air_wires_to_geojson(air_wires: List[AirWire]) -> Dict:
    """GeoJSON-style mapping of the air wires (coordinates in mm)."""
    return mapping(air_wires_to_geometry(air_wires))
