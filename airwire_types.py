"""
Data types for air-wire building.

Coordinates are signed integer nanometres so that squared distances and
equality checks are exact.
"""

from dataclasses import dataclass
from typing import List, Tuple

from airwire_constants import NM_PER_MM


@dataclass(frozen=True, order=True)
class Point:
    """A 2D point in integer nanometres, ordered by (x, y)."""
    x: int
    y: int

    @classmethod
    def from_mm(cls, x_mm: float, y_mm: float) -> 'Point':
        """Create a point from millimetre coordinates, rounded to the nearest nm."""
        return cls(round(x_mm * NM_PER_MM), round(y_mm * NM_PER_MM))

    def to_mm(self) -> Tuple[float, float]:
        return (self.x / NM_PER_MM, self.y / NM_PER_MM)

    def dist2(self, other: 'Point') -> int:
        """Exact squared Euclidean distance to another point (nm^2)."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy


@dataclass(frozen=True)
class KnownEdge:
    """A pre-existing physical connection between two registered points (free)."""
    a: int  # point id
    b: int  # point id


@dataclass(frozen=True)
class CandidateEdge:
    """A possible air wire between two registered points."""
    a: int  # point id
    b: int  # point id
    weight: int  # squared distance in nm^2


# An air wire is an unordered pair of points
AirWire = Tuple[Point, Point]


def normalize_air_wires(air_wires: List[AirWire]) -> List[AirWire]:
    """
    Return air wires in canonical form for comparison.

    Each pair is ordered (smaller point first) and the list is sorted, so two
    results describing the same set of unordered pairs compare equal.
    """
    normalized = []
    for p1, p2 in air_wires:
        if p2 < p1:
            p1, p2 = p2, p1
        normalized.append((p1, p2))
    normalized.sort()
    return normalized
