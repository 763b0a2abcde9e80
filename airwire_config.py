"""
Configuration classes and coordinate utilities for air-wire building.
"""

from dataclasses import dataclass
from typing import Tuple

from airwire_constants import COLLINEAR_ANGLE_TOLERANCE, COLLINEAR_MIN_DIST_SQ, NM_PER_MM
from airwire_exceptions import ConfigurationError


@dataclass
class AirWireConfig:
    """Configuration for air-wire building."""
    collinear_min_dist_sq: int = COLLINEAR_MIN_DIST_SQ  # nm^2 - ignore points this close to the first one
    collinear_angle_tolerance: float = COLLINEAR_ANGLE_TOLERANCE  # rad
    # False considers every pair of points instead of the triangulation edges
    use_delaunay: bool = True
    verbose: bool = False

    def validate(self) -> 'AirWireConfig':
        """Raise ConfigurationError if any value is out of range, else return self."""
        if self.collinear_min_dist_sq < 0:
            raise ConfigurationError(
                f"collinear_min_dist_sq must be >= 0, got {self.collinear_min_dist_sq}")
        if self.collinear_angle_tolerance < 0:
            raise ConfigurationError(
                f"collinear_angle_tolerance must be >= 0, got {self.collinear_angle_tolerance}")
        return self


class NmCoord:
    """Utilities for converting between float (mm) and integer nanometre coordinates."""
    def __init__(self, nm_per_unit: int = NM_PER_MM):
        self.nm_per_unit = nm_per_unit

    def to_nm(self, x: float, y: float) -> Tuple[int, int]:
        """Convert float coordinates to integer nanometres."""
        return (round(x * self.nm_per_unit), round(y * self.nm_per_unit))
