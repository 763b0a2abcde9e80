"""
Air-wire constants used throughout the codebase.

Centralizes magic numbers and default values for consistency.
All lengths are integer nanometres unless stated otherwise.
"""

import math

# Unit conversion
NM_PER_MM = 1_000_000

# Collinearity detection
COLLINEAR_MIN_DIST_SQ = 1_000_000     # nm^2 - points closer than 1um to the first point are ignored
COLLINEAR_ANGLE_TOLERANCE = 1e-6      # rad - max deviation from the reference direction

# Direction angles are folded into [0, pi) since edges are undirected
HALF_TURN = math.pi

# Minimum number of distinct points Qhull can triangulate in 2D
MIN_TRIANGULATION_POINTS = 3
