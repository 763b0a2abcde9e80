"""
Air-Wire Exceptions

Exception classes for air-wire building, allowing callers to catch contract
violations and input problems through exceptions instead of sys.exit() calls.
"""


class AirWireError(Exception):
    """Base exception for all air-wire errors."""
    pass


class ConfigurationError(AirWireError):
    """Raised when the air-wire configuration is invalid."""
    pass


class UnknownPointError(AirWireError):
    """Raised when a known edge references a point that was never registered."""

    def __init__(self, point_id: int, point_count: int, message: str = ""):
        self.point_id = point_id
        self.point_count = point_count
        super().__init__(message or f"Unknown point id {point_id} (registered points: {point_count})")


class BuilderStateError(AirWireError):
    """Raised when a builder is used again after its air wires were built."""
    pass


class InputFileError(AirWireError):
    """Raised when an input file cannot be read or parsed."""
    pass
