"""
Location data models.

Contains the immutable location value consumed and produced by the formatter.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Location:
    """
    Aggregation of the three location components.

    Every component is optional; a location without any component is legal
    and formats to the literal text of a pattern only.
    """

    latitude: Optional[float] = None  # Degrees, signed
    longitude: Optional[float] = None  # Degrees, signed
    elevation: Optional[float] = None  # Meters, signed

    @classmethod
    def of(
        cls,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        elevation: Optional[float] = None
    ) -> "Location":
        """
        Create a new location from raw values.

        Args:
            latitude: Latitude in degrees, maybe None
            longitude: Longitude in degrees, maybe None
            elevation: Elevation in meters, maybe None

        Returns:
            New location object
        """
        return cls(
            latitude=None if latitude is None else float(latitude),
            longitude=None if longitude is None else float(longitude),
            elevation=None if elevation is None else float(elevation),
        )

    @classmethod
    def of_latitude(cls, degrees: float) -> "Location":
        """Create a location which only carries a latitude."""
        return cls.of(latitude=degrees)

    @classmethod
    def of_longitude(cls, degrees: float) -> "Location":
        """Create a location which only carries a longitude."""
        return cls.of(longitude=degrees)

    @classmethod
    def of_elevation(cls, meters: float) -> "Location":
        """Create a location which only carries an elevation."""
        return cls.of(elevation=meters)

    def to_point(self) -> Optional[Tuple[float, float, Optional[float]]]:
        """
        Return the location as a (lat, lon, ele) point.

        Returns:
            Point tuple, or None if latitude or longitude is missing
        """
        if self.latitude is None or self.longitude is None:
            return None
        return self.latitude, self.longitude, self.elevation

    def __str__(self) -> str:
        return f"[lat={self.latitude}, lon={self.longitude}, ele={self.elevation}]"
