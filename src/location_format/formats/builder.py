"""
Location accumulator used while parsing.

Degree, minute and second contributions are all integrated in degree units;
signs are kept apart from the magnitudes and applied by ``build``.
"""

from typing import Optional

from ..core import constants
from ..models import Location


class LocationBuilder:
    """Mutable accumulator for the parsed parts of a location."""

    def __init__(self):
        self.latitude_sign = +1
        self.latitude: Optional[float] = None
        self.longitude_sign = +1
        self.longitude: Optional[float] = None
        self.elevation_sign = +1
        self.elevation: Optional[float] = None

    def copy(self) -> "LocationBuilder":
        """Return an independent snapshot of this builder."""
        other = LocationBuilder()
        other.restore(self)
        return other

    def restore(self, other: "LocationBuilder") -> None:
        """Overwrite the state of this builder with the state of ``other``."""
        self.latitude_sign = other.latitude_sign
        self.latitude = other.latitude
        self.longitude_sign = other.longitude_sign
        self.longitude = other.longitude
        self.elevation_sign = other.elevation_sign
        self.elevation = other.elevation

    # Latitude

    def set_latitude_sign(self, sign: int) -> None:
        self.latitude_sign = sign

    def add_latitude(self, degrees: float) -> None:
        """Add degrees to the latitude; a negative value flips the sign."""
        if degrees < 0.0:
            self.latitude_sign = -1
        self.latitude = (self.latitude or 0.0) + abs(degrees)

    def add_latitude_minute(self, minutes: float) -> None:
        self.add_latitude(minutes / constants.MINUTES_PER_DEGREE)

    def add_latitude_second(self, seconds: float) -> None:
        self.add_latitude(seconds / constants.SECONDS_PER_DEGREE)

    # Longitude

    def set_longitude_sign(self, sign: int) -> None:
        self.longitude_sign = sign

    def add_longitude(self, degrees: float) -> None:
        """Add degrees to the longitude; a negative value flips the sign."""
        if degrees < 0.0:
            self.longitude_sign = -1
        self.longitude = (self.longitude or 0.0) + abs(degrees)

    def add_longitude_minute(self, minutes: float) -> None:
        self.add_longitude(minutes / constants.MINUTES_PER_DEGREE)

    def add_longitude_second(self, seconds: float) -> None:
        self.add_longitude(seconds / constants.SECONDS_PER_DEGREE)

    # Elevation

    def set_elevation_sign(self, sign: int) -> None:
        self.elevation_sign = sign

    def set_elevation(self, meters: float) -> None:
        self.elevation = meters

    def build(self) -> Location:
        """
        Create the location from the accumulated values.

        Returns:
            Location with absent components for fields that were never written
        """
        return Location.of(
            latitude=None if self.latitude is None else self.latitude_sign * self.latitude,
            longitude=None if self.longitude is None else self.longitude_sign * self.longitude,
            elevation=None if self.elevation is None else self.elevation_sign * self.elevation,
        )

    def __repr__(self) -> str:
        return (
            f"LocationBuilder(lat={self.latitude_sign:+d}*{self.latitude}, "
            f"lon={self.longitude_sign:+d}*{self.longitude}, "
            f"ele={self.elevation_sign:+d}*{self.elevation})"
        )
