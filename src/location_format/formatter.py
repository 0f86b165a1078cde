"""
Formatter for printing and parsing geographic locations.

A formatter is created from a pattern such as ``DD°MM''SS.SSS"X``, which
formats to ``60°15'59.613"N``. The pattern is compiled once; the formatter is
immutable and can be shared and reused for any number of calls.

Pattern letters and symbols:

    L  latitude in degrees, signed           -34.4334; 23.2332
    D  absolute degree part of latitude      34; 23.2332
    M  minute part of latitude               45; 45.6
    S  second part of latitude               7; 07
    X  hemisphere                            N; S
    l  longitude in degrees, signed          34; -23.2332
    d  absolute degree part of longitude     34; 23.2332
    m  minute part of longitude              45; 45.6
    s  second part of longitude              7; 07
    x  hemisphere                            E; W
    E  elevation in meters, signed           234; 1023; -12
    H  absolute elevation in meters          234; 1023; 12
    +  sign of the following field           +; -
    '  escape for text
    '' single quote
    [  optional section start
    ]  optional section end
"""

import logging
from typing import Dict, Optional, Union

from .exceptions import FormatterException, LocationException, ParseException
from .formats import Composite, Cursor, LocationBuilder, compile_pattern
from .models import Location


class LocationFormatter:
    """Compiled location pattern with format and parse operations."""

    # Canned formatters, assigned below the class body
    ISO_HUMAN_LAT_LONG: "LocationFormatter"
    ISO_HUMAN_LON_LONG: "LocationFormatter"
    ISO_HUMAN_ELE_LONG: "LocationFormatter"
    ISO_HUMAN_LONG: "LocationFormatter"
    ISO_LAT_SHORT: "LocationFormatter"
    ISO_LAT_MEDIUM: "LocationFormatter"
    ISO_LAT_LONG: "LocationFormatter"
    ISO_LON_SHORT: "LocationFormatter"
    ISO_LON_MEDIUM: "LocationFormatter"
    ISO_LON_LONG: "LocationFormatter"
    ISO_ELE_SHORT: "LocationFormatter"
    ISO_ELE_MEDIUM: "LocationFormatter"
    ISO_ELE_LONG: "LocationFormatter"
    ISO_SHORT: "LocationFormatter"
    ISO_MEDIUM: "LocationFormatter"
    ISO_LONG: "LocationFormatter"

    def __init__(
        self,
        pattern: str,
        composite: Composite,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize formatter from an already compiled pattern.

        Use ``of_pattern`` to create formatters.

        Args:
            pattern: Source pattern
            composite: Compiled format tree of ``pattern``
            logger: Logger instance
        """
        self._pattern = pattern
        self._format = composite
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def of_pattern(
        cls,
        pattern: str,
        logger: Optional[logging.Logger] = None
    ) -> "LocationFormatter":
        """
        Create a formatter for the given pattern.

        Args:
            pattern: Location pattern, e.g. ``DD°MM''SS.SSS"X``
            logger: Logger instance

        Returns:
            Compiled formatter

        Raises:
            LocationException: If the pattern is malformed
        """
        return cls(pattern, compile_pattern(pattern), logger=logger)

    @staticmethod
    def named(name: str) -> Optional["LocationFormatter"]:
        """Return the canned formatter with the given name, e.g. ``ISO_SHORT``."""
        return CANNED_FORMATTERS.get(name)

    def to_pattern(self) -> str:
        """
        Return the pattern regenerated from the compiled format tree.

        Literal text is re-escaped, so the result compiles to an equivalent
        formatter.
        """
        return self._format.to_pattern()

    @property
    def pattern(self) -> str:
        """The pattern this formatter was created with."""
        return self._pattern

    def format(
        self,
        location: Union[Location, float, None] = None,
        longitude: Optional[float] = None,
        elevation: Optional[float] = None
    ) -> str:
        """
        Format a location.

        Either pass a Location, or the raw latitude, longitude and elevation
        values (``format(lat)``, ``format(lat, lon)``, ``format(lat, lon, ele)``).

        Args:
            location: Location, or the latitude in degrees
            longitude: Longitude in degrees, if ``location`` is not a Location
            elevation: Elevation in meters, if ``location`` is not a Location

        Returns:
            Formatted text

        Raises:
            FormatterException: If a location part required by the pattern is
                missing
        """
        if not isinstance(location, Location):
            location = Location.of(location, longitude, elevation)
        elif longitude is not None or elevation is not None:
            raise TypeError("Longitude and elevation can't be combined with a Location.")

        text = self._format.format(location)
        if text is None:
            raise FormatterException(
                f"Invalid format '{self.to_pattern()}' for location {location}."
            )
        return text

    def format_values(
        self,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        elevation: Optional[float] = None
    ) -> str:
        """Format the given location parts; missing parts are absent."""
        return self.format(Location.of(latitude, longitude, elevation))

    def parse_at(self, text: str, cursor: Cursor) -> Location:
        """
        Parse a location starting at the cursor position.

        The text doesn't need to be consumed completely; the cursor is left
        behind the last parsed character.

        Args:
            text: Text to parse
            cursor: Start position, updated with the end of the parsed text

        Returns:
            Parsed location

        Raises:
            IndexError: If the cursor lies outside the text
            ParseException: If the text doesn't match the pattern
        """
        if cursor.index < 0 or cursor.index > len(text):
            raise IndexError(f"Parse position {cursor.index} is outside of '{text}'.")

        builder = LocationBuilder()
        if not self._format.parse(text, cursor, builder):
            self.logger.debug(
                f"Parsing '{text}' with '{self._pattern}' failed at {cursor.error_index}: "
                f"{cursor.error_message}"
            )
            raise ParseException(cursor.error_message, text, cursor.error_index)

        return builder.build()

    def parse(self, text: str) -> Location:
        """
        Parse the complete text into a location.

        Args:
            text: Text to parse

        Returns:
            Parsed location; parts not present in the pattern are absent

        Raises:
            ParseException: If the text doesn't match the pattern or is not
                consumed completely
        """
        cursor = Cursor()
        location = self.parse_at(text, cursor)
        if cursor.index != len(text):
            raise ParseException("Not used all input", text, cursor.index)
        return location

    def __eq__(self, other) -> bool:
        return isinstance(other, LocationFormatter) and self._format == other._format

    def __hash__(self) -> int:
        return hash(self._format)

    def __str__(self) -> str:
        return f"LocationFormat[{self.to_pattern()}]"

    def __repr__(self) -> str:
        return f"LocationFormatter.of_pattern({self._pattern!r})"


CANNED_PATTERNS: Dict[str, str] = {
    "ISO_HUMAN_LAT_LONG": "DD°MM''SS.SSS\"X",
    "ISO_HUMAN_LON_LONG": "dd°mm''ss.sss\"x",
    "ISO_HUMAN_ELE_LONG": "E.EE'm'",
    "ISO_HUMAN_LONG": "DD°MM''SS.SSS\"X dd°mm''ss.sss\"x[ E.EE'm']",
    "ISO_LAT_SHORT": "+DD.DD",
    "ISO_LAT_MEDIUM": "+DDMM.MMM",
    "ISO_LAT_LONG": "+DDMMSS.SS",
    "ISO_LON_SHORT": "+ddd.dd",
    "ISO_LON_MEDIUM": "+dddmm.mmm",
    "ISO_LON_LONG": "+dddmmss.ss",
    "ISO_ELE_SHORT": "+H'CRS'",
    "ISO_ELE_MEDIUM": "+H.H'CRS'",
    "ISO_ELE_LONG": "+H.HH'CRS'",
    "ISO_SHORT": "+DD.DD+ddd.dd[+H'CRS']",
    "ISO_MEDIUM": "+DDMM.MMM+dddmm.mmm[+H.H'CRS']",
    "ISO_LONG": "+DDMMSS.SS+dddmmss.ss[+H.HH'CRS']",
}

CANNED_FORMATTERS: Dict[str, LocationFormatter] = {
    name: LocationFormatter.of_pattern(pattern)
    for name, pattern in CANNED_PATTERNS.items()
}

for _name, _formatter in CANNED_FORMATTERS.items():
    setattr(LocationFormatter, _name, _formatter)
del _name, _formatter


def resolve_formatter(
    pattern: str,
    logger: Optional[logging.Logger] = None
) -> LocationFormatter:
    """
    Return the canned formatter called ``pattern`` or compile it.

    Raises:
        LocationException: If ``pattern`` is neither a canned name nor a valid
            pattern
    """
    if pattern is None:
        raise LocationException("Pattern must not be None.")
    return LocationFormatter.named(pattern) or LocationFormatter.of_pattern(pattern, logger=logger)
