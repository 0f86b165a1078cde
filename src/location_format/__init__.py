"""
Location Format

This package compiles compact coordinate patterns such as ``DD°MM''SS.SSS"X``
into reusable formatters that print geographic locations as text and parse
them back.
"""

__version__ = "0.1.0"
__description__ = "Bidirectional pattern based formatting of geographic locations"

from .exceptions import FormatterException, LocationException, ParseException
from .models import Location
from .formatter import LocationFormatter


def __getattr__(name):
    """Lazy import to avoid loading the command line layer when not needed."""
    if name == "LocationFormatApp":
        from .main import LocationFormatApp
        return LocationFormatApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Location",
    "LocationFormatter",
    "LocationException",
    "FormatterException",
    "ParseException",
    "LocationFormatApp",
]
