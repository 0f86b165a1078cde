"""
Data models for the location format engine.
"""

from .location import Location

__all__ = [
    "Location",
]
