"""
Leaf nodes of a compiled location pattern.

- Field: a numeric location part (degrees, minutes, seconds or meters)
- SignField: a sign character (``+``/``-``) or a hemisphere letter
- Literal: constant text
"""

import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_EVEN
from enum import Enum
from typing import Optional, Tuple

from ..core import constants
from ..exceptions import LocationException
from ..models import Location
from .builder import LocationBuilder
from .cursor import Cursor
from .numeric import NumericField


class Axis(Enum):
    """The three components of a location."""

    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    ELEVATION = "elevation"

    def value_of(self, location: Location) -> Optional[float]:
        return getattr(location, self.value)

    def set_sign(self, builder: LocationBuilder, sign: int) -> None:
        getattr(builder, f"set_{self.value}_sign")(sign)


class Unit(Enum):
    DEGREE = "degree"
    MINUTE = "minute"
    SECOND = "second"
    METER = "meter"


def decompose(degrees: float, unit: Unit, fraction_digits: int) -> Tuple[float, float, float]:
    """
    Split the absolute value of an angle into degrees, minutes and seconds.

    The angle is rounded (half-even) to the resolution of its finest unit
    before it is split, so a rounded up second carries into the minutes and
    degrees instead of showing up as ``60``.

    Args:
        degrees: Angle in degrees, the sign is ignored
        unit: Finest unit that is rendered, DEGREE, MINUTE or SECOND
        fraction_digits: Fraction digits of the finest unit

    Returns:
        Whole degrees, minutes and seconds; only the finest unit has a
        fraction, units finer than ``unit`` are zero
    """
    dd = Decimal(abs(degrees))
    quantum = Decimal(1).scaleb(-fraction_digits)

    if unit is Unit.DEGREE:
        return float(dd.quantize(quantum, rounding=ROUND_HALF_EVEN)), 0.0, 0.0

    if unit is Unit.MINUTE:
        total = (dd * int(constants.MINUTES_PER_DEGREE)).quantize(quantum, rounding=ROUND_HALF_EVEN)
        d, m = divmod(total, int(constants.MINUTES_PER_DEGREE))
        return float(d), float(m), 0.0

    total = (dd * int(constants.SECONDS_PER_DEGREE)).quantize(quantum, rounding=ROUND_HALF_EVEN)
    d, rest = divmod(total, int(constants.SECONDS_PER_DEGREE))
    m, s = divmod(rest, int(constants.MINUTES_PER_DEGREE))
    return float(d), float(m), float(s)


class FieldKind(Enum):
    """Numeric field letters with the location part they access."""

    LATITUDE = ("L", Axis.LATITUDE, Unit.DEGREE, True)
    DEGREE_OF_LATITUDE = ("D", Axis.LATITUDE, Unit.DEGREE, False)
    MINUTE_OF_LATITUDE = ("M", Axis.LATITUDE, Unit.MINUTE, False)
    SECOND_OF_LATITUDE = ("S", Axis.LATITUDE, Unit.SECOND, False)
    LONGITUDE = ("l", Axis.LONGITUDE, Unit.DEGREE, True)
    DEGREE_OF_LONGITUDE = ("d", Axis.LONGITUDE, Unit.DEGREE, False)
    MINUTE_OF_LONGITUDE = ("m", Axis.LONGITUDE, Unit.MINUTE, False)
    SECOND_OF_LONGITUDE = ("s", Axis.LONGITUDE, Unit.SECOND, False)
    ELEVATION = ("E", Axis.ELEVATION, Unit.METER, True)
    METER_OF_ELEVATION = ("H", Axis.ELEVATION, Unit.METER, False)

    def __init__(self, letter: str, axis: Axis, unit: Unit, signed: bool):
        self.letter = letter
        self.axis = axis
        self.unit = unit
        self.signed = signed

    @classmethod
    def of_letter(cls, letter: str) -> "FieldKind":
        for kind in cls:
            if kind.letter == letter:
                return kind
        raise LocationException(f"Unknown field letter '{letter}'.")


class Format:
    """
    Base class of all pattern nodes.

    ``format`` returns None if a required location part is missing.
    ``parse`` returns False on failure and records it on the cursor.
    """

    def format(self, location: Location) -> Optional[str]:
        raise NotImplementedError

    def parse(self, text: str, cursor: Cursor, builder: LocationBuilder) -> bool:
        raise NotImplementedError

    def to_pattern(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_pattern()


@dataclass(frozen=True)
class Field(Format):
    """
    A numeric location part.

    ``resolution`` is the finest unit (and its fraction digits) rendered for
    the same axis in the whole pattern. Degrees, minutes and seconds are
    taken from the angle rounded to that resolution, so ``DD MM SS.S`` never
    shows ``60`` seconds. Whole degrees without smaller units are truncated.

    A bounded field reads no more digits than it writes, so that directly
    adjacent fields like ``DDMMSS`` can be split on parse.
    """

    kind: FieldKind
    rule: NumericField
    bounded: bool = False
    resolution: Optional[Tuple[Unit, int]] = None

    @classmethod
    def of_pattern(
        cls,
        pattern: str,
        bounded: bool = False,
        resolution: Optional[Tuple[Unit, int]] = None,
    ) -> "Field":
        rule = NumericField.of_pattern(pattern)
        return cls(
            kind=FieldKind.of_letter(rule.letter),
            rule=rule,
            bounded=bounded,
            resolution=resolution,
        )

    @property
    def axis(self) -> Axis:
        return self.kind.axis

    def value(self, location: Location) -> Optional[float]:
        """Return the number this field renders for ``location``."""
        raw = self.kind.axis.value_of(location)
        if raw is None:
            return None

        # left to NumericField.format, which rejects non-finite numbers
        if self.kind.signed or not math.isfinite(raw):
            return raw

        unit = self.kind.unit
        if unit is Unit.METER:
            return abs(raw)

        finest, digits = self.resolution or (unit, self.rule.fraction_digits)
        if finest is Unit.DEGREE:
            return abs(raw) if digits else float(math.trunc(abs(raw)))

        degrees, minutes, seconds = decompose(raw, finest, digits)
        if unit is Unit.DEGREE:
            return degrees
        return minutes if unit is Unit.MINUTE else seconds

    def format(self, location: Location) -> Optional[str]:
        value = self.value(location)
        return None if value is None else self.rule.format(value)

    def parse(self, text: str, cursor: Cursor, builder: LocationBuilder) -> bool:
        value = self.rule.parse(
            text, cursor, signed=self.kind.signed, bounded=self.bounded
        )
        if value is None:
            return False

        kind = self.kind
        if kind in (FieldKind.LATITUDE, FieldKind.DEGREE_OF_LATITUDE):
            builder.add_latitude(value)
        elif kind is FieldKind.MINUTE_OF_LATITUDE:
            builder.add_latitude_minute(value)
        elif kind is FieldKind.SECOND_OF_LATITUDE:
            builder.add_latitude_second(value)
        elif kind in (FieldKind.LONGITUDE, FieldKind.DEGREE_OF_LONGITUDE):
            builder.add_longitude(value)
        elif kind is FieldKind.MINUTE_OF_LONGITUDE:
            builder.add_longitude_minute(value)
        elif kind is FieldKind.SECOND_OF_LONGITUDE:
            builder.add_longitude_second(value)
        else:
            builder.set_elevation(value)
        return True

    def to_pattern(self) -> str:
        return self.rule.pattern


class SignKind(Enum):
    """Sign carrying characters: ``+`` per axis and the hemisphere letters."""

    LATITUDE_SIGN = (constants.SIGN, Axis.LATITUDE, "+", "-")
    LONGITUDE_SIGN = (constants.SIGN, Axis.LONGITUDE, "+", "-")
    ELEVATION_SIGN = (constants.SIGN, Axis.ELEVATION, "+", "-")
    NORTH_SOUTH = (constants.NORTH_SOUTH, Axis.LATITUDE, constants.NORTH, constants.SOUTH)
    EAST_WEST = (constants.EAST_WEST, Axis.LONGITUDE, constants.EAST, constants.WEST)

    def __init__(self, symbol: str, axis: Axis, positive: str, negative: str):
        self.symbol = symbol
        self.axis = axis
        self.positive = positive
        self.negative = negative

    @classmethod
    def sign_of(cls, axis: Axis) -> "SignKind":
        """The ``+`` kind for the given axis."""
        for kind in cls:
            if kind.symbol == constants.SIGN and kind.axis is axis:
                return kind
        raise LocationException(f"No sign field for {axis.value}.")

    @classmethod
    def hemisphere_of(cls, symbol: str) -> "SignKind":
        if symbol == constants.NORTH_SOUTH:
            return cls.NORTH_SOUTH
        if symbol == constants.EAST_WEST:
            return cls.EAST_WEST
        raise LocationException(f"Unknown hemisphere symbol '{symbol}'.")


@dataclass(frozen=True)
class SignField(Format):
    """Writes and reads the sign of one axis without touching its magnitude."""

    kind: SignKind

    @property
    def axis(self) -> Axis:
        return self.kind.axis

    def format(self, location: Location) -> Optional[str]:
        raw = self.kind.axis.value_of(location)
        if raw is None:
            return None
        return self.kind.positive if raw >= 0.0 else self.kind.negative

    def parse(self, text: str, cursor: Cursor, builder: LocationBuilder) -> bool:
        index = cursor.index
        char = text[index] if index < len(text) else ""

        if char and char == self.kind.positive:
            sign = +1
        elif char and char == self.kind.negative:
            sign = -1
        else:
            return cursor.fail(f"Not found {self.kind.positive}/{self.kind.negative}")

        self.kind.axis.set_sign(builder, sign)
        cursor.advance(1)
        return True

    def to_pattern(self) -> str:
        return self.kind.symbol


def escape(value: str) -> str:
    """Quote literal text so that it compiles back to the same literal."""
    quoted = value.replace(constants.QUOTE, constants.QUOTE * 2)
    if any(c in constants.PROTECTED_CHARS for c in value):
        return constants.QUOTE + quoted + constants.QUOTE
    return quoted


@dataclass(frozen=True)
class Literal(Format):
    """Constant text, copied on format and matched verbatim on parse."""

    value: str

    def format(self, location: Location) -> Optional[str]:
        return self.value

    def parse(self, text: str, cursor: Cursor, builder: LocationBuilder) -> bool:
        if not text.startswith(self.value, cursor.index):
            return cursor.fail(f"Not found '{self.value}'")
        cursor.advance(len(self.value))
        return True

    def to_pattern(self) -> str:
        return escape(self.value)
