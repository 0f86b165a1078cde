"""
Fixed-width decimal rule of a single numeric field.

A field specifier such as ``DD``, ``SS.SSS`` or ``HHHH,H`` is turned into a
decimal pattern (``00``, ``00.000``, ``0000,0``) with a fixed number of
integer digits (zero padded) and fraction digits (rounded half-even).
"""

import math
import string
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Optional

from ..core import constants
from ..exceptions import FormatterException, LocationException
from .cursor import Cursor


def _scan_digits(text: str, start: int, limit: Optional[int] = None) -> int:
    """Return the end index of the digit run starting at ``start``."""
    end = len(text) if limit is None else min(len(text), start + limit)
    index = start
    while index < end and text[index] in string.digits:
        index += 1
    return index


@dataclass(frozen=True)
class NumericField:
    """Decimal format/parse rule derived from a field specifier."""

    pattern: str
    letter: str
    integer_digits: int
    fraction_digits: int
    separator: str = constants.DEFAULT_DECIMAL_SEPARATOR

    @classmethod
    def of_pattern(cls, pattern: str) -> "NumericField":
        """
        Compile a field specifier.

        Args:
            pattern: Specifier like ``DD``, ``mm.mmm`` or ``E,EE``

        Returns:
            Compiled numeric rule

        Raises:
            LocationException: If the specifier is malformed
        """
        if not pattern:
            raise LocationException("Empty numeric field pattern.")

        letter = pattern[0]
        if letter not in constants.FIELD_LETTERS:
            raise LocationException(f"Unknown field letter '{letter}' in '{pattern}'.")

        separators = [i for i, c in enumerate(pattern) if c in constants.DECIMAL_SEPARATORS]
        if len(separators) > 1:
            raise LocationException(
                f"Numeric field '{pattern}' contains more than one decimal separator."
            )

        if separators:
            position = separators[0]
            integer = pattern[:position]
            separator = pattern[position]
            fraction = pattern[position + 1:]
            if not fraction:
                raise LocationException(f"Numeric field '{pattern}' has no fraction digits.")
        else:
            integer, separator, fraction = pattern, constants.DEFAULT_DECIMAL_SEPARATOR, ""

        invalid = [c for c in integer + fraction if c != letter]
        if invalid:
            raise LocationException(
                f"Unrecognized character '{invalid[0]}' in numeric field '{pattern}'."
            )

        return cls(
            pattern=pattern,
            letter=letter,
            integer_digits=len(integer),
            fraction_digits=len(fraction),
            separator=separator,
        )

    @property
    def decimal_pattern(self) -> str:
        """The specifier with every field letter replaced by ``0``."""
        return "".join("0" if c == self.letter else c for c in self.pattern)

    def format(self, value: float) -> str:
        """
        Format a value with the fixed integer and fraction digit counts.

        Args:
            value: Value to format; the sign is kept

        Returns:
            Zero padded decimal text
        """
        if not math.isfinite(value):
            raise FormatterException(f"Can't format {value} with '{self.pattern}'.")

        quantum = Decimal(1).scaleb(-self.fraction_digits)
        number = Decimal(value).quantize(quantum, rounding=ROUND_HALF_EVEN)

        sign = "-" if number < 0 else ""
        integer, _, fraction = format(abs(number), "f").partition(".")

        text = sign + integer.zfill(self.integer_digits)
        if self.fraction_digits:
            text += self.separator + fraction
        return text

    def parse(
        self, text: str, cursor: Cursor, signed: bool = False, bounded: bool = False
    ) -> Optional[float]:
        """
        Read a number at the cursor position.

        Args:
            text: Input text
            cursor: Current position; advanced past the number on success
            signed: Whether a leading ``+``/``-`` belongs to the number
            bounded: Read at most as many digits as the field formats; used
                when another numeric field follows directly (``DDMMSS``)

        Returns:
            Parsed value, or None if no digit could be read (the failure is
            recorded on the cursor)
        """
        start = cursor.index
        index = start

        sign = ""
        if signed and index < len(text) and text[index] in "+-":
            sign = text[index]
            index += 1

        integer_end = _scan_digits(
            text, index, self.integer_digits if bounded else None
        )
        integer = text[index:integer_end]

        fraction = ""
        end = integer_end
        if (
            self.fraction_digits
            and integer_end < len(text)
            and text[integer_end] == self.separator
        ):
            fraction_end = _scan_digits(
                text, integer_end + 1, self.fraction_digits if bounded else None
            )
            if fraction_end > integer_end + 1:
                fraction = text[integer_end + 1:fraction_end]
                end = fraction_end

        if not integer and not fraction:
            cursor.fail(f"Not found {self.pattern}", start)
            return None

        cursor.index = end
        return float(f"{sign}{integer or '0'}.{fraction or '0'}")

    def __str__(self) -> str:
        return self.pattern
