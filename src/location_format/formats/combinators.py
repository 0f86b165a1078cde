"""
Sequencing nodes of a compiled location pattern.

A Composite runs its children in order; an OptionalGroup wraps a Composite
and turns its failures into "nothing formatted" / "nothing consumed".
"""

from typing import Optional, Sequence, Tuple

from ..core import constants
from ..models import Location
from .builder import LocationBuilder
from .cursor import Cursor
from .fields import Format


class Composite(Format):
    """Ordered sequence of formats, all of which must succeed."""

    def __init__(self, formats: Sequence[Format]):
        self._formats: Tuple[Format, ...] = tuple(formats)

    @property
    def formats(self) -> Tuple[Format, ...]:
        return self._formats

    def format(self, location: Location) -> Optional[str]:
        parts = []
        for fmt in self._formats:
            part = fmt.format(location)
            if part is None:
                return None
            parts.append(part)
        return "".join(parts)

    def parse(self, text: str, cursor: Cursor, builder: LocationBuilder) -> bool:
        for fmt in self._formats:
            if not fmt.parse(text, cursor, builder):
                return False
        return True

    def to_pattern(self) -> str:
        return "".join(fmt.to_pattern() for fmt in self._formats)

    def __iter__(self):
        return iter(self._formats)

    def __len__(self) -> int:
        return len(self._formats)

    def __eq__(self, other) -> bool:
        return isinstance(other, Composite) and self._formats == other._formats

    def __hash__(self) -> int:
        return hash(self._formats)

    def __repr__(self) -> str:
        return f"Composite({list(self._formats)!r})"


class OptionalGroup(Format):
    """
    Bracketed part of a pattern.

    Formats to an empty string if the wrapped composite can't be formatted.
    A failed parse attempt rolls back the cursor and the builder, so the
    surrounding sequence continues as if the group were not in the pattern.
    """

    def __init__(self, composite: Composite):
        self._composite = composite

    @property
    def composite(self) -> Composite:
        return self._composite

    def format(self, location: Location) -> Optional[str]:
        text = self._composite.format(location)
        return "" if text is None else text

    def parse(self, text: str, cursor: Cursor, builder: LocationBuilder) -> bool:
        state = cursor.snapshot()
        attempt = builder.copy()

        if self._composite.parse(text, cursor, attempt):
            builder.restore(attempt)
        else:
            cursor.restore(state)
        return True

    def to_pattern(self) -> str:
        return constants.OPTIONAL_START + self._composite.to_pattern() + constants.OPTIONAL_END

    def __eq__(self, other) -> bool:
        return isinstance(other, OptionalGroup) and self._composite == other._composite

    def __hash__(self) -> int:
        return hash(self._composite)

    def __repr__(self) -> str:
        return f"OptionalGroup({self._composite!r})"
