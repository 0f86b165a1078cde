"""
Parse position tracking.

A cursor is the only piece of mutable state shared between the nodes of a
format tree while scanning a text. Nodes never raise; they record the failure
on the cursor and return ``False``.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class Cursor:
    """Current scan position and the position of the last failure."""

    index: int = 0
    error_index: int = -1
    error_message: Optional[str] = None

    @property
    def has_error(self) -> bool:
        """True if a failure has been recorded and not rolled back."""
        return self.error_index >= 0

    def advance(self, count: int) -> None:
        """Move the scan position forward by ``count`` characters."""
        self.index += count

    def fail(self, message: str, index: Optional[int] = None) -> bool:
        """
        Record a parse failure.

        Args:
            message: Human readable reason of the failure
            index: Failure position, defaults to the current index

        Returns:
            Always False, so parsers can ``return cursor.fail(...)``
        """
        self.error_index = self.index if index is None else index
        self.error_message = message
        return False

    def snapshot(self) -> Tuple[int, int, Optional[str]]:
        """Return the complete cursor state."""
        return self.index, self.error_index, self.error_message

    def restore(self, state: Tuple[int, int, Optional[str]]) -> None:
        """Reset the cursor to a state taken with ``snapshot``."""
        self.index, self.error_index, self.error_message = state
