"""Exceptions raised by the location format engine."""


class LocationException(Exception):
    """Base exception; raised directly when a pattern cannot be compiled."""

    pass


class FormatterException(LocationException):
    """Raised when a location can't be formatted with a given pattern."""

    pass


class ParseException(FormatterException):
    """
    Raised when a text can't be parsed into a location.

    Attributes:
        text: The offending input text
        index: Position of the failure within ``text``
        cause: Human readable reason of the failure
    """

    def __init__(self, cause: str, text: str, index: int):
        super().__init__(f"{cause} at position {index} in '{text}'.")
        self.cause = cause
        self.text = text
        self.index = index
