"""
Pattern compiler.

Turns a pattern string like ``DD°MM''SS.SSS"X`` into a tree of format nodes.
Compilation happens in three steps:

1. ``tokenize`` splits the pattern into numeric fields, sign symbols,
   brackets and literal text (resolving quotes).
2. ``compile_pattern`` builds the node tree by recursive descent over the
   bracket structure.
3. ``validate`` rejects field combinations whose meaning is ambiguous.
"""

import logging
from collections import Counter
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from ..core import constants
from ..exceptions import LocationException
from .combinators import Composite, OptionalGroup
from .fields import Axis, Field, FieldKind, Format, Literal, SignField, SignKind, Unit


logger = logging.getLogger(__name__)


class TokenType(Enum):
    FIELD = "field"
    SIGN = "sign"
    HEMISPHERE = "hemisphere"
    OPTIONAL_START = "optional_start"
    OPTIONAL_END = "optional_end"
    LITERAL = "literal"


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str
    position: int


def _run_end(pattern: str, start: int, letter: str) -> int:
    index = start
    while index < len(pattern) and pattern[index] == letter:
        index += 1
    return index


def _continues_with(pattern: str, index: int, letter: str) -> bool:
    """True if a decimal separator followed by ``letter`` starts at ``index``."""
    return (
        index + 1 < len(pattern)
        and pattern[index] in constants.DECIMAL_SEPARATORS
        and pattern[index + 1] == letter
    )


def tokenize(pattern: str) -> List[Token]:
    """
    Split a pattern into tokens.

    Args:
        pattern: Location pattern

    Returns:
        List of tokens; adjacent literal characters are merged

    Raises:
        LocationException: On an unclosed quote or a numeric field with
            more than one decimal separator
    """
    tokens: List[Token] = []
    literal: List[str] = []
    literal_start = 0
    quote = False
    quote_start = 0

    def flush():
        if literal:
            tokens.append(Token(TokenType.LITERAL, "".join(literal), literal_start))
            literal.clear()

    index = 0
    while index < len(pattern):
        char = pattern[index]

        if char == constants.QUOTE:
            if index + 1 < len(pattern) and pattern[index + 1] == constants.QUOTE:
                if not literal:
                    literal_start = index
                literal.append(constants.QUOTE)
                index += 2
                continue
            quote = not quote
            quote_start = index
            index += 1
            continue

        if quote or char not in constants.PROTECTED_CHARS:
            if not literal:
                literal_start = index
            literal.append(char)
            index += 1
            continue

        flush()

        if char in constants.FIELD_LETTERS:
            end = _run_end(pattern, index, char)
            if _continues_with(pattern, end, char):
                end = _run_end(pattern, end + 1, char)
                if _continues_with(pattern, end, char):
                    raise LocationException(
                        f"Numeric field at position {index} of '{pattern}' contains "
                        "more than one decimal separator."
                    )
            tokens.append(Token(TokenType.FIELD, pattern[index:end], index))
            index = end
            continue

        if char == constants.SIGN:
            token_type = TokenType.SIGN
        elif char in (constants.NORTH_SOUTH, constants.EAST_WEST):
            token_type = TokenType.HEMISPHERE
        elif char == constants.OPTIONAL_START:
            token_type = TokenType.OPTIONAL_START
        else:
            token_type = TokenType.OPTIONAL_END

        tokens.append(Token(token_type, char, index))
        index += 1

    if quote:
        raise LocationException(
            f"Missing closing ' character for quote at position {quote_start} in '{pattern}'."
        )

    flush()
    return tokens


_ANGLE_UNITS = (Unit.DEGREE, Unit.MINUTE, Unit.SECOND)


def _resolutions(tokens: List[Token]) -> Dict[Axis, Tuple[Unit, int]]:
    """Finest unsigned angle unit and its fraction digits for each axis."""
    finest: Dict[Axis, Tuple[Unit, int]] = {}
    for token in tokens:
        if token.type is not TokenType.FIELD:
            continue
        field = Field.of_pattern(token.text)
        unit = field.kind.unit
        if field.kind.signed or unit not in _ANGLE_UNITS:
            continue
        current = finest.get(field.axis)
        if current is None or _ANGLE_UNITS.index(unit) > _ANGLE_UNITS.index(current[0]):
            finest[field.axis] = (unit, field.rule.fraction_digits)
    return finest


class _Compiler:
    """Recursive descent over the token list."""

    def __init__(self, pattern: str, tokens: List[Token]):
        self.pattern = pattern
        self.tokens = tokens
        self.index = 0
        self.resolutions = _resolutions(tokens)

    def error(self, message: str, token: Token) -> LocationException:
        return LocationException(f"{message} at position {token.position} in '{self.pattern}'.")

    def followed_by_field(self) -> bool:
        """True if the next token, ignoring brackets, is a numeric field."""
        for token in self.tokens[self.index:]:
            if token.type in (TokenType.OPTIONAL_START, TokenType.OPTIONAL_END):
                continue
            return token.type is TokenType.FIELD
        return False

    def compile(self) -> Composite:
        formats, end = self.sequence()
        if end is not None:
            raise self.error("Missing open '[' bracket", end)
        return Composite(formats)

    def sequence(self) -> Tuple[List[Format], Optional[Token]]:
        """
        Compile tokens until a closing bracket or the end of the pattern.

        Returns:
            The compiled formats and the closing bracket token (None at the end)
        """
        formats: List[Format] = []

        while self.index < len(self.tokens):
            token = self.tokens[self.index]
            self.index += 1

            if token.type is TokenType.OPTIONAL_END:
                return formats, token

            if token.type is TokenType.OPTIONAL_START:
                group, end = self.sequence()
                if end is None:
                    raise self.error("No closing ']' found for '['", token)
                formats.append(OptionalGroup(Composite(group)))

            elif token.type is TokenType.SIGN:
                following = self.tokens[self.index] if self.index < len(self.tokens) else None
                if following is None or following.type is not TokenType.FIELD:
                    raise self.error("'+' must be followed by a numeric field", token)
                axis = FieldKind.of_letter(following.text[0]).axis
                formats.append(SignField(SignKind.sign_of(axis)))

            elif token.type is TokenType.HEMISPHERE:
                formats.append(SignField(SignKind.hemisphere_of(token.text)))

            elif token.type is TokenType.FIELD:
                field = Field.of_pattern(token.text)
                formats.append(replace(
                    field,
                    bounded=field.rule.integer_digits > 1 and self.followed_by_field(),
                    resolution=self.resolutions.get(field.axis),
                ))

            else:
                formats.append(Literal(token.text))

        return formats, None


def _walk(formats) -> Iterator[Format]:
    for fmt in formats:
        if isinstance(fmt, OptionalGroup):
            yield from _walk(fmt.composite)
        elif isinstance(fmt, Composite):
            yield from _walk(fmt)
        else:
            yield fmt


def validate(pattern: str, composite: Composite) -> None:
    """
    Reject patterns with ambiguous field combinations.

    - every location part (degrees, minutes, seconds, meters) occurs at most
      once per axis
    - every axis has at most one sign source: ``+``, a hemisphere letter or
      a signed field (``L``, ``l``, ``E``)
    - minutes need whole degrees (``D``/``d``), seconds need minutes
    - fractional degrees can't be followed by minutes, fractional minutes
      can't be followed by seconds

    Raises:
        LocationException: If one of the rules is violated
    """
    fields: Dict[Tuple[Axis, Unit], Field] = {}
    signs: Counter = Counter()

    for fmt in _walk(composite):
        if isinstance(fmt, Field):
            key = (fmt.axis, fmt.kind.unit)
            if key in fields:
                raise LocationException(
                    f"Pattern '{pattern}' contains the {fmt.axis.value} "
                    f"{fmt.kind.unit.value} twice ('{fields[key]}' and '{fmt}')."
                )
            fields[key] = fmt
            if fmt.kind.signed:
                signs[fmt.axis] += 1
        elif isinstance(fmt, SignField):
            signs[fmt.axis] += 1

    for axis, count in signs.items():
        if count > 1:
            raise LocationException(
                f"Pattern '{pattern}' defines the sign of the {axis.value} more than once."
            )

    for axis in (Axis.LATITUDE, Axis.LONGITUDE):
        degrees = fields.get((axis, Unit.DEGREE))
        minutes = fields.get((axis, Unit.MINUTE))
        seconds = fields.get((axis, Unit.SECOND))

        if minutes is not None:
            if degrees is None:
                raise LocationException(
                    f"Minutes field '{minutes}' in '{pattern}' requires a degree field."
                )
            if degrees.kind.signed:
                raise LocationException(
                    f"Signed degrees '{degrees}' in '{pattern}' can't be combined with minutes."
                )
            if degrees.rule.fraction_digits:
                raise LocationException(
                    f"Fractional degrees '{degrees}' in '{pattern}' can't be followed by minutes."
                )

        if seconds is not None:
            if minutes is None:
                raise LocationException(
                    f"Seconds field '{seconds}' in '{pattern}' requires a minutes field."
                )
            if minutes.rule.fraction_digits:
                raise LocationException(
                    f"Fractional minutes '{minutes}' in '{pattern}' can't be followed by seconds."
                )


def compile_pattern(pattern: str) -> Composite:
    """
    Compile and validate a location pattern.

    Args:
        pattern: Location pattern

    Returns:
        Root composite of the format tree

    Raises:
        LocationException: If the pattern is malformed or ambiguous
    """
    if pattern is None:
        raise LocationException("Pattern must not be None.")

    try:
        composite = _Compiler(pattern, tokenize(pattern)).compile()
        validate(pattern, composite)
    except LocationException as e:
        logger.debug(f"Invalid pattern '{pattern}': {e}")
        raise

    logger.debug(f"Compiled pattern '{pattern}' into {len(composite)} formats")
    return composite
