"""
Format tree building blocks.

Provides the nodes a location pattern is compiled into, the parse state
(cursor and location builder) and the pattern compiler.
"""

from .cursor import Cursor
from .builder import LocationBuilder
from .numeric import NumericField
from .fields import (
    Axis,
    Field,
    FieldKind,
    Format,
    Literal,
    SignField,
    SignKind,
    Unit,
    decompose,
)
from .combinators import Composite, OptionalGroup
from .compiler import compile_pattern, tokenize, validate

__all__ = [
    "Cursor",
    "LocationBuilder",
    "NumericField",
    "Axis",
    "Field",
    "FieldKind",
    "Format",
    "Literal",
    "SignField",
    "SignKind",
    "Unit",
    "decompose",
    "Composite",
    "OptionalGroup",
    "compile_pattern",
    "tokenize",
    "validate",
]
