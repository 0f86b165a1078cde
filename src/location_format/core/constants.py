"""
Application-wide constants for the location format engine.

This module defines the pattern alphabet and default values used throughout
the package. Canned patterns are defined next to the formatter that uses them.
"""

# Numeric field letters
LATITUDE_LETTERS = "LDMS"
LONGITUDE_LETTERS = "ldms"
ELEVATION_LETTERS = "EH"
FIELD_LETTERS = LATITUDE_LETTERS + LONGITUDE_LETTERS + ELEVATION_LETTERS

# Non-numeric pattern symbols
SIGN = "+"
NORTH_SOUTH = "X"
EAST_WEST = "x"
OPTIONAL_START = "["
OPTIONAL_END = "]"
QUOTE = "'"

# Characters which must be quoted to appear as literal text
PROTECTED_CHARS = frozenset(
    FIELD_LETTERS + SIGN + NORTH_SOUTH + EAST_WEST + OPTIONAL_START + OPTIONAL_END
)

# Decimal separators allowed inside a numeric field (e.g. SS.SSS, HH,H)
DECIMAL_SEPARATORS = ".,"
DEFAULT_DECIMAL_SEPARATOR = "."

# Degree decomposition
MINUTES_PER_DEGREE = 60.0
SECONDS_PER_DEGREE = 3600.0

# Hemisphere letters
NORTH = "N"
SOUTH = "S"
EAST = "E"
WEST = "W"

# Defaults used by the configuration and the command line
DEFAULT_PATTERN = "DD°MM''SS.SSS\"X dd°mm''ss.sss\"x[ E.EE'm']"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_CONFIG_FILE = "location_format.json"
LOGGER_NAME = "location_format"
