"""
Command line entry point for the location format engine.

Formats raw coordinates with a pattern, or parses formatted text back into
latitude, longitude and elevation.
"""

import argparse
import sys
from typing import List, Optional

from .core import Config, setup_logger, LoggerContext
from .exceptions import LocationException
from .formatter import CANNED_PATTERNS, LocationFormatter, resolve_formatter
from .models import Location


def _format_value(value: Optional[float]) -> str:
    return "-" if value is None else repr(value)


class LocationFormatApp:
    """Command line application wrapping a single location formatter."""

    def __init__(self, config_file: Optional[str] = None, pattern: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
            pattern: Pattern or canned formatter name; overrides the configuration
        """
        self.config = Config(config_file)
        self.logger = setup_logger(
            log_file=self.config.log_file,
            log_level=self.config.log_level
        )
        self.logger.debug(f"Configuration: {self.config}")

        self.formatter: LocationFormatter = resolve_formatter(
            pattern or self.config.default_pattern,
            logger=self.logger
        )

    def format(
        self,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        elevation: Optional[float] = None
    ) -> str:
        """Format the given location parts with the configured formatter."""
        with LoggerContext(self.logger, "formatting", self.formatter.pattern):
            return self.formatter.format_values(latitude, longitude, elevation)

    def parse(self, text: str) -> Location:
        """Parse text with the configured formatter."""
        with LoggerContext(self.logger, "parsing", self.formatter.pattern):
            return self.formatter.parse(text)


def _add_common_arguments(parser: argparse.ArgumentParser, default) -> None:
    parser.add_argument(
        "--config",
        type=str,
        default=default,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--pattern",
        type=str,
        default=default,
        help=f"Location pattern or one of: {', '.join(CANNED_PATTERNS)}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="location-format",
        description="Format and parse geographic locations with patterns"
    )
    _add_common_arguments(parser, None)

    # Options repeated after the sub-command must not reset the ones given before it
    common = argparse.ArgumentParser(add_help=False)
    _add_common_arguments(common, argparse.SUPPRESS)

    commands = parser.add_subparsers(dest="command", required=True)

    format_command = commands.add_parser("format", parents=[common], help="Format a location")
    format_command.add_argument("--lat", type=float, default=None, help="Latitude in degrees")
    format_command.add_argument("--lon", type=float, default=None, help="Longitude in degrees")
    format_command.add_argument("--ele", type=float, default=None, help="Elevation in meters")

    parse_command = commands.add_parser(
        "parse", parents=[common], help="Parse a formatted location"
    )
    parse_command.add_argument("text", type=str, help="Text to parse")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        app = LocationFormatApp(config_file=args.config, pattern=args.pattern)

        if args.command == "format":
            print(app.format(args.lat, args.lon, args.ele))
        else:
            location = app.parse(args.text)
            print(" ".join(
                _format_value(v)
                for v in (location.latitude, location.longitude, location.elevation)
            ))

    except (LocationException, ValueError, FileNotFoundError) as e:
        print(f"location-format: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
