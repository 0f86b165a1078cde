"""
Tests for the command line application.
"""

import pytest  # type: ignore
from src.location_format import LocationFormatApp
from src.location_format.exceptions import LocationException, ParseException
from src.location_format.formatter import LocationFormatter
from src.location_format.main import build_parser, main
from src.location_format.models import Location


@pytest.mark.integration
class TestMain:
    """Test cases for the location-format command."""

    def test_format(self, clean_env, capsys):
        """Test formatting with a canned formatter."""
        code = main([
            "--pattern", "ISO_SHORT", "format", "--lat", "23.987635", "--lon", "-65.234275",
        ])

        assert code == 0
        assert capsys.readouterr().out == "+23.99-065.23\n"

    def test_format_pattern_after_command(self, clean_env, capsys):
        """Test options given after the sub-command."""
        code = main(["format", "--pattern", "DD X", "--lat", "-12.5"])

        assert code == 0
        assert capsys.readouterr().out == "12 S\n"

    def test_format_pattern_before_command(self, clean_env, capsys):
        """Test options given before the sub-command are kept."""
        code = main(["--pattern", "ISO_LAT_SHORT", "format", "--lat", "12.5"])

        assert code == 0
        assert capsys.readouterr().out == "+12.50\n"

    def test_format_default_pattern(self, clean_env, capsys):
        """Test the configured default pattern."""
        code = main(["format", "--lat", "1.5", "--lon", "2.25"])

        assert code == 0
        assert capsys.readouterr().out == "01°30'00.000\"N 02°15'00.000\"E\n"

    def test_format_pattern_from_env(self, clean_env, monkeypatch, capsys):
        """Test the pattern configured by environment."""
        monkeypatch.setenv("LOCATION_FORMAT_PATTERN", "ISO_ELE_SHORT")

        assert main(["format", "--ele", "-3"]) == 0
        assert capsys.readouterr().out == "-3CRS\n"

    def test_parse(self, clean_env, capsys):
        """Test parsing prints latitude, longitude and elevation."""
        code = main(["parse", "--pattern", "+DD.DD+ddd.dd", "+12.50-007.25"])

        assert code == 0
        assert capsys.readouterr().out == "12.5 -7.25 -\n"

    def test_parse_negative_text(self, clean_env, capsys):
        """Test texts starting with a minus sign."""
        code = main(["parse", "--pattern", "+DD", "-12"])

        assert code == 0
        assert capsys.readouterr().out == "-12.0 - -\n"

    def test_invalid_pattern(self, clean_env, capsys):
        """Test invalid patterns exit with an error."""
        code = main(["--pattern", "DD[", "format", "--lat", "1"])

        assert code == 1
        assert "location-format:" in capsys.readouterr().err

    def test_parse_failure(self, clean_env, capsys):
        """Test unparsable text exits with an error."""
        code = main(["parse", "--pattern", "DD", "ab"])

        assert code == 1
        assert "Not found DD at position 0 in 'ab'." in capsys.readouterr().err

    def test_missing_component(self, clean_env, capsys):
        """Test formatting without a required component."""
        code = main(["--pattern", "ISO_SHORT", "format", "--lat", "1"])

        assert code == 1
        assert "Invalid format" in capsys.readouterr().err

    def test_missing_config_file(self, clean_env, capsys):
        """Test a missing configuration file exits with an error."""
        code = main(["--config", str(clean_env / "missing.json"), "format", "--lat", "1"])

        assert code == 1
        assert "Configuration file not found" in capsys.readouterr().err

    def test_command_required(self):
        """Test a sub-command is required."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestLocationFormatApp:
    """Test cases for LocationFormatApp."""

    @pytest.fixture
    def app(self, clean_env):
        """Create application with the long ISO formatter."""
        return LocationFormatApp(pattern="ISO_LONG")

    def test_formatter(self, app):
        """Test the canned formatter is used."""
        assert app.formatter is LocationFormatter.ISO_LONG

    def test_format(self, app):
        """Test formatting raw values."""
        assert app.format(23.987635, -65.234275, -65.234275) == "+235915.49-0651403.39-65.23CRS"

    def test_parse(self, app):
        """Test parsing text."""
        location = app.parse("+003000.00-0001500.00")

        assert location == Location.of(0.5, -0.25)

    def test_parse_error(self, app):
        """Test parse errors propagate."""
        with pytest.raises(ParseException):
            app.parse("+0030")

    def test_invalid_pattern(self, clean_env):
        """Test invalid patterns raise on creation."""
        with pytest.raises(LocationException):
            LocationFormatApp(pattern="+")
