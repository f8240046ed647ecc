"""
Tests for plistconf.logging module.
"""

from __future__ import annotations

from plistconf import ParsingOptions, PlistSnapshot
from plistconf.logging import (
    DefaultLogger,
    SilentLogger,
    get_global_logger,
    get_logger,
    set_global_logger,
)
from plistconf.secrets_policy import AllSecrets


class TestLoggers:
    """Tests for logger implementations."""

    def test_default_global_logger_is_silent(self):
        """Test library code prints nothing by default."""
        assert isinstance(get_global_logger(), SilentLogger)

    def test_verbose_only(self, capsys):
        """Test verbose messages print and debug messages don't."""
        logger = DefaultLogger(verbose=True)

        logger.verbose("SNAPSHOT", "shown")
        logger.debug("PARSE", "hidden")

        assert capsys.readouterr().out == "[SNAPSHOT] shown\n"

    def test_debug_implies_verbose(self, capsys):
        """Test debug mode prints both levels."""
        logger = get_logger(debug=True)

        logger.verbose("A", "one")
        logger.debug("B", "two")

        assert capsys.readouterr().out == "[A] one\n[B] two\n"


class TestSnapshotLogging:
    """Tests for what snapshot construction logs."""

    def test_silent_by_default(self, make_plist, capsys):
        """Test construction prints nothing with the default logger."""
        PlistSnapshot.from_data(make_plist({"a": 1}), "p")

        assert capsys.readouterr().out == ""

    def test_debug_output_has_no_values(self, make_plist, capsys):
        """Test debug logging lists keys and types, never values."""
        set_global_logger(get_logger(debug=True))

        PlistSnapshot.from_data(
            make_plist({"token": "abc123", "port": 8080}),
            "p",
            ParsingOptions(secrets=AllSecrets()),
        )

        out = capsys.readouterr().out
        assert "[PARSE] port -> int" in out
        assert "[PARSE] token -> string" in out
        assert "abc123" not in out
        assert "8080" not in out
