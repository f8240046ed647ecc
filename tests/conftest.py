"""
Pytest configuration and shared fixtures for plistconf tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
import plistlib
from typing import Any

import pytest
import yaml

from plistconf.logging import SilentLogger, set_global_logger

SAMPLE_XML_PLIST = """\
<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>
    <key>http</key>
    <dict>
        <key>timeout</key>
        <integer>30</integer>
        <key>endpoint</key>
        <string>https://api.example.com</string>
    </dict>
    <key>features</key>
    <dict>
        <key>darkMode</key>
        <true/>
    </dict>
    <key>retryCount</key>
    <integer>3</integer>
</dict>
</plist>
"""


@pytest.fixture(autouse=True)
def silent_global_logger():
    """Reset the global logger so CLI tests don't leak verbosity."""
    set_global_logger(SilentLogger())
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def sample_xml_plist() -> bytes:
    """Provide the sample XML plist as bytes (4 flattened values)."""
    return SAMPLE_XML_PLIST.encode("utf-8")


@pytest.fixture
def sample_config() -> dict[str, Any]:
    """
    Provide a document covering every supported value shape.

    Flattens to 11 keys.
    """
    return {
        "http": {
            "timeout": 30,
            "endpoint": "https://api.example.com",
            "backoff": 1.5,
        },
        "features": {"darkMode": True},
        "database": {
            "user": "admin",
            "password": "hunter2",
            "certificate": b"\x00\x01\x02",
        },
        "hosts": ["a.example.com", "b.example.com"],
        "ports": [80, 443],
        "weights": [0.25, 0.75],
        "flags": [True, False],
    }


@pytest.fixture
def make_plist():
    """
    Factory fixture serializing a document to plist bytes.

    Usage:
        data = make_plist({"key": "value"})
        data = make_plist({"key": "value"}, fmt="binary")
    """

    def _make(document: Any, fmt: str = "xml", sort_keys: bool = True) -> bytes:
        plist_fmt = plistlib.FMT_BINARY if fmt == "binary" else plistlib.FMT_XML
        return plistlib.dumps(document, fmt=plist_fmt, sort_keys=sort_keys)

    return _make


@pytest.fixture
def create_plist_file(tmp_path: Path, make_plist):
    """
    Factory fixture for creating temporary plist files.

    Usage:
        path = create_plist_file("Config.plist", {"key": "value"})
    """

    def _create(filename: str, document: Any, fmt: str = "xml") -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(make_plist(document, fmt=fmt))
        return path

    return _create


@pytest.fixture
def create_yaml_file(tmp_path: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("options.yaml", {"bytes_decoder": "hex"})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create
