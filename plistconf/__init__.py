"""
plistconf - property-list configuration snapshots

Turns a property list (XML or binary) into an immutable, flat, typed
key-value snapshot that a provider-based configuration reader can query.

plistconf provides:
  - Flattening of nested dictionaries into dotted keys ("http.timeout")
  - Nine value shapes: string, int, double, bool, bytes and homogeneous
    string/int/double/bool arrays
  - A narrow coercion matrix for typed lookups (bool<->int, int->double,
    string->bytes via a pluggable decoder)
  - Secret classification at parse time with redacted diagnostics
  - Deterministic, sorted debug renderings

Quick Start
-----------
    from plistconf import ConfigType, PlistSnapshot

    snapshot = PlistSnapshot.from_data(data, "Config.plist")
    result = snapshot.value_for_key(["http", "timeout"], ConfigType.INT)

Inspect a file from the shell:

    $ plistconf show Config.plist --secret database.password

Package Structure
-----------------
snapshot : module
    PlistSnapshot, the immutable snapshot.
parser : module
    plist decoding and flattening.
coercion : module
    The lookup coercion matrix.
presentation : module
    description / debug description renderings.
options : module
    ParsingOptions and YAML options files.
secrets_policy, decoders : modules
    Pluggable secret classification and bytes decoding.
cli : module
    Diagnostic command-line interface.

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Immutable typed snapshots of property-list configuration"

from plistconf.exceptions import (
    DocumentDecodeError,
    MalformedRootError,
    OptionsError,
    PlistConfError,
    SnapshotError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from plistconf.keys import ConfigKey
from plistconf.options import ParsingOptions, load_parsing_options
from plistconf.results import ConfigValue, LookupResult
from plistconf.snapshot import PlistSnapshot
from plistconf.values import ConfigType, FlatValue

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "PlistSnapshot",
    "ParsingOptions",
    "load_parsing_options",
    "ConfigKey",
    "ConfigType",
    "FlatValue",
    "ConfigValue",
    "LookupResult",
    "PlistConfError",
    "SnapshotError",
    "DocumentDecodeError",
    "MalformedRootError",
    "UnsupportedTypeError",
    "TypeMismatchError",
    "OptionsError",
]
