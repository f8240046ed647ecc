# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Parsing options for plist snapshots.

ParsingOptions carries the two pluggable strategies a snapshot needs at
construction time (the secrets specifier and the bytes decoder) plus an
optional plist format restriction. Options can be built in code or loaded
from a YAML file.

Options File Format
-------------------
    ```yaml
    secrets:
      keys:                 # exact dotted keys
        - database.password
        - api.token
      # all: true           # alternatively, mark every value secret
    bytes_decoder: base64   # utf8 (default), base64, hex, or a registered name
    format: xml             # xml, binary, or omit for auto-detection
    ```

An empty file yields the default options.

Error Handling
--------------
- OptionsError: missing file, YAML parse errors, non-mapping content,
  unknown fields, unknown decoder names. Errors are chained with "from err".

Example:
    ```python
    from pathlib import Path
    from plistconf.options import load_parsing_options

    options = load_parsing_options(Path("plistconf.yaml"))
    snapshot = PlistSnapshot.from_file(Path("Config.plist"), parsing_options=options)
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import yaml

from plistconf.decoders import BytesDecoder, Utf8BytesDecoder, get_decoder
from plistconf.exceptions import OptionsError
from plistconf.secrets_policy import AllSecrets, NoSecrets, SecretsSpecifier, SpecificSecrets

PlistFormat = Literal["xml", "binary"]

_KNOWN_FIELDS = {"secrets", "bytes_decoder", "format"}
_KNOWN_FORMATS = ("xml", "binary")

# -------------------------------
# Data types
# -------------------------------


@dataclass(frozen=True)
class ParsingOptions:
    """Options consumed while building a snapshot.

    Attributes:
        secrets: Secret classification policy, evaluated once per leaf.
        bytes_decoder: Decoder used when bytes are requested for a string.
        format: Restrict decoding to "xml" or "binary"; None auto-detects.

    """

    secrets: SecretsSpecifier = field(default_factory=NoSecrets)
    bytes_decoder: BytesDecoder = field(default_factory=Utf8BytesDecoder)
    format: PlistFormat | None = None

    @classmethod
    def default(cls) -> ParsingOptions:
        return cls()


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """Load a YAML file and return the parsed Python object.

    Raises:
        OptionsError: When the file does not exist or is not valid YAML.

    """
    if not p.exists():
        raise OptionsError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise OptionsError(f"Error parsing YAML: {p}: {err}") from err


def _secrets_from_config(raw: Any, source: Path) -> SecretsSpecifier:
    if raw is None:
        return NoSecrets()
    if not isinstance(raw, dict):
        raise OptionsError(f"'secrets' must be a mapping: {source}")

    unknown = set(raw) - {"keys", "all"}
    if unknown:
        raise OptionsError(
            f"Unknown field(s) in 'secrets': {', '.join(sorted(map(str, unknown)))}: {source}"
        )

    all_secret = raw.get("all", False)
    if not isinstance(all_secret, bool):
        raise OptionsError(f"'secrets.all' must be true or false: {source}")
    if all_secret:
        return AllSecrets()

    keys = raw.get("keys", [])
    if not isinstance(keys, list) or not all(isinstance(k, str) for k in keys):
        raise OptionsError(f"'secrets.keys' must be a list of strings: {source}")
    return SpecificSecrets(keys) if keys else NoSecrets()


def parsing_options_from_config(cfg: dict[str, Any], source: Path) -> ParsingOptions:
    """Build ParsingOptions from an already loaded mapping.

    Args:
        cfg: Options mapping (see module docstring for the layout).
        source: Where the mapping came from, used in error messages.

    Raises:
        OptionsError: On unknown fields or invalid values.

    """
    unknown = set(cfg) - _KNOWN_FIELDS
    if unknown:
        raise OptionsError(
            f"Unknown option field(s): {', '.join(sorted(map(str, unknown)))}: {source}"
        )

    secrets = _secrets_from_config(cfg.get("secrets"), source)

    decoder_name = cfg.get("bytes_decoder", "utf8")
    if not isinstance(decoder_name, str):
        raise OptionsError(f"'bytes_decoder' must be a string: {source}")
    decoder = get_decoder(decoder_name)

    fmt = cfg.get("format")
    if fmt is not None and fmt not in _KNOWN_FORMATS:
        raise OptionsError(
            f"Invalid 'format' {fmt!r}, expected one of {', '.join(_KNOWN_FORMATS)}: {source}"
        )

    return ParsingOptions(secrets=secrets, bytes_decoder=decoder, format=fmt)


def load_parsing_options(path: Path) -> ParsingOptions:
    """Load ParsingOptions from a YAML file.

    Args:
        path: Path to the options YAML file.

    Returns:
        The parsed options. An empty file yields ParsingOptions.default().

    Raises:
        OptionsError: Missing file, YAML errors, non-mapping root, unknown
            fields or decoder names.

    """
    from plistconf.logging import get_global_logger

    logger = get_global_logger()
    logger.verbose("OPTIONS", f"Loading parsing options: {path}")

    data = _load_yaml_file(path)
    if data is None:
        return ParsingOptions.default()
    if not isinstance(data, dict):
        raise OptionsError(f"top-level YAML must be a mapping (dict): {path}")

    options = parsing_options_from_config(data, path)
    logger.debug("OPTIONS", f"Secrets: {options.secrets!r}")
    logger.debug("OPTIONS", f"Bytes decoder: {options.bytes_decoder!r}")
    logger.debug("OPTIONS", f"Format: {options.format or 'auto'}")
    return options
