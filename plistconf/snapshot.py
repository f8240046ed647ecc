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

"""Immutable configuration snapshot backed by a property list.

A PlistSnapshot is built once from plist bytes (or an already parsed
document) and never changes afterwards. Construction runs the whole
transform eagerly:

    bytes --decode--> raw document --flatten--> {dotted key: entry}

and every later operation is a pure read, so a snapshot can be shared
between threads once the constructor has returned. Reloading means building
a new snapshot; an existing one is never patched.

Example:
    ```python
    from pathlib import Path
    from plistconf import ConfigType, ParsingOptions, PlistSnapshot
    from plistconf.secrets_policy import SpecificSecrets

    snapshot = PlistSnapshot.from_data(
        Path("Config.plist").read_bytes(),
        "Config.plist",
        ParsingOptions(secrets=SpecificSecrets({"database.password"})),
    )
    result = snapshot.value_for_key(["http", "timeout"], ConfigType.INT)
    print(result.value)              # 30
    print(snapshot.debug_description)
    # Config.plist[2 values: database.password=<REDACTED>, http.timeout=30]
    ```
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from plistconf.coercion import coerce
from plistconf.keys import ConfigKey, KeyLike, encode_key
from plistconf.options import ParsingOptions
from plistconf.parser import decode_document, detect_format, flatten
from plistconf.presentation import debug_describe, describe
from plistconf.results import ConfigValue, LookupResult
from plistconf.values import ConfigType, SnapshotEntry


@dataclass(frozen=True, repr=False, eq=False)
class PlistSnapshot:
    """A flat, typed, read-only view of a plist document.

    Prefer the from_data / from_document / from_file constructors; the
    dataclass initializer expects already flattened entries.

    Attributes:
        provider_name: Label used in diagnostics only.
        values: Read-only mapping from dotted key to entry.
        parsing_options: Options used to build the snapshot; the bytes
            decoder is reused for bytes-from-string lookups.
    """

    provider_name: str
    values: Mapping[str, SnapshotEntry]
    parsing_options: ParsingOptions = field(default_factory=ParsingOptions.default)

    def __post_init__(self) -> None:
        # copy, then expose read-only
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    # -------------------------------
    # Construction
    # -------------------------------

    @classmethod
    def from_document(
        cls,
        document: Any,
        provider_name: str,
        parsing_options: ParsingOptions | None = None,
    ) -> PlistSnapshot:
        """Build a snapshot from an already decoded document.

        Raises:
            MalformedRootError: If the root is not a string-keyed dict.
            UnsupportedTypeError: If a leaf has an unsupported shape.

        """
        from plistconf.logging import get_global_logger

        logger = get_global_logger()
        options = parsing_options or ParsingOptions.default()

        entries = flatten(document, options.secrets)
        secret_count = sum(1 for entry in entries.values() if entry.is_secret)

        logger.verbose(
            "SNAPSHOT",
            f"{provider_name}: flattened {len(entries)} value(s), "
            f"{secret_count} secret",
        )
        for key, entry in entries.items():
            logger.debug("PARSE", f"{key} -> {entry.value.type.value}")

        return cls(provider_name=provider_name, values=entries, parsing_options=options)

    @classmethod
    def from_data(
        cls,
        data: bytes,
        provider_name: str,
        parsing_options: ParsingOptions | None = None,
    ) -> PlistSnapshot:
        """Build a snapshot from serialized plist bytes.

        Args:
            data: XML or binary property list.
            provider_name: Label used in diagnostics.
            parsing_options: Secrets policy, bytes decoder and format.
                Defaults to ParsingOptions.default().

        Returns:
            The new snapshot.

        Raises:
            DocumentDecodeError: If the bytes are not a valid plist.
            MalformedRootError: If the root is not a dictionary.
            UnsupportedTypeError: If a leaf has an unsupported shape.

        """
        from plistconf.logging import get_global_logger

        options = parsing_options or ParsingOptions.default()
        get_global_logger().verbose(
            "SNAPSHOT",
            f"{provider_name}: decoding {len(data)} byte(s) "
            f"({options.format or detect_format(data)} plist)",
        )
        document = decode_document(data, options.format)
        return cls.from_document(document, provider_name, options)

    @classmethod
    def from_file(
        cls,
        path: Path,
        provider_name: str | None = None,
        parsing_options: ParsingOptions | None = None,
    ) -> PlistSnapshot:
        """Read a plist file and build a snapshot from its bytes.

        The provider name defaults to the file name.

        Raises:
            FileNotFoundError: If the file does not exist.
            SnapshotError: As for from_data.

        """
        path = Path(path)
        return cls.from_data(path.read_bytes(), provider_name or path.name, parsing_options)

    # -------------------------------
    # Lookup
    # -------------------------------

    def value_for_key(self, key: KeyLike, config_type: ConfigType) -> LookupResult:
        """Look up a key and coerce its value to config_type.

        Args:
            key: ConfigKey, sequence of components, or dotted string.
            config_type: Requested type.

        Returns:
            LookupResult with value None when the key has no binding,
            otherwise a ConfigValue carrying the stored secret flag.

        Raises:
            TypeMismatchError: If the stored value cannot be read as
                config_type.

        """
        encoded_key = encode_key(key)
        entry = self.values.get(encoded_key)
        if entry is None:
            return LookupResult(encoded_key, None)
        content = coerce(
            encoded_key, entry.value, config_type, self.parsing_options.bytes_decoder
        )
        return LookupResult(encoded_key, ConfigValue(content, entry.is_secret))

    def keys(self) -> list[str]:
        """Return all dotted keys in ascending order."""
        return sorted(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, (str, ConfigKey)):
            return encode_key(key) in self.values
        if isinstance(key, (tuple, list)) and all(isinstance(c, str) for c in key):
            return encode_key(key) in self.values
        return False

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    # -------------------------------
    # Diagnostics
    # -------------------------------

    @property
    def description(self) -> str:
        return describe(self.provider_name, self.values)

    @property
    def debug_description(self) -> str:
        return debug_describe(self.provider_name, self.values)

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return self.debug_description
