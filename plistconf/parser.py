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

"""Property-list decoding and flattening.

This module turns raw plist bytes into the flat key/value mapping a snapshot
is built from. It has two stages:

1. decode_document: bytes -> raw document, via the standard library plistlib
   (XML and binary formats, auto-detected unless a format is forced).
2. flatten: raw document -> {dotted key: SnapshotEntry}, by recursive descent
   with an accumulating key path.

Leaf Matching
-------------
Every leaf is matched against the supported shapes, in this order:

    bool            -> BOOL          (checked before int: bool subclasses int)
    int             -> INT
    float           -> DOUBLE
    str             -> STRING
    bytes           -> BYTES
    list[bool]      -> BOOL_ARRAY
    list[int]       -> INT_ARRAY
    list[float]     -> DOUBLE_ARRAY
    list[str]       -> STRING_ARRAY  (also the empty list)

Anything else (dates, UIDs, mixed arrays, arrays of data/dicts/arrays,
dicts with non-string keys) raises UnsupportedTypeError.

Collision Policy
----------------
Two leaves can flatten to the same dotted key, either through duplicate keys
in the source (plistlib keeps the later one) or through a literal key that
contains the separator (``"a.b"`` next to ``{"a": {"b": ...}}``). The later
value in document order wins; no error is raised.
"""

from __future__ import annotations

import plistlib
import struct
from typing import Any
from xml.parsers.expat import ExpatError

from plistconf.exceptions import DocumentDecodeError, MalformedRootError, UnsupportedTypeError
from plistconf.keys import join_key
from plistconf.secrets_policy import NoSecrets, SecretsSpecifier
from plistconf.values import ConfigType, FlatValue, SnapshotEntry

_FORMATS = {
    None: None,
    "xml": plistlib.FMT_XML,
    "binary": plistlib.FMT_BINARY,
}

# -------------------------------
# Decoding
# -------------------------------


def decode_document(data: bytes, fmt: str | None = None) -> Any:
    """Decode plist bytes into a raw document.

    Args:
        data: Serialized property list.
        fmt: "xml", "binary", or None to auto-detect.

    Returns:
        The raw document (any plist object; the root is checked by flatten).

    Raises:
        DocumentDecodeError: If the bytes are not a valid property list.

    """
    if fmt not in _FORMATS:
        raise ValueError(f"Unknown plist format: {fmt!r}")
    try:
        return plistlib.loads(bytes(data), fmt=_FORMATS[fmt])
    except (ValueError, ExpatError, struct.error, AttributeError, RecursionError) as err:
        # plistlib raises AttributeError on a malformed <date>
        raise DocumentDecodeError(f"invalid property list: {err}") from err


def detect_format(data: bytes) -> str:
    """Return "binary" or "xml" for diagnostics."""
    return "binary" if bytes(data[:8]) == b"bplist00" else "xml"


# -------------------------------
# Leaf matching
# -------------------------------


def _type_name(value: Any) -> str:
    """Describe a raw value's shape for error messages."""
    if isinstance(value, list):
        names = sorted({type(item).__name__ for item in value})
        return f"list[{' | '.join(names)}]"
    if isinstance(value, dict):
        names = sorted({type(k).__name__ for k in value if not isinstance(k, str)})
        return f"dict with {' | '.join(names)} keys"
    return type(value).__name__


def _all(items: list, kind: type) -> bool:
    if kind is int:
        return all(isinstance(i, int) and not isinstance(i, bool) for i in items)
    return all(isinstance(i, kind) for i in items)


def match_leaf(key: str, value: Any) -> FlatValue:
    """Tag a raw leaf with its variant.

    Raises:
        UnsupportedTypeError: If the value has none of the supported shapes.

    """
    if isinstance(value, bool):
        return FlatValue(ConfigType.BOOL, value)
    if isinstance(value, int):
        return FlatValue(ConfigType.INT, value)
    if isinstance(value, float):
        return FlatValue(ConfigType.DOUBLE, value)
    if isinstance(value, str):
        return FlatValue(ConfigType.STRING, value)
    if isinstance(value, (bytes, bytearray)):
        return FlatValue(ConfigType.BYTES, bytes(value))
    if isinstance(value, list):
        if not value:
            return FlatValue(ConfigType.STRING_ARRAY, ())
        if _all(value, bool):
            return FlatValue(ConfigType.BOOL_ARRAY, tuple(value))
        if _all(value, int):
            return FlatValue(ConfigType.INT_ARRAY, tuple(value))
        if _all(value, float):
            return FlatValue(ConfigType.DOUBLE_ARRAY, tuple(value))
        if _all(value, str):
            return FlatValue(ConfigType.STRING_ARRAY, tuple(value))
    raise UnsupportedTypeError(key, _type_name(value))


def _is_string_keyed(value: Any) -> bool:
    return isinstance(value, dict) and all(isinstance(k, str) for k in value)


# -------------------------------
# Flattening
# -------------------------------


def _flatten_dict(
    node: dict[str, Any],
    key_path: tuple[str, ...],
    secrets: SecretsSpecifier,
) -> dict[str, SnapshotEntry]:
    result: dict[str, SnapshotEntry] = {}
    for key, value in node.items():
        path = key_path + (key,)
        if _is_string_keyed(value):
            # last write wins on collisions
            result.update(_flatten_dict(value, path, secrets))
            continue
        full_key = join_key(path)
        flat = match_leaf(full_key, value)
        result[full_key] = SnapshotEntry(flat, secrets.is_secret(full_key, value))
    return result


def flatten(
    document: Any,
    secrets: SecretsSpecifier | None = None,
) -> dict[str, SnapshotEntry]:
    """Flatten a raw document into dotted keys.

    Args:
        document: Raw document; the root must be a string-keyed dict.
        secrets: Secret classification policy, called once per leaf with
            the dotted key and the raw value. Defaults to NoSecrets.

    Returns:
        A new dict mapping dotted keys to entries, in document order.

    Raises:
        MalformedRootError: If the root is not a string-keyed dict.
        UnsupportedTypeError: If any leaf has an unsupported shape.
        DocumentDecodeError: If the nesting exceeds the recursion limit.

    Example:
        ```python
        flatten({"http": {"timeout": 30}})
        # {"http.timeout": SnapshotEntry(FlatValue(ConfigType.INT, 30), False)}
        ```

    """
    if not _is_string_keyed(document):
        raise MalformedRootError(_type_name(document))
    try:
        return _flatten_dict(document, (), secrets or NoSecrets())
    except RecursionError as err:
        raise DocumentDecodeError("document is nested too deeply to flatten") from err
