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

"""Exception hierarchy for plistconf.

This module defines a custom exception hierarchy that allows library users
to distinguish between the phases in which an error can happen:

- SnapshotError: Construction failures (undecodable bytes, malformed root,
  unsupported value types). Construction is all-or-nothing, so no partial
  snapshot exists when one of these is raised.
- TypeMismatchError: A lookup asked for a type the stored value cannot
  supply. Local to that single query.
- OptionsError: A parsing-options file could not be loaded.

All exceptions inherit from PlistConfError, allowing users to catch all
plistconf errors with a single except clause if needed.

Example:
    Falling back to a previous snapshot on reload failure:
        ```python
        from plistconf import PlistSnapshot
        from plistconf.exceptions import SnapshotError

        try:
            snapshot = PlistSnapshot.from_data(data, "app.plist")
        except SnapshotError as e:
            print(f"Keeping previous snapshot: {e}")
            snapshot = previous
        ```

    Handling a per-key type mismatch:
        ```python
        from plistconf.exceptions import TypeMismatchError

        try:
            result = snapshot.value_for_key("http.timeout", ConfigType.INT)
        except TypeMismatchError as e:
            print(f"{e.key} is not an {e.requested_type.value}")
        ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plistconf.values import ConfigType

__all__ = [
    "PlistConfError",
    "SnapshotError",
    "DocumentDecodeError",
    "MalformedRootError",
    "UnsupportedTypeError",
    "TypeMismatchError",
    "OptionsError",
]


class PlistConfError(Exception):
    """Base exception for all plistconf errors.

    All plistconf-specific exceptions inherit from this class, allowing users
    to catch all plistconf errors with a single except clause if needed.
    """

    pass


class SnapshotError(PlistConfError):
    """Raised when a snapshot cannot be constructed.

    The caller owns the fallback policy (for example keeping the previously
    loaded snapshot when a reload fails).
    """

    pass


class DocumentDecodeError(SnapshotError):
    """Raised when the raw bytes are not a valid property list."""

    pass


class MalformedRootError(SnapshotError):
    """Raised when the top-level document is not a string-keyed dictionary.

    Attributes:
        type_name: Observed type name of the root object.
    """

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"top-level document must be a dictionary, got {type_name}")


class UnsupportedTypeError(SnapshotError):
    """Raised when a leaf value is not one of the supported shapes.

    Attributes:
        key: Dotted key of the offending value.
        type_name: Observed type name, for diagnostics.
    """

    def __init__(self, key: str, type_name: str) -> None:
        self.key = key
        self.type_name = type_name
        super().__init__(f"unsupported value type {type_name} at key {key!r}")


class TypeMismatchError(PlistConfError):
    """Raised when a stored value cannot be coerced to the requested type.

    Attributes:
        key: Dotted key that was looked up.
        requested_type: The ConfigType the caller asked for.
    """

    def __init__(self, key: str, requested_type: ConfigType) -> None:
        self.key = key
        self.requested_type = requested_type
        super().__init__(
            f"value at key {key!r} cannot be read as {requested_type.value}"
        )


class OptionsError(PlistConfError):
    """Raised for problems with parsing options.

    This exception is raised when there are problems with:

    - YAML parsing of an options file (syntax errors, invalid structure)
    - Unknown or mistyped option fields
    - Unknown bytes decoder names
    """

    pass
