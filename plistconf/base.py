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

"""Snapshot contracts for provider layers.

A provider (static file load, reloading file watcher, merged providers)
owns file access and reload cadence. All it needs from a snapshot is
captured by two protocols:

- ConfigSnapshot: typed lookups plus a provider name
- FileConfigSnapshot: a ConfigSnapshot that can be built from raw bytes

A provider builds a brand-new snapshot on every (re)load and publishes it
only after construction returns. When construction raises SnapshotError, the
provider decides whether to keep serving the previous snapshot.

Using typing.Protocol instead of ABC means snapshot implementations don't
need to inherit from anything; type checkers verify compliance.

Example:
    A provider that only depends on the protocol:
        ```python
        def reload(
            snapshot_type: type[FileConfigSnapshot],
            data: bytes,
            previous: FileConfigSnapshot,
        ) -> FileConfigSnapshot:
            try:
                return snapshot_type.from_data(data, previous.provider_name)
            except SnapshotError:
                return previous
        ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from plistconf.keys import KeyLike
    from plistconf.options import ParsingOptions
    from plistconf.results import LookupResult
    from plistconf.values import ConfigType


@runtime_checkable
class ConfigSnapshot(Protocol):
    """Immutable, flat, typed view of one configuration source."""

    @property
    def provider_name(self) -> str: ...

    def value_for_key(self, key: KeyLike, config_type: ConfigType) -> LookupResult:
        """Look up a key and coerce it to the requested type.

        Returns:
            A LookupResult whose value is None when the key has no binding.

        Raises:
            TypeMismatchError: If the stored value cannot be read as
                config_type.

        """
        ...


@runtime_checkable
class FileConfigSnapshot(ConfigSnapshot, Protocol):
    """A ConfigSnapshot constructible from serialized bytes."""

    @classmethod
    def from_data(
        cls,
        data: bytes,
        provider_name: str,
        parsing_options: ParsingOptions | None = None,
    ) -> FileConfigSnapshot:
        """Build a snapshot from raw bytes.

        Raises:
            SnapshotError: If the bytes cannot be turned into a snapshot.
                No partial snapshot is produced.

        """
        ...
