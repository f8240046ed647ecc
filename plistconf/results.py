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

"""Public API return types for plistconf.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Example:
    Using lookup results:
        ```python
        result = snapshot.value_for_key(["http", "timeout"], ConfigType.INT)
        if result.value is None:
            timeout = 60  # no binding, apply a default
        else:
            timeout = result.value.content.value
        ```

Note:
    Secret values print as ``<REDACTED>`` through str() and repr(); the
    plaintext is only reachable through ``content``.
"""

from __future__ import annotations

from dataclasses import dataclass

from plistconf.values import ConfigType, FlatValue, Payload

REDACTED = "<REDACTED>"


@dataclass(frozen=True, repr=False)
class ConfigValue:
    """A typed value returned by a lookup.

    Attributes:
        content: The value coerced to the requested type.
        is_secret: Secret flag decided when the snapshot was built.
    """

    content: FlatValue
    is_secret: bool = False

    @property
    def type(self) -> ConfigType:
        return self.content.type

    @property
    def value(self) -> Payload:
        return self.content.value

    def __str__(self) -> str:
        return REDACTED if self.is_secret else self.content.render()

    def __repr__(self) -> str:
        shown = REDACTED if self.is_secret else repr(self.content.value)
        return f"ConfigValue({self.content.type.value}, {shown}, is_secret={self.is_secret})"


@dataclass(frozen=True)
class LookupResult:
    """Result of a snapshot lookup.

    Attributes:
        encoded_key: The dotted key that was looked up.
        value: The typed value, or None when the key has no binding.
    """

    encoded_key: str
    value: ConfigValue | None = None

    @property
    def found(self) -> bool:
        return self.value is not None
