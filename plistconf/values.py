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

"""Typed value containers for plistconf.

A flattened snapshot stores every leaf as a FlatValue: a closed tagged union
over the nine supported shapes, where the tag is a ConfigType member. The
same enum names the type a caller requests at lookup time, so a lookup result
is simply a FlatValue whose tag is the requested type.

Arrays are stored as tuples so that a FlatValue is immutable once built.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from enum import Enum
from typing import Union

# ----------------------------
# Type tags
# ----------------------------


class ConfigType(Enum):
    """Semantic types a configuration value can have or be requested as."""

    STRING = "string"
    INT = "int"
    DOUBLE = "double"
    BOOL = "bool"
    BYTES = "bytes"
    STRING_ARRAY = "stringArray"
    INT_ARRAY = "intArray"
    DOUBLE_ARRAY = "doubleArray"
    BOOL_ARRAY = "boolArray"

    @property
    def is_array(self) -> bool:
        return self in _ARRAY_TYPES

    @classmethod
    def parse(cls, name: str) -> ConfigType:
        """Resolve a type from its value ("intArray") or member name ("INT_ARRAY").

        Raises:
            ValueError: If the name matches no member.
        """
        for member in cls:
            if name == member.value or name.upper() == member.name:
                return member
        available = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown config type: {name!r}. Available: {available}")


_ARRAY_TYPES = frozenset(
    {
        ConfigType.STRING_ARRAY,
        ConfigType.INT_ARRAY,
        ConfigType.DOUBLE_ARRAY,
        ConfigType.BOOL_ARRAY,
    }
)

Scalar = Union[str, int, float, bool, bytes]
Payload = Union[Scalar, tuple]

# ----------------------------
# Containers
# ----------------------------


@dataclass(frozen=True)
class FlatValue:
    """One flattened leaf, tagged with its variant.

    Attributes:
        type: Variant tag.
        value: Python payload matching the tag (tuple for array variants).

    """

    type: ConfigType
    value: Payload

    def render(self) -> str:
        """Return the natural string form used in diagnostics.

        Booleans render as ``true``/``false``, bytes as standard base64 and
        arrays as comma-joined elements without brackets or escaping.
        """
        if self.type.is_array:
            return ",".join(_render_scalar(item) for item in self.value)
        return _render_scalar(self.value)


@dataclass(frozen=True)
class SnapshotEntry:
    """A flattened value plus the secret flag decided at parse time."""

    value: FlatValue
    is_secret: bool = False


def _render_scalar(value: Scalar) -> str:
    # bool before int: bool subclasses int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(value).decode("ascii")
    return str(value)
