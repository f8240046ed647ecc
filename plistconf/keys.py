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

"""Structured configuration keys.

The reader layer addresses values with an ordered sequence of path
components. Flattening and lookup both join components with KEY_SEPARATOR,
and this module is the only place that rule is written down.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Union

KEY_SEPARATOR = "."


def join_key(components: Iterable[str]) -> str:
    """Join path components into a dotted key."""
    return KEY_SEPARATOR.join(components)


@dataclass(frozen=True)
class ConfigKey:
    """An absolute configuration key as an ordered tuple of components.

    Attributes:
        components: Path components from the document root to the leaf.

    Example:
        ```python
        key = ConfigKey(("http", "timeout"))
        key.encoded            # "http.timeout"
        ConfigKey.from_string("http.timeout") == key  # True
        ```

    """

    components: tuple[str, ...]

    def __post_init__(self) -> None:
        # accept lists for convenience, store a tuple
        object.__setattr__(self, "components", tuple(self.components))

    @classmethod
    def from_string(cls, dotted: str) -> ConfigKey:
        return cls(tuple(dotted.split(KEY_SEPARATOR)))

    @property
    def encoded(self) -> str:
        return join_key(self.components)

    def __str__(self) -> str:
        return self.encoded


KeyLike = Union[ConfigKey, str, Sequence[str]]


def encode_key(key: KeyLike) -> str:
    """Normalize any accepted key form into the dotted lookup key.

    Args:
        key: A ConfigKey, a sequence of components, or an already dotted
            string (used verbatim).

    Returns:
        The dotted key.

    """
    if isinstance(key, ConfigKey):
        return key.encoded
    if isinstance(key, str):
        return key
    return join_key(key)
