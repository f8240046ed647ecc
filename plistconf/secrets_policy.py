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

"""Secret classification policies.

A secrets specifier decides, once per leaf while a snapshot is built, whether
the value is sensitive. The decision is stored next to the value and is
never re-evaluated at lookup time; diagnostics render secret values as a
fixed redaction marker.

Built-in specifiers:

- NoSecrets: nothing is secret (default)
- SpecificSecrets: exact match against a set of dotted keys
- AllSecrets: everything is secret
- DynamicSecrets: wraps an arbitrary predicate

Specifiers are Protocol classes (structural subtyping), so any object with a
matching is_secret() method can be used.

Example:
    ```python
    from plistconf import ParsingOptions
    from plistconf.secrets_policy import SpecificSecrets

    options = ParsingOptions(secrets=SpecificSecrets({"database.password"}))
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Protocol


class SecretsSpecifier(Protocol):
    """Protocol for secret classification policies."""

    def is_secret(self, key: str, value: Any) -> bool:
        """Decide whether a flattened value is sensitive.

        Args:
            key: Fully-qualified dotted key of the leaf.
            value: Raw leaf value as found in the document.

        Returns:
            True if the value must be redacted in diagnostics.

        """
        ...


class NoSecrets:
    """Specifier that marks nothing as secret."""

    def is_secret(self, key: str, value: Any) -> bool:
        return False

    def __repr__(self) -> str:
        return "NoSecrets()"


class AllSecrets:
    """Specifier that marks every value as secret."""

    def is_secret(self, key: str, value: Any) -> bool:
        return True

    def __repr__(self) -> str:
        return "AllSecrets()"


class SpecificSecrets:
    """Specifier matching an exact set of dotted keys (case-sensitive)."""

    def __init__(self, keys: Iterable[str]) -> None:
        self.keys = frozenset(keys)

    def is_secret(self, key: str, value: Any) -> bool:
        return key in self.keys

    def __repr__(self) -> str:
        return f"SpecificSecrets({sorted(self.keys)!r})"


class DynamicSecrets:
    """Specifier backed by a user-supplied predicate.

    Example:
        ```python
        DynamicSecrets(lambda key, value: key.endswith(".token"))
        ```
    """

    def __init__(self, predicate: Callable[[str, Any], bool]) -> None:
        self.predicate = predicate

    def is_secret(self, key: str, value: Any) -> bool:
        return bool(self.predicate(key, value))

    def __repr__(self) -> str:
        return f"DynamicSecrets({self.predicate!r})"
