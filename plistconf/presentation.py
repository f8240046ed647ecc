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

"""String renderings of a snapshot for logs and debugging.

Both renderings are pure functions of the snapshot's entries:

    describe        ->  "app.plist[3 values]"
    debug_describe  ->  "app.plist[3 values: a=1, b=true, password=<REDACTED>]"

Pairs in the debug rendering are sorted by key so output is reproducible
across calls and processes. Array elements are joined with "," and not
escaped, so an element containing a comma is ambiguous in the output.
"""

from __future__ import annotations

from collections.abc import Mapping

from plistconf.results import REDACTED
from plistconf.values import SnapshotEntry


def render_entry(entry: SnapshotEntry) -> str:
    """Render one entry, redacting secrets regardless of type."""
    if entry.is_secret:
        return REDACTED
    return entry.value.render()


def describe(provider_name: str, entries: Mapping[str, SnapshotEntry]) -> str:
    return f"{provider_name}[{len(entries)} values]"


def debug_describe(provider_name: str, entries: Mapping[str, SnapshotEntry]) -> str:
    pairs = ", ".join(
        f"{key}={render_entry(entries[key])}" for key in sorted(entries)
    )
    return f"{provider_name}[{len(entries)} values: {pairs}]"
