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

"""Bytes decoders and their registry.

When a caller asks for ``bytes`` and the stored value is a string, the
snapshot hands the string to a bytes decoder. A decoder returns the decoded
bytes, or None when the string is not valid input; the lookup then fails
with TypeMismatchError.

Built-in decoders:

- utf8: encodes the string as UTF-8 (default, never rejects input)
- base64: standard base64 with padding validation
- hex: hexadecimal, case-insensitive

Decoders are registered by name so that options files can refer to them.
Registering the same name twice overwrites the previous registration.

Example:
    Implementing a custom decoder:
        ```python
        from plistconf.decoders import register_decoder

        class Latin1BytesDecoder:
            def decode(self, value: str) -> bytes | None:
                try:
                    return value.encode("latin-1")
                except UnicodeEncodeError:
                    return None

        register_decoder("latin1", Latin1BytesDecoder)
        ```
"""

from __future__ import annotations

import base64
import binascii
from typing import Protocol

from plistconf.exceptions import OptionsError

# -------------------------------
# Decoder Protocol
# -------------------------------


class BytesDecoder(Protocol):
    """Protocol for string-to-bytes decoders."""

    def decode(self, value: str) -> bytes | None:
        """Decode a string into bytes.

        Args:
            value: The stored string value.

        Returns:
            The decoded bytes, or None if the string is not valid input.

        """
        ...


class Utf8BytesDecoder:
    """Encodes the string as UTF-8."""

    def decode(self, value: str) -> bytes | None:
        try:
            return value.encode("utf-8")
        except UnicodeEncodeError:
            # lone surrogates
            return None

    def __repr__(self) -> str:
        return "Utf8BytesDecoder()"


class Base64BytesDecoder:
    """Decodes standard base64 text."""

    def decode(self, value: str) -> bytes | None:
        try:
            return base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            return None

    def __repr__(self) -> str:
        return "Base64BytesDecoder()"


class HexBytesDecoder:
    """Decodes hexadecimal text (e.g. ``"deadBEEF"``)."""

    def decode(self, value: str) -> bytes | None:
        try:
            return bytes.fromhex(value)
        except ValueError:
            return None

    def __repr__(self) -> str:
        return "HexBytesDecoder()"


# -------------------------------
# Decoder Registry
# -------------------------------

_DECODER_REGISTRY: dict[str, type[BytesDecoder]] = {}


def register_decoder(name: str, decoder_class: type[BytesDecoder]) -> None:
    """Register a bytes decoder by name.

    Args:
        name: Decoder name as used in options files (lowercase).
        decoder_class: Class implementing the BytesDecoder protocol. It is
            instantiated without arguments on lookup.

    """
    _DECODER_REGISTRY[name] = decoder_class


def get_decoder(name: str) -> BytesDecoder:
    """Get a new decoder instance by name.

    Raises:
        OptionsError: If the name is not registered. The message lists the
            available decoders.

    """
    if name not in _DECODER_REGISTRY:
        available = ", ".join(sorted(_DECODER_REGISTRY))
        raise OptionsError(
            f"Unknown bytes decoder: {name!r}. Available: {available or '(none)'}"
        )
    return _DECODER_REGISTRY[name]()


def available_decoders() -> list[str]:
    return sorted(_DECODER_REGISTRY)


register_decoder("utf8", Utf8BytesDecoder)
register_decoder("base64", Base64BytesDecoder)
register_decoder("hex", HexBytesDecoder)
