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

"""Type coercion for snapshot lookups.

The coercion matrix is exhaustive; any pair not listed raises
TypeMismatchError:

    requested       stored          transform
    ---------       ------          ---------
    string          string          identity
    int             int             identity
    int             bool            True -> 1, False -> 0
    double          double          identity
    double          int             widen to float
    bool            bool            identity
    bool            int             0 -> False, nonzero -> True
    bytes           bytes           identity
    bytes           string          bytes decoder (None/ValueError -> mismatch)
    <T>Array        <T>Array        identity

Arrays never coerce across element types and scalars are never promoted to
arrays.
"""

from __future__ import annotations

from collections.abc import Callable

from plistconf.decoders import BytesDecoder
from plistconf.exceptions import TypeMismatchError
from plistconf.values import ConfigType, FlatValue, Payload

_T = ConfigType


def _identity(value: Payload) -> Payload:
    return value


_CONVERSIONS: dict[tuple[ConfigType, ConfigType], Callable[[Payload], Payload]] = {
    (_T.STRING, _T.STRING): _identity,
    (_T.INT, _T.INT): _identity,
    (_T.INT, _T.BOOL): lambda b: 1 if b else 0,
    (_T.DOUBLE, _T.DOUBLE): _identity,
    (_T.DOUBLE, _T.INT): float,
    (_T.BOOL, _T.BOOL): _identity,
    (_T.BOOL, _T.INT): lambda i: i != 0,
    (_T.BYTES, _T.BYTES): _identity,
    (_T.STRING_ARRAY, _T.STRING_ARRAY): _identity,
    (_T.INT_ARRAY, _T.INT_ARRAY): _identity,
    (_T.DOUBLE_ARRAY, _T.DOUBLE_ARRAY): _identity,
    (_T.BOOL_ARRAY, _T.BOOL_ARRAY): _identity,
}


def can_coerce(stored: ConfigType, requested: ConfigType) -> bool:
    """Whether a stored variant may be read as the requested type at all.

    bytes-from-string returns True here even though the decoder may still
    reject a particular value.
    """
    if (requested, stored) == (_T.BYTES, _T.STRING):
        return True
    return (requested, stored) in _CONVERSIONS


def coerce(
    key: str,
    stored: FlatValue,
    requested: ConfigType,
    bytes_decoder: BytesDecoder,
) -> FlatValue:
    """Convert a stored value to the requested type.

    Args:
        key: Dotted key, used in the error.
        stored: The flattened value.
        requested: The type the caller asked for.
        bytes_decoder: Decoder used for bytes-from-string.

    Returns:
        A FlatValue tagged with the requested type.

    Raises:
        TypeMismatchError: If the pair is outside the coercion matrix or the
            bytes decoder rejects the string.

    """
    if (requested, stored.type) == (_T.BYTES, _T.STRING):
        try:
            decoded = bytes_decoder.decode(stored.value)
        except ValueError as err:
            raise TypeMismatchError(key, requested) from err
        if decoded is None:
            raise TypeMismatchError(key, requested)
        return FlatValue(requested, bytes(decoded))

    convert = _CONVERSIONS.get((requested, stored.type))
    if convert is None:
        raise TypeMismatchError(key, requested)
    try:
        return FlatValue(requested, convert(stored.value))
    except OverflowError as err:
        # int too large for a float
        raise TypeMismatchError(key, requested) from err
