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

"""Byte-level version comparison.

This module is format-agnostic: it does NOT parse versions into numbers.
It walks both strings byte by byte and emulates the sort orders used by
rpm, dpkg and pacman closely enough to be used as an SQLite collation.

Inputs may be str (encoded as UTF-8) or any bytes-like object. Results are
signed integers; only the sign is meaningful.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, Union

from .policy import GENERIC, ComparePolicy

VersionLike = Union[str, bytes, bytearray, memoryview]

# ----------------------------
# Delimiters
# ----------------------------

_DELIMITER_PRECEDENCE: dict[int, int] = {
    ord("~"): 1,
    ord("-"): 2,
    ord("^"): 3,
    ord("."): 4,
    ord(":"): 5,
}

_TILDE = ord("~")
_HYPHEN = ord("-")
_CARET = ord("^")
_COLON = ord(":")


def delimiter_precedence(c: int) -> int:
    """Return the precedence of byte c if it is a delimiter, else 0."""
    return _DELIMITER_PRECEDENCE.get(c, 0)


def _as_bytes(v: VersionLike) -> bytes:
    if isinstance(v, str):
        return v.encode("utf-8")
    return bytes(v)


# ----------------------------
# Epoch
# ----------------------------


def compare_epoch(l_ver: bytes, r_ver: bytes) -> int:
    """Compare the position of the epoch delimiter in two versions.

    Returns the difference of the colon offsets if both versions have an
    epoch, 1 if only the left has one, -1 if only the right has one and 0
    if neither does. Epoch values themselves are not compared.
    """
    l_epoch = l_ver.find(_COLON)
    r_epoch = r_ver.find(_COLON)

    if l_epoch != -1 and r_epoch != -1:
        return l_epoch - r_epoch
    if l_epoch != -1:
        return 1
    if r_epoch != -1:
        return -1
    return 0


# ----------------------------
# Remainder
# ----------------------------


def _compare_remainder(
    l_ver: bytes,
    r_ver: bytes,
    pos: int,
    diff: int,
    policy: ComparePolicy,
) -> int:
    """Order two versions where one is a prefix of the other up to pos.

    With comp_remaining, a tilde on the longer side sorts lower, a caret
    sorts higher and a hyphen compares equal. Otherwise the pending segment
    difference wins, except under remainder_precedence when the shorter
    version's last byte is a digit. Everything else falls through to the
    length difference.
    """
    if policy.comp_remaining:
        if len(l_ver) == pos:
            shorter, longer, sign = l_ver, r_ver, 1
        else:
            shorter, longer, sign = r_ver, l_ver, -1

        c = longer[pos]
        if c == _TILDE:
            return sign
        if c == _HYPHEN:
            return 0
        if c == _CARET:
            return -sign
        if diff != 0 and not (
            policy.remainder_precedence and shorter[pos - 1 : pos].isdigit()
        ):
            return diff

    return len(l_ver) - len(r_ver)


# ----------------------------
# Public API
# ----------------------------


def version_compare(
    left: VersionLike,
    right: VersionLike,
    policy: ComparePolicy = GENERIC,
) -> int:
    """Compare two version strings.

    Returns 0 if the versions are equal, a negative int if left sorts
    before right and a positive int if left sorts after right.

    Within a segment (a run of non-delimiter bytes) the first byte
    difference is remembered and only reported once both strings reach a
    delimiter, so "1.2" < "1.10" because "2" meets "0" rather than ".".
    A non-delimiter byte always beats a delimiter at the same offset.

    Args:
        left: Left version (str or bytes-like).
        right: Right version (str or bytes-like).
        policy: Comparison switches; see ComparePolicy.

    Returns:
        Signed int whose sign gives the ordering.
    """
    l_ver = _as_bytes(left)
    r_ver = _as_bytes(right)
    l_len = len(l_ver)
    r_len = len(r_ver)

    if l_len == 0 and r_len == 0:
        return 0
    if l_len == 0:
        return -1
    if r_len == 0:
        return 1

    if l_ver == r_ver:
        return 0

    if policy.epoch:
        epoch_diff = compare_epoch(l_ver, r_ver)
        if epoch_diff != 0:
            return epoch_diff

    first_diff = 0
    shortest = min(l_len, r_len)
    for i in range(shortest):
        lc = l_ver[i]
        rc = r_ver[i]
        l_delim = delimiter_precedence(lc)
        r_delim = delimiter_precedence(rc)

        if l_delim == 0 and r_delim == 0:
            if first_diff == 0:
                first_diff = lc - rc
            continue
        if l_delim == 0:
            return 1
        if r_delim == 0:
            return -1

        # Both at a delimiter: the segment is closed.
        if first_diff != 0:
            return first_diff

        if policy.delim_precedence and l_delim != r_delim:
            return l_delim - r_delim

    if l_len == r_len:
        return first_diff

    return _compare_remainder(l_ver, r_ver, shortest, first_diff, policy)


def version_key(policy: ComparePolicy = GENERIC) -> Callable[[VersionLike], object]:
    """Return a sort key function ordering versions under policy.

    Example:
        sorted(versions, key=version_key(RHEL))
    """
    return cmp_to_key(lambda a, b: version_compare(a, b, policy))
