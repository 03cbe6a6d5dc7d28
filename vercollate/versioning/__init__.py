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

"""Version comparison for vercollate.

This package holds the pure comparison engine. It performs no I/O and keeps
no state between calls, so its functions are safe to call from any thread.

Modules:
    compare
        Byte-level comparator: delimiter ranking, epoch handling, segment
        scan and remainder resolution.
    policy
        ComparePolicy dataclass and the generic/arch/dpkg/rhel presets.

Ordering Rules:

1. Both strings are scanned byte by byte. Inside a segment the first
   differing byte is remembered and reported when both sides reach a
   delimiter.
2. A non-delimiter byte beats a delimiter at the same offset
   ("1.0a" > "1.0.1").
3. Delimiters rank ~ < - < ^ < . < : when delim_precedence is set.
4. With epoch set, a version containing ":" beats one without.
5. When one version is a prefix of the other, comp_remaining decides from
   the first extra byte; otherwise the longer version wins.

Examples:
    >>> from vercollate.versioning import version_compare, RHEL
    >>> version_compare("1.0~rc1", "1.0", RHEL) < 0
    True
    >>> version_compare("1.10", "1.9") > 0
    True

"""

from .compare import (
    VersionLike,
    compare_epoch,
    delimiter_precedence,
    version_compare,
    version_key,
)
from .policy import (
    ARCH,
    DPKG,
    GENERIC,
    OPTION_NAMES,
    PRESETS,
    RHEL,
    ComparePolicy,
    get_preset,
)

__all__ = [
    "VersionLike",
    "compare_epoch",
    "delimiter_precedence",
    "version_compare",
    "version_key",
    "ComparePolicy",
    "OPTION_NAMES",
    "PRESETS",
    "GENERIC",
    "ARCH",
    "DPKG",
    "RHEL",
    "get_preset",
]
