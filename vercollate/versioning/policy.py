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

"""Comparison policies and the built-in ecosystem presets.

A policy bundles the four switches that change how version_compare()
orders two strings:

- epoch: a version with a "N:" prefix sorts above one without.
- delim_precedence: differing delimiters are ranked ~ < - < ^ < . < :
- comp_remaining: when one string is a prefix of the other, look at the
  first remaining byte (~ sorts lower, ^ higher, - equal).
- remainder_precedence: with comp_remaining, ignore the last segment's
  difference when the shorter string ended on a digit.

Example:
    Look up a preset and derive a variant:

        from dataclasses import replace
        from vercollate.versioning.policy import get_preset

        rhel = get_preset("rhel")
        strict = replace(rhel, remainder_precedence=True)

"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from vercollate.exceptions import ConfigError, OptionError

OPTION_NAMES: tuple[str, ...] = (
    "epoch",
    "delim_precedence",
    "comp_remaining",
    "remainder_precedence",
)


@dataclass(frozen=True)
class ComparePolicy:
    epoch: bool = False
    delim_precedence: bool = False
    comp_remaining: bool = False
    remainder_precedence: bool = False

    @classmethod
    def from_options(cls, *values: Any) -> ComparePolicy:
        """Build a policy from trailing SQL option values.

        Values map positionally onto OPTION_NAMES; at most four are read and
        any further values are ignored. Each must be an integer or None.
        None and 0 mean False, any other integer means True.

        Raises:
            OptionError: If a value is not an integer or None.
        """
        flags = [False] * len(OPTION_NAMES)
        for idx, value in enumerate(values[: len(OPTION_NAMES)]):
            if value is None:
                continue
            if not isinstance(value, int):
                raise OptionError(
                    "Options for epoch, delim_precedence, comp_remaining, and "
                    "remainder_precedence must be true, false, or null."
                )
            flags[idx] = bool(value)
        return cls(*flags)

    @classmethod
    def from_mapping(cls, data: dict[str, Any], *, name: str = "preset") -> ComparePolicy:
        """Build a policy from a config mapping such as a YAML preset entry.

        Missing keys default to False.

        Raises:
            ConfigError: On unknown keys or non-boolean values.
        """
        unknown = sorted(map(str, set(data) - set(OPTION_NAMES)))
        if unknown:
            raise ConfigError(f"{name}: unknown option(s): {', '.join(unknown)}")
        for key, value in data.items():
            if not isinstance(value, bool):
                raise ConfigError(f"{name}.{key}: must be true or false")
        return cls(**data)

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)

    def describe(self) -> str:
        """Short human-readable list of enabled switches."""
        enabled = [k for k, v in self.as_dict().items() if v]
        return ", ".join(enabled) if enabled else "(none)"


GENERIC = ComparePolicy()
ARCH = ComparePolicy(epoch=True, comp_remaining=True, remainder_precedence=True)
DPKG = ComparePolicy(epoch=True, delim_precedence=True)
RHEL = ComparePolicy(epoch=True, delim_precedence=True, comp_remaining=True)

PRESETS: dict[str, ComparePolicy] = {
    "generic": GENERIC,
    "arch": ARCH,
    "dpkg": DPKG,
    "rhel": RHEL,
}


def get_preset(name: str) -> ComparePolicy:
    """Return the built-in preset called name (case-insensitive).

    Raises:
        ConfigError: If no preset has that name.
    """
    try:
        return PRESETS[name.lower()]
    except KeyError:
        raise ConfigError(
            f"Unknown preset {name!r}. Available: {', '.join(PRESETS)}"
        ) from None
