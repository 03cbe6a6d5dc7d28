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

"""Configuration loading for vercollate.

A config file declares extra comparison presets, which are registered as
additional SQLite collations, and picks the preset used when none is named
on the command line.

File Format:

    apiVersion: vercollate/v1
    default_preset: rhel
    presets:
      alpine:
        epoch: false
        delim_precedence: true
        comp_remaining: true
        remainder_precedence: true

Merge Behavior:

The file is deep-merged over built-in defaults with "last wins" semantics:

- Dicts: Recursively merged (keys from overlay override base)
- Lists and scalars: Replaced

Discovery:

When no path is given, find_config() walks upward from the working
directory looking for vercollate.yaml.

Error Handling:

Every problem raises ConfigError, chained with "from err" where a lower
level exception caused it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import re
from typing import Any

import yaml

from vercollate.exceptions import ConfigError
from vercollate.logging import Logger, resolve_logger
from vercollate.versioning import PRESETS, ComparePolicy

CONFIG_FILENAME = "vercollate.yaml"
API_VERSION = "vercollate/v1"

DEFAULTS: dict[str, Any] = {
    "apiVersion": API_VERSION,
    "default_preset": "generic",
    "presets": {},
}

_KNOWN_KEYS = frozenset(DEFAULTS)

# Collation names are built from preset names, so keep them identifier-like.
_PRESET_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# -------------------------------
# Data types
# -------------------------------


@dataclass(frozen=True)
class VercollateConfig:
    """Effective configuration.

    Attributes:
        default_preset: Preset used when a caller names none.
        presets: Extra presets from the config file (built-ins excluded).
        source: File the config was loaded from, or None for defaults.
    """

    default_preset: str = "generic"
    presets: dict[str, ComparePolicy] = field(default_factory=dict)
    source: Path | None = None

    def resolve_preset(self, name: str | None = None) -> ComparePolicy:
        """Return the policy for name, or for default_preset if name is None.

        Raises:
            ConfigError: If the name matches no built-in or extra preset.
        """
        key = (name or self.default_preset).lower()
        if key in PRESETS:
            return PRESETS[key]
        if key in self.presets:
            return self.presets[key]
        available = list(PRESETS) + sorted(self.presets)
        raise ConfigError(
            f"Unknown preset {key!r}. Available: {', '.join(available)}"
        )

    def all_presets(self) -> dict[str, ComparePolicy]:
        """Built-in presets followed by extra presets."""
        merged = dict(PRESETS)
        merged.update(self.presets)
        return merged


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """Loads a YAML file and returns the parsed Python object.

    Raises:
        ConfigError: When the file does not exist, cannot be parsed, or is
            empty.
    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    except OSError as err:
        raise ConfigError(f"Failed to read config file: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep-merges two dicts with "overlay wins" semantics.

    Does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# -------------------------------
# Checks
# -------------------------------


def check_config_data(data: Any) -> tuple[list[str], list[str]]:
    """Check parsed config data without raising.

    Args:
        data: Object parsed from the YAML file (before merging defaults).

    Returns:
        A tuple (errors, warnings) of message lists.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not isinstance(data, dict):
        errors.append("Config must be a YAML dictionary/mapping")
        return errors, warnings

    for key in sorted(set(data) - _KNOWN_KEYS, key=str):
        warnings.append(f"Unknown top-level field ignored: {key}")

    api_version = data.get("apiVersion")
    if api_version is None:
        warnings.append(f"Missing field: apiVersion (assuming {API_VERSION})")
    elif not isinstance(api_version, str):
        errors.append("apiVersion must be a string")
    elif api_version != API_VERSION:
        warnings.append(
            f"apiVersion '{api_version}' may not be supported (expected: {API_VERSION})"
        )

    presets = data.get("presets", {})
    if presets is None:
        presets = {}
    if not isinstance(presets, dict):
        errors.append("Field 'presets' must be a mapping of name to options")
        presets = {}

    for name, options in presets.items():
        prefix = f"presets.{name}"
        if not isinstance(name, str) or not _PRESET_NAME.match(name):
            errors.append(
                f"{prefix}: Preset names must start with a letter or underscore "
                "and contain only letters, digits and underscores"
            )
            continue
        if name.lower() in PRESETS:
            errors.append(f"{prefix}: Cannot redefine built-in preset '{name}'")
            continue
        if name != name.lower():
            errors.append(f"{prefix}: Preset names must be lowercase")
            continue
        if not isinstance(options, dict):
            errors.append(f"{prefix}: Must be a mapping of option to true/false")
            continue
        try:
            ComparePolicy.from_mapping(options, name=prefix)
        except ConfigError as err:
            errors.append(str(err))

    default = data.get("default_preset", DEFAULTS["default_preset"])
    if not isinstance(default, str):
        errors.append("default_preset must be a string")
    elif default.lower() not in PRESETS and default.lower() not in presets:
        errors.append(f"default_preset: Unknown preset '{default}'")

    return errors, warnings


# -------------------------------
# Public API
# -------------------------------


def find_config(start_dir: Path | None = None) -> Path | None:
    """Walk upward from start_dir looking for vercollate.yaml.

    Args:
        start_dir: Directory to start from. Defaults to the working
            directory.

    Returns:
        Path to the first vercollate.yaml found, or None.
    """
    start = (start_dir or Path.cwd()).resolve()
    for parent in [start] + list(start.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(
    config_path: Path | None = None,
    *,
    logger: Logger | None = None,
) -> VercollateConfig:
    """Load the effective configuration.

    Args:
        config_path: YAML file to load. None returns the built-in defaults.
        logger: Logger for progress messages. Defaults to the global logger.

    Returns:
        The effective VercollateConfig.

    Raises:
        ConfigError: If the file is missing, unparseable or invalid.
    """
    logger = resolve_logger(logger)

    if config_path is None:
        logger.debug("CONFIG", "No config file, using built-in presets only")
        return VercollateConfig()

    config_path = Path(config_path).resolve()
    logger.verbose("CONFIG", f"Loading: {config_path}")

    data = _load_yaml_file(config_path)
    errors, warnings = check_config_data(data)
    for warning in warnings:
        logger.verbose("CONFIG", f"Warning: {warning}")
    if errors:
        raise ConfigError(f"Invalid config {config_path}: " + "; ".join(errors))

    merged = _deep_merge_dicts(DEFAULTS, data)
    presets = {
        name: ComparePolicy.from_mapping(options, name=f"presets.{name}")
        for name, options in (merged.get("presets") or {}).items()
    }
    for name, policy in presets.items():
        logger.debug("CONFIG", f"Preset {name}: {policy.describe()}")

    default_preset = merged["default_preset"].lower()
    logger.verbose(
        "CONFIG",
        f"Loaded {len(presets)} extra preset(s), default preset: {default_preset}",
    )
    return VercollateConfig(
        default_preset=default_preset,
        presets=presets,
        source=config_path,
    )
