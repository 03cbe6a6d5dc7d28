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

"""Config file validation.

Unlike load_config(), which stops at the first broken file with a
ConfigError, validate_config() reports every problem it finds. It backs the
`vercollate validate` command and is useful as a CI pre-check.

Validation Checks:

- YAML syntax is valid
- Top level is a mapping
- apiVersion is supported
- Preset names are lowercase identifiers not shadowing a built-in
- Preset options are known switches set to true/false
- default_preset names a built-in or declared preset

Example:
    Validate a config and handle results:
        ```python
        from pathlib import Path
        from vercollate.validation import validate_config

        result = validate_config(Path("vercollate.yaml"))
        if result.status == "valid":
            print(f"{result.preset_count} extra preset(s)")
        else:
            for error in result.errors:
                print(f"Error: {error}")
        ```

"""

from __future__ import annotations

from pathlib import Path

import yaml

from vercollate.config.loader import check_config_data
from vercollate.logging import Logger, resolve_logger
from vercollate.results import ValidationResult

__all__ = ["validate_config"]


def _invalid(config_path: Path, error: str) -> ValidationResult:
    return ValidationResult(
        status="invalid",
        errors=[error],
        warnings=[],
        preset_count=0,
        config_path=str(config_path),
    )


def validate_config(
    config_path: Path, *, logger: Logger | None = None
) -> ValidationResult:
    """Validate a preset config file without raising.

    Args:
        config_path: Path to the YAML file to validate.
        logger: Logger for progress messages. Defaults to the global logger.

    Returns:
        ValidationResult with status "valid" or "invalid".
    """
    logger = resolve_logger(logger)
    logger.verbose("CONFIG", f"Validating: {config_path}")

    if not config_path.exists():
        return _invalid(config_path, f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        return _invalid(config_path, f"Invalid YAML syntax: {err}")
    except OSError as err:
        return _invalid(config_path, f"Failed to read config file: {err}")

    if data is None:
        return _invalid(config_path, "Config file is empty")

    logger.verbose("CONFIG", "[OK] YAML syntax is valid")

    errors, warnings = check_config_data(data)
    presets = data.get("presets") if isinstance(data, dict) else None
    preset_count = len(presets) if isinstance(presets, dict) else 0

    status = "valid" if not errors else "invalid"
    if status == "valid":
        logger.verbose("CONFIG", "[OK] Config is valid")
    else:
        logger.verbose("CONFIG", f"[ERROR] Config has {len(errors)} error(s)")

    return ValidationResult(
        status=status,
        errors=errors,
        warnings=warnings,
        preset_count=preset_count,
        config_path=str(config_path),
    )
