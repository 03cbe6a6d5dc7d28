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

Public API:

- load_config: Load a YAML preset file into a VercollateConfig
- find_config: Locate vercollate.yaml by walking up from a directory
- VercollateConfig: Effective configuration (default preset, extra presets)

Example:
    Basic usage:

        from pathlib import Path
        from vercollate.config import load_config

        config = load_config(Path("vercollate.yaml"))
        policy = config.resolve_preset()  # default_preset from the file

"""

from .loader import VercollateConfig, find_config, load_config

__all__ = ["VercollateConfig", "find_config", "load_config"]
