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

"""Exception hierarchy for appbasis.

This module defines the exceptions raised by the configuration store so
callers can tell the different failure kinds apart:

- ConfigLoadError: The config file exists but could not be parsed
- ConfigPathError: A write tried to descend through a non-mapping value
- ConfigValueError: A value cannot be stored where it was requested
- ConfigStoreError: Writing the config file failed

All exceptions inherit from AppBasisError, allowing users to catch every
appbasis error with a single except clause if needed.

Example:
    Catching specific error types:
        ```python
        from appbasis import Config
        from appbasis.exceptions import ConfigLoadError, ConfigStoreError

        try:
            cfg = Config("settings.yaml", die_on_error=True)
            cfg.set("/server/port", 8080)
            cfg.store()
        except ConfigLoadError as e:
            print(f"Could not read config: {e}")
        except ConfigStoreError as e:
            print(f"Could not save config: {e}")
        ```

    Catching all appbasis errors:
        ```python
        from appbasis.exceptions import AppBasisError

        try:
            cfg.store()
        except AppBasisError as e:
            print(f"appbasis error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "AppBasisError",
    "ConfigError",
    "ConfigLoadError",
    "ConfigPathError",
    "ConfigValueError",
    "ConfigStoreError",
]


class AppBasisError(Exception):
    """Base exception for all appbasis errors."""

    pass


class ConfigError(AppBasisError):
    """Raised for configuration-related errors.

    Base class for every error the configuration store raises. Catch this
    when the exact failure kind does not matter.
    """

    pass


class ConfigLoadError(ConfigError):
    """Raised when an existing config file cannot be loaded.

    This exception is only raised when the Config was created with
    die_on_error=True. It covers:

    - YAML syntax errors
    - A top-level document that is not a mapping
    - Files that exist but cannot be read

    Example:
        ```python
        try:
            cfg = Config("broken.yaml", die_on_error=True)
        except ConfigLoadError as e:
            print(f"Config error: {e}")
        ```
    """

    pass


class ConfigPathError(ConfigError):
    """Raised when a write descends through an existing non-mapping value.

    Only raised in strict mode. Without strict mode the offending value is
    replaced by a mapping and a warning is logged.
    """

    pass


class ConfigValueError(ConfigError):
    """Raised when a value cannot be stored at the requested location.

    For example, replacing the whole tree with a list or a scalar.
    """

    pass


class ConfigStoreError(ConfigError):
    """Raised when writing the config file fails.

    The Config keeps its dirty flag when this is raised, so a later
    store() call can retry the write.
    """

    pass
