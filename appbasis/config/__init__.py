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

"""Configuration store for appbasis.

This package provides a YAML-backed configuration tree addressed by path
strings, split into three layers:

  - path: turn "one/two", "one:two" or "one.two" into a key list
  - tree: get, set, delete and merge values in a nested dict
  - store: the Config class, which adds loading, dirty tracking and saving

Public API:

- Config: Load, query, change and store a config file
- resolve_path: Split a path expression into keys
- get_value, set_value, merge_values: Operate on a bare dict tree
- load_config_file, save_config_file: YAML file helpers
- Loaded, NotFound, ParseError: Results of load_config_file

Example:
    Basic usage:

        from appbasis.config import Config

        cfg = Config("settings.yaml")
        cfg.set("/database/host", "localhost")
        cfg.set("database:port", 5432)
        print(cfg.get("database.host"))  # "localhost"
        cfg.store()

"""

from .path import join_path, resolve_path
from .store import (
    Config,
    Loaded,
    LoadResult,
    NotFound,
    ParseError,
    load_config_file,
    save_config_file,
)
from .tree import copy_value, get_value, merge_values, set_value, values_equal

__all__ = [
    "Config",
    "copy_value",
    "LoadResult",
    "Loaded",
    "NotFound",
    "ParseError",
    "get_value",
    "join_path",
    "load_config_file",
    "merge_values",
    "resolve_path",
    "save_config_file",
    "set_value",
    "values_equal",
]
