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

"""appbasis - building blocks for small command-line applications

appbasis provides:

- A YAML-backed configuration store with path access ("/a/b", "a:b", "a.b")
- Change tracking so config files are only rewritten when something changed
- Deep merging for layering defaults and overrides
- A pluggable logger that is silent unless the application enables it
- The `appbasis` command for reading and editing config files

Quick Start:

Read and change a config file from Python:

    from appbasis import Config

    cfg = Config("settings.yaml")
    cfg.set("/server/port", 8080)
    cfg.store()

Or from the shell:

    $ appbasis set settings.yaml server.port 8080
    $ appbasis get settings.yaml server.port
    8080

Package Structure:

- cli: Command-line interface with argparse.
- config: Path resolution, tree operations and the Config store.
- exceptions: Exception hierarchy.
- logging: Logger protocol and implementations.
"""

__version__ = "0.3.0"
__license__ = "Apache-2.0"
__description__ = "YAML configuration store for command-line applications"

from appbasis.config import Config, resolve_path
from appbasis.exceptions import (
    AppBasisError,
    ConfigError,
    ConfigLoadError,
    ConfigPathError,
    ConfigStoreError,
    ConfigValueError,
)

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "Config",
    "resolve_path",
    "AppBasisError",
    "ConfigError",
    "ConfigLoadError",
    "ConfigPathError",
    "ConfigStoreError",
    "ConfigValueError",
]
