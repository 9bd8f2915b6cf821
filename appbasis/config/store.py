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

"""Persistent YAML-backed configuration store.

This module implements the Config class, which loads a YAML file into an
in-memory tree, gives path-based access to it, tracks whether anything
changed, and writes the tree back only when it did.

Key Features:

- Path access with "/", ":" or "." separators (see appbasis.config.path)
- Auto-creation of intermediate mappings on write
- Pruning of empty mappings on delete
- Dirty tracking so unchanged trees are never rewritten
- Read-only instances (nostore) for comparison or inspection
- Missing files start as an empty tree; unreadable files either raise or
  degrade to an empty tree depending on die_on_error

Example:
    Basic usage:
        ```python
        from appbasis import Config

        cfg = Config("~/.myapp.yaml")
        port = cfg.get("/server/port", 8080)

        cfg.set("/server/port", 9090)
        cfg.set("server.debug", True)
        cfg.set("/old/setting")         # delete

        if cfg.changed():
            cfg.store()
        ```

    Low-level API with functions:
        ```python
        from pathlib import Path
        from appbasis.config import load_config_file, save_config_file, Loaded

        result = load_config_file(Path("settings.yaml"))
        if isinstance(result, Loaded):
            tree = result.tree
        ```

Note:
    Config never writes on its own. Dropping an instance with unsaved
    changes loses them; call store() explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
import shutil
import tempfile
from typing import Any

import yaml

from appbasis.config.path import resolve_path
from appbasis.config.tree import copy_value, get_value, merge_values, set_value
from appbasis.exceptions import ConfigLoadError, ConfigStoreError
from appbasis.logging import Logger, get_global_logger

# -------------------------------
# Load results
# -------------------------------


@dataclass(frozen=True)
class Loaded:
    """The file was read and parsed into a mapping.

    Attributes:
        tree: Parsed contents. Empty dict for an empty file.
    """

    tree: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NotFound:
    """The file does not exist."""

    path: Path


@dataclass(frozen=True)
class ParseError:
    """The file exists but could not be turned into a mapping.

    Attributes:
        path: File that failed to load.
        message: Human-readable reason.
        cause: Underlying exception, if any.
    """

    path: Path
    message: str
    cause: Exception | None = None


LoadResult = Loaded | NotFound | ParseError


# -------------------------------
# YAML helpers
# -------------------------------


def load_config_file(path: Path) -> LoadResult:
    """Read a YAML config file without raising.

    Args:
        path: File to read.

    Returns:
        Loaded with the parsed mapping, NotFound if the file is missing,
        or ParseError if it cannot be read, is not valid YAML, or its
        top-level value is not a mapping.

    Example:
        ```python
        result = load_config_file(Path("settings.yaml"))
        match result:
            case Loaded(tree):
                ...
            case NotFound():
                ...
            case ParseError(message=msg):
                print(msg)
        ```
    """
    if not path.exists():
        return NotFound(path)

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        return ParseError(path, f"invalid YAML in {path}: {err}", err)
    except (OSError, UnicodeDecodeError) as err:
        return ParseError(path, f"cannot read {path}: {err}", err)

    if data is None:
        return Loaded({})
    if not isinstance(data, dict):
        return ParseError(
            path,
            f"top-level YAML must be a mapping in {path}, "
            f"got {type(data).__name__}",
        )
    return Loaded(copy_value(data))


def save_config_file(tree: dict[str, Any], path: Path) -> None:
    """Write a tree to a YAML file in block style.

    Creates parent directories if needed. Keys keep their insertion order
    so a loaded-then-stored file keeps its layout.

    The text is rendered first and written to a temporary file beside the
    destination, which then replaces it. A failure at any point leaves the
    existing file as it was.

    Args:
        tree: Mapping to write.
        path: Destination file.

    Raises:
        OSError: If the directory or file cannot be written.
        yaml.YAMLError: If the tree holds values YAML cannot represent.
    """
    text = yaml.safe_dump(
        tree,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )

    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        if path.exists():
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


# -------------------------------
# Config
# -------------------------------


class Config:
    """Path-addressable configuration tree backed by a YAML file.

    Attributes:
        filename: File the tree was loaded from and is stored to by default.
        error: Reason the file could not be loaded, or None.
        nostore: True if this instance never writes.

    Example:
        Read-only comparison copy:
            ```python
            current = Config("app.yaml")
            pristine = Config("app.yaml", nostore=True)
            current.set("/ui/theme", "dark")
            pristine.set("/ui/theme", "dark")
            pristine.store()   # False, nothing written
            ```

    """

    def __init__(
        self,
        filename: str | Path,
        *,
        die_on_error: bool = False,
        nostore: bool = False,
        strict: bool = False,
        logger: Logger | None = None,
    ):
        """Load the config file.

        Args:
            filename: YAML file to load from and store to. "~" is expanded.
            die_on_error: If True, raise ConfigLoadError when the file exists
                but cannot be parsed. If False, start with an empty tree and
                keep the reason in ``error``.
            nostore: If True, store() never writes.
            strict: If True, raise ConfigPathError when a write would descend
                through an existing non-mapping value, instead of replacing it.
            logger: Logger for progress and warnings. Defaults to the global
                logger.

        Raises:
            ConfigLoadError: If die_on_error is set and loading fails.

        """
        self._filename = Path(filename).expanduser()
        self._nostore = nostore
        self._strict = strict
        self._logger = logger if logger is not None else get_global_logger()
        self._tree: dict[str, Any] = {}
        self._changed = False
        self._error: str | None = None

        result = load_config_file(self._filename)
        if isinstance(result, Loaded):
            self._tree = result.tree
            self._logger.verbose(
                "CONFIG",
                f"Loaded {self._filename} ({len(self._tree)} top-level keys)",
            )
        elif isinstance(result, NotFound):
            self._logger.verbose(
                "CONFIG", f"{self._filename} does not exist, starting empty"
            )
        else:
            if die_on_error:
                raise ConfigLoadError(result.message) from result.cause
            self._error = result.message
            self._logger.warning("CONFIG", f"{result.message}; starting empty")

    @property
    def filename(self) -> Path:
        return self._filename

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def nostore(self) -> bool:
        return self._nostore

    def get(self, path: str, default: Any = None) -> Any:
        """Return the value at path, or default if nothing is stored there.

        The root path returns the whole tree. Container values are returned
        live; change them through set() so the change is tracked.
        """
        value = get_value(self._tree, resolve_path(path))
        return default if value is None else value

    def set(self, path: str, value: Any = None) -> bool:
        """Store value at path, or delete the path when value is None.

        Args:
            path: Where to write. The root path clears (value None) or
                replaces (value is a mapping) the whole tree.
            value: Scalar, list or mapping to store; None deletes.

        Returns:
            True if the stored value changed.

        Raises:
            ConfigValueError: If the root is replaced with a non-mapping.
            ConfigPathError: In strict mode, if an intermediate is not a
                mapping.

        """
        changed = set_value(
            self._tree,
            resolve_path(path),
            value,
            strict=self._strict,
            logger=self._logger,
        )
        if changed:
            self._changed = True
        return changed

    def delete(self, path: str) -> bool:
        """Remove the value at path. Same as set(path)."""
        return self.set(path)

    def merge(self, values: dict[str, Any], path: str = "/") -> bool:
        """Deep-merge a mapping into the tree at path.

        Useful for layering defaults, site settings and user overrides on
        top of one another. Mappings merge recursively; lists and scalars
        replace; None deletes.

        Returns:
            True if anything changed.

        """
        changed = merge_values(
            self._tree,
            resolve_path(path),
            values,
            strict=self._strict,
            logger=self._logger,
        )
        if changed:
            self._changed = True
        return changed

    def store(self, target: str | Path | None = None) -> bool:
        """Write the tree if it has unsaved changes.

        Args:
            target: File to write instead of ``filename``. Does not change
                ``filename``.

        Returns:
            True if the file was written, False if nothing needed writing or
            this instance was created with nostore.

        Raises:
            ConfigStoreError: If the write fails. The changed flag is kept
                so the write can be retried.

        """
        if self._nostore:
            self._logger.debug("CONFIG", "nostore set, not writing")
            return False
        if not self._changed:
            self._logger.debug("CONFIG", "no changes, not writing")
            return False

        dest = Path(target).expanduser() if target is not None else self._filename
        try:
            save_config_file(self._tree, dest)
        except (OSError, yaml.YAMLError) as err:
            raise ConfigStoreError(f"failed to write {dest}: {err}") from err

        self._changed = False
        self._logger.verbose("CONFIG", f"Stored config to {dest}")
        return True

    def changed(self) -> bool:
        """Return True if there are changes not yet stored."""
        return self._changed

    def has_data(self) -> bool:
        """Return True if the tree holds any keys."""
        return bool(self._tree)

    def raw(self) -> dict[str, Any]:
        """Return the live tree.

        Changes made directly to the returned dict are not tracked and will
        not make store() write.
        """
        return self._tree

    def __repr__(self) -> str:
        return (
            f"Config(filename={str(self._filename)!r}, "
            f"changed={self._changed}, nostore={self._nostore})"
        )
