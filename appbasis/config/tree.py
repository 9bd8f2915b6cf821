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

"""
In-memory tree operations for the configuration store.

The tree is a plain dict whose values are scalars (str, int, float, bool),
lists, or further dicts. Every function here takes the root dict and a key
list produced by resolve_path(), and mutates the root in place so that
references handed out by Config.raw() stay valid.

Write Behavior
--------------
- Missing intermediate dicts are created on write (auto-vivification)
- Writing None deletes the key, then removes every ancestor dict that
  became empty, stopping at the first non-empty one
- Stored values are copied; tuples become lists so the tree stays
  serializable
- Every write reports whether the effective value changed

Type Conflicts
--------------
When a write has to descend through an existing scalar or list, the
default is to replace that value with a dict and emit a warning on the
logger. Pass strict=True to raise ConfigPathError instead; the tree is
left untouched in that case.

Merge Behavior
--------------
merge_values() deep-merges with "overlay wins" semantics:
  - **Dicts**: Recursively merged
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten
  - **None**: Deletes the key
"""

from __future__ import annotations

from typing import Any

from appbasis.config.path import join_path
from appbasis.exceptions import ConfigPathError, ConfigValueError
from appbasis.logging import Logger, get_global_logger

# -------------------------------
# Value helpers
# -------------------------------


def copy_value(value: Any) -> Any:
    """Deep-copy containers, turning tuples into lists.

    Also breaks the sharing YAML anchors and aliases create, so every path
    owns its own subtree.
    """
    if isinstance(value, dict):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [copy_value(v) for v in value]
    return value


def values_equal(a: Any, b: Any) -> bool:
    """
    Deep equality that also compares scalar types.

    1, 1.0 and True are all == in Python but serialize differently, so
    they count as different values here. Dict key order is ignored.
    """
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(values_equal(a[k], b[k]) for k in a)
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    return type(a) is type(b) and a == b


# -------------------------------
# Read
# -------------------------------


def get_value(tree: dict[str, Any], keys: list[str]) -> Any:
    """
    Look up the value stored under keys.

    Returns None when a key is missing or when a non-dict value sits where
    another key is needed. An empty key list returns the live root.
    """
    node: Any = tree
    for key in keys:
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node


# -------------------------------
# Write
# -------------------------------


def _vivify(
    tree: dict[str, Any], keys: list[str], strict: bool, logger: Logger
) -> dict[str, Any]:
    """
    Walk keys from the root, creating dicts where needed, and return the
    dict at the end of the walk.

    A conflict can only be met while walking existing nodes, before
    anything has been created, so raising in strict mode leaves the tree
    as it was.
    """
    node = tree
    for depth, key in enumerate(keys):
        child = node.get(key)
        if child is None:
            child = node[key] = {}
        elif not isinstance(child, dict):
            where = join_path(keys[: depth + 1])
            if strict:
                raise ConfigPathError(
                    f"cannot descend into {where}: holds a "
                    f"{type(child).__name__}, not a mapping"
                )
            logger.warning(
                "TREE",
                f"replacing {type(child).__name__} at {where} with a mapping",
            )
            child = node[key] = {}
        node = child
    return node


def _delete(tree: dict[str, Any], keys: list[str]) -> bool:
    """Remove the leaf at keys and prune ancestors left empty."""
    chain: list[tuple[dict[str, Any], str]] = []
    node = tree
    for key in keys[:-1]:
        child = node.get(key)
        if not isinstance(child, dict):
            return False
        chain.append((node, key))
        node = child

    if keys[-1] not in node:
        return False
    del node[keys[-1]]

    for parent, key in reversed(chain):
        if parent[key]:
            break
        del parent[key]
    return True


def set_value(
    tree: dict[str, Any],
    keys: list[str],
    value: Any = None,
    *,
    strict: bool = False,
    logger: Logger | None = None,
) -> bool:
    """
    Store, replace or delete the value under keys.

    Rules
      - keys == [] and value is None  -> clear the whole tree
      - keys == [] and value is a dict -> replace the whole tree
      - value is None                 -> delete the leaf, prune empty parents
      - otherwise                     -> store a copy of value, creating
                                         intermediate dicts as needed

    Returns
      True when the effective value changed, False otherwise.

    Raises
      ConfigValueError if the root would be replaced by a non-dict.
      ConfigPathError in strict mode when an intermediate is not a dict.
    """
    if logger is None:
        logger = get_global_logger()

    where = join_path(keys)

    if not keys:
        if value is None:
            changed = bool(tree)
            tree.clear()
            logger.debug("TREE", "cleared whole tree")
            return changed
        if not isinstance(value, dict):
            raise ConfigValueError(
                f"the config root must be a mapping, got {type(value).__name__}"
            )
        new_root = copy_value(value)
        if values_equal(tree, new_root):
            return False
        tree.clear()
        tree.update(new_root)
        logger.debug("TREE", "replaced whole tree")
        return True

    if value is None:
        changed = _delete(tree, keys)
        if changed:
            logger.debug("TREE", f"deleted {where}")
        return changed

    parent = _vivify(tree, keys[:-1], strict, logger)
    leaf = keys[-1]
    new_value = copy_value(value)
    if leaf in parent and values_equal(parent[leaf], new_value):
        return False
    parent[leaf] = new_value
    logger.debug("TREE", f"set {where}")
    return True


def merge_values(
    tree: dict[str, Any],
    keys: list[str],
    overlay: dict[str, Any],
    *,
    strict: bool = False,
    logger: Logger | None = None,
) -> bool:
    """
    Deep-merge overlay into the dict stored under keys ("overlay wins").

    Dicts merge recursively; lists and scalars replace what was there;
    None values delete. Returns True if anything changed.
    """
    if not isinstance(overlay, dict):
        raise ConfigValueError(
            f"can only merge a mapping, got {type(overlay).__name__}"
        )

    changed = False
    for key, value in overlay.items():
        path = keys + [str(key)]
        if isinstance(value, dict) and isinstance(get_value(tree, path), dict):
            updated = merge_values(tree, path, value, strict=strict, logger=logger)
        else:
            updated = set_value(tree, path, value, strict=strict, logger=logger)
        changed = updated or changed
    return changed
