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

"""Path expressions for addressing values in a config tree.

A path is a string of keys joined by any of the separators ``/``, ``:`` or
``.``. The separators are interchangeable, even within one path, so these
all address the same value:

    server/http/port
    /server/http/port
    server:http:port
    server.http.port.

Leading and trailing separators are ignored. ``"/"``, ``""`` and strings
made only of separators address the root of the tree.

Note:
    Keys that themselves contain a separator (e.g. ``"1.0"``) cannot be
    addressed with a path. Use Config.raw() for those.

    Paths only reach string keys. Files are read as YAML 1.1, where
    unquoted keys such as ``on``, ``yes``, ``no`` or ``8080`` load as
    booleans or integers, so ``get("on")`` will not find them and
    ``set("on", ...)`` adds a separate ``"on"`` key beside ``True``. Quote
    such keys in the file (``"on": ...``) to keep them addressable.
"""

from __future__ import annotations

import re

SEPARATORS = "/:."

_SPLIT_RE = re.compile(f"[{re.escape(SEPARATORS)}]")


def resolve_path(raw_path: str) -> list[str]:
    """Split a path expression into its keys.

    Each run of non-separator characters becomes one key. Empty segments
    from doubled separators are dropped rather than turned into "" keys.

    Args:
        raw_path: Path expression such as "/one/two" or "one.two".

    Returns:
        Keys in order from the root. Empty list for the root path.

    Example:
        ```python
        resolve_path("/one/two/three")   # ["one", "two", "three"]
        resolve_path("one:two.three.")   # ["one", "two", "three"]
        resolve_path("/")                # []
        ```
    """
    return [segment for segment in _SPLIT_RE.split(raw_path) if segment]


def join_path(keys: list[str]) -> str:
    """Build the canonical slash form of a key list.

    Used for log messages and CLI output.

    Example:
        ```python
        join_path(["one", "two"])  # "/one/two"
        join_path([])              # "/"
        ```
    """
    return "/" + "/".join(keys)
