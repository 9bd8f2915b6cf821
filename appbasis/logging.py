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

"""Logging interface for appbasis.

Library code never prints on its own. Every function that has something to
report takes an optional logger and falls back to the global logger, which
is silent until the application configures it.

The logger supports three output kinds:
- Verbose: Only printed when verbose mode is enabled
- Debug: Only printed when debug mode is enabled (implies verbose)
- Warning: Always printed, to stderr

Example:
    Configure global logger:
        ```python
        from appbasis.logging import get_logger, set_global_logger

        set_global_logger(get_logger(verbose=True))
        ```

    Route messages to your own handler:
        ```python
        from appbasis.logging import CallbackLogger, set_global_logger

        def my_debug(level, message):
            my_log.write(f"{level}: {message}\\n")

        set_global_logger(CallbackLogger(my_debug))
        ```

    Use with dependency injection:

        def my_function(logger=None):
            if logger is None:
                logger = get_global_logger()
            logger.verbose("MODULE", "Processing...")
"""

from __future__ import annotations

import sys
from typing import Callable, Protocol


class Logger(Protocol):
    """Protocol for logger implementations."""

    def verbose(self, prefix: str, message: str) -> None:
        """Print a verbose log message.

        Args:
            prefix: Message prefix (e.g., "CONFIG", "STORE").
            message: Log message.
        """
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message.

        Args:
            prefix: Message prefix (e.g., "TREE", "PATH").
            message: Log message.
        """
        ...

    def warning(self, prefix: str, message: str) -> None:
        """Report a recoverable problem.

        Args:
            prefix: Message prefix (e.g., "TREE").
            message: Warning text.
        """
        ...


class DefaultLogger:
    """Default logger implementation that prints to stdout.

    Warnings go to stderr regardless of the verbosity flags.
    """

    def __init__(self, verbose: bool = False, debug: bool = False) -> None:
        """Initialize logger with verbosity settings.

        Args:
            verbose: If True, print verbose messages.
            debug: If True, print debug messages (implies verbose).
        """
        self._verbose = verbose or debug
        self._debug = debug

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            print(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            print(f"[{prefix}] {message}")

    def warning(self, prefix: str, message: str) -> None:
        print(f"[{prefix}] WARNING: {message}", file=sys.stderr)


class SilentLogger:
    """Logger that suppresses all output.

    This is the global default, so library calls stay quiet unless the
    application asks otherwise.
    """

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass

    def warning(self, prefix: str, message: str) -> None:
        pass


class CallbackLogger:
    """Logger that hands every message to a user-supplied function.

    The callback receives a level name ("VERBOSE", "DEBUG" or
    "WARN") and the formatted message. Useful for wiring appbasis into an
    existing logging setup without writing a full Logger class.

    Example:
        ```python
        import logging

        log = logging.getLogger("myapp")
        levels = {"DEBUG": logging.DEBUG, "WARN": logging.WARNING}

        set_global_logger(
            CallbackLogger(lambda lvl, msg: log.log(levels.get(lvl, logging.INFO), msg))
        )
        ```
    """

    def __init__(self, func: Callable[[str, str], None]) -> None:
        """Initialize with the function that receives messages.

        Args:
            func: Callable taking (level, message).

        Raises:
            TypeError: If func is not callable.
        """
        if not callable(func):
            raise TypeError(
                f"CallbackLogger expects a callable, got {type(func).__name__}"
            )
        self._func = func

    def verbose(self, prefix: str, message: str) -> None:
        self._func("VERBOSE", f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        self._func("DEBUG", f"[{prefix}] {message}")

    def warning(self, prefix: str, message: str) -> None:
        self._func("WARN", f"[{prefix}] {message}")


# Global logger instance (defaults to silent)
_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Get a printing logger with the given verbosity.

    Args:
        verbose: If True, logger will print verbose messages.
        debug: If True, logger will print debug messages (implies verbose).

    Returns:
        A DefaultLogger configured with the specified verbosity.
    """
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Get the global logger instance.

    Returns:
        The current global logger instance.

    Note:
        The default global logger is silent. Use set_global_logger() to
        configure it, or pass a logger instance directly to functions.
    """
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Set the global logger instance.

    Args:
        logger: Logger instance to use as the global logger.

    Note:
        This affects every Config created without an explicit logger. For
        better isolation, pass logger instances directly instead.
    """
    global _global_logger
    _global_logger = logger
