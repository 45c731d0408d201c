"""
Parser configuration.

A ParserConfiguration is passed to each parse call; nothing in it is
global. from_env() builds one from AMP_* environment variables for the
command line front end.
"""

import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional


DEFAULT_MAX_NESTING_DEPTH = 64

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class ParserConfiguration:
    """Configuration for a single parse"""
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH  # Expressions and blocks
    trace: Optional[Callable[[str], None]] = None  # Receives one line per parser step
    debug_mode: bool = False  # Also log every step at DEBUG

    def __post_init__(self):
        if self.max_nesting_depth < 1:
            raise ValueError(
                f"max_nesting_depth must be positive, got {self.max_nesting_depth}"
            )

    @property
    def tracing(self) -> bool:
        return self.trace is not None or self.debug_mode

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ParserConfiguration':
        """
        Build a configuration from the environment.

        Reads AMP_MAX_NESTING_DEPTH (int) and AMP_DEBUG (1/true/yes/on).
        """
        if environ is None:
            environ = os.environ

        kwargs = {}
        depth = environ.get("AMP_MAX_NESTING_DEPTH")
        if depth:
            try:
                kwargs["max_nesting_depth"] = int(depth)
            except ValueError:
                raise ValueError(f"AMP_MAX_NESTING_DEPTH must be an integer, got {depth!r}") from None

        debug = environ.get("AMP_DEBUG", "")
        kwargs["debug_mode"] = debug.strip().lower() in _TRUE_VALUES

        return cls(**kwargs)
