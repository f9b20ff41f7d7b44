"""Package-wide configuration for chain construction and evaluation."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class ChainConfig:
    """Settings read by composition and evaluation.

    Attributes:
        check_types: Compare annotations at composition time and reject
            transforms whose input does not match the chain's result type.
        log_steps: Emit one debug log record per evaluated transform.
    """

    check_types: bool = True
    log_steps: bool = False


_config = ChainConfig()


def get_config() -> ChainConfig:
    """Return the active configuration."""
    return _config


def configure(config: ChainConfig | None = None, **overrides: Any) -> ChainConfig:
    """Replace the active configuration.

    Args:
        config: New configuration; defaults to the current one
        **overrides: Individual fields to change on top of ``config``

    Returns:
        The configuration that was active before the call
    """
    global _config
    previous = _config
    base = config if config is not None else _config
    _config = replace(base, **overrides) if overrides else base
    return previous


@contextmanager
def configured(**overrides: Any) -> Iterator[ChainConfig]:
    """Temporarily override configuration fields."""
    previous = configure(**overrides)
    try:
        yield _config
    finally:
        configure(previous)
