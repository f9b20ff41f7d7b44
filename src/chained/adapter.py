"""Entry adapter - starts a chain from any value."""

from __future__ import annotations

import copy as _copy
from collections.abc import Callable
from typing import Any, TypeVar, overload

from chained.chain import Chain, Seed

A = TypeVar("A")
B = TypeVar("B")


@overload
def to_chain(value: A, *, copy: bool = ...) -> Chain[A]: ...


@overload
def to_chain(value: A, transform: Callable[[A], B], *, copy: bool = ...) -> Chain[B]: ...


def to_chain(
    value: Any,
    transform: Callable[[Any], Any] | None = None,
    *,
    copy: bool = False,
) -> Chain[Any]:
    """Wrap ``value`` as the seed of a new chain.

    ``to_chain(value, f)`` is exactly ``to_chain(value).chain(f)``.

    Args:
        value: Any object; no capability is required of it
        transform: Optional first transform to append
        copy: Seed the chain with a deep copy of ``value`` so transforms
            that mutate their input leave the caller's object intact

    Returns:
        A pending chain

    Example:
        >>> to_chain("abcde", len).chain(lambda n: n * n).chain(float).eval()
        25.0
    """
    seed = Seed(_copy.deepcopy(value) if copy else value)
    if transform is None:
        return seed
    return seed.chain(transform)
