"""Structured casting - a transform that validates the value with pydantic."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from chained.chain import Chain
from chained.errors import CastError
from chained.signature import describe

T = TypeVar("T")


def make_cast(target: Any) -> Callable[[Any], Any]:
    """Create a transform that validates its input against ``target``.

    The adapter is built eagerly, so an unsupported ``target`` fails when the
    cast is appended rather than when the chain runs. Validation failures
    raise ``CastError`` from inside the transform.

    Args:
        target: Any type pydantic can validate (models, builtins, generics)

    Returns:
        A unary transform declaring ``target`` as its result type
    """
    adapter: TypeAdapter[Any] = TypeAdapter(target)

    def cast(value: Any) -> Any:
        try:
            return adapter.validate_python(value)
        except ValidationError as e:
            raise CastError(
                f"Cannot cast to {describe(target)}: {e.error_count()} validation error(s)",
                value,
            ) from e

    cast.__annotations__ = {"value": Any, "return": target}
    cast.__qualname__ = f"cast[{describe(target)}]"
    return cast


def cast(self: Chain[Any], target: type[T]) -> Chain[T]:
    """Append a validating cast to the chain.

    Example:
        >>> to_chain("42").cast(int).eval()
        42
    """
    return self.chain(make_cast(target))


# Register the cast operation
Chain.register_op("cast", cast)
