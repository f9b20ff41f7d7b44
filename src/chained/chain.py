"""Chain representation - a seed value plus an ordered sequence of pending transforms.

A chain is built by wrapping: every composition returns a new ``Step`` that
owns the prior chain and one transform. Nothing runs until ``eval()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from chained import signature
from chained.config import get_config
from chained.errors import ChainConsumedError, ChainTypeError

if TYPE_CHECKING:
    from chained.trace import Trace

T = TypeVar("T")
R = TypeVar("R")


# Extension registry - class-level storage for Chain operations
_extensions_registry: dict[str, Callable[..., Any]] = {}


class Chain(ABC, Generic[T]):
    """A deferred computation producing a value of type ``T``.

    Chains are single-use: composing onto a chain or evaluating it consumes
    it, and any further use raises ``ChainConsumedError``.

    Operations can be registered via register_op() for extensibility.
    """

    _consumed: bool = False

    @classmethod
    def register_op(cls, name: str, fn: Callable[..., Any]) -> None:
        """Register an operation on the Chain class.

        Args:
            name: The operation name (e.g., "cast")
            fn: Function taking the chain as its first argument
        """
        _extensions_registry[name] = fn

    def __getattr__(self, name: str) -> Any:
        """Allow calling registered extension methods."""
        if name in _extensions_registry:
            fn = _extensions_registry[name]
            return lambda *args, **kwargs: fn(self, *args, **kwargs)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    @property
    @abstractmethod
    def result_type(self) -> Any:
        """Declared type of the value this chain evaluates to."""

    @property
    @abstractmethod
    def steps(self) -> int:
        """Number of pending transforms."""

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _claim(self, operation: str) -> None:
        if self._consumed:
            raise ChainConsumedError(operation)
        object.__setattr__(self, "_consumed", True)

    def chain(self, transform: Callable[[T], R]) -> Step[R]:
        """Append a transform without running anything.

        Args:
            transform: Unary callable applied to this chain's result

        Returns:
            New chain owning this one; this chain becomes consumed

        Raises:
            ChainConsumedError: If this chain was already consumed
            ChainTypeError: If ``transform`` cannot accept this chain's result
        """
        return Step(self, transform)

    def eval(self, trace: Trace | None = None) -> T:
        """Run every pending transform in order and return the final value."""
        from chained.evaluator import evaluate

        return evaluate(self, trace)

    def __copy__(self) -> Chain[T]:
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def __deepcopy__(self, memo: dict[int, Any]) -> Chain[T]:
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def __reduce_ex__(self, protocol: Any) -> Any:
        raise TypeError(f"{type(self).__name__} cannot be pickled")

    def _release(self) -> None:
        """Drop held values and transforms once evaluation has taken them."""

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else "pending"
        return (
            f"{type(self).__name__}(steps={self.steps}, "
            f"result_type={signature.describe(self.result_type)}, {state})"
        )


@dataclass(frozen=True, eq=False, repr=False)
class Seed(Chain[T]):
    """A chain holding a single untransformed value."""

    value: T

    def __post_init__(self) -> None:
        object.__setattr__(self, "_result_type", type(self.value))

    @property
    def result_type(self) -> Any:
        return self._result_type  # type: ignore[attr-defined]

    @property
    def steps(self) -> int:
        return 0

    def _release(self) -> None:
        object.__setattr__(self, "value", None)


@dataclass(frozen=True, eq=False, repr=False)
class Step(Chain[T]):
    """A chain wrapping a prior chain plus one transform.

    Construction validates the transform against ``prior`` and then takes
    ownership of ``prior``. A rejected transform leaves ``prior`` usable.
    After evaluation both fields are released and read as None.
    """

    prior: Chain[Any]
    transform: Callable[[Any], T]

    def __post_init__(self) -> None:
        if not isinstance(self.prior, Chain):
            raise ChainTypeError(
                f"Step prior must be a Chain, got {type(self.prior).__name__}",
                expected=Chain,
                actual=type(self.prior),
            )
        if self.prior.consumed:
            raise ChainConsumedError("chain")

        signature.check_unary(self.transform)
        if get_config().check_types:
            expected = signature.input_type(self.transform)
            actual = self.prior.result_type
            if not signature.is_compatible(actual, expected):
                raise ChainTypeError(
                    f"Transform {signature.describe(self.transform)} expects "
                    f"{signature.describe(expected)}, but the chain produces "
                    f"{signature.describe(actual)}",
                    expected=expected,
                    actual=actual,
                )

        self.prior._claim("chain")
        object.__setattr__(self, "_steps", self.prior.steps + 1)
        object.__setattr__(self, "_result_type", signature.output_type(self.transform))

    @property
    def result_type(self) -> Any:
        return self._result_type  # type: ignore[attr-defined]

    @property
    def steps(self) -> int:
        return self._steps  # type: ignore[attr-defined]

    def _release(self) -> None:
        object.__setattr__(self, "prior", None)
        object.__setattr__(self, "transform", None)
