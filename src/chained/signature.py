"""Annotation introspection used to validate transforms at composition time.

Everything here works on declared annotations only. Missing or unresolvable
annotations are reported as ``Any`` and never cause a rejection.
"""

from __future__ import annotations

import inspect
import types
import typing
from collections.abc import Callable
from typing import Any, TypeVar, Union, get_args, get_origin

from chained.errors import ChainTypeError

# PEP 484 numeric tower: an int is acceptable where a float is expected, etc.
_NUMERIC_PROMOTIONS: dict[type, tuple[type, ...]] = {
    float: (int,),
    complex: (int, float),
}


def _signature(fn: Callable[..., Any]) -> inspect.Signature | None:
    try:
        return inspect.signature(fn)
    except (TypeError, ValueError):
        # Some builtins and C types expose no signature
        return None


def _type_hints(fn: Callable[..., Any]) -> dict[str, Any]:
    target = fn.__call__ if not inspect.isroutine(fn) and not isinstance(fn, type) else fn
    try:
        return typing.get_type_hints(target)
    except Exception:
        # Unresolvable forward references leave the transform unchecked
        return {}


def check_unary(fn: Any) -> None:
    """Reject anything that cannot be called with exactly one argument.

    Raises:
        ChainTypeError: If ``fn`` is not callable or its signature cannot bind
            a single positional argument
    """
    if not callable(fn):
        raise ChainTypeError(
            f"Transform must be callable, got {type(fn).__name__}",
            expected=Callable,
            actual=type(fn),
        )
    sig = _signature(fn)
    if sig is None:
        return
    try:
        sig.bind(object())
    except TypeError as exc:
        raise ChainTypeError(
            f"Transform {describe(fn)} must accept exactly one positional argument: {exc}",
            expected="unary callable",
            actual=str(sig),
        ) from exc


def input_type(fn: Callable[..., Any]) -> Any:
    """Return the annotation of the transform's first parameter, or ``Any``."""
    if isinstance(fn, type):
        return Any
    sig = _signature(fn)
    if sig is None:
        return Any
    params = [
        p
        for p in sig.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
    ]
    if not params:
        return Any
    first = params[0]
    if first.annotation is inspect.Parameter.empty:
        return Any
    return _type_hints(fn).get(first.name, Any)


def output_type(fn: Callable[..., Any]) -> Any:
    """Return the declared result type of a transform, or ``Any``.

    A class used as a transform produces instances of itself.
    """
    if isinstance(fn, type):
        return fn
    hints = _type_hints(fn)
    if "return" not in hints:
        return Any
    result = hints["return"]
    return type(None) if result is None else result


def _is_union(tp: Any) -> bool:
    return get_origin(tp) in (Union, types.UnionType)


def is_compatible(actual: Any, expected: Any) -> bool:
    """Check whether a value of type ``actual`` may be passed where ``expected`` is declared.

    Unknown types on either side are compatible.
    """
    if actual is Any or expected is Any or expected is object:
        return True
    if isinstance(actual, TypeVar) or isinstance(expected, TypeVar):
        return True
    if expected is None:
        expected = type(None)
    if actual is None:
        actual = type(None)

    if _is_union(actual):
        return all(is_compatible(member, expected) for member in get_args(actual))
    if _is_union(expected):
        return any(is_compatible(actual, member) for member in get_args(expected))

    actual_cls = get_origin(actual) or actual
    expected_cls = get_origin(expected) or expected
    if not isinstance(actual_cls, type) or not isinstance(expected_cls, type):
        # Literal, Annotated, Callable[...] and friends are not checked
        return True

    try:
        if issubclass(actual_cls, expected_cls):
            return True
    except TypeError:
        return True
    return actual_cls in _NUMERIC_PROMOTIONS.get(expected_cls, ())


def describe(tp_or_fn: Any) -> str:
    """Human-readable name for a type or a transform."""
    if tp_or_fn is Any:
        return "Any"
    if isinstance(tp_or_fn, type) and get_origin(tp_or_fn) is None:
        return tp_or_fn.__qualname__
    name = getattr(tp_or_fn, "__qualname__", None)
    if name is not None:
        return name
    return repr(tp_or_fn)
