"""Shorthand for writing chains as one flat call.

``chained`` takes positional tokens and expands them into entry-adapter,
composition and evaluation calls. It adds no behaviour of its own.

Forms::

    chained(seed, f, g)                  # lazy: to_chain(seed).chain(f).chain(g)
    chained(seed, ARROW, f, ARROW, g)    # same, arrow separated
    chained(EVAL, seed, f, g)            # eager: ... .eval()
    chained(ARROW, existing, f)          # extend an existing chain, lazy
    chained(EXTEND_EVAL, existing, f)    # extend an existing chain, eager

Separators cannot be mixed: after the head, either every item is separated
by ``ARROW`` or none is.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from chained.adapter import to_chain
from chained.chain import Chain
from chained.errors import ChainSyntaxError


class Token(Enum):
    """Marker tokens recognised by ``chained``."""

    ARROW = "=>"
    EVAL = ">>"
    EXTEND_EVAL = ">>>"


ARROW = Token.ARROW
EVAL = Token.EVAL
EXTEND_EVAL = Token.EXTEND_EVAL


@dataclass(frozen=True)
class Expansion:
    """The call sequence a shorthand expands to.

    Attributes:
        target: Seed value, or the existing chain when ``extend`` is set
        steps: Transforms to append, in order
        extend: Append to ``target`` instead of wrapping it with the adapter
        evaluate: Finish with an evaluation call
    """

    target: Any
    steps: tuple[Callable[[Any], Any], ...]
    extend: bool = False
    evaluate: bool = False

    def apply(self) -> Any:
        """Perform the calls and return the chain, or its value when eager."""
        result: Chain[Any] = self.target if self.extend else to_chain(self.target)
        for step in self.steps:
            result = result.chain(step)
        if self.evaluate:
            return result.eval()
        return result


def _split(items: tuple[Any, ...]) -> tuple[Any, tuple[Any, ...]]:
    """Strip separators from ``target [sep step]*`` and return (target, steps)."""
    if not items:
        raise ChainSyntaxError("Missing seed expression")
    if items[0] is ARROW:
        raise ChainSyntaxError("Unexpected '=>' before seed expression")

    rest = items[1:]
    if not any(item is ARROW for item in rest):
        if any(isinstance(item, Token) for item in rest):
            raise ChainSyntaxError("Marker tokens are only allowed before the seed")
        return items[0], rest

    # Arrow form: every odd position must be a separator
    separators = rest[0::2]
    steps = rest[1::2]
    if any(sep is not ARROW for sep in separators):
        raise ChainSyntaxError("Cannot mix ',' and '=>' separators")
    if len(separators) != len(steps):
        raise ChainSyntaxError("Dangling '=>' without a following step")
    if any(isinstance(step, Token) for step in steps):
        raise ChainSyntaxError("Expected a step after '=>', got a marker token")
    return items[0], steps


def expand(*tokens: Any) -> Expansion:
    """Parse shorthand tokens into an ``Expansion`` without running anything.

    Raises:
        ChainSyntaxError: If the tokens do not match one of the forms
    """
    if not tokens:
        raise ChainSyntaxError("Missing seed expression")

    head = tokens[0]
    extend = head is ARROW or head is EXTEND_EVAL
    evaluate = head is EVAL or head is EXTEND_EVAL
    body = tokens[1:] if isinstance(head, Token) else tokens

    target, steps = _split(body)
    if extend:
        if not isinstance(target, Chain):
            raise ChainSyntaxError(
                f"Extending requires an existing chain, got {type(target).__name__}"
            )
        if not steps:
            raise ChainSyntaxError("Extending a chain requires at least one step")
    return Expansion(target=target, steps=tuple(steps), extend=extend, evaluate=evaluate)


def chained(*tokens: Any) -> Any:
    """Build, extend or evaluate a chain from shorthand tokens.

    Example:
        >>> chained(EVAL, 10, lambda x: x + 1, lambda x: x * x)
        121
    """
    return expand(*tokens).apply()
