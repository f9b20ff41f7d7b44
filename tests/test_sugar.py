"""Tests for the chained(...) shorthand."""

import pytest

from chained import (
    ARROW,
    EVAL,
    EXTEND_EVAL,
    Chain,
    ChainSyntaxError,
    Expansion,
    Seed,
    chained,
    expand,
    to_chain,
)
from fakes import Recorder, explode


def inc(x):
    return x + 1


def square(x):
    return x * x


def test_lazy_form() -> None:
    """Comma form builds a lazy chain."""
    lazy = chained(10, inc, square)
    assert isinstance(lazy, Chain)
    assert lazy.eval() == 121


def test_arrow_form_is_equivalent() -> None:
    """Arrow separators build the same chain."""
    lazy = chained(10, ARROW, inc, ARROW, square)
    assert lazy.eval() == 121


def test_seed_only() -> None:
    """A lone seed expression builds a seed."""
    lazy = chained("seed")
    assert isinstance(lazy, Seed)
    assert lazy.eval() == "seed"


def test_eager_form() -> None:
    """EVAL marker evaluates the chain."""
    assert chained(EVAL, 10, inc, square) == 121
    assert chained(EVAL, 10, ARROW, inc, ARROW, square) == 121
    assert chained(EVAL, 7) == 7


def test_extend_form() -> None:
    """ARROW marker extends an existing chain lazily."""
    lazy = chained(69, inc)
    still_lazy = chained(ARROW, lazy, lambda x: x - 1)
    assert lazy.consumed
    assert still_lazy.eval() == 69


def test_extend_form_with_arrows() -> None:
    """Extend form accepts arrow separators."""
    lazy = chained(1, inc)
    assert chained(ARROW, lazy, ARROW, square).eval() == 4


def test_extend_and_eval_form() -> None:
    """EXTEND_EVAL extends and evaluates."""
    lazy = chained(1, inc)
    assert chained(EXTEND_EVAL, lazy, lambda y: y * 2) == 4


def test_lazy_form_runs_nothing() -> None:
    """Lazy and extend forms run no transform."""
    recorder = Recorder()
    lazy = chained(1, recorder.step("a", inc))
    chained(ARROW, lazy, explode)
    assert recorder.calls == []


def test_expand_describes_calls() -> None:
    """expand returns the call sequence the shorthand stands for."""
    expansion = expand(EVAL, 3, ARROW, inc, ARROW, square)
    assert expansion == Expansion(target=3, steps=(inc, square), extend=False, evaluate=True)
    assert expansion.apply() == 16


def test_expand_runs_nothing() -> None:
    """expand only describes, it never calls a step."""
    expansion = expand(1, explode)
    assert expansion.steps == (explode,)
    assert not expansion.evaluate


@pytest.mark.parametrize(
    "tokens",
    [
        (),
        (EVAL,),
        (10, ARROW, inc, square),
        (10, inc, ARROW, square),
        (10, ARROW),
        (10, ARROW, ARROW, inc),
        (10, inc, EVAL),
        (ARROW, ARROW, inc),
    ],
)
def test_malformed_tokens(tokens) -> None:
    """Malformed token sequences raise ChainSyntaxError."""
    with pytest.raises(ChainSyntaxError):
        expand(*tokens)


def test_extend_requires_chain() -> None:
    """Extending needs an existing chain."""
    with pytest.raises(ChainSyntaxError, match="existing chain"):
        chained(ARROW, 10, inc)


def test_extend_requires_step() -> None:
    """Extending needs at least one step and leaves the chain untouched."""
    lazy = to_chain(1)
    with pytest.raises(ChainSyntaxError, match="at least one step"):
        chained(EXTEND_EVAL, lazy)
    assert not lazy.consumed


def test_syntax_error_is_value_error() -> None:
    """ChainSyntaxError is a ValueError."""
    with pytest.raises(ValueError):
        chained()
