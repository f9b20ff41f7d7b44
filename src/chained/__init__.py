"""chained - lazy single-value transformation chains.

Build a chain from any value, append transforms, run them later::

    from chained import to_chain

    lazy = to_chain("abcde", len).chain(lambda n: n * n).chain(float)
    assert lazy.eval() == 25.0
"""

# Import cast to register the Chain.cast operation
from . import cast as _cast  # noqa: F401
from .adapter import to_chain
from .cast import make_cast
from .chain import Chain, Seed, Step
from .config import ChainConfig, configure, configured, get_config
from .errors import (
    CastError,
    ChainConsumedError,
    ChainError,
    ChainSyntaxError,
    ChainTypeError,
)
from .evaluator import evaluate
from .sugar import ARROW, EVAL, EXTEND_EVAL, Expansion, Token, chained, expand
from .trace import Evidence, Trace

__version__ = "0.1.0"

__all__ = [
    # Core
    "Chain",
    "Seed",
    "Step",
    "to_chain",
    "evaluate",
    # Casting
    "make_cast",
    # Shorthand
    "chained",
    "expand",
    "Expansion",
    "Token",
    "ARROW",
    "EVAL",
    "EXTEND_EVAL",
    # Errors
    "ChainError",
    "ChainConsumedError",
    "ChainTypeError",
    "ChainSyntaxError",
    "CastError",
    # Config
    "ChainConfig",
    "configure",
    "configured",
    "get_config",
    # Tracing
    "Trace",
    "Evidence",
]
