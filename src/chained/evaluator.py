"""Evaluator - forces a chain and returns its final value."""

from __future__ import annotations

import logging
import time
from typing import Any, TypeVar

from chained.chain import Chain, Seed, Step
from chained.config import get_config
from chained.errors import ChainError
from chained.signature import describe
from chained.trace import Trace

T = TypeVar("T")

logger = logging.getLogger(__name__)


def evaluate(chain: Chain[T], trace: Trace | None = None) -> T:
    """Consume ``chain`` and run its transforms oldest first.

    The walk is iterative, so chain length is not bounded by the
    interpreter's recursion limit. Exceptions raised by a transform
    propagate unchanged; the chain stays consumed either way. The walk
    releases the seed value and every transform from the chain's nodes, so
    a consumed chain keeps nothing alive.

    Args:
        chain: The chain to evaluate
        trace: Optional trace receiving eval_begin/step/eval_end events

    Returns:
        The value produced by the last transform, or the seed value

    Raises:
        ChainConsumedError: If the chain was already consumed
    """
    chain._claim("eval")

    # Newest first; popping from the end yields the oldest transform
    pending: list[Any] = []
    node: Chain[Any] = chain
    while isinstance(node, Step):
        prior = node.prior
        pending.append(node.transform)
        node._release()
        node = prior
    if not isinstance(node, Seed):
        raise ChainError(f"Chain does not end in a Seed: {type(node).__name__}")
    value: Any = node.value
    node._release()
    total = len(pending)

    log_steps = get_config().log_steps
    logger.debug("Evaluating chain with %d step(s)", total)

    eval_id: int | None = None
    if trace is not None:
        eval_id = trace.record("eval_begin", info={"steps": total})
        if eval_id is not None:
            trace.push(eval_id)

    try:
        for index in range(total):
            transform = pending.pop()
            name = describe(transform)
            if log_steps:
                logger.debug("Step %d: %s", index, name)
            start_time = time.perf_counter()
            try:
                value = transform(value)
            except Exception as exc:
                if trace is not None:
                    trace.record(
                        "step_error",
                        info={"index": index, "transform": name, "error": str(exc)},
                    )
                raise
            if trace is not None:
                trace.record(
                    "step",
                    info={"index": index, "transform": name},
                    duration_ms=(time.perf_counter() - start_time) * 1000,
                )
    finally:
        if trace is not None and eval_id is not None:
            trace.pop()

    if trace is not None:
        trace.record("eval_end", parent_id=eval_id)
    logger.debug("Chain evaluated to %s", type(value).__name__)
    return value
