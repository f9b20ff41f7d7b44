"""Evaluation trace - optional instrumentation for chain evaluation.

Trace is runtime infrastructure. It never touches the values flowing through
a chain and does not change the order or number of transform calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """A single recorded evaluation event."""

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)
    duration_ms: float | None = None


class Trace:
    """Collects evaluation events.

    Uses stack-based nesting via push/pop for parent-child relationships.

    Performance guarantees:
    - Trace disabled -> single flag check overhead
    - Evidence append is O(1)
    - No tree construction during evaluation
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._next_id: int = 0
        self._stack: list[int] = []

    def push(self, event_id: int) -> None:
        """Make ``event_id`` the parent of subsequently recorded events."""
        self._stack.append(event_id)

    def pop(self) -> int | None:
        """Pop the current parent, or return None if the stack is empty."""
        if self._stack:
            return self._stack.pop()
        return None

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
        duration_ms: float | None = None,
    ) -> int | None:
        """Record an event.

        Args:
            action: What happened (e.g., "eval_begin", "step")
            info: Additional context
            parent_id: Explicit parent event ID; defaults to the stack top
            duration_ms: Execution duration

        Returns:
            Event ID for linking child events, or None if tracing disabled
        """
        if not self.enabled:
            return None

        if parent_id is None and self._stack:
            parent_id = self._stack[-1]

        event_id = self._next_id
        self._next_id += 1
        self._events.append(
            Evidence(
                action=action,
                id=event_id,
                parent_id=parent_id,
                timestamp=datetime.now(UTC),
                info=info or {},
                duration_ms=duration_ms,
            )
        )
        return event_id

    def get_events(self) -> list[Evidence]:
        """Get all recorded events."""
        return list(self._events)

    def find(self, action: str | None = None, **info: Any) -> list[Evidence]:
        """Return events matching ``action`` and every given info entry."""
        return [
            ev
            for ev in self._events
            if (action is None or ev.action == action)
            and all(ev.info.get(k) == v for k, v in info.items())
        ]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Map each parent_id to the ids of its children."""
        tree: dict[int | None, list[int]] = {}
        for ev in self._events:
            tree.setdefault(ev.parent_id, []).append(ev.id)
        return tree

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Clear all events (for reuse)."""
        self._events.clear()
        self._next_id = 0
        self._stack.clear()
