"""
Folio Replay - Stream Replayer
==============================
Current state is a left fold of a stream's events:

    state = initial_state()
    for event in stream: state = evolve(state, event)

Replay doctrine:
- READ only. Never writes to the store.
- Deterministic: same events in, same state out.
- No hidden state between calls. Nothing is cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from core.event_store.contracts import EventStore

S = TypeVar("S")

Evolve = Callable[[S, Any], S]


@dataclass(frozen=True)
class AggregateStreamResult(Generic[S]):
    stream_id: str
    state: S
    current_version: int


def replay_events(
    events: Iterable[Any],
    evolve: Evolve,
    initial_state: Callable[[], S],
) -> S:
    state = initial_state()
    for event in events:
        state = evolve(state, event)
    return state


def aggregate_stream(
    store: EventStore,
    stream_id: str,
    *,
    evolve: Evolve,
    initial_state: Callable[[], S],
) -> Optional[AggregateStreamResult[S]]:
    """
    Rebuild the state of one stream.

    Returns None when the stream has no events, so readers can
    tell "never opened" from "opened with zero balance".
    """
    read = store.read_stream(stream_id)
    if not read.stream_exists:
        return None
    return AggregateStreamResult(
        stream_id=stream_id,
        state=replay_events(read.events, evolve, initial_state),
        current_version=read.current_version,
    )
