"""
Folio Replay - Public API
=========================
Event Store = truth archive.
Replay = the only way to learn current state.
"""

from core.replay.stream_replayer import (
    AggregateStreamResult,
    aggregate_stream,
    replay_events,
)

__all__ = [
    "AggregateStreamResult",
    "aggregate_stream",
    "replay_events",
]
