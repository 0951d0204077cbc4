"""
Folio Event Store - Stream Contract
===================================
The store is the truth archive. Current state is never stored;
it is rebuilt by replaying a stream from the start.

Versioning:
    version = number of events in the stream
    0       = stream does not exist yet

append_to_stream() is conditional on expected_version
(optimistic concurrency). expected_version=None skips the check.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence, Tuple

NO_STREAM = 0


@dataclass(frozen=True)
class ReadStreamResult:
    stream_id: str
    events: Tuple[Any, ...]
    current_version: int

    @property
    def stream_exists(self) -> bool:
        return self.current_version > NO_STREAM


@dataclass(frozen=True)
class AppendResult:
    stream_id: str
    next_expected_version: int
    created_new_stream: bool


class EventStore(Protocol):
    """Read/append contract every backend implements."""

    def read_stream(self, stream_id: str) -> ReadStreamResult:
        ...  # pragma: no cover

    def append_to_stream(
        self,
        stream_id: str,
        events: Sequence[Any],
        expected_version: Optional[int] = None,
    ) -> AppendResult:
        ...  # pragma: no cover


def ensure_stream_id(stream_id: Any) -> str:
    if not stream_id or not isinstance(stream_id, str):
        raise ValueError("stream_id must be a non-empty string.")
    return stream_id
