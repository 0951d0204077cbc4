"""
Folio Command Layer - Command Handler
=====================================
Runs one read -> decide -> append cycle against a stream,
with bounded retry on optimistic-concurrency conflicts.

Flow (per attempt):
    1. Read the full stream, note its version
    2. Fold events through evolve() from initial_state()
    3. decide(state) -> event or sequence of events
    4. Fold the new events (a batch evolve rejects is not stored)
    5. Append conditionally on the version read in step 1
    6. ConcurrencyConflict -> start over from step 1

The handler:
- Orchestrates, does not decide (decide() is pure)
- Never retries decider errors; they propagate on first raise
- Re-raises the last conflict once attempts are exhausted
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, Tuple, TypeVar

from core.event_store.contracts import EventStore
from core.event_store.errors import ConcurrencyConflict
from core.replay.stream_replayer import replay_events

logger = logging.getLogger("folio.commands")

S = TypeVar("S")

DEFAULT_MAX_ATTEMPTS = 3


# ══════════════════════════════════════════════════════════════
# ERRORS
# ══════════════════════════════════════════════════════════════

class CommandHandlerError(Exception):
    """Base error for command handler orchestration."""
    pass


class InvalidDecision(CommandHandlerError):
    """decide() returned something that is not an event batch."""

    def __init__(self, stream_id: str, result: Any):
        self.stream_id = stream_id
        self.result = result
        super().__init__(
            f"Decision for stream '{stream_id}' returned "
            f"{type(result).__name__}; expected an event or a sequence of events."
        )


# ══════════════════════════════════════════════════════════════
# RESULT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CommandHandlerResult(Generic[S]):
    stream_id: str
    new_state: S
    new_events: Tuple[Any, ...]
    next_expected_version: int
    attempts: int = 1

    @property
    def last_event(self) -> Any:
        return self.new_events[-1] if self.new_events else None


# ══════════════════════════════════════════════════════════════
# HANDLER
# ══════════════════════════════════════════════════════════════

class CommandHandler(Generic[S]):
    """
    Usage:
        handle = CommandHandler(evolve, initial_state)
        result = handle.handle(store, account_id, lambda s: check_out(cmd, s))
        result.last_event   # GuestCheckedOut | GuestCheckoutFailed
    """

    def __init__(
        self,
        evolve: Callable[[S, Any], S],
        initial_state: Callable[[], S],
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        if not isinstance(max_attempts, int) or max_attempts < 1:
            raise ValueError("max_attempts must be a positive integer.")
        self._evolve = evolve
        self._initial_state = initial_state
        self._max_attempts = max_attempts

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def handle(
        self,
        store: EventStore,
        stream_id: str,
        decide: Callable[[S], Any],
    ) -> CommandHandlerResult[S]:
        for attempt in range(1, self._max_attempts + 1):
            try:
                return self._attempt(store, stream_id, decide, attempt)
            except ConcurrencyConflict as conflict:
                if attempt == self._max_attempts:
                    logger.error(
                        f"Giving up on {stream_id} after {attempt} "
                        f"attempt(s): {conflict}"
                    )
                    raise
                logger.warning(
                    f"Stale read on {stream_id} (attempt {attempt}/"
                    f"{self._max_attempts}); re-reading and deciding again"
                )
        raise AssertionError("unreachable")  # pragma: no cover

    def _attempt(
        self,
        store: EventStore,
        stream_id: str,
        decide: Callable[[S], Any],
        attempt: int,
    ) -> CommandHandlerResult[S]:
        read = store.read_stream(stream_id)
        state = replay_events(read.events, self._evolve, self._initial_state)

        new_events = self._as_batch(stream_id, decide(state))
        if not new_events:
            return CommandHandlerResult(
                stream_id=stream_id,
                new_state=state,
                new_events=(),
                next_expected_version=read.current_version,
                attempts=attempt,
            )

        for event in new_events:
            state = self._evolve(state, event)
        appended = store.append_to_stream(
            stream_id, new_events, expected_version=read.current_version
        )

        logger.info(
            f"Appended {len(new_events)} event(s) to {stream_id}: "
            f"{', '.join(type(e).__name__ for e in new_events)}"
        )
        return CommandHandlerResult(
            stream_id=stream_id,
            new_state=state,
            new_events=new_events,
            next_expected_version=appended.next_expected_version,
            attempts=attempt,
        )

    @staticmethod
    def _as_batch(stream_id: str, result: Any) -> Tuple[Any, ...]:
        if result is None or isinstance(result, (str, bytes, dict)):
            raise InvalidDecision(stream_id, result)
        if isinstance(result, (list, tuple)):
            return tuple(result)
        return (result,)
