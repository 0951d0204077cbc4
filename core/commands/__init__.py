"""
Folio Command Layer
===================
Every change to an account begins as a command, is judged by a
pure decision function, and ends as appended events.

Command -> decide(state) -> Events -> append (conditional) -> retry on conflict.
"""

from core.commands.handler import (
    DEFAULT_MAX_ATTEMPTS,
    CommandHandler,
    CommandHandlerError,
    CommandHandlerResult,
    InvalidDecision,
)

__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "CommandHandler",
    "CommandHandlerError",
    "CommandHandlerResult",
    "InvalidDecision",
]
