"""Ranking session coordinating the store, the fetch client and the engine."""

from anchorscore.session.errors import (
    FetchInProgressError,
    ScoreOutOfRangeError,
    SessionError,
)
from anchorscore.session.session import RankingSession, sort_by_score
from anchorscore.session.state_machine import (
    SessionState,
    SessionStateMachine,
    SessionStateTransitionError,
)


__all__ = [
    "FetchInProgressError",
    "RankingSession",
    "ScoreOutOfRangeError",
    "SessionError",
    "SessionState",
    "SessionStateMachine",
    "SessionStateTransitionError",
    "sort_by_score",
]
