"""
Session Module - Black Box Interface

Purpose: Manage Pomodoro session lifecycle
Interface: create_session(), list_sessions(), get_session(),
           start_session(), pause_session(), resume_session()
Hidden: Session storage, locking, elapsed-time reconciliation

Time is derived lazily from the injected clock on every read, so no
background ticker exists.
"""

from .clock import Clock, MonotonicClock
from .session import (
    PomodoroSession,
    SessionModule,
    SessionNotFoundError,
    SessionSnapshot,
    TimerState,
)

__all__ = [
    "Clock",
    "MonotonicClock",
    "PomodoroSession",
    "SessionModule",
    "SessionNotFoundError",
    "SessionSnapshot",
    "TimerState",
]
