"""
Pomodoro session state machine and the in-memory session registry.

A session never ticks on its own. Every read or mutation first reconciles
elapsed time against the clock, so the stored figures are always current
as of the last call that touched the session.
"""

import asyncio
import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .clock import Clock, MonotonicClock

logger = logging.getLogger("pomodoro.session")


class TimerState(str, Enum):
    """State of a Pomodoro session."""

    IDLE = "Idle"
    RUNNING = "Running"
    PAUSED = "Paused"
    FINISHED = "Finished"


class SessionNotFoundError(LookupError):
    """Raised when an operation references an unknown session id."""

    def __init__(self, session_id: int):
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


@dataclass(frozen=True)
class SessionSnapshot:
    """Reconciled, read-only view of a session."""

    id: int
    work_minutes: int
    break_minutes: int
    state: TimerState
    elapsed_secs: int
    remaining_secs: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["state"] = self.state.value
        return data


@dataclass
class PomodoroSession:
    """
    A single work timer.

    started_at is set exactly while the session is Running and marks the
    instant up to which elapsed_secs has already been counted.
    """

    id: int
    work_minutes: int
    break_minutes: int
    clock: Clock = field(default_factory=MonotonicClock, repr=False, compare=False)
    state: TimerState = TimerState.IDLE
    started_at: Optional[float] = None
    paused_at: Optional[float] = None
    elapsed_secs: int = 0

    @property
    def total_work_secs(self) -> int:
        return self.work_minutes * 60

    def reconcile(self) -> None:
        """
        Fold wall-clock time since started_at into elapsed_secs.

        Only whole seconds are counted; started_at advances by exactly the
        counted amount so the fractional remainder carries into the next call.
        """
        if self.state is not TimerState.RUNNING:
            return
        assert self.started_at is not None, f"session {self.id} is running without started_at"

        now = self.clock.now()
        delta = now - self.started_at
        if delta <= 0:
            # Clock went backwards; count nothing and resync.
            self.started_at = now
        else:
            whole = int(delta)
            self.elapsed_secs += whole
            self.started_at += whole

        if self.elapsed_secs >= self.total_work_secs:
            self.state = TimerState.FINISHED
            self.started_at = None
            logger.info(f"Session {self.id} finished after {self.elapsed_secs}s")

    def start(self) -> bool:
        """Start (or restart) the countdown from zero. Returns True on transition."""
        self.reconcile()
        if self.state not in (TimerState.IDLE, TimerState.FINISHED):
            return False
        self.elapsed_secs = 0
        self.started_at = self.clock.now()
        self.paused_at = None
        self.state = TimerState.RUNNING
        logger.info(f"Session {self.id} started ({self.work_minutes}m work)")
        return True

    def pause(self) -> bool:
        """Freeze elapsed time. Returns True on transition."""
        if self.state is not TimerState.RUNNING:
            return False
        self.reconcile()
        if self.state is not TimerState.RUNNING:
            # Time ran out before the pause landed
            return False
        self.state = TimerState.PAUSED
        self.started_at = None
        self.paused_at = self.clock.now()
        logger.info(f"Session {self.id} paused at {self.elapsed_secs}s")
        return True

    def resume(self) -> bool:
        """Continue accruing from the frozen elapsed time. Returns True on transition."""
        if self.state is not TimerState.PAUSED:
            return False
        self.started_at = self.clock.now()
        self.paused_at = None
        self.state = TimerState.RUNNING
        logger.info(f"Session {self.id} resumed at {self.elapsed_secs}s")
        return True

    def remaining_secs(self) -> int:
        self.reconcile()
        return max(0, self.total_work_secs - self.elapsed_secs)

    def snapshot(self) -> SessionSnapshot:
        remaining = self.remaining_secs()
        return SessionSnapshot(
            id=self.id,
            work_minutes=self.work_minutes,
            break_minutes=self.break_minutes,
            state=self.state,
            elapsed_secs=self.elapsed_secs,
            remaining_secs=remaining,
        )


class SessionModule:
    def __init__(self, clock: Optional[Clock] = None):
        """
        Initialize session module.

        Args:
            clock: Time source shared by every session (monotonic by default)

        All operations hold one registry-wide lock, so operations on
        different sessions are serialized too.
        """
        self.clock = clock or MonotonicClock()
        self._sessions: Dict[int, PomodoroSession] = {}
        self._next_id = 0
        self._lock = asyncio.Lock()

    async def create_session(self, work_minutes: int, break_minutes: int) -> SessionSnapshot:
        """
        Create a new Idle session.

        Args:
            work_minutes: Length of the work countdown
            break_minutes: Break length (stored only)

        Returns:
            Snapshot of the new session
        """
        async with self._lock:
            self._next_id += 1
            session = PomodoroSession(
                id=self._next_id,
                work_minutes=work_minutes,
                break_minutes=break_minutes,
                clock=self.clock,
            )
            self._sessions[session.id] = session
            logger.info(
                f"Created session {session.id} "
                f"(work={work_minutes}m, break={break_minutes}m)"
            )
            return session.snapshot()

    async def list_sessions(self) -> List[SessionSnapshot]:
        """Get every session, reconciled as of this call, in id order."""
        async with self._lock:
            return [self._sessions[sid].snapshot() for sid in sorted(self._sessions)]

    async def get_session(self, session_id: int) -> SessionSnapshot:
        """
        Get one session.

        Raises:
            SessionNotFoundError: If the id was never issued
        """
        async with self._lock:
            return self._lookup(session_id).snapshot()

    async def start_session(self, session_id: int) -> SessionSnapshot:
        """Start or restart a session. No-op while Running or Paused."""
        return await self._transition(session_id, "start")

    async def pause_session(self, session_id: int) -> SessionSnapshot:
        """Pause a Running session. No-op otherwise."""
        return await self._transition(session_id, "pause")

    async def resume_session(self, session_id: int) -> SessionSnapshot:
        """Resume a Paused session. No-op otherwise."""
        return await self._transition(session_id, "resume")

    async def count_by_state(self) -> Dict[TimerState, int]:
        """
        Tally sessions per state.

        Used for monitoring. Sessions are reconciled first, so a timer that
        ran out since its last request is counted as Finished.
        """
        counts = {state: 0 for state in TimerState}
        async with self._lock:
            for session in self._sessions.values():
                session.reconcile()
                counts[session.state] += 1
        return counts

    def _lookup(self, session_id: int) -> PomodoroSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def _transition(self, session_id: int, action: str) -> SessionSnapshot:
        async with self._lock:
            session = self._lookup(session_id)
            before = session.state
            if not getattr(session, action)():
                logger.debug(f"Ignored {action} on session {session_id} in state {before.value}")
            return session.snapshot()
