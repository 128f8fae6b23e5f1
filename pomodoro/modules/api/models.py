"""
Pomodoro API data models.

These models define the JSON shapes exchanged with HTTP clients.
"""

from typing import List

from pydantic import BaseModel, Field

from pomodoro.modules.session import SessionSnapshot, TimerState

# Request Models (API Input)


class CreateSessionRequest(BaseModel):
    """Request to create a Pomodoro session."""

    work_minutes: int = Field(..., description="Length of the work countdown in minutes", ge=0)
    break_minutes: int = Field(..., description="Length of the break in minutes", ge=0)


# Response Models (API Output)


class SessionResponse(BaseModel):
    """Reconciled view of a session."""

    id: int
    work_minutes: int
    break_minutes: int
    state: TimerState
    elapsed_secs: int
    remaining_secs: int

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot) -> "SessionResponse":
        return cls(
            id=snapshot.id,
            work_minutes=snapshot.work_minutes,
            break_minutes=snapshot.break_minutes,
            state=snapshot.state,
            elapsed_secs=snapshot.elapsed_secs,
            remaining_secs=snapshot.remaining_secs,
        )


class ErrorResponse(BaseModel):
    """Error payload returned for failed requests."""

    detail: str


def to_responses(snapshots: List[SessionSnapshot]) -> List[SessionResponse]:
    return [SessionResponse.from_snapshot(s) for s in snapshots]
