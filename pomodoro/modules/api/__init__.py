"""
API Module - Black Box Interface

Purpose: HTTP request and response shapes
Interface: pydantic models consumed by the FastAPI routes
Hidden: Field validation, snapshot conversion

The API module only describes the wire format - it contains no timer logic.
All logic is delegated to the session module.
"""

from .models import (
    CreateSessionRequest,
    ErrorResponse,
    SessionResponse,
    to_responses,
)

__all__ = [
    "CreateSessionRequest",
    "ErrorResponse",
    "SessionResponse",
    "to_responses",
]
