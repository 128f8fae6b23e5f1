"""
Pomodoro - Timer Session Service

An HTTP service for Pomodoro-style work sessions.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- session: Timer state machine and session registry
- api: REST request/response models
- config: Environment-backed configuration
"""

__version__ = "1.0.0"
