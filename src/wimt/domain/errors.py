"""Domain error taxonomy.

Four kinds of failure, all raised synchronously at the point of violation:

- Validation: malformed construction arguments, non-finite timestamps,
  non-increasing time bounds, broken segment ordering/overlap.
- State guard: an operation that is illegal in the current state.
- Business edge: a session reaching stop with no valid segment.
- Reserved: capabilities declared on the contract but not available yet.

Every error carries a stable ``code`` so the service layer can map it to a
:class:`~wimt.services.result.ServiceError` without string matching.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for all domain errors."""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# --- Validation ---


class ValidationError(DomainError):
    """Malformed or missing argument, or a violated time bound."""

    code = "VALIDATION"


class SegmentOrderError(ValidationError):
    """Segment collection is unsorted or has overlapping neighbours."""

    code = "SEGMENT_ORDER"


# --- State guards ---


class InvalidSessionStateError(DomainError):
    """Session transition attempted from a state that does not allow it."""

    code = "INVALID_STATE"

    def __init__(self, message: str, *, state: str) -> None:
        super().__init__(message)
        self.state = state


class SessionAlreadyStoppedError(InvalidSessionStateError):
    """Stopped is terminal; nothing may follow it."""

    def __init__(self) -> None:
        super().__init__("session already stopped", state="stopped")


class SegmentAlreadyStoppedError(DomainError):
    """A segment cannot be stopped twice."""

    code = "SEGMENT_ALREADY_STOPPED"

    def __init__(self) -> None:
        super().__init__("segment already stopped")


class NoActiveSegmentError(DomainError):
    """Pause/stop needs an open segment to close."""

    code = "NO_ACTIVE_SEGMENT"

    def __init__(self) -> None:
        super().__init__("no active segment to stop/pause")


# --- Business edge ---


class EmptySessionError(DomainError):
    """Stop reached with no valid-duration segment in the history."""

    code = "EMPTY_SESSION"

    def __init__(self) -> None:
        super().__init__("empty session")
