"""ServiceResult and ServiceError: what every wimt use case returns.

INVARIANT: All service-layer methods return ServiceResult; domain errors
are converted, never raised past the service boundary. The CLI renders
it as rich text, ids only (``--quiet``) or JSON (``--json``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why a use case failed.

    ``code`` is stable and machine-readable (``NOT_FOUND``,
    ``ACTIVE_SESSION_EXISTS``, ``INVALID_STATE``, ``EMPTY_SESSION`` ...);
    ``detail`` carries ids or the offending session state.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"session_start"``, ``"category_list"`` ...);
            the output layer picks its renderer from it.
        data: Session/category snapshot, or ``{"items", "count"}`` for lists.
        warnings: Non-fatal notes, e.g. a too-short segment was discarded.
        error: Set exactly when ``ok`` is False.
        meta: Optional extra metadata.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(
        cls,
        op: str,
        data: dict[str, Any] | None = None,
        *,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data or {}, warnings=warnings or [])

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )
