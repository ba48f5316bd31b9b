"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Service operations return ServiceResult. Domain exceptions are
translated here, never printed by the service itself.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from namebingo.domain.errors import BingoError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: BingoError) -> ServiceError:
        detail = {key: str(value) for key, value in exc.detail.items()}
        return cls(code=exc.code, message=exc.message, detail=detail)


class ServiceResult(BaseModel):
    """Return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"generate"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: BingoError) -> ServiceResult:
        """Build a failed result from a domain exception."""
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
