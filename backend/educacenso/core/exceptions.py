# educacenso/core/exceptions.py
"""Application-level exceptions used across services.

Every exception carries its ``code``, ``status_code``, ``category`` and
``severity`` from the place it is raised, so handlers and logs never have to
guess the kind of failure from the message text.

- Each exception is serializable via ``to_dict`` for API responses and logs.
- Helpers attach contextual data and wrap underlying exceptions.
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    DATA = "data"
    EXPORT = "export"
    REQUEST = "request"
    UNKNOWN = "unknown"


class ErrorSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppError(Exception):
    """Base application exception with structured metadata.

    Attributes
    ----------
    message
        Human readable message (Portuguese, shown to school staff).
    code
        Machine friendly error code (snake_case).
    status_code
        Suggested HTTP status code for API responses.
    category
        Broad family of the failure, set by each subclass.
    severity
        How serious the failure is for the operator.
    details
        Arbitrary extra data useful for debugging or UX.
    timestamp
        UTC ISO timestamp when the exception was created.
    cause
        Optional underlying exception instance.
    context
        Optional lightweight context dict (ids, counts).
    """

    code: str = "app_error"
    status_code: int = 500
    category: ErrorCategory = ErrorCategory.UNKNOWN
    severity: ErrorSeverity = ErrorSeverity.HIGH

    def __init__(
        self,
        message: str = "Ocorreu um erro na aplicação",
        *,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.cause = cause
        self.context = context or {}
        self.timestamp = (
            datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        )

    def __str__(self) -> str:
        base = f"{self.__class__.__name__}({self.code}): {self.message}"
        if self.context:
            base += f" | context={self.context}"
        if self.details is not None:
            base += f" | details={self.details}"
        if self.cause is not None:
            base += f" | cause={repr(self.cause)}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Return a serializable representation suitable for API responses."""
        return {
            "error": {
                "type": self.__class__.__name__,
                "code": self.code,
                "message": self.message,
                "status_code": self.status_code,
                "category": self.category.value,
                "severity": self.severity.value,
                "details": self.details,
                "context": self.context,
                "timestamp": self.timestamp,
            }
        }

    def with_context(self, **ctx: Any) -> "AppError":
        """Return self after extending the context dict.

        Example:
        raise err.with_context(school_id=school_id)
        """
        self.context.update({k: v for k, v in ctx.items() if v is not None})
        return self

    @classmethod
    def from_exception(
        cls, exc: BaseException, message: Optional[str] = None
    ) -> "AppError":
        """Wrap a generic exception into an AppError preserving the cause."""
        return cls(message or str(exc), cause=exc)


class CensusExportError(AppError):
    """Raised when an Educacenso export produced no file.

    Carries the hard errors and the warnings collected by the export so the
    client can show both.
    """

    code = "census_export_failed"
    status_code = 422
    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.MEDIUM

    def __init__(
        self,
        message: str = "Não foi possível gerar o arquivo Educacenso",
        *,
        errors: Optional[List[str]] = None,
        warnings: Optional[List[str]] = None,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause, context=context)
        self.errors = errors or []
        self.warnings = warnings or []
        if self.errors:
            self.context.setdefault("error_count", len(self.errors))

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["error"].update({"errors": self.errors, "warnings": self.warnings})
        return data


class UnsupportedFormatError(AppError):
    """Raised when a report is requested in a format no builder handles."""

    code = "unsupported_format"
    status_code = 400
    category = ErrorCategory.REQUEST
    severity = ErrorSeverity.LOW

    def __init__(
        self,
        output_format: str,
        supported: Optional[List[str]] = None,
        *,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            f"Formato de relatório não suportado: {output_format}",
            details=details,
            cause=cause,
            context=context,
        )
        self.context.setdefault("format", output_format)
        if supported:
            self.context.setdefault("supported", supported)


class InvalidSnapshotError(AppError):
    """Raised when a data snapshot cannot be read or parsed."""

    code = "invalid_snapshot"
    status_code = 400
    category = ErrorCategory.DATA
    severity = ErrorSeverity.MEDIUM

    def __init__(
        self,
        message: str = "Dados de entrada inválidos",
        *,
        source: Optional[str] = None,
        validation_errors: Optional[List[Dict[str, Any]]] = None,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause, context=context)
        if source:
            self.context.setdefault("source", source)
        self.validation_errors = validation_errors or []

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["error"].update({"validation_errors": self.validation_errors})
        return data


__all__ = [
    "ErrorCategory",
    "ErrorSeverity",
    "AppError",
    "CensusExportError",
    "UnsupportedFormatError",
    "InvalidSnapshotError",
]
