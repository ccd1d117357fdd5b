from __future__ import annotations

from simpledfe_reports.models.common import ErrorInfo


class ReportGenerationError(Exception):
    """A report run that failed as a whole; nothing partial was produced."""

    def __init__(self, code: str, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.cause = cause

    def to_error_info(self) -> ErrorInfo:
        """Structured payload including the underlying cause."""

        details = None
        if self.cause is not None:
            details = {"cause": type(self.cause).__name__, "detail": str(self.cause)}
        return ErrorInfo(code=self.code, message=self.message, details=details)
