"""Error types and the in-memory error log shared by Payroll Pulse components."""

from __future__ import annotations

import logging
import traceback
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, List, Literal, Optional

logger = logging.getLogger("payroll_pulse.errors")

Severity = Literal["info", "warning", "error", "critical"]
MAX_ERRORS = 50


class RosterRequiredError(ValueError):
    """Raised when a computation is requested without a roster."""


@dataclass(slots=True)
class AppError:
    message: str
    code: str
    severity: Severity
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    details: Optional[str] = None
    context: Optional[str] = None


ErrorHandler = Callable[[AppError], Any]


class ErrorLog:
    """Bounded log of application errors with subscriber notification.

    One instance is created by whoever wires the application together and
    handed to the components that report into it.
    """

    def __init__(self, max_errors: int = MAX_ERRORS) -> None:
        self._max_errors = max_errors
        self._errors: List[AppError] = []
        self._handlers: List[ErrorHandler] = []

    def subscribe(self, handler: ErrorHandler) -> Callable[[], None]:
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def handle_error(
        self,
        error: Exception | str,
        context: Optional[str] = None,
        severity: Severity = "error",
        code: Optional[str] = None,
    ) -> AppError:
        details = None
        if isinstance(error, BaseException):
            message = str(error)
            details = "".join(traceback.format_exception(error)) or None
        else:
            message = error

        app_error = AppError(
            message=message,
            code=code or "UNKNOWN_ERROR",
            severity=severity,
            details=details,
            context=context,
        )
        self._errors.append(app_error)
        if len(self._errors) > self._max_errors:
            self._errors = self._errors[-self._max_errors :]

        level = logging.ERROR if severity in ("error", "critical") else logging.WARNING
        logger.log(level, "[%s] %s: %s", severity.upper(), context or "Unknown", message)

        for handler in list(self._handlers):
            handler(app_error)
        return app_error

    def validation_error(self, field_name: str, message: str) -> AppError:
        return self.handle_error(
            f"Validation failed for {field_name}: {message}",
            "VALIDATION",
            "warning",
            "VALIDATION_ERROR",
        )

    def computation_error(self, operation: str, message: str) -> AppError:
        return self.handle_error(
            f"Computation fallback during {operation}: {message}",
            "COMPUTATION",
            "warning",
            "COMPUTATION_FALLBACK",
        )

    def clear_error(self, error_id: str) -> None:
        self._errors = [error for error in self._errors if error.id != error_id]

    def clear_all(self) -> None:
        self._errors = []

    def get_errors(self) -> List[AppError]:
        return list(self._errors)

    def get_errors_by_context(self, context: str) -> List[AppError]:
        return [error for error in self._errors if error.context == context]


__all__ = ["RosterRequiredError", "AppError", "ErrorLog", "Severity", "MAX_ERRORS"]
