### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Dashboard Errors -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Dashboard Errors

Every failure the core can report. Entity store operations never raise
these; they return them inside a MutationResult. The HTTP layer raises
them and a single exception handler renders the ErrorResponse body.
"""

from typing import Any


class DashboardError(Exception):
    """Base class for all reportable dashboard failures"""

    status_code: int = 400
    code: str = "dashboard_error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message()
        super().__init__(self.message)

    def default_message(self) -> str:
        return "Request could not be completed"

    def details(self) -> list[dict[str, Any]] | None:
        """Field-level details for the error response (None if not applicable)"""
        return None


class FormValidationError(DashboardError):
    """Input failed a form validation contract"""

    status_code = 422
    code = "validation_error"

    def __init__(self, errors: list[dict[str, Any]], message: str | None = None):
        # Each error: {"field": "url", "message": "Must be a valid URL"}
        self.errors = errors
        super().__init__(message)

    def default_message(self) -> str:
        return "Validation failed"

    def details(self) -> list[dict[str, Any]]:
        return [{**error, "code": self.code} for error in self.errors]


class PreconditionError(DashboardError):
    """Mutation needs state that does not exist yet (e.g. a hotel)"""

    status_code = 409
    code = "precondition_failed"


class NotFoundError(DashboardError):
    """Referenced record is not in the session"""

    status_code = 404
    code = "not_found"


class PersistenceError(DashboardError):
    """Durable store call failed"""

    status_code = 503
    code = "persistence_failed"

    def __init__(
        self,
        operation: str,
        cause: BaseException | None = None,
        message: str | None = None,
        persisted_ids: list[str] | None = None,
    ):
        self.operation = operation
        self.cause = cause
        # Rows already written before a mid-sequence failure (reorder only)
        self.persisted_ids = persisted_ids or []
        super().__init__(message)

    def default_message(self) -> str:
        return "Failed to save changes"


class AuthRequiredError(DashboardError):
    """No resolved user identity - caller should redirect to login"""

    status_code = 401
    code = "auth_required"

    def __init__(self, message: str | None = None, redirect_to: str = "/login"):
        self.redirect_to = redirect_to
        super().__init__(message)

    def default_message(self) -> str:
        return "Authentication required"
