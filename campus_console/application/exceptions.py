"""Application layer exceptions."""

from typing import Any, Optional


class ApplicationError(Exception):
    """Base exception for all application layer errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize application error.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error details
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of error."""
        if self.details:
            return f"{self.message} (code: {self.error_code}, details: {self.details})"
        return f"{self.message} (code: {self.error_code})"


class NotFoundError(ApplicationError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
    ):
        """
        Initialize not found error.

        Args:
            message: Human-readable error message
            resource_type: Type of resource (e.g., 'SellerApplication')
            resource_id: ID of the resource that was not found
        """
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(message, "NOT_FOUND", details)


class UnauthorizedError(ApplicationError):
    """Raised when authentication is required but not provided or invalid."""

    def __init__(self, message: str = "Authentication required", error_code: str = "UNAUTHORIZED"):
        """
        Initialize unauthorized error.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
        """
        super().__init__(message, error_code)


class SessionRevokedError(UnauthorizedError):
    """Raised when the bypass session was revoked and the operator must log in again."""

    def __init__(self, reason: str = "Session revoked"):
        """
        Initialize session revoked error.

        Args:
            reason: Reason reported by the session check
        """
        self.reason = reason
        super().__init__(reason, "SESSION_REVOKED")


class ForbiddenError(ApplicationError):
    """Raised when the caller lacks permission to perform an action."""

    def __init__(
        self,
        message: str = "Insufficient permissions",
        error_code: str = "FORBIDDEN",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


class AuthorizationError(ForbiddenError):
    """
    Raised when the backend refuses a call.

    Covers a rejected bypass secret on the remote-procedure path and a
    row-level policy denial on the direct-table path. The backend's own
    message is kept verbatim.
    """

    def __init__(
        self,
        message: str,
        convention: Optional[str] = None,
        operation: Optional[str] = None,
        backend_code: Optional[str] = None,
    ):
        """
        Initialize authorization error.

        Args:
            message: Message returned by the backend
            convention: Calling convention that was used
            operation: Table or procedure that was called
            backend_code: Error code returned by the backend
        """
        details = {}
        if convention:
            details["convention"] = convention
        if operation:
            details["operation"] = operation
        if backend_code:
            details["backend_code"] = backend_code

        super().__init__(message, "AUTHORIZATION_FAILED", details)


class ValidationError(ApplicationError):
    """Raised when application-level validation fails."""

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        """
        Initialize validation error.

        Args:
            message: Human-readable error message
            field: Field that failed validation
            value: Invalid value
        """
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(message, "VALIDATION_ERROR", details)


class ConflictError(ApplicationError):
    """Raised when an operation conflicts with the current state."""

    def __init__(
        self,
        message: str = "Operation conflicts with current state",
        operation: Optional[str] = None,
        current_state: Optional[str] = None,
    ):
        """
        Initialize conflict error.

        Args:
            message: Human-readable error message
            operation: Operation that was attempted
            current_state: Current state that conflicts
        """
        details = {}
        if operation:
            details["operation"] = operation
        if current_state:
            details["current_state"] = current_state

        super().__init__(message, "CONFLICT", details)


class ExternalServiceError(ApplicationError):
    """Raised when an external service call fails."""

    def __init__(
        self,
        message: str = "External service error",
        service: Optional[str] = None,
        status_code: Optional[int] = None,
        backend_code: Optional[str] = None,
    ):
        """
        Initialize external service error.

        Args:
            message: Human-readable error message
            service: Name of the external service
            status_code: HTTP status code if applicable
            backend_code: Error code returned by the service
        """
        details: dict[str, Any] = {}
        if service:
            details["service"] = service
        if status_code:
            details["status_code"] = status_code
        if backend_code:
            details["backend_code"] = backend_code

        super().__init__(message, "EXTERNAL_SERVICE_ERROR", details)


class WorkflowStepError(ApplicationError):
    """
    Raised when a blocking step of a multi-step workflow fails.

    The message is the underlying error's message so the operator sees
    what the backend reported.
    """

    def __init__(self, workflow: str, step: str, cause: Exception):
        """
        Initialize workflow step error.

        Args:
            workflow: Name of the workflow (e.g., 'approve_application')
            step: Name of the step that failed
            cause: Exception raised by the step
        """
        self.workflow = workflow
        self.step = step
        self.cause = cause
        message = getattr(cause, "message", None) or str(cause) or cause.__class__.__name__
        super().__init__(
            message,
            "WORKFLOW_STEP_FAILED",
            {"workflow": workflow, "step": step},
        )
