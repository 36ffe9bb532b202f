"""
Pet Adoption API — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for each error scenario.
How:   Each exception class carries a message, optional context dict and a
       declared HTTP status code. The global handler registered in main.py
       reads `status_code` and renders the error envelope.
Who:   Raised by the store gateway, repositories and services.

Exception Hierarchy:
    PetAdoptionError (base)                    → 500
    ├── ValidationError                        → 400 (client can fix)
    ├── NotFoundError                          → 404
    ├── ConflictError                          → 400 (domain state forbids it)
    │   ├── PetUnavailableError
    │   ├── AlreadyApprovedError
    │   └── InvalidStatusTransitionError
    ├── StoreError                             → 500 (record store failure)
    └── PetStatusUpdateError                   → 500 (approval rolled back)
"""

from typing import Any, Dict, Optional


class PetAdoptionError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:      Client-facing error description
        context:      Additional debug info (logged, not returned to client)
        status_code:  HTTP status the global handler responds with
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PetAdoptionError):
    """
    Raised when client input fails validation.

    When:    Malformed body, missing required fields, unknown status filter.
    HTTP:    400 Bad Request

    Example message:
        "Validation error: pet_id: Input should be a valid UUID, applicant_email: ..."
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(PetAdoptionError):
    """
    Raised when a requested resource does not exist.

    Repositories return None for a missing row; services and routes convert
    that None into this exception where the operation requires the row.
    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(PetAdoptionError):
    """
    Raised when the current state of a record forbids the requested change.

    The message always names the offending current state.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "The request conflicts with the current state of the resource",
        current_status: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if current_status is not None:
            ctx["current_status"] = current_status
        super().__init__(message=message, context=ctx)
        self.current_status = current_status


class PetUnavailableError(ConflictError):
    """An application was filed against a pet that is not `available`."""

    def __init__(self, current_status: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Pet is not available for adoption. Current status: {current_status}",
            current_status=current_status,
            context=context,
        )


class AlreadyApprovedError(ConflictError):
    """`approve` was called on an application that is already approved."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="Application is already approved",
            current_status="approved",
            context=context,
        )


class InvalidStatusTransitionError(ConflictError):
    """`approve` was called on an application that is neither pending nor approved."""

    def __init__(self, current_status: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Cannot approve application with status: {current_status}",
            current_status=current_status,
            context=context,
        )


class StoreError(PetAdoptionError):
    """
    Raised when a record store operation fails.

    What:    A select, insert, update or delete was rejected or could not reach
             the store.
    HTTP:    500 Internal Server Error

    The message is "<action>: <store error text>", e.g.
    "Failed to fetch pets: connection refused". `detail` keeps the bare
    store text so callers can re-prefix it with their own action.
    """

    def __init__(
        self,
        message: str = "A record store error occurred",
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.detail = detail if detail is not None else message


class PetStatusUpdateError(PetAdoptionError):
    """
    Raised when an approval could not mark the pet as adopted.

    The approval is rolled back before this is raised, so the application
    is left `pending`. The message carries the cause of the pet update failure.
    HTTP:    500 Internal Server Error
    """

    def __init__(self, cause: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=f"Failed to update pet status: {cause}", context=context)
        self.cause = cause
