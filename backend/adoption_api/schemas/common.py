"""
Pet Adoption API — Shared Schemas
==================================

What:  Response envelopes, the partial-update base class, and the
       error/health response shapes shared by every resource.
"""

from typing import ClassVar, FrozenSet, Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


# ══════════════════════════════════════════════════════════════════════════
# Request Payload Bases
# ══════════════════════════════════════════════════════════════════════════


class CreatePayload(BaseModel):
    """
    Base for create payloads.

    Enum members are stored as their plain string value so the payload can
    be handed to the store gateway as-is via `to_values()`.
    """

    model_config = ConfigDict(use_enum_values=True, extra="ignore")

    def to_values(self) -> dict:
        return self.model_dump()


class PartialUpdate(BaseModel):
    """
    Base for PATCH payloads: only fields the client actually sent are applied.

    Subclasses list their NOT NULL columns in `required_fields`; sending an
    explicit null for one of them is a validation error rather than a
    store-level constraint violation.
    """

    model_config = ConfigDict(use_enum_values=True, extra="ignore")

    required_fields: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        for name in self.model_fields_set & self.required_fields:
            if getattr(self, name) is None:
                raise ValueError(f"{name} may not be null")
        return self

    def to_changes(self) -> dict:
        """The supplied fields only (explicit nulls for optional fields included)."""
        return self.model_dump(exclude_unset=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Envelopes
# ══════════════════════════════════════════════════════════════════════════


class DataResponse(BaseModel, Generic[T]):
    """
    Success envelope: {"status": "success", "data": ...}

    Every 200/201 response body uses this shape.
    """

    status: Literal["success"] = "success"
    data: T


class MessageDataResponse(DataResponse[T], Generic[T]):
    """Success envelope with a human-readable message (used by approve)."""

    message: str


class ErrorResponse(BaseModel):
    """
    Error envelope returned by the global exception handlers.

    Example:
        {
            "status": "error",
            "message": "Pet is not available for adoption. Current status: adopted"
        }

    `stack` is present only when ENVIRONMENT=development.
    """

    status: str = Field(description="'error', or 'not found' for unmatched routes")
    message: str = Field(description="Human-readable error description")
    stack: Optional[str] = Field(default=None, description="Traceback (development only)")


class HealthResponse(BaseModel):
    """Health check response showing service and record store status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Record store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
