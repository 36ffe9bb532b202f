"""
Pet Adoption API — Application Route Handlers
==============================================

What:  CRUD endpoints for adoption applications and the approve action.
How:   Every handler delegates to the ApplicationService.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, Response

from adoption_api.dependencies import get_application_service, parse_status_filter
from adoption_api.exceptions import NotFoundError
from adoption_api.schemas.application import (
    Application,
    ApplicationCreate,
    ApplicationStatus,
    ApplicationUpdate,
    ApproveRequest,
)
from adoption_api.schemas.common import DataResponse, ErrorResponse, MessageDataResponse
from adoption_api.services.application_service import ApplicationService

router = APIRouter(prefix="/api/applications", tags=["Applications"])

APPROVED_MESSAGE = "Application approved and pet status updated to adopted"


@router.get(
    "",
    response_model=DataResponse[List[Application]],
    responses={400: {"description": "Invalid status filter", "model": ErrorResponse}},
    summary="List applications, optionally filtered by status and/or pet",
)
async def list_applications(
    status: Optional[str] = Query(default=None, description="pending | approved | rejected | withdrawn"),
    pet_id: Optional[UUID] = Query(default=None),
    applications: ApplicationService = Depends(get_application_service),
) -> DataResponse[List[Application]]:
    status_filter = parse_status_filter(status, ApplicationStatus)
    result = await applications.list(status=status_filter, pet_id=pet_id)
    return DataResponse[List[Application]](data=result)


@router.post(
    "/{application_id}/approve",
    response_model=MessageDataResponse[Application],
    responses={
        400: {"description": "Already approved, or not pending", "model": ErrorResponse},
        404: {"description": "Application not found", "model": ErrorResponse},
        500: {"description": "Pet update failed; approval rolled back", "model": ErrorResponse},
    },
    summary="Approve an application and mark the pet adopted",
)
async def approve_application(
    application_id: UUID,
    payload: Optional[ApproveRequest] = Body(default=None),
    applications: ApplicationService = Depends(get_application_service),
) -> MessageDataResponse[Application]:
    """
    Body (optional): {"rejectOtherApplications": true}

    With rejectOtherApplications (the default), the pet's other pending
    applications are rejected as part of the same approval.
    """
    reject_others = payload.reject_other_applications if payload is not None else True
    approved = await applications.approve(application_id, reject_other_applications=reject_others)
    return MessageDataResponse[Application](data=approved, message=APPROVED_MESSAGE)


@router.get(
    "/{application_id}",
    response_model=DataResponse[Application],
    responses={404: {"description": "Application not found", "model": ErrorResponse}},
    summary="Get an application by ID",
)
async def get_application(
    application_id: UUID,
    applications: ApplicationService = Depends(get_application_service),
) -> DataResponse[Application]:
    application = await applications.get(application_id)
    if application is None:
        raise NotFoundError("Application", str(application_id))
    return DataResponse[Application](data=application)


@router.post(
    "",
    status_code=201,
    response_model=DataResponse[Application],
    responses={
        400: {"description": "Validation error or pet not available", "model": ErrorResponse},
        404: {"description": "Pet not found", "model": ErrorResponse},
    },
    summary="File an adoption application",
)
async def create_application(
    payload: ApplicationCreate,
    applications: ApplicationService = Depends(get_application_service),
) -> DataResponse[Application]:
    return DataResponse[Application](data=await applications.create(payload))


@router.patch(
    "/{application_id}",
    response_model=DataResponse[Application],
    responses={
        400: {"description": "Validation error", "model": ErrorResponse},
        404: {"description": "Application not found", "model": ErrorResponse},
    },
    summary="Partially update an application",
)
async def update_application(
    application_id: UUID,
    payload: ApplicationUpdate,
    applications: ApplicationService = Depends(get_application_service),
) -> DataResponse[Application]:
    application = await applications.update(application_id, payload.to_changes())
    return DataResponse[Application](data=application)


@router.delete(
    "/{application_id}",
    status_code=204,
    response_class=Response,
    summary="Delete an application",
)
async def delete_application(
    application_id: UUID,
    applications: ApplicationService = Depends(get_application_service),
) -> Response:
    await applications.delete(application_id)
    return Response(status_code=204)
