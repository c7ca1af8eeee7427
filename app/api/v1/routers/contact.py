from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse

from app.api.v1.dependencies import (
    get_contact_service,
    get_export_service,
    get_list_query,
    get_staff_user,
    require_admin,
)
from app.core.dto.common import ListQuery, ResponseEnvelope
from app.core.dto.contact import (
    ContactDetailModel,
    ContactModel,
    ContactStatsModel,
    ContactStatusUpdateModel,
    ContactSubmissionModel,
    ContactSubmissionResultModel,
)
from app.core.services.contact_service import ContactService
from app.core.services.export_service import ExportService


router = APIRouter()


@router.post(
    "/submit",
    status_code=status.HTTP_201_CREATED,
    summary="Submit contact form",
    description="Public endpoint; creates a contact and, when a quote block is present, a pending quote request",
)
async def submit_contact(
    data: ContactSubmissionModel,
    service: Annotated[ContactService, Depends(get_contact_service)],
) -> ResponseEnvelope[ContactSubmissionResultModel]:
    result = (await service.submit(data)).unwrap()
    message = "Quote request submitted" if result.quote_id else "Contact form submitted"
    return ResponseEnvelope(data=result, message=message)


@router.get(
    "",
    summary="List contacts",
    dependencies=[Depends(get_staff_user)],
)
async def list_contacts(
    query: Annotated[ListQuery, Depends(get_list_query)],
    service: Annotated[ContactService, Depends(get_contact_service)],
) -> ResponseEnvelope[list[ContactModel]]:
    contacts, pagination = (await service.list(query)).unwrap()
    return ResponseEnvelope(data=contacts, pagination=pagination)


@router.get(
    "/stats",
    summary="Contact statistics",
    dependencies=[Depends(get_staff_user)],
)
async def get_contact_stats(
    service: Annotated[ContactService, Depends(get_contact_service)],
) -> ResponseEnvelope[ContactStatsModel]:
    return ResponseEnvelope(data=await service.stats())


@router.get(
    "/export",
    summary="Export contacts as CSV",
    dependencies=[Depends(get_staff_user)],
)
async def export_contacts(
    query: Annotated[ListQuery, Depends(get_list_query)],
    service: Annotated[ExportService, Depends(get_export_service)],
) -> StreamingResponse:
    filename, rows = service.export_contacts(query).unwrap()
    return StreamingResponse(
        rows,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get(
    "/{contact_id}",
    summary="Get contact with its quote requests",
    dependencies=[Depends(get_staff_user)],
)
async def get_contact(
    contact_id: UUID,
    service: Annotated[ContactService, Depends(get_contact_service)],
) -> ResponseEnvelope[ContactDetailModel]:
    return ResponseEnvelope(data=(await service.get(contact_id)).unwrap())


@router.put(
    "/{contact_id}/status",
    summary="Change contact status",
    dependencies=[Depends(get_staff_user)],
)
async def update_contact_status(
    contact_id: UUID,
    data: ContactStatusUpdateModel,
    service: Annotated[ContactService, Depends(get_contact_service)],
) -> ResponseEnvelope[ContactModel]:
    contact = (await service.update_status(contact_id, data.status)).unwrap()
    return ResponseEnvelope(data=contact, message="Contact status updated")


@router.delete(
    "/{contact_id}",
    summary="Delete contact",
    description="Also deletes the contact's quote requests",
    dependencies=[Depends(require_admin)],
)
async def delete_contact(
    contact_id: UUID,
    service: Annotated[ContactService, Depends(get_contact_service)],
) -> ResponseEnvelope[ContactStatsModel]:
    stats = (await service.delete(contact_id)).unwrap()
    return ResponseEnvelope(data=stats, message="Contact deleted")
