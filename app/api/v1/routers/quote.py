from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from app.api.v1.dependencies import (
    get_export_service,
    get_quote_list_query,
    get_quote_service,
    get_staff_user,
    get_stats_service,
    require_admin,
)
from app.core.dto.common import ResponseEnvelope
from app.core.dto.quote import (
    QuoteAmountModel,
    QuoteAssignModel,
    QuoteChangeModel,
    QuoteDashboardModel,
    QuoteListQuery,
    QuoteModel,
    QuoteStatsModel,
    QuoteStatusUpdateModel,
    QuoteUpdateModel,
)
from app.core.services.export_service import ExportService
from app.core.services.quote_service import QuoteService
from app.core.services.stats_service import StatsService


router = APIRouter(dependencies=[Depends(get_staff_user)])


@router.get(
    "",
    summary="List quote requests",
    description="Search, filter, sort and paginate quote requests",
)
async def list_quotes(
    query: Annotated[QuoteListQuery, Depends(get_quote_list_query)],
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> ResponseEnvelope[list[QuoteModel]]:
    quotes, pagination = (await service.list(query)).unwrap()
    return ResponseEnvelope(data=quotes, pagination=pagination)


@router.get(
    "/stats",
    summary="Quote statistics",
    description="Counts per status, monthly trend and the newest quotes",
)
async def get_quote_stats(
    service: Annotated[StatsService, Depends(get_stats_service)],
) -> ResponseEnvelope[QuoteDashboardModel]:
    return ResponseEnvelope(data=await service.dashboard())


@router.get(
    "/export",
    summary="Export quote requests as CSV",
    description="Same filters as the list, without pagination",
)
async def export_quotes(
    query: Annotated[QuoteListQuery, Depends(get_quote_list_query)],
    service: Annotated[ExportService, Depends(get_export_service)],
) -> StreamingResponse:
    filename, rows = service.export_quotes(query).unwrap()
    return StreamingResponse(
        rows,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get(
    "/{quote_id}",
    summary="Get quote request",
)
async def get_quote(
    quote_id: UUID,
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> ResponseEnvelope[QuoteModel]:
    return ResponseEnvelope(data=(await service.get(quote_id)).unwrap())


@router.put(
    "/{quote_id}",
    summary="Update quote request details",
    description="Edits descriptive fields; status and quote number are not editable here",
)
async def update_quote(
    quote_id: UUID,
    data: QuoteUpdateModel,
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> ResponseEnvelope[QuoteChangeModel]:
    change = (await service.update(quote_id, data)).unwrap()
    return ResponseEnvelope(data=change, message="Quote request updated")


@router.put(
    "/{quote_id}/status",
    summary="Change quote status",
)
async def update_quote_status(
    quote_id: UUID,
    data: QuoteStatusUpdateModel,
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> ResponseEnvelope[QuoteChangeModel]:
    change = (await service.update_status(quote_id, data.status, data.notes)).unwrap()
    return ResponseEnvelope(data=change, message="Quote status updated")


@router.put(
    "/{quote_id}/assign",
    summary="Assign quote to a staff user",
    description="Pass assignedTo = null to clear the assignment",
)
async def assign_quote(
    quote_id: UUID,
    data: QuoteAssignModel,
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> ResponseEnvelope[QuoteChangeModel]:
    change = (await service.assign(quote_id, data.assigned_to)).unwrap()
    return ResponseEnvelope(data=change, message="Quote request assigned")


@router.put(
    "/{quote_id}/amount",
    summary="Record quoted amount",
)
async def record_quote_amount(
    quote_id: UUID,
    data: QuoteAmountModel,
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> ResponseEnvelope[QuoteChangeModel]:
    change = (await service.record_quote_amount(quote_id, data.quote_amount)).unwrap()
    return ResponseEnvelope(data=change, message="Quote amount recorded")


@router.delete(
    "/{quote_id}",
    summary="Delete quote request",
    dependencies=[Depends(require_admin)],
)
async def delete_quote(
    quote_id: UUID,
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> ResponseEnvelope[QuoteStatsModel]:
    stats = (await service.delete(quote_id)).unwrap()
    return ResponseEnvelope(data=stats, message="Quote request deleted")
