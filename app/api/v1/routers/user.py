from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_list_query, get_staff_user, get_user_service
from app.core.dto.common import ListQuery, ResponseEnvelope
from app.core.dto.user import UserModel
from app.core.services.user_service import UserService


router = APIRouter(dependencies=[Depends(get_staff_user)])


@router.get(
    "",
    summary="List staff users",
    description="Used to pick assignees; `status` filters by role",
)
async def list_users(
    query: Annotated[ListQuery, Depends(get_list_query)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> ResponseEnvelope[list[UserModel]]:
    users, pagination = (await service.list(query)).unwrap()
    return ResponseEnvelope(data=users, pagination=pagination)
