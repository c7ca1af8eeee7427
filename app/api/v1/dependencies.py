from datetime import datetime
from typing import Annotated, AsyncGenerator
from uuid import UUID

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dto.common import DEFAULT_PAGE_SIZE, ListQuery
from app.core.dto.quote import QuoteListQuery
from app.core.dto.user import UserModel
from app.infrastructure.errors.base import ValidationFailed
from app.utils.enums import UserRoleEnum
from app.utils.error_extra import validation_details
import app.core.repositories as repositories
import app.core.services as services


token_scheme = HTTPBearer(auto_error=False)


async def get_db_session(
    request: Request,
) -> AsyncGenerator[AsyncSession, None]:
    session = await request.app.state.db_connection.get_session()
    try:
        yield session
    finally:
        await session.close()


async def get_auth_service(session=Depends(get_db_session)) -> services.AuthService:
    return services.AuthService(
        repository=repositories.UserRepository(session=session)
    )


async def get_current_user_dependency(
    auth_service: Annotated[services.AuthService, Depends(get_auth_service)],
    auth_scheme: Annotated[HTTPAuthorizationCredentials | None, Depends(token_scheme)]
) -> UserModel:
    token = auth_scheme.credentials if auth_scheme else None
    token_data = await auth_service.verify_token(token)
    return await auth_service.check_user_exist(token_data)


async def get_staff_user(
    current_user: Annotated[UserModel, Depends(get_current_user_dependency)],
) -> UserModel:
    return services.AuthService.require_role(current_user, UserRoleEnum.ADMIN, UserRoleEnum.EDITOR)


async def require_admin(
    current_user: Annotated[UserModel, Depends(get_current_user_dependency)],
) -> UserModel:
    return services.AuthService.require_role(current_user, UserRoleEnum.ADMIN)


async def get_stats_service(session=Depends(get_db_session)) -> services.StatsService:
    return services.StatsService(
        quote_repository=repositories.QuoteRepository(session=session),
        contact_repository=repositories.ContactRepository(session=session),
    )


async def get_quote_service(
    session=Depends(get_db_session),
    stats_service=Depends(get_stats_service),
) -> services.QuoteService:
    return services.QuoteService(
        repository=repositories.QuoteRepository(session=session),
        user_repository=repositories.UserRepository(session=session),
        stats_service=stats_service,
    )


async def get_contact_service(
    session=Depends(get_db_session),
    stats_service=Depends(get_stats_service),
) -> services.ContactService:
    return services.ContactService(
        repository=repositories.ContactRepository(session=session),
        quote_repository=repositories.QuoteRepository(session=session),
        stats_service=stats_service,
    )


async def get_product_service(session=Depends(get_db_session)) -> services.ProductService:
    return services.ProductService(
        repository=repositories.ProductRepository(session=session)
    )


async def get_user_service(session=Depends(get_db_session)) -> services.UserService:
    return services.UserService(
        repository=repositories.UserRepository(session=session)
    )


async def get_export_service(request: Request) -> services.ExportService:
    # Export streams outlive the request-scoped session and open their own
    return services.ExportService(db_connection=request.app.state.db_connection)


def _build_query(query_class: type[ListQuery], **values) -> ListQuery:
    try:
        return query_class(**values)
    except ValidationError as exc:
        raise ValidationFailed(details=validation_details(exc.errors()))


async def get_list_query(
    search: str | None = Query(None),
    status: str | None = Query(None),
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("DESC", alias="sortOrder"),
    date_from: datetime | None = Query(None, alias="dateFrom"),
    date_to: datetime | None = Query(None, alias="dateTo"),
) -> ListQuery:
    return _build_query(
        ListQuery,
        search=search,
        status=status,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        date_from=date_from,
        date_to=date_to,
    )


async def get_quote_list_query(
    query: Annotated[ListQuery, Depends(get_list_query)],
    assigned_to: UUID | None = Query(None, alias="assignedTo"),
) -> QuoteListQuery:
    return QuoteListQuery(**query.model_dump(), assigned_to=assigned_to)
