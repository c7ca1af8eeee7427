from sqlalchemy import ColumnElement, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dto.common import ListQuery
from app.core.repositories.base import SqlAlchemyRepository, contains
from app.infrastructure.database.models.user import User


class UserRepository(SqlAlchemyRepository[User]):
    sort_fields = {
        "createdAt": "created_at",
        "email": "email",
        "firstName": "first_name",
        "lastName": "last_name",
        "role": "role",
    }

    def __init__(self, session: AsyncSession):
        super().__init__(session, User)

    def _search_condition(self, term: str) -> ColumnElement[bool]:
        return or_(
            contains(User.first_name, term),
            contains(User.last_name, term),
            contains(User.email, term),
        )

    def _apply_filters(self, query, params: ListQuery):
        # Users have no workflow status; `status` filters on role instead
        if params.status:
            query = query.where(User.role == params.status)
            params = params.model_copy(update={"status": None})
        return super()._apply_filters(query, params)
