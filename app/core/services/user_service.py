from app.core.dto.common import ListQuery, PaginationModel
from app.core.dto.user import UserModel
from app.core.repositories.user_repository import UserRepository
from app.core.services.listing import normalize_list_query
from app.core.services.result import ServiceResult
from app.utils.enums import UserRoleEnum


class UserService:

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def list(self, query: ListQuery) -> ServiceResult[tuple[list[UserModel], PaginationModel]]:
        # `status` on the user list selects a role
        normalized = normalize_list_query(query, self.repository, UserRoleEnum)
        if not normalized.is_ok:
            return ServiceResult.failed(normalized.error)

        users, pagination = await self.repository.list(normalized.value)
        return ServiceResult.ok((
            [UserModel.model_validate(user, from_attributes=True) for user in users],
            pagination,
        ))
