from uuid import UUID

from app.core.dto.common import CamelModel
from app.utils.enums import UserRoleEnum


class UserSummaryModel(CamelModel):
    id: UUID
    first_name: str
    last_name: str
    email: str


class UserModel(UserSummaryModel):
    role: UserRoleEnum
    is_active: bool
