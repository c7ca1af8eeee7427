from uuid import UUID

import jwt

from app.core.dto.user import UserModel
from app.core.repositories.user_repository import UserRepository
from app.infrastructure.config.config import JWT_CONFIG
from app.infrastructure.errors.auth_errors import AccessDenied, InvalidCredentials
from app.infrastructure.logging import get_logger
from app.utils.enums import UserRoleEnum


logger = get_logger(__name__)


class AuthService:
    """Verifies bearer tokens issued elsewhere and resolves them to staff users."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def verify_token(self, token: str | None) -> dict:
        if not token:
            raise InvalidCredentials()

        try:
            return jwt.decode(token, JWT_CONFIG.SECRET_KEY, algorithms=[JWT_CONFIG.ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise InvalidCredentials("Token has expired")
        except jwt.InvalidTokenError:
            raise InvalidCredentials()

    async def check_user_exist(self, token_data: dict) -> UserModel:
        try:
            user_id = UUID(token_data.get("sub"))
        except (ValueError, TypeError):
            raise InvalidCredentials()

        user = await self.repository.get_item(user_id)
        if not user or not user.is_active:
            logger.warning("auth_unknown_or_inactive_user", user_id=str(user_id))
            raise InvalidCredentials()
        return UserModel.model_validate(user, from_attributes=True)

    @staticmethod
    def require_role(user: UserModel, *roles: UserRoleEnum) -> UserModel:
        if user.role not in roles:
            logger.info("auth_role_denied", user_id=str(user.id), role=user.role.value)
            raise AccessDenied(f"Requires role: {', '.join(role.value for role in roles)}")
        return user
