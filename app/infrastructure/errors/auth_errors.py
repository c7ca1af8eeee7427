from fastapi import status

from app.infrastructure.errors.base import AppError


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"
    detail = "Missing or invalid credentials"

    def __init__(self, detail: str | None = None):
        super().__init__(
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AccessDenied(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    detail = "Access denied"
