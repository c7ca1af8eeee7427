from enum import Enum
from typing import TypeVar

from app.core.dto.common import ListQuery
from app.core.repositories.base import SqlAlchemyRepository
from app.core.services.result import ServiceResult
from app.infrastructure.errors.base import ValidationFailed


QueryType = TypeVar("QueryType", bound=ListQuery)


def normalize_list_query(
    query: QueryType,
    repository: SqlAlchemyRepository | type[SqlAlchemyRepository],
    status_enum: type[Enum],
) -> ServiceResult[QueryType]:
    """Check `sortBy` against the repository whitelist and coerce `status` into `status_enum`."""
    if not repository.is_sortable(query.sort_by):
        return ServiceResult.failed(ValidationFailed(
            f"Cannot sort by '{query.sort_by}'",
            details={"sortBy": query.sort_by, "allowed": sorted(repository.sort_fields)},
        ))

    if query.status is not None:
        try:
            status = status_enum(query.status)
        except ValueError:
            return ServiceResult.failed(ValidationFailed(
                f"Unknown status '{query.status}'",
                details={"status": query.status, "allowed": [s.value for s in status_enum]},
            ))
        query = query.model_copy(update={"status": status})

    return ServiceResult.ok(query)
