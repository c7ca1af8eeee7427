from decimal import Decimal
from uuid import UUID

from app.core.dto.common import PaginationModel
from app.core.dto.quote import (
    QuoteChangeModel,
    QuoteListQuery,
    QuoteModel,
    QuoteStatsModel,
    QuoteUpdateModel,
)
from app.core.repositories.quote_repository import QuoteRepository
from app.core.repositories.user_repository import UserRepository
from app.core.services.listing import normalize_list_query
from app.core.services.result import ServiceResult
from app.core.services.stats_service import StatsService
from app.infrastructure.database.models.base import utcnow
from app.infrastructure.database.models.quote_request import QuoteRequest
from app.infrastructure.errors.base import InvalidTransition, NotFoundError, ValidationFailed
from app.infrastructure.logging import get_logger
from app.utils.enums import QuoteStatusEnum


logger = get_logger(__name__)


def can_transition(current: QuoteStatusEnum, target: str | QuoteStatusEnum) -> bool:
    """
    A status change is accepted iff the quote is not in a terminal state and
    the target is a known status.

    pending -> in_progress -> quoted -> approved | rejected, any -> cancelled is
    the expected path, but only terminality and recognition are enforced.
    """
    return not current.is_terminal and QuoteStatusEnum.parse(target) is not None


def quote_not_found(quote_id: UUID) -> NotFoundError:
    return NotFoundError(f"Quote request {quote_id} not found", details={"id": str(quote_id)})


class QuoteService:
    """Quote lifecycle: reads, status workflow, assignment and field edits."""

    def __init__(
        self,
        repository: QuoteRepository,
        user_repository: UserRepository,
        stats_service: StatsService,
    ):
        self.repository = repository
        self.user_repository = user_repository
        self.stats_service = stats_service

    async def list(self, query: QuoteListQuery) -> ServiceResult[tuple[list[QuoteModel], PaginationModel]]:
        normalized = normalize_list_query(query, self.repository, QuoteStatusEnum)
        if not normalized.is_ok:
            return ServiceResult.failed(normalized.error)

        quotes, pagination = await self.repository.list(normalized.value)
        return ServiceResult.ok((
            [QuoteModel.model_validate(quote, from_attributes=True) for quote in quotes],
            pagination,
        ))

    async def get(self, quote_id: UUID) -> ServiceResult[QuoteModel]:
        quote = await self.repository.get_item(quote_id)
        if not quote:
            return ServiceResult.failed(quote_not_found(quote_id))
        return ServiceResult.ok(QuoteModel.model_validate(quote, from_attributes=True))

    async def update_status(
        self,
        quote_id: UUID,
        status: str,
        notes: str | None = None,
    ) -> ServiceResult[QuoteChangeModel]:
        quote = await self.repository.get_for_update(quote_id)
        if not quote:
            await self.repository.rollback()
            return ServiceResult.failed(quote_not_found(quote_id))

        target = QuoteStatusEnum.parse(status)
        if target is None:
            await self.repository.rollback()
            return ServiceResult.failed(InvalidTransition(
                f"Unknown quote status '{status}'",
                details={"status": status, "allowed": [s.value for s in QuoteStatusEnum]},
            ))

        if not can_transition(quote.status, target):
            # rollback expires the row, so the error is built first
            error = InvalidTransition(
                f"Quote {quote.quote_number} is {quote.status.value} and can no longer change status",
                details={"currentStatus": quote.status.value, "requestedStatus": target.value},
            )
            logger.info(
                "quote_transition_rejected",
                quote_number=quote.quote_number,
                current_status=quote.status.value,
                requested_status=target.value,
            )
            await self.repository.rollback()
            return ServiceResult.failed(error)

        old_status = quote.status
        quote.status = target
        quote.updated_at = utcnow()
        if notes is not None:
            quote.notes = notes
        await self.repository.save_item(quote)

        logger.info(
            "quote_status_updated",
            quote_number=quote.quote_number,
            old_status=old_status.value,
            new_status=target.value,
        )
        return ServiceResult.ok(await self._change(quote))

    async def assign(self, quote_id: UUID, user_id: UUID | None) -> ServiceResult[QuoteChangeModel]:
        quote = await self.repository.get_for_update(quote_id)
        if not quote:
            await self.repository.rollback()
            return ServiceResult.failed(quote_not_found(quote_id))

        if quote.status.is_terminal:
            error = InvalidTransition(
                f"Quote {quote.quote_number} is {quote.status.value} and can no longer be reassigned",
                details={"currentStatus": quote.status.value},
            )
            await self.repository.rollback()
            return ServiceResult.failed(error)

        user = None
        if user_id is not None:
            user = await self.user_repository.get_item(user_id)
            if not user:
                await self.repository.rollback()
                return ServiceResult.failed(NotFoundError(
                    f"User {user_id} not found",
                    details={"assignedTo": str(user_id)},
                ))
            if not user.is_active:
                error = ValidationFailed(
                    f"User {user.email} is inactive",
                    details={"assignedTo": str(user_id)},
                )
                await self.repository.rollback()
                return ServiceResult.failed(error)

        quote.assigned_to = user
        quote.updated_at = utcnow()
        await self.repository.save_item(quote)

        logger.info(
            "quote_assigned",
            quote_number=quote.quote_number,
            assigned_to=str(user_id) if user_id else None,
        )
        return ServiceResult.ok(await self._change(quote))

    async def record_quote_amount(self, quote_id: UUID, amount: Decimal) -> ServiceResult[QuoteChangeModel]:
        if amount <= 0:
            return ServiceResult.failed(ValidationFailed(
                "Quote amount must be positive",
                details={"quoteAmount": str(amount)},
            ))

        quote = await self.repository.get_for_update(quote_id)
        if not quote:
            await self.repository.rollback()
            return ServiceResult.failed(quote_not_found(quote_id))

        if quote.status != QuoteStatusEnum.QUOTED:
            # Accepted anyway; the amount stays hidden until the quote is quoted/approved
            logger.warning(
                "quote_amount_outside_quoted",
                quote_number=quote.quote_number,
                status=quote.status.value,
            )

        quote.quote_amount = amount
        await self.repository.save_item(quote)

        logger.info("quote_amount_recorded", quote_number=quote.quote_number, amount=str(amount))
        return ServiceResult.ok(await self._change(quote))

    async def update(self, quote_id: UUID, data: QuoteUpdateModel) -> ServiceResult[QuoteChangeModel]:
        fields = data.model_dump(exclude_unset=True)
        if not fields:
            return ServiceResult.failed(ValidationFailed("At least one field must be provided"))

        quote = await self.repository.get_for_update(quote_id)
        if not quote:
            await self.repository.rollback()
            return ServiceResult.failed(quote_not_found(quote_id))

        for name, value in fields.items():
            setattr(quote, name, value)
        await self.repository.save_item(quote)

        logger.info("quote_updated", quote_number=quote.quote_number, fields=sorted(fields))
        return ServiceResult.ok(await self._change(quote))

    async def delete(self, quote_id: UUID) -> ServiceResult[QuoteStatsModel]:
        quote = await self.repository.get_item(quote_id)
        if not quote:
            return ServiceResult.failed(quote_not_found(quote_id))

        quote_number = quote.quote_number
        await self.repository.delete_item(quote)

        logger.info("quote_deleted", quote_number=quote_number)
        return ServiceResult.ok(await self.stats_service.compute())

    async def _change(self, quote: QuoteRequest) -> QuoteChangeModel:
        return QuoteChangeModel(
            quote=QuoteModel.model_validate(quote, from_attributes=True),
            stats=await self.stats_service.compute(),
        )
