from datetime import datetime

from sqlalchemy import ColumnElement, Select, exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dto.quote import QuoteListQuery
from app.core.repositories.base import SqlAlchemyRepository, contains
from app.infrastructure.database.models.contact import Contact
from app.infrastructure.database.models.quote_request import QuoteRequest
from app.utils.enums import QuoteStatusEnum


class QuoteRepository(SqlAlchemyRepository[QuoteRequest]):
    sort_fields = {
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "quoteNumber": "quote_number",
        "status": "status",
        "quoteAmount": "quote_amount",
        "budget": "budget",
        "industry": "industry",
    }

    def __init__(self, session: AsyncSession):
        super().__init__(session, QuoteRequest)

    def _base_query(self) -> Select:
        # Search reaches into the inquirer's fields; one contact per quote keeps rows unique
        return select(QuoteRequest).join(QuoteRequest.contact)

    def _search_condition(self, term: str) -> ColumnElement[bool]:
        return or_(
            contains(QuoteRequest.quote_number, term),
            contains(Contact.first_name, term),
            contains(Contact.last_name, term),
            contains(Contact.email, term),
            contains(Contact.company, term),
        )

    def _apply_filters(self, query: Select, params: QuoteListQuery) -> Select:
        query = super()._apply_filters(query, params)
        if getattr(params, "assigned_to", None):
            query = query.where(QuoteRequest.assigned_to_id == params.assigned_to)
        return query

    async def quote_number_exists(self, quote_number: str) -> bool:
        query = select(exists().where(QuoteRequest.quote_number == quote_number))
        result = await self._run(self.session.execute(query))
        return bool(result.scalar())

    async def status_counts(self) -> dict[QuoteStatusEnum, int]:
        return await self.count_by(QuoteRequest.status)

    async def get_recent(self, limit: int = 10) -> list[QuoteRequest]:
        query = (
            self._base_query()
            .order_by(QuoteRequest.created_at.desc(), QuoteRequest.id.desc())
            .limit(limit)
        )
        result = await self._run(self.session.execute(query))
        return list(result.scalars().all())

    async def get_created_since(self, since: datetime) -> list[datetime]:
        query = select(QuoteRequest.created_at).where(QuoteRequest.created_at >= since)
        result = await self._run(self.session.execute(query))
        return list(result.scalars().all())
