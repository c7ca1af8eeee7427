from uuid import UUID

from sqlalchemy import ColumnElement, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.repositories.base import SqlAlchemyRepository, contains
from app.infrastructure.database.models.contact import Contact


class ContactRepository(SqlAlchemyRepository[Contact]):
    sort_fields = {
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "firstName": "first_name",
        "lastName": "last_name",
        "email": "email",
        "company": "company",
        "status": "status",
    }

    def __init__(self, session: AsyncSession):
        super().__init__(session, Contact)

    def _search_condition(self, term: str) -> ColumnElement[bool]:
        return or_(
            contains(Contact.first_name, term),
            contains(Contact.last_name, term),
            contains(Contact.email, term),
            contains(Contact.company, term),
            contains(Contact.subject, term),
            contains(Contact.message, term),
        )

    async def get_with_quotes(self, contact_id: UUID) -> Contact | None:
        query = (
            select(Contact)
            .options(selectinload(Contact.quotes))
            .where(Contact.id == contact_id)
        )
        result = await self._run(self.session.execute(query))
        return result.scalars().one_or_none()
