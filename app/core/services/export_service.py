import csv
import io
from datetime import date
from typing import AsyncIterator, Callable, Iterable

from app.core.dto.common import ListQuery
from app.core.dto.quote import QuoteListQuery, QuoteModel
from app.core.repositories.base import SqlAlchemyRepository
from app.core.repositories.contact_repository import ContactRepository
from app.core.repositories.quote_repository import QuoteRepository
from app.core.services.listing import normalize_list_query
from app.core.services.result import ServiceResult
from app.infrastructure.config.config import APP_CONFIG
from app.infrastructure.database.adapters.pg_connection import DatabaseConnection
from app.infrastructure.database.models.contact import Contact
from app.infrastructure.database.models.quote_request import QuoteRequest
from app.infrastructure.logging import get_logger
from app.utils.enums import ContactStatusEnum, QuoteStatusEnum


logger = get_logger(__name__)

QUOTE_COLUMNS = [
    "Quote Number",
    "Contact Name",
    "Email",
    "Company",
    "Status",
    "Quote Amount",
    "Industry",
    "Assigned To",
    "Created At",
]

CONTACT_COLUMNS = [
    "Name",
    "Email",
    "Phone",
    "Company",
    "Subject",
    "Status",
    "Created At",
]


def quote_row(quote: QuoteRequest) -> list[str]:
    # Goes through the read model so the amount follows the same visibility rule
    model = QuoteModel.model_validate(quote, from_attributes=True)
    return [
        model.quote_number,
        quote.contact.full_name,
        quote.contact.email,
        quote.contact.company or "",
        model.status.value,
        "" if model.quote_amount is None else str(model.quote_amount),
        model.industry or "",
        quote.assigned_to.full_name if quote.assigned_to else "",
        model.created_at.isoformat(),
    ]


def contact_row(contact: Contact) -> list[str]:
    return [
        contact.full_name,
        contact.email,
        contact.phone or "",
        contact.company or "",
        contact.subject,
        contact.status.value,
        contact.created_at.isoformat(),
    ]


def render_rows(rows: Iterable[list[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerows(rows)
    return buffer.getvalue()


def export_filename(prefix: str, today: date | None = None) -> str:
    return f"{prefix}-{(today or date.today()).isoformat()}.csv"


class ExportService:
    """
    CSV export of filtered lists.

    Page and limit are ignored; rows are fetched and written in batches so the
    full result set is never held in memory. Each export opens its own
    session, so the stream is independent of the request-scoped one.
    """

    def __init__(self, db_connection: DatabaseConnection, batch_size: int | None = None):
        self.db_connection = db_connection
        self.batch_size = batch_size or APP_CONFIG.EXPORT_BATCH_SIZE

    def export_quotes(self, query: QuoteListQuery) -> ServiceResult[tuple[str, AsyncIterator[str]]]:
        normalized = normalize_list_query(query, QuoteRepository, QuoteStatusEnum)
        if not normalized.is_ok:
            return ServiceResult.failed(normalized.error)
        stream = self._stream(QuoteRepository, normalized.value, QUOTE_COLUMNS, quote_row)
        return ServiceResult.ok((export_filename("quotes"), stream))

    def export_contacts(self, query: ListQuery) -> ServiceResult[tuple[str, AsyncIterator[str]]]:
        normalized = normalize_list_query(query, ContactRepository, ContactStatusEnum)
        if not normalized.is_ok:
            return ServiceResult.failed(normalized.error)
        stream = self._stream(ContactRepository, normalized.value, CONTACT_COLUMNS, contact_row)
        return ServiceResult.ok((export_filename("contacts"), stream))

    async def _stream(
        self,
        repository_class: type[SqlAlchemyRepository],
        query: ListQuery,
        columns: list[str],
        to_row: Callable[..., list[str]],
    ) -> AsyncIterator[str]:
        session = await self.db_connection.get_session()
        exported = 0
        try:
            repository = repository_class(session=session)
            yield render_rows([columns])

            async for batch in repository.stream(query, self.batch_size):
                exported += len(batch)
                yield render_rows(to_row(item) for item in batch)
        finally:
            await session.close()
            logger.info("export_finished", resource=repository_class.__name__, rows=exported)
