from uuid import UUID, uuid4

from sqlalchemy.exc import IntegrityError

from app.core.dto.common import ListQuery, PaginationModel
from app.core.dto.contact import (
    ContactDetailModel,
    ContactModel,
    ContactStatsModel,
    ContactSubmissionModel,
    ContactSubmissionResultModel,
)
from app.core.repositories.contact_repository import ContactRepository
from app.core.repositories.quote_repository import QuoteRepository
from app.core.services.listing import normalize_list_query
from app.core.services.result import ServiceResult
from app.core.services.stats_service import StatsService
from app.infrastructure.config.config import APP_CONFIG
from app.infrastructure.database.models.contact import Contact
from app.infrastructure.database.models.quote_request import QuoteRequest
from app.infrastructure.errors.base import ConflictError, NotFoundError, ValidationFailed
from app.infrastructure.logging import get_logger
from app.utils.enums import ContactSourceEnum, ContactStatusEnum
from app.utils.quote_number import generate_quote_number


logger = get_logger(__name__)

QUOTE_SUBJECT = "Quote Request"


def contact_not_found(contact_id: UUID) -> NotFoundError:
    return NotFoundError(f"Contact {contact_id} not found", details={"id": str(contact_id)})


class ContactService:

    def __init__(
        self,
        repository: ContactRepository,
        quote_repository: QuoteRepository,
        stats_service: StatsService,
    ):
        self.repository = repository
        self.quote_repository = quote_repository
        self.stats_service = stats_service

    async def submit(self, data: ContactSubmissionModel) -> ServiceResult[ContactSubmissionResultModel]:
        """
        Accept a public contact form, optionally carrying a quote request.

        Every submission creates a new contact; the contact and its quote are
        written in one transaction. A quote number collision rolls the whole
        write back and retries with a fresh number.
        """
        if not data.gdpr_consent:
            return ServiceResult.failed(ValidationFailed(
                "Consent to data processing is required",
                details={"gdprConsent": "must be true"},
            ))

        if data.quote is None:
            missing = [name for name in ("subject", "message") if not getattr(data, name)]
            if missing:
                return ServiceResult.failed(ValidationFailed(
                    "Subject and message are required",
                    details={"missing": missing},
                ))

        attempts = APP_CONFIG.QUOTE_NUMBER_ATTEMPTS
        for attempt in range(1, attempts + 1):
            contact = self._build_contact(data)
            quote = None
            quote_id = quote_number = None
            if data.quote is not None:
                # The quote is expired again by the contact refresh, so keep its keys
                quote_id, quote_number = uuid4(), await self._free_quote_number()
                quote = QuoteRequest(
                    id=quote_id,
                    quote_number=quote_number,
                    contact=contact,
                    **data.quote.model_dump(),
                )

            try:
                await self.repository.add_item(contact)
            except IntegrityError:
                await self.repository.rollback()
                if quote is None:
                    raise
                logger.warning("quote_number_collision", quote_number=quote_number, attempt=attempt)
                continue

            logger.info(
                "contact_submitted",
                contact_id=str(contact.id),
                source=contact.source.value,
                quote_number=quote_number,
            )
            return ServiceResult.ok(ContactSubmissionResultModel(
                contact_id=contact.id,
                quote_id=quote_id,
                quote_number=quote_number,
            ))

        logger.error("quote_number_exhausted", attempts=attempts)
        raise ConflictError("Could not allocate a unique quote number")

    def _build_contact(self, data: ContactSubmissionModel) -> Contact:
        subject, message = data.subject, data.message
        source = ContactSourceEnum.CONTACT_FORM
        if data.quote is not None:
            source = ContactSourceEnum.QUOTE_FORM
            subject = subject or QUOTE_SUBJECT
            message = message or f"Quote request for: {data.quote.required_capacity}"

        return Contact(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            phone=data.phone,
            company=data.company,
            subject=subject,
            message=message,
            gdpr_consent=data.gdpr_consent,
            marketing_consent=data.marketing_consent,
            source=source,
            status=ContactStatusEnum.NEW,
        )

    async def _free_quote_number(self) -> str:
        quote_number = generate_quote_number()
        for _ in range(APP_CONFIG.QUOTE_NUMBER_ATTEMPTS - 1):
            if not await self.quote_repository.quote_number_exists(quote_number):
                break
            quote_number = generate_quote_number()
        return quote_number

    async def list(self, query: ListQuery) -> ServiceResult[tuple[list[ContactModel], PaginationModel]]:
        normalized = normalize_list_query(query, self.repository, ContactStatusEnum)
        if not normalized.is_ok:
            return ServiceResult.failed(normalized.error)

        contacts, pagination = await self.repository.list(normalized.value)
        return ServiceResult.ok((
            [ContactModel.model_validate(contact, from_attributes=True) for contact in contacts],
            pagination,
        ))

    async def get(self, contact_id: UUID) -> ServiceResult[ContactDetailModel]:
        contact = await self.repository.get_with_quotes(contact_id)
        if not contact:
            return ServiceResult.failed(contact_not_found(contact_id))
        return ServiceResult.ok(ContactDetailModel.model_validate(contact, from_attributes=True))

    async def update_status(self, contact_id: UUID, status: ContactStatusEnum) -> ServiceResult[ContactModel]:
        contact = await self.repository.get_for_update(contact_id)
        if not contact:
            await self.repository.rollback()
            return ServiceResult.failed(contact_not_found(contact_id))

        old_status = contact.status
        contact.status = status
        await self.repository.save_item(contact)

        logger.info(
            "contact_status_updated",
            contact_id=str(contact.id),
            old_status=old_status.value,
            new_status=status.value,
        )
        return ServiceResult.ok(ContactModel.model_validate(contact, from_attributes=True))

    async def delete(self, contact_id: UUID) -> ServiceResult[ContactStatsModel]:
        contact = await self.repository.get_item(contact_id)
        if not contact:
            return ServiceResult.failed(contact_not_found(contact_id))

        # Linked quotes go with the contact
        await self.repository.delete_item(contact)

        logger.info("contact_deleted", contact_id=str(contact_id))
        return ServiceResult.ok(await self.stats_service.contact_stats())

    async def stats(self) -> ContactStatsModel:
        return await self.stats_service.contact_stats()
