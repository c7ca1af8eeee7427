from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from app.core.dto.common import CamelModel
from app.utils.enums import (
    ApplicationAreaEnum,
    ContactSourceEnum,
    ContactStatusEnum,
    QuoteStatusEnum,
)


class QuoteSubmissionModel(CamelModel):
    industry: str | None = Field(None, max_length=100)
    application_area: ApplicationAreaEnum
    required_capacity: str = Field(..., min_length=1, max_length=100)
    budget: Decimal | None = Field(None, gt=0, max_digits=15, decimal_places=2)
    timeline: str | None = Field(None, max_length=100)
    notes: str | None = Field(None, max_length=1000)


class ContactSubmissionModel(CamelModel):
    """Public contact form payload, optionally carrying a quote request."""
    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: str | None = Field(None, max_length=50)
    company: str | None = Field(None, max_length=255)
    subject: str | None = Field(None, min_length=5, max_length=255)
    message: str | None = Field(None, min_length=10, max_length=5000)
    gdpr_consent: bool = False
    marketing_consent: bool = False
    quote: QuoteSubmissionModel | None = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()


class ContactSubmissionResultModel(CamelModel):
    contact_id: UUID
    quote_id: UUID | None = None
    quote_number: str | None = None


class ContactSummaryModel(CamelModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None
    company: str | None


class ContactQuoteSummaryModel(CamelModel):
    id: UUID
    quote_number: str
    status: QuoteStatusEnum
    created_at: datetime


class ContactModel(ContactSummaryModel):
    subject: str
    message: str
    gdpr_consent: bool
    marketing_consent: bool
    source: ContactSourceEnum
    status: ContactStatusEnum
    created_at: datetime
    updated_at: datetime


class ContactDetailModel(ContactModel):
    quotes: list[ContactQuoteSummaryModel] = []


class ContactStatusUpdateModel(CamelModel):
    status: ContactStatusEnum


class ContactStatsModel(CamelModel):
    total: int = 0
    new: int = 0
    in_progress: int = 0
    resolved: int = 0
    closed: int = 0
