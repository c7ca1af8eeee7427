from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field, model_validator

from app.core.dto.common import CamelModel, ListQuery
from app.core.dto.contact import ContactSummaryModel
from app.core.dto.user import UserSummaryModel
from app.utils.enums import ApplicationAreaEnum, QuoteStatusEnum


class QuoteModel(CamelModel):
    id: UUID
    quote_number: str
    contact_id: UUID
    status: QuoteStatusEnum
    industry: str | None
    application_area: ApplicationAreaEnum | None
    required_capacity: str | None
    budget: Decimal | None
    timeline: str | None
    quote_amount: Decimal | None
    notes: str | None
    assigned_to_id: UUID | None = Field(None, alias="assignedToUserId")
    assigned_to: UserSummaryModel | None = None
    contact: ContactSummaryModel
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="after")
    def hide_amount_outside_quoted(self) -> "QuoteModel":
        if not self.status.has_amount:
            self.quote_amount = None
        return self


class QuoteListQuery(ListQuery):
    assigned_to: UUID | None = None


class QuoteUpdateModel(CamelModel):
    industry: str | None = Field(None, max_length=100)
    application_area: ApplicationAreaEnum | None = None
    required_capacity: str | None = Field(None, max_length=100)
    budget: Decimal | None = Field(None, gt=0, max_digits=15, decimal_places=2)
    timeline: str | None = Field(None, max_length=100)
    notes: str | None = Field(None, max_length=1000)


class QuoteStatusUpdateModel(CamelModel):
    # Plain string: unknown values are rejected by the lifecycle engine
    status: str
    notes: str | None = Field(None, max_length=1000)


class QuoteAssignModel(CamelModel):
    assigned_to: UUID | None = None


class QuoteAmountModel(CamelModel):
    quote_amount: Decimal = Field(..., gt=0, max_digits=15, decimal_places=2)


class QuoteStatsModel(CamelModel):
    total_quotes: int = 0
    pending_quotes: int = 0
    in_progress_quotes: int = 0
    quoted_quotes: int = 0
    approved_quotes: int = 0
    rejected_quotes: int = 0
    cancelled_quotes: int = 0


class StatusCountModel(CamelModel):
    status: QuoteStatusEnum
    count: int


class MonthlyCountModel(CamelModel):
    month: str
    count: int


class QuoteDashboardModel(CamelModel):
    stats: QuoteStatsModel
    status_stats: list[StatusCountModel]
    monthly_stats: list[MonthlyCountModel]
    recent_quotes: list[QuoteModel]


class QuoteChangeModel(CamelModel):
    quote: QuoteModel
    stats: QuoteStatsModel
