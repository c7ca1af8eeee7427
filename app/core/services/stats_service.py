from datetime import datetime, timezone

from app.core.dto.contact import ContactStatsModel
from app.core.dto.quote import (
    MonthlyCountModel,
    QuoteDashboardModel,
    QuoteModel,
    QuoteStatsModel,
    StatusCountModel,
)
from app.core.repositories.contact_repository import ContactRepository
from app.core.repositories.quote_repository import QuoteRepository
from app.infrastructure.database.models.contact import Contact
from app.utils.enums import ContactStatusEnum, QuoteStatusEnum


RECENT_QUOTES_LIMIT = 10
MONTHLY_WINDOW = 12


def last_months(now: datetime, count: int) -> list[tuple[int, int]]:
    """(year, month) pairs for the `count` months ending with `now`'s month, oldest first."""
    months = []
    year, month = now.year, now.month
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(months))


class StatsService:
    """
    Summary counts over persisted quotes and contacts.

    Nothing is cached: every call runs a fresh GROUP BY, so numbers returned
    right after a mutation already reflect it.
    """

    def __init__(
        self,
        quote_repository: QuoteRepository,
        contact_repository: ContactRepository | None = None,
    ):
        self.quote_repository = quote_repository
        self.contact_repository = contact_repository

    async def compute(self) -> QuoteStatsModel:
        return self._quote_stats(await self.quote_repository.status_counts())

    @staticmethod
    def _quote_stats(counts: dict[QuoteStatusEnum, int]) -> QuoteStatsModel:
        return QuoteStatsModel(
            total_quotes=sum(counts.values()),
            pending_quotes=counts.get(QuoteStatusEnum.PENDING, 0),
            in_progress_quotes=counts.get(QuoteStatusEnum.IN_PROGRESS, 0),
            quoted_quotes=counts.get(QuoteStatusEnum.QUOTED, 0),
            approved_quotes=counts.get(QuoteStatusEnum.APPROVED, 0),
            rejected_quotes=counts.get(QuoteStatusEnum.REJECTED, 0),
            cancelled_quotes=counts.get(QuoteStatusEnum.CANCELLED, 0),
        )

    async def dashboard(self, now: datetime | None = None) -> QuoteDashboardModel:
        now = now or datetime.now(timezone.utc)
        counts = await self.quote_repository.status_counts()

        months = last_months(now, MONTHLY_WINDOW)
        first_year, first_month = months[0]
        since = datetime(first_year, first_month, 1, tzinfo=timezone.utc)
        created = await self.quote_repository.get_created_since(since)

        per_month = {month: 0 for month in months}
        for created_at in created:
            key = (created_at.year, created_at.month)
            if key in per_month:
                per_month[key] += 1

        recent = await self.quote_repository.get_recent(RECENT_QUOTES_LIMIT)

        return QuoteDashboardModel(
            stats=self._quote_stats(counts),
            status_stats=[
                StatusCountModel(status=status, count=counts.get(status, 0))
                for status in QuoteStatusEnum
            ],
            monthly_stats=[
                MonthlyCountModel(month=f"{year:04d}-{month:02d}", count=count)
                for (year, month), count in per_month.items()
            ],
            recent_quotes=[
                QuoteModel.model_validate(quote, from_attributes=True)
                for quote in recent
            ],
        )

    async def contact_stats(self) -> ContactStatsModel:
        counts = await self.contact_repository.count_by(Contact.status)
        return ContactStatsModel(
            total=sum(counts.values()),
            new=counts.get(ContactStatusEnum.NEW, 0),
            in_progress=counts.get(ContactStatusEnum.IN_PROGRESS, 0),
            resolved=counts.get(ContactStatusEnum.RESOLVED, 0),
            closed=counts.get(ContactStatusEnum.CLOSED, 0),
        )
