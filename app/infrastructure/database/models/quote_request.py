from decimal import Decimal
from uuid import UUID

from sqlalchemy import Enum as SQLEnum, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from app.infrastructure.database.models.base import Base
from app.utils.enums import ApplicationAreaEnum, QuoteStatusEnum


if TYPE_CHECKING:
    from app.infrastructure.database.models.contact import Contact
    from app.infrastructure.database.models.user import User


class QuoteRequest(Base):
    __tablename__ = "quote_requests"

    quote_number: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    contact_id: Mapped[UUID] = mapped_column(ForeignKey("contacts.id", ondelete="CASCADE"), index=True)
    status: Mapped[QuoteStatusEnum] = mapped_column(
        SQLEnum(QuoteStatusEnum, native_enum=False, length=50, values_callable=lambda e: [m.value for m in e]),
        default=QuoteStatusEnum.PENDING,
        index=True,
    )

    industry: Mapped[str | None] = mapped_column(String(100))
    application_area: Mapped[ApplicationAreaEnum | None] = mapped_column(
        SQLEnum(ApplicationAreaEnum, native_enum=False, length=50, values_callable=lambda e: [m.value for m in e]),
    )
    required_capacity: Mapped[str | None] = mapped_column(String(100))
    budget: Mapped[Decimal | None] = mapped_column(Numeric(15, 2))
    timeline: Mapped[str | None] = mapped_column(String(100))
    quote_amount: Mapped[Decimal | None] = mapped_column(Numeric(15, 2))
    notes: Mapped[str | None] = mapped_column(Text)

    assigned_to_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    contact: Mapped["Contact"] = relationship(back_populates="quotes", lazy="selectin")
    assigned_to: Mapped["User | None"] = relationship(lazy="selectin")

    def __repr__(self):
        return f"QuoteRequest({self.quote_number}, {self.status.value})"
