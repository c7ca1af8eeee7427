from sqlalchemy import Enum as SQLEnum, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from app.infrastructure.database.models.base import Base
from app.utils.enums import ContactSourceEnum, ContactStatusEnum


if TYPE_CHECKING:
    from app.infrastructure.database.models.quote_request import QuoteRequest


class Contact(Base):
    __tablename__ = "contacts"

    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), index=True)
    phone: Mapped[str | None] = mapped_column(String(50))
    company: Mapped[str | None] = mapped_column(String(255))
    subject: Mapped[str] = mapped_column(String(255))
    message: Mapped[str] = mapped_column(Text)

    gdpr_consent: Mapped[bool] = mapped_column(default=False)
    marketing_consent: Mapped[bool] = mapped_column(default=False)
    source: Mapped[ContactSourceEnum] = mapped_column(
        SQLEnum(ContactSourceEnum, native_enum=False, length=50, values_callable=lambda e: [m.value for m in e]),
        default=ContactSourceEnum.CONTACT_FORM,
    )
    status: Mapped[ContactStatusEnum] = mapped_column(
        SQLEnum(ContactStatusEnum, native_enum=False, length=50, values_callable=lambda e: [m.value for m in e]),
        default=ContactStatusEnum.NEW,
        index=True,
    )

    quotes: Mapped[list["QuoteRequest"]] = relationship(
        back_populates="contact",
        cascade="all, delete-orphan",
        order_by="QuoteRequest.created_at.desc()",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<Contact(email='{self.email}', status={self.status.value})>"
