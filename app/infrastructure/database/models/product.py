from sqlalchemy import JSON, Enum as SQLEnum, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database.models.base import Base
from app.utils.enums import ProductStatusEnum


class Product(Base):
    __tablename__ = "products"

    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    # Localized content: {"en": ..., "fa": ...}
    name: Mapped[dict] = mapped_column(JSON)
    short_description: Mapped[dict] = mapped_column(JSON, default=dict)
    features: Mapped[dict] = mapped_column(JSON, default=dict)
    applications: Mapped[dict] = mapped_column(JSON, default=dict)

    status: Mapped[ProductStatusEnum] = mapped_column(
        SQLEnum(ProductStatusEnum, native_enum=False, length=50, values_callable=lambda e: [m.value for m in e]),
        default=ProductStatusEnum.ACTIVE,
        index=True,
    )
    featured: Mapped[bool] = mapped_column(default=False)
    sort_order: Mapped[int] = mapped_column(default=0)

    def __repr__(self):
        return f"<Product(slug='{self.slug}', status={self.status.value})>"
