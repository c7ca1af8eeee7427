from sqlalchemy import ColumnElement, String, cast, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.repositories.base import SqlAlchemyRepository, contains
from app.infrastructure.database.models.product import Product
from app.utils.enums import ProductStatusEnum


class ProductRepository(SqlAlchemyRepository[Product]):
    sort_fields = {
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "slug": "slug",
        "sortOrder": "sort_order",
        "status": "status",
        "featured": "featured",
    }

    def __init__(self, session: AsyncSession):
        super().__init__(session, Product)

    def _search_condition(self, term: str) -> ColumnElement[bool]:
        # Localized columns hold {"en": ..., "fa": ...}; matching the serialized
        # document covers every locale at once
        return or_(
            contains(cast(Product.name, String), term),
            contains(cast(Product.short_description, String), term),
            contains(Product.slug, term),
        )

    async def get_by_slug(self, slug: str, status: ProductStatusEnum | None = None) -> Product | None:
        query = select(Product).where(Product.slug == slug)
        if status is not None:
            query = query.where(Product.status == status)
        result = await self._run(self.session.execute(query))
        return result.scalars().one_or_none()
