from __future__ import annotations

from uuid import UUID

from sqlalchemy.exc import IntegrityError

from app.core.dto.common import ListQuery, PaginationModel
from app.core.dto.product import (
    LocalizedProductModel,
    ProductCreateModel,
    ProductModel,
    ProductUpdateModel,
)
from app.core.repositories.product_repository import ProductRepository
from app.core.services.listing import normalize_list_query
from app.core.services.result import ServiceResult
from app.infrastructure.database.models.product import Product
from app.infrastructure.errors.base import ConflictError, NotFoundError
from app.infrastructure.logging import get_logger
from app.utils.enums import LocaleEnum, ProductStatusEnum


logger = get_logger(__name__)


class ProductService:

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def _to_model(self, product: Product) -> ProductModel:
        return ProductModel.model_validate(product, from_attributes=True)

    async def list(self, query: ListQuery) -> ServiceResult[tuple[list[ProductModel], PaginationModel]]:
        normalized = normalize_list_query(query, self.repository, ProductStatusEnum)
        if not normalized.is_ok:
            return ServiceResult.failed(normalized.error)

        products, pagination = await self.repository.list(normalized.value)
        return ServiceResult.ok(([self._to_model(product) for product in products], pagination))

    async def list_public(
        self,
        query: ListQuery,
        locale: LocaleEnum | None = None,
    ) -> ServiceResult[tuple[list[ProductModel | LocalizedProductModel], PaginationModel]]:
        """Active products only; with `locale` each item is projected to that language."""
        result = await self.list(query.model_copy(update={"status": ProductStatusEnum.ACTIVE.value}))
        if not result.is_ok or locale is None:
            return result

        products, pagination = result.value
        return ServiceResult.ok((
            [LocalizedProductModel.from_product(product, locale) for product in products],
            pagination,
        ))

    async def get(self, product_id: UUID) -> ServiceResult[ProductModel]:
        product = await self.repository.get_item(product_id)
        if not product:
            return ServiceResult.failed(NotFoundError(f"Product {product_id} not found"))
        return ServiceResult.ok(self._to_model(product))

    async def get_public_by_slug(
        self,
        slug: str,
        locale: LocaleEnum | None = None,
    ) -> ServiceResult[ProductModel | LocalizedProductModel]:
        product = await self.repository.get_by_slug(slug, status=ProductStatusEnum.ACTIVE)
        if not product:
            return ServiceResult.failed(NotFoundError(f"Product '{slug}' not found"))

        model = self._to_model(product)
        if locale is not None:
            return ServiceResult.ok(LocalizedProductModel.from_product(model, locale))
        return ServiceResult.ok(model)

    async def create(self, data: ProductCreateModel) -> ServiceResult[ProductModel]:
        if await self.repository.get_by_slug(data.slug):
            return ServiceResult.failed(ConflictError(f"Slug '{data.slug}' is already taken"))

        product = Product(**data.model_dump())
        try:
            created = await self.repository.add_item(product)
        except IntegrityError:
            await self.repository.rollback()
            return ServiceResult.failed(ConflictError(f"Slug '{data.slug}' is already taken"))

        missing = [locale.value for locale in data.name.missing_locales()]
        logger.info("product_created", slug=created.slug, missing_name_locales=missing)
        return ServiceResult.ok(self._to_model(created))

    async def update(self, product_id: UUID, data: ProductUpdateModel) -> ServiceResult[ProductModel]:
        fields = data.model_dump(exclude_unset=True)

        product = await self.repository.get_for_update(product_id)
        if not product:
            await self.repository.rollback()
            return ServiceResult.failed(NotFoundError(f"Product {product_id} not found"))

        if "slug" in fields and fields["slug"] != product.slug:
            if await self.repository.get_by_slug(fields["slug"]):
                await self.repository.rollback()
                return ServiceResult.failed(ConflictError(f"Slug '{fields['slug']}' is already taken"))

        for name, value in fields.items():
            setattr(product, name, value)
        await self.repository.save_item(product)

        logger.info("product_updated", slug=product.slug, fields=sorted(fields))
        return ServiceResult.ok(self._to_model(product))

    async def delete(self, product_id: UUID) -> ServiceResult[None]:
        product = await self.repository.get_item(product_id)
        if not product:
            return ServiceResult.failed(NotFoundError(f"Product {product_id} not found"))

        slug = product.slug
        await self.repository.delete_item(product)
        logger.info("product_deleted", slug=slug)
        return ServiceResult.ok(None)
