from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator, model_validator
from slugify import slugify

from app.core.dto.common import CamelModel
from app.core.dto.localized import LocalizedList, LocalizedText
from app.utils.enums import LocaleEnum, ProductStatusEnum


SLUG_PATTERN = r"^[a-z0-9-]+$"


class ProductCreateModel(CamelModel):
    slug: str | None = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    name: LocalizedText
    short_description: LocalizedText = LocalizedText()
    features: LocalizedList = LocalizedList()
    applications: LocalizedList = LocalizedList()
    status: ProductStatusEnum = ProductStatusEnum.ACTIVE
    featured: bool = False
    sort_order: int = Field(0, ge=0)

    @field_validator("name")
    @classmethod
    def name_required(cls, value: LocalizedText) -> LocalizedText:
        if value.is_empty():
            raise ValueError("Product name is required in at least one locale")
        return value

    @model_validator(mode="after")
    def derive_slug(self) -> "ProductCreateModel":
        if self.slug is None:
            # Persian names are transliterated
            self.slug = slugify(self.name.en or self.name.fa, max_length=255) or None
        if self.slug is None:
            raise ValueError("Slug cannot be derived from the product name")
        return self


class ProductUpdateModel(CamelModel):
    slug: str | None = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    name: LocalizedText | None = None
    short_description: LocalizedText | None = None
    features: LocalizedList | None = None
    applications: LocalizedList | None = None
    status: ProductStatusEnum | None = None
    featured: bool | None = None
    sort_order: int | None = Field(None, ge=0)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: LocalizedText | None) -> LocalizedText | None:
        if value is not None and value.is_empty():
            raise ValueError("Product name cannot be empty in every locale")
        return value

    @model_validator(mode="after")
    def reject_nulls(self) -> "ProductUpdateModel":
        # Every product column is required; leave a field out to keep it
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self


class ProductModel(CamelModel):
    id: UUID
    slug: str
    name: LocalizedText
    short_description: LocalizedText
    features: LocalizedList
    applications: LocalizedList
    status: ProductStatusEnum
    featured: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class LocalizedProductModel(CamelModel):
    """Single-locale projection of a product for the public site."""
    id: UUID
    slug: str
    locale: LocaleEnum
    name: str
    short_description: str
    features: list[str]
    applications: list[str]
    featured: bool

    @classmethod
    def from_product(cls, product: ProductModel, locale: LocaleEnum) -> "LocalizedProductModel":
        return cls(
            id=product.id,
            slug=product.slug,
            locale=locale,
            name=product.name.resolve(locale),
            short_description=product.short_description.resolve(locale),
            features=product.features.resolve(locale),
            applications=product.applications.resolve(locale),
            featured=product.featured,
        )
