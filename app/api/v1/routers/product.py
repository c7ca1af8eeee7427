from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import get_list_query, get_product_service
from app.core.dto.common import ListQuery, ResponseEnvelope
from app.core.dto.product import LocalizedProductModel, ProductModel
from app.core.services.product_service import ProductService
from app.utils.enums import LocaleEnum


router = APIRouter()


@router.get(
    "",
    summary="List active products",
    description="With `lang` every item carries only that locale's content",
)
async def list_products(
    query: Annotated[ListQuery, Depends(get_list_query)],
    service: Annotated[ProductService, Depends(get_product_service)],
    lang: LocaleEnum | None = Query(None),
) -> ResponseEnvelope[list[LocalizedProductModel] | list[ProductModel]]:
    products, pagination = (await service.list_public(query, lang)).unwrap()
    return ResponseEnvelope(data=products, pagination=pagination)


@router.get(
    "/{slug}",
    summary="Get active product by slug",
)
async def get_product(
    slug: str,
    service: Annotated[ProductService, Depends(get_product_service)],
    lang: LocaleEnum | None = Query(None),
) -> ResponseEnvelope[LocalizedProductModel | ProductModel]:
    return ResponseEnvelope(data=(await service.get_public_by_slug(slug, lang)).unwrap())
