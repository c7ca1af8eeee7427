from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.api.v1.dependencies import (
    get_list_query,
    get_product_service,
    get_staff_user,
    require_admin,
)
from app.core.dto.common import ListQuery, ResponseEnvelope
from app.core.dto.product import ProductCreateModel, ProductModel, ProductUpdateModel
from app.core.services.product_service import ProductService


router = APIRouter(dependencies=[Depends(get_staff_user)])


@router.get(
    "",
    summary="List products in every status",
)
async def list_products(
    query: Annotated[ListQuery, Depends(get_list_query)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ResponseEnvelope[list[ProductModel]]:
    products, pagination = (await service.list(query)).unwrap()
    return ResponseEnvelope(data=products, pagination=pagination)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
)
async def create_product(
    data: ProductCreateModel,
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ResponseEnvelope[ProductModel]:
    product = (await service.create(data)).unwrap()
    return ResponseEnvelope(data=product, message="Product created")


@router.get(
    "/{product_id}",
    summary="Get product",
)
async def get_product(
    product_id: UUID,
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ResponseEnvelope[ProductModel]:
    return ResponseEnvelope(data=(await service.get(product_id)).unwrap())


@router.put(
    "/{product_id}",
    summary="Update product",
)
async def update_product(
    product_id: UUID,
    data: ProductUpdateModel,
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ResponseEnvelope[ProductModel]:
    product = (await service.update(product_id, data)).unwrap()
    return ResponseEnvelope(data=product, message="Product updated")


@router.delete(
    "/{product_id}",
    summary="Delete product",
    dependencies=[Depends(require_admin)],
)
async def delete_product(
    product_id: UUID,
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ResponseEnvelope[None]:
    (await service.delete(product_id)).unwrap()
    return ResponseEnvelope(message="Product deleted")
