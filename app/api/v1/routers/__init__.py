from fastapi import APIRouter

from app.api.v1.routers.admin.product import router as admin_product_router
from app.api.v1.routers.contact import router as contact_router
from app.api.v1.routers.health import router as health_router
from app.api.v1.routers.product import router as product_router
from app.api.v1.routers.quote import router as quote_router
from app.api.v1.routers.user import router as user_router


api_v1_routers = APIRouter(prefix="/api/v1")
api_v1_routers.include_router(contact_router, prefix="/contact", tags=["contact"])
api_v1_routers.include_router(quote_router, prefix="/quotes", tags=["quotes"])
api_v1_routers.include_router(product_router, prefix="/products", tags=["products"])
api_v1_routers.include_router(admin_product_router, prefix="/admin/products", tags=["admin"])
api_v1_routers.include_router(user_router, prefix="/users", tags=["users"])
api_v1_routers.include_router(health_router, prefix="/health", tags=["health"])
