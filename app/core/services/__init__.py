from app.core.services.auth_service import AuthService
from app.core.services.contact_service import ContactService
from app.core.services.export_service import ExportService
from app.core.services.product_service import ProductService
from app.core.services.quote_service import QuoteService
from app.core.services.result import ServiceResult
from app.core.services.stats_service import StatsService
from app.core.services.user_service import UserService


__all__ = [
    "AuthService",
    "ContactService",
    "ExportService",
    "ProductService",
    "QuoteService",
    "ServiceResult",
    "StatsService",
    "UserService",
]
