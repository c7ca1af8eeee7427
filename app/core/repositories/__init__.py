from app.core.repositories.contact_repository import ContactRepository
from app.core.repositories.product_repository import ProductRepository
from app.core.repositories.quote_repository import QuoteRepository
from app.core.repositories.user_repository import UserRepository


__all__ = [
    "ContactRepository",
    "ProductRepository",
    "QuoteRepository",
    "UserRepository",
]
