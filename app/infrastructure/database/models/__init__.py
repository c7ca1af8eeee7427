from .base import Base
from .contact import Contact
from .quote_request import QuoteRequest
from .product import Product
from .user import User


__all__ = [
    "Base",
    "Contact",
    "QuoteRequest",
    "Product",
    "User",
]
