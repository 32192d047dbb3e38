"""
Use cases for the product and user resources.

Each service receives its repository and its counters through the
constructor, counts every request before touching the store and raises
``shopapi.services.errors`` exceptions that the routers turn into
status codes.
"""

from .errors import EmailAlreadyRegisteredError, ResourceNotFoundError, ServiceError
from .product_service import ProductService
from .user_service import UserService

__all__ = [
    "EmailAlreadyRegisteredError",
    "ProductService",
    "ResourceNotFoundError",
    "ServiceError",
    "UserService",
]
