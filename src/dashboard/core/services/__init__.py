"""Core services exports."""

from .api_client import ApiClient, RequestContext
from .auth_service import AuthService
from .category_service import CategoryService
from .product_service import ProductService

__all__ = [
    "ApiClient",
    "AuthService",
    "CategoryService",
    "ProductService",
    "RequestContext",
]
