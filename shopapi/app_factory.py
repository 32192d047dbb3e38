"""Entry points for the product, user and gateway FastAPI apps."""
from shopapi.product_app import app as product_app, create_product_app
from shopapi.user_app import app as user_app, create_user_app
from shopapi.gateway_app import app as gateway_app, create_gateway_app

__all__ = [
    "product_app",
    "user_app",
    "gateway_app",
    "create_product_app",
    "create_user_app",
    "create_gateway_app",
]
