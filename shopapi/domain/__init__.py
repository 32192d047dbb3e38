"""Domain values shared by repositories, services and routers."""

from .models import Product, User

__all__ = ["Product", "User"]
