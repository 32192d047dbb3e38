"""
Persistence adapters.

Each repository owns one table and translates rows to the immutable
values in ``shopapi.domain`` by hand; services never see ORM rows.
"""

from .sql_repository import DuplicateEmailError, ProductRepository, SQLRepository, UserRepository

__all__ = ["DuplicateEmailError", "ProductRepository", "SQLRepository", "UserRepository"]
