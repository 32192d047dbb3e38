"""
Pydantic models for request and response bodies.

Payload models carry only the mutable fields; a client-supplied ``id``
or ``createdAt`` is ignored as an unknown field. Read models mirror the
stored entities, with ``createdAt`` in camelCase and ``price`` rendered
as a JSON number.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from shopapi.domain.models import Product, User


class ProductPayload(BaseModel):
    name: str = Field(..., examples=["Mechanical keyboard"])
    description: Optional[str] = Field(None, examples=["Tenkeyless, brown switches"])
    price: Decimal = Field(..., examples=["89.90"])
    stock: int = Field(..., examples=[12])

    def to_entity(self) -> Product:
        return Product(
            name=self.name,
            description=self.description,
            price=self.price,
            stock=self.stock,
        )


class ProductRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    stock: int

    @field_serializer("price", when_used="json")
    def _price_as_number(self, value: Decimal) -> float:
        return float(value)

    @classmethod
    def from_entity(cls, product: Product) -> "ProductRead":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            stock=product.stock,
        )


class UserPayload(BaseModel):
    name: str = Field(..., examples=["Ada Lovelace"])
    email: str = Field(..., examples=["ada@example.com"])

    def to_entity(self) -> User:
        return User(name=self.name, email=self.email)


class UserRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    email: str
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_entity(cls, user: User) -> "UserRead":
        return cls(id=user.id, name=user.name, email=user.email, created_at=user.created_at)
