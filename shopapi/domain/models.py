"""
Immutable entity values.

Repositories hand these out instead of ORM rows; services build updated
copies with ``dataclasses.replace`` rather than mutating shared objects.
``id`` is ``None`` until the store assigns one, and so is a user's
``created_at``.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Product:
    name: str
    price: Decimal
    stock: int
    description: Optional[str] = None
    id: Optional[int] = None


@dataclass(frozen=True)
class User:
    name: str
    email: str
    created_at: Optional[datetime] = None
    id: Optional[int] = None
