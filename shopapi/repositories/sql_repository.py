"""Data access for products and users backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Generic, Optional, TypeVar

from sqlalchemy import delete, func, literal, select
from sqlalchemy.exc import IntegrityError

from shopapi.db.models import ProductRow, UserRow
from shopapi.db.session import get_session
from shopapi.domain.models import Product, User

T = TypeVar("T", Product, User)

# ids are stored as signed 64-bit integers; anything outside cannot exist
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1

LIKE_ESCAPE = "/"


def _escape_like(value: str) -> str:
    """Make ``%`` and ``_`` match themselves inside a LIKE pattern."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class DuplicateEmailError(Exception):
    """Raised when the users.email unique constraint rejects a write."""

    def __init__(self, email: str):
        super().__init__(f"Email already registered: {email}")
        self.email = email


class SQLRepository(Generic[T]):
    """find/save/delete over one table; subclasses supply the row mapping."""

    row_type: type

    def _to_entity(self, row) -> T:
        raise NotImplementedError

    def _new_row(self, entity: T):
        raise NotImplementedError

    def _copy_into(self, row, entity: T) -> None:
        raise NotImplementedError

    def find_all(self) -> list[T]:
        with get_session() as session:
            rows = session.execute(select(self.row_type).order_by(self.row_type.id)).scalars().all()
            return [self._to_entity(row) for row in rows]

    def find_by_id(self, entity_id: int) -> Optional[T]:
        if not MIN_ID <= entity_id <= MAX_ID:
            return None
        with get_session() as session:
            row = session.get(self.row_type, entity_id)
            return self._to_entity(row) if row else None

    def count(self) -> int:
        with get_session() as session:
            return session.execute(select(func.count()).select_from(self.row_type)).scalar_one()

    def save(self, entity: T) -> T:
        """Insert when ``entity.id`` is None, otherwise overwrite the row with that id."""
        with get_session() as session:
            row = session.get(self.row_type, entity.id) if entity.id is not None else None
            if row is None:
                row = self._new_row(entity)
                session.add(row)
            else:
                self._copy_into(row, entity)
            session.commit()
            session.refresh(row)
            return self._to_entity(row)

    def delete(self, entity: T) -> None:
        with get_session() as session:
            session.execute(delete(self.row_type).where(self.row_type.id == entity.id))
            session.commit()


class ProductRepository(SQLRepository[Product]):
    row_type = ProductRow

    def _to_entity(self, row: ProductRow) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            description=row.description,
            price=Decimal(row.price),
            stock=int(row.stock),
        )

    def _new_row(self, entity: Product) -> ProductRow:
        return ProductRow(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            price=entity.price,
            stock=entity.stock,
        )

    def _copy_into(self, row: ProductRow, entity: Product) -> None:
        row.name = entity.name
        row.description = entity.description
        row.price = entity.price
        row.stock = entity.stock

    def find_by_name_containing_ignore_case(self, substring: str) -> list[Product]:
        # both sides are folded by the database so they always agree
        pattern = "%" + _escape_like(substring or "") + "%"
        with get_session() as session:
            stmt = (
                select(ProductRow)
                .where(func.lower(ProductRow.name).like(func.lower(literal(pattern)), escape=LIKE_ESCAPE))
                .order_by(ProductRow.id)
            )
            return [self._to_entity(row) for row in session.execute(stmt).scalars().all()]


class UserRepository(SQLRepository[User]):
    row_type = UserRow

    def _to_entity(self, row: UserRow) -> User:
        created_at = row.created_at
        # SQLite drops the offset; values are always written in UTC
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return User(id=row.id, name=row.name, email=row.email, created_at=created_at)

    def _new_row(self, entity: User) -> UserRow:
        return UserRow(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            created_at=datetime.now(timezone.utc),
        )

    def _copy_into(self, row: UserRow, entity: User) -> None:
        row.name = entity.name
        row.email = entity.email

    def find_by_email(self, email: str) -> Optional[User]:
        with get_session() as session:
            stmt = select(UserRow).where(UserRow.email == email)
            row = session.execute(stmt).scalar_one_or_none()
            return self._to_entity(row) if row else None

    def save(self, entity: User) -> User:
        try:
            return super().save(entity)
        except IntegrityError as exc:
            # backend messages differ; ask the table who owns the email instead
            owner = self.find_by_email(entity.email)
            if owner is None or owner.id == entity.id:
                raise
            raise DuplicateEmailError(entity.email) from exc
