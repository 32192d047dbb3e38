"""
Repository behaviour against a temporary SQLite database.
"""
from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from shopapi.domain.models import Product, User
from shopapi.repositories.sql_repository import DuplicateEmailError, ProductRepository, UserRepository


def _product(name: str, **kw) -> Product:
    fields = {"description": None, "price": Decimal("1.00"), "stock": 1}
    fields.update(kw)
    return Product(name=name, **fields)


def test_save_assigns_fresh_ids_and_find_all_is_ordered(temp_db):
    repo = ProductRepository()
    first = repo.save(_product("Lamp", description="Desk lamp", price=Decimal("19.90"), stock=4))
    second = repo.save(_product("Chair"))

    assert first.id is not None and second.id is not None
    assert first.id != second.id
    assert first.description == "Desk lamp"
    assert first.price == Decimal("19.90")
    assert [p.id for p in repo.find_all()] == [first.id, second.id]
    assert repo.count() == 2


def test_save_with_id_overwrites_existing_row(temp_db):
    repo = ProductRepository()
    saved = repo.save(_product("Lamp"))

    updated = repo.save(replace(saved, name="Floor lamp", stock=9))

    assert updated.id == saved.id
    assert repo.find_by_id(saved.id) == updated
    assert repo.count() == 1


def test_find_by_id_missing_returns_none(temp_db):
    assert ProductRepository().find_by_id(404) is None
    assert UserRepository().find_by_id(404) is None


def test_delete_removes_row(temp_db):
    repo = ProductRepository()
    saved = repo.save(_product("Lamp"))
    repo.delete(saved)
    assert repo.find_by_id(saved.id) is None
    assert repo.find_all() == []


def test_name_search_is_case_insensitive_substring(temp_db):
    repo = ProductRepository()
    red = repo.save(_product("Red Apple"))
    green = repo.save(_product("green APPLE"))
    repo.save(_product("Banana"))

    assert [p.id for p in repo.find_by_name_containing_ignore_case("apple")] == [red.id, green.id]
    assert [p.id for p in repo.find_by_name_containing_ignore_case("ED AP")] == [red.id]
    assert repo.find_by_name_containing_ignore_case("cherry") == []


def test_name_search_empty_matches_everything(temp_db):
    repo = ProductRepository()
    for name in ("A", "B", "C"):
        repo.save(_product(name))
    assert len(repo.find_by_name_containing_ignore_case("")) == 3


def test_name_search_treats_wildcards_literally(temp_db):
    repo = ProductRepository()
    pure = repo.save(_product("100%_pure juice"))
    repo.save(_product("Plain juice"))

    assert [p.id for p in repo.find_by_name_containing_ignore_case("%")] == [pure.id]
    assert [p.id for p in repo.find_by_name_containing_ignore_case("_")] == [pure.id]


def test_user_created_at_is_stamped_once(temp_db):
    repo = UserRepository()
    saved = repo.save(User(name="Ada", email="ada@example.com"))
    assert saved.created_at is not None
    assert saved.created_at.tzinfo is not None

    renamed = repo.save(replace(saved, name="Ada L.", created_at=None))
    assert renamed.created_at == saved.created_at
    assert renamed.name == "Ada L."


def test_find_by_email_is_exact(temp_db):
    repo = UserRepository()
    saved = repo.save(User(name="Ada", email="ada@example.com"))

    assert repo.find_by_email("ada@example.com") == saved
    assert repo.find_by_email("ADA@example.com") is None
    assert repo.find_by_email("ada@example") is None


def test_unique_constraint_rejects_duplicate_email(temp_db):
    repo = UserRepository()
    repo.save(User(name="Ada", email="ada@example.com"))

    with pytest.raises(DuplicateEmailError) as excinfo:
        repo.save(User(name="Other", email="ada@example.com"))

    assert excinfo.value.email == "ada@example.com"
    assert repo.count() == 1


def test_name_search_folds_non_ascii_letters(temp_db):
    repo = ProductRepository()
    eclair = repo.save(_product("Éclair au chocolat"))
    repo.save(_product("Croissant"))

    assert [p.id for p in repo.find_by_name_containing_ignore_case("Éclair")] == [eclair.id]
    assert [p.id for p in repo.find_by_name_containing_ignore_case("éCLAIR")] == [eclair.id]
    assert [p.id for p in repo.find_by_name_containing_ignore_case("CHOCOLAT")] == [eclair.id]


def test_name_search_treats_escape_character_literally(temp_db):
    repo = ProductRepository()
    cable = repo.save(_product("USB-C/HDMI cable"))
    repo.save(_product("USB-C cable"))

    assert [p.id for p in repo.find_by_name_containing_ignore_case("c/h")] == [cable.id]


def test_find_by_id_outside_integer_range_is_none(temp_db):
    repo = ProductRepository()
    repo.save(_product("Lamp"))

    assert repo.find_by_id(2**63) is None
    assert repo.find_by_id(-(2**63) - 1) is None
    assert UserRepository().find_by_id(10**20) is None


def test_other_integrity_errors_are_not_reported_as_duplicates(temp_db):
    repo = UserRepository()

    with pytest.raises(IntegrityError):
        repo.save(User(name=None, email="ada@example.com"))

    assert repo.count() == 0
