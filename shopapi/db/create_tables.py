"""
Schema management for the products and users tables.

``create_all`` is idempotent and runs on every service startup;
``drop_all`` exists for tests and local resets. Run as a module to
create the schema against ``DATABASE_URL``::

    python -m shopapi.db.create_tables
"""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers the tables on Base.metadata

logger = logging.getLogger(__name__)


def create_all() -> None:
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    logger.debug("Schema ensured on %s", engine.url.render_as_string(hide_password=True))


def drop_all() -> None:
    Base.metadata.drop_all(bind=get_engine())


if __name__ == "__main__":
    try:
        create_all()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Could not create the products/users schema: {exc}") from exc
    print("products/users schema ready")
