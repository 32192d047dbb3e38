"""
User CRUD with email uniqueness.

Creation looks the email up before saving. That check is not atomic:
two concurrent creates with the same email can both pass it. The
users.email UNIQUE constraint catches the loser, whose save surfaces
as ``EmailAlreadyRegisteredError`` exactly like a failed pre-check.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from shopapi.core.metrics import ServiceMetrics
from shopapi.domain.models import User
from shopapi.repositories.sql_repository import DuplicateEmailError, UserRepository
from shopapi.services.errors import EmailAlreadyRegisteredError, ResourceNotFoundError

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, repository: UserRepository, metrics: ServiceMetrics) -> None:
        self.repository = repository
        self.metrics = metrics

    def list_users(self) -> list[User]:
        self.metrics.record_request()
        return self.repository.find_all()

    def get_user(self, user_id: int) -> User:
        self.metrics.record_request()
        return self._require(user_id)

    def create_user(self, user: User) -> User:
        self.metrics.record_request()
        if self.repository.find_by_email(user.email) is not None:
            logger.warning("Rejected user create: %s already registered", user.email)
            raise EmailAlreadyRegisteredError(user.email)
        saved = self._save(replace(user, id=None, created_at=None))
        self.metrics.record_created()
        logger.info("Created user %s <%s>", saved.id, saved.email)
        return saved

    def update_user(self, user_id: int, changes: User) -> User:
        self.metrics.record_request()
        current = self._require(user_id)
        saved = self._save(replace(current, name=changes.name, email=changes.email))
        logger.info("Updated user %s", saved.id)
        return saved

    def delete_user(self, user_id: int) -> None:
        self.metrics.record_request()
        current = self._require(user_id)
        self.repository.delete(current)
        logger.info("Deleted user %s", user_id)

    def _require(self, user_id: int) -> User:
        user = self.repository.find_by_id(user_id)
        if user is None:
            logger.info("User %s not found", user_id)
            raise ResourceNotFoundError("User", user_id)
        return user

    def _save(self, user: User) -> User:
        try:
            return self.repository.save(user)
        except DuplicateEmailError as exc:
            logger.warning("Email %s rejected by unique constraint", exc.email)
            raise EmailAlreadyRegisteredError(exc.email) from exc
