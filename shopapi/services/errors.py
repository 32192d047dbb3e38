"""Exceptions raised by the resource services."""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception for resource workflows."""


class ResourceNotFoundError(ServiceError):
    """Raised when the requested id is not in the store."""

    def __init__(self, resource: str, entity_id: int):
        super().__init__(f"{resource} {entity_id} not found")
        self.resource = resource
        self.entity_id = entity_id


class EmailAlreadyRegisteredError(ServiceError):
    """Raised when another user already owns the email."""

    def __init__(self, email: str):
        super().__init__(f"Email already registered: {email}")
        self.email = email
