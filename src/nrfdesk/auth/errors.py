"""Exceptions raised by credential stores and account management."""

from __future__ import annotations


class CredentialStoreError(Exception):
    """A credential store could not answer (connection lost, timeout, ...)."""


class AdminUserError(Exception):
    """
    Structured exception for admin-user operations.

    Usage:
        try:
            user = await service.get("42")
        except AdminUserError as e:
            if e.code == "ADMIN_USER_NOT_FOUND":
                handle_not_found()
    """

    _default_messages = {
        "ADMIN_USER_NOT_FOUND": "Admin user not found",
        "DUPLICATE_EMAIL": "Email already exists",
        "INVALID_EMAIL": "Invalid email format",
        "WEAK_PASSWORD": "Password is too short",
        "PASSWORD_TOO_LONG": "Password is too long",
        "MISSING_FIELDS": "Email and password are required",
        "NOTHING_TO_UPDATE": "At least one field (email or password) is required",
        "INVALID_PAGINATION": "Page and page size must be positive",
    }

    def __init__(self, code: str, message: str | None = None) -> None:
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"AdminUserError(code={self.code!r}, message={self.message!r})"
