"""Credential sources consulted by the resolver.

A source answers one question: does this identifier/secret pair verify?
It reports the answer as a ``SourceResult`` and never raises.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from nrfdesk.auth.hashing import DEFAULT_ROUNDS, dummy_hash, plaintext_matches, verify_secret
from nrfdesk.auth.models import AuthenticatedPrincipal, SourceResult
from nrfdesk.core.config import AuthConfig
from nrfdesk.core.types import AuthFailure
from nrfdesk.repositories import resolve
from nrfdesk.repositories.protocols import CredentialStore

logger = logging.getLogger(__name__)


@runtime_checkable
class CredentialSource(Protocol):
    """Protocol for anything the resolver can try in sequence."""

    name: str

    async def verify(self, identifier: str, secret: str) -> SourceResult: ...


class StoreCredentialSource:
    """Verifies against a persistent credential store using bcrypt.

    On success the account's last-login timestamp is updated. The returned
    principal carries the timestamp from before this login.
    """

    name = "primary_store"

    def __init__(self, store: CredentialStore, bcrypt_rounds: int = DEFAULT_ROUNDS) -> None:
        self._store = store
        self._rounds = bcrypt_rounds

    async def verify(self, identifier: str, secret: str) -> SourceResult:
        try:
            credential = await resolve(self._store.find_by_identifier(identifier))
            if credential is None:
                # Same bcrypt cost as a real account
                verify_secret(secret, dummy_hash(self._rounds))
                return SourceResult.failed(AuthFailure.NOT_FOUND)

            if not verify_secret(secret, credential.secret_hash):
                return SourceResult.failed(AuthFailure.MISMATCH)

            await resolve(
                self._store.touch_last_authenticated(credential.id, datetime.now(timezone.utc))
            )
        except Exception as exc:
            logger.warning(
                "Credential source %s unavailable: %s", self.name, exc.__class__.__name__
            )
            return SourceResult.failed(AuthFailure.SOURCE_UNAVAILABLE)

        return SourceResult.success(
            AuthenticatedPrincipal(
                id=credential.id,
                email=credential.identifier,
                last_login=credential.last_login,
                source=self.name,
            )
        )


class FallbackCredential(BaseModel):
    """A single statically configured account."""

    identifier: str
    secret: str | None = None
    secret_hash: str | None = None
    principal_id: str = "fallback-admin"

    @classmethod
    def from_config(cls, config: AuthConfig) -> FallbackCredential | None:
        """Build the fallback from settings, or None when it is not configured."""
        if not config.fallback_identifier:
            return None
        if not config.fallback_secret_hash and not config.fallback_secret:
            logger.warning("Fallback identifier configured without a secret; fallback disabled")
            return None
        return cls(
            identifier=config.fallback_identifier,
            secret=config.fallback_secret,
            secret_hash=config.fallback_secret_hash,
            principal_id=config.fallback_principal_id,
        )


class StaticCredentialSource:
    """Verifies against the configured fallback credential.

    Uses the bcrypt hash when one is configured; plaintext comparison is a
    degraded mode used only when no hash is available.
    """

    name = "static_fallback"

    def __init__(self, credential: FallbackCredential) -> None:
        self._credential = credential
        if not credential.secret_hash:
            logger.warning(
                "Fallback credential has no hash configured; using plaintext comparison"
            )

    async def verify(self, identifier: str, secret: str) -> SourceResult:
        expected = self._credential.identifier.strip().lower()
        if not plaintext_matches(identifier.strip().lower(), expected):
            return SourceResult.failed(AuthFailure.NOT_FOUND)

        if self._credential.secret_hash:
            valid = verify_secret(secret, self._credential.secret_hash)
        else:
            valid = plaintext_matches(secret, self._credential.secret or "")

        if not valid:
            return SourceResult.failed(AuthFailure.MISMATCH)

        return SourceResult.success(
            AuthenticatedPrincipal(
                id=self._credential.principal_id,
                email=self._credential.identifier,
                last_login=None,
                source=self.name,
            )
        )
