"""Ordered fallback chain over credential sources.

Each login attempt tries the sources in order and stops at the first one
that verifies. A source that is unreachable is treated like a source that
does not know the identifier, so an outage of the primary store does not
lock administrators out while a fallback credential is configured. Such
outages are logged at WARNING.

Callers only ever see ``AuthenticatedPrincipal`` or ``Rejected``; whether
the identifier was unknown or the secret was wrong is never exposed.
"""

from __future__ import annotations

import logging
from typing import Sequence

from nrfdesk.auth.models import REJECTED, AuthenticatedPrincipal, Rejected, SourceResult
from nrfdesk.auth.sources import (
    CredentialSource,
    FallbackCredential,
    StaticCredentialSource,
    StoreCredentialSource,
)
from nrfdesk.core.config import AuthConfig
from nrfdesk.core.types import AuthFailure
from nrfdesk.repositories.protocols import CredentialStore

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Authenticates an identifier/secret pair against ordered sources."""

    def __init__(self, sources: Sequence[CredentialSource]) -> None:
        self._sources = list(sources)

    @classmethod
    def from_config(cls, store: CredentialStore, config: AuthConfig) -> CredentialResolver:
        """Build the standard chain: primary store, then configured fallback."""
        sources: list[CredentialSource] = [
            StoreCredentialSource(store, bcrypt_rounds=config.bcrypt_rounds)
        ]
        fallback = FallbackCredential.from_config(config)
        if fallback is not None:
            sources.append(StaticCredentialSource(fallback))
        return cls(sources)

    @property
    def sources(self) -> list[CredentialSource]:
        return list(self._sources)

    async def authenticate(
        self, identifier: str, secret: str
    ) -> AuthenticatedPrincipal | Rejected:
        if not identifier or not identifier.strip() or not secret:
            return REJECTED

        for source in self._sources:
            try:
                result = await source.verify(identifier, secret)
            except Exception as exc:
                logger.warning("Source %s raised %s", source.name, exc.__class__.__name__)
                result = SourceResult.failed(AuthFailure.SOURCE_UNAVAILABLE)

            if result.principal is not None:
                logger.info("Authenticated %s via %s", result.principal.id, source.name)
                return result.principal

            if result.failure == AuthFailure.SOURCE_UNAVAILABLE:
                logger.warning("Source %s unavailable, falling through", source.name)
            else:
                logger.debug("Source %s: %s", source.name, result.failure)

        logger.info("Login rejected after %d source(s)", len(self._sources))
        return REJECTED
