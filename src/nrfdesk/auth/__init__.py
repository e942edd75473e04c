"""Authentication for nrf-desk.

Credential verification runs through an ordered chain of sources (primary
store, then an optional configured fallback); see ``resolver``.
"""

from nrfdesk.auth.models import (
    REJECTED,
    AuthenticatedPrincipal,
    Credential,
    Rejected,
)

__all__ = [
    "REJECTED",
    "AuthenticatedPrincipal",
    "Credential",
    "Rejected",
]
