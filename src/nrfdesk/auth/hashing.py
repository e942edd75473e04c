"""Password hashing helpers built on bcrypt."""

from __future__ import annotations

import functools
import hmac
import logging

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of its input
MAX_SECRET_BYTES = 72


def secret_too_long(secret: str) -> bool:
    """True when ``secret`` exceeds what bcrypt can hash."""
    return len(secret.encode("utf-8")) > MAX_SECRET_BYTES


def hash_secret(secret: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Return a bcrypt hash of ``secret``.

    Raises ValueError when the secret is longer than ``MAX_SECRET_BYTES``.
    """
    if secret_too_long(secret):
        raise ValueError(f"secret is longer than {MAX_SECRET_BYTES} bytes")
    return bcrypt.hashpw(secret.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_secret(secret: str, secret_hash: str) -> bool:
    """Check ``secret`` against a bcrypt hash.

    Over-long secrets and malformed or non-bcrypt hashes never verify.
    """
    if secret_too_long(secret):
        return False
    try:
        return bcrypt.checkpw(secret.encode("utf-8"), secret_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored secret hash is not a valid bcrypt hash")
        return False


def plaintext_matches(secret: str, expected: str) -> bool:
    """Compare two plaintext secrets in constant time."""
    return hmac.compare_digest(secret.encode("utf-8"), expected.encode("utf-8"))


@functools.lru_cache(maxsize=4)
def dummy_hash(rounds: int = DEFAULT_ROUNDS) -> str:
    """A throwaway hash used to spend verification time on unknown accounts."""
    return hash_secret("nrfdesk-unknown-account", rounds=rounds)
