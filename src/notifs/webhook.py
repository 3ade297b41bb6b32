"""Webhook signer and verifier bound to a single secret."""

from __future__ import annotations

import secrets
from collections.abc import Mapping

from notifs.common.logging import get_logger
from notifs.common.settings import Settings, get_settings
from notifs.signature import (
    DEFAULT_TOLERANCE_SECONDS,
    SIGNATURE_HEADER,
    generate_signature,
    verify_signature,
)

logger = get_logger(__name__)

SECRET_PREFIX = "whsec_"


def generate_secret(nbytes: int = 32) -> str:
    """
    Generate a new webhook secret.

    Rotating a secret means issuing a new one; signatures made with the old
    secret stop verifying.

    Args:
        nbytes: Number of random bytes (hex encoded)

    Returns:
        Secret of the form ``whsec_<hex>``
    """
    if nbytes < 16:
        raise ValueError("Webhook secrets need at least 16 random bytes")
    return f"{SECRET_PREFIX}{secrets.token_hex(nbytes)}"


class WebhookSigner:
    """Signs outgoing webhook payloads."""

    def __init__(self, secret: str | bytes) -> None:
        self._secret = secret

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> WebhookSigner:
        settings = settings or get_settings()
        return cls(settings.require_webhook_secret())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(secret=***)"

    def sign(self, payload: str | bytes, timestamp: int | None = None) -> str:
        """Return the signature header value for ``payload``."""
        return generate_signature(payload, self._secret, timestamp)

    def headers(self, payload: str | bytes, timestamp: int | None = None) -> dict[str, str]:
        """Headers to send alongside ``payload``."""
        return {
            "Content-Type": "application/json",
            SIGNATURE_HEADER: self.sign(payload, timestamp),
        }


class WebhookVerifier:
    """Verifies incoming webhook payloads against a shared secret."""

    def __init__(
        self,
        secret: str | bytes,
        tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
    ) -> None:
        if tolerance_seconds < 0:
            raise ValueError("tolerance_seconds must be >= 0")
        self._secret = secret
        self.tolerance_seconds = tolerance_seconds

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> WebhookVerifier:
        settings = settings or get_settings()
        return cls(
            settings.require_webhook_secret(),
            tolerance_seconds=settings.signature_tolerance_seconds,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(secret=***, tolerance_seconds={self.tolerance_seconds})"

    def verify(self, payload: str | bytes, signature: str | None) -> bool:
        """Return True if ``signature`` is valid for ``payload``."""
        return verify_signature(payload, signature, self._secret, self.tolerance_seconds)

    def verify_headers(self, payload: str | bytes, headers: Mapping[str, str]) -> bool:
        """Look up the signature header (case-insensitively) and verify it."""
        wanted = SIGNATURE_HEADER.lower()
        signature = None
        for name, value in headers.items():
            if name.lower() == wanted:
                signature = value
                break

        if signature is None:
            logger.debug("Signature header missing", header=SIGNATURE_HEADER)
            return False
        return self.verify(payload, signature)
