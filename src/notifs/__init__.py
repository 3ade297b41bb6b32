"""
notifs: webhook payload signing and verification.

Senders sign the raw request body with a shared secret and send the result
in the ``X-Notifs-Signature`` header; receivers verify it before trusting
the payload.
"""

from notifs.signature import (
    DEFAULT_TOLERANCE_SECONDS,
    SIGNATURE_HEADER,
    SIGNATURE_VERSION,
    SignedTag,
    constant_time_equal,
    generate_signature,
    verify_signature,
)
from notifs.webhook import WebhookSigner, WebhookVerifier, generate_secret

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_TOLERANCE_SECONDS",
    "SIGNATURE_HEADER",
    "SIGNATURE_VERSION",
    "SignedTag",
    "WebhookSigner",
    "WebhookVerifier",
    "constant_time_equal",
    "generate_secret",
    "generate_signature",
    "verify_signature",
]
