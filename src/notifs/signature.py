"""
Webhook signature generation and verification.

Header format: ``t=<timestamp>,v1=<hex HMAC-SHA256>``
Signed message: ``<timestamp>.<raw body>``
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import re
import time
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from notifs.common.errors import TagParseError
from notifs.common.logging import get_logger

logger = get_logger(__name__)

SIGNATURE_VERSION = "v1"
SIGNATURE_HEADER = "X-Notifs-Signature"
DEFAULT_TOLERANCE_SECONDS = 300

TIMESTAMP_KEY = "t"
DIGEST_SIZE = hashlib.sha256().digest_size

_TIMESTAMP_RE = re.compile(r"[0-9]{1,18}")


class VerifyOutcome(str, Enum):
    """Internal reason for a verification decision."""

    VALID = "valid"
    MISSING = "missing"
    MALFORMED = "malformed"
    BAD_TIMESTAMP = "bad_timestamp"
    EXPIRED = "expired"
    BAD_DIGEST = "bad_digest"
    MISMATCH = "mismatch"
    ERROR = "error"


def _to_bytes(value: str | bytes) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _now() -> int:
    return int(time.time())


@dataclass(frozen=True)
class SignedTag:
    """A parsed ``t=...,v1=...`` signature header."""

    timestamp: int
    digest: bytes

    def to_header(self) -> str:
        """Render the tag in wire form."""
        return f"{TIMESTAMP_KEY}={self.timestamp},{SIGNATURE_VERSION}={self.digest.hex()}"

    def __str__(self) -> str:
        return self.to_header()

    @classmethod
    def parse(cls, value: str) -> SignedTag:
        """
        Parse a signature header by key.

        Unknown keys and tokens without ``=`` are ignored so that headers
        carrying additional signature versions still parse.

        Raises:
            TagParseError: If ``t`` or ``v1`` is missing, duplicated or malformed
        """
        fields: dict[str, list[str]] = {}
        for token in value.split(","):
            key, sep, item = token.partition("=")
            if not sep:
                continue
            fields.setdefault(key, []).append(item)

        timestamps = fields.get(TIMESTAMP_KEY, [])
        digests = fields.get(SIGNATURE_VERSION, [])
        if len(timestamps) != 1 or len(digests) != 1:
            raise TagParseError(
                VerifyOutcome.MALFORMED,
                f"Expected exactly one '{TIMESTAMP_KEY}' and one '{SIGNATURE_VERSION}' field",
            )

        raw_timestamp = timestamps[0]
        if not _TIMESTAMP_RE.fullmatch(raw_timestamp):
            raise TagParseError(VerifyOutcome.BAD_TIMESTAMP, "Timestamp is not a base-10 integer")

        try:
            digest = binascii.unhexlify(digests[0])
        except (binascii.Error, ValueError) as exc:
            raise TagParseError(VerifyOutcome.BAD_DIGEST, "Digest is not valid hex") from exc
        if len(digest) != DIGEST_SIZE:
            raise TagParseError(VerifyOutcome.BAD_DIGEST, "Digest has the wrong length")

        return cls(timestamp=int(raw_timestamp), digest=digest)


def compute_digest(payload: str | bytes, secret: str | bytes, timestamp: int) -> bytes:
    """Compute HMAC-SHA256(secret, "<timestamp>.<payload>")."""
    message = f"{timestamp}.".encode("utf-8") + _to_bytes(payload)
    return hmac.new(_to_bytes(secret), message, hashlib.sha256).digest()


def generate_signature(
    payload: str | bytes,
    secret: str | bytes,
    timestamp: int | None = None,
) -> str:
    """
    Generate a webhook signature header value.

    Args:
        payload: Raw request body, exactly as it will be sent
        secret: Webhook secret
        timestamp: Signing time in seconds since epoch (defaults to now)

    Returns:
        Header value ``t=<timestamp>,v1=<hex digest>``
    """
    ts = _now() if timestamp is None else int(timestamp)
    return SignedTag(timestamp=ts, digest=compute_digest(payload, secret, ts)).to_header()


def constant_time_equal(a: Sequence[int], b: Sequence[int]) -> bool:
    """Compare two byte sequences without exiting early on a mismatch.

    Length is not treated as secret and is checked first.
    """
    if len(a) != len(b):
        return False

    result = 0
    for x, y in zip(a, b):
        result |= x ^ y
    return result == 0


def evaluate_signature(
    payload: str | bytes,
    signature: str | None,
    secret: str | bytes,
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
) -> VerifyOutcome:
    """Check a signature and return the reason for the decision."""
    if not signature:
        return VerifyOutcome.MISSING

    try:
        tag = SignedTag.parse(signature)

        if abs(_now() - tag.timestamp) > tolerance_seconds:
            return VerifyOutcome.EXPIRED

        expected = compute_digest(payload, secret, tag.timestamp)
        if not constant_time_equal(tag.digest, expected):
            return VerifyOutcome.MISMATCH
    except TagParseError as exc:
        return exc.reason
    except Exception as exc:
        logger.debug("Unexpected error while verifying signature", error=type(exc).__name__)
        return VerifyOutcome.ERROR

    return VerifyOutcome.VALID


def verify_signature(
    payload: str | bytes,
    signature: str | None,
    secret: str | bytes,
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
) -> bool:
    """
    Verify a webhook signature.

    Every failure (missing or malformed header, stale or future timestamp,
    bad digest) returns False; the reason is never surfaced to the caller.

    Args:
        payload: Raw request body as received
        signature: Value of the X-Notifs-Signature header
        secret: Webhook secret
        tolerance_seconds: Max distance between the signature timestamp and now

    Returns:
        True if the signature is valid and fresh

    Example:
        >>> is_valid = verify_signature(
        ...     request_body,
        ...     headers.get("X-Notifs-Signature"),
        ...     os.environ["WEBHOOK_SECRET"],
        ... )
    """
    outcome = evaluate_signature(payload, signature, secret, tolerance_seconds)
    if outcome is not VerifyOutcome.VALID:
        logger.debug("Webhook signature rejected", reason=outcome.value)
        return False
    return True
