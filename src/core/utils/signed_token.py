"""
Signed capability tokens for direct image transfers.

A token is ``base64url(JSON(payload)) + "." + base64url(HMAC-SHA256(secret, base64url(JSON(payload))))``
with unpadded base64url segments. The token itself is the whole authorization
artifact: nothing about issued tokens is stored server-side, and a token can be
redeemed any number of times until its ``expiresAt`` passes.
"""

import base64
import binascii
import hashlib
import hmac
import json
import secrets
import time
from typing import TypeVar, overload

from aws_lambda_powertools import Logger

from core.models.errors import ConfigurationError
from core.models.tokens import (
    DownloadTokenPayload,
    UploadTokenPayload,
    token_payload_adapter,
)
from core.utils.constants import ENV_IMAGE_TOKEN_SECRET, TOKEN_SECRET_BYTES

logger = Logger(UTC=True)

PayloadT = TypeVar("PayloadT", UploadTokenPayload, DownloadTokenPayload)
AnyPayload = UploadTokenPayload | DownloadTokenPayload


def b64url_encode(data: bytes) -> str:
    """Encode bytes as unpadded base64url text."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(segment: str) -> bytes:
    """Decode unpadded base64url text, rejecting characters outside the alphabet.

    Raises:
        ValueError: If the segment is not valid base64url
    """
    padded = segment + "=" * (-len(segment) % 4)
    return base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)


def generate_token_secret() -> str:
    """Generate a random token secret (for initial setup)."""
    return base64.b64encode(secrets.token_bytes(TOKEN_SECRET_BYTES)).decode("ascii")


class SignedTokenCodec:
    """Issues and verifies HMAC-SHA256 signed capability tokens.

    The codec holds the process-wide secret and nothing else. It refuses to
    exist without a secret, so a misconfigured deployment fails at cold start
    rather than on the first request.
    """

    def __init__(self, secret: str | None) -> None:
        if not secret:
            logger.error(
                f"{ENV_IMAGE_TOKEN_SECRET} is not set. Generate one with: "
                "python scripts/generate_token_secret.py"
            )
            raise ConfigurationError(
                message=f"{ENV_IMAGE_TOKEN_SECRET} environment variable is required",
                details={"setting": ENV_IMAGE_TOKEN_SECRET},
            )
        self._key = secret.encode("utf-8")

    def _sign(self, encoded_payload: str) -> str:
        digest = hmac.new(
            self._key, encoded_payload.encode("utf-8"), hashlib.sha256
        ).digest()
        return b64url_encode(digest)

    def _signature_matches(self, encoded_payload: str, signature: str) -> bool:
        expected = self._sign(encoded_payload)
        # HMAC-SHA256 signatures always encode to the same length
        if len(signature) != len(expected):
            return False
        return hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8"))

    def create_signed_token(self, payload: AnyPayload) -> str:
        """Create a signed token from a payload.

        The payload is trusted as-is; ``expires_at`` must already be set by the
        caller. The result is deterministic for a given payload and secret.
        """
        payload_json = json.dumps(
            payload.model_dump(by_alias=True),
            separators=(",", ":"),
            ensure_ascii=False,
        )
        encoded = b64url_encode(payload_json.encode("utf-8"))
        return f"{encoded}.{self._sign(encoded)}"

    @overload
    def verify_signed_token(self, token: str) -> AnyPayload | None: ...

    @overload
    def verify_signed_token(
        self, token: str, payload_type: type[PayloadT]
    ) -> PayloadT | None: ...

    def verify_signed_token(
        self,
        token: str,
        payload_type: type[PayloadT] | None = None,
    ) -> AnyPayload | None:
        """Verify and decode a signed token.

        Returns None if the token is malformed, tampered with, expired, or
        (when ``payload_type`` is given) grants a different operation. The
        reason is deliberately not reported.
        """
        parts = token.split(".")
        if len(parts) != 2:
            return None

        encoded, signature = parts

        if not self._signature_matches(encoded, signature):
            return None

        try:
            raw = json.loads(b64url_decode(encoded).decode("utf-8"))
            payload = token_payload_adapter.validate_python(raw)
        except (ValueError, binascii.Error, UnicodeError):
            # pydantic's ValidationError and JSONDecodeError are ValueErrors
            return None

        if payload.expires_at < time.time():
            return None

        if payload_type is not None and not isinstance(payload, payload_type):
            return None

        return payload
