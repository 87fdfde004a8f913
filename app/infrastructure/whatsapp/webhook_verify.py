from __future__ import annotations

import hmac
import logging
from typing import Mapping


logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "sha256="


def verify_get_request(params: Mapping[str, str | None], expected_token: str) -> str | None:
    """Return the hub challenge when the subscription handshake matches, else None."""
    mode = params.get("hub.mode")
    token = params.get("hub.verify_token")
    if mode != "subscribe" or not token or not expected_token:
        return None
    if not hmac.compare_digest(token.encode("utf-8"), expected_token.encode("utf-8")):
        return None
    return params.get("hub.challenge") or ""


def verify_post_signature(body: bytes, signature_header: str | None, app_secret: str | None, allow_unsigned: bool) -> bool:
    """
    Check Meta's X-Hub-Signature-256 header (HMAC-SHA256 of the raw body).

    Unsigned deliveries pass only when `allow_unsigned` is set (dev/local).
    """
    if not signature_header:
        if allow_unsigned:
            logger.warning("Missing signature header; accepting in dev mode", extra={"channel": "whatsapp"})
            return True
        return False

    if not app_secret:
        logger.error("WHATSAPP_APP_SECRET missing; cannot verify webhook signature", extra={"channel": "whatsapp"})
        return False

    if not signature_header.lower().startswith(SIGNATURE_PREFIX):
        return False

    received = signature_header[len(SIGNATURE_PREFIX):]
    expected = hmac.new(app_secret.encode("utf-8"), body, "sha256").hexdigest()
    return hmac.compare_digest(expected, received)
