"""Meta webhook signature verification."""

import hashlib
import hmac

from ...logging_config import logger

_PREFIX = "sha256="


def verify_meta_signature(payload: bytes, signature_header: str, secret: str) -> bool:
    """Verify an ``X-Hub-Signature-256`` header.

    Args:
        payload: Raw request body bytes, exactly as received
        signature_header: Header value (format: sha256=<hex digest>)
        secret: App secret from the Meta developer console

    Returns:
        True if signature is valid, False otherwise
    """
    if not signature_header:
        logger.warning("Missing X-Hub-Signature-256 header")
        return False

    if not signature_header.startswith(_PREFIX):
        logger.warning("Invalid X-Hub-Signature-256 format")
        return False

    expected = _PREFIX + hmac.new(
        secret.encode("utf-8"),
        payload,
        hashlib.sha256,
    ).hexdigest()

    is_valid = hmac.compare_digest(expected.encode("utf-8"), signature_header.strip().encode("utf-8"))
    if not is_valid:
        logger.warning("Meta webhook signature verification failed")
    return is_valid
