"""
GitHub webhook signature verification (X-Hub-Signature-256).
"""

from __future__ import annotations

import hashlib
import hmac

SIGNATURE_PREFIX = "sha256="


def compute_signature(payload: bytes | str, secret: str) -> str:
    """Header value GitHub would send for ``payload``."""
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()
    return SIGNATURE_PREFIX + digest


def validate_github_signature(
    payload: bytes | str,
    signature: str | None,
    secret: str | None,
) -> bool:
    """True if ``signature`` is a valid HMAC-SHA256 of ``payload`` under ``secret``."""
    if not signature or not secret:
        return False
    if not signature.startswith(SIGNATURE_PREFIX):
        return False
    return hmac.compare_digest(signature, compute_signature(payload, secret))
