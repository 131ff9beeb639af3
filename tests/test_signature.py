"""
Tests for webhook signature verification.
"""

from app.utils.signature import compute_signature, validate_github_signature

SECRET = "s3cr3t"
BODY = b'{"release": {"number": "v1"}}'


def test_valid_signature():
    assert validate_github_signature(BODY, compute_signature(BODY, SECRET), SECRET)


def test_str_and_bytes_payloads_agree():
    assert compute_signature(BODY.decode(), SECRET) == compute_signature(BODY, SECRET)


def test_tampered_body_rejected():
    signature = compute_signature(BODY, SECRET)
    assert not validate_github_signature(BODY + b" ", signature, SECRET)


def test_missing_or_malformed_signature_rejected():
    digest = compute_signature(BODY, SECRET).removeprefix("sha256=")
    assert not validate_github_signature(BODY, None, SECRET)
    assert not validate_github_signature(BODY, compute_signature(BODY, SECRET), None)
    assert not validate_github_signature(BODY, digest, SECRET)
    assert not validate_github_signature(BODY, "sha256=abc", SECRET)
