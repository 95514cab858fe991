"""
Unit tests for bearer token verification.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from datetime import timedelta

import pytest
from jose import jwt

from src.api.auth import decode_identity
from src.api.error_handlers import UnauthenticatedError
from tests.api.support import TEST_JWT_SECRET, make_token


def test_decode_identity_maps_claims() -> None:
    identity = decode_identity(
        make_token(branch_id=12, name="Quay Branch", role="admin", client_id=4),
        secret=TEST_JWT_SECRET,
        algorithm="HS256",
    )

    assert identity.branch_id == 12
    assert identity.name == "Quay Branch"
    assert identity.role == "admin"
    assert identity.client_id == 4


def test_decode_identity_rejects_bad_signature_and_expiry() -> None:
    with pytest.raises(UnauthenticatedError, match="Invalid or expired token"):
        decode_identity(make_token(secret="another"), secret=TEST_JWT_SECRET, algorithm="HS256")

    with pytest.raises(UnauthenticatedError):
        decode_identity(
            make_token(expires_in=timedelta(seconds=-30)),
            secret=TEST_JWT_SECRET,
            algorithm="HS256",
        )

    with pytest.raises(UnauthenticatedError):
        decode_identity("not-a-jwt", secret=TEST_JWT_SECRET, algorithm="HS256")


def test_decode_identity_rejects_signed_token_with_malformed_claims() -> None:
    token = jwt.encode({"branchId": "abc", "role": "branch"}, TEST_JWT_SECRET, algorithm="HS256")

    with pytest.raises(UnauthenticatedError, match="Invalid or expired token"):
        decode_identity(token, secret=TEST_JWT_SECRET, algorithm="HS256")
