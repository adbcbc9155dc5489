"""Unit tests for app.core.security: bcrypt hasher and JWT token service."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.security import (
    ComparisonError,
    InvalidTokenError,
    PasswordHasher,
    SigningError,
    TokenService,
)
from app.schemas.auth import TokenPayload

SECRET = "unit-test-secret"


class TestPasswordHasher(unittest.TestCase):
    """PasswordHasher hashes with a salt and verifies without raising on mismatch."""

    def setUp(self) -> None:
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = self.hasher.hash("secret1")
        self.assertNotEqual(hashed, "secret1")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(self.hasher.verify("secret1", hashed))

    def test_same_password_gets_different_salts(self) -> None:
        self.assertNotEqual(self.hasher.hash("secret1"), self.hasher.hash("secret1"))

    def test_mismatch_returns_false(self) -> None:
        hashed = self.hasher.hash("secret1")
        self.assertFalse(self.hasher.verify("wrong", hashed))

    def test_uses_configured_rounds(self) -> None:
        hashed = self.hasher.hash("secret1")
        self.assertEqual(hashed.split("$")[2], "04")

    def test_long_passwords_are_truncated_to_72_bytes(self) -> None:
        long_pw = "a" * 100
        hashed = self.hasher.hash(long_pw)
        self.assertTrue(self.hasher.verify("a" * 72, hashed))

    def test_malformed_hash_raises_comparison_error(self) -> None:
        with self.assertRaises(ComparisonError):
            self.hasher.verify("secret1", "not-a-bcrypt-hash")


class TestTokenService(unittest.TestCase):
    """TokenService signs {id, email, role} with a 1-day default expiry and verifies it."""

    def setUp(self) -> None:
        self.tokens = TokenService(secret=SECRET, algorithm="HS256", expire_minutes=1440)
        self.payload = TokenPayload(id=7, email="a@x.com", role="USER")

    def test_sign_then_verify_returns_payload(self) -> None:
        token = self.tokens.sign(self.payload)
        self.assertEqual(self.tokens.verify(token), self.payload)

    def test_claims_include_one_day_expiry(self) -> None:
        token = self.tokens.sign(self.payload)
        claims = jwt.decode(token, SECRET, algorithms=["HS256"])
        self.assertEqual(claims["id"], 7)
        self.assertEqual(claims["email"], "a@x.com")
        self.assertEqual(claims["role"], "USER")
        self.assertEqual(claims["exp"] - claims["iat"], 24 * 60 * 60)

    def test_expired_token_is_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(days=2)
        token = jwt.encode(
            {"id": 7, "email": "a@x.com", "role": "USER", "iat": past, "exp": past + timedelta(days=1)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(token)

    def test_token_signed_with_other_secret_is_rejected(self) -> None:
        other = TokenService(secret="other-secret", algorithm="HS256", expire_minutes=60)
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(other.sign(self.payload))

    def test_malformed_token_is_rejected(self) -> None:
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify("not.a.jwt")

    def test_token_without_identity_claims_is_rejected(self) -> None:
        exp = datetime.now(UTC) + timedelta(hours=1)
        token = jwt.encode({"sub": "7", "exp": exp}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(token)

    def test_token_without_expiry_is_rejected(self) -> None:
        token = jwt.encode({"id": 7, "email": "a@x.com", "role": "USER"}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(token)

    def test_sign_without_secret_raises_signing_error(self) -> None:
        tokens = TokenService(secret="", algorithm="HS256", expire_minutes=60)
        with self.assertRaises(SigningError):
            tokens.sign(self.payload)

    def test_unknown_algorithm_raises_signing_error(self) -> None:
        tokens = TokenService(secret=SECRET, algorithm="NOPE256", expire_minutes=60)
        with self.assertRaises(SigningError):
            tokens.sign(self.payload)
