"""Unit tests for app.core.config and the database URL/TLS mapping in app.core.database."""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from app.core.config import Settings
from app.core.database import build_database_url, ssl_connect_args


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {"JWT_SECRET": "s3cret"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSettingsRequiredSecret(unittest.TestCase):
    """Settings refuse to load without a signing secret."""

    def test_missing_secret_fails(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError):
                Settings(_env_file=None)

    def test_blank_secret_fails(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")

    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            s = _settings()
        self.assertEqual(s.JWT_EXPIRE_MINUTES, 1440)
        self.assertEqual(s.BCRYPT_ROUNDS, 10)
        self.assertEqual(s.DB_POOL_SIZE, 10)
        self.assertEqual(s.API_PREFIX, "/api")
        self.assertTrue(s.DB_SSL)
        self.assertTrue(s.DB_SSL_VERIFY)

    def test_settings_are_frozen(self) -> None:
        s = _settings()
        with self.assertRaises(ValidationError):
            s.JWT_ALGORITHM = "HS512"


class TestSettingsValidators(unittest.TestCase):

    def test_rejects_non_postgres_database_url(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://root@localhost/catalog")

    def test_blank_database_url_means_unset(self) -> None:
        self.assertIsNone(_settings(DATABASE_URL="  ").DATABASE_URL)

    def test_rejects_out_of_range_values(self) -> None:
        for field, value in (
            ("JWT_EXPIRE_MINUTES", 0),
            ("BCRYPT_ROUNDS", 3),
            ("DB_POOL_SIZE", 0),
            ("DB_PORT", 70000),
            ("LOG_LEVEL", "LOUD"),
            ("API_PREFIX", "api"),
        ):
            with self.subTest(field=field):
                with self.assertRaises(ValidationError):
                    _settings(**{field: value})

    def test_log_level_is_normalized(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")


class TestDatabaseUrl(unittest.TestCase):

    def test_database_url_wins(self) -> None:
        s = _settings(DATABASE_URL="postgresql://u:p@db:5432/shop")
        self.assertEqual(build_database_url(s), "postgresql://u:p@db:5432/shop")

    def test_url_built_from_parts(self) -> None:
        s = _settings(
            DB_HOST="db.internal",
            DB_PORT=6543,
            DB_USER="catalog",
            DB_PASSWORD="pw",
            DB_DATABASE="shop",
        )
        url = build_database_url(s)
        self.assertEqual(url.drivername, "postgresql+psycopg2")
        self.assertEqual(url.host, "db.internal")
        self.assertEqual(url.port, 6543)
        self.assertEqual(url.username, "catalog")
        self.assertEqual(url.password, "pw")
        self.assertEqual(url.database, "shop")


class TestSslConnectArgs(unittest.TestCase):
    """Certificate verification is on unless explicitly disabled."""

    def test_default_verifies_certificate(self) -> None:
        self.assertEqual(ssl_connect_args(_settings()), {"sslmode": "verify-full"})

    def test_opt_in_unverified(self) -> None:
        self.assertEqual(
            ssl_connect_args(_settings(DB_SSL_VERIFY=False)), {"sslmode": "require"}
        )

    def test_tls_disabled(self) -> None:
        self.assertEqual(ssl_connect_args(_settings(DB_SSL=False)), {"sslmode": "disable"})
