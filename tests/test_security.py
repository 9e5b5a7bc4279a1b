"""Unit tests for app.core.security: cookie scope, session tokens, passwords, secrets."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.config import Settings, settings
from app.core.security import (
    SECURE_SESSION_COOKIE_NAME,
    SESSION_COOKIE_NAME,
    create_session_token,
    decode_session_token,
    generate_secret,
    hash_password,
    root_domain,
    session_cookie_name,
    session_cookie_options,
    verify_password,
)


class TestRootDomain(unittest.TestCase):
    def test_subdomain_is_stripped(self) -> None:
        self.assertEqual(root_domain("https://initiatives.socis.ca"), "socis.ca")

    def test_deep_subdomain(self) -> None:
        self.assertEqual(root_domain("https://a.b.example.com/path"), "example.com")

    def test_single_label_host(self) -> None:
        self.assertEqual(root_domain("http://localhost:3000"), "localhost")


class TestSessionCookie(unittest.TestCase):
    def test_dev_cookie_is_not_secure(self) -> None:
        cfg = Settings(_env_file=None, APP_ENV="dev", SITE_URL="http://localhost:3000")
        options = session_cookie_options(cfg)
        self.assertEqual(session_cookie_name(cfg), SESSION_COOKIE_NAME)
        self.assertFalse(options["secure"])
        self.assertEqual(options["domain"], ".localhost")

    def test_prod_cookie_is_shared_across_subdomains(self) -> None:
        cfg = Settings(_env_file=None, APP_ENV="prod", SITE_URL="https://initiatives.socis.ca")
        options = session_cookie_options(cfg)
        self.assertEqual(session_cookie_name(cfg), SECURE_SESSION_COOKIE_NAME)
        self.assertEqual(options["domain"], ".socis.ca")
        self.assertTrue(options["secure"])
        self.assertTrue(options["httponly"])
        self.assertEqual(options["samesite"], "lax")
        self.assertEqual(options["path"], "/")
        self.assertEqual(options["max_age"], cfg.SESSION_EXPIRE_MINUTES * 60)


class TestSessionToken(unittest.TestCase):
    def test_round_trip(self) -> None:
        payload = decode_session_token(create_session_token("exec@socis.ca"))
        self.assertEqual(payload["sub"], "exec@socis.ca")
        self.assertIn("exp", payload)

    def test_expired_token_is_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(minutes=5)
        token = jwt.encode(
            {"sub": "exec@socis.ca", "exp": past, "iat": past - timedelta(minutes=1)},
            settings.SESSION_SECRET.get_secret_value(),
            algorithm=settings.SESSION_ALGORITHM,
        )
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_session_token(token)

    def test_foreign_signature_is_rejected(self) -> None:
        token = jwt.encode({"sub": "exec@socis.ca"}, "some-other-secret", algorithm="HS256")
        with self.assertRaises(jwt.PyJWTError):
            decode_session_token(token)


class TestPasswords(unittest.TestCase):
    def test_hash_and_verify(self) -> None:
        hashed = hash_password("correct horse")
        self.assertNotEqual(hashed, "correct horse")
        self.assertTrue(verify_password("correct horse", hashed))
        self.assertFalse(verify_password("wrong", hashed))

    def test_missing_or_garbage_hash_never_matches(self) -> None:
        self.assertFalse(verify_password("anything", None))
        self.assertFalse(verify_password("anything", ""))
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))


class TestGenerateSecret(unittest.TestCase):
    def test_secrets_are_unique_and_url_safe(self) -> None:
        secrets = {generate_secret() for _ in range(20)}
        self.assertEqual(len(secrets), 20)
        for secret in secrets:
            self.assertGreaterEqual(len(secret), 40)
            self.assertRegex(secret, r"^[A-Za-z0-9_-]+$")


if __name__ == "__main__":
    unittest.main()
