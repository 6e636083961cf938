"""HTTP-level tests for /api/v1/auth: status codes, bodies and the session cookie."""

import unittest
from unittest.mock import MagicMock

from fakes import InMemoryUserRepository
from fastapi.testclient import TestClient

from app.api.v1.auth import get_auth_service, get_password_hasher, get_user_repository
from app.core.database import get_db
from app.core.exceptions import AuthenticationError, UserCreationError
from app.core.security import PasswordHasher
from app.main import app

PREFIX = "/api/v1/auth"
ALICE = {"name": "Alice", "email": "alice@x.com", "password": "Secret123", "role": "user"}


class AuthApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = InMemoryUserRepository()
        app.dependency_overrides[get_user_repository] = lambda: self.repo
        app.dependency_overrides[get_password_hasher] = lambda: PasswordHasher(rounds=4)
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()


class TestRegistrationScenario(AuthApiTestCase):
    """Register, sign in, fail sign-in, duplicate register, sign out."""

    def test_full_flow(self) -> None:
        resp = self.client.post(f"{PREFIX}/sign-up", json=ALICE)
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["message"], "User registered successfully")
        user_id = body["user"]["id"]
        self.assertEqual(
            body["user"],
            {"id": user_id, "name": "Alice", "email": "alice@x.com", "role": "user"},
        )
        self.assertIn("token", resp.cookies)

        resp = self.client.post(
            f"{PREFIX}/sign-in", json={"email": "alice@x.com", "password": "Secret123"}
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "User signed in successfully")
        self.assertEqual(
            resp.json()["user"],
            {"id": user_id, "name": "Alice", "email": "alice@x.com", "role": "user"},
        )
        self.assertIn("token", resp.cookies)

        resp = self.client.post(
            f"{PREFIX}/sign-in", json={"email": "alice@x.com", "password": "wrong"}
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"message": "Invalid email or password"})

        resp = self.client.post(
            f"{PREFIX}/sign-up",
            json={"name": "Bob", "email": "alice@x.com", "password": "x", "role": "user"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"message": "User with this email already exists"})

        resp = self.client.post(f"{PREFIX}/sign-out")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "User signed out successfully"})
        set_cookie = resp.headers["set-cookie"]
        self.assertIn('token=""', set_cookie)
        self.assertIn("Max-Age=0", set_cookie)


class TestSignUp(AuthApiTestCase):
    def test_password_never_returned(self) -> None:
        resp = self.client.post(f"{PREFIX}/sign-up", json=ALICE)
        self.assertNotIn("password", resp.json()["user"])
        self.assertNotIn("Secret123", resp.text)

    def test_cookie_attributes(self) -> None:
        resp = self.client.post(f"{PREFIX}/sign-up", json=ALICE)
        set_cookie = resp.headers["set-cookie"]
        self.assertIn("HttpOnly", set_cookie)
        self.assertIn("SameSite=strict", set_cookie)

    def test_role_defaults_to_user(self) -> None:
        payload = {k: v for k, v in ALICE.items() if k != "role"}
        resp = self.client.post(f"{PREFIX}/sign-up", json=payload)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["user"]["role"], "user")

    def test_duplicate_ignores_email_case(self) -> None:
        self.client.post(f"{PREFIX}/sign-up", json=ALICE)
        resp = self.client.post(f"{PREFIX}/sign-up", json={**ALICE, "email": "ALICE@X.COM"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"message": "User with this email already exists"})

    def test_validation_errors_are_400_with_details(self) -> None:
        resp = self.client.post(
            f"{PREFIX}/sign-up",
            json={"name": "A", "email": "not-an-email", "password": "", "role": "root"},
        )
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["error"], "Validation failed")
        fields = {d["field"] for d in body["details"]}
        self.assertEqual(fields, {"name", "email", "password", "role"})
        self.assertEqual(self.repo.rows, {})

    def test_internal_error_is_generic_500(self) -> None:
        service = MagicMock()
        service.create_user.side_effect = UserCreationError()
        app.dependency_overrides[get_auth_service] = lambda: service
        resp = self.client.post(f"{PREFIX}/sign-up", json=ALICE)
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"message": "Internal server error"})
        self.assertNotIn("token", resp.cookies)


class TestSignIn(AuthApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client.post(f"{PREFIX}/sign-up", json=ALICE)
        self.client.cookies.clear()

    def test_unknown_email_and_wrong_password_look_the_same(self) -> None:
        unknown = self.client.post(
            f"{PREFIX}/sign-in", json={"email": "bob@x.com", "password": "Secret123"}
        )
        wrong = self.client.post(
            f"{PREFIX}/sign-in", json={"email": "alice@x.com", "password": "wrong"}
        )
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.json(), wrong.json())
        self.assertNotIn("token", unknown.cookies)

    def test_missing_password_is_validation_error(self) -> None:
        resp = self.client.post(f"{PREFIX}/sign-in", json={"email": "alice@x.com"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["details"][0]["field"], "password")

    def test_internal_error_is_generic_500(self) -> None:
        service = MagicMock()
        service.authenticate_user.side_effect = AuthenticationError()
        app.dependency_overrides[get_auth_service] = lambda: service
        resp = self.client.post(
            f"{PREFIX}/sign-in", json={"email": "alice@x.com", "password": "Secret123"}
        )
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"message": "Internal server error"})


class TestSessionReadBack(AuthApiTestCase):
    def test_me_returns_claims_from_cookie(self) -> None:
        created = self.client.post(f"{PREFIX}/sign-up", json=ALICE).json()["user"]
        resp = self.client.get(f"{PREFIX}/me")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(), {"id": created["id"], "email": "alice@x.com", "role": "user"}
        )

    def test_me_without_cookie_is_401(self) -> None:
        resp = self.client.get(f"{PREFIX}/me")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"message": "Not authenticated"})

    def test_me_with_garbage_cookie_is_401(self) -> None:
        self.client.cookies.set("token", "not.a.jwt")
        resp = self.client.get(f"{PREFIX}/me")
        self.assertEqual(resp.status_code, 401)


class TestHealth(unittest.TestCase):
    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def test_reports_connected_database(self) -> None:
        app.dependency_overrides[get_db] = lambda: MagicMock()
        resp = TestClient(app).get("/api/v1/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")
        self.assertEqual(resp.json()["database"], "connected")

    def test_root(self) -> None:
        resp = TestClient(app).get("/")
        self.assertEqual(resp.json(), {"message": "Authgate API"})


if __name__ == "__main__":
    unittest.main()
