"""Tests for Authentication endpoints.

Tests cover:
- Login by username, email or phone (POST /api/auth/login/)
- Refresh (POST /api/auth/refresh/)
- Logout (POST /api/auth/logout/)
- Me (GET /api/auth/me/)
- Health (GET /api/health/)
"""

from __future__ import annotations

from django.test import TestCase

from rest_framework import status
from rest_framework.test import APIClient

from vaxi_backend.core.models import AuditLog, Role, User
from vaxi_backend.subjects.models import Subject


class AuthenticationTest(TestCase):
    """Tests for /api/auth/ endpoints."""

    databases = {"default"}

    def setUp(self):
        self.role_admin, _ = Role.objects.get_or_create(
            name="admin",
            defaults={"label": "Administrator"},
        )
        self.role_member, _ = Role.objects.get_or_create(
            name="member",
            defaults={"label": "Member"},
        )

        self.admin = User.objects.create_user(
            username="admin_auth_test",
            email="admin_auth@example.com",
            password="SecurePass123!",
            role=self.role_admin,
        )
        self.member = User.objects.create_user(
            username="member_auth_test",
            email="member_auth@example.com",
            password="SecurePass123!",
            role=self.role_member,
        )
        self.member.phone_number = "+919800000001"
        self.member.save()
        self.own_subject = Subject.objects.create(owner=self.member, relation="self", full_name="Member Auth")
        self.inactive_user = User.objects.create_user(
            username="inactive_auth_test",
            email="inactive_auth@example.com",
            password="SecurePass123!",
            role=self.role_member,
            is_active=False,
        )

        self.client = APIClient()
        self.client.defaults["HTTP_HOST"] = "localhost"

    def _login(self, username):
        return self.client.post(
            "/api/auth/login/",
            {"username": username, "password": "SecurePass123!"},
            format="json",
        )

    # ========== LOGIN TESTS ==========

    def test_login_success_returns_tokens_and_user(self):
        response = self._login("admin_auth_test")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)

        user_data = response.data["user"]
        self.assertEqual(user_data["id"], self.admin.id)
        self.assertEqual(user_data["email"], "admin_auth@example.com")
        self.assertEqual(user_data["role"]["name"], "admin")

    def test_login_with_email_or_phone(self):
        for identifier in ("MEMBER_AUTH@example.com", "+919800000001"):
            response = self.client.post(
                "/api/auth/login/",
                {"login": identifier, "password": "SecurePass123!"},
                format="json",
            )
            self.assertEqual(response.status_code, status.HTTP_200_OK, identifier)
            self.assertEqual(response.data["user"]["id"], self.member.id)

    def test_login_updates_last_login_and_audits(self):
        self._login("member_auth_test")

        self.member.refresh_from_db()
        self.assertIsNotNone(self.member.last_login)
        self.assertTrue(AuditLog.objects.filter(user=self.member, action="login").exists())

    def test_login_wrong_password_returns_400(self):
        response = self.client.post(
            "/api/auth/login/",
            {"username": "admin_auth_test", "password": "WrongPassword!"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertNotIn("access", response.data)

    def test_login_inactive_user_returns_400(self):
        response = self._login("inactive_auth_test")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_login_missing_password_returns_400(self):
        response = self.client.post("/api/auth/login/", {"username": "admin_auth_test"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    # ========== REFRESH TESTS ==========

    def test_refresh_success_returns_new_access_token(self):
        refresh_token = self._login("member_auth_test").data["refresh"]

        response = self.client.post("/api/auth/refresh/", {"refresh": refresh_token}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)

    def test_refresh_invalid_token_returns_400(self):
        response = self.client.post("/api/auth/refresh/", {"refresh": "invalid_token_here"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    # ========== ME ENDPOINT TESTS ==========

    def test_me_with_valid_token_returns_user(self):
        access_token = self._login("member_auth_test").data["access"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access_token}")
        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], self.member.id)
        self.assertEqual(response.data["role"]["name"], "member")
        self.assertEqual(response.data["self_subject_id"], self.own_subject.id)
        self.assertEqual(response.data["subject_count"], 1)

    def test_logout_is_audited(self):
        access_token = self._login("member_auth_test").data["access"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access_token}")
        response = self.client.post("/api/auth/logout/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(AuditLog.objects.filter(user=self.member, action="logout").exists())

    def test_me_without_token_returns_401(self):
        response = self.client.get("/api/auth/me/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_with_invalid_token_returns_401(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer invalid_token_here")
        response = self.client.get("/api/auth/me/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    # ========== TOKEN CONTENT TESTS ==========

    def test_refresh_token_contains_role(self):
        import jwt
        from django.conf import settings

        refresh_token = self._login("member_auth_test").data["refresh"]

        decoded = jwt.decode(
            refresh_token,
            settings.SIMPLE_JWT.get("SIGNING_KEY", settings.SECRET_KEY),
            algorithms=[settings.SIMPLE_JWT.get("ALGORITHM", "HS256")],
        )

        self.assertEqual(decoded["role"], "member")
        self.assertEqual(int(decoded["user_id"]), self.member.id)

    def test_health_endpoint_no_auth_required(self):
        response = self.client.get("/api/health/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["status"], "ok")
        self.assertEqual(response.json()["vaccines"], 0)
