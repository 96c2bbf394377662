import pytest
from django.contrib.auth.models import AnonymousUser

from accounts.guards import AccessTier, resolve_tier

pytestmark = pytest.mark.django_db

ADMIN_ONLY_URL = "/api/admin/summary"


def test_resolve_tier(admin_user, regular_user):
    assert resolve_tier(AnonymousUser()) is AccessTier.ANONYMOUS
    assert resolve_tier(regular_user) is AccessTier.USER
    assert resolve_tier(admin_user) is AccessTier.ADMIN


def test_admin_endpoint_without_identity_is_401(api_client):
    response = api_client.get(ADMIN_ONLY_URL)

    assert response.status_code == 401
    assert response.data["code"] == "not_authenticated"


def test_admin_endpoint_with_user_identity_is_403(user_client):
    response = user_client.get(ADMIN_ONLY_URL)

    assert response.status_code == 403
    assert response.data["code"] == "permission_denied"


def test_admin_endpoint_with_admin_identity(admin_client):
    response = admin_client.get(ADMIN_ONLY_URL)
    assert response.status_code == 200


def test_login_and_me(api_client, regular_user):
    response = api_client.post(
        "/api/auth/login",
        {"email": "member@example.com", "password": "member-pass-2024"},
        format="json",
    )
    assert response.status_code == 200
    assert response.data["user"]["email"] == "member@example.com"
    assert response.data["user"]["role"] == "user"
    assert "password" not in response.data["user"]

    me = api_client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.data["user"]["name"] == "회원"


@pytest.mark.parametrize("email, password", [
    ("member@example.com", "wrong-password"),
    ("nobody@example.com", "member-pass-2024"),
])
def test_login_failure_is_generic(api_client, regular_user, email, password):
    response = api_client.post("/api/auth/login", {"email": email, "password": password}, format="json")

    assert response.status_code == 401
    assert response.data["message"] == "잘못된 이메일 또는 비밀번호입니다."


def test_me_requires_identity(api_client):
    assert api_client.get("/api/auth/me").status_code == 401


def test_logout_destroys_identity(user_client):
    assert user_client.post("/api/auth/logout").status_code == 200
    assert user_client.get("/api/auth/me").status_code == 401


def test_password_change_destroys_session(api_client, regular_user):
    api_client.post(
        "/api/auth/login",
        {"email": "member@example.com", "password": "member-pass-2024"},
        format="json",
    )

    response = api_client.post(
        "/api/auth/change-password",
        {"current_password": "member-pass-2024", "new_password": "Tapmove-New-Pass-77"},
        format="json",
    )
    assert response.status_code == 200
    assert response.data["reauthenticate"] is True

    # 기존 세션으로는 더 이상 접근 불가
    assert api_client.get("/api/auth/me").status_code == 401

    relogin = api_client.post(
        "/api/auth/login",
        {"email": "member@example.com", "password": "Tapmove-New-Pass-77"},
        format="json",
    )
    assert relogin.status_code == 200


def test_password_change_rejects_wrong_current_password(user_client):
    response = user_client.post(
        "/api/auth/change-password",
        {"current_password": "not-my-password", "new_password": "Tapmove-New-Pass-77"},
        format="json",
    )

    assert response.status_code == 400
    assert "current_password" in response.data["errors"]
    assert user_client.get("/api/auth/me").status_code == 200
