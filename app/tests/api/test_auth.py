import pytest
from datetime import datetime, timedelta, timezone
from jose import jwt
from app.api.auth_guard import create_admin_token, verify_admin_token
from app.core.config import settings


@pytest.mark.asyncio
class TestAdminLogin:

    async def test_login_sets_cookie_and_unlocks_admin(self, client, mock_backend):
        response = client.post("/api/auth/admin", json={"password": settings.ADMIN_PASSWORD})

        assert response.status_code == 200
        assert response.json() == {"success": True}

        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{settings.ADMIN_COOKIE_NAME}=")
        assert "HttpOnly" in set_cookie
        assert "samesite=lax" in set_cookie.lower()
        assert "Path=/" in set_cookie
        assert f"Max-Age={settings.ADMIN_TOKEN_TTL_HOURS * 3600}" in set_cookie

        admin = client.get("/admin", follow_redirects=False)
        assert admin.status_code == 200
        assert "Dashboard" in admin.text

    async def test_login_wrong_password(self, client):
        response = client.post("/api/auth/admin", json={"password": "not-the-password"})

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid credentials"}
        assert "set-cookie" not in response.headers

        admin = client.get("/admin", follow_redirects=False)
        assert admin.status_code == 303
        assert admin.headers["location"] == "/"

    async def test_login_requires_password(self, client):
        response = client.post("/api/auth/admin", json={})
        assert response.status_code == 422

    async def test_logout_clears_cookie(self, admin_client, mock_backend):
        assert admin_client.get("/admin", follow_redirects=False).status_code == 200

        response = admin_client.post("/api/auth/logout")
        assert response.status_code == 200
        assert response.json() == {"success": True}

        admin = admin_client.get("/admin", follow_redirects=False)
        assert admin.status_code == 303
        assert admin.headers["location"] == "/"


@pytest.mark.asyncio
class TestAdminGate:

    @pytest.mark.parametrize(
        "path",
        ["/admin", "/admin/cities", "/admin/restaurants/r1", "/admin/users/stats"]
    )
    async def test_admin_paths_redirect_without_cookie(self, client, path):
        response = client.get(path, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/"

    async def test_prefix_lookalike_is_not_gated(self, client):
        response = client.get("/administrator", follow_redirects=False)
        assert response.status_code == 404

    async def test_tampered_token_redirects(self, client):
        token = jwt.encode({"sub": "admin"}, "some-other-secret", algorithm="HS256")
        client.cookies.set(settings.ADMIN_COOKIE_NAME, token)

        response = client.get("/admin/cities", follow_redirects=False)
        assert response.status_code == 303

    async def test_public_pages_stay_open(self, client):
        landing = client.get("/")
        assert landing.status_code == 200
        assert "/api/auth/admin" in landing.text
        assert "Invalid admin credentials" in landing.text

        health = client.get("/health")
        assert health.status_code == 200
        assert health.json()["status"] == "online"


class TestAdminToken:

    def test_round_trip(self):
        claims = verify_admin_token(create_admin_token())
        assert claims is not None
        assert claims["sub"] == "admin"

    def test_missing_token(self):
        assert verify_admin_token(None) is None
        assert verify_admin_token("") is None

    def test_expired_token(self):
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = jwt.encode(
            {"sub": "admin", "iat": past - timedelta(hours=24), "exp": past},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        assert verify_admin_token(token) is None

    def test_wrong_subject(self):
        assert verify_admin_token(create_admin_token(subject="someone")) is None

    def test_garbage_token(self):
        assert verify_admin_token("not.a.jwt") is None
