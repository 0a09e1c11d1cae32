from mercado.core.config import settings
from mercado.core.security import unsign_session_id

ADMIN_PASSWORD = "admin123"


class TestAuthFlow:
    """Login, check and logout through the HTTP API."""

    async def test_anonymous_check(self, client):
        response = await client.get("/api/v1/auth/check")

        assert response.status_code == 200
        assert response.json() == {"is_admin": False}

    async def test_login_with_default_password(self, client):
        response = await client.post("/api/v1/auth/login", json={"password": ADMIN_PASSWORD})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert settings.SESSION_COOKIE_NAME in response.cookies

        check = await client.get("/api/v1/auth/check")
        assert check.json() == {"is_admin": True}

    async def test_login_with_form_body(self, client):
        response = await client.post("/api/v1/auth/login", data={"password": ADMIN_PASSWORD})

        assert response.status_code == 200

    async def test_login_with_query_parameter(self, client):
        response = await client.post("/api/v1/auth/login", params={"password": ADMIN_PASSWORD})

        assert response.status_code == 200

    async def test_wrong_password(self, client):
        response = await client.post("/api/v1/auth/login", json={"password": "nope"})

        assert response.status_code == 401
        assert response.json()["success"] is False
        assert response.json()["error"] == "Incorrect password"

        check = await client.get("/api/v1/auth/check")
        assert check.json() == {"is_admin": False}

    async def test_missing_password(self, client):
        response = await client.post("/api/v1/auth/login", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "Password not provided"

    async def test_login_regenerates_session_id(self, client):
        first = await client.post("/api/v1/auth/login", json={"password": ADMIN_PASSWORD})
        first_id = unsign_session_id(first.cookies[settings.SESSION_COOKIE_NAME])

        second = await client.post("/api/v1/auth/login", json={"password": ADMIN_PASSWORD})
        second_id = unsign_session_id(second.cookies[settings.SESSION_COOKIE_NAME])

        assert first_id and second_id
        assert first_id != second_id

    async def test_logout_clears_admin_state(self, admin_client):
        response = await admin_client.post("/api/v1/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"success": True}

        check = await admin_client.get("/api/v1/auth/check")
        assert check.json() == {"is_admin": False}

    async def test_logout_only_accepts_post(self, client):
        response = await client.get("/api/v1/auth/logout")

        assert response.status_code == 405
        assert response.json()["success"] is False

    async def test_forged_cookie_is_anonymous(self, client):
        client.cookies.set(settings.SESSION_COOKIE_NAME, "forged-value")

        check = await client.get("/api/v1/auth/check")

        assert check.json() == {"is_admin": False}


class TestAdminGuard:

    async def test_mutations_require_admin(self, client):
        attempts = [
            client.post("/api/v1/categories", json={"name": "X", "level": 1}),
            client.put("/api/v1/categories/1", json={"image_url": "images/x.png"}),
            client.delete("/api/v1/categories/1"),
            client.post("/api/v1/items", json={"name": "X", "general_id": 1}),
            client.put("/api/v1/items/1", json={"name": "X", "general_id": 1}),
            client.delete("/api/v1/items/1"),
            client.put("/api/v1/settings", json={"whatsapp_number": "1"}),
            client.post("/api/v1/seed_categories"),
        ]
        for attempt in attempts:
            response = await attempt
            assert response.status_code == 401
            assert response.json() == {"success": False, "error": "Unauthorized"}
