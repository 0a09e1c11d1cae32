from mercado.crud import setting_crud
from mercado.db.models.setting_model import ADMIN_PASSWORD_HASH_KEY, CORNER_IMAGE_KEY
from mercado.services.setting_service import LEGACY_CORNER_IMAGE, setting_service


class TestReadSettings:

    async def test_defaults(self, client):
        response = await client.get("/api/v1/settings")

        assert response.status_code == 200
        assert response.json() == {
            "corner_image_url": "../images/cantoneira.png",
            "whatsapp_number": "",
        }


class TestUpdateSettings:

    async def test_updates_public_keys(self, admin_client):
        response = await admin_client.put(
            "/api/v1/settings",
            json={"whatsapp_number": "5511999999999", "corner_image_url": "images/uploads/corner.png"},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        data = (await admin_client.get("/api/v1/settings")).json()
        assert data == {"corner_image_url": "images/uploads/corner.png", "whatsapp_number": "5511999999999"}

    async def test_post_is_accepted_too(self, admin_client):
        response = await admin_client.post("/api/v1/settings", json={"whatsapp_number": "123"})

        assert response.status_code == 200
        assert (await admin_client.get("/api/v1/settings")).json()["whatsapp_number"] == "123"

    async def test_keys_not_sent_are_untouched(self, admin_client):
        await admin_client.put("/api/v1/settings", json={"whatsapp_number": "123"})

        await admin_client.put("/api/v1/settings", json={"corner_image_url": "images/c.png"})

        assert (await admin_client.get("/api/v1/settings")).json()["whatsapp_number"] == "123"

    async def test_short_password_is_rejected_and_nothing_changes(self, admin_client):
        response = await admin_client.put(
            "/api/v1/settings", json={"whatsapp_number": "999", "new_admin_password": "12345"}
        )

        assert response.status_code == 400
        assert (await admin_client.get("/api/v1/settings")).json()["whatsapp_number"] == ""

    async def test_password_change(self, admin_client):
        response = await admin_client.put("/api/v1/settings", json={"new_admin_password": "novasenha"})
        assert response.status_code == 200

        await admin_client.post("/api/v1/auth/logout")
        old = await admin_client.post("/api/v1/auth/login", json={"password": "admin123"})
        new = await admin_client.post("/api/v1/auth/login", json={"password": "novasenha"})

        assert old.status_code == 401
        assert new.status_code == 200

    async def test_password_hash_is_never_exposed(self, admin_client, db_session):
        await admin_client.put("/api/v1/settings", json={"new_admin_password": "novasenha"})

        data = (await admin_client.get("/api/v1/settings")).json()
        stored = await setting_crud.get_setting(db_session, ADMIN_PASSWORD_HASH_KEY)

        assert set(data) == {"corner_image_url", "whatsapp_number"}
        assert stored and stored != "novasenha"
        assert stored not in str(data)


class TestEnsureDefaults:

    async def test_legacy_corner_value_is_corrected(self, db_session):
        await setting_crud.set_setting(db_session, CORNER_IMAGE_KEY, LEGACY_CORNER_IMAGE)

        await setting_service.ensure_defaults(db_session)

        assert await setting_crud.get_setting(db_session, CORNER_IMAGE_KEY) == "../images/cantoneira.png"

    async def test_custom_corner_value_is_kept(self, db_session):
        await setting_crud.set_setting(db_session, CORNER_IMAGE_KEY, "images/uploads/mine.png")

        await setting_service.ensure_defaults(db_session)

        assert await setting_crud.get_setting(db_session, CORNER_IMAGE_KEY) == "images/uploads/mine.png"
