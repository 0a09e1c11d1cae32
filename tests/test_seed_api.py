import json

from mercado.core.config import settings

SEED = [
    {
        "name": "RPG",
        "image_url": "images/rpg.png",
        "children": [
            {"name": "Equipamento", "children": [{"name": "Espadas"}, {"name": "Arcos"}]},
            {"name": "Magia"},
        ],
    },
    {"name": "Decoração"},
]


def write_seed(data) -> None:
    settings.SEED_FILE_PATH.write_text(json.dumps(data), encoding="utf-8")


class TestSeedImport:

    async def test_first_run_creates_everything(self, admin_client):
        write_seed(SEED)

        response = await admin_client.post("/api/v1/seed_categories")

        assert response.status_code == 200
        assert response.json() == {"success": True, "created": 6, "reused": 0, "updated": 0}
        tree = (await admin_client.get("/api/v1/categories", params={"tree": 1})).json()
        assert [n["name"] for n in tree] == ["RPG", "Decoração"]
        assert [s["level"] for s in tree[0]["children"][0]["children"]] == [3, 3]

    async def test_second_run_is_idempotent(self, admin_client):
        write_seed(SEED)
        await admin_client.post("/api/v1/seed_categories")

        response = await admin_client.post("/api/v1/seed_categories")

        assert response.json() == {"success": True, "created": 0, "reused": 6, "updated": 0}
        assert len((await admin_client.get("/api/v1/categories")).json()) == 6

    async def test_changed_image_is_updated(self, admin_client):
        write_seed(SEED)
        await admin_client.post("/api/v1/seed_categories")

        changed = json.loads(json.dumps(SEED))
        changed[0]["image_url"] = "images/rpg-v2.png"
        write_seed(changed)
        response = await admin_client.post("/api/v1/seed_categories")

        assert response.json()["updated"] == 1
        rpg = (await admin_client.get("/api/v1/categories", params={"level": 1})).json()[0]
        assert rpg["image_url"] == "images/rpg-v2.png"

    async def test_empty_image_never_overwrites(self, admin_client):
        write_seed(SEED)
        await admin_client.post("/api/v1/seed_categories")

        changed = json.loads(json.dumps(SEED))
        changed[0]["image_url"] = ""
        write_seed(changed)
        response = await admin_client.post("/api/v1/seed_categories")

        assert response.json()["updated"] == 0

    async def test_portuguese_keys_are_accepted(self, admin_client):
        write_seed([{"nome": "Geral", "imagem_url": "", "filhos": [{"nome": "Cat", "filhos": [{"nome": "Sub"}]}]}])

        response = await admin_client.post("/api/v1/seed_categories")

        assert response.json()["created"] == 3

    async def test_tree_in_body_takes_precedence(self, admin_client):
        response = await admin_client.post("/api/v1/seed_categories", json=[{"name": "Só no corpo"}])

        assert response.status_code == 200
        assert response.json()["created"] == 1

    async def test_missing_file(self, admin_client):
        response = await admin_client.post("/api/v1/seed_categories")

        assert response.status_code == 404
        assert response.json()["success"] is False

    async def test_invalid_json(self, admin_client):
        settings.SEED_FILE_PATH.write_text("{not json", encoding="utf-8")

        response = await admin_client.post("/api/v1/seed_categories")

        assert response.status_code == 400

    async def test_blank_name_rolls_back_whole_import(self, admin_client):
        write_seed([{"name": "RPG", "children": [{"name": "Equipamento"}, {"name": "  "}]}])

        response = await admin_client.post("/api/v1/seed_categories")

        assert response.status_code == 400
        assert (await admin_client.get("/api/v1/categories")).json() == []
