class TestReadCategories:

    async def test_flat_list_in_creation_order(self, client, catalog):
        response = await client.get("/api/v1/categories")

        assert response.status_code == 200
        data = response.json()
        assert [c["id"] for c in data] == sorted(catalog.values())
        assert data[0] == {
            "id": catalog["rpg"],
            "parent_id": 0,
            "name": "RPG",
            "level": 1,
            "image_url": "",
        }

    async def test_filter_by_level(self, client, catalog):
        response = await client.get("/api/v1/categories", params={"level": 1})

        assert [c["name"] for c in response.json()] == ["RPG", "Decoração"]

    async def test_filter_roots_with_parent_zero(self, client, catalog):
        response = await client.get("/api/v1/categories", params={"parent_id": 0})

        assert {c["id"] for c in response.json()} == {catalog["rpg"], catalog["decoracao"]}

    async def test_filter_by_parent(self, client, catalog):
        response = await client.get("/api/v1/categories", params={"parent_id": catalog["equipamento"]})

        assert [c["name"] for c in response.json()] == ["Espadas", "Arcos"]

    async def test_filter_by_id(self, client, catalog):
        response = await client.get("/api/v1/categories", params={"id": catalog["magia"]})

        assert [c["name"] for c in response.json()] == ["Magia"]

    async def test_tree(self, client, catalog):
        response = await client.get("/api/v1/categories", params={"tree": 1})

        assert response.status_code == 200
        tree = response.json()
        assert [node["name"] for node in tree] == ["RPG", "Decoração"]
        rpg = tree[0]
        assert [child["name"] for child in rpg["children"]] == ["Equipamento", "Magia"]
        assert [sub["name"] for sub in rpg["children"][0]["children"]] == ["Espadas", "Arcos"]
        assert tree[1]["children"] == []

    async def test_invalid_level_filter(self, client):
        response = await client.get("/api/v1/categories", params={"level": 7})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid parameters"

    async def test_subcategories_sorted_by_name(self, client, catalog):
        response = await client.get("/api/v1/subcategories", params={"category_id": catalog["equipamento"]})

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Arcos", "Espadas"]

    async def test_subcategories_of_leaf_is_empty(self, client, catalog):
        response = await client.get("/api/v1/subcategories", params={"category_id": catalog["espadas"]})

        assert response.json() == []


class TestCreateCategory:

    async def test_general_cannot_have_parent(self, admin_client, catalog):
        response = await admin_client.post(
            "/api/v1/categories", json={"name": "X", "level": 1, "parent_id": catalog["rpg"]}
        )

        assert response.status_code == 400

    async def test_parent_must_be_previous_level(self, admin_client, catalog):
        response = await admin_client.post(
            "/api/v1/categories", json={"name": "X", "level": 3, "parent_id": catalog["rpg"]}
        )

        assert response.status_code == 400

    async def test_category_requires_parent(self, admin_client):
        response = await admin_client.post("/api/v1/categories", json={"name": "X", "level": 2})

        assert response.status_code == 400

    async def test_unknown_parent(self, admin_client):
        response = await admin_client.post(
            "/api/v1/categories", json={"name": "X", "level": 2, "parent_id": 999}
        )

        assert response.status_code == 404

    async def test_duplicate_under_same_parent(self, admin_client, catalog):
        response = await admin_client.post(
            "/api/v1/categories", json={"name": "Magia", "level": 2, "parent_id": catalog["rpg"]}
        )

        assert response.status_code == 409

    async def test_blank_name(self, admin_client):
        response = await admin_client.post("/api/v1/categories", json={"name": "   ", "level": 1})

        assert response.status_code == 400


class TestUpdateCategoryImage:

    async def test_updates_image(self, admin_client, catalog):
        response = await admin_client.put(
            f"/api/v1/categories/{catalog['rpg']}", json={"image_url": "images/rpg.png"}
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        listed = await admin_client.get("/api/v1/categories", params={"id": catalog["rpg"]})
        assert listed.json()[0]["image_url"] == "images/rpg.png"

    async def test_unknown_category(self, admin_client):
        response = await admin_client.put("/api/v1/categories/999", json={"image_url": "images/x.png"})

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Category not found"}

    async def test_empty_image_is_rejected(self, admin_client, catalog):
        response = await admin_client.put(f"/api/v1/categories/{catalog['rpg']}", json={"image_url": " "})

        assert response.status_code == 400


class TestDeleteCategory:

    async def test_cascades_to_descendants(self, admin_client, catalog):
        response = await admin_client.delete(f"/api/v1/categories/{catalog['rpg']}")

        assert response.status_code == 200
        remaining = await admin_client.get("/api/v1/categories")
        assert [c["id"] for c in remaining.json()] == [catalog["decoracao"]]

    async def test_items_lose_their_reference(self, admin_client, catalog):
        created = await admin_client.post(
            "/api/v1/items", json={"name": "Espada longa", "subcategory_id": catalog["espadas"]}
        )
        item_id = created.json()["id"]

        await admin_client.delete(f"/api/v1/categories/{catalog['equipamento']}")

        item = (await admin_client.get(f"/api/v1/items/{item_id}")).json()
        assert item["subcategory_id"] is None
        assert item["effective_category_id"] is None
        assert item["effective_general_id"] is None

    async def test_unknown_category(self, admin_client):
        response = await admin_client.delete("/api/v1/categories/999")

        assert response.status_code == 404
