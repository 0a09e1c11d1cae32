from types import SimpleNamespace

from mercado.services.category_service import build_category_tree


def _row(id, parent_id, name, level, image_url=""):
    return SimpleNamespace(id=id, parent_id=parent_id, name=name, level=level, image_url=image_url)


class TestBuildCategoryTree:
    """Unit tests for the flat-rows to forest builder."""

    def test_nests_three_levels(self):
        rows = [
            _row(1, None, "RPG", 1),
            _row(2, 1, "Equipamento", 2),
            _row(3, 2, "Espadas", 3),
        ]

        tree = build_category_tree(rows)

        assert len(tree) == 1
        general = tree[0]
        assert general.parent_id == 0
        assert general.children[0].name == "Equipamento"
        assert general.children[0].children[0].name == "Espadas"
        assert general.children[0].children[0].children == []

    def test_every_child_is_one_level_below_its_parent(self):
        rows = [
            _row(1, None, "A", 1),
            _row(2, 1, "A1", 2),
            _row(3, 1, "A2", 2),
            _row(4, 2, "A1a", 3),
            _row(5, None, "B", 1),
            _row(6, 5, "B1", 2),
        ]

        def walk(nodes):
            for node in nodes:
                for child in node.children:
                    assert child.level == node.level + 1
                    assert child.parent_id == node.id
                walk(node.children)

        tree = build_category_tree(rows)

        walk(tree)
        assert all(node.parent_id == 0 for node in tree)

    def test_siblings_keep_input_order(self):
        rows = [
            _row(1, None, "Z", 1),
            _row(5, 1, "b", 2),
            _row(3, 1, "a", 2),
            _row(2, None, "Y", 1),
        ]

        tree = build_category_tree(rows)

        assert [node.name for node in tree] == ["Z", "Y"]
        assert [child.id for child in tree[0].children] == [5, 3]

    def test_node_with_missing_parent_becomes_root(self):
        rows = [
            _row(1, None, "RPG", 1),
            _row(7, 99, "Órfã", 2),
        ]

        tree = build_category_tree(rows)

        assert [node.id for node in tree] == [1, 7]
        assert tree[1].parent_id == 99

    def test_every_node_appears_exactly_once(self):
        rows = [
            _row(1, None, "A", 1),
            _row(2, 1, "A1", 2),
            _row(3, 2, "A1a", 3),
            _row(4, 2, "A1b", 3),
            _row(5, None, "B", 1),
        ]

        seen = []

        def collect(nodes):
            for node in nodes:
                seen.append(node.id)
                collect(node.children)

        collect(build_category_tree(rows))

        assert sorted(seen) == [1, 2, 3, 4, 5]

    def test_empty_input_gives_empty_forest(self):
        assert build_category_tree([]) == []
