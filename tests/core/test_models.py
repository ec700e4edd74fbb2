from orgtree_toolkit.core.models import (
    ColumnSpec,
    LayoutSettings,
    LayoutTransform,
    OrgNode,
    TableSettings,
)


def test_orgnode_defaults_are_independent():
    a, b = OrgNode("A"), OrgNode("B")
    a.children.append(OrgNode("C"))
    a.attributes["title"] = "x"
    assert b.children == []
    assert b.attributes == {}


def test_orgnode_to_dict_is_nested():
    node = OrgNode("A", {"title": "CEO"}, [OrgNode("B", id=1)], id=0)
    assert node.to_dict() == {
        "id": 0,
        "name": "A",
        "attributes": {"title": "CEO"},
        "children": [{"id": 1, "name": "B", "attributes": {}, "children": []}],
    }
    assert node.is_leaf() is False
    assert node.children[0].is_leaf() is True


def test_layout_settings_from_config():
    settings = LayoutSettings.from_config({"node_width": 60, "zoom_extent": [0.5, 4]})
    assert settings.node_width == 60.0
    assert settings.node_padding == 10.0
    assert settings.zoom_extent == (0.5, 4.0)
    assert settings.slot_width == 60 + 2 * 10 + 40


def test_layout_settings_from_empty_config():
    assert LayoutSettings.from_config(None) == LayoutSettings()


def test_table_settings_from_config():
    settings = TableSettings.from_config({
        "rows_per_page": 0,
        "actions": ["delete"],
        "form_fields": ["title"],
    })
    assert settings.rows_per_page == 1
    assert settings.actions == ("delete",)
    assert settings.form_fields == ("title",)
    assert settings.actions_label == "Actions"


def test_column_spec_callbacks_are_not_compared():
    a = ColumnSpec("actions", "Actions", actions=("edit",), callbacks={"edit": print})
    b = ColumnSpec("actions", "Actions", actions=("edit",))
    assert a == b


def test_layout_transform_translate():
    transform = LayoutTransform(10, 20, 0.5)
    assert transform.translate == {"x": 10, "y": 20}


def test_orgnode_to_dict_handles_deep_chains():
    root = OrgNode("n0", id=0)
    node = root
    for i in range(1, 3000):
        child = OrgNode(f"n{i}", id=i)
        node.children.append(child)
        node = child

    out = root.to_dict()

    depth = 0
    while out["children"]:
        (out,) = out["children"]
        depth += 1
    assert depth == 2999
    assert out["name"] == "n2999"
    assert out["id"] == 2999


def test_layout_settings_ignore_unknown_keys():
    # older layout.yml files may still carry font_size
    assert LayoutSettings.from_config({"font_size": 14}) == LayoutSettings()
    assert not hasattr(LayoutSettings(), "font_size")
