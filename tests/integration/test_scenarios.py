"""End-to-end checks across loading, the store, the projector and the estimator."""

import json
import random

import pytest

import run
from orgtree_toolkit.core.identity import IdentityAllocator
from orgtree_toolkit.core.importers import parse_document
from orgtree_toolkit.core.normalizer import normalize_forest
from orgtree_toolkit.core.services import LayoutEstimator, RowProjector, TreeStore

pytestmark = pytest.mark.integration


def _random_document(seed, max_nodes=40):
    """Build a raw forest mixing visible and hidden children."""
    rng = random.Random(seed)
    counter = iter(range(max_nodes))
    roots = []

    def make(depth):
        node = {"name": f"n{next(counter)}", "attributes": {"title": rng.choice(["A", "B", "C"])}}
        for slot in ("children", "_children"):
            kids = []
            for _ in range(rng.randint(0, 3 if depth < 4 else 0)):
                try:
                    kids.append(make(depth + 1))
                except StopIteration:
                    break
            if kids:
                node[slot] = kids
        return node

    for _ in range(rng.randint(1, 3)):
        try:
            roots.append(make(0))
        except StopIteration:
            break
    return roots


def _count(raw):
    total = 0
    stack = list(raw)
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.get("children", []))
        stack.extend(node.get("_children", []))
    return total


@pytest.fixture
def scenario_store(scenario_document):
    return TreeStore.from_document(scenario_document)


def _ids(store):
    return {n.name: n.id for n in store.iter_nodes()}


# ---------------------------
# Scenarios
# ---------------------------

def test_load_and_flatten(scenario_store):
    ids = _ids(scenario_store)
    assert len(set(ids.values())) == 2

    rows = RowProjector().flatten(scenario_store.roots)
    assert len(rows) == 2
    cto = next(r for r in rows if r["name"] == "CTO")
    assert cto["level"] == 1
    assert cto["parent"] == "CEO"


def test_add_then_flatten(scenario_store):
    ceo_id = _ids(scenario_store)["CEO"]
    new_id = scenario_store.add(ceo_id, "CFO")

    rows = RowProjector().flatten(scenario_store.roots)
    assert len(rows) == 3
    cfo = next(r for r in rows if r["id"] == new_id)
    assert cfo["level"] == 1
    assert cfo["parent"] == "CEO"


def test_delete_keeps_sibling(scenario_store):
    ids = _ids(scenario_store)
    cfo_id = scenario_store.add(ids["CEO"], "CFO")

    assert scenario_store.delete(ids["CTO"])

    assert scenario_store.find(ids["CTO"]) is None
    assert scenario_store.find(cfo_id).name == "CFO"
    assert [c.name for c in scenario_store.roots[0].children] == ["CFO"]


def test_edit_keeps_id_and_position(scenario_store):
    ids = _ids(scenario_store)
    scenario_store.add(ids["CEO"], "CFO")

    scenario_store.edit(ids["CTO"], "CTO", {"title": "VP Eng", "location": "NY"})

    ceo = scenario_store.roots[0]
    cto = ceo.children[0]
    assert cto.id == ids["CTO"]
    assert cto.attributes == {"title": "VP Eng", "location": "NY"}
    assert [c.name for c in ceo.children] == ["CTO", "CFO"]


def test_infer_columns_first_seen_order():
    rows = [
        {"name": "CEO", "title": "Chief"},
        {"name": "CTO", "title": "Tech"},
        {"name": "CFO", "title": "Money", "location": "NY"},
    ]
    columns = RowProjector().infer_columns(rows)
    assert [c.label for c in columns] == ["Name", "Title", "Location", "Actions"]


def test_empty_forest_estimate():
    assert LayoutEstimator().estimate([], 800, 600).zoom == 1


# ---------------------------
# Properties over generated forests
# ---------------------------

SEEDS = range(12)


@pytest.mark.parametrize("seed", SEEDS)
def test_assigned_ids_are_distinct_and_cover_all_nodes(seed):
    raw = _random_document(seed)
    forest = parse_document(raw)
    normalize_forest(forest)
    IdentityAllocator().assign_ids(forest)

    ids = [n.id for root in forest for n in root.iter_preorder()]
    assert len(ids) == _count(raw)
    assert len(set(ids)) == len(ids)


@pytest.mark.parametrize("seed", SEEDS)
def test_added_ids_exceed_existing(seed):
    store = TreeStore.from_document(_random_document(seed))
    rng = random.Random(seed)
    for _ in range(5):
        before = max(n.id for n in store.iter_nodes())
        parent = rng.choice([n.id for n in store.iter_nodes()])
        new_id = store.add(parent, "added")
        assert new_id > before


@pytest.mark.parametrize("seed", SEEDS)
def test_deleted_ids_are_not_found(seed):
    raw = _random_document(seed)
    for node_id in range(_count(raw)):
        store = TreeStore.from_document(raw)
        assert store.delete(node_id)
        assert store.find(node_id) is None


@pytest.mark.parametrize("seed", SEEDS)
def test_rows_match_nodes_and_ancestor_counts(seed):
    store = TreeStore.from_document(_random_document(seed))
    rows = RowProjector().flatten(store.roots)

    assert len(rows) == store.node_count()
    for row in rows:
        ancestors = 0
        parent = store.parent_of(row["id"])
        while parent is not None:
            ancestors += 1
            parent = store.parent_of(parent.id)
        assert row["level"] == ancestors


@pytest.mark.parametrize("seed", SEEDS)
def test_empty_query_is_identity_and_zoom_is_bounded(seed):
    store = TreeStore.from_document(_random_document(seed))
    rows = RowProjector().flatten(store.roots)
    assert RowProjector.filter(rows, "") == rows

    rng = random.Random(seed)
    width, height = rng.uniform(1, 2000), rng.uniform(1, 2000)
    zoom = LayoutEstimator().estimate(store.roots, width, height).zoom
    assert 0 < zoom <= 1


# ---------------------------
# Command line
# ---------------------------

def test_cli_prints_table_and_fit(tmp_path, monkeypatch, capsys, scenario_document):
    monkeypatch.setattr(run, "setup_logging", lambda: None)
    path = tmp_path / "org.json"
    path.write_text(json.dumps(scenario_document), encoding="utf-8")

    assert run.main([str(path), "800", "600"]) == 0

    out = capsys.readouterr().out
    assert "Title" in out
    assert "CTO" in out
    assert "Graph fit for 800x600: translate=(400, 150) zoom=1.000" in out


def test_cli_reports_load_error(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(run, "setup_logging", lambda: None)
    path = tmp_path / "org.json"
    path.write_text("12", encoding="utf-8")

    assert run.main([str(path)]) == 1
    assert capsys.readouterr().out.startswith("Error: ")


def test_cli_usage(capsys):
    assert run.main([]) == 2
    assert "Usage" in capsys.readouterr().out
