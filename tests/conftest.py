"""Test configuration and shared fixtures for OrgTree Toolkit.

Every test runs against a private user-config directory so the packaged YAML
defaults are copied into a temporary folder instead of the real home.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from orgtree_toolkit.config import ConfigManager
from orgtree_toolkit.core.identity import IdentityAllocator
from orgtree_toolkit.core.services import TreeStore

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the user config directory to a temp folder and reset the singleton."""
    config_dir = tmp_path / "user_config"
    monkeypatch.setenv("ORGTREE_CONFIG_DIR", str(config_dir))
    ConfigManager.reset()
    yield config_dir
    ConfigManager.reset()


@pytest.fixture
def scenario_document():
    """CEO with one CTO report."""
    return [
        {
            "name": "CEO",
            "attributes": {"title": "Chief"},
            "children": [{"name": "CTO", "attributes": {"title": "Tech"}}],
        }
    ]


@pytest.fixture
def org_document():
    """Two disconnected trees; the first hides part of its subtree."""
    return [
        {
            "name": "Alice",
            "attributes": {"title": "CEO", "location": "Paris"},
            "children": [
                {"name": "Bob", "attributes": {"title": "CTO"}, "children": [
                    {"name": "Dan", "attributes": {"title": "Engineer"}},
                    {"name": "Eve", "attributes": {"title": "Engineer", "team": "Core"}},
                ]},
                {"name": "Carol", "attributes": {"title": "CFO"}, "_children": [
                    {"name": "Frank", "attributes": {"title": "Accountant"}},
                ]},
            ],
        },
        {"name": "Board", "children": [{"name": "Grace"}]},
    ]


@pytest.fixture
def allocator():
    return IdentityAllocator()


@pytest.fixture
def store(org_document, allocator):
    return TreeStore.from_document(org_document, allocator)


@pytest.fixture
def ids_by_name():
    """Return a name -> id mapping for a store (names are unique in fixtures)."""
    def mapping(tree_store):
        return {node.name: node.id for node in tree_store.iter_nodes()}
    return mapping


@pytest.fixture
def deep_document():
    """Return a factory for a single chain of nested nodes ``depth`` levels deep."""
    def build(depth):
        root = {"name": "n0", "attributes": {"title": "Level 0"}}
        node = root
        for i in range(1, depth):
            child = {"name": f"n{i}"}
            node["children"] = [child]
            node = child
        return root
    return build
