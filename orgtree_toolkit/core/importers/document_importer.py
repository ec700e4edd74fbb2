from __future__ import annotations

"""Organization document importer.

Turns the nested document produced by an upload/processing collaborator into
the canonical forest. The raw document is either a single root mapping or a
list of root mappings shaped like::

    {"name": "CEO", "attributes": {"title": "Chief"},
     "children": [...], "_children": [...]}

``_children`` (also accepted as ``hiddenSubtree`` or ``hidden_subtree``) is the
collapsed-subtree slot used by tree widgets. Missing ``children``,
``attributes`` or hidden slot are tolerated; anything else that is not a
mapping is rejected with :class:`MalformedDocumentError`.

Documents can also be read from JSON, YAML or XML files through
:class:`DocumentImporter`.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from lxml import etree as ET

from orgtree_toolkit.core.exceptions import MalformedDocumentError
from orgtree_toolkit.core.identity import IdentityAllocator
from orgtree_toolkit.core.models import OrgNode
from orgtree_toolkit.core.normalizer import normalize_forest

logger = logging.getLogger(__name__)

__all__ = ["DocumentImporter", "parse_document", "load_forest"]

_HIDDEN_KEYS = ("_children", "hiddenSubtree", "hidden_subtree")
_XML_NODE_TAG = "node"
_XML_HIDDEN_TAG = "hidden"

# Path of a node inside the raw document, as (parent path, segment); rendered
# only when an error is reported
_Path = Tuple[Any, str]


def parse_document(raw: Any) -> List[OrgNode]:
    """Build raw (not yet normalized, id-less) nodes from *raw*."""
    if isinstance(raw, Mapping):
        entries = [raw]
    elif isinstance(raw, (list, tuple)):
        entries = list(raw)
    else:
        raise MalformedDocumentError(
            f"Expected an object or a list of objects, got {type(raw).__name__}."
        )
    return _build_forest(entries)


def load_forest(raw: Any, allocator: IdentityAllocator) -> List[OrgNode]:
    """Parse, normalize and assign ids as one unit.

    Nothing is returned (and no id is consumed) unless parsing succeeds, so a
    caller never sees a partially normalized forest.
    """
    forest = parse_document(raw)
    normalize_forest(forest)
    count = allocator.assign_ids(forest)
    logger.info("Loaded forest: roots=%d nodes=%d", len(forest), count)
    return forest


def _build_forest(entries: List[Any]) -> List[OrgNode]:
    """Build nodes with an explicit stack so document depth is unbounded."""
    roots: List[OrgNode] = []
    # (raw mapping, path, list the built node is appended to)
    stack: List[Tuple[Any, _Path, List[OrgNode]]] = [
        (entry, (None, f"[{index}]"), roots)
        for index, entry in reversed(list(enumerate(entries)))
    ]
    while stack:
        data, path, siblings = stack.pop()
        node, pending = _build_shallow(data, path)
        siblings.append(node)
        stack.extend(reversed(pending))
    return roots


def _build_shallow(data: Any, path: _Path) -> Tuple[OrgNode, List[Tuple[Any, _Path, List[OrgNode]]]]:
    """Return the node for *data* with empty child lists, plus its pending children."""
    if not isinstance(data, Mapping):
        raise MalformedDocumentError(
            f"Node at {_format_path(path)} must be an object, got {type(data).__name__}."
        )

    name = data.get("name")
    node = OrgNode(
        name="" if name is None else str(name),
        attributes=_coerce_attributes(data.get("attributes"), path),
    )
    pending = [
        (child, (path, f"children[{i}]"), node.children)
        for i, child in enumerate(_coerce_list(data.get("children"), path, "children"))
    ]
    for key in _HIDDEN_KEYS:
        if data.get(key) is not None:
            node.hidden_subtree = []
            pending.extend(
                (child, (path, f"{key}[{i}]"), node.hidden_subtree)
                for i, child in enumerate(_coerce_list(data[key], path, key))
            )
            break
    return node, pending


def _format_path(path: _Path) -> str:
    parts: List[str] = []
    current: Optional[_Path] = path
    while current is not None:
        current, segment = current
        parts.append(segment)
    return ".".join(reversed(parts))


def _coerce_list(value: Any, path: _Path, key: str) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    raise MalformedDocumentError(f"'{key}' of node at {_format_path(path)} must be a list.")


def _coerce_attributes(value: Any, path: _Path) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise MalformedDocumentError(f"'attributes' of node at {_format_path(path)} must be an object.")
    return {str(k): ("" if v is None else str(v)) for k, v in value.items()}


class DocumentImporter:
    """Read organization documents from disk.

    Supported formats are picked by file suffix:

    - ``.json``: the raw document as JSON
    - ``.yml`` / ``.yaml``: the raw document as YAML
    - ``.xml``: ``<node name="..." title="...">`` elements nested in any root;
      a ``<hidden>`` child wraps collapsed children
    """

    SUPPORTED_SUFFIXES = (".json", ".yml", ".yaml", ".xml")

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.DocumentImporter")

    def can_import(self, file_path: Path) -> bool:
        file_path = Path(file_path)
        return file_path.is_file() and file_path.suffix.lower() in self.SUPPORTED_SUFFIXES

    def read_document(self, file_path: Path) -> Any:
        """Return the raw document stored in *file_path*.

        Raises
        ------
        MalformedDocumentError
            If the file is missing, has an unsupported suffix or does not parse.
        """
        file_path = Path(file_path)
        if not self.can_import(file_path):
            raise MalformedDocumentError("Unsupported or missing document file.", file_path)

        suffix = file_path.suffix.lower()
        self.logger.info("Reading organization document %s", file_path)
        try:
            if suffix == ".json":
                return json.loads(file_path.read_text(encoding="utf-8"))
            if suffix in (".yml", ".yaml"):
                return yaml.safe_load(file_path.read_text(encoding="utf-8"))
            return self._read_xml(file_path)
        except (json.JSONDecodeError, yaml.YAMLError, ET.XMLSyntaxError, UnicodeDecodeError,
                RecursionError) as exc:
            # RecursionError: nesting deeper than the JSON/YAML decoders accept
            raise MalformedDocumentError(f"Could not parse document: {exc}", file_path, exc) from exc
        except OSError as exc:
            raise MalformedDocumentError(f"Could not read document: {exc}", file_path, exc) from exc

    def load_file(self, file_path: Path, allocator: IdentityAllocator) -> List[OrgNode]:
        """Read *file_path* and run the load pipeline on its content."""
        raw = self.read_document(file_path)
        try:
            return load_forest(raw, allocator)
        except MalformedDocumentError as exc:
            exc.file_path = Path(file_path)
            raise

    # ------------------------------------------------------------------
    # XML
    # ------------------------------------------------------------------
    def _read_xml(self, file_path: Path) -> Any:
        parser = ET.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)
        root = ET.parse(str(file_path), parser).getroot()
        if root.tag == _XML_NODE_TAG:
            return self._xml_node_to_dict(root)
        return [self._xml_node_to_dict(el) for el in root if el.tag == _XML_NODE_TAG]

    def _xml_node_to_dict(self, element: ET._Element) -> Dict[str, Any]:
        result = _xml_shallow(element)
        stack = [(element, result)]
        while stack:
            current, out = stack.pop()
            for child in current:
                if child.tag == _XML_NODE_TAG:
                    target = out["children"]
                    nodes = [child]
                elif child.tag == _XML_HIDDEN_TAG:
                    target = out.setdefault("_children", [])
                    nodes = [el for el in child if el.tag == _XML_NODE_TAG]
                else:
                    continue
                for el in nodes:
                    built = _xml_shallow(el)
                    target.append(built)
                    stack.append((el, built))
        return result


def _xml_shallow(element: ET._Element) -> Dict[str, Any]:
    return {
        "name": element.get("name", ""),
        "attributes": {k: v for k, v in element.attrib.items() if k != "name"},
        "children": [],
    }
