from __future__ import annotations

"""Import functionality for organization documents.

Key components:
- parse_document / load_forest: raw nested document -> canonical forest
- DocumentImporter: JSON, YAML and XML files
"""

from .document_importer import DocumentImporter, load_forest, parse_document

__all__ = ["DocumentImporter", "load_forest", "parse_document"]
