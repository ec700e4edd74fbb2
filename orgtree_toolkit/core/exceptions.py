from __future__ import annotations

"""Exception classes raised by the OrgTree Toolkit core.

Lookups of absent ids are not errors (the store treats them as no-ops); only
load-time problems are reported through exceptions.
"""

from pathlib import Path
from typing import Optional


class OrgTreeError(Exception):
    """Base exception for all toolkit errors."""


class MalformedDocumentError(OrgTreeError):
    """Raised when a load-time document is not a node mapping or a list of them.

    Also used when a document file cannot be read or parsed.
    """

    def __init__(self, message: str, file_path: Optional[Path] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.file_path = file_path
        self.cause = cause

    def __str__(self) -> str:
        if self.file_path is not None:
            return f"[{self.file_path}] {super().__str__()}"
        return super().__str__()
