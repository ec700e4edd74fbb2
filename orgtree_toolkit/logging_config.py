from __future__ import annotations

"""Logging set-up for OrgTree Toolkit.

Call :func:`setup_logging` once at start-up. The ``logging`` section of the
configuration (``logging.yml``) is a :func:`logging.config.dictConfig` schema;
every file handler it declares writes to ``$ORGTREE_LOG_DIR/app.log``
(``logs/app.log`` by default).

Environment switches, applied after the configuration:

- ``ORGTREE_DEBUG_STORE=1``: DEBUG for the tree store and the controller, the
  two places that log every edit.
- ``ORGTREE_DEBUG_MODULES=a.b,c.d``: DEBUG for the listed loggers.
"""

import copy
import logging
import logging.config
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from orgtree_toolkit.config import ConfigManager

__all__ = ["setup_logging"]

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_TRUTHY = {"1", "true", "yes", "on"}
_EDIT_LOGGERS = (
    "orgtree_toolkit.core.services.tree_store",
    "orgtree_toolkit.ui.controllers.orgchart_controller",
)


def setup_logging() -> None:
    """Configure logging from ``logging.yml``, falling back to console only."""
    log_file = _log_file()
    config = _configured_schema(log_file)
    if config is None:
        _setup_minimal_logging()
        logging.warning("No logging configuration found; console logging only")
    else:
        try:
            logging.config.dictConfig(config)
        except (ValueError, TypeError, AttributeError, ImportError, OSError) as exc:
            # dictConfig reports bad schemas through these
            _setup_minimal_logging()
            logging.error("Invalid logging configuration, console logging only: %s", exc)
        else:
            logging.info("Logging initialised, file=%s", log_file)

    for name in _debug_targets():
        _enable_debug(name)


def _log_file() -> Path:
    log_dir = Path(os.environ.get("ORGTREE_LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "app.log"


def _configured_schema(log_file: Path) -> Optional[Dict[str, Any]]:
    """Return a copy of the configured schema with file handlers redirected."""
    schema = ConfigManager().get_logging_config()
    if not isinstance(schema, dict) or not schema.get("version"):
        return None
    schema = copy.deepcopy(schema)
    for handler in (schema.get("handlers") or {}).values():
        if isinstance(handler, dict) and "filename" in handler:
            handler["filename"] = str(log_file)
    return schema


def _setup_minimal_logging() -> None:
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"simple": {"format": _FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "simple",
                "level": "INFO",
            },
        },
        "root": {"level": "INFO", "handlers": ["console"]},
    })


def _debug_targets() -> List[str]:
    targets: List[str] = []
    if os.environ.get("ORGTREE_DEBUG_STORE", "").strip().lower() in _TRUTHY:
        targets.extend(_EDIT_LOGGERS)
    extra = os.environ.get("ORGTREE_DEBUG_MODULES", "")
    targets.extend(name.strip() for name in extra.split(",") if name.strip())
    return targets


def _enable_debug(name: str) -> None:
    """Set *name* to DEBUG and make sure one of its handlers lets DEBUG through."""
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    if not any(h.level <= logging.DEBUG for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    logger.info("Debug override active for logger '%s'", name)
