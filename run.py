# -*- coding: utf-8 -*-

"""
Main entry point for OrgTree Toolkit.

Usage: python run.py DOCUMENT [WIDTH HEIGHT] [SEARCH]

Loads an organization document (JSON, YAML or XML), prints the table view and
the graph fit estimate for a WIDTH x HEIGHT viewport (800 x 600 by default).
"""

import sys
import logging

from orgtree_toolkit.logging_config import setup_logging
from orgtree_toolkit.ui.controllers import OrgChartController
from orgtree_toolkit.version import get_app_version


def _print_table(controller):
    columns = [c for c in controller.columns if not c.is_action]
    rows = controller.filtered_rows
    widths = {
        c.key: max([len(c.label)] + [len(_cell(c.value_for(r))) for r in rows])
        for c in columns
    }
    print("  ".join(c.label.ljust(widths[c.key]) for c in columns))
    for row in rows:
        print("  ".join(_cell(c.value_for(row)).ljust(widths[c.key]) for c in columns))


def _cell(value):
    return "" if value is None else str(value)


def main(argv=None):
    """
    Configure logging, load the document and print both views.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        print(__doc__.strip())
        return 2

    setup_logging()
    logging.info("===== OrgTree Toolkit %s =====", get_app_version())

    path = argv[0]
    width, height = 800.0, 600.0
    search = ""
    try:
        if len(argv) >= 3:
            width, height = float(argv[1]), float(argv[2])
            search = argv[3] if len(argv) > 3 else ""
        elif len(argv) == 2:
            search = argv[1]
    except ValueError:
        print(f"Invalid viewport size: {argv[1]} x {argv[2]}")
        return 2

    controller = OrgChartController.from_config()
    controller.load_file(path)
    if controller.status != "ready":
        print(controller.status_message)
        return 1

    controller.set_search_term(search)
    _print_table(controller)

    transform = controller.compute_layout(width, height)
    print()
    print(f"Graph fit for {width:g}x{height:g}: "
          f"translate=({transform.translate_x:g}, {transform.translate_y:g}) zoom={transform.zoom:.3f}")
    return 0


if __name__ == '__main__':
    code = main()
    logging.info("===== Application terminated =====")
    sys.exit(code)
