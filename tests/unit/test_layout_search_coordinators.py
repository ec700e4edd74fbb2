import types

from orgtree_toolkit.core.models import LayoutTransform
from orgtree_toolkit.ui.tabs.orgchart import LayoutCoordinator, SearchCoordinator


class FakeScheduler:
    def __init__(self):
        self.queue = []

    def after(self, delay, callback):
        self.queue.append((delay, callback))
        return len(self.queue)

    def run(self):
        queue, self.queue = self.queue, []
        for _delay, callback in queue:
            callback()


class FakeLayoutCtrl:
    def __init__(self):
        self.calls = []

    def compute_layout(self, width, height):
        self.calls.append((width, height))
        return LayoutTransform(width / 2, height / 4, 1.0)


class FakeTable:
    def __init__(self):
        self.rows = None
        self.columns = None
        self.page_info = None

    def set_rows(self, rows):
        self.rows = rows

    def set_columns(self, columns):
        self.columns = columns

    def set_page_info(self, page, count):
        self.page_info = (page, count)


class FakeSearchCtrl:
    def __init__(self, rows, per_page=2):
        self.all_rows = rows
        self.per_page = per_page
        self.term = ""
        self.page = 1
        self.columns = ["name"]

    def _filtered(self):
        return [r for r in self.all_rows if self.term in r["name"].lower()]

    def set_search_term(self, term):
        self.term = term.lower()
        self.page = 1

    def page_count(self):
        return max(1, -(-len(self._filtered()) // self.per_page))

    def set_page(self, page):
        self.page = min(max(1, page), self.page_count())
        return self.page

    def visible_rows(self):
        start = (self.page - 1) * self.per_page
        return self._filtered()[start:start + self.per_page]


# ---------------------------
# LayoutCoordinator
# ---------------------------

def test_layout_waits_for_render_tick():
    ctrl = FakeLayoutCtrl()
    applied = []
    scheduler = FakeScheduler()
    lc = LayoutCoordinator(controller_getter=lambda: ctrl, measure=lambda: (800, 600),
                           apply=applied.append, after=scheduler.after)

    lc.invalidate()
    assert ctrl.calls == []
    assert lc.pending

    scheduler.run()

    assert ctrl.calls == [(800, 600)]
    assert applied == [LayoutTransform(400, 150, 1.0)]
    assert lc.last_transform == applied[0]
    assert not lc.pending


def test_layout_coalesces_repeated_invalidations():
    ctrl = FakeLayoutCtrl()
    scheduler = FakeScheduler()
    lc = LayoutCoordinator(controller_getter=lambda: ctrl, measure=lambda: (100, 100),
                           apply=lambda t: None, after=scheduler.after)

    lc.invalidate()
    lc.invalidate()
    lc.invalidate()

    assert len(scheduler.queue) == 1
    scheduler.run()
    assert len(ctrl.calls) == 1


def test_layout_without_scheduler_uses_explicit_signal():
    ctrl = FakeLayoutCtrl()
    lc = LayoutCoordinator(controller_getter=lambda: ctrl, measure=lambda: (200, 80),
                           apply=lambda t: None)

    assert lc.notify_layout_ready() is None
    lc.invalidate()
    assert ctrl.calls == []

    transform = lc.notify_layout_ready()

    assert transform == LayoutTransform(100, 20, 1.0)
    assert lc.notify_layout_ready() is None
    assert len(ctrl.calls) == 1


def test_layout_skipped_when_size_unknown():
    ctrl = FakeLayoutCtrl()
    applied = []
    lc = LayoutCoordinator(controller_getter=lambda: ctrl, measure=lambda: None,
                           apply=applied.append)
    lc.invalidate()
    assert lc.notify_layout_ready() is None
    assert applied == []


def test_layout_without_controller():
    lc = LayoutCoordinator(controller_getter=lambda: None, measure=lambda: (1, 1),
                           apply=lambda t: None)
    lc.invalidate()
    assert lc.notify_layout_ready() is None


# ---------------------------
# SearchCoordinator
# ---------------------------

def _rows(*names):
    return [{"name": n} for n in names]


def test_search_pushes_filtered_rows():
    ctrl = FakeSearchCtrl(_rows("alice", "bob", "carol", "dan"))
    table = FakeTable()
    sc = SearchCoordinator(controller_getter=lambda: ctrl, table=table)

    sc.term_changed("A")

    assert table.rows == _rows("alice", "carol")
    assert table.page_info == (1, 2)


def test_navigate_pages():
    ctrl = FakeSearchCtrl(_rows("a", "b", "c", "d", "e"))
    table = FakeTable()
    sc = SearchCoordinator(controller_getter=lambda: ctrl, table=table)

    sc.navigate("next")
    assert table.rows == _rows("c", "d")
    sc.navigate("next")
    sc.navigate("next")
    assert table.rows == _rows("e")
    assert table.page_info == (3, 3)
    sc.navigate("prev")
    assert table.page_info == (2, 3)


def test_refresh_sends_columns_when_supported():
    ctrl = FakeSearchCtrl(_rows("a"))
    table = FakeTable()
    SearchCoordinator(controller_getter=lambda: ctrl, table=table).refresh()
    assert table.columns == ["name"]
    assert table.rows == _rows("a")


def test_minimal_table_only_needs_set_rows():
    ctrl = FakeSearchCtrl(_rows("a", "b"))
    table = types.SimpleNamespace(rows=None)
    table.set_rows = lambda rows: setattr(table, "rows", rows)

    sc = SearchCoordinator(controller_getter=lambda: ctrl, table=table)
    sc.refresh()
    sc.term_changed("b")

    assert table.rows == _rows("b")


def test_no_controller_is_a_noop():
    table = FakeTable()
    sc = SearchCoordinator(controller_getter=lambda: None, table=table)
    sc.term_changed("x")
    sc.navigate("next")
    sc.refresh()
    assert table.rows is None
