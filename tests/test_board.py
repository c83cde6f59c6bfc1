"""Tests for column grouping and the BoardPresenter edit flow."""

from board import BoardPresenter, Card, EditState, compute_columns
from models import Task


def ids(tasks):
    return [t.id for t in tasks]


class TestComputeColumns:
    def test_scenario_columns(self, tasks):
        columns = compute_columns(tasks)
        assert {s: ids(ts) for s, ts in columns.items()} == {"todo": [1], "doing": [2], "done": [3]}

    def test_relative_order_preserved(self):
        tasks = [Task(i, f"t{i}", "d", s) for i, s in enumerate(["done", "todo", "done", "todo", "doing"], 1)]
        columns = compute_columns(tasks)
        assert ids(columns["todo"]) == [2, 4]
        assert ids(columns["done"]) == [1, 3]

    def test_unknown_status_omitted_and_counted(self):
        tasks = [Task(1, "a", "d", "todo"), Task(2, "b", "d", "bogus"),
                 Task(3, "c", "d", "in progress"), Task(4, "e", "d", "")]
        columns = compute_columns(tasks)
        placed = [t.id for bucket in columns.values() for t in bucket]
        omitted = [t for t in tasks if t.id not in placed]
        assert sorted(placed) == [1, 3]
        assert len(placed) == len(set(placed))
        assert len(placed) + len(omitted) == len(tasks)
        assert ids(columns["doing"]) == [3]

    def test_empty_input(self):
        assert compute_columns([]) == {"todo": [], "doing": [], "done": []}


class TestRender:
    def test_render_shows_three_columns(self, presenter, target):
        presenter.render()
        assert len(target.calls) == 1
        assert {s: target.ids(s) for s in ("todo", "doing", "done")} == {"todo": [1], "doing": [2], "done": [3]}

    def test_render_card(self, presenter, store, dialog):
        card = presenter.render_card(store.find_by_id(3))
        assert isinstance(card, Card)
        assert (card.task_id, card.title) == (3, "C")
        card.click()
        assert store.active_id == 3
        assert dialog.opened_with == [{"title": "C", "description": "d3", "status": "done"}]

    def test_presenter_binds_dialog(self, presenter, dialog):
        assert dialog.handlers["submit"] == presenter.on_submit
        assert dialog.handlers["dismiss"] == presenter.on_dismiss


class TestEditFlow:
    def test_initial_state_closed(self, presenter):
        assert presenter.state is EditState.CLOSED

    def test_click_opens_clean(self, presenter, target, dialog, store):
        presenter.render()
        target.last["doing"][0].click()
        assert presenter.state is EditState.OPEN_CLEAN
        assert dialog.is_open
        assert store.active_id == 2

    def test_change_marks_dirty(self, presenter):
        presenter.open_task(1)
        presenter.on_change("title", "A2")
        assert presenter.state is EditState.OPEN_DIRTY

    def test_valid_submit_saves_rerenders_and_closes(self, presenter, target, dialog, store):
        presenter.render()
        presenter.open_task(2)
        presenter.on_change("status", "done")
        task = presenter.on_submit({"title": "B2", "description": "d2-new", "status": "done"})
        assert task.to_dict() == {"id": 2, "title": "B2", "description": "d2-new", "status": "done"}
        assert presenter.state is EditState.CLOSED
        assert not dialog.is_open
        assert store.active_id is None
        assert len(target.calls) == 2
        assert target.ids("done") == [2, 3]
        assert target.ids("doing") == []

    def test_invalid_submit_keeps_dialog_open(self, presenter, target, dialog, store):
        presenter.render()
        presenter.open_task(2)
        result = presenter.on_submit({"title": "", "description": "x", "status": "done"})
        assert result is None
        assert dialog.is_open
        assert dialog.errors == {"title": "Title is required."}
        assert presenter.state is EditState.OPEN_DIRTY
        assert store.active_id == 2
        assert store.find_by_id(2).title == "B"
        assert len(target.calls) == 1

    def test_submit_without_session_is_ignored(self, presenter, dialog, store):
        before = store.snapshot()
        assert presenter.on_submit({"title": "x", "description": "y", "status": "todo"}) is None
        assert store.snapshot() == before
        assert dialog.close_calls == 0

    def test_unknown_card_is_ignored(self, presenter, dialog, store):
        assert presenter.open_task(99) is False
        assert presenter.state is EditState.CLOSED
        assert dialog.opened_with == []
        assert store.active_id is None

    def test_cancel_discards(self, presenter, dialog, store):
        presenter.open_task(1)
        presenter.on_change("title", "never saved")
        presenter.on_cancel()
        assert presenter.state is EditState.CLOSED
        assert not dialog.is_open
        assert store.active_id is None
        assert store.find_by_id(1).title == "A"

    def test_dismiss_after_failed_submit(self, presenter, dialog, store):
        presenter.open_task(1)
        presenter.on_submit({"title": "", "description": "", "status": "todo"})
        presenter.on_dismiss()
        assert presenter.state is EditState.CLOSED
        assert store.active_id is None
        assert store.find_by_id(1).to_dict() == {"id": 1, "title": "A", "description": "d1", "status": "todo"}

    def test_dismiss_when_closed_is_noop(self, presenter, dialog):
        presenter.on_dismiss()
        assert dialog.close_calls == 0
        assert presenter.state is EditState.CLOSED

    def test_sessions_cycle(self, presenter, store):
        for task_id in (1, 2, 1):
            presenter.open_task(task_id)
            assert store.active_id == task_id
            presenter.on_submit({"title": f"T{task_id}", "description": "d", "status": "todo"})
            assert presenter.state is EditState.CLOSED
        assert [t.status for t in store.list_tasks()] == ["todo", "todo", "done"]


def test_presenter_has_no_shared_state(store, target, dialog, tasks):
    from store import TaskStore
    other = BoardPresenter(TaskStore([Task(1, "Z", "z", "done")]), target, dialog)
    other.open_task(1)
    assert store.active_id is None
