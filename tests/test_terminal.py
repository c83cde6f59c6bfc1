"""Tests for the terminal render target."""

from board import Card
from terminal import ANSI_RE, MIN_COL_WIDTH, SEP, TerminalBoard


def card(task_id, title, clicks=None):
    return Card(task_id=task_id, title=title,
                on_click=(lambda: clicks.append(task_id)) if clicks is not None else (lambda: None))


def plain_lines(capsys):
    out = capsys.readouterr().out
    return [ANSI_RE.sub("", line) for line in out.splitlines()]


class TestShow:
    def test_show_replaces_all_columns(self):
        board = TerminalBoard()
        board.show({"todo": [card(1, "a")], "doing": [card(2, "b")], "done": []})
        board.show({"todo": [], "doing": [], "done": [card(1, "a")]})
        assert board.columns["todo"] == []
        assert [c.task_id for c in board.columns["done"]] == [1]

    def test_click_fires_card_callback(self):
        clicks = []
        board = TerminalBoard()
        board.show({"todo": [card(4, "x", clicks)], "doing": [], "done": []})
        assert board.click(4) is True
        assert clicks == [4]

    def test_click_unknown_id(self):
        board = TerminalBoard()
        assert board.click(1) is False
        assert board.find_card(1) is None

    def test_summary(self):
        board = TerminalBoard()
        board.show({"todo": [card(1, "a"), card(2, "b")], "doing": [], "done": [card(3, "c")]})
        assert board.summary() == "To Do: 2 tasks, Doing: 0 tasks, Done: 1 tasks"


class TestDisplay:
    def test_headers_and_cards(self, capsys):
        board = TerminalBoard()
        board.show({"todo": [card(1, "Write tests")], "doing": [], "done": [card(3, "Ship")]})
        board.display(width=90)
        lines = plain_lines(capsys)
        assert lines[0].split(SEP.strip())[0].strip() == "TO DO"
        assert "DOING" in lines[0] and "DONE" in lines[0]
        assert set(lines[1].replace(SEP, "")) == {"-"}
        assert "1. Write tests" in lines[2]
        assert "(empty)" in lines[2]
        assert "3. Ship" in lines[2]

    def test_widths_fill_terminal(self):
        board = TerminalBoard()
        widths = board._compute_column_widths(100)
        assert sum(widths.values()) + len(SEP) * 2 == 100

    def test_narrow_terminal_keeps_minimum(self):
        board = TerminalBoard()
        board.show({"todo": [card(1, "word " * 30)], "doing": [], "done": []})
        widths = board._compute_column_widths(40)
        assert all(w >= MIN_COL_WIDTH for w in widths.values())

    def test_long_titles_wrap_inside_column(self, capsys):
        board = TerminalBoard()
        title = "Contribute to Open Source Projects every single week"
        board.show({"todo": [], "doing": [], "done": [card(3, title)]})
        board.display(width=3 * MIN_COL_WIDTH + 2 * len(SEP))
        lines = plain_lines(capsys)[2:]
        done_cells = [line.split(SEP)[-1].strip() for line in lines if line.count(SEP) == 2]
        assert done_cells[0].startswith("3. Contribute")
        assert " ".join(done_cells).replace("3. ", "", 1) == title
        assert all(len(c) <= MIN_COL_WIDTH for c in done_cells)

    def test_overlong_word_is_split(self):
        board = TerminalBoard()
        lines = [ANSI_RE.sub("", l) for l in board._wrap_card(card(1, "x" * 40), "todo", MIN_COL_WIDTH)]
        assert all(len(l) <= MIN_COL_WIDTH for l in lines)
        assert "".join(l[3:] for l in lines) == "x" * 40
