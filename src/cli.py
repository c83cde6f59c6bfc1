"""Interactive loop for the Kanban board.

Each cycle redraws the board and reads one command. Selecting a card by
id plays the role of clicking it: the presenter opens the edit dialog,
which then runs until saved, cancelled or dismissed.
"""
import logging
import os
import sys
from typing import List, Optional
import click
from board import BoardPresenter
from dialog import TerminalDialog
from store import TaskNotFound
from terminal import TerminalBoard
from theme import color, STATUS_COLOR, HEADER_COLOR, BOLD

log = logging.getLogger(__name__)


def _truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def _enter_alt_screen() -> None:
    click.echo("\033[?1049h", nl=False)


def _leave_alt_screen() -> None:
    click.echo("\033[?1049l", nl=False)


def default_alt_screen() -> bool:
    # alt screen only makes sense on a real terminal; KANBAN_ALT_SCREEN overrides
    return _truthy_env(os.getenv("KANBAN_ALT_SCREEN"), sys.stdout.isatty())


class CLI:
    def __init__(self, presenter: BoardPresenter, target: TerminalBoard, dialog: TerminalDialog,
                 alt_screen: Optional[bool] = None):
        self.presenter = presenter
        self.target = target
        self.dialog = dialog
        self.alt_screen: bool = default_alt_screen() if alt_screen is None else alt_screen
        self.notice: Optional[str] = None

    def run(self) -> None:
        """Main loop; the board is cleared and redrawn each cycle."""
        exit_message: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        try:
            self.presenter.render()
            while True:
                self._redraw()
                line = click.prompt("\n", prompt_suffix=": ", default="", show_default=False).strip()
                if not line:
                    continue
                lower = line.lower()
                if lower == 'help':
                    click.clear()
                    self._help()
                    click.prompt("\nPress Enter to return to the board", default="", show_default=False)
                    continue
                if lower in ('exit', 'quit'):
                    exit_message = "Goodbye."
                    break
                self._handle_command(line)
        except click.Abort:
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                click.echo(exit_message)

    def _redraw(self) -> None:
        click.clear()
        click.echo("Kanban Board:")
        self.target.display()
        if self.notice:
            click.echo(f"\n{self.notice}")
            self.notice = None

    # -------------------- command dispatch --------------------
    def _handle_command(self, line: str) -> None:
        tokens = line.split()
        cmd = tokens[0].lower()
        if cmd.rstrip('.').isdigit() and len(tokens) == 1:
            self._cmd_edit(['edit', cmd])
        elif cmd in ('edit', 'e'):
            self._cmd_edit(tokens)
        elif cmd == 'show':
            self._cmd_show(tokens)
        else:
            log.debug("unknown command %r", line)
            self.notice = "Unknown command. Type 'help' for instructions."

    # ---- individual command helpers ----
    @staticmethod
    def _parse_id(tokens: List[str]) -> Optional[int]:
        if len(tokens) != 2:
            return None
        raw_id = tokens[1].rstrip('.')
        return int(raw_id) if raw_id.isdigit() else None

    def _cmd_edit(self, tokens: List[str]) -> None:
        tid = self._parse_id(tokens)
        if tid is None:
            self.notice = "Usage: edit <id>"
            return
        if not self.target.click(tid):
            self.notice = f"Task id {tid} not found."
            return
        if self.dialog.is_open:
            self.dialog.run()

    def _cmd_show(self, tokens: List[str]) -> None:
        tid = self._parse_id(tokens)
        if tid is None:
            self.notice = "Usage: show <id>"
            return
        try:
            task = self.presenter.store.find_by_id(tid)
        except TaskNotFound as exc:
            self.notice = str(exc)
            return
        status = color(task.status, STATUS_COLOR.get(task.status, ''))
        self.notice = (f"{color(f'{task.id}. {task.title}', HEADER_COLOR, BOLD)} [{status}]\n"
                       f"{task.description or '(no description)'}")

    # -------------------- help --------------------
    def _help(self) -> None:
        click.echo("Commands:")
        click.echo("  <id>                Edit a task (same as clicking its card)")
        click.echo("  edit <id>, e <id>   Edit a task")
        click.echo("  show <id>           Show a task's description and status")
        click.echo("  help                Show this help (press Enter to return)")
        click.echo("  exit, quit          Leave the board")
        click.echo("")
        click.echo("In the edit dialog: Enter keeps the current value, Ctrl-C closes without saving.")
