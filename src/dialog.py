"""Modal edit dialog for the terminal, built on click prompts.

While open, run() keeps the user inside the form: title, description and
status are asked in turn, then the edit is saved or cancelled. Ctrl-C or
end of input acts as the escape key and dismisses the dialog.
"""
import logging
import sys
from typing import Callable, Dict, Mapping, Optional
import click
from models import STATUSES
from theme import color, ERROR_COLOR, HEADER_COLOR, BOLD

log = logging.getLogger(__name__)

FIELD_LABELS = {'title': 'Title', 'description': 'Description', 'status': 'Status'}


def _noop(*_args) -> None:
    return None


class TerminalDialog:
    def __init__(self, interactive: Optional[bool] = None):
        self.is_open: bool = False
        self.values: Dict[str, str] = {}
        self.errors: Dict[str, str] = {}
        self._interactive = interactive
        self._on_submit: Callable = _noop
        self._on_dismiss: Callable = _noop
        self._on_cancel: Callable = _noop
        self._on_change: Callable = _noop

    def bind(self, on_submit, on_dismiss, on_cancel, on_change) -> None:
        self._on_submit = on_submit
        self._on_dismiss = on_dismiss
        self._on_cancel = on_cancel
        self._on_change = on_change

    @property
    def interactive(self) -> bool:
        if self._interactive is None:
            return sys.stdin.isatty()
        return self._interactive

    # -------------------- open / close --------------------
    def open(self, initial_values: Mapping[str, str]) -> None:
        self.values = {k: str(initial_values.get(k, '')) for k in FIELD_LABELS}
        self.errors = {}
        self.is_open = True

    def close(self) -> None:
        self.is_open = False
        self.errors = {}

    def show_errors(self, errors: Mapping[str, str]) -> None:
        self.errors = dict(errors)

    # -------------------- interaction --------------------
    def run(self) -> None:
        """Prompt until the dialog is closed by save, cancel or dismiss."""
        while self.is_open:
            try:
                self._prompt_fields()
                save = click.confirm('Save changes?', default=True)
            except click.Abort:
                click.echo()
                self._on_dismiss()
                return
            if not save:
                self._on_cancel()
                return
            self._on_submit(dict(self.values))
            if self.is_open and not self.interactive:
                # scripted input would otherwise replay the same failing form;
                # interactive runs show the errors inline on the next prompt
                self._echo_errors()
                log.info("dialog dismissed after failed submit (non-interactive)")
                self._on_dismiss()
                return

    def _prompt_fields(self) -> None:
        click.echo(color('Edit task', HEADER_COLOR, BOLD) + ' (Ctrl-C to close)')
        for field in ('title', 'description'):
            self._echo_field_error(field)
            current = self.values[field]
            value = click.prompt(FIELD_LABELS[field], default=current, show_default=bool(current))
            self._set(field, value)
        self._echo_field_error('status')
        current = self.values['status'] if self.values['status'] in STATUSES else None
        value = click.prompt(FIELD_LABELS['status'], type=click.Choice(STATUSES), default=current)
        self._set('status', value)

    def _set(self, field: str, value: str) -> None:
        if value != self.values.get(field):
            self.values[field] = value
            self._on_change(field, value)

    def _echo_field_error(self, field: str) -> None:
        message = self.errors.get(field)
        if message:
            click.echo(color(f'  ! {message}', ERROR_COLOR))

    def _echo_errors(self) -> None:
        for field, message in self.errors.items():
            click.echo(color(f'{FIELD_LABELS.get(field, field)}: {message}', ERROR_COLOR))
