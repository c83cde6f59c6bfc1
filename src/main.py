"""Main entry point for terminal Kanban.

Wires the store, presenter, terminal board and dialog together. Logs go
to a rotating file so they never interleave with the drawn board.
"""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional
import click
from board import BoardPresenter
from cli import CLI
from dialog import TerminalDialog
from seed import SeedError, load_seed
from store import TaskStore
from terminal import TerminalBoard

DEFAULT_LOG_FILE = Path(__file__).resolve().parent.parent / 'kanban.log'
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')
LOG_HANDLER_NAME = 'kanban'


def setup_logging(log_file: Path, level: str = 'ERROR') -> logging.Handler:
    root = logging.getLogger()
    # reset our handler so repeated calls honor the latest level
    for h in list(root.handlers):
        if h.get_name() == LOG_HANDLER_NAME:
            root.removeHandler(h)
            h.close()
    root.setLevel(logging.DEBUG)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    fh = RotatingFileHandler(log_file, maxBytes=2000000, backupCount=2, encoding='utf-8')
    fh.setLevel(getattr(logging, level.upper(), logging.ERROR))
    fh.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))
    fh.set_name(LOG_HANDLER_NAME)
    root.addHandler(fh)
    return fh


def build_app(seed_path: Optional[Path] = None, interactive: Optional[bool] = None):
    """Return (store, presenter, target, dialog) for a fresh board."""
    store = TaskStore(load_seed(seed_path))
    target = TerminalBoard()
    dialog = TerminalDialog(interactive=interactive)
    presenter = BoardPresenter(store, target, dialog)
    return store, presenter, target, dialog


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--seed', 'seed_path', type=click.Path(dir_okay=False, path_type=Path),
              help='JSON file with the initial tasks (defaults to the built-in set).')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), default='ERROR',
              envvar='KANBAN_LOG_LEVEL', show_default=True)
@click.option('--log-file', type=click.Path(dir_okay=False, path_type=Path), default=DEFAULT_LOG_FILE,
              envvar='KANBAN_LOG_FILE')
@click.option('--alt-screen/--no-alt-screen', default=None,
              help='Use the terminal alternate screen (default: on for a TTY).')
@click.option('--summary', is_flag=True, help='Print the board once and exit.')
def main(seed_path: Optional[Path], log_level: str, log_file: Path,
         alt_screen: Optional[bool], summary: bool) -> None:
    """Edit tasks on a three-column Kanban board."""
    setup_logging(log_file, log_level)
    try:
        store, presenter, target, dialog = build_app(seed_path)
    except SeedError as exc:
        logging.getLogger(__name__).error("%s", exc)
        raise click.ClickException(str(exc)) from exc
    if summary:
        presenter.render()
        target.display()
        click.echo(target.summary())
        return
    CLI(presenter, target, dialog, alt_screen=alt_screen).run()


if __name__ == "__main__":
    main()
