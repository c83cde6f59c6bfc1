"""Color & style helpers.

Decisions:
- Status keys are 'todo', 'doing', 'done'; headers read 'TO DO', 'DOING', 'DONE'.
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or project .env file.
"""
from __future__ import annotations
import logging
import os, sys
from pathlib import Path

log = logging.getLogger(__name__)

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

PALETTE_KEYS = ('KANBAN_PRIMARY', 'KANBAN_TODO', 'KANBAN_DOING', 'KANBAN_DONE', 'KANBAN_ERROR')


def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''


def _hex_to_rgb(hex_code: str) -> tuple[int, int, int]:
    h = hex_code.lstrip('#')
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    idx = 16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)
    return f"\033[38;5;{idx}m"


def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    return _fg_256(r, g, b)


def is_hex_color(value: str) -> bool:
    h = value.strip().lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)


def read_env_overrides(env_path: Path) -> dict[str, str]:
    """Palette overrides from a KEY=VALUE .env file; invalid lines are ignored."""
    overrides: dict[str, str] = {}
    if not env_path.exists():
        return overrides
    try:
        text = env_path.read_text(encoding='utf-8')
    except OSError:
        log.warning("could not read %s", env_path, exc_info=True)
        return overrides
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        if k in PALETTE_KEYS and is_hex_color(v):
            overrides[k] = '#' + v.strip().lstrip('#')
    return overrides


RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

# Default palette
HEX_DEFAULTS = {
    'KANBAN_PRIMARY': '#476EAE',
    'KANBAN_TODO': '#48B3AF',
    'KANBAN_DOING': '#F6FF99',
    'KANBAN_DONE': '#A7E399',
    'KANBAN_ERROR': '#E06C75',
}

_ENV_OVERRIDES = read_env_overrides(Path(__file__).resolve().parent.parent / '.env')


def _resolve(key: str) -> str:
    # priority: real env var > .env override > default
    env_value = os.environ.get(key)
    if env_value and is_hex_color(env_value):
        return '#' + env_value.strip().lstrip('#')
    return _ENV_OVERRIDES.get(key, HEX_DEFAULTS[key])


PRIMARY = _from_hex(_resolve('KANBAN_PRIMARY'))

STATUS_COLOR = {
    'todo': _from_hex(_resolve('KANBAN_TODO')),
    'doing': _from_hex(_resolve('KANBAN_DOING')),
    'done': _from_hex(_resolve('KANBAN_DONE')),
}

HEADER_COLOR = PRIMARY
ID_COLOR = PRIMARY + BOLD
EMPTY_COLOR = DIM + PRIMARY
ERROR_COLOR = _from_hex(_resolve('KANBAN_ERROR')) + BOLD


def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET


__all__ = [
    'color', 'RESET', 'BOLD', 'DIM', 'STATUS_COLOR', 'HEADER_COLOR', 'ID_COLOR', 'EMPTY_COLOR',
    'ERROR_COLOR', 'read_env_overrides', 'is_hex_color',
]
