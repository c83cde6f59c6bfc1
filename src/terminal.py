"""Terminal render target: lays the three columns out side by side.

The presenter hands over fully built cards via show(); this module only
decides widths, wraps titles and prints. Card clicks are fired by id
since a terminal has no pointer.
"""
from typing import Dict, List, Mapping, Optional, Tuple
import re, shutil
import click
from board import Card
from models import STATUSES
from theme import color, HEADER_COLOR, STATUS_COLOR, ID_COLOR, EMPTY_COLOR, BOLD

HEADER_TITLES: Dict[str, str] = {"todo": "TO DO", "doing": "DOING", "done": "DONE"}
MIN_COL_WIDTH = 18
SEP = " | "
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


class TerminalBoard:
    def __init__(self) -> None:
        self.columns: Dict[str, List[Card]] = {s: [] for s in STATUSES}

    # -------------------- render target --------------------
    def show(self, columns: Mapping[str, List[Card]]) -> None:
        """Clear all three containers and repopulate them."""
        self.columns = {s: list(columns.get(s, ())) for s in STATUSES}

    # -------------------- card lookup --------------------
    def find_card(self, task_id: int) -> Optional[Card]:
        for cards in self.columns.values():
            for card in cards:
                if card.task_id == task_id:
                    return card
        return None

    def click(self, task_id: int) -> bool:
        card = self.find_card(task_id)
        if card is None:
            return False
        card.click()
        return True

    # -------------------- display --------------------
    def display(self, width: Optional[int] = None) -> None:
        term_width = width or shutil.get_terminal_size((120, 30)).columns
        widths = self._compute_column_widths(term_width)
        wrapped = self._wrap_all_columns(widths)
        self._render(widths, wrapped)

    # ---- width calculation ----
    def _compute_column_widths(self, term_width: int) -> Dict[str, int]:
        sep_total = len(SEP) * (len(STATUSES) - 1)
        desired: Dict[str, int] = {}
        for status in STATUSES:
            longest = len(HEADER_TITLES[status])
            for card in self.columns[status]:
                prefix, title_text = self._card_segments(card)
                longest = max(longest, len(prefix) + len(title_text))
            desired[status] = max(MIN_COL_WIDTH, longest)
        widths = dict(desired)
        total = sum(widths.values()) + sep_total
        if total > term_width:
            target_space = max(term_width - sep_total, len(STATUSES) * MIN_COL_WIDTH)
            while sum(widths.values()) > target_space:
                widest = max(STATUSES, key=lambda s: widths[s])
                if widths[widest] <= MIN_COL_WIDTH:
                    break
                widths[widest] -= 1
        else:
            extra = term_width - total
            i = 0
            while extra > 0:
                widths[STATUSES[i % len(STATUSES)]] += 1
                extra -= 1
                i += 1
        return widths

    # ---- wrapping ----
    def _wrap_all_columns(self, widths: Mapping[str, int]) -> Dict[str, List[str]]:
        wrapped: Dict[str, List[str]] = {}
        for status in STATUSES:
            if not self.columns[status]:
                wrapped[status] = [color('(empty)', EMPTY_COLOR)]
                continue
            acc: List[str] = []
            for card in self.columns[status]:
                acc.extend(self._wrap_card(card, status, widths[status]))
            wrapped[status] = acc
        return wrapped

    @staticmethod
    def _card_segments(card: Card) -> Tuple[str, str]:
        return f"{card.task_id}. ", card.title if card.title else '<untitled>'

    def _wrap_card(self, card: Card, status: str, col_width: int) -> List[str]:
        prefix, title_text = self._card_segments(card)
        prefix_colored = color(f"{card.task_id}.", ID_COLOR, BOLD) + ' '
        status_col = STATUS_COLOR.get(status, '')
        limit = max(1, col_width - len(prefix))
        lines_raw: List[str] = []
        current = ''
        for w in title_text.split():
            # hard-split words that cannot fit on any line
            while len(w) > limit:
                if current:
                    lines_raw.append(current)
                    current = ''
                lines_raw.append(w[:limit])
                w = w[limit:]
            candidate = w if not current else current + ' ' + w
            if len(candidate) <= limit:
                current = candidate
            else:
                lines_raw.append(current)
                current = w
        if current:
            lines_raw.append(current)
        if not lines_raw:
            return [prefix_colored + color('<untitled>', status_col)]
        indent = ' ' * len(prefix)
        return [(prefix_colored if idx == 0 else indent) + color(line, status_col)
                for idx, line in enumerate(lines_raw)]

    # ---- rendering ----
    def _render(self, widths: Mapping[str, int], wrapped_lines: Mapping[str, List[str]]) -> None:
        rows = max(len(wrapped_lines[s]) for s in STATUSES)
        header_cells = [self._pad(color(HEADER_TITLES[s], HEADER_COLOR, BOLD), widths[s]) for s in STATUSES]
        click.echo(SEP.join(header_cells))
        click.echo(SEP.join(color('-' * widths[s], HEADER_COLOR) for s in STATUSES))
        for r in range(rows):
            row_cells: List[str] = []
            for s in STATUSES:
                col_lines = wrapped_lines[s]
                line = col_lines[r] if r < len(col_lines) else ''
                row_cells.append(self._pad(line, widths[s]))
            click.echo(SEP.join(row_cells).rstrip())

    def _pad(self, text: str, width: int) -> str:
        pad = width - self._visible_len(text)
        return text + ' ' * pad if pad > 0 else text

    @staticmethod
    def _visible_len(s: str) -> int:
        return len(ANSI_RE.sub('', s))

    def summary(self) -> str:
        return ', '.join(f'{HEADER_TITLES[s].title()}: {len(self.columns[s])} tasks' for s in STATUSES)
