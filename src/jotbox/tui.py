"""jotbox curses-based terminal user interface."""

import curses
import curses.textpad
import locale
import os
from typing import List, Optional, Tuple

from loguru import logger

from .config import Settings, Theme
from .errors import JotboxError
from .events import Events, InputClosed, InputEvent
from .form import FieldView
from .keys import Key, key_from_curses
from .render import Fragment, text_width
from .storage import RecordStore, ensure_dir_exists
from .tabs import TabSet

HELP_TEXT = [
    "left/right: change tabs   up/down: scroll   n: new entry   Tab: toggle fold",
    "e <id> Enter: edit   d <id> Enter: delete   t <id> Enter: toggle task   Esc: cancel id   q: quit",
]

WRITING_HELP_TEXT = [
    "Ctrl-n: next box   Ctrl-b: previous box   up/down: scroll box",
    "Ctrl-s: save   Esc: cancel",
]

COLORS = {
    "default": -1,
    "black": curses.COLOR_BLACK,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
}

Row = List[Tuple[str, str]]


def fragments_to_rows(fragments: List[Fragment], width: int) -> List[Row]:
    """Split fragments into screen rows of (text, style), wrapping at width."""
    rows: List[Row] = [[]]
    used = 0
    for frag in fragments:
        parts = frag.text.split("\n")
        for i, part in enumerate(parts):
            if i > 0:
                rows.append([])
                used = 0
            while part:
                room = max(1, width - used)
                chunk = part[:room]
                while text_width(chunk) > room and len(chunk) > 1:
                    chunk = chunk[:-1]
                rows[-1].append((chunk, frag.style))
                used += text_width(chunk)
                part = part[len(chunk):]
                if part:
                    rows.append([])
                    used = 0
    if not rows[-1]:
        rows.pop()
    return rows


def wrap_text(text: str, width: int) -> List[str]:
    lines = []
    for line in text.split("\n"):
        if not line:
            lines.append("")
            continue
        while line:
            lines.append(line[:width])
            line = line[width:]
    return lines


class TUI:
    """Curses front end: draws the active tab and feeds it key events."""

    def __init__(self, stdscr, tabs: TabSet, settings: Settings):
        self.stdscr = stdscr
        self.tabs = tabs
        self.settings = settings
        self.theme: Theme = settings.theme
        self.status = "Press n to add an entry, q to quit."
        curses.curs_set(0)
        self.stdscr.keypad(True)
        self.height, self.width = self.stdscr.getmaxyx()
        self.inwin = curses.newwin(1, 1, 0, 0)
        self.inwin.keypad(True)
        self.attrs = self.init_styles()

    def init_styles(self) -> dict:
        """Map fragment style names to curses attributes using the theme."""
        italic = getattr(curses, "A_ITALIC", 0)
        plain = {
            "title": curses.A_BOLD | italic,
            "metadata": curses.A_DIM,
            "people": curses.A_DIM,
            "done": curses.A_BOLD,
            "not_done": curses.A_BOLD,
            "body": curses.A_NORMAL,
            "date_header": curses.A_BOLD | curses.A_UNDERLINE,
            "tab_active": curses.A_REVERSE,
            "tab_inactive": curses.A_NORMAL,
            "cursor": curses.A_BOLD,
        }
        if not curses.has_colors():
            return plain

        curses.start_color()
        try:
            curses.use_default_colors()
        except curses.error:
            pass
        t = self.theme
        colored = {
            "metadata": t.primary_metadata_color,
            "people": t.secondary_metadata_color,
            "done": t.done_color,
            "not_done": t.not_done_color,
            "date_header": t.secondary_metadata_color,
            "tab_active": t.tab_active_color,
            "tab_inactive": t.tab_inactive_color,
            "cursor": t.cursor_color,
        }
        attrs = dict(plain)
        for pair, (style, color) in enumerate(colored.items(), start=1):
            curses.init_pair(pair, COLORS[color], -1)
            base = plain[style] & ~curses.A_DIM
            if style == "tab_active":
                base = curses.A_BOLD
            attrs[style] = curses.color_pair(pair) | base
        return attrs

    def read_key(self) -> Optional[Key]:
        try:
            wch = self.inwin.get_wch()
        except curses.error:
            return None
        return key_from_curses(wch)

    def addstr(self, y: int, x: int, text: str, attr: int = curses.A_NORMAL) -> None:
        if y < 0 or y >= self.height or x >= self.width - 1:
            return
        try:
            self.stdscr.addnstr(y, x, text, self.width - 1 - x, attr)
        except curses.error:
            pass

    def draw(self):
        """Render tab bar, list or form, help box and status line."""
        self.stdscr.erase()
        self.height, self.width = self.stdscr.getmaxyx()
        if self.height < 8 or self.width < 20:
            self.addstr(0, 0, "Terminal too small")
            self.stdscr.refresh()
            return

        self.draw_tab_bar()
        tab = self.tabs.active
        help_lines = WRITING_HELP_TEXT if tab.is_authoring else HELP_TEXT
        body_top = 2
        body_bottom = self.height - len(help_lines) - 3
        if tab.is_authoring:
            self.draw_form(tab.field_views(), body_top, body_bottom)
        else:
            self.draw_list(body_top, body_bottom)

        self.stdscr.hline(body_bottom + 1, 0, curses.ACS_HLINE, self.width)
        for i, line in enumerate(help_lines):
            self.addstr(body_bottom + 2 + i, 0, line.center(self.width - 1), curses.A_DIM)

        status = tab.picker.prompt() or self.status
        self.addstr(self.height - 1, 0, status, curses.A_BOLD if tab.picker.armed else curses.A_NORMAL)
        self.stdscr.refresh()

    def draw_tab_bar(self):
        x = 1
        for i, title in enumerate(self.tabs.titles):
            style = "tab_active" if i == self.tabs.index else "tab_inactive"
            label = f" {title} "
            self.addstr(0, x, label, self.attrs[style])
            x += len(label) + 1
        self.stdscr.hline(1, 0, curses.ACS_HLINE, self.width)

    def draw_list(self, top: int, bottom: int):
        tab = self.tabs.active
        width = self.width - 2
        rows = fragments_to_rows(
            tab.fragments(width, self.theme.done_mark, self.theme.not_done_mark), width
        )
        body_h = bottom - top + 1
        tab.scroll = min(tab.scroll, max(0, len(rows) - 1))
        for i, row in enumerate(rows[tab.scroll : tab.scroll + body_h]):
            x = 1
            for text, style in row:
                self.addstr(top + i, x, text, self.attrs.get(style, curses.A_NORMAL))
                x += text_width(text)

    def draw_form(self, views: List[FieldView], top: int, bottom: int):
        """Stack one bordered box per field, heights split by weight."""
        avail = bottom - top + 1
        total = sum(v.weight for v in views) or 1
        heights = [max(3, avail * v.weight // total) for v in views]
        y = top
        for view, h in zip(views, heights):
            if y + h - 1 > bottom:
                h = bottom - y + 1
            if h < 3:
                break
            self.draw_field(view, y, h)
            y += h

    def draw_field(self, view: FieldView, y: int, h: int):
        x2 = self.width - 2
        try:
            curses.textpad.rectangle(self.stdscr, y, 0, y + h - 1, x2)
        except curses.error:
            pass
        label_attr = curses.A_BOLD | curses.A_REVERSE if view.focused else curses.A_BOLD
        self.addstr(y, 2, f" {view.label} ", label_attr)
        inner_w = max(1, x2 - 2)
        lines = wrap_text(view.content, inner_w)
        for i, line in enumerate(lines[view.scroll : view.scroll + h - 2]):
            self.addstr(y + 1 + i, 1, line)
        if view.focused:
            visible = lines[view.scroll : view.scroll + h - 2]
            if visible and len(lines) - view.scroll <= h - 2:
                cy = y + len(visible)
                cx = 1 + len(visible[-1])
            else:
                cy, cx = y + 1, 1
            self.addstr(cy, cx, self.theme.cursor_char, self.attrs["cursor"])

    def handle_key(self, key: Key) -> bool:
        """Apply one key; errors land on the status line. True means quit."""
        tab = self.tabs.active
        try:
            if self.tabs.keypress(key):
                return True
        except JotboxError as err:
            logger.warning("{} tab: {}", tab.category, err)
            self.status = f"Error: {err}"
            return False
        if tab.status:
            self.status = tab.status
            tab.status = ""
        return False

    def run(self):
        """Main event loop: draw, wait for one event, apply it."""
        events = Events(self.read_key, self.settings.tick_rate).start()
        try:
            while True:
                self.draw()
                event = events.next()
                if isinstance(event, InputClosed):
                    logger.error("Input closed: {}", event.reason)
                    break
                if isinstance(event, InputEvent) and self.handle_key(event.key):
                    break
        finally:
            events.stop()


def start_curses(tabs: TabSet, settings: Settings):
    """Initialize curses and run TUI."""
    os.environ.setdefault("ESCDELAY", "25")
    locale.setlocale(locale.LC_CTYPE, "")

    def _main(stdscr):
        tui = TUI(stdscr, tabs, settings)
        tui.run()

    curses.wrapper(_main)


def main(settings: Settings) -> None:
    """TUI entry point: load every tab, then hand the terminal to curses."""
    ensure_dir_exists(settings.notes_dir)
    tabs = TabSet.from_store(RecordStore(settings.notes_dir))
    logger.info("Starting TUI on {}", settings.notes_dir)
    start_curses(tabs, settings)
    logger.info("TUI closed")
