from typing import List

from models.enums import Month
from ui.themes import Rgb
from ui.tracker import DayRow
from ui.view import ViewState

HELP_TEXT = (
    "Navigation: <  > month back/forward, [  ] focused day back/forward,\n"
    "            open QUERY  (e.g. open year=2024&month=2&focus=today)\n"
    "Edits:      c DAY STEP  toggle mood step 0-14\n"
    "            a DAY       anxiety (0-3)\n"
    "            s DAY       hours slept\n"
    "            n DAY       comment\n"
    "            At a prompt Enter keeps the value and '-' clears it.\n"
    "Other:      help, q"
)


def month_label(view: ViewState) -> str:
    return f"{Month(view.month).name.lower()}, {view.year}"


def focus_label(view: ViewState) -> str:
    return f"d. {view.focus}" if view.focus is not None else "all days"


def header_message(view: ViewState) -> str:
    return f"< {month_label(view)} >    [ {focus_label(view)} ]"


def _cell(color: Rgb, checked: bool) -> str:
    r, g, b = color
    mark = "x" if checked else " "
    return f"\x1b[48;2;{r};{g};{b}m{mark}\x1b[0m"


def grid_message(rows: List[DayRow]) -> str:
    if not rows:
        return "No day matches the current focus."
    lines = []
    for row in rows:
        cells = "".join(_cell(cell.color, cell.checked) for cell in row.cells)
        line = f"{row.date:>2} {cells}  {row.anxiety:>1} {row.hours_slept:>2}"
        if row.comment:
            line += f"  {row.comment}"
        lines.append(line)
    return "\n".join(lines)
