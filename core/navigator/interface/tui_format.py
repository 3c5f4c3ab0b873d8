"""Text fitting and small label helpers shared by columns and the preview."""

import re
from datetime import date
from typing import Callable, Optional, Tuple

from wcwidth import wcwidth

from core import Priority

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


def display_width(text: str) -> int:
    return sum(max(0, wcwidth(ch)) for ch in text)


def clip(text: str, width: int, ellipsis: str = "…") -> str:
    """Cut `text` to at most `width` terminal cells."""
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text
    budget = width - display_width(ellipsis)
    out = []
    used = 0
    for ch in text:
        w = max(0, wcwidth(ch))
        if used + w > budget:
            break
        out.append(ch)
        used += w
    return "".join(out) + ellipsis


def pad(text: str, width: int) -> str:
    text = clip(text, width)
    return text + " " * max(0, width - display_width(text))


def color_style(color: str, fallback: str = "class:label") -> str:
    """Inline style for a label colour; unknown formats use the palette default."""
    color = (color or "").strip()
    if _HEX_COLOR.match(color):
        return f"fg:{color}"
    return fallback


def priority_label(priority: Priority, t: Callable[..., str]) -> Optional[Tuple[str, str]]:
    if priority is Priority.NONE:
        return None
    return f"class:{priority.style}", t(f"PRIORITY_{priority.code}")


def due_label(due: Optional[date], t: Callable[..., str], today: Optional[date] = None) -> Optional[Tuple[str, str]]:
    """Relative due-date text: today, tomorrow, overdue, weekday within a week, else the date."""
    if due is None:
        return None
    today = today or date.today()
    days = (due - today).days
    if days < 0:
        return "class:due.overdue", t("DUE_OVERDUE", days=-days)
    if days == 0:
        return "class:due.soon", t("DUE_TODAY")
    if days == 1:
        return "class:due.soon", t("DUE_TOMORROW")
    if days <= 7:
        return "class:due", t(f"WEEKDAY_{due.weekday()}")
    return "class:due", t("DUE_DATE", day=due.day, month=due.month, year=due.year)


__all__ = ["display_width", "clip", "pad", "color_style", "priority_label", "due_label"]
