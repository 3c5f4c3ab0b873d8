"""Side preview renderer for the navigator."""

import textwrap
from datetime import date
from typing import Callable, List, Optional, Sequence, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core import Collection, Item, SubItem
from core.navigator.application.preview_composer import Preview, PreviewKind
from core.navigator.interface.tui_format import clip, color_style, display_width, due_label, priority_label

Fragment = Tuple[str, str]

MAX_CHILD_ROWS = 8
MAX_DESCRIPTION_LINES = 6
PROGRESS_BAR_WIDTH = 20

KIND_KEYS = {
    PreviewKind.COLLECTION: "PREVIEW_KIND_COLLECTION",
    PreviewKind.ITEM: "PREVIEW_KIND_ITEM",
    PreviewKind.SUB_ITEM: "PREVIEW_KIND_SUB_ITEM",
}


def _fit(fragments: Sequence[Fragment], width: int) -> List[Fragment]:
    out: List[Fragment] = []
    used = 0
    for style, text in fragments:
        room = width - used
        if room <= 0:
            break
        text = clip(text, room)
        out.append((style, text))
        used += display_width(text)
    if used < width:
        out.append(("", " " * (width - used)))
    return out


class _Box:
    def __init__(self, width: int) -> None:
        self.inner = max(10, width - 4)
        self.parts: List[Fragment] = [("class:border", "╭" + "─" * (self.inner + 2) + "╮\n")]

    def line(self, *fragments: Fragment) -> None:
        self.parts.append(("class:border", "│ "))
        self.parts.extend(_fit(fragments, self.inner))
        self.parts.append(("class:border", " │\n"))

    def wrapped(self, text: str, style: str = "class:text", limit: Optional[int] = None) -> None:
        lines: List[str] = []
        for paragraph in text.splitlines() or [""]:
            lines.extend(textwrap.wrap(paragraph, self.inner) or [""])
        if limit is not None and len(lines) > limit:
            lines = lines[:limit]
            lines[-1] = clip(lines[-1] + " …", self.inner)
        for chunk in lines:
            self.line((style, chunk))

    def rule(self) -> None:
        self.parts.append(("class:border", "├" + "─" * (self.inner + 2) + "┤\n"))

    def close(self) -> FormattedText:
        self.parts.append(("class:border", "╰" + "─" * (self.inner + 2) + "╯"))
        return FormattedText(self.parts)


def _progress_line(done: int, total: int, percent: int, t: Callable[..., str]) -> List[Fragment]:
    filled = int(percent * PROGRESS_BAR_WIDTH / 100)
    return [
        ("class:text.dim", f"{t('PREVIEW_PROGRESS')} "),
        ("class:progress.done", "█" * filled),
        ("class:progress.todo", "░" * (PROGRESS_BAR_WIDTH - filled)),
        ("class:text.dim", f" {done}/{total} ({percent}%)"),
    ]


def _meta_lines(box: _Box, entity, t: Callable[..., str], today: date) -> None:
    if entity.is_completed:
        box.line(("class:icon.check", f"✔ {t('PREVIEW_COMPLETED')}"))
    priority = priority_label(entity.priority, t)
    if priority:
        box.line(("class:text.dim", f"{t('PREVIEW_PRIORITY')}: "), priority)
    due = due_label(entity.due_date, t, today)
    if due:
        box.line(("class:text.dim", f"{t('PREVIEW_DUE')}: "), due)
    if entity.labels:
        fragments: List[Fragment] = [("class:text.dim", f"{t('PREVIEW_LABELS')}: ")]
        for label in entity.labels:
            fragments.append((color_style(label.color), "● "))
            fragments.append(("class:text", f"{label.name} "))
        box.line(*fragments)


def _children_lines(box: _Box, preview: Preview, t: Callable[..., str]) -> None:
    heading = t("PREVIEW_TASKS") if preview.kind is PreviewKind.COLLECTION else t("PREVIEW_SUBTASKS")
    box.rule()
    if preview.children_loading:
        box.line(("class:header", heading))
        box.line(("class:loading", t("PREVIEW_CHILDREN_LOADING")))
        return
    if not preview.children_known:
        box.line(("class:header", heading))
        box.line(("class:text.dim", t("PREVIEW_CHILDREN_UNKNOWN")))
        return
    total = len(preview.children)
    if not total:
        box.line(("class:header", heading))
        box.line(("class:text.dim", t("PREVIEW_NO_TASKS") if preview.kind is PreviewKind.COLLECTION else t("PREVIEW_NO_SUBTASKS")))
        return
    box.line(("class:header", f"{heading} "), ("class:badge", str(total)))
    box.line(*_progress_line(preview.completed_children, total, preview.progress, t))
    for child in preview.children[:MAX_CHILD_ROWS]:
        if child.is_completed:
            box.line(("class:icon.check", "✔ "), ("class:completed", child.title))
        else:
            box.line(("class:icon.open", "○ "), ("class:text", child.title))
    if total > MAX_CHILD_ROWS:
        box.line(("class:text.dim", t("PREVIEW_MORE", count=total - MAX_CHILD_ROWS)))


def _title(entity) -> str:
    return entity.name if isinstance(entity, Collection) else entity.title


def build_preview_text(
    preview: Preview,
    t: Callable[..., str],
    width: int = 44,
    today: Optional[date] = None,
) -> FormattedText:
    today = today or date.today()
    box = _Box(width)
    if preview.is_empty:
        box.line(("class:text.dim", t("PREVIEW_EMPTY")))
        return box.close()

    entity = preview.entity
    box.line(("class:header", t(KIND_KEYS[preview.kind])), ("class:text.dimmer", f"  #{entity.id}"))
    box.wrapped(_title(entity), "class:completed" if entity.is_completed else "class:text")
    parent = preview.parent
    if isinstance(parent, (Collection, Item)):
        box.line(("class:text.dim", t("PREVIEW_IN", name=_title(parent))))
    _meta_lines(box, entity, t, today)

    description = (entity.description or "").strip()
    if description:
        box.rule()
        box.line(("class:text.dim", t("PREVIEW_DESCRIPTION")))
        box.wrapped(description, limit=MAX_DESCRIPTION_LINES)
    link = getattr(entity, "link", "")
    if link:
        box.line(("class:text.dim", f"{t('PREVIEW_LINK')}: "), ("class:address", link))

    if not isinstance(entity, SubItem):
        _children_lines(box, preview, t)
    return box.close()


__all__ = ["build_preview_text"]
