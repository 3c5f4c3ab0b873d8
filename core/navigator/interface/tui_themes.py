"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "dark-olive": {
        "": "#d7dfe6",
        "text": "#d7dfe6",
        "text.dim": "#97a0a9",
        "text.dimmer": "#6d717a",
        "header": "#ffb347 bold",
        "border": "#4b525a",
        "selected": "bg:#3b3b3b #d7dfe6 bold",
        "hover": "bg:#2a2f33",
        "completed": "#6d717a strike",
        "chevron": "#6d717a",
        "badge": "#97a0a9",
        "loading": "#e5c07b italic",
        "error": "#e06c75 bold",
        "icon.check": "#9ad974 bold",
        "icon.open": "#97a0a9",
        "icon.folder": "#e5c07b",
        "icon.task": "#61afef",
        "icon.file": "#97a0a9",
        "priority.high": "#ef4444 bold",
        "priority.medium": "#f59e0b bold",
        "priority.low": "#22c55e bold",
        "due.overdue": "#ef4444",
        "due.soon": "#f59e0b",
        "due": "#97a0a9",
        "label": "#97a0a9",
        "progress.done": "#9ad974",
        "progress.todo": "#4b525a",
        "breadcrumb": "#d7dfe6 underline",
        "address": "#61afef",
        "status.message": "#e5c07b",
        "status.error": "#e06c75 bold",
    },
    "dark-contrast": {
        "": "#e8eaec",
        "text": "#e8eaec",
        "text.dim": "#a7b0ba",
        "text.dimmer": "#6f757d",
        "header": "#ffb347 bold",
        "border": "#5a6169",
        "selected": "bg:#3d4047 #e8eaec bold",
        "hover": "bg:#2c2f35",
        "completed": "#6f757d strike",
        "chevron": "#6f757d",
        "badge": "#a7b0ba",
        "loading": "#f0c674 italic",
        "error": "#ff6b6b bold",
        "icon.check": "#b8f171 bold",
        "icon.open": "#a7b0ba",
        "icon.folder": "#f0c674",
        "icon.task": "#7cc4ff",
        "icon.file": "#a7b0ba",
        "priority.high": "#ef4444 bold",
        "priority.medium": "#f59e0b bold",
        "priority.low": "#22c55e bold",
        "due.overdue": "#ff6b6b",
        "due.soon": "#f0c674",
        "due": "#a7b0ba",
        "label": "#a7b0ba",
        "progress.done": "#b8f171",
        "progress.todo": "#5a6169",
        "breadcrumb": "#e8eaec underline",
        "address": "#7cc4ff",
        "status.message": "#f0c674",
        "status.error": "#ff6b6b bold",
    },
    "light": {
        "": "#24292f",
        "text": "#24292f",
        "text.dim": "#57606a",
        "text.dimmer": "#8c959f",
        "header": "#9a6700 bold",
        "border": "#d0d7de",
        "selected": "bg:#ddf4ff #24292f bold",
        "hover": "bg:#f6f8fa",
        "completed": "#8c959f strike",
        "chevron": "#8c959f",
        "badge": "#57606a",
        "loading": "#9a6700 italic",
        "error": "#cf222e bold",
        "icon.check": "#1a7f37 bold",
        "icon.open": "#57606a",
        "icon.folder": "#9a6700",
        "icon.task": "#0969da",
        "icon.file": "#57606a",
        "priority.high": "#ef4444 bold",
        "priority.medium": "#f59e0b bold",
        "priority.low": "#22c55e bold",
        "due.overdue": "#cf222e",
        "due.soon": "#9a6700",
        "due": "#57606a",
        "label": "#57606a",
        "progress.done": "#1a7f37",
        "progress.todo": "#d0d7de",
        "breadcrumb": "#24292f underline",
        "address": "#0969da",
        "status.message": "#9a6700",
        "status.error": "#cf222e bold",
    },
}

DEFAULT_THEME = "dark-olive"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    return Style.from_dict(get_theme_palette(theme))


__all__ = ["THEMES", "DEFAULT_THEME", "get_theme_palette", "build_style"]
