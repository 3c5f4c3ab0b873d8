from prompt_toolkit.styles import Style

from core.navigator.interface.tui_themes import DEFAULT_THEME, THEMES, build_style, get_theme_palette

REQUIRED_KEYS = {
    "selected",
    "hover",
    "completed",
    "chevron",
    "loading",
    "error",
    "priority.high",
    "priority.medium",
    "priority.low",
    "due.overdue",
    "progress.done",
    "breadcrumb",
    "address",
    "status.error",
}


def test_every_theme_defines_the_same_classes():
    reference = set(THEMES[DEFAULT_THEME])
    assert REQUIRED_KEYS <= reference
    for name, palette in THEMES.items():
        assert set(palette) == reference, name


def test_unknown_theme_falls_back_to_default():
    assert get_theme_palette("no-such-theme") == THEMES[DEFAULT_THEME]
    palette = get_theme_palette(DEFAULT_THEME)
    palette["selected"] = "changed"
    assert THEMES[DEFAULT_THEME]["selected"] != "changed"


def test_build_style_for_every_theme():
    for name in THEMES:
        assert isinstance(build_style(name), Style)
