#!/usr/bin/env python3
"""
miller-board: drill-down terminal navigator for a task board.

Opens one board of the REST backend and walks Lists → Tasks → Subtasks in
columns, with a preview pane and a shareable address (`list=<id>&task=<id>`).
"""

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version
from typing import List, Optional

from config import (
    get_api_url,
    get_subtask_in_address,
    get_user_theme,
    get_user_token,
    set_api_url,
    set_subtask_in_address,
    set_user_lang,
    set_user_theme,
    set_user_token,
)
from core.navigator.application.address import SubItemAddressPolicy
from core.navigator.interface.i18n import available_languages
from core.navigator.interface.tui_column import DEFAULT_PROFILE, PROFILES
from core.navigator.interface.tui_themes import DEFAULT_THEME, THEMES
from infrastructure.board_api import BoardApiClient

logger = logging.getLogger("miller")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="miller-board", description="Browse a task board in drill-down columns.")
    parser.add_argument("slug", nargs="?", help="board slug, e.g. team-roadmap")
    parser.add_argument("--location", default="", help="address to open, e.g. 'list=3&task=12' or 'team-roadmap?list=3'")
    parser.add_argument("--api-url", default=None, help="backend base URL (default: config or MILLER_API_URL)")
    parser.add_argument("--token", default=None, help="bearer token (default: config or MILLER_TOKEN)")
    parser.add_argument("--theme", default=None, choices=sorted(THEMES), help="colour theme")
    parser.add_argument("--profile", default=DEFAULT_PROFILE, choices=sorted(PROFILES), help="column actions: browse is read-only")
    parser.add_argument("--lang", default=None, choices=available_languages(), help="interface language")
    parser.add_argument(
        "--subtask-in-address",
        action="store_true",
        default=None,
        help="keep the selected subtask in the address (subtask=<id>)",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="remember --api-url, --token, --theme, --lang and --subtask-in-address as defaults",
    )
    parser.add_argument("--log-file", default=None, help="write logs to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging (needs --log-file)")
    parser.add_argument("--version", action="store_true", help="print version and exit")
    return parser


def configure_logging(log_file: Optional[str], verbose: bool = False) -> None:
    """The full-screen UI owns the terminal, so records go to a file or nowhere."""
    root = logging.getLogger("miller")
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.propagate = False
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    else:
        handler = logging.NullHandler()
    root.addHandler(handler)


def save_defaults(args: argparse.Namespace) -> List[str]:
    """Write the connection and display flags given on the command line to the user config."""
    setters = (
        ("api_url", args.api_url, set_api_url),
        ("token", args.token, set_user_token),
        ("theme", args.theme, set_user_theme),
        ("lang", args.lang, set_user_lang),
        ("subtask_in_address", args.subtask_in_address, set_subtask_in_address),
    )
    saved = []
    for key, value, setter in setters:
        if value is not None:
            setter(value)
            saved.append(key)
    return saved


def resolve_slug(slug: Optional[str], location: str) -> Optional[str]:
    if slug:
        return slug
    if "?" in location:
        return location.split("?", 1)[0].strip() or None
    return None


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.version:
        try:
            print(pkg_version("miller-board"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    slug = resolve_slug(args.slug, args.location)
    if args.save:
        saved = save_defaults(args)
        print("saved: " + (", ".join(saved) if saved else "nothing"))
        if not slug:
            return 0
    if not slug:
        parser.print_help()
        return 1
    configure_logging(args.log_file, args.verbose)

    from core.navigator.interface.tui_app import NavigatorTUI

    token = args.token if args.token is not None else get_user_token()
    client = BoardApiClient(args.api_url or get_api_url(), token_provider=lambda: token or None)
    subtask_in_address = args.subtask_in_address if args.subtask_in_address is not None else get_subtask_in_address()
    tui = NavigatorTUI(
        client,
        slug,
        location=args.location,
        theme=args.theme or get_user_theme() or DEFAULT_THEME,
        profile=args.profile,
        policy=SubItemAddressPolicy.from_value(subtask_in_address),
        language=args.lang,
    )
    logger.info("opening board %s at %r", slug, args.location)
    tui.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
