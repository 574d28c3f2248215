"""
Run with: python -m reactioneditor --dataset NAME --index N
      or: python -m reactioneditor --reaction-id ID
"""
from __future__ import annotations

import argparse
import logging
import sys

from reactioneditor.config import EditorSettings
from reactioneditor.logging_config import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="reactioneditor", description="Edit a reaction record.")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--dataset", help="dataset file name on the server")
    target.add_argument("--reaction-id", help="edit a single reaction by id")
    parser.add_argument("--index", type=int, default=0, help="reaction index within the dataset")
    parser.add_argument("--url", help="base URL of the remote service")
    parser.add_argument("--autosave-ms", type=int, help="autosave period in milliseconds")
    parser.add_argument("--no-autosave", action="store_true", help="start with autosave off")
    parser.add_argument("--read-only", action="store_true", help="open the reaction read-only")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file")
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> EditorSettings:
    settings = EditorSettings()
    if args.url:
        settings.base_url = args.url
    if args.autosave_ms is not None:
        settings.autosave_interval_ms = args.autosave_ms
    if args.no_autosave or args.read_only:
        settings.autosave = False
    return settings


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the application."""
    args = parse_args(argv)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)
    settings = settings_from_args(args)

    # Qt is imported only once the arguments are known to be valid.
    from reactioneditor.app.application import create_app
    from reactioneditor.app.editor import ReactionEditor
    from reactioneditor.app.ui.main_window import MainWindow
    from reactioneditor.controller.service import HttpService

    app = create_app()
    service = HttpService(settings.base_url)
    editor = ReactionEditor(service, settings)
    if args.read_only:
        editor.ready.connect(editor.freeze)
    win = MainWindow(editor)
    service.request_failed.connect(win.show_request_error)
    win.show()

    if args.dataset:
        editor.init_from_dataset(args.dataset, args.index)
    else:
        editor.init_from_reaction_id(args.reaction_id)

    try:
        return app.exec()
    finally:
        service.shutdown()


if __name__ == "__main__":
    sys.exit(main())
