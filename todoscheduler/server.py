"""Command that runs the scheduler web server."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from .api import create_app
from .storage import TaskStore

DEFAULT_PORT = 7540
DEFAULT_DB = "scheduler.db"
DEFAULT_WEB_DIR = "web"


def build_app(
    db_path: str | os.PathLike[str] = DEFAULT_DB,
    web_dir: str | os.PathLike[str] | None = DEFAULT_WEB_DIR,
) -> Flask:
    """Open the task database and build the application around it."""
    store = TaskStore(db_path)
    return create_app(store, os.environ.get("TODO_PASSWORD", ""), web_dir)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the task scheduler server.")
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite database file")
    parser.add_argument("--web", default=DEFAULT_WEB_DIR, help="directory of web files")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Load settings, open the database and serve until stopped."""
    args = _parse_args(argv)
    load_dotenv(Path.cwd() / ".env")
    try:
        app = build_app(args.db, args.web)
    except Exception as exc:
        print(exc, file=sys.stderr)
        return 1
    app.run(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())