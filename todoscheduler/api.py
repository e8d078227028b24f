"""HTTP API and static file serving for the task scheduler."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from datetime import datetime
from functools import wraps
from pathlib import Path
from typing import Any

from flask import Flask, Response, jsonify, request, send_from_directory

from .auth import AuthError, issue_token, verify_token
from .nextdate import format_date, next_date, parse_date
from .storage import Task, TaskNotFoundError, TaskStore

logger = logging.getLogger(__name__)

_ANY_METHOD = ["GET", "POST", "PUT", "DELETE", "PATCH"]
_JSON_TYPE = "application/json; charset=utf-8"
_STORE_KEY = "todoscheduler.store"


class _ApiError(Exception):
    """An error answered with a JSON body and an HTTP status."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


def _task_json(task: Task) -> dict[str, Any]:
    data = task.to_dict()
    data["id"] = str(task.id)
    return data


def _read_task() -> Task:
    try:
        data = json.loads(request.get_data(as_text=True) or "null")
        return Task.from_dict(data)
    except ValueError as exc:
        raise _ApiError(400, "Error decoding body") from exc


def _schedule(task: Task, now: datetime, repeat_error: str) -> None:
    """Fill in and normalise the task date: never earlier than today."""
    today = now.date()
    if not task.date:
        task.date = format_date(today)
    try:
        start = parse_date(task.date)
    except ValueError as exc:
        raise _ApiError(400, "Invalid date format") from exc

    upcoming = ""
    if task.repeat:
        try:
            upcoming = next_date(now, task.date, task.repeat)
        except ValueError as exc:
            raise _ApiError(500, repeat_error) from exc

    if start < today:
        task.date = upcoming if task.repeat else format_date(today)


def _require_id() -> str:
    task_id = request.args.get("id", "")
    if not task_id:
        raise _ApiError(400, "Missing id parameter")
    return task_id


def create_app(
    store: TaskStore,
    password: str | None = None,
    web_dir: str | os.PathLike[str] | None = None,
) -> Flask:
    """Build the web application around a task store.

    ``password`` protects the task endpoints; ``None`` reads it from the
    ``TODO_PASSWORD`` environment variable and an empty one disables
    authentication. Files under ``web_dir`` are served from ``/``.
    """
    secret = os.environ.get("TODO_PASSWORD", "") if password is None else password
    app = Flask(__name__, static_folder=None)
    app.extensions[_STORE_KEY] = store

    @app.errorhandler(_ApiError)
    def _api_error(exc: _ApiError) -> tuple[Response, int]:
        return jsonify({"error": exc.message}), exc.status

    @app.errorhandler(405)
    def _method_not_allowed(exc: Exception) -> tuple[Response, int]:
        return jsonify({"error": "Method Not Allowed"}), 405

    def protected(view: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if secret:
                token = request.cookies.get("token")
                if token is None:
                    raise _ApiError(401, "Auth required")
                try:
                    verify_token(token, secret)
                except AuthError as exc:
                    raise _ApiError(401, str(exc)) from exc
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/nextdate", methods=_ANY_METHOD)
    def nextdate_view() -> Response:
        now_text = request.values.get("now", "")
        dstart = request.values.get("date", "")
        repeat = request.values.get("repeat", "")
        if not dstart or not repeat:
            return Response("Bad Request", status=400)
        if now_text:
            try:
                now: Any = parse_date(now_text)
            except ValueError:
                return Response("Invalid now date format", status=400)
        else:
            now = datetime.now()
        try:
            result = next_date(now, dstart, repeat)
        except ValueError:
            return Response("Server Error", status=500)
        return Response(result, content_type=_JSON_TYPE)

    def get_task() -> Response:
        try:
            task = store.get(_require_id())
        except TaskNotFoundError as exc:
            raise _ApiError(404, str(exc)) from exc
        return jsonify(_task_json(task))

    def add_task() -> Response:
        task = _read_task()
        if not task.title:
            raise _ApiError(400, "Empty title")
        _schedule(task, datetime.now(), "Error getting next date")
        try:
            task_id = store.add(task)
        except Exception as exc:
            logger.error("error adding task: %s", exc)
            raise _ApiError(500, "Error adding task") from exc
        return jsonify({"id": str(task_id)})

    def update_task() -> Response:
        task = _read_task()
        if task.id == 0:
            raise _ApiError(400, "Missing task ID")
        if not task.title:
            raise _ApiError(400, "Empty title")
        _schedule(task, datetime.now(), "Error calculating next date")
        try:
            store.update(task)
        except Exception as exc:
            raise _ApiError(500, f"Error updating task: {exc}") from exc
        return jsonify({"status": "updated"})

    def delete_task() -> Response:
        task_id = _require_id()
        try:
            store.delete(task_id)
        except Exception as exc:
            raise _ApiError(500, f"Error deleting task: {exc}") from exc
        return jsonify({})

    task_views = {
        "GET": get_task,
        "POST": add_task,
        "PUT": update_task,
        "DELETE": delete_task,
    }

    @app.route("/api/task", methods=_ANY_METHOD)
    @protected
    def task_view() -> Response:
        view = task_views.get(request.method)
        if view is None:
            raise _ApiError(405, "Method Not Allowed")
        return view()

    @app.route("/api/tasks", methods=_ANY_METHOD)
    @protected
    def tasks_view() -> Response:
        if request.method != "GET":
            raise _ApiError(400, "Invalid method")
        try:
            tasks = store.all()
        except Exception as exc:
            logger.error("error getting all tasks: %s", exc)
            raise _ApiError(500, "Error getting tasks") from exc
        return jsonify({"tasks": [_task_json(task) for task in tasks]})

    @app.route("/api/task/done", methods=_ANY_METHOD)
    @protected
    def done_view() -> Response:
        task_id = request.args.get("id", "")
        if not task_id:
            raise _ApiError(400, "Не указан id задачи")
        try:
            task = store.get(task_id)
        except TaskNotFoundError as exc:
            raise _ApiError(404, "Задача не найдена") from exc
        try:
            if task.repeat:
                store.update_date(task_id, next_date(datetime.now(), task.date, task.repeat))
            else:
                store.delete(task_id)
        except Exception as exc:
            raise _ApiError(500, str(exc)) from exc
        return jsonify({})

    @app.route("/api/signin", methods=_ANY_METHOD)
    def signin_view() -> Response:
        if request.method != "POST":
            raise _ApiError(405, "Method not allowed")
        try:
            data = json.loads(request.get_data(as_text=True))
        except ValueError as exc:
            raise _ApiError(400, "Invalid request") from exc
        if not isinstance(data, dict):
            raise _ApiError(400, "Invalid request")
        given = data.get("password", "")
        if given is None:
            given = ""
        if not isinstance(given, str):
            raise _ApiError(400, "Invalid request")
        if not secret or given != secret:
            raise _ApiError(401, "Неверный пароль")
        return jsonify({"token": issue_token(secret)})

    if web_dir is not None:
        root = Path(web_dir)

        @app.route("/", defaults={"filename": ""})
        @app.route("/<path:filename>")
        def static_view(filename: str) -> Response:
            if not filename or (root / filename).is_dir():
                filename = f"{filename.rstrip('/')}/index.html".lstrip("/")
            return send_from_directory(os.fspath(root), filename)

    return app