# todoscheduler

A small self-hosted task scheduler. It keeps tasks in an SQLite database,
serves a JSON API for creating, editing, completing and deleting them, and
works out the next date of repeating tasks. Static files for a web front end
can be served from a directory alongside the API.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
todoscheduler
```

By default the server listens on `0.0.0.0:7540`, stores its tasks in
`scheduler.db` in the current directory (creating the table and its date index
when the file does not yet exist) and serves the files of the `web` directory
at `/`. A request for a directory is answered with its `index.html`.

Options:

| Option        | Default        | Meaning                        |
|---------------|----------------|--------------------------------|
| `--db PATH`   | `scheduler.db` | SQLite database file           |
| `--web DIR`   | `web`          | directory of static web files  |
| `--host ADDR` | `0.0.0.0`      | address to listen on           |
| `--port N`    | `7540`         | port to listen on              |

Settings are read from the environment, and from a `.env` file in the current
directory if there is one:

- `TODO_PASSWORD` — when set, the task endpoints require sign-in. Leave it
  unset or empty to run without a password.

```
TODO_PASSWORD=password
```

## Repeat rules

A task may carry a repeat rule; dates are always written as `YYYYMMDD`.

| Rule  | Meaning                                  |
|-------|------------------------------------------|
| `d N` | every N days, N from 1 to 400            |
| `w N` | every N weeks, N from 1 to 400           |
| `y`   | every year on the same date              |

The start date is always advanced at least once, and the result is strictly
later than "now". A yearly task on 29 February moves to 1 March in years that
are not leap years. Any other rule is rejected.

## HTTP API

Errors are answered with a JSON object `{"error": "..."}` and a matching
status code, except for `/api/nextdate`, which answers in plain text.

| Method | Path                  | Purpose                                                  |
|--------|-----------------------|----------------------------------------------------------|
| GET    | `/api/nextdate`       | next date for the `now`, `date`, `repeat` parameters; `now` defaults to the current time |
| POST   | `/api/signin`         | exchange `{"password": ...}` for `{"token": ...}`        |
| GET    | `/api/tasks`          | list all tasks as `{"tasks": [...]}`                     |
| POST   | `/api/task`           | add a task, returns `{"id": ...}`                        |
| GET    | `/api/task?id=N`      | fetch one task                                           |
| PUT    | `/api/task`           | update a task (the body carries its `id`), returns `{"status": "updated"}` |
| DELETE | `/api/task?id=N`      | delete a task, returns `{}`                              |
| POST   | `/api/task/done?id=N` | mark done: a one-off task is deleted, a repeating one moves to its next date; returns `{}` |

When a password is set, the token returned by `/api/signin` must be sent back
in a cookie named `token`. Tokens are valid for eight hours.

A task is a JSON object with the fields `id`, `date`, `title`, `comment` and
`repeat`; ids are returned as strings. A task needs a title. A missing date
means today; a date that is not `YYYYMMDD` is refused. A date in the past is
moved forward: to the next repeat if the task has a rule, otherwise to today.

## Using it from Python

```python
from todoscheduler.nextdate import next_date, parse_date
from todoscheduler.storage import Task, TaskStore
from todoscheduler.api import create_app

print(next_date(parse_date("20240126"), "20240113", "d 7"))  # 20240127

with TaskStore("scheduler.db") as store:
    task_id = store.add(Task.from_dict({"date": "20240201", "title": "Call the office"}))
    print(store.get(task_id).to_dict())
    print(store.upcoming(50))  # up to 50 tasks ordered by date
```

`create_app(store, password, web_dir)` builds the Flask application around a
`TaskStore`, so it can be run under any WSGI server. With `password=None` it
reads `TODO_PASSWORD` from the environment; with `web_dir=None` no static
files are served. `todoscheduler.server.build_app(db_path, web_dir)` opens the
database and builds the application the same way the command does.

`todoscheduler.auth` offers `issue_token` and `verify_token` for the
password-derived tokens; `verify_token` raises `AuthError` when a token does
not authorise a request.

## What it does not include

The package does not ship the files of a web front end; point `--web` at a
directory of your own. Without one, only the JSON API is useful.