"""Task scheduler service with repeating tasks, SQLite storage, token sign-in and a JSON API."""

__version__ = "1.0.0"