from datetime import date

import pytest

from todoscheduler.storage import Task, TaskNotFoundError, TaskStore


@pytest.fixture
def store(tmp_path):
    with TaskStore(tmp_path / "scheduler.db") as s:
        yield s


def test_insert_get_delete_keeps_count(store):
    before = len(store.all())
    today = date.today().strftime("%Y%m%d")
    task_id = store.add(Task(date=today, title="Todo", comment="Комментарий"))

    task = store.get(task_id)
    assert task.id == task_id
    assert task.title == "Todo"
    assert task.comment == "Комментарий"
    assert task.date == today

    store.delete(task_id)
    assert len(store.all()) == before


def test_get_accepts_string_id(store):
    task_id = store.add(Task(date="20240101", title="a"))
    assert store.get(str(task_id)).id == task_id


def test_missing_task_raises(store):
    with pytest.raises(TaskNotFoundError, match="Задача не найдена"):
        store.get("abc")
    with pytest.raises(TaskNotFoundError):
        store.delete("wjhgese")
    with pytest.raises(TaskNotFoundError):
        store.update(Task(id=7645346343, date="20240129", title="Тест"))
    with pytest.raises(TaskNotFoundError):
        store.update_date(12345, "20240101")


def test_update_and_update_date(store):
    task_id = store.add(Task(date="20240101", title="old"))
    store.update(Task(id=task_id, date="20240202", title="new", comment="c", repeat="d 7"))
    assert store.get(task_id) == Task(task_id, "20240202", "new", "c", "d 7")
    store.update_date(task_id, "20240303")
    assert store.get(task_id).date == "20240303"
    assert store.get(task_id).title == "new"


def test_upcoming_orders_by_date_and_limits(store):
    for day in ("20240305", "20240101", "20240220", "20240110"):
        store.add(Task(date=day, title=day))
    dates = [t.date for t in store.upcoming(3)]
    assert dates == ["20240101", "20240110", "20240220"]
    assert len(store.upcoming(50)) == 4


def test_empty_store(store):
    assert store.all() == []
    assert store.upcoming(50) == []


def test_data_survives_reopen(tmp_path):
    path = tmp_path / "scheduler.db"
    with TaskStore(path) as first:
        task_id = first.add(Task(date="20240101", title="kept"))
    with TaskStore(path) as second:
        assert second.get(task_id).title == "kept"


def test_task_dict_round_trip():
    task = Task(id=3, date="20240101", title="t", comment="c", repeat="y")
    assert Task.from_dict(task.to_dict()) == task
    assert task.to_dict()["id"] == 3


def test_from_dict_defaults_and_string_id():
    assert Task.from_dict({"title": "x"}) == Task(title="x")
    assert Task.from_dict({"id": "15", "title": "x"}).id == 15
    assert Task.from_dict({"id": "", "title": "x"}).id == 0


@pytest.mark.parametrize(
    "data",
    [[], {"id": "abc"}, {"id": True}, {"title": 5}, {"date": ["20240101"]}],
)
def test_from_dict_rejects_bad_input(data):
    with pytest.raises(ValueError):
        Task.from_dict(data)