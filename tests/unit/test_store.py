import pytest

from planner.core.errors import NotFoundError, ValidationError
from planner.store import load_documents, load_tasks


def test_missing_snapshot(tmp_planner_dir):
    with pytest.raises(NotFoundError):
        load_tasks()


def test_json_list(write_snapshot):
    write_snapshot([{"_id": "1", "title": "a"}, {"_id": "2", "title": "b", "completed": True}])
    tasks = load_tasks()
    assert [t.id for t in tasks] == ["1", "2"]
    assert tasks[1].completed is True


def test_wrapped_list(write_snapshot):
    path = write_snapshot({"tasks": [{"id": "1", "title": "a"}]}, name="wrapped.json")
    assert len(load_tasks(path)) == 1


def test_yaml_snapshot(tmp_planner_dir):
    path = tmp_planner_dir / "tasks.yaml"
    path.write_text("- id: one\n  title: Read chapter 3\n  priority: high\n  dueDate: 2024-05-20\n")
    tasks = load_tasks(path)
    assert tasks[0].title == "Read chapter 3"
    assert tasks[0].priority == "high"
    assert tasks[0].due_date.date().isoformat() == "2024-05-20"


def test_empty_object_is_empty_snapshot(write_snapshot):
    write_snapshot({"meta": 1})
    assert load_documents() == []


def test_invalid_json(tmp_planner_dir):
    (tmp_planner_dir / "tasks.json").write_text("{oops")
    with pytest.raises(ValidationError):
        load_tasks()


def test_non_object_entries(write_snapshot):
    write_snapshot([{"id": "1"}, "two"])
    with pytest.raises(ValidationError):
        load_tasks()


def test_scalar_snapshot(write_snapshot):
    write_snapshot(5)
    with pytest.raises(ValidationError):
        load_documents()
