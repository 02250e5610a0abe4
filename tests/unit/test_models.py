"""
Unit tests for Task model logic.
"""

from datetime import datetime, timedelta, timezone
import pytest

from taskmanager.models import Task


pytestmark = pytest.mark.unit


def test_task_defaults_and_to_dict(db_session):
    task = Task(title="Test Task")
    db_session.session.add(task)
    db_session.session.commit()

    data = task.to_dict()

    assert data["id"] >= 1
    assert data["title"] == "Test Task"
    assert data["description"] is None
    assert data["completed"] is False
    assert data["created_at"] is not None
    assert data["updated_at"] is not None
    assert data["deleted_at"] is None


def test_to_dict_exposes_exactly_the_task_fields():
    task = Task(title="Shape check", description="desc", completed=True)

    data = task.to_dict()

    assert set(data) == {
        "id", "title", "description", "completed",
        "created_at", "updated_at", "deleted_at",
    }
    assert data["completed"] is True


def test_naive_timestamps_are_serialized_as_utc():
    naive = datetime(2025, 1, 1, 12, 30)

    assert Task._to_utc_iso(naive) == "2025-01-01T12:30:00+00:00"


def test_aware_timestamps_are_converted_to_utc():
    plus_two = timezone(timedelta(hours=2))
    aware = datetime(2025, 1, 1, 14, 0, tzinfo=plus_two)

    assert Task._to_utc_iso(aware) == "2025-01-01T12:00:00+00:00"


def test_is_deleted_follows_deleted_at():
    task = Task(title="Soft deleted")
    assert task.is_deleted is False

    task.deleted_at = datetime.now(timezone.utc)

    assert task.is_deleted is True


def test_repr_contains_id_and_title(db_session):
    task = Task(title="Repr Task")
    db_session.session.add(task)
    db_session.session.commit()

    assert repr(task) == f"<Task {task.id}: Repr Task>"
