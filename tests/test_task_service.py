# tests/test_task_service.py

from __future__ import annotations

import pytest

from task_manager.core.exceptions import (
    InvalidReferenceError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from task_manager.models.task import Task
from task_manager.schemas.common import convert_datetime_to_utc
from task_manager.services import labels as label_service
from task_manager.services import task_statuses as status_service
from task_manager.services import tasks as task_service
from task_manager.services.filters import TaskFilter

from .conftest import FIXED_NOW, fixed_clock


@pytest.fixture()
def draft(db, principal):
    return status_service.create_task_status(db, principal, "draft")


@pytest.fixture()
def done(db, principal):
    return status_service.create_task_status(db, principal, "done")


@pytest.fixture()
def bug(db, principal):
    return label_service.create_label(db, principal, "bug")


@pytest.fixture()
def feature(db, principal):
    return label_service.create_label(db, principal, "feature")


def test_create_then_get_returns_same_fields(db, principal, user, draft, bug, feature) -> None:
    created = task_service.create_task(
        db,
        principal,
        title="Write README",
        status_id=draft.id,
        description="first draft",
        assignee_id=user.id,
        label_ids=[feature.id, bug.id],
        index=7,
        clock=fixed_clock,
    )
    assert created.id is not None

    db.expire_all()
    task = task_service.get_task(db, created.id)
    assert task.title == "Write README"
    assert task.description == "first draft"
    assert task.index == 7
    assert task.task_status_id == draft.id
    assert task.assignee_id == user.id
    assert task.label_ids == [bug.id, feature.id]
    assert convert_datetime_to_utc(task.created_at) == FIXED_NOW


def test_create_and_filter_by_status(db, principal, draft) -> None:
    task = task_service.create_task(db, principal, title="Write README", status_id=draft.id, label_ids=[])
    assert task.title == "Write README"
    assert task.task_status_id == draft.id
    assert task.label_ids == []

    found, total = task_service.list_tasks(db, TaskFilter(status_id=draft.id))
    assert total == 1
    assert [t.id for t in found] == [task.id]


def test_create_with_missing_status_persists_nothing(db, principal) -> None:
    with pytest.raises(InvalidReferenceError) as exc_info:
        task_service.create_task(db, principal, title="Orphan", status_id=999)
    assert exc_info.value.field == "status_id"
    assert db.query(Task).count() == 0


@pytest.mark.parametrize("title", ["", "   ", None])
def test_create_rejects_blank_title(db, principal, draft, title) -> None:
    with pytest.raises(ValidationError) as exc_info:
        task_service.create_task(db, principal, title=title, status_id=draft.id)
    assert exc_info.value.details[0]["field"] == "title"
    assert db.query(Task).count() == 0


def test_create_with_missing_assignee_or_label(db, principal, draft, bug) -> None:
    with pytest.raises(InvalidReferenceError) as exc_info:
        task_service.create_task(db, principal, title="T", status_id=draft.id, assignee_id=424242)
    assert exc_info.value.field == "assignee_id"

    with pytest.raises(InvalidReferenceError) as exc_info:
        task_service.create_task(db, principal, title="T", status_id=draft.id, label_ids=[bug.id, 77, 78])
    assert exc_info.value.field == "label_ids"
    assert exc_info.value.value == [77, 78]
    assert db.query(Task).count() == 0


def test_mutations_require_principal(db, draft) -> None:
    with pytest.raises(UnauthenticatedError):
        task_service.create_task(db, None, title="T", status_id=draft.id)


def test_partial_update_of_title_keeps_other_fields(db, principal, user, draft, bug) -> None:
    task = task_service.create_task(
        db, principal, title="Old", status_id=draft.id, assignee_id=user.id, label_ids=[bug.id], clock=fixed_clock
    )

    updated = task_service.update_task(db, principal, task.id, {"title": "New"})

    assert updated.title == "New"
    assert updated.task_status_id == draft.id
    assert updated.assignee_id == user.id
    assert updated.label_ids == [bug.id]
    assert convert_datetime_to_utc(updated.created_at) == FIXED_NOW


@pytest.mark.parametrize(
    "changes,field",
    [
        ({"assignee_id": 999}, "assignee_id"),
        ({"status_id": 999}, "status_id"),
        ({"label_ids": [999]}, "label_ids"),
    ],
)
def test_update_with_missing_reference_leaves_task_unchanged(db, principal, user, draft, bug, changes, field) -> None:
    task = task_service.create_task(
        db, principal, title="Write README", status_id=draft.id, assignee_id=user.id, label_ids=[bug.id]
    )

    with pytest.raises(InvalidReferenceError) as exc_info:
        task_service.update_task(db, principal, task.id, {**changes, "title": "Changed"})
    assert exc_info.value.field == field

    db.expire_all()
    stored = task_service.get_task(db, task.id)
    assert stored.title == "Write README"
    assert stored.task_status_id == draft.id
    assert stored.assignee_id == user.id
    assert stored.label_ids == [bug.id]


def test_update_replaces_labels_status_and_clears_assignee(db, principal, user, draft, done, bug, feature) -> None:
    task = task_service.create_task(
        db, principal, title="T", status_id=draft.id, assignee_id=user.id, label_ids=[bug.id]
    )

    updated = task_service.update_task(
        db, principal, task.id, {"status_id": done.id, "label_ids": [feature.id], "assignee_id": None}
    )

    assert updated.task_status_id == done.id
    assert updated.label_ids == [feature.id]
    assert updated.assignee_id is None


def test_update_rejects_clearing_required_fields(db, principal, draft) -> None:
    task = task_service.create_task(db, principal, title="T", status_id=draft.id)

    with pytest.raises(ValidationError):
        task_service.update_task(db, principal, task.id, {"status_id": None})
    with pytest.raises(ValidationError):
        task_service.update_task(db, principal, task.id, {"title": " "})


def test_update_and_delete_missing_task(db, principal) -> None:
    with pytest.raises(NotFoundError):
        task_service.update_task(db, principal, 12345, {"title": "x"})
    with pytest.raises(NotFoundError):
        task_service.delete_task(db, principal, 12345)
    with pytest.raises(NotFoundError):
        task_service.get_task(db, 12345)


def test_delete_task_keeps_labels(db, principal, draft, bug) -> None:
    task = task_service.create_task(db, principal, title="T", status_id=draft.id, label_ids=[bug.id])

    task_service.delete_task(db, principal, task.id)

    assert db.query(Task).count() == 0
    assert label_service.get_label(db, bug.id).name == "bug"


def test_list_composes_filters(db, principal, user, other_user, draft, done, bug) -> None:
    a = task_service.create_task(db, principal, title="Fix login BUG", status_id=draft.id, assignee_id=user.id, label_ids=[bug.id])
    b = task_service.create_task(db, principal, title="Fix signup", status_id=draft.id, assignee_id=other_user.id)
    c = task_service.create_task(db, principal, title="Write docs", status_id=done.id, assignee_id=user.id, label_ids=[bug.id])

    def ids(task_filter):
        found, _ = task_service.list_tasks(db, task_filter)
        return [t.id for t in found]

    assert ids(TaskFilter()) == [a.id, b.id, c.id]
    assert ids(TaskFilter(assignee_id=user.id)) == [a.id, c.id]
    assert ids(TaskFilter(label_id=bug.id)) == [a.id, c.id]
    assert ids(TaskFilter(title_cont="fix")) == [a.id, b.id]
    assert ids(TaskFilter(title_cont="bug", status_id=draft.id)) == [a.id]
    assert ids(TaskFilter(status_slug="done")) == [c.id]
    assert ids(TaskFilter(assignee_id=other_user.id, label_id=bug.id)) == []


def test_title_filter_treats_wildcards_literally(db, principal, draft) -> None:
    task_service.create_task(db, principal, title="100% done", status_id=draft.id)
    task_service.create_task(db, principal, title="1000 items", status_id=draft.id)

    found, total = task_service.list_tasks(db, TaskFilter(title_cont="0%"))
    assert total == 1
    assert found[0].title == "100% done"


def test_list_paginates_in_id_order(db, principal, draft) -> None:
    created = [task_service.create_task(db, principal, title=f"T{i}", status_id=draft.id) for i in range(5)]

    page, total = task_service.list_tasks(db, skip=2, limit=2)

    assert total == 5
    assert [t.id for t in page] == [created[2].id, created[3].id]


def test_index_is_not_unique(db, principal, draft) -> None:
    first = task_service.create_task(db, principal, title="A", status_id=draft.id, index=1)
    second = task_service.create_task(db, principal, title="B", status_id=draft.id, index=1)
    assert first.index == second.index == 1
