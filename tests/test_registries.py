# tests/test_registries.py

from __future__ import annotations

import pytest

from task_manager.core.exceptions import ConflictError, DuplicateNameError, NotFoundError, ValidationError
from task_manager.models.task import Task, task_labels
from task_manager.services import labels as label_service
from task_manager.services import task_statuses as status_service
from task_manager.services import tasks as task_service
from task_manager.services.seed import DEFAULT_LABELS, DEFAULT_STATUSES, seed_defaults
from task_manager.services.validation import slugify


def test_status_slug_is_derived_from_name(db, principal) -> None:
    created = status_service.create_task_status(db, principal, "To be fixed")
    assert created.slug == "to_be_fixed"

    explicit = status_service.create_task_status(db, principal, "Shipped", slug="Published!")
    assert explicit.slug == "published"


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Draft", "draft"),
        ("  In  progress ", "in_progress"),
        ("QA/Review", "qa_review"),
    ],
)
def test_slugify(name: str, expected: str) -> None:
    assert slugify(name) == expected


def test_status_names_and_slugs_are_unique(db, principal) -> None:
    status_service.create_task_status(db, principal, "draft")

    with pytest.raises(DuplicateNameError):
        status_service.create_task_status(db, principal, "draft")
    with pytest.raises(DuplicateNameError):
        status_service.create_task_status(db, principal, "Draft ", slug="draft")


def test_blank_names_are_rejected(db, principal) -> None:
    with pytest.raises(ValidationError):
        status_service.create_task_status(db, principal, "  ")
    with pytest.raises(ValidationError):
        label_service.create_label(db, principal, "")


def test_delete_referenced_status_conflicts(db, principal) -> None:
    draft = status_service.create_task_status(db, principal, "draft")
    unused = status_service.create_task_status(db, principal, "unused")
    task_service.create_task(db, principal, title="T", status_id=draft.id)

    with pytest.raises(ConflictError):
        status_service.delete_task_status(db, principal, draft.id)
    assert status_service.get_task_status(db, draft.id).slug == "draft"

    status_service.delete_task_status(db, principal, unused.id)
    with pytest.raises(NotFoundError):
        status_service.get_task_status(db, unused.id)


def test_rename_status_keeps_slug(db, principal) -> None:
    draft = status_service.create_task_status(db, principal, "draft")
    status_service.create_task_status(db, principal, "done")

    renamed = status_service.update_task_status(db, principal, draft.id, name="Draft copy")
    assert renamed.name == "Draft copy"
    assert renamed.slug == "draft"

    with pytest.raises(DuplicateNameError):
        status_service.update_task_status(db, principal, draft.id, name="done")


def test_label_names_are_unique(db, principal) -> None:
    bug = label_service.create_label(db, principal, "bug")
    label_service.create_label(db, principal, "feature")

    with pytest.raises(DuplicateNameError):
        label_service.create_label(db, principal, "bug")
    with pytest.raises(DuplicateNameError):
        label_service.update_label(db, principal, bug.id, "feature")

    assert label_service.update_label(db, principal, bug.id, "defect").name == "defect"


def test_delete_label_detaches_it_from_tasks(db, principal) -> None:
    draft = status_service.create_task_status(db, principal, "draft")
    bug = label_service.create_label(db, principal, "bug")
    feature = label_service.create_label(db, principal, "feature")
    first = task_service.create_task(db, principal, title="One", status_id=draft.id, label_ids=[bug.id, feature.id])
    second = task_service.create_task(db, principal, title="Two", status_id=draft.id, label_ids=[bug.id])
    bug_id, feature_id = bug.id, feature.id

    label_service.delete_label(db, principal, bug_id)

    db.expire_all()
    assert db.query(Task).count() == 2
    assert task_service.get_task(db, first.id).label_ids == [feature_id]
    assert task_service.get_task(db, second.id).label_ids == []
    assert task_service.get_task(db, second.id).title == "Two"
    remaining = db.execute(task_labels.select()).all()
    assert [(row.task_id, row.label_id) for row in remaining] == [(first.id, feature_id)]


def test_delete_missing_label(db, principal) -> None:
    with pytest.raises(NotFoundError):
        label_service.delete_label(db, principal, 99)


def test_seed_defaults_is_idempotent(db) -> None:
    seed_defaults(db, admin_email="root@example.com", admin_password="rootpass")
    seed_defaults(db, admin_email="root@example.com", admin_password="rootpass")

    slugs = [s.slug for s in status_service.list_task_statuses(db)]
    names = [label.name for label in label_service.list_labels(db)]
    assert slugs == list(DEFAULT_STATUSES)
    assert names == list(DEFAULT_LABELS)


def test_seed_defaults_skips_status_whose_name_is_taken(db, principal) -> None:
    existing = status_service.create_task_status(db, principal, "Draft", slug="my_draft")

    seed_defaults(db)

    statuses = status_service.list_task_statuses(db)
    drafts = [s for s in statuses if s.name == "Draft"]
    assert [s.id for s in drafts] == [existing.id]
    assert drafts[0].slug == "my_draft"
    assert [s.slug for s in statuses] == ["my_draft"] + [slug for slug in DEFAULT_STATUSES if slug != "draft"]
    assert [label.name for label in label_service.list_labels(db)] == list(DEFAULT_LABELS)
