import sqlite3

import pytest

from taskboard_api.app.core.config import Settings
from taskboard_api.app.storage import (
    DuplicateRecordError,
    IntegrityViolationError,
    RecordNotFoundError,
    SQLiteStorage,
    build_storage,
)


@pytest.fixture
def alice(storage):
    return storage.insert_user(username="alice", password="salt$hash")


@pytest.fixture
def project(storage, alice):
    return storage.insert_project(name="P1", owner_id=alice.id)


def test_init_schema_is_repeatable(storage, settings):
    storage.init_schema()
    conn = sqlite3.connect(settings.database_url)
    try:
        versions = [row[0] for row in conn.execute("SELECT version FROM migrations ORDER BY version")]
    finally:
        conn.close()
    assert versions == [1, 2]


def test_insert_and_get_user(storage, alice):
    assert storage.get_user(alice.id) == alice
    assert storage.find_user_by_username("alice") == alice
    assert storage.find_user_by_username("nobody") is None
    assert storage.get_user(9999) is None


def test_duplicate_username_rejected_by_store(storage, alice):
    with pytest.raises(DuplicateRecordError):
        storage.insert_user(username="alice", password="other")


def test_insert_project_assigns_id_and_timestamp(storage, alice):
    first = storage.insert_project(name="P1", owner_id=alice.id)
    second = storage.insert_project(name="P2", owner_id=alice.id, description="second")
    assert first.id != second.id
    assert first.status == "active"
    assert first.created_at is not None
    assert storage.get_project(second.id).description == "second"


def test_update_project_partial(storage, project):
    updated = storage.update_project(project.id, {"status": "archived"})
    assert updated.status == "archived"
    assert updated.name == "P1"


def test_update_missing_record_raises(storage):
    with pytest.raises(RecordNotFoundError):
        storage.update_project(4242, {"name": "x"})
    with pytest.raises(RecordNotFoundError):
        storage.update_task(4242, {"title": "x"})


def test_update_rejects_unknown_column(storage, project):
    with pytest.raises(ValueError):
        storage.update_project(project.id, {"owner_id = 1; --": 1})


def test_delete_is_idempotent(storage, project):
    task = storage.insert_task(project_id=project.id, title="T1")
    storage.delete_task(task.id)
    storage.delete_task(task.id)
    assert storage.get_task(task.id) is None


def test_ids_are_not_reused(storage, project):
    first = storage.insert_task(project_id=project.id, title="T1")
    storage.delete_task(first.id)
    second = storage.insert_task(project_id=project.id, title="T2")
    assert second.id > first.id


def test_task_requires_existing_project(storage):
    with pytest.raises(IntegrityViolationError):
        storage.insert_task(project_id=777, title="orphan")


def test_membership_requires_existing_project_and_user(storage, alice, project):
    with pytest.raises(IntegrityViolationError):
        storage.insert_membership(project_id=777, user_id=alice.id)
    with pytest.raises(IntegrityViolationError):
        storage.insert_membership(project_id=project.id, user_id=777)


def test_lookups_with_out_of_range_ids_find_nothing(storage, project):
    huge = 2 ** 64
    assert storage.get_project(huge) is None
    assert storage.get_task(huge) is None
    assert storage.find_tasks_by_project(huge) == []
    assert storage.find_membership(project.id, huge) is None
    storage.delete_task(huge)


def test_membership_pair_is_unique(storage, project):
    bob = storage.insert_user(username="bob", password="salt$hash")
    storage.insert_membership(project_id=project.id, user_id=bob.id)
    with pytest.raises(DuplicateRecordError):
        storage.insert_membership(project_id=project.id, user_id=bob.id)


def test_membership_lookups(storage, project):
    bob = storage.insert_user(username="bob", password="salt$hash")
    membership = storage.insert_membership(project_id=project.id, user_id=bob.id)
    assert storage.get_membership(membership.id) == membership
    assert storage.find_membership(project.id, bob.id) == membership
    assert storage.find_memberships_by_project(project.id) == [membership]
    assert [p.id for p in storage.find_projects_by_member_user_id(bob.id)] == [project.id]
    assert storage.find_projects_by_owner(bob.id) == []

    storage.delete_membership(membership.id)
    assert storage.find_membership(project.id, bob.id) is None


def test_find_tasks_by_project(storage, alice, project):
    other = storage.insert_project(name="P2", owner_id=alice.id)
    t1 = storage.insert_task(project_id=project.id, title="T1", status="done", assignee_id=alice.id)
    storage.insert_task(project_id=other.id, title="T2")
    assert storage.find_tasks_by_project(project.id) == [t1]


def test_deleting_project_cascades_to_tasks(storage, project):
    task = storage.insert_task(project_id=project.id, title="T1")
    storage.delete_project(project.id)
    assert storage.get_task(task.id) is None


def test_build_storage_selects_sqlite(tmp_path):
    store = build_storage(Settings(database_url=str(tmp_path / "x.db")))
    assert isinstance(store, SQLiteStorage)


def test_build_storage_rejects_unknown_backend(tmp_path):
    with pytest.raises(ValueError):
        build_storage(Settings(database_url=str(tmp_path / "x.db"), storage_backend="mongo"))
