"""Storage contract, run against both backends."""

import pytest

from panel.core.exceptions import ConflictError
from panel.storage.memory import MemoryStorage
from panel.storage.sql import SQLStorage


@pytest.fixture(params=["memory", "sqlite"])
def store(request, clock):
    if request.param == "memory":
        backend = MemoryStorage(clock=clock)
    else:
        backend = SQLStorage("sqlite://", clock=clock)
    yield backend
    backend.close()


def _user(store, username, **extra):
    data = {"username": username, "email": f"{username}@example.com", "password": "x"}
    data.update(extra)
    return store.users.create(data)


class TestRepository:
    def test_create_assigns_id_timestamp_and_defaults(self, store, clock):
        user = _user(store, "bob")

        assert user.id == 1
        assert user.created_at == clock()
        assert user.role == "user"
        assert user.status == "active"
        assert user.disk_usage == 0
        assert user.two_factor_enabled is False

    def test_missing_rows(self, store):
        assert store.users.get(99) is None
        assert store.users.update(99, {"role": "admin"}) is None
        assert store.users.delete(99) is False

    def test_update_merges_fields(self, store):
        user = _user(store, "bob", disk_usage=10)
        updated = store.users.update(user.id, {"disk_usage": 25})

        assert updated.disk_usage == 25
        assert updated.username == "bob"
        assert store.users.get(user.id).disk_usage == 25

    def test_unique_columns_conflict(self, store):
        _user(store, "bob")
        with pytest.raises(ConflictError):
            _user(store, "bob", email="other@example.com")

    def test_delete_does_not_cascade(self, store):
        user = _user(store, "bob")
        store.domains.create({"user_id": user.id, "domain": "bob.com", "type": "primary"})

        assert store.users.delete(user.id) is True
        assert store.domains.count(user_id=user.id) == 1

    def test_list_in_insertion_order(self, store):
        for name in ("carol", "alice", "bob"):
            _user(store, name)
        assert [u.username for u in store.users.list()] == ["carol", "alice", "bob"]


class TestQueries:
    def test_server_stats_history_is_newest_first_and_limited(self, store, clock):
        for cpu in (10, 20, 30, 40):
            store.server_stats.create(
                {"cpu_usage": cpu, "memory_usage": 1, "disk_usage": 1, "active_users": 0, "uptime": 0}
            )
            clock.advance(minutes=5)

        history = store.get_server_stats_history(3)
        assert [s.cpu_usage for s in history] == [40, 30, 20]
        assert len(store.get_server_stats_history(100)) == 4
        assert store.get_server_stats_history(0) == []
        assert store.get_latest_server_stats().cpu_usage == 40

    def test_file_entries_match_path_exactly(self, store):
        for path in ("/", "/docs", "/docs/old", "/documents"):
            store.files.create({"user_id": 1, "name": "a.txt", "path": path, "type": "file"})
        store.files.create({"user_id": 2, "name": "b.txt", "path": "/docs", "type": "file"})

        entries = store.get_file_entries_by_user_id_and_path(1, "/docs")
        assert [(e.user_id, e.path) for e in entries] == [(1, "/docs")]

    def test_user_notifications_include_broadcasts(self, store, clock):
        store.notifications.create({"user_id": None, "title": "all", "message": "m"})
        clock.advance(seconds=1)
        store.notifications.create({"user_id": 2, "title": "other", "message": "m"})
        clock.advance(seconds=1)
        store.notifications.create({"user_id": 1, "title": "mine", "message": "m"})

        titles = [n.title for n in store.get_user_notifications(1)]
        assert titles == ["mine", "all"]

    def test_widgets_ordered_by_position(self, store):
        for position, title in ((2, "c"), (0, "a"), (1, "b")):
            store.widgets.create({"user_id": 1, "type": "t", "title": title, "position": position})
        assert [w.title for w in store.get_user_dashboard_widgets(1)] == ["a", "b", "c"]

    def test_two_factor_helpers(self, store):
        user = _user(store, "bob")
        store.update_user_2fa(user.id, "SECRET", True)
        assert store.users.get(user.id).two_factor_enabled is True

        store.disable_2fa(user.id)
        refreshed = store.users.get(user.id)
        assert refreshed.two_factor_enabled is False
        assert refreshed.two_factor_secret is None

    def test_count_users_on_package(self, store):
        package = store.packages.create(
            {"name": "Basic", "disk_space": 1, "bandwidth": 10, "email_accounts": 5, "databases": 1, "domains": 1}
        )
        _user(store, "bob", package_id=package.id)
        _user(store, "eve")
        assert store.count_users_on_package(package.id) == 1
        assert store.get_default_package().id == package.id
