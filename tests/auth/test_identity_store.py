"""Tests for IdentityStore."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from resorter_admin.auth.identity import IdentityStore


class TestGetOrCreate:
    """Tests for get_or_create."""

    def test_creates_on_first_call(self) -> None:
        """First call creates an identity with a non-empty id."""
        store = IdentityStore()

        identity, created = store.get_or_create("admin")

        assert created is True
        assert identity.username == "admin"
        assert identity.id
        assert len(store) == 1

    def test_returns_same_identity_afterwards(self) -> None:
        """Subsequent calls return the stored identity unchanged."""
        store = IdentityStore()
        first, _ = store.get_or_create("admin")

        second, created = store.get_or_create("admin")

        assert created is False
        assert second == first
        assert len(store) == 1

    def test_usernames_are_case_sensitive(self) -> None:
        """'Admin' and 'admin' are different identities."""
        store = IdentityStore()

        lower, _ = store.get_or_create("admin")
        upper, _ = store.get_or_create("Admin")

        assert lower.id != upper.id
        assert len(store) == 2

    def test_concurrent_first_logins_create_one_identity(self) -> None:
        """Racing threads for the same username yield exactly one identity."""
        store = IdentityStore()

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(lambda _: store.get_or_create("admin"), range(64)))

        ids = {identity.id for identity, _ in results}
        assert len(ids) == 1
        assert sum(1 for _, created in results if created) == 1
        assert len(store) == 1


class TestLookup:
    """Tests for get and get_by_username."""

    def test_get_by_id(self) -> None:
        store = IdentityStore()
        identity, _ = store.get_or_create("admin")

        assert store.get(identity.id) == identity
        assert store.get("missing") is None

    def test_get_by_username(self) -> None:
        store = IdentityStore()
        identity, _ = store.get_or_create("admin")

        assert store.get_by_username("admin") == identity
        assert store.get_by_username("ADMIN") is None

    def test_all_returns_snapshot(self) -> None:
        """all() is a copy; mutating it does not affect the store."""
        store = IdentityStore()
        store.get_or_create("a")
        store.get_or_create("b")

        snapshot = store.all()
        snapshot.clear()

        assert len(store.all()) == 2
