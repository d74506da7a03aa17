"""Tests for RepositoryRepository."""

import uuid
from datetime import datetime, timedelta

from repo_tracker.db.repositories import RepositoryRepository
from tests.factories import make_repository

NOW = datetime(2024, 1, 16, 12, 0, 0)


class TestRepositoryRepositoryQuery:
    """Query method tests for RepositoryRepository."""

    async def test_get_by_id(self, db_session):
        repo = make_repository(db_session)
        await db_session.flush()

        result = await RepositoryRepository(db_session).get_by_id(repo.repository_id)

        assert result is repo

    async def test_get_by_id_not_found(self, db_session):
        result = await RepositoryRepository(db_session).get_by_id(uuid.uuid4())
        assert result is None

    async def test_get_by_url(self, db_session):
        repo = make_repository(db_session, url="https://github.com/prebid/Prebid.js")
        await db_session.flush()

        repository = RepositoryRepository(db_session)

        assert await repository.get_by_url("https://github.com/prebid/Prebid.js") is repo
        assert await repository.get_by_url("https://github.com/prebid/missing") is None

    async def test_get_due(self, db_session):
        """Never-tracked and stale repositories are due; fresh ones are not."""
        never = make_repository(db_session, url="https://github.com/a/never")
        stale = make_repository(
            db_session, url="https://github.com/a/stale", last_tracked_at=NOW - timedelta(hours=2)
        )
        make_repository(
            db_session, url="https://github.com/a/fresh", last_tracked_at=NOW - timedelta(minutes=5)
        )
        await db_session.flush()

        due = await RepositoryRepository(db_session).get_due(NOW - timedelta(hours=1))

        assert [r.repository_id for r in due] == [never.repository_id, stale.repository_id]

    async def test_get_due_orders_least_recently_tracked_first(self, db_session):
        newer = make_repository(
            db_session, url="https://github.com/a/newer", last_tracked_at=NOW - timedelta(hours=2)
        )
        older = make_repository(
            db_session, url="https://github.com/a/older", last_tracked_at=NOW - timedelta(hours=9)
        )
        await db_session.flush()

        due = await RepositoryRepository(db_session).get_due(NOW)

        assert [r.url for r in due] == [older.url, newer.url]

    async def test_list_all_ordered_by_url(self, db_session):
        make_repository(db_session, url="https://github.com/z/z")
        make_repository(db_session, url="https://github.com/a/a")
        await db_session.flush()

        repos = await RepositoryRepository(db_session).list_all()

        assert [r.url for r in repos] == ["https://github.com/a/a", "https://github.com/z/z"]


class TestRepositoryRepositoryWrite:
    """Create and update method tests for RepositoryRepository."""

    async def test_get_or_create_new(self, db_session):
        repo, created = await RepositoryRepository(db_session).get_or_create(
            "https://github.com/prebid/prebid-server"
        )

        assert created is True
        assert repo.repository_id is not None

    async def test_get_or_create_existing(self, db_session):
        existing = make_repository(db_session)
        await db_session.flush()

        repo, created = await RepositoryRepository(db_session).get_or_create(existing.url)

        assert created is False
        assert repo is existing

    async def test_update_github_data(self, db_session):
        repo = make_repository(db_session)
        await db_session.flush()

        updated = await RepositoryRepository(db_session).update_github_data(
            repo.repository_id, topics=["ads"], languages=["Go"], stars=12, digest="d" * 64
        )

        assert updated is repo
        assert repo.stars == 12
        assert repo.digest == "d" * 64

    async def test_update_github_data_not_found(self, db_session):
        result = await RepositoryRepository(db_session).update_github_data(
            uuid.uuid4(), topics=None, languages=None, stars=None, digest=None
        )
        assert result is None

    async def test_update_last_tracked(self, db_session):
        repo = make_repository(db_session)
        await db_session.flush()

        await RepositoryRepository(db_session).update_last_tracked(repo.repository_id, NOW)

        assert repo.last_tracked_at == NOW
