"""End-to-end scenarios through the MflixStore operations."""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from mflix_store import (
    MflixStore,
    NotFoundError,
    User,
    ValidationError,
    WriteOutcome,
    new_comment,
)
from mflix_store.config.settings import Settings


class TestCommentScenarios:
    """Comment ownership seen through the store facade."""

    @pytest.mark.asyncio
    async def test_author_edits_and_others_cannot(self, mflix_store):
        comment = new_comment("tt0111161", "a@x.com", "First!")
        await mflix_store.add_comment(comment)

        own = await mflix_store.update_comment(comment.id, "Edited", "a@x.com")
        foreign = await mflix_store.update_comment(comment.id, "Spam", "b@x.com")
        foreign_delete = await mflix_store.delete_comment(comment.id, "b@x.com")

        assert own.unwrap() == WriteOutcome.UPDATED
        assert foreign.unwrap() == WriteOutcome.DENIED
        assert foreign_delete.unwrap() == WriteOutcome.DENIED
        assert (await mflix_store.get_comment(comment.id)).unwrap().text == "Edited"

    @pytest.mark.asyncio
    async def test_movie_listing_and_leaderboard(self, mflix_store):
        for author, text in (("a@x.com", "one"), ("a@x.com", "two"), ("b@x.com", "x")):
            await mflix_store.add_comment(new_comment("tt1", author, text))

        comments = (await mflix_store.list_movie_comments("tt1")).unwrap()
        critics = (await mflix_store.most_active_commenters()).unwrap()

        assert len(comments) == 3
        assert critics == [("a@x.com", 2), ("b@x.com", 1)]


class TestAccountScenarios:
    """User lifecycle: register, log in, change preferences, delete."""

    @pytest.mark.asyncio
    async def test_user_lifecycle(self, mflix_store):
        user = User(email="a@x.com", name="Ann", preferences={"layout": "grid"})

        assert (await mflix_store.add_user(user)).unwrap() == WriteOutcome.CREATED
        assert (
            await mflix_store.create_user_session("a@x.com", "jwt-1")
        ).unwrap() == WriteOutcome.CREATED

        updated = await mflix_store.update_user_preferences("a@x.com", {"a": 1})
        assert updated.unwrap() == WriteOutcome.UPDATED
        assert (await mflix_store.get_user("a@x.com")).unwrap().preferences == {"a": 1}

        rejected = await mflix_store.update_user_preferences("a@x.com", None)
        assert isinstance(rejected.error, ValidationError)

        assert (await mflix_store.delete_user("a@x.com")).unwrap() == WriteOutcome.DELETED
        assert isinstance((await mflix_store.get_user("a@x.com")).error, NotFoundError)
        session = await mflix_store.get_user_session("a@x.com")
        assert isinstance(session.error, NotFoundError)

    @pytest.mark.asyncio
    async def test_logout(self, mflix_store):
        await mflix_store.create_user_session("a@x.com", "jwt-1")

        ack = (await mflix_store.delete_user_sessions("a@x.com")).unwrap()

        assert ack.acknowledged
        assert ack.deleted_count == 1


class TestOpenClose:
    """Connection lifecycle of the facade."""

    @pytest.mark.asyncio
    async def test_open_prepares_stores_and_close_disconnects(self, mock_session):
        settings = Settings(_env_file=None, cassandra_keyspace="catalog")
        connection = Mock()
        connection.connect.return_value = mock_session

        with (
            patch("mflix_store.store.CassandraConnection", return_value=connection),
            patch("mflix_store.store.init_schema", new=AsyncMock()) as init_schema,
            patch("mflix_store.store.configure_structlog") as configure_logging,
        ):
            store = await MflixStore.open(settings, create_schema=True)

        init_schema.assert_awaited_once_with(mock_session, settings)
        configure_logging.assert_called_once_with(settings)
        mock_session.set_keyspace.assert_called_once_with("catalog")
        assert store.config.keyspace == "catalog"

        store.close()
        connection.disconnect.assert_called_once()
        assert store.connection is None

    @pytest.mark.asyncio
    async def test_open_disconnects_on_failure(self, mock_session):
        settings = Settings(_env_file=None)
        connection = Mock()
        connection.connect.return_value = mock_session
        mock_session.set_keyspace.side_effect = RuntimeError("keyspace missing")

        with (
            patch("mflix_store.store.CassandraConnection", return_value=connection),
            pytest.raises(RuntimeError),
        ):
            await MflixStore.open(settings, configure_logging=False)

        connection.disconnect.assert_called_once()
