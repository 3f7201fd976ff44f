"""
Bookstore API — Session Scope Tests
=====================================

What:  Transaction handling in database.session_scope(), with a mocked
       session factory so commit failures can be forced.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from bookstore import database
from bookstore.exceptions import DatabaseError, NotFoundError


@pytest.fixture
def session_factory(monkeypatch, mock_db_session):
    """Replaces the module's session factory with one yielding mock_db_session."""
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = mock_db_session
    monkeypatch.setattr(database, "async_session_factory", factory)
    return factory


class TestSessionScope:

    @pytest.mark.asyncio
    async def test_commits_on_success(self, session_factory, mock_db_session):
        async with database.session_scope():
            pass

        mock_db_session.commit.assert_awaited_once()
        mock_db_session.rollback.assert_not_awaited()
        mock_db_session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_commit_becomes_database_error(self, session_factory, mock_db_session):
        mock_db_session.commit.side_effect = OperationalError(
            "COMMIT", {}, Exception("disk I/O error")
        )

        with pytest.raises(DatabaseError) as exc_info:
            async with database.session_scope():
                pass

        assert exc_info.value.context["error_type"] == "OperationalError"
        assert "disk" not in exc_info.value.message
        mock_db_session.rollback.assert_awaited_once()
        mock_db_session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_application_errors_roll_back_and_pass_through(
        self, session_factory, mock_db_session
    ):
        with pytest.raises(NotFoundError):
            async with database.session_scope():
                raise NotFoundError(resource="book", resource_id=9)

        mock_db_session.commit.assert_not_awaited()
        mock_db_session.rollback.assert_awaited_once()
