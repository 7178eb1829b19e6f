"""Tests for repository query helpers against a mocked session."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from onlyzines.models.issue import Issue
from onlyzines.models.publisher import Publisher
from onlyzines.models.zine import Zine
from onlyzines.repositories.issue import IssueRepository, PageRepository, SpreadRepository
from onlyzines.repositories.publisher import PublisherRepository
from onlyzines.repositories.zine import ZineRepository


@pytest.fixture
def mock_session() -> MagicMock:
    """Create a mock database session."""
    return MagicMock()


def test_repository_model_types() -> None:
    assert PublisherRepository().model is Publisher
    assert ZineRepository().model is Zine
    assert IssueRepository().model is Issue


def test_add_flushes_without_committing(mock_session: MagicMock) -> None:
    """Repositories leave the transaction boundary to the caller."""
    publisher = Publisher(user_id=1, handle="nightshift", display_name="Night Shift")

    result = PublisherRepository().add(mock_session, publisher)

    assert result is publisher
    mock_session.add.assert_called_once_with(publisher)
    mock_session.flush.assert_called_once()
    mock_session.refresh.assert_called_once_with(publisher)
    mock_session.commit.assert_not_called()


def test_get_by_handle_found(mock_session: MagicMock) -> None:
    publisher = Publisher(id=1, handle="nightshift", display_name="Night Shift")
    mock_result = MagicMock()
    mock_result.scalars.return_value.first.return_value = publisher
    mock_session.execute.return_value = mock_result

    result = PublisherRepository().get_by_handle(mock_session, "nightshift")

    assert result is publisher


def test_get_by_handle_not_found(mock_session: MagicMock) -> None:
    mock_result = MagicMock()
    mock_result.scalars.return_value.first.return_value = None
    mock_session.execute.return_value = mock_result

    assert PublisherRepository().get_by_handle(mock_session, "nobody") is None


def test_next_issue_number_starts_at_one(mock_session: MagicMock) -> None:
    mock_session.scalar.return_value = None

    assert IssueRepository().next_issue_number(mock_session, zine_id=3) == 1


def test_next_issue_number_follows_highest(mock_session: MagicMock) -> None:
    mock_session.scalar.return_value = 7

    assert IssueRepository().next_issue_number(mock_session, zine_id=3) == 8


def test_refresh_issue_count_recounts_after_flush(mock_session: MagicMock) -> None:
    zine = Zine(id=5, publisher_id=1, title="Night Shift", slug="night-shift", issue_count=9)
    mock_session.scalar.return_value = 2

    result = ZineRepository().refresh_issue_count(mock_session, zine)

    assert result == 2
    assert zine.issue_count == 2
    assert mock_session.flush.call_count == 2
    mock_session.commit.assert_not_called()


def test_page_delete_removes_blocks_first(mock_session: MagicMock) -> None:
    mock_session.execute.return_value.rowcount = 3

    deleted = PageRepository().delete_for_issue(mock_session, issue_id=4)

    assert deleted == 3
    statements = [call.args[0] for call in mock_session.execute.call_args_list]
    assert [statement.table.name for statement in statements] == ["blocks", "pages"]


def test_spread_list_returns_scalars(mock_session: MagicMock) -> None:
    mock_session.scalars.return_value.all.return_value = ["s1", "s2"]

    assert SpreadRepository().list_for_issue(mock_session, issue_id=4) == ["s1", "s2"]
    mock_session.scalars.assert_called_once()
