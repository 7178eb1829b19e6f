"""Tests for the spread regeneration maintenance script."""

from __future__ import annotations

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from onlyzines.models.issue import Issue
from onlyzines.models.page import Page
from onlyzines.models.spread import Spread
from onlyzines.models.zine import Zine
from onlyzines.scripts.regenerate_spreads import (
    _resolve_cli_args,
    regenerate_all,
    regenerate_issue,
)


def _issue_with_pages(session: Session, zine: Zine, number: int, page_numbers: list[int]) -> Issue:
    issue = Issue(zine_id=zine.id, title=f"Issue {number}", issue_number=number)
    session.add(issue)
    session.flush()
    session.add_all(Page(issue_id=issue.id, page_number=n) for n in page_numbers)
    session.commit()
    return issue


def test_regenerate_issue_fixes_stale_counters(session: Session, zine: Zine) -> None:
    issue = _issue_with_pages(session, zine, 1, [1, 2, 3])
    assert issue.spread_count == 0

    layout = regenerate_issue(session, issue.id)

    assert (layout.page_count, layout.spread_count) == (3, 2)
    session.refresh(issue)
    assert (issue.page_count, issue.spread_count) == (3, 2)


def test_regenerate_issue_keeps_gapped_page_numbers(session: Session, zine: Zine) -> None:
    issue = _issue_with_pages(session, zine, 1, [1, 4, 9])

    regenerate_issue(session, issue.id)

    pages = session.scalars(select(Page).where(Page.issue_id == issue.id)).all()
    assert sorted(page.page_number for page in pages) == [1, 4, 9]
    spreads = session.scalars(
        select(Spread).where(Spread.issue_id == issue.id).order_by(Spread.spread_number)
    ).all()
    assert len(spreads) == 2


def test_regenerate_issue_rejects_unknown_id(session: Session) -> None:
    with pytest.raises(ValueError, match="does not exist"):
        regenerate_issue(session, 12345)


def test_regenerate_all_processes_every_issue(session: Session, zine: Zine) -> None:
    _issue_with_pages(session, zine, 1, [1])
    _issue_with_pages(session, zine, 2, [1, 2, 3, 4])

    assert regenerate_all(session) == 2
    counts = session.execute(
        select(Issue.issue_number, Issue.spread_count).order_by(Issue.issue_number)
    ).all()
    assert [tuple(row) for row in counts] == [(1, 1), (2, 3)]


def test_cli_requires_a_target() -> None:
    with pytest.raises(SystemExit):
        _resolve_cli_args([])

    assert _resolve_cli_args(["--issue-id", "3"]).issue_id == 3
    assert _resolve_cli_args(["--all"]).all is True
