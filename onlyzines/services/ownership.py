"""Ownership checks shared by the publisher-facing operations."""

from __future__ import annotations

from sqlalchemy.orm import Session

from onlyzines.core.errors import ForbiddenError, NotFoundError
from onlyzines.models.issue import Issue
from onlyzines.models.publisher import Publisher
from onlyzines.models.user import User
from onlyzines.models.zine import Zine
from onlyzines.repositories.issue import IssueRepository
from onlyzines.repositories.publisher import PublisherRepository
from onlyzines.repositories.zine import ZineRepository

_publisher_repository = PublisherRepository()
_zine_repository = ZineRepository()
_issue_repository = IssueRepository()


def require_publisher(session: Session, user: User) -> Publisher:
    """Return the caller's publisher account or refuse access."""

    publisher = _publisher_repository.get_by_user_id(session, user.id)
    if publisher is None:
        raise ForbiddenError("You need to create a publisher account first")
    return publisher


def require_zine_ownership(session: Session, publisher: Publisher, zine_id: int) -> Zine:
    zine = _zine_repository.get(session, zine_id)
    if zine is None:
        raise NotFoundError("Zine")
    if zine.publisher_id != publisher.id:
        raise ForbiddenError("You do not own this zine")
    return zine


def require_issue_ownership(session: Session, publisher: Publisher, issue_id: int) -> Issue:
    """Load an issue (with zine and publisher) owned by ``publisher``."""

    issue = _issue_repository.get_with_owner(session, issue_id)
    if issue is None:
        raise NotFoundError("Issue")
    if issue.zine.publisher_id != publisher.id:
        raise ForbiddenError("You do not own this issue")
    return issue
