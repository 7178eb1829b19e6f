"""Publisher accounts and zines."""

from __future__ import annotations

import logging
import re

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from onlyzines.core.errors import ConflictError
from onlyzines.core.security import hash_zine_password
from onlyzines.models.publisher import Publisher
from onlyzines.models.user import User
from onlyzines.models.zine import Zine, ZineAccessType, ZineVisibility
from onlyzines.repositories.publisher import PublisherRepository
from onlyzines.repositories.zine import ZineRepository

logger = logging.getLogger(__name__)

_SLUG_SEPARATOR = re.compile(r"[^a-z0-9]+")
_publisher_repository = PublisherRepository()
_zine_repository = ZineRepository()


def generate_slug(title: str) -> str:
    """Derive a URL-safe slug from a zine title.

    >>> generate_slug("Night Shift: Vol. 2!")
    'night-shift-vol-2'
    """

    slug = _SLUG_SEPARATOR.sub("-", title.lower()).strip("-")[:100]
    return slug or "untitled"


def create_publisher_account(
    session: Session, user: User, *, handle: str, display_name: str
) -> Publisher:
    if _publisher_repository.get_by_user_id(session, user.id) is not None:
        raise ConflictError("You already have a publisher account", code="ALREADY_EXISTS")

    normalized_handle = handle.strip().lower()
    taken = ConflictError("This handle is already taken", code="HANDLE_TAKEN")
    if _publisher_repository.get_by_handle(session, normalized_handle) is not None:
        raise taken

    try:
        publisher = _publisher_repository.create(
            session,
            data={
                "user_id": user.id,
                "handle": normalized_handle,
                "display_name": display_name,
            },
        )
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise taken from exc

    logger.info("Created publisher_id=%s handle=%s", publisher.id, publisher.handle)
    return publisher


def create_zine(
    session: Session,
    publisher: Publisher,
    *,
    title: str,
    slug: str | None = None,
    description: str | None = None,
    visibility: ZineVisibility = ZineVisibility.UNLISTED,
    password: str | None = None,
) -> Zine:
    """Create a zine; the slug must be unique among the publisher's zines."""

    resolved_slug = (slug or generate_slug(title)).lower()
    taken = ConflictError("You already have a zine with this slug", code="SLUG_TAKEN")
    existing = _zine_repository.get_by_publisher_and_slug(
        session, publisher_id=publisher.id, slug=resolved_slug
    )
    if existing is not None:
        raise taken

    password_hash = None
    if visibility is ZineVisibility.PASSWORD and password:
        password_hash = hash_zine_password(password)

    try:
        zine = _zine_repository.create(
            session,
            data={
                "publisher_id": publisher.id,
                "title": title,
                "slug": resolved_slug,
                "description": description,
                "visibility": visibility,
                "access_type": ZineAccessType.PASSWORD
                if visibility is ZineVisibility.PASSWORD
                else ZineAccessType.OPEN,
                "password_hash": password_hash,
            },
        )
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise taken from exc

    logger.info("Created zine_id=%s slug=%s for publisher_id=%s", zine.id, zine.slug, publisher.id)
    return zine
