"""Spread derivation.

A spread is what a reader sees when a zine lies open: the cover sits alone
on the right, every following pair of pages faces each other. Spreads are
never edited; they are rebuilt from the page order whenever pages change.

Reading direction is applied by the reader when rendering. Derivation always
works on logical page order and never mirrors its output.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from onlyzines.models.issue import Issue
from onlyzines.models.spread import Spread
from onlyzines.repositories.issue import PageRepository, SpreadRepository

logger = logging.getLogger(__name__)

_page_repository = PageRepository()
_spread_repository = SpreadRepository()


@dataclass(frozen=True)
class SpreadSlot:
    """One derived spread; either side may be empty."""

    spread_number: int
    left_page_id: int | None
    right_page_id: int | None


@dataclass(frozen=True)
class SpreadLayout:
    spreads: tuple[SpreadSlot, ...]
    page_count: int

    @property
    def spread_count(self) -> int:
        return len(self.spreads)


def derive_spreads(page_ids: Sequence[int]) -> SpreadLayout:
    """Pair pages (ordered by page number) into reader spreads.

    >>> [(s.left_page_id, s.right_page_id) for s in derive_spreads([1, 2, 3, 4]).spreads]
    [(None, 1), (2, 3), (4, None)]
    """

    if not page_ids:
        return SpreadLayout(spreads=(), page_count=0)

    slots = [SpreadSlot(spread_number=1, left_page_id=None, right_page_id=page_ids[0])]
    for index in range(1, len(page_ids), 2):
        right = page_ids[index + 1] if index + 1 < len(page_ids) else None
        slots.append(
            SpreadSlot(
                spread_number=len(slots) + 1,
                left_page_id=page_ids[index],
                right_page_id=right,
            )
        )

    return SpreadLayout(spreads=tuple(slots), page_count=len(page_ids))


def regenerate_spreads(session: Session, issue: Issue) -> SpreadLayout:
    """Rebuild an issue's spreads and page/spread counters from its pages.

    Runs inside the caller's transaction and does not commit. Callers record
    the regeneration metric once their transaction has committed.
    """

    # Pending page writes must be visible to the page query below
    session.flush()
    page_ids = _page_repository.list_ids_for_issue(session, issue.id)
    layout = derive_spreads(page_ids)

    _spread_repository.delete_for_issue(session, issue.id)
    _spread_repository.add_many(
        session,
        (
            Spread(
                issue_id=issue.id,
                spread_number=slot.spread_number,
                left_page_id=slot.left_page_id,
                right_page_id=slot.right_page_id,
            )
            for slot in layout.spreads
        ),
    )
    session.expire(issue, ["spreads"])

    issue.page_count = layout.page_count
    issue.spread_count = layout.spread_count
    session.flush()

    logger.debug(
        "Regenerated spreads for issue_id=%s: pages=%d spreads=%d",
        issue.id,
        layout.page_count,
        layout.spread_count,
    )
    return layout
