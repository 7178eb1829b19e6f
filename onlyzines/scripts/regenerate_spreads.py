"""Maintenance script re-deriving spreads and page/spread counters.

Spreads are normally rebuilt on every save and publish; this rebuilds them
for existing issues after manual data fixes or imports. Pages are never
renumbered: spreads follow whatever ``page_number`` order is stored.
"""

from __future__ import annotations

import argparse
import logging

from sqlalchemy.orm import Session

from onlyzines.db import SessionLocal
from onlyzines.monitoring.middleware import record_spread_regeneration
from onlyzines.repositories.issue import IssueRepository
from onlyzines.services.issues import atomic
from onlyzines.services.spreads import SpreadLayout, regenerate_spreads

logger = logging.getLogger(__name__)
_issue_repository = IssueRepository()


def regenerate_issue(session: Session, issue_id: int) -> SpreadLayout:
    """Rebuild one issue's spreads in its own transaction."""

    issue = _issue_repository.get(session, issue_id)
    if issue is None:
        raise ValueError(f"Issue {issue_id} does not exist")
    with atomic(session):
        layout = regenerate_spreads(session, issue)
    record_spread_regeneration(layout.page_count, layout.spread_count)
    logger.info(
        "issue_id=%s pages=%d spreads=%d", issue_id, layout.page_count, layout.spread_count
    )
    return layout


def regenerate_all(session: Session) -> int:
    """Rebuild spreads for every issue; return how many were processed."""

    issue_ids = _issue_repository.list_ids(session)
    for issue_id in issue_ids:
        regenerate_issue(session, issue_id)
    return len(issue_ids)


def _resolve_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Regenerate issue spreads and counters")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--issue-id", type=int, help="Regenerate a single issue")
    target.add_argument("--all", action="store_true", help="Regenerate every issue")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _resolve_cli_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    with SessionLocal() as session:
        if args.all:
            count = regenerate_all(session)
            print(f"Regenerated spreads for {count} issues")
            return 0
        try:
            layout = regenerate_issue(session, args.issue_id)
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc

    print(
        f"Issue {args.issue_id}: {layout.page_count} pages, {layout.spread_count} spreads"
    )
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation only
    raise SystemExit(main())
