"""Service layer: spread derivation, issue lifecycle and account workflows."""

from .auth import AuthService
from .builder_state import from_builder_state, to_builder_state
from .issues import IssueLifecycleService, PublishResult, public_issue_path
from .ownership import require_issue_ownership, require_publisher, require_zine_ownership
from .publishing import create_publisher_account, create_zine, generate_slug
from .spreads import SpreadLayout, SpreadSlot, derive_spreads, regenerate_spreads

__all__ = [
    "AuthService",
    "IssueLifecycleService",
    "PublishResult",
    "SpreadLayout",
    "SpreadSlot",
    "create_publisher_account",
    "create_zine",
    "derive_spreads",
    "from_builder_state",
    "generate_slug",
    "public_issue_path",
    "regenerate_spreads",
    "require_issue_ownership",
    "require_publisher",
    "require_zine_ownership",
    "to_builder_state",
]
