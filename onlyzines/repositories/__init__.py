"""Repository exports."""

from .issue import IssueRepository, PageRepository, SpreadRepository
from .publisher import PublisherRepository
from .user import RefreshTokenRepository, UserRepository
from .zine import ZineRepository

__all__ = [
    "IssueRepository",
    "PageRepository",
    "PublisherRepository",
    "RefreshTokenRepository",
    "SpreadRepository",
    "UserRepository",
    "ZineRepository",
]
