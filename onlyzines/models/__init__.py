"""Database models package."""

from .user import RefreshToken, User
from .publisher import Publisher
from .zine import Zine, ZineAccessType, ZineVisibility
from .issue import Issue, ReadingDirection
from .page import Block, Page
from .spread import Spread

__all__ = [
    "Block",
    "Issue",
    "Page",
    "Publisher",
    "ReadingDirection",
    "RefreshToken",
    "Spread",
    "User",
    "Zine",
    "ZineAccessType",
    "ZineVisibility",
]
