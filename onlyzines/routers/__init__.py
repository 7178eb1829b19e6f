from . import auth, health, public, publisher  # noqa: F401

__all__ = ["auth", "health", "public", "publisher"]
