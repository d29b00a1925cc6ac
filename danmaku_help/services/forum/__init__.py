"""Forum manual seeding."""

from danmaku_help.services.forum.base import ForumStore
from danmaku_help.services.forum.sqlite_store import SqliteForumStore
from danmaku_help.services.forum.seeder import ForumSeeder


def create_forum_store(db_path: str) -> ForumStore:
    """Create the default forum store implementation."""
    return SqliteForumStore(db_path)


__all__ = [
    "ForumStore",
    "SqliteForumStore",
    "ForumSeeder",
    "create_forum_store",
]
