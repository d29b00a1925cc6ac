"""SQLite-backed forum store.

Schema mirrors the forum tables the game server reads:

    forum_categories (id, name, parent_id, description, display_order)
    forum_threads    (id, category_id, title, author, created_at)
    forum_posts      (id, thread_id, author, content, created_at)
"""

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from danmaku_help.lib.exceptions import PersistenceError
from danmaku_help.models.forum import ForumPost

logger = logging.getLogger(__name__)

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS forum_categories (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        parent_id INTEGER,
        description TEXT,
        display_order INTEGER DEFAULT 0,
        FOREIGN KEY (parent_id) REFERENCES forum_categories(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS forum_threads (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        category_id INTEGER NOT NULL,
        title TEXT NOT NULL,
        author TEXT NOT NULL,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (category_id) REFERENCES forum_categories(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS forum_posts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        thread_id INTEGER NOT NULL,
        author TEXT NOT NULL,
        content TEXT NOT NULL,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (thread_id) REFERENCES forum_threads(id)
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_forum_threads_category_title
    ON forum_threads(category_id, title)
    """,
)


class SqliteForumStore:
    """
    SQLite implementation of ForumStore.

    Each operation opens its own connection; writes are serialized
    with a lock so one store can be shared between threads. The
    ensure_* operations check and insert under that lock.
    """

    def __init__(self, db_path: str):
        """
        Initialize the store and create missing tables.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = db_path
        self._lock = threading.Lock()
        self._init_database()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection that commits on success and is always closed."""
        conn = sqlite3.connect(self.db_path)
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _fail(self, action: str, error: Exception, operation: str) -> PersistenceError:
        logger.error(f"Forum store failed to {action}: {error}")
        return PersistenceError(
            f"Failed to {action}: {error}", path=self.db_path, operation=operation
        )

    def _init_database(self) -> None:
        try:
            with self._connect() as conn:
                for statement in SCHEMA:
                    conn.execute(statement)
        except sqlite3.Error as e:
            raise self._fail("initialize forum tables", e, "write") from e

    def ensure_category(
        self,
        name: str,
        parent_id: int | None,
        description: str,
        display_order: int,
    ) -> int:
        """Create a category, or refresh description and order if it exists."""
        try:
            with self._lock, self._connect() as conn:
                row = conn.execute(
                    "SELECT id FROM forum_categories WHERE name = ? AND parent_id IS ?",
                    (name, parent_id),
                ).fetchone()

                if row:
                    conn.execute(
                        "UPDATE forum_categories SET description = ?, display_order = ? WHERE id = ?",
                        (description, display_order, row[0]),
                    )
                    return row[0]

                cursor = conn.execute(
                    "INSERT INTO forum_categories (name, parent_id, description, display_order) "
                    "VALUES (?, ?, ?, ?)",
                    (name, parent_id, description, display_order),
                )
                logger.debug(f"Created forum category '{name}' (id {cursor.lastrowid})")
                return cursor.lastrowid
        except sqlite3.Error as e:
            raise self._fail(f"ensure category '{name}'", e, "write") from e

    def find_thread(self, category_id: int, title: str) -> int | None:
        """Find a thread by exact title within a category."""
        try:
            with self._connect() as conn:
                return self._select_thread(conn, category_id, title)
        except sqlite3.Error as e:
            raise self._fail(f"look up thread '{title}'", e, "query") from e

    def create_thread(self, category_id: int, title: str, author: str) -> int:
        """Create a thread."""
        try:
            with self._lock, self._connect() as conn:
                cursor = conn.execute(
                    "INSERT INTO forum_threads (category_id, title, author) VALUES (?, ?, ?)",
                    (category_id, title, author),
                )
                return cursor.lastrowid
        except sqlite3.Error as e:
            raise self._fail(f"create thread '{title}'", e, "write") from e

    def ensure_thread(
        self, category_id: int, title: str, author: str, content: str
    ) -> tuple[int, bool]:
        """Create a thread with its opening post unless the title exists."""
        try:
            with self._lock, self._connect() as conn:
                thread_id = self._select_thread(conn, category_id, title)
                if thread_id is not None:
                    return thread_id, False

                cursor = conn.execute(
                    "INSERT INTO forum_threads (category_id, title, author) VALUES (?, ?, ?)",
                    (category_id, title, author),
                )
                conn.execute(
                    "INSERT INTO forum_posts (thread_id, author, content) VALUES (?, ?, ?)",
                    (cursor.lastrowid, author, content),
                )
                return cursor.lastrowid, True
        except sqlite3.Error as e:
            raise self._fail(f"ensure thread '{title}'", e, "write") from e

    def ensure_first_post(
        self, thread_id: int, author: str, content: str
    ) -> tuple[ForumPost, bool]:
        """Create the opening post of a thread that has none."""
        try:
            with self._lock, self._connect() as conn:
                post = self._select_first_post(conn, thread_id)
                if post is not None:
                    return post, False

                cursor = conn.execute(
                    "INSERT INTO forum_posts (thread_id, author, content) VALUES (?, ?, ?)",
                    (thread_id, author, content),
                )
                post = ForumPost(
                    id=cursor.lastrowid, thread_id=thread_id, author=author, content=content
                )
                return post, True
        except sqlite3.Error as e:
            raise self._fail(f"ensure post in thread {thread_id}", e, "write") from e

    @staticmethod
    def _select_thread(conn: sqlite3.Connection, category_id: int, title: str) -> int | None:
        row = conn.execute(
            "SELECT id FROM forum_threads WHERE category_id = ? AND title = ? "
            "ORDER BY id LIMIT 1",
            (category_id, title),
        ).fetchone()
        return row[0] if row else None

    @staticmethod
    def _select_first_post(conn: sqlite3.Connection, thread_id: int) -> ForumPost | None:
        row = conn.execute(
            "SELECT id, thread_id, author, content FROM forum_posts "
            "WHERE thread_id = ? ORDER BY id LIMIT 1",
            (thread_id,),
        ).fetchone()
        if row is None:
            return None
        return ForumPost(id=row[0], thread_id=row[1], author=row[2], content=row[3])

    def get_first_post(self, thread_id: int) -> ForumPost | None:
        """Get the opening post of a thread."""
        try:
            with self._connect() as conn:
                return self._select_first_post(conn, thread_id)
        except sqlite3.Error as e:
            raise self._fail(f"read posts of thread {thread_id}", e, "query") from e

    def create_post(self, thread_id: int, author: str, content: str) -> int:
        """Create a post."""
        try:
            with self._lock, self._connect() as conn:
                cursor = conn.execute(
                    "INSERT INTO forum_posts (thread_id, author, content) VALUES (?, ?, ?)",
                    (thread_id, author, content),
                )
                return cursor.lastrowid
        except sqlite3.Error as e:
            raise self._fail(f"create post in thread {thread_id}", e, "write") from e

    def update_post_content(self, post_id: int, content: str) -> None:
        """Replace the content of a post."""
        try:
            with self._lock, self._connect() as conn:
                conn.execute(
                    "UPDATE forum_posts SET content = ? WHERE id = ?",
                    (content, post_id),
                )
        except sqlite3.Error as e:
            raise self._fail(f"update post {post_id}", e, "write") from e
