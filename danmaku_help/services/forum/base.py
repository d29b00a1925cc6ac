"""Forum storage Protocol definitions."""

from typing import Protocol

from danmaku_help.models.forum import ForumPost
from danmaku_help.lib.exceptions import PersistenceError


class ForumStore(Protocol):
    """
    Contract for the forum tables that receive manual threads.

    Only the operations needed to seed manuals are part of the contract.
    """

    def ensure_category(
        self,
        name: str,
        parent_id: int | None,
        description: str,
        display_order: int,
    ) -> int:
        """
        Create a category, or refresh description and order if it exists.

        Args:
            name: Category name, unique under its parent
            parent_id: Parent category id (None for top level)
            description: Category description
            display_order: Sort position under the parent

        Returns:
            int: Category id

        Raises:
            PersistenceError: If the write fails
        """
        ...

    def find_thread(self, category_id: int, title: str) -> int | None:
        """
        Find a thread by exact title within a category.

        Returns:
            Thread id if found, None otherwise

        Raises:
            PersistenceError: If the read fails (not for missing data)
        """
        ...

    def create_thread(self, category_id: int, title: str, author: str) -> int:
        """
        Create a thread.

        Returns:
            int: New thread id

        Raises:
            PersistenceError: If the write fails
        """
        ...

    def ensure_thread(
        self, category_id: int, title: str, author: str, content: str
    ) -> tuple[int, bool]:
        """
        Create a thread and its opening post unless the title exists.

        The lookup and both inserts are one atomic step, so concurrent
        callers never create the same thread twice.

        Returns:
            (thread id, True if the thread was created)

        Raises:
            PersistenceError: If the write fails
        """
        ...

    def ensure_first_post(
        self, thread_id: int, author: str, content: str
    ) -> tuple[ForumPost, bool]:
        """
        Create the opening post of a thread that has none.

        Returns:
            (opening post, True if it was created)

        Raises:
            PersistenceError: If the write fails
        """
        ...

    def get_first_post(self, thread_id: int) -> ForumPost | None:
        """
        Get the opening post of a thread.

        Returns:
            ForumPost if the thread has posts, None otherwise

        Raises:
            PersistenceError: If the read fails
        """
        ...

    def create_post(self, thread_id: int, author: str, content: str) -> int:
        """
        Create a post. Content is stored verbatim.

        Returns:
            int: New post id

        Raises:
            PersistenceError: If the write fails
        """
        ...

    def update_post_content(self, post_id: int, content: str) -> None:
        """
        Replace the content of a post.

        Raises:
            PersistenceError: If the write fails
        """
        ...


__all__ = ["ForumStore", "PersistenceError"]
