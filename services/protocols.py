"""
Storage protocol for the post feed.

Both the Firestore backend and the in-memory backend implement PostDatabase,
so the post store and the engagement engine never depend on a concrete database.
Documents are plain dicts; the document id is kept outside the data.
"""

from typing import Protocol, Optional, List, Dict, Any, Tuple, Callable

Document = Dict[str, Any]


class PostDatabase(Protocol):

    def insert_post(self, data: Document) -> str:
        """Persist a new post document and return its generated id."""
        ...

    def list_posts(self) -> List[Tuple[str, Document]]:
        """Return every post as (id, data), newest first by created_at."""
        ...

    def fetch_post(self, post_id: str) -> Optional[Document]:
        """Return the post document, or None when it does not exist."""
        ...

    def delete_post(self, post_id: str) -> None:
        """Remove the post document permanently."""
        ...

    def update_post(self, post_id: str, apply: Callable[[Document], Document]) -> Optional[Document]:
        """
        Atomically read the post, pass it to `apply` and write back what it returns.

        Returns the written document, or None when the post does not exist.
        Any exception raised by `apply` aborts the update without writing.
        `apply` may be invoked more than once if the backend retries on contention.
        """
        ...

    def get_user(self, user_id: str) -> Optional[Document]:
        """Return the user profile document, or None when it does not exist."""
        ...
