import logging
from datetime import datetime, timezone
from typing import List, Optional, Callable, TypeVar

from models.post import Post
from services.protocols import PostDatabase
from utils.exceptions import FeedError, ValidationError, NotFoundError, UnauthorizedError, StorageError
from utils.ids import parse_post_id

logger = logging.getLogger(__name__)

T = TypeVar("T")


def require_text(text: Optional[str]) -> str:
    """Reject missing or empty text; anything else is stored exactly as given"""
    if not text:
        raise ValidationError("Text is required")
    return text


class PostStore:
    """Persistence and retrieval of whole Post aggregates"""

    def __init__(self, db: PostDatabase):
        self.db = db

    def _call(self, operation: str, fn: Callable[..., T], *args) -> T:
        """Run a backend call, turning unexpected failures into StorageError"""
        try:
            return fn(*args)
        except FeedError:
            raise
        except Exception as e:
            logger.exception("Storage failure during %s", operation)
            raise StorageError(f"Storage failure during {operation}") from e

    def create(self, author_id: str, author_name: str, author_avatar: Optional[str], text: str) -> Post:
        """
        Create and persist a new post with no likes or comments

        Raises:
            ValidationError: if text is empty
            StorageError: if the post could not be written
        """
        text = require_text(text)
        data = {
            "author_id": author_id,
            "author_name": author_name,
            "author_avatar": author_avatar,
            "text": text,
            "created_at": datetime.now(timezone.utc),
            "likes": [],
            "comments": [],
        }
        post_id = self._call("create", self.db.insert_post, data)
        logger.info("User %s created post %s", author_id, post_id)
        return Post.from_document(post_id, data)

    def list_all(self) -> List[Post]:
        """Get all posts, newest first"""
        documents = self._call("list", self.db.list_posts)
        return [Post.from_document(post_id, data) for post_id, data in documents]

    def get_by_id(self, post_id: str) -> Post:
        """
        Get a single post

        Raises:
            NotFoundError: if the id is malformed or no such post exists
        """
        post_id = parse_post_id(post_id)
        data = self._call("fetch", self.db.fetch_post, post_id)
        if data is None:
            raise NotFoundError("Post not found")
        return Post.from_document(post_id, data)

    def delete_by_id(self, post_id: str, requester_id: str) -> None:
        """
        Delete a post, only allowed for its author

        Raises:
            NotFoundError: if the id is malformed or no such post exists
            UnauthorizedError: if the requester is not the author
        """
        post = self.get_by_id(post_id)
        if post.author_id != requester_id:
            logger.info("User %s refused deletion of post %s", requester_id, post.id)
            raise UnauthorizedError("User not authorized to delete this post")

        self._call("delete", self.db.delete_post, post.id)
        logger.info("User %s deleted post %s", requester_id, post.id)

    def mutate(self, post_id: str, change: Callable[[Post], None]) -> Post:
        """
        Apply `change` to a post and persist the result as one atomic update.

        `change` edits the Post in place and raises a FeedError to abort; in that
        case nothing is written and the error propagates unchanged.
        """
        post_id = parse_post_id(post_id)

        def apply(data):
            post = Post.from_document(post_id, data)
            change(post)
            return post.to_document()

        data = self._call("update", self.db.update_post, post_id, apply)
        if data is None:
            raise NotFoundError("Post not found")
        return Post.from_document(post_id, data)
