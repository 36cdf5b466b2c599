import logging
from datetime import datetime, timezone
from typing import List, Optional

from models.post import Post, Like, Comment
from services.posts import PostStore, require_text
from utils.exceptions import ConflictError, NotFoundError, UnauthorizedError
from utils.ids import new_document_id

logger = logging.getLogger(__name__)


class EngagementService:
    """
    Likes and comments on posts.

    Every operation checks the current state of the post before changing it and
    runs check and write as one atomic update through the post store, so a
    rejected request never leaves a partial change behind.
    """

    def __init__(self, store: PostStore):
        self.store = store

    def like(self, post_id: str, user_id: str) -> List[Like]:
        """Add the user's like at the head of the list, rejecting a second like"""

        def add_like(post: Post):
            if post.has_liked(user_id):
                raise ConflictError("Post already liked")
            post.likes.insert(0, Like(user_id=user_id))

        post = self.store.mutate(post_id, add_like)
        logger.info("User %s liked post %s", user_id, post.id)
        return post.likes

    def unlike(self, post_id: str, user_id: str) -> List[Like]:
        """Remove the user's like, rejecting users who have not liked the post"""

        def remove_like(post: Post):
            if not post.has_liked(user_id):
                raise ConflictError("Post has not yet been liked")
            post.likes = [like for like in post.likes if like.user_id != user_id]

        post = self.store.mutate(post_id, remove_like)
        logger.info("User %s unliked post %s", user_id, post.id)
        return post.likes

    def add_comment(
            self,
            post_id: str,
            user_id: str,
            author_name: str,
            author_avatar: Optional[str],
            text: str
    ) -> List[Comment]:
        """Add a new comment at the head of the post's comments"""
        # validated before touching storage
        text = require_text(text)
        comment = Comment(
            id=new_document_id(),
            author_id=user_id,
            author_name=author_name,
            author_avatar=author_avatar,
            text=text,
            created_at=datetime.now(timezone.utc),
        )

        def prepend_comment(post: Post):
            post.comments.insert(0, comment)

        post = self.store.mutate(post_id, prepend_comment)
        logger.info("User %s commented %s on post %s", user_id, comment.id, post.id)
        return post.comments

    def delete_comment(self, post_id: str, comment_id: str, requester_id: str) -> List[Comment]:
        """Remove a comment, only allowed for the comment's author"""

        def remove_comment(post: Post):
            comment = post.find_comment(comment_id)
            if comment is None:
                raise NotFoundError("Comment does not exist")
            if comment.author_id != requester_id:
                raise UnauthorizedError("User not authorized")
            post.comments = [c for c in post.comments if c.id != comment_id]

        post = self.store.mutate(post_id, remove_comment)
        logger.info("User %s deleted comment %s on post %s", requester_id, comment_id, post.id)
        return post.comments
