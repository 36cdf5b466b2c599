from datetime import datetime
from typing import List, Optional, Dict, Any

from pydantic import BaseModel


class Like(BaseModel):
    user_id: str


class Comment(BaseModel):
    id: str
    author_id: str
    author_name: str
    author_avatar: Optional[str] = None
    text: str
    created_at: datetime


class Post(BaseModel):
    id: str
    author_id: str
    author_name: str
    author_avatar: Optional[str] = None
    text: str
    created_at: datetime
    likes: List[Like] = []
    comments: List[Comment] = []

    def has_liked(self, user_id: str) -> bool:
        return any(like.user_id == user_id for like in self.likes)

    def find_comment(self, comment_id: str) -> Optional[Comment]:
        return next((c for c in self.comments if c.id == comment_id), None)

    def to_document(self) -> Dict[str, Any]:
        """Stored shape of the post; the id lives on the document reference, not in the data"""
        return self.model_dump(exclude={"id"})

    @classmethod
    def from_document(cls, post_id: str, data: Dict[str, Any]) -> "Post":
        return cls(id=post_id, **data)


class PostCreate(BaseModel):
    text: str


class CommentCreate(BaseModel):
    text: str
