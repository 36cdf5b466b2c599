from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    user_id: str
    email: Optional[str] = None


class Profile(BaseModel):
    """Display snapshot of a user, copied onto posts and comments at write time"""
    name: str
    avatar: Optional[str] = None
