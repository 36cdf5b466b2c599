from typing import List, Dict

from fastapi import APIRouter

from dependencies import CurrentUser, Posts, Engagement, Profiles
from models.post import Post, PostCreate, Like, Comment, CommentCreate

router = APIRouter()


@router.post("")
def create_post(
        post_data: PostCreate,
        posts: Posts,
        profiles: Profiles,
        current_user: CurrentUser
) -> Post:
    """Create a post authored by the current user"""
    profile = profiles.lookup(current_user.user_id)
    return posts.create(current_user.user_id, profile.name, profile.avatar, post_data.text)


@router.get("")
def get_posts(posts: Posts, current_user: CurrentUser) -> List[Post]:
    """Get all posts, newest first"""
    return posts.list_all()


@router.get("/{post_id}")
def get_post(post_id: str, posts: Posts, current_user: CurrentUser) -> Post:
    return posts.get_by_id(post_id)


@router.delete("/{post_id}")
def delete_post(post_id: str, posts: Posts, current_user: CurrentUser) -> Dict[str, str]:
    """Delete a post; only its author may do this"""
    posts.delete_by_id(post_id, current_user.user_id)
    return {"msg": "Post has been removed"}


@router.put("/like/{post_id}")
def like_post(post_id: str, engagement: Engagement, current_user: CurrentUser) -> List[Like]:
    """
    Like a post

    Returns:
        The post's likes, newest first
    """
    return engagement.like(post_id, current_user.user_id)


@router.put("/unlike/{post_id}")
def unlike_post(post_id: str, engagement: Engagement, current_user: CurrentUser) -> List[Like]:
    """
    Remove the current user's like from a post

    Returns:
        The post's remaining likes
    """
    return engagement.unlike(post_id, current_user.user_id)


@router.post("/comment/{post_id}")
def add_comment(
        post_id: str,
        comment: CommentCreate,
        engagement: Engagement,
        profiles: Profiles,
        current_user: CurrentUser
) -> List[Comment]:
    """Comment on a post as the current user"""
    profile = profiles.lookup(current_user.user_id)
    return engagement.add_comment(
        post_id,
        current_user.user_id,
        profile.name,
        profile.avatar,
        comment.text
    )


@router.delete("/comment/{post_id}/{comment_id}")
def delete_comment(
        post_id: str,
        comment_id: str,
        engagement: Engagement,
        current_user: CurrentUser
) -> List[Comment]:
    """Delete a comment; only its author may do this"""
    return engagement.delete_comment(post_id, comment_id, current_user.user_id)
