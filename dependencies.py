import logging
from typing import Annotated

from fastapi import Request, Depends, HTTPException
from firebase_admin.auth import verify_id_token

from models.user import User
from services.engagement import EngagementService
from services.posts import PostStore
from services.profiles import ProfileService

logger = logging.getLogger(__name__)


async def get_current_user(request: Request) -> User:
    """
    Verify Firebase ID token from Authorization header and return user info
    """
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header"
        )

    token = authorization.split("Bearer ")[1]
    try:
        # Verify the Firebase ID token
        decoded_token = verify_id_token(token, check_revoked=True, clock_skew_seconds=10)
    except Exception as e:
        logger.info("Invalid authentication token: %s", e)
        raise HTTPException(
            status_code=401,
            detail="Invalid authentication token"
        )

    return User(
        user_id=decoded_token["uid"],
        email=decoded_token.get("email"),
    )


async def get_post_store(request: Request) -> PostStore:
    """Get post store from app state"""
    return request.app.state.post_store


async def get_engagement_service(request: Request) -> EngagementService:
    """Get likes/comments service from app state"""
    return request.app.state.engagement_service


async def get_profile_service(request: Request) -> ProfileService:
    """Get profile lookup from app state"""
    return request.app.state.profile_service


# Type annotations for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
Posts = Annotated[PostStore, Depends(get_post_store)]
Engagement = Annotated[EngagementService, Depends(get_engagement_service)]
Profiles = Annotated[ProfileService, Depends(get_profile_service)]
