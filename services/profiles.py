import logging

from models.user import Profile
from services.protocols import PostDatabase
from utils.exceptions import StorageError

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, db: PostDatabase):
        self.db = db

    def lookup(self, user_id: str) -> Profile:
        """
        Resolve a user id to the name and avatar shown next to their posts and comments.
        Users without a profile document are shown as "Unknown".
        """
        try:
            data = self.db.get_user(user_id)
        except Exception as e:
            logger.exception("Profile lookup failed for user %s", user_id)
            raise StorageError("Profile lookup failed") from e

        if data is None:
            logger.warning("No profile found for user %s", user_id)
            return Profile(name="Unknown", avatar=None)

        return Profile(
            name=data.get("username") or "Unknown",
            avatar=data.get("profileIcon"),
        )
