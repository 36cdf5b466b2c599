import re
import secrets
import string

from utils.exceptions import NotFoundError

# Same shape as Firestore auto-generated document ids
ID_ALPHABET = string.ascii_letters + string.digits
ID_LENGTH = 20
_ID_PATTERN = re.compile(rf"^[A-Za-z0-9]{{{ID_LENGTH}}}$")


def new_document_id() -> str:
    """Generate a random 20 character alphanumeric id"""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def parse_post_id(raw) -> str:
    """
    Validate a post id coming from the outside world.
    A malformed id can never match a stored post, so it is reported exactly like a lookup miss.
    """
    if not isinstance(raw, str) or not _ID_PATTERN.match(raw):
        raise NotFoundError("Post not found")
    return raw
