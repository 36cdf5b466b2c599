"""
Error taxonomy for the post feed.

Every error carries the HTTP status the API layer answers with. The message is
what the client sees, except for StorageError which is always reported as a
generic server error.
"""


class FeedError(Exception):
    """Base exception for all post feed errors."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FeedError):
    """Raised when a required field is missing or empty."""
    status_code = 400


class NotFoundError(FeedError):
    """Raised when a post or comment id does not resolve."""
    status_code = 404


class UnauthorizedError(FeedError):
    """Raised when the caller does not own the resource."""
    status_code = 401


class ConflictError(FeedError):
    """Raised when a like/unlike is applied in the wrong state."""
    status_code = 400


class StorageError(FeedError):
    """Raised when the persistence layer fails unexpectedly."""
    status_code = 500
