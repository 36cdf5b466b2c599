import copy
import threading
from typing import List, Dict, Any, Optional, Tuple, Callable

from utils.ids import new_document_id


class InMemoryDB:
    """
    Process-local post storage, used for local development (POSTS_BACKEND=memory) and tests.

    Documents are deep-copied on the way in and out, so a caller mutating what it
    got back never changes what is stored. Updates to the same post are serialized
    with a per-post lock.
    """

    def __init__(self):
        self._posts: Dict[str, Dict[str, Any]] = {}
        self._users: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._post_locks: Dict[str, threading.Lock] = {}

    def _post_lock(self, post_id: str) -> Optional[threading.Lock]:
        """Lock guarding updates to one post; None when the post does not exist"""
        with self._lock:
            if post_id not in self._posts:
                return None
            return self._post_locks.setdefault(post_id, threading.Lock())

    def insert_post(self, data: Dict[str, Any]) -> str:
        post_id = new_document_id()
        with self._lock:
            self._posts[post_id] = copy.deepcopy(data)
        return post_id

    def list_posts(self) -> List[Tuple[str, Dict[str, Any]]]:
        with self._lock:
            items = [(post_id, copy.deepcopy(data)) for post_id, data in self._posts.items()]
        return sorted(items, key=lambda item: item[1]["created_at"], reverse=True)

    def fetch_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            data = self._posts.get(post_id)
            return copy.deepcopy(data) if data is not None else None

    def delete_post(self, post_id: str) -> None:
        with self._lock:
            self._posts.pop(post_id, None)
            self._post_locks.pop(post_id, None)

    def update_post(self, post_id: str, apply: Callable[[Dict[str, Any]], Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        post_lock = self._post_lock(post_id)
        if post_lock is None:
            return None

        with post_lock:
            current = self.fetch_post(post_id)
            if current is None:
                return None

            updated = apply(current)

            with self._lock:
                # deleted while we were computing the update
                if post_id not in self._posts:
                    return None
                self._posts[post_id] = copy.deepcopy(updated)
            return copy.deepcopy(updated)

    def add_user(self, user_id: str, data: Dict[str, Any]) -> None:
        """Seed a user profile document"""
        with self._lock:
            self._users[user_id] = copy.deepcopy(data)

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            data = self._users.get(user_id)
            return copy.deepcopy(data) if data is not None else None
