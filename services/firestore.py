from typing import List, Dict, Any, Optional, Tuple, Callable

import firebase_admin
from firebase_admin import firestore as fs
from google.cloud import firestore


class FirestoreDB:
    """Post storage on Cloud Firestore, one document per post with likes and comments embedded"""

    def __init__(self, app: firebase_admin.App):
        self.db = fs.client(app)

    def collection(self, name: str):
        return self.db.collection(name)

    def insert_post(self, data: Dict[str, Any]) -> str:
        """Create a new post document with an auto-generated id"""
        new_post_ref = self.collection("posts").document()
        new_post_ref.set(data)
        return new_post_ref.id

    def list_posts(self) -> List[Tuple[str, Dict[str, Any]]]:
        """Get all posts sorted by creation date descending"""
        posts_ref = self.collection("posts").order_by("created_at", direction=firestore.Query.DESCENDING).stream()
        return [(doc.id, doc.to_dict()) for doc in posts_ref]

    def fetch_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        """Get a post by ID"""
        snapshot = self.collection("posts").document(post_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    def delete_post(self, post_id: str) -> None:
        self.collection("posts").document(post_id).delete()

    def update_post(self, post_id: str, apply: Callable[[Dict[str, Any]], Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Replace a post with the result of `apply`, inside a transaction"""
        post_ref = self.collection("posts").document(post_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def update_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            if not snapshot.exists:
                return None

            updated = apply(snapshot.to_dict())

            # Whole-aggregate write; Firestore retries the function if the document changed underneath us
            transaction.set(post_ref, updated)
            return updated

        return update_in_transaction(transaction, post_ref)

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get a user profile document"""
        snapshot = self.collection("users").document(user_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict()
