"""Test likes and comments"""
import threading

import pytest

from utils.exceptions import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from utils.ids import new_document_id


@pytest.fixture
def post(store):
    return store.create("alice", "Alice", None, "hello")


def test_like_then_like_again_conflicts(engagement, post):
    likes = engagement.like(post.id, "bob")
    assert [like.user_id for like in likes] == ["bob"]

    with pytest.raises(ConflictError, match="Post already liked"):
        engagement.like(post.id, "bob")


def test_unlike_without_like_conflicts(engagement, post):
    with pytest.raises(ConflictError, match="Post has not yet been liked"):
        engagement.unlike(post.id, "bob")


def test_unlike_twice_conflicts(engagement, post):
    engagement.like(post.id, "bob")
    assert engagement.unlike(post.id, "bob") == []

    with pytest.raises(ConflictError):
        engagement.unlike(post.id, "bob")


def test_likes_are_newest_first(engagement, post):
    engagement.like(post.id, "bob")
    engagement.like(post.id, "carol")
    likes = engagement.like(post.id, "alice")

    assert [like.user_id for like in likes] == ["alice", "carol", "bob"]


def test_unlike_keeps_order_of_others(engagement, post):
    for user in ("bob", "carol", "alice"):
        engagement.like(post.id, user)

    likes = engagement.unlike(post.id, "carol")
    assert [like.user_id for like in likes] == ["alice", "bob"]


def test_like_unlike_round_trip(engagement, store, post):
    engagement.like(post.id, "carol")
    before = store.get_by_id(post.id).likes

    engagement.like(post.id, "bob")
    engagement.unlike(post.id, "bob")

    assert store.get_by_id(post.id).likes == before


def test_like_unknown_post(engagement):
    with pytest.raises(NotFoundError):
        engagement.like(new_document_id(), "bob")


def test_like_malformed_post_id(engagement):
    with pytest.raises(NotFoundError):
        engagement.like("123", "bob")


def test_add_comment(engagement, post):
    comments = engagement.add_comment(post.id, "carol", "Carol", None, "nice")

    assert len(comments) == 1
    assert comments[0].text == "nice"
    assert comments[0].author_id == "carol"
    assert comments[0].author_name == "Carol"
    assert comments[0].id


def test_comments_are_newest_first(engagement, post):
    engagement.add_comment(post.id, "bob", "Bob", None, "first")
    comments = engagement.add_comment(post.id, "carol", "Carol", None, "second")

    assert [c.text for c in comments] == ["second", "first"]
    assert comments[0].id != comments[1].id


@pytest.mark.parametrize("text", ["fish & chips", "1 < 2", "  padded  ", "   "])
def test_add_comment_keeps_text_exactly(engagement, store, post, text):
    comments = engagement.add_comment(post.id, "bob", "Bob", None, text)

    assert comments[0].text == text
    assert store.get_by_id(post.id).comments[0].text == text


def test_add_empty_comment_rejected(engagement, store, post):
    with pytest.raises(ValidationError):
        engagement.add_comment(post.id, "bob", "Bob", None, "")
    assert store.get_by_id(post.id).comments == []


def test_add_comment_unknown_post(engagement):
    with pytest.raises(NotFoundError):
        engagement.add_comment(new_document_id(), "bob", "Bob", None, "hi")


def test_delete_comment_by_other_user(engagement, store, post):
    comments = engagement.add_comment(post.id, "carol", "Carol", None, "nice")
    comment_id = comments[0].id

    with pytest.raises(UnauthorizedError):
        engagement.delete_comment(post.id, comment_id, "bob")

    assert store.get_by_id(post.id).comments == comments


def test_delete_comment_by_author(engagement, post):
    comments = engagement.add_comment(post.id, "carol", "Carol", None, "nice")
    assert engagement.delete_comment(post.id, comments[0].id, "carol") == []


def test_delete_comment_keeps_others(engagement, post):
    engagement.add_comment(post.id, "bob", "Bob", None, "one")
    comments = engagement.add_comment(post.id, "carol", "Carol", None, "two")

    remaining = engagement.delete_comment(post.id, comments[0].id, "carol")
    assert [c.text for c in remaining] == ["one"]


def test_delete_missing_comment(engagement, post):
    with pytest.raises(NotFoundError, match="Comment does not exist"):
        engagement.delete_comment(post.id, "nope", "carol")


def test_delete_comment_unknown_post_checked_first(engagement):
    with pytest.raises(NotFoundError, match="Post not found"):
        engagement.delete_comment(new_document_id(), "nope", "carol")


def test_concurrent_likes_are_not_lost(engagement, store, post):
    users = [f"user{i}" for i in range(25)]
    threads = [threading.Thread(target=engagement.like, args=(post.id, user)) for user in users]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    likes = store.get_by_id(post.id).likes
    assert sorted(like.user_id for like in likes) == sorted(users)


def test_concurrent_like_and_comment_both_kept(engagement, store, post):
    threads = [
        threading.Thread(target=engagement.like, args=(post.id, "bob")),
        threading.Thread(target=engagement.add_comment, args=(post.id, "carol", "Carol", None, "hi")),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    stored = store.get_by_id(post.id)
    assert [like.user_id for like in stored.likes] == ["bob"]
    assert [c.text for c in stored.comments] == ["hi"]


def test_same_user_liking_concurrently_counts_once(engagement, store, post):
    results = []
    results_lock = threading.Lock()

    def like():
        try:
            engagement.like(post.id, "bob")
            outcome = "liked"
        except ConflictError:
            outcome = "conflict"
        with results_lock:
            results.append(outcome)

    threads = [threading.Thread(target=like) for _ in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count("liked") == 1
    assert results.count("conflict") == 19
    assert [like.user_id for like in store.get_by_id(post.id).likes] == ["bob"]


def test_likes_on_missing_posts_leave_no_locks_behind(engagement, db):
    for _ in range(50):
        with pytest.raises(NotFoundError):
            engagement.like(new_document_id(), "bob")

    assert db._post_locks == {}
