"""Tests for the like toggle service."""

import pytest

from inkwell.core.errors import ConflictingStateError, NotFoundError
from inkwell.models.post import POST_STATUS_PUBLISHED, POST_STATUS_REJECTED
from inkwell.services.likes import toggle_like


def test_double_toggle_restores_state(db_session, published_post, reader, author) -> None:
    toggle_like(db_session, published_post.id, author)
    assert published_post.likes_count == 1

    liked = toggle_like(db_session, published_post.id, reader)
    assert liked.is_liked is True
    assert liked.likes_count == 2

    unliked = toggle_like(db_session, published_post.id, reader)
    assert unliked.is_liked is False
    assert unliked.likes_count == 1
    assert not published_post.is_liked_by(reader.id)
    assert published_post.is_liked_by(author.id)


def test_likes_count_matches_liker_set(db_session, published_post, make_user) -> None:
    users = [make_user() for _ in range(4)]
    for user in users:
        toggle_like(db_session, published_post.id, user)
    toggle_like(db_session, published_post.id, users[0])

    db_session.refresh(published_post)
    liker_ids = {like.user_id for like in published_post.likes}
    assert len(liker_ids) == len(published_post.likes) == published_post.likes_count == 3


def test_self_like_is_allowed(db_session, published_post, author) -> None:
    assert toggle_like(db_session, published_post.id, author).is_liked is True


def test_toggle_touches_updated_at(db_session, published_post, reader) -> None:
    before = published_post.updated_at
    toggle_like(db_session, published_post.id, reader)
    db_session.refresh(published_post)
    assert published_post.updated_at >= before


def test_missing_post(db_session, reader) -> None:
    with pytest.raises(NotFoundError):
        toggle_like(db_session, 999, reader)


def test_id_beyond_integer_range(db_session, reader) -> None:
    with pytest.raises(NotFoundError):
        toggle_like(db_session, 10**20, reader)


def test_unpublished_post(db_session, make_post, author, reader) -> None:
    post = make_post(author, status=POST_STATUS_REJECTED)
    with pytest.raises(ConflictingStateError) as exc_info:
        toggle_like(db_session, post.id, reader)
    assert exc_info.value.current == POST_STATUS_REJECTED
    assert exc_info.value.required == POST_STATUS_PUBLISHED
