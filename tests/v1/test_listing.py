"""Tests for the public post listing."""

from fastapi import status

from inkwell.models import PostLike
from inkwell.models.post import POST_STATUS_HIDDEN, POST_STATUS_PENDING, POST_STATUS_REJECTED


def _titles(response) -> list[str]:
    return [blog["title"] for blog in response.json()["blogs"]]


def test_pagination_over_25_posts(client, author, make_published_series) -> None:
    make_published_series(author, 25)

    sizes = []
    for page in (1, 2, 3):
        response = client.get("/blogs", params={"page": page, "limit": 10})
        assert response.status_code == status.HTTP_200_OK
        pagination = response.json()["pagination"]
        assert pagination == {"page": page, "limit": 10, "total": 25, "pages": 3}
        sizes.append(len(response.json()["blogs"]))

    assert sizes == [10, 10, 5]


def test_page_past_the_end_is_empty(client, author, make_published_series) -> None:
    make_published_series(author, 3)
    response = client.get("/blogs", params={"page": 5, "limit": 2})
    assert response.json()["blogs"] == []
    assert response.json()["pagination"]["pages"] == 2


def test_page_beyond_integer_range_is_empty(client, author, make_published_series) -> None:
    make_published_series(author, 3)
    response = client.get("/blogs", params={"page": 10**19, "limit": 2})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["blogs"] == []
    assert response.json()["pagination"] == {
        "page": 10**19,
        "limit": 2,
        "total": 3,
        "pages": 2,
    }


def test_oversized_limit_is_clamped(client, author, make_published_series) -> None:
    make_published_series(author, 3)
    response = client.get("/blogs", params={"limit": 10**6})
    assert response.status_code == status.HTTP_200_OK
    assert len(response.json()["blogs"]) == 3
    assert response.json()["pagination"]["limit"] == 100


def test_defaults(client, author, make_published_series) -> None:
    make_published_series(author, 12)
    response = client.get("/blogs")
    data = response.json()
    assert data["pagination"] == {"page": 1, "limit": 10, "total": 12, "pages": 2}
    assert len(data["blogs"]) == 10


def test_empty_listing(client) -> None:
    response = client.get("/blogs")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "blogs": [],
        "pagination": {"page": 1, "limit": 10, "total": 0, "pages": 0},
    }


def test_invalid_pagination_is_400(client) -> None:
    assert client.get("/blogs", params={"page": 0}).status_code == status.HTTP_400_BAD_REQUEST
    assert client.get("/blogs", params={"limit": 0}).status_code == status.HTTP_400_BAD_REQUEST
    assert client.get("/blogs", params={"page": "abc"}).status_code == status.HTTP_400_BAD_REQUEST


def test_only_published_posts_are_listed(client, make_post, author, published_post) -> None:
    for post_status in (POST_STATUS_PENDING, POST_STATUS_REJECTED, POST_STATUS_HIDDEN):
        make_post(author, status=post_status, title=post_status)
    response = client.get("/blogs")
    assert _titles(response) == ["Published post"]
    assert response.json()["pagination"]["total"] == 1


def test_latest_and_oldest(client, author, make_published_series) -> None:
    make_published_series(author, 3)
    assert _titles(client.get("/blogs")) == ["Post 2", "Post 1", "Post 0"]
    assert _titles(client.get("/blogs", params={"sort": "latest"})) == ["Post 2", "Post 1", "Post 0"]
    assert _titles(client.get("/blogs", params={"sort": "oldest"})) == ["Post 0", "Post 1", "Post 2"]


def test_unknown_sort_falls_back_to_latest(client, author, make_published_series) -> None:
    make_published_series(author, 3)
    assert _titles(client.get("/blogs", params={"sort": "random"})) == ["Post 2", "Post 1", "Post 0"]


def test_popular_ranks_by_like_count(client, author, make_user, make_published_series, db_session) -> None:
    # Like counts are ranked numerically, not by raw liker-set order.
    quiet, busiest, middling = make_published_series(author, 3)
    fans = [make_user() for _ in range(3)]
    for fan in fans:
        busiest.likes.append(PostLike(user_id=fan.id))
    middling.likes.append(PostLike(user_id=fans[0].id))
    db_session.commit()

    response = client.get("/blogs", params={"sort": "popular"})
    assert _titles(response) == ["Post 1", "Post 2", "Post 0"]
    assert [blog["likesCount"] for blog in response.json()["blogs"]] == [3, 1, 0]


def test_listing_redacts_likers_and_flags_viewer(
    client, make_post, author, reader, reader_headers
) -> None:
    make_post(author, status="published", likers=(reader,))
    response = client.get("/blogs", headers=reader_headers)
    blog = response.json()["blogs"][0]
    assert "likes" not in blog
    assert blog["likesCount"] == 1
    assert blog["isLikedByCurrentUser"] is True
    # Public listings do not expose author emails.
    assert blog["author"] == {"id": author.id, "username": "author"}


def test_anonymous_listing_has_no_like_flag(client, published_post) -> None:
    blog = client.get("/blogs").json()["blogs"][0]
    assert blog["isLikedByCurrentUser"] is None
