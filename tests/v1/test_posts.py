# mypy: ignore-errors
# tests/v1/test_posts.py
"""Tests for post endpoints."""

from fastapi import status

from inkwell.models import Privacy


def _create(client, headers, **payload):
    body = {"title": "Hello World", **payload}
    return client.post("/api/v1/posts", json=body, headers=headers)


def test_create_post(client, alice, auth_headers) -> None:
    """Creating a post derives the slug and defaults to public."""
    response = _create(
        client,
        auth_headers("alice"),
        summary="First post",
        content={"type": "doc", "children": [{"text": "Hi"}]},
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["slug"] == "hello-world"
    assert data["privacy"] == "PUBLIC"
    assert data["profile_id"] == "alice"
    assert data["content"] == {"type": "doc", "children": [{"text": "Hi"}]}


def test_duplicate_titles_get_suffixed_slugs(client, alice, auth_headers) -> None:
    slugs = [_create(client, auth_headers("alice")).json()["slug"] for _ in range(3)]
    assert slugs == ["hello-world", "hello-world-1", "hello-world-2"]


def test_create_post_requires_identity(client) -> None:
    response = _create(client, {})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["code"] == "AUTHENTICATION_ERROR"


def test_create_post_requires_profile(client, auth_headers) -> None:
    response = _create(client, auth_headers("nobody"))
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["code"] == "NOT_FOUND"


def test_create_post_validates_title(client, alice, auth_headers) -> None:
    response = client.post("/api/v1/posts", json={"title": ""}, headers=auth_headers("alice"))
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_get_post_by_id_and_slug(client, alice, bob, auth_headers) -> None:
    created = _create(client, auth_headers("alice")).json()

    by_id = client.get(f"/api/v1/posts/{created['id']}")
    assert by_id.status_code == status.HTTP_200_OK
    assert by_id.json()["title"] == "Hello World"

    by_slug = client.get("/api/v1/posts/lookup", params={"slug": "hello-world"})
    assert by_slug.status_code == status.HTTP_200_OK
    assert by_slug.json()["id"] == created["id"]


def test_lookup_requires_id_or_slug(client) -> None:
    response = client.get("/api/v1/posts/lookup")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "INVALID_INPUT"


def test_get_unknown_post(client) -> None:
    response = client.get("/api/v1/posts/does-not-exist")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_private_post_is_hidden_from_others(client, alice, bob, make_post, auth_headers) -> None:
    """Private posts look missing to everyone but their owner."""
    post = make_post(alice, "Secret", privacy=Privacy.PRIVATE)

    assert client.get(f"/api/v1/posts/{post.id}").status_code == status.HTTP_404_NOT_FOUND
    assert (
        client.get(f"/api/v1/posts/{post.id}", headers=auth_headers("bob")).status_code
        == status.HTTP_404_NOT_FOUND
    )
    owner = client.get(f"/api/v1/posts/{post.id}", headers=auth_headers("alice"))
    assert owner.status_code == status.HTTP_200_OK
    assert owner.json()["privacy"] == "PRIVATE"


def test_views_are_counted_for_non_owners(client, alice, bob, auth_headers) -> None:
    """New posts start with one view; the owner's reads are not counted."""
    post_id = _create(client, auth_headers("alice")).json()["id"]

    first = client.get(f"/api/v1/posts/{post_id}", headers=auth_headers("bob"))
    assert first.json()["views"] == 2
    anonymous = client.get(f"/api/v1/posts/{post_id}")
    assert anonymous.json()["views"] == 3
    owner = client.get(f"/api/v1/posts/{post_id}", headers=auth_headers("alice"))
    assert owner.json()["views"] == 3


def test_update_post(client, alice, auth_headers) -> None:
    """Updates are partial and leave the slug alone."""
    post_id = _create(client, auth_headers("alice"), summary="keep me").json()["id"]

    response = client.patch(
        f"/api/v1/posts/{post_id}",
        json={"title": "Renamed", "privacy": "PRIVATE"},
        headers=auth_headers("alice"),
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["title"] == "Renamed"
    assert data["privacy"] == "PRIVATE"
    assert data["summary"] == "keep me"
    assert data["slug"] == "hello-world"


def test_update_rejects_null_title(client, alice, auth_headers) -> None:
    post_id = _create(client, auth_headers("alice")).json()["id"]
    response = client.patch(
        f"/api/v1/posts/{post_id}", json={"title": None}, headers=auth_headers("alice")
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_update_by_non_owner_is_forbidden(client, alice, bob, auth_headers) -> None:
    post_id = _create(client, auth_headers("alice")).json()["id"]
    response = client.patch(
        f"/api/v1/posts/{post_id}", json={"title": "Mine now"}, headers=auth_headers("bob")
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["code"] == "OWNERSHIP_ERROR"


def test_delete_post(client, alice, bob, auth_headers) -> None:
    post_id = _create(client, auth_headers("alice")).json()["id"]

    forbidden = client.delete(f"/api/v1/posts/{post_id}", headers=auth_headers("bob"))
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN

    deleted = client.delete(f"/api/v1/posts/{post_id}", headers=auth_headers("alice"))
    assert deleted.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/v1/posts/{post_id}").status_code == status.HTTP_404_NOT_FOUND


def test_list_posts_newest_first(client, alice, bob, make_post) -> None:
    older = make_post(alice, "Older", minutes=0)
    newer = make_post(bob, "Newer", minutes=5)

    response = client.get("/api/v1/posts")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [edge["node"]["id"] for edge in data["edges"]] == [newer.id, older.id]
    assert data["total_count"] == 2
    assert data["page_info"] == {
        "has_next_page": False,
        "has_previous_page": False,
        "start_cursor": data["edges"][0]["cursor"],
        "end_cursor": data["edges"][1]["cursor"],
    }


def test_list_posts_pages_with_cursor(client, alice, make_post) -> None:
    posts = [make_post(alice, f"Post {i}", minutes=i) for i in range(5)]
    expected = [post.id for post in reversed(posts)]

    first = client.get("/api/v1/posts", params={"first": 2}).json()
    assert [edge["node"]["id"] for edge in first["edges"]] == expected[:2]
    assert first["page_info"]["has_next_page"] is True
    assert first["total_count"] == 5

    second = client.get(
        "/api/v1/posts", params={"first": 2, "after": first["page_info"]["end_cursor"]}
    ).json()
    assert [edge["node"]["id"] for edge in second["edges"]] == expected[2:4]
    assert second["page_info"]["has_previous_page"] is True
    assert second["total_count"] == 5

    back = client.get(
        "/api/v1/posts", params={"last": 2, "before": second["page_info"]["start_cursor"]}
    ).json()
    assert [edge["node"]["id"] for edge in back["edges"]] == expected[:2]
    assert back["page_info"]["has_previous_page"] is False
    assert back["page_info"]["has_next_page"] is True


def test_posts_with_equal_timestamps_are_not_skipped(client, alice, make_post) -> None:
    """Rows sharing a creation time are split across pages without loss."""
    ids = {make_post(alice, f"Same {i}", minutes=0).id for i in range(5)}

    seen = []
    after = None
    while True:
        params = {"first": 2}
        if after:
            params["after"] = after
        page = client.get("/api/v1/posts", params=params).json()
        seen.extend(edge["node"]["id"] for edge in page["edges"])
        if not page["page_info"]["has_next_page"]:
            break
        after = page["page_info"]["end_cursor"]
    assert sorted(seen) == sorted(ids)
    assert len(seen) == len(ids)


def test_list_hides_private_posts(client, alice, bob, make_post, auth_headers) -> None:
    public = make_post(alice, "Public", minutes=0)
    private = make_post(alice, "Private", minutes=1, privacy=Privacy.PRIVATE)

    anonymous = client.get("/api/v1/posts").json()
    assert [edge["node"]["id"] for edge in anonymous["edges"]] == [public.id]

    # Unscoped listings stay public even for the owner.
    unscoped = client.get("/api/v1/posts", headers=auth_headers("alice")).json()
    assert [edge["node"]["id"] for edge in unscoped["edges"]] == [public.id]

    own = client.get(
        "/api/v1/posts", params={"profile_id": "alice"}, headers=auth_headers("alice")
    ).json()
    assert [edge["node"]["id"] for edge in own["edges"]] == [private.id, public.id]

    only_private = client.get(
        "/api/v1/posts",
        params={"profile_id": "alice", "privacy": "PRIVATE"},
        headers=auth_headers("alice"),
    ).json()
    assert [edge["node"]["id"] for edge in only_private["edges"]] == [private.id]

    other = client.get(
        "/api/v1/posts",
        params={"profile_id": "alice", "privacy": "PRIVATE"},
        headers=auth_headers("bob"),
    ).json()
    assert [edge["node"]["id"] for edge in other["edges"]] == [public.id]


def test_anonymous_request_for_private_posts(client, alice) -> None:
    response = client.get("/api/v1/posts", params={"privacy": "PRIVATE"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_search_sets_matching_query(client, alice, make_post) -> None:
    hit = make_post(
        alice,
        "Databases",
        minutes=1,
        content={"children": [{"text": "An ode to keyset pagination"}]},
    )
    make_post(alice, "Cooking", minutes=2, summary="Pasta and more")

    response = client.get("/api/v1/posts", params={"q": "KEYSET"}).json()
    assert response["total_count"] == 1
    node = response["edges"][0]["node"]
    assert node["id"] == hit.id
    assert "keyset" in node["matching_query"]


def test_filter_by_language_and_time_range(client, alice, make_post) -> None:
    make_post(alice, "English early", minutes=0)
    wanted = make_post(alice, "English late", minutes=30)
    make_post(alice, "German late", minutes=30, language="de")

    response = client.get(
        "/api/v1/posts",
        params={"language": "en", "from": "2025-01-15T10:45:00", "to": "2025-01-15T11:30:00"},
    ).json()
    assert [edge["node"]["id"] for edge in response["edges"]] == [wanted.id]


def test_inverted_time_range_is_rejected(client) -> None:
    response = client.get(
        "/api/v1/posts", params={"from": "2025-02-01T00:00:00", "to": "2025-01-01T00:00:00"}
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "INVALID_INPUT"


def test_sort_by_stars(client, alice, bob, make_post, auth_headers) -> None:
    popular = make_post(alice, "Popular", minutes=0)
    quiet = make_post(alice, "Quiet", minutes=5)
    client.post(f"/api/v1/posts/{popular.id}/star", headers=auth_headers("bob"))

    response = client.get("/api/v1/posts", params={"sort": "stars", "first": 1}).json()
    assert [edge["node"]["id"] for edge in response["edges"]] == [popular.id]

    rest = client.get(
        "/api/v1/posts",
        params={"sort": "stars", "first": 1, "after": response["page_info"]["end_cursor"]},
    ).json()
    assert [edge["node"]["id"] for edge in rest["edges"]] == [quiet.id]
    assert rest["page_info"]["has_next_page"] is False


def test_pagination_errors(client) -> None:
    malformed = client.get("/api/v1/posts", params={"first": 2, "after": "%%%"})
    assert malformed.status_code == status.HTTP_400_BAD_REQUEST
    assert malformed.json()["code"] == "MALFORMED_CURSOR"

    negative = client.get("/api/v1/posts", params={"first": -1})
    assert negative.status_code == status.HTTP_400_BAD_REQUEST
    assert negative.json()["code"] == "INVALID_PAGINATION_ARGS"

    mixed = client.get("/api/v1/posts", params={"first": 1, "last": 1})
    assert mixed.json()["code"] == "INVALID_PAGINATION_ARGS"


def test_search_matches_non_ascii_content(client, alice, auth_headers) -> None:
    created = client.post(
        "/api/v1/posts",
        json={"title": "Morning", "content": {"text": "un café noir"}},
        headers=auth_headers("alice"),
    ).json()

    response = client.get("/api/v1/posts", params={"q": "café"}).json()
    assert response["total_count"] == 1
    node = response["edges"][0]["node"]
    assert node["id"] == created["id"]
    assert node["matching_query"] == "un café noir"


def test_search_ignores_document_keys(client, alice, make_post) -> None:
    make_post(alice, "Structured", content={"type": "doc", "children": []})

    response = client.get("/api/v1/posts", params={"q": "children"}).json()
    assert response["total_count"] == 0
    assert response["edges"] == []


def test_search_follows_content_updates(client, alice, auth_headers) -> None:
    created = client.post(
        "/api/v1/posts",
        json={"title": "Draft", "content": ["about indexes"]},
        headers=auth_headers("alice"),
    ).json()
    client.patch(
        f"/api/v1/posts/{created['id']}",
        json={"content": ["about cursors"]},
        headers=auth_headers("alice"),
    )

    assert client.get("/api/v1/posts", params={"q": "indexes"}).json()["total_count"] == 0
    assert client.get("/api/v1/posts", params={"q": "cursors"}).json()["total_count"] == 1
