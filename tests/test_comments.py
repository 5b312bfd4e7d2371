"""Integration tests for comment threads and like/dislike reactions."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from cleanstreet.database import SessionLocal
from cleanstreet.models import Comment, CommentDislike, CommentLike
from cleanstreet.services import Principal, react_to_comment, spaces_service


def _reaction_rows(model) -> int:
    with SessionLocal() as session:
        return int(session.scalar(select(func.count(model.id))) or 0)


def _comment_count() -> int:
    return _reaction_rows(Comment)


def test_add_comment_returns_author_fields(user_factory, complaint_factory, authed_client):
    complaint = complaint_factory(user_factory("Owner"))
    volunteer = user_factory("Volunteer", role="volunteer")

    response = authed_client(volunteer).post(f"/comments/{complaint.id}", data={"content": "  On my way  "})

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["content"] == "On my way"
    assert body["name"] == "Volunteer"
    assert body["role"] == "volunteer"
    assert body["like_count"] == 0
    assert body["parent_id"] is None


def test_empty_comment_is_rejected(user_factory, complaint_factory, authed_client):
    complaint = complaint_factory(user_factory("Owner"))
    client = authed_client(user_factory("Commenter"))

    response = client.post(f"/comments/{complaint.id}", data={"content": "   "})

    assert response.status_code == 400
    assert response.json() == {"message": "Content or photo required"}
    assert _comment_count() == 0


def test_photo_only_comment(user_factory, complaint_factory, authed_client, fake_uploads):
    complaint = complaint_factory(user_factory("Owner"))
    client = authed_client(user_factory("Commenter"))

    response = client.post(
        f"/comments/{complaint.id}",
        files={"photo": ("after.jpg", b"jpeg bytes", "image/jpeg")},
    )

    assert response.status_code == 201, response.text
    assert response.json()["content"] is None
    assert response.json()["photo_url"] == fake_uploads[0].url
    assert fake_uploads[0].key.startswith(spaces_service.COMMENT_FOLDER)


def test_comment_on_unknown_complaint_is_404(user_factory, authed_client):
    client = authed_client(user_factory("Commenter"))

    response = client.post("/comments/00000000-0000-0000-0000-000000000000", data={"content": "Hello"})

    assert response.status_code == 404


def test_reply_parent_must_belong_to_the_same_complaint(user_factory, complaint_factory, authed_client):
    owner = user_factory("Owner")
    first = complaint_factory(owner, "First")
    second = complaint_factory(owner, "Second")
    client = authed_client(owner)

    parent = client.post(f"/comments/{first.id}", data={"content": "Parent"}).json()

    reply = client.post(f"/comments/{first.id}", data={"content": "Reply", "parent_id": parent["id"]})
    assert reply.status_code == 201
    assert reply.json()["parent_id"] == parent["id"]

    foreign = client.post(f"/comments/{second.id}", data={"content": "Reply", "parent_id": parent["id"]})
    assert foreign.status_code == 400
    assert foreign.json() == {"message": "Invalid parent comment"}

    malformed = client.post(f"/comments/{first.id}", data={"content": "Reply", "parent_id": "not-an-id"})
    assert malformed.status_code == 400


def test_list_comments_oldest_first_with_viewer_flags(user_factory, complaint_factory, authed_client):
    owner = user_factory("Owner")
    neighbour = user_factory("Neighbour")
    complaint = complaint_factory(owner)

    first = authed_client(owner).post(f"/comments/{complaint.id}", data={"content": "First"}).json()
    authed_client(neighbour).post(f"/comments/{complaint.id}", data={"content": "Second"})
    authed_client(neighbour).patch(f"/comments/{first['id']}/react", json={"action": "like"})

    response = authed_client(neighbour).get(f"/comments/{complaint.id}")

    assert response.status_code == 200
    items = response.json()["items"]
    assert [item["content"] for item in items] == ["First", "Second"]
    assert [item["name"] for item in items] == ["Owner", "Neighbour"]
    assert items[0]["like_count"] == 1
    assert items[0]["viewer_has_liked"] is True
    assert items[1]["viewer_has_liked"] is False

    owner_view = authed_client(owner).get(f"/comments/{complaint.id}").json()["items"]
    assert owner_view[0]["like_count"] == 1
    assert owner_view[0]["viewer_has_liked"] is False


def test_like_twice_clears_the_reaction(user_factory, complaint_factory, authed_client):
    owner = user_factory("Owner")
    client = authed_client(owner)
    comment = client.post(f"/comments/{complaint_factory(owner).id}", data={"content": "Hi"}).json()

    liked = client.patch(f"/comments/{comment['id']}/react", json={"action": "like"}).json()
    assert liked["like_count"] == 1
    assert liked["viewer_has_liked"] is True

    cleared = client.patch(f"/comments/{comment['id']}/react", json={"action": "like"}).json()
    assert cleared["like_count"] == 0
    assert cleared["viewer_has_liked"] is False
    assert _reaction_rows(CommentLike) == 0


def test_dislike_replaces_an_existing_like(user_factory, complaint_factory, authed_client):
    owner = user_factory("Owner")
    client = authed_client(owner)
    comment = client.post(f"/comments/{complaint_factory(owner).id}", data={"content": "Hi"}).json()

    client.patch(f"/comments/{comment['id']}/react", json={"action": "like"})
    flipped = client.patch(f"/comments/{comment['id']}/react", json={"action": "dislike"}).json()

    assert flipped == {
        "comment_id": comment["id"],
        "like_count": 0,
        "dislike_count": 1,
        "viewer_has_liked": False,
        "viewer_has_disliked": True,
    }
    assert _reaction_rows(CommentLike) == 0
    assert _reaction_rows(CommentDislike) == 1


def test_null_action_clears_any_reaction(user_factory, complaint_factory, authed_client):
    owner = user_factory("Owner")
    client = authed_client(owner)
    comment = client.post(f"/comments/{complaint_factory(owner).id}", data={"content": "Hi"}).json()

    client.patch(f"/comments/{comment['id']}/react", json={"action": "dislike"})
    cleared = client.patch(f"/comments/{comment['id']}/react", json={"action": None}).json()

    assert cleared["dislike_count"] == 0
    assert cleared["viewer_has_disliked"] is False


def test_unknown_reaction_is_rejected(user_factory, complaint_factory, authed_client):
    owner = user_factory("Owner")
    client = authed_client(owner)
    comment = client.post(f"/comments/{complaint_factory(owner).id}", data={"content": "Hi"}).json()

    response = client.patch(f"/comments/{comment['id']}/react", json={"action": "love"})

    assert response.status_code == 400


def test_delete_comment_by_owner_admin_or_nobody_else(user_factory, complaint_factory, authed_client):
    author = user_factory("Author")
    stranger = user_factory("Stranger")
    admin = user_factory("Admin", role="admin")
    complaint = complaint_factory(author)
    first = authed_client(author).post(f"/comments/{complaint.id}", data={"content": "One"}).json()
    second = authed_client(author).post(f"/comments/{complaint.id}", data={"content": "Two"}).json()

    assert authed_client(stranger).delete(f"/comments/{first['id']}").status_code == 403

    owner_delete = authed_client(author).delete(f"/comments/{first['id']}")
    assert owner_delete.status_code == 200
    assert owner_delete.json() == {"message": "Comment deleted"}

    assert authed_client(admin).delete(f"/comments/{second['id']}").status_code == 200
    assert _comment_count() == 0


def test_failed_write_discards_the_uploaded_photo(
    user_factory, complaint_factory, authed_client, fake_uploads, deleted_uploads, failing_inserts
):
    complaint = complaint_factory(user_factory("Owner"))
    client = authed_client(user_factory("Commenter"))
    failing_inserts(Comment)

    response = client.post(f"/comments/{complaint.id}", files={"photo": ("after.jpg", b"jpeg bytes", "image/jpeg")})

    assert response.status_code == 500
    assert deleted_uploads == [fake_uploads[0].key]
    assert _comment_count() == 0


def test_losing_a_race_to_an_identical_like_is_not_an_error(user_factory, complaint_factory, monkeypatch):
    owner = user_factory("Owner")
    complaint = complaint_factory(owner)
    with SessionLocal() as session:
        comment = Comment(complaint_id=complaint.id, user_id=owner.id, content="Hi")
        session.add(comment)
        session.commit()
        comment_id = comment.id

    with SessionLocal() as session:

        def _commit_after_concurrent_like() -> None:
            # Another request by the same user commits the like between our read and our insert.
            session.rollback()
            with SessionLocal() as other:
                other.add(CommentLike(comment_id=comment_id, user_id=owner.id))
                other.commit()
            raise IntegrityError("INSERT INTO comment_likes", {}, Exception("UNIQUE constraint failed"))

        monkeypatch.setattr(session, "commit", _commit_after_concurrent_like)
        snapshot = react_to_comment(session, principal=Principal.from_user(owner), comment_id=comment_id, action="like")

    assert snapshot["like_count"] == 1
    assert snapshot["viewer_has_liked"] is True
    assert _reaction_rows(CommentLike) == 1
