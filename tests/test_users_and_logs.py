"""Integration tests for profiles, role administration and the audit trail."""
from __future__ import annotations

from sqlalchemy import select

from cleanstreet.database import SessionLocal
from cleanstreet.models import AdminLog, User
from cleanstreet.services import record_log, spaces_service
from cleanstreet.services.auth_service import hash_password, verify_password


def _role_of(user_id) -> str:
    with SessionLocal() as session:
        user = session.get(User, user_id)
        assert user is not None
        return user.role


def _log_actions() -> list[str]:
    with SessionLocal() as session:
        return list(session.scalars(select(AdminLog.action).order_by(AdminLog.timestamp.asc())))


def test_admin_changes_another_users_role(user_factory, authed_client):
    admin = user_factory("Admin", role="admin")
    target = user_factory("Target")

    response = authed_client(admin).put(f"/users/{target.id}/role", json={"role": "volunteer"})

    assert response.status_code == 200
    assert response.json()["role"] == "volunteer"
    assert _role_of(target.id) == "volunteer"
    assert _log_actions() == ["role_change: admin='Admin' changed 'Target' from 'user' to 'volunteer'"]


def test_admin_cannot_demote_themselves(user_factory, authed_client):
    admin = user_factory("Admin", role="admin")

    response = authed_client(admin).put(f"/users/{admin.id}/role", json={"role": "user"})

    assert response.status_code == 400
    assert response.json() == {"message": "Admins cannot demote themselves"}
    assert _role_of(admin.id) == "admin"
    assert _log_actions() == []


def test_unchanged_role_is_logged_as_noop(user_factory, authed_client):
    admin = user_factory("Admin", role="admin")
    target = user_factory("Target", role="volunteer")

    response = authed_client(admin).put(f"/users/{target.id}/role", json={"role": "volunteer"})

    assert response.status_code == 200
    assert _log_actions() == ["role_change_noop: admin='Admin' kept 'Target' at 'volunteer'"]


def test_role_change_validation_and_permissions(user_factory, authed_client):
    admin = user_factory("Admin", role="admin")
    volunteer = user_factory("Volunteer", role="volunteer")
    target = user_factory("Target")

    invalid = authed_client(admin).put(f"/users/{target.id}/role", json={"role": "mayor"})
    assert invalid.status_code == 400
    assert _role_of(target.id) == "user"

    forbidden = authed_client(volunteer).put(f"/users/{target.id}/role", json={"role": "admin"})
    assert forbidden.status_code == 403

    missing = authed_client(admin).put("/users/00000000-0000-0000-0000-000000000000/role", json={"role": "user"})
    assert missing.status_code == 404


def test_user_listing_is_admin_only(user_factory, authed_client):
    admin = user_factory("Admin", role="admin")
    user_factory("Resident")

    listing = authed_client(admin).get("/users")
    assert listing.status_code == 200
    assert {item["name"] for item in listing.json()["items"]} == {"Admin", "Resident"}

    assert authed_client(user_factory("Other")).get("/users").status_code == 403


def test_profile_update_only_touches_sent_fields(user_factory, authed_client):
    resident = user_factory("Resident", location="Riverside")

    response = authed_client(resident).put("/users/me", json={"phone": " 555-0100 ", "bio": "Cyclist"})

    assert response.status_code == 200
    body = response.json()
    assert body["phone"] == "555-0100"
    assert body["bio"] == "Cyclist"
    assert body["location"] == "Riverside"
    assert body["role"] == "user"


def test_profile_photo_upload(user_factory, authed_client, fake_uploads):
    resident = user_factory("Resident")

    response = authed_client(resident).post("/users/me/photo", files={"photo": ("me.png", b"png", "image/png")})

    assert response.status_code == 200, response.text
    assert response.json()["url"] == fake_uploads[0].url
    assert response.json()["user"]["profile_photo"] == fake_uploads[0].url
    assert fake_uploads[0].key.startswith(spaces_service.PROFILE_FOLDER)


def test_profile_photo_requires_a_file(user_factory, authed_client):
    response = authed_client(user_factory("Resident")).post("/users/me/photo")

    assert response.status_code == 400
    assert response.json() == {"message": "No file uploaded"}


def test_password_change_verifies_current_password(user_factory, authed_client):
    resident = user_factory("Resident")
    with SessionLocal() as session:
        stored = session.get(User, resident.id)
        stored.hashed_password = hash_password("old-password")
        session.commit()
    client = authed_client(resident)

    wrong = client.post("/users/me/password", json={"current_password": "nope", "new_password": "new-password"})
    assert wrong.status_code == 400

    ok = client.post("/users/me/password", json={"current_password": "old-password", "new_password": "new-password"})
    assert ok.status_code == 200
    with SessionLocal() as session:
        assert verify_password("new-password", session.get(User, resident.id).hashed_password)


def test_admin_log_listing_requires_admin_and_is_newest_first(user_factory, authed_client):
    admin = user_factory("Admin", role="admin")
    with SessionLocal() as session:
        record_log(session, user_id=admin.id, action="first")
        record_log(session, user_id=admin.id, action="second")

    response = authed_client(admin).get("/admin-logs")
    assert response.status_code == 200
    items = response.json()["items"]
    assert [item["action"] for item in items] == ["second", "first"]
    assert items[0]["actor"] == {"name": "Admin", "email": "admin@example.test"}

    assert authed_client(user_factory("Resident")).get("/admin-logs").status_code == 403


def test_admin_log_listing_is_capped(user_factory, authed_client):
    admin = user_factory("Admin", role="admin")
    with SessionLocal() as session:
        session.add_all(AdminLog(user_id=admin.id, action=f"entry {index}") for index in range(205))
        session.commit()

    assert len(authed_client(admin).get("/admin-logs").json()["items"]) == 200


def test_recent_feed_is_open_to_any_user_and_survives_deleted_actors(user_factory, authed_client):
    departed = user_factory("Departed", role="admin")
    with SessionLocal() as session:
        record_log(session, user_id=departed.id, action="old entry")
        for index in range(30):
            session.add(AdminLog(user_id=departed.id, action=f"entry {index}"))
        session.commit()
        session.delete(session.get(User, departed.id))
        session.commit()

    response = authed_client(user_factory("Resident")).get("/admin-logs/recent")

    assert response.status_code == 200
    items = response.json()["items"]
    assert len(items) == 25
    assert all(item["actor"] is None for item in items)
