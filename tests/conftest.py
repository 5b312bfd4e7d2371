"""Shared fixtures: SQLite schema, per-test cleanup and authenticated clients."""
from __future__ import annotations

import os
from datetime import datetime
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete, event
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

# Configuration must be in place before application modules are imported.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_cleanstreet.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ADMIN_SIGNUP_CODE", "city-hall-2026")

from cleanstreet.database import Base, SessionLocal, engine  # noqa: E402
from cleanstreet.main import app  # noqa: E402
from cleanstreet.models import AdminLog, Comment, CommentDislike, CommentLike, Complaint, User, Vote  # noqa: E402
from cleanstreet.services import get_current_user  # noqa: E402
from cleanstreet.services import spaces_service  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _create_schema() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_database() -> Iterator[None]:
    with SessionLocal() as session:
        for model in (CommentLike, CommentDislike, Comment, Vote, Complaint, AdminLog, User):
            session.execute(delete(model))
        session.commit()

    spaces_service.load_spaces_config.cache_clear()
    spaces_service.get_spaces_client.cache_clear()
    yield


@pytest.fixture
def user_factory() -> Callable[..., User]:
    def _factory(name: str, *, role: str = "user", location: str = "") -> User:
        with SessionLocal() as session:
            user = User(
                name=name,
                email=f"{name.lower().replace(' ', '.')}@example.test",
                hashed_password="test-hash",
                role=role,
                location=location,
            )
            session.add(user)
            session.commit()
            session.refresh(user)
            return user

    return _factory


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def authed_client(client: TestClient) -> Callable[[User], TestClient]:
    """Return a function that switches the acting user for subsequent requests."""

    def _with_user(user: User) -> TestClient:
        def _override() -> User:
            with SessionLocal() as session:
                fresh = session.get(User, user.id)
                assert fresh is not None
                return fresh

        app.dependency_overrides[get_current_user] = _override
        return client

    return _with_user


@pytest.fixture
def complaint_factory() -> Callable[..., Complaint]:
    def _factory(
        owner: User,
        title: str = "Broken streetlight",
        *,
        address: str = "",
        status: str = "received",
        created_at: datetime | None = None,
    ) -> Complaint:
        with SessionLocal() as session:
            complaint = Complaint(user_id=owner.id, title=title, address=address, status=status, photos=[])
            if created_at is not None:
                complaint.created_at = created_at
            session.add(complaint)
            session.commit()
            session.refresh(complaint)
            return complaint

    return _factory


@pytest.fixture
def fake_uploads(monkeypatch: pytest.MonkeyPatch) -> list[spaces_service.SpacesUploadResult]:
    """Replace object storage uploads with an in-memory recorder."""

    uploaded: list[spaces_service.SpacesUploadResult] = []

    async def _fake_upload(file, *, folder: str) -> spaces_service.SpacesUploadResult:
        key = f"{folder}/{len(uploaded)}-{file.filename}"
        result = spaces_service.SpacesUploadResult(
            url=f"https://cdn.example.test/{key}",
            key=key,
            content_type=file.content_type or "application/octet-stream",
        )
        uploaded.append(result)
        return result

    monkeypatch.setattr(spaces_service, "upload_file_to_spaces", _fake_upload)
    return uploaded


@pytest.fixture
def failing_inserts() -> Iterator[Callable[[type], None]]:
    """Return a function that makes every insert of a given model fail like a database error."""

    models: set[type] = set()

    def _before_flush(session, flush_context, instances) -> None:
        if any(isinstance(obj, tuple(models)) for obj in session.new):
            raise OperationalError("INSERT", {}, Exception("database is locked"))

    event.listen(Session, "before_flush", _before_flush)
    yield models.add
    event.remove(Session, "before_flush", _before_flush)


@pytest.fixture
def deleted_uploads(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Record object keys removed from storage instead of calling it."""

    deleted: list[str] = []
    monkeypatch.setattr(spaces_service, "delete_file_from_spaces", deleted.append)
    return deleted
