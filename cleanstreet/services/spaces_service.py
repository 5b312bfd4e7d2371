"""Photo storage on DigitalOcean Spaces (S3-compatible).

Complaint, comment and profile photos are written with a public-read ACL
under one of the fixed ``clean_street/*`` folders and referenced by their
public CDN URL. Storage counts as not configured while any ``DO_SPACES_*``
variable is missing.
"""
from __future__ import annotations

import logging
import os
import re
import uuid
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Sequence
from urllib.parse import urlparse

from boto3.session import Session
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from ..security.secrets import MissingSecretError, is_placeholder, require_secret

logger = logging.getLogger(__name__)

COMPLAINT_FOLDER = "clean_street/complaints"
COMMENT_FOLDER = "clean_street/comments"
PROFILE_FOLDER = "clean_street/profiles"

_ENV_NAMES = ("DO_SPACES_KEY", "DO_SPACES_SECRET", "DO_SPACES_REGION", "DO_SPACES_NAME", "DO_SPACES_ENDPOINT")
_EXTENSION = re.compile(r"\.[a-z0-9]{1,10}")


@dataclass(frozen=True)
class SpacesConfig:
    key: str
    secret: str
    region: str
    bucket: str
    public_endpoint: str

    @property
    def api_endpoint(self) -> str:
        return f"https://{self.region}.digitaloceanspaces.com"


@dataclass(frozen=True)
class SpacesUploadResult:
    """A stored photo: its public URL and the object key needed to remove it."""

    url: str
    key: str
    content_type: str


class SpacesConfigurationError(RuntimeError):
    """Raised when the ``DO_SPACES_*`` settings are missing or unusable."""


class SpacesUploadError(RuntimeError):
    pass


class SpacesDeletionError(RuntimeError):
    pass


def _public_endpoint(raw: str) -> str:
    endpoint = raw.strip().rstrip("/")
    if "://" not in endpoint:
        endpoint = f"https://{endpoint.lstrip(':/')}"
    if not urlparse(endpoint).netloc:
        raise SpacesConfigurationError("DO_SPACES_ENDPOINT must include a hostname")
    return endpoint


@lru_cache(maxsize=1)
def load_spaces_config() -> SpacesConfig:
    missing = sorted(name for name in _ENV_NAMES if not (os.getenv(name) or "").strip())
    if missing:
        raise SpacesConfigurationError("Object storage not configured: missing " + ", ".join(missing))

    try:
        key = require_secret("DO_SPACES_KEY")
        secret = require_secret("DO_SPACES_SECRET")
    except MissingSecretError as exc:
        raise SpacesConfigurationError(str(exc)) from exc

    region = os.environ["DO_SPACES_REGION"].strip()
    bucket = os.environ["DO_SPACES_NAME"].strip()
    for name, value in (("DO_SPACES_REGION", region), ("DO_SPACES_NAME", bucket)):
        if is_placeholder(value):
            raise SpacesConfigurationError(f"{name} must not use a placeholder value")

    return SpacesConfig(
        key=key,
        secret=secret,
        region=region,
        bucket=bucket,
        public_endpoint=_public_endpoint(os.environ["DO_SPACES_ENDPOINT"]),
    )


@lru_cache(maxsize=1)
def get_spaces_client() -> BaseClient:
    config = load_spaces_config()
    return Session().client(
        "s3",
        region_name=config.region,
        endpoint_url=config.api_endpoint,
        aws_access_key_id=config.key,
        aws_secret_access_key=config.secret,
    )


def object_key(filename: str | None, folder: str) -> str:
    """Random key inside ``folder``; the upload's extension is kept when it looks sane."""

    extension = Path(filename or "").suffix.lower()
    if not _EXTENSION.fullmatch(extension):
        extension = ""
    return f"{folder.strip('/')}/{uuid.uuid4().hex}{extension}"


def build_public_url(key: str) -> str:
    return f"{load_spaces_config().public_endpoint}/{key.lstrip('/')}"


def delete_file_from_spaces(key: str) -> None:
    if not key:
        return
    config = load_spaces_config()
    try:
        get_spaces_client().delete_object(Bucket=config.bucket, Key=key.lstrip("/"))
    except (ClientError, BotoCoreError) as exc:  # pragma: no cover - network bound
        logger.exception("Failed to delete storage object %s", key)
        raise SpacesDeletionError("Unable to delete photo from storage") from exc


async def upload_file_to_spaces(file: UploadFile, *, folder: str) -> SpacesUploadResult:
    """Store one uploaded photo and return where it can be fetched from."""

    config = load_spaces_config()
    client = get_spaces_client()
    key = object_key(file.filename, folder)
    content_type = (file.content_type or "").strip() or "application/octet-stream"

    def _put() -> None:
        file.file.seek(0)
        try:
            client.upload_fileobj(
                file.file,
                config.bucket,
                key,
                ExtraArgs={"ACL": "public-read", "ContentType": content_type},
            )
        except (ClientError, BotoCoreError) as exc:  # pragma: no cover - network bound
            logger.exception("Upload of %s failed", key)
            raise SpacesUploadError("Photo upload failed") from exc

    await run_in_threadpool(_put)
    return SpacesUploadResult(url=build_public_url(key), key=key, content_type=content_type)


def discard_uploads(results: Sequence[SpacesUploadResult]) -> None:
    """Best-effort removal of photos whose owning record was never written."""

    for result in results:
        try:
            delete_file_from_spaces(result.key)
        except (SpacesDeletionError, SpacesConfigurationError):
            logger.warning("Orphaned storage object left behind: %s", result.key)


__all__ = [
    "COMPLAINT_FOLDER",
    "COMMENT_FOLDER",
    "PROFILE_FOLDER",
    "SpacesConfig",
    "SpacesConfigurationError",
    "SpacesUploadError",
    "SpacesDeletionError",
    "SpacesUploadResult",
    "build_public_url",
    "load_spaces_config",
    "get_spaces_client",
    "object_key",
    "upload_file_to_spaces",
    "delete_file_from_spaces",
    "discard_uploads",
]
