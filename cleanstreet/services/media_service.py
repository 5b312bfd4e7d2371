"""Photo upload orchestration shared by complaints, comments and profiles."""
from __future__ import annotations

import logging
from typing import Sequence

from fastapi import UploadFile

from ..errors import UpstreamError
from . import spaces_service
from .spaces_service import SpacesConfigurationError, SpacesUploadError, SpacesUploadResult

logger = logging.getLogger(__name__)


def _has_content(file: UploadFile | None) -> bool:
    # Browsers send an empty part for untouched <input type=file> fields.
    return file is not None and bool(file.filename)


def present_files(files: Sequence[UploadFile | None] | None) -> list[UploadFile]:
    return [file for file in (files or []) if _has_content(file)]


async def upload_photos(files: Sequence[UploadFile], *, folder: str) -> list[SpacesUploadResult]:
    """Upload every file or none of them.

    When any upload fails the objects already stored for this call are
    removed again and :class:`UpstreamError` is raised, so the caller never
    persists a record that points at a partial set of photos.
    """

    if not files:
        return []

    stored: list[SpacesUploadResult] = []
    try:
        for file in files:
            stored.append(await spaces_service.upload_file_to_spaces(file, folder=folder))
    except SpacesConfigurationError as exc:
        logger.warning("Photo upload rejected: %s", exc)
        raise UpstreamError(str(exc)) from exc
    except SpacesUploadError as exc:
        spaces_service.discard_uploads(stored)
        raise UpstreamError(str(exc)) from exc

    return stored


async def upload_photo(file: UploadFile, *, folder: str) -> SpacesUploadResult:
    stored = await upload_photos([file], folder=folder)
    return stored[0]


def discard_photos(stored: Sequence[SpacesUploadResult]) -> None:
    """Remove photos uploaded for a record whose write then failed."""

    if stored:
        logger.warning("Discarding %d uploaded photo(s) after a failed write", len(stored))
        spaces_service.discard_uploads(stored)


__all__ = ["present_files", "upload_photos", "upload_photo", "discard_photos"]
