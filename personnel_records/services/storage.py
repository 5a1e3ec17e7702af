"""
Upload storage on the local filesystem.

All uploaded images live under one root directory:

    <root>/                 record photos
    <root>/fingerprint/     record fingerprints
    <root>/avatars/         user avatars

Stored files are referenced by their public URL
(/uploads/<folder>/<name>), which is what the database keeps.
"""

import logging
import os
import secrets
import shutil
import time
from pathlib import Path

from fastapi import UploadFile

from personnel_records.exceptions import ValidationFailed

logger = logging.getLogger(__name__)

URL_PREFIX = "/uploads/"
PHOTO_FOLDER = ""
FINGERPRINT_FOLDER = "fingerprint"
AVATAR_FOLDER = "avatars"


def is_present(upload: UploadFile | None) -> bool:
    """A multipart file part that actually carries a file."""
    return upload is not None and bool(upload.filename)


def upload_size(upload: UploadFile) -> int:
    if upload.size is not None:
        return upload.size
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(0)
    return size


class UploadStorage:

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()

    def check_image(self, upload: UploadFile, max_bytes: int, field: str) -> None:
        """Reject non-image uploads and files over max_bytes."""
        content_type = upload.content_type or ""
        if not content_type.startswith("image/"):
            raise ValidationFailed(f"Only image files are allowed ({field})")
        if upload_size(upload) > max_bytes:
            limit_mb = max_bytes / (1024 * 1024)
            raise ValidationFailed(
                f"File too large ({field}): limit is {limit_mb:g}MB"
            )

    def save(self, upload: UploadFile, folder: str = "", prefix: str = "") -> str:
        """
        Write an upload to disk and return its public URL.

        Names are <prefix><epoch-ms>-<random><ext>; uniqueness is
        expected from the timestamp plus random suffix.
        """
        ext = Path(upload.filename or "").suffix.lower()
        unique = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
        name = f"{prefix}{unique}{ext}"

        target_dir = self.root / folder
        target_dir.mkdir(parents=True, exist_ok=True)

        upload.file.seek(0)
        with open(target_dir / name, "wb") as out:
            shutil.copyfileobj(upload.file, out)

        relative = f"{folder}/{name}" if folder else name
        return URL_PREFIX + relative

    def resolve(self, relative_path: str) -> Path:
        """
        Map a path below /uploads/ to a file on disk.

        Raises ValueError if the path escapes the uploads root and
        FileNotFoundError if nothing is stored there.
        """
        candidate = (self.root / relative_path).resolve()
        if candidate != self.root and self.root not in candidate.parents:
            raise ValueError("Invalid file path")
        if not candidate.is_file():
            raise FileNotFoundError(relative_path)
        return candidate

    def remove(self, url: str | None) -> None:
        """Delete a stored file by URL. Failures are logged, not raised."""
        if not url or not url.startswith(URL_PREFIX):
            return
        try:
            path = self.resolve(url[len(URL_PREFIX):])
            path.unlink()
        except FileNotFoundError:
            logger.warning("Stored file already missing: %s", url)
        except (OSError, ValueError):
            logger.exception("Failed to remove stored file %s", url)
