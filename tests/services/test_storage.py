"""
Tests for upload storage on the local filesystem.
"""

import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from personnel_records.exceptions import ValidationFailed
from personnel_records.services.storage import (
    AVATAR_FOLDER,
    FINGERPRINT_FOLDER,
    is_present,
)


def make_upload(content=b"\x89PNG fake", filename="face.png", content_type="image/png"):
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class TestCheckImage:

    def test_image_accepted(self, storage):
        storage.check_image(make_upload(), 1024, "photo")

    def test_non_image_rejected(self, storage):
        upload = make_upload(filename="notes.txt", content_type="text/plain")
        with pytest.raises(ValidationFailed, match="Only image files are allowed"):
            storage.check_image(upload, 1024, "photo")

    def test_oversized_rejected(self, storage):
        upload = make_upload(content=b"x" * 2048)
        with pytest.raises(ValidationFailed, match="File too large"):
            storage.check_image(upload, 1024, "fingerprint")

    def test_empty_part_not_present(self):
        assert is_present(None) is False
        assert is_present(make_upload(filename="")) is False
        assert is_present(make_upload()) is True


class TestSaveResolveRemove:

    def test_save_photo_at_root(self, storage):
        url = storage.save(make_upload())
        assert url.startswith("/uploads/")
        assert url.endswith(".png")
        assert "/" not in url[len("/uploads/"):]

        path = storage.resolve(url[len("/uploads/"):])
        assert path.read_bytes() == b"\x89PNG fake"

    def test_save_into_folder_with_prefix(self, storage):
        url = storage.save(make_upload(), AVATAR_FOLDER, prefix="avatar-7-")
        assert url.startswith("/uploads/avatars/avatar-7-")

    def test_names_are_unique(self, storage):
        first = storage.save(make_upload(), FINGERPRINT_FOLDER)
        second = storage.save(make_upload(), FINGERPRINT_FOLDER)
        assert first != second

    def test_resolve_rejects_traversal(self, storage, tmp_path):
        (tmp_path / "secret.txt").write_text("classified")
        with pytest.raises(ValueError, match="Invalid file path"):
            storage.resolve("../secret.txt")

    def test_resolve_missing(self, storage):
        with pytest.raises(FileNotFoundError):
            storage.resolve("nothing-here.png")

    def test_remove_deletes_file(self, storage):
        url = storage.save(make_upload())
        path = storage.resolve(url[len("/uploads/"):])

        storage.remove(url)
        assert not path.exists()

    def test_remove_missing_does_not_raise(self, storage):
        storage.remove("/uploads/gone.png")
        storage.remove(None)
        storage.remove("https://elsewhere.example/x.png")
