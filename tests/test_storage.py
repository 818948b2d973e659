"""Tests for the file storage backends."""

import pytest

from app.errors import StorageError, StoredFileNotFoundError, UnsafePathError
from app.services.storage import (
    InMemoryFileStorage,
    LocalFileStorage,
    create_storage,
    extension_for_mime_type,
    mime_type_for_path,
)


@pytest.fixture(params=["local", "memory"])
def storage(request, tmp_path):
    if request.param == "local":
        return LocalFileStorage(tmp_path / "files")
    return InMemoryFileStorage()


class TestPutAndGet:
    def test_round_trip(self, storage):
        path = storage.put_file(b"# Trip", "trip.md", "text/markdown")
        with storage.get_file(path) as stream:
            assert stream.read() == b"# Trip"

    def test_path_layout(self, storage):
        path = storage.put_file(b"# Trip", "My Trip.markdown")
        assert path.startswith("uploads/")
        assert path.endswith(".markdown")
        assert "My Trip" not in path

    def test_paths_are_unique(self, storage):
        first = storage.put_file(b"a", "trip.md")
        second = storage.put_file(b"a", "trip.md")
        assert first != second

    def test_extension_from_mime_type(self, storage):
        assert storage.put_file(b"# Trip", "trip", "text/markdown").endswith(".md")

    def test_empty_data_rejected(self, storage):
        with pytest.raises(StorageError):
            storage.put_file(b"", "trip.md")

    def test_empty_filename_rejected(self, storage):
        with pytest.raises(StorageError):
            storage.put_file(b"data", "")

    def test_missing_file(self, storage):
        with pytest.raises(StoredFileNotFoundError):
            storage.get_file("uploads/nope.md")

    def test_empty_path(self, storage):
        with pytest.raises(StorageError):
            storage.get_file("")

    def test_traversal_rejected(self, storage):
        with pytest.raises(UnsafePathError):
            storage.get_file("../../etc/passwd")


class TestDeleteAndInfo:
    def test_delete(self, storage):
        path = storage.put_file(b"# Trip", "trip.md")
        assert storage.file_exists(path)
        storage.delete_file(path)
        assert not storage.file_exists(path)

    def test_delete_missing(self, storage):
        with pytest.raises(StoredFileNotFoundError):
            storage.delete_file("uploads/nope.md")

    def test_file_info(self, storage):
        path = storage.put_file(b"# Trip\n", "trip.md")
        info = storage.get_file_info(path)
        assert info.path == path
        assert info.size == 7
        assert info.mime_type == "text/markdown"

    def test_file_info_missing(self, storage):
        with pytest.raises(StoredFileNotFoundError):
            storage.get_file_info("uploads/nope.md")


class TestLocalFileStorage:
    def test_creates_base_dir(self, tmp_path):
        base = tmp_path / "nested" / "files"
        LocalFileStorage(base)
        assert base.is_dir()

    def test_files_land_under_base_dir(self, tmp_path):
        storage = LocalFileStorage(tmp_path)
        path = storage.put_file(b"# Trip", "trip.md")
        assert (tmp_path / path).read_bytes() == b"# Trip"

    def test_absolute_path_outside_base_rejected(self, tmp_path):
        storage = LocalFileStorage(tmp_path / "files")
        (tmp_path / "secret.md").write_text("secret")
        with pytest.raises(UnsafePathError):
            storage.get_file(str(tmp_path / "secret.md"))

    def test_sibling_prefix_directory_rejected(self, tmp_path):
        storage = LocalFileStorage(tmp_path / "files")
        (tmp_path / "files-other").mkdir()
        (tmp_path / "files-other" / "x.md").write_text("x")
        with pytest.raises(UnsafePathError):
            storage.get_file("../files-other/x.md")

    def test_base_dir_itself_rejected(self, tmp_path):
        storage = LocalFileStorage(tmp_path)
        with pytest.raises(UnsafePathError):
            storage.delete_file(".")

    def test_empty_base_dir_rejected(self):
        with pytest.raises(StorageError):
            LocalFileStorage("")


class TestMimeTypes:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("a.md", "text/markdown"),
            ("a.MARKDOWN", "text/markdown"),
            ("a.txt", "text/plain"),
            ("a.jpeg", "image/jpeg"),
            ("a.png", "image/png"),
            ("a.bin", "application/octet-stream"),
            ("noext", "application/octet-stream"),
        ],
    )
    def test_mime_type_for_path(self, path, expected):
        assert mime_type_for_path(path) == expected

    def test_extension_for_mime_type(self):
        assert extension_for_mime_type("text/markdown; charset=utf-8") == ".md"
        assert extension_for_mime_type("application/x-unknown") == ""
        assert extension_for_mime_type("") == ""


class TestCreateStorage:
    def test_memory(self):
        assert isinstance(create_storage("memory"), InMemoryFileStorage)

    def test_local(self, tmp_path):
        storage = create_storage("local", tmp_path)
        assert isinstance(storage, LocalFileStorage)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_storage("redis")
