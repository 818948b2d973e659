"""File storage backends for uploaded itineraries.

All backends address files by a relative, ``/``-separated path such as
``uploads/3f1c…e9.md``. The path is produced by :meth:`FileStorage.put_file`
and is what callers persist and later pass back to ``get_file``.

Backends
--------
:class:`LocalFileStorage`
    Files live under a base directory on the local filesystem. Every path is
    resolved and checked to stay inside that directory.

:class:`InMemoryFileStorage`
    A dict guarded by a lock. Used for tests and throwaway demo deployments.
"""

import io
import logging
import os
import posixpath
import threading
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Dict

from app.errors import StorageError, StoredFileNotFoundError, UnsafePathError
from app.models.file_info import FileInfo

logger = logging.getLogger(__name__)

UPLOADS_DIR = "uploads"

_EXT_BY_MIME = {
    "text/markdown": ".md",
    "text/plain": ".txt",
    "application/json": ".json",
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "application/pdf": ".pdf",
}

_MIME_BY_EXT = {
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".txt": "text/plain",
    ".json": "application/json",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".pdf": "application/pdf",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def extension_for_mime_type(mime_type: str) -> str:
    return _EXT_BY_MIME.get((mime_type or "").split(";")[0].strip().lower(), "")


def mime_type_for_path(path: str) -> str:
    ext = posixpath.splitext(path)[1].lower()
    return _MIME_BY_EXT.get(ext, DEFAULT_MIME_TYPE)


def _new_upload_path(filename: str, mime_type: str) -> str:
    """Return a collision-free relative path, keeping the original extension."""
    ext = os.path.splitext(filename)[1] or extension_for_mime_type(mime_type)
    return f"{UPLOADS_DIR}/{uuid.uuid4()}{ext}"


def _check_put_args(data: bytes, filename: str) -> None:
    if not filename:
        raise StorageError("filename cannot be empty")
    if not data:
        raise StorageError("file is empty")


def _check_path(path: str) -> None:
    if not path:
        raise StorageError("path cannot be empty")


class FileStorage(ABC):
    """Storage capability used by the markdown processor and the API."""

    @abstractmethod
    def put_file(self, data: bytes, filename: str, mime_type: str = "") -> str:
        """Store *data* and return its new relative path.

        Raises:
            StorageError: if *data* or *filename* is empty, or the write fails.
        """

    @abstractmethod
    def get_file(self, path: str) -> BinaryIO:
        """Open the file at *path* for reading. The caller must close it.

        Raises:
            StoredFileNotFoundError: if no file exists at *path*.
            UnsafePathError: if *path* escapes the storage root.
        """

    @abstractmethod
    def delete_file(self, path: str) -> None:
        """Remove the file at *path*.

        Raises:
            StoredFileNotFoundError: if no file exists at *path*.
        """

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """Return True when a file is stored at *path*."""

    @abstractmethod
    def get_file_info(self, path: str) -> FileInfo:
        """Return size and MIME type of the file at *path*."""


class LocalFileStorage(FileStorage):
    """Store files below *base_dir* on the local filesystem."""

    def __init__(self, base_dir) -> None:
        if not base_dir or not str(base_dir).strip():
            raise StorageError("base directory cannot be empty")
        self.base_dir = Path(base_dir).resolve()
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"failed to create base directory {self.base_dir}: {exc}") from exc

    def _resolve(self, path: str) -> Path:
        """Join *path* to the base directory and ensure it stays inside it."""
        _check_path(path)
        resolved = (self.base_dir / path).resolve()
        if resolved == self.base_dir or self.base_dir not in resolved.parents:
            raise UnsafePathError(f"path traversal detected: {path}")
        return resolved

    def put_file(self, data: bytes, filename: str, mime_type: str = "") -> str:
        _check_put_args(data, filename)
        relative_path = _new_upload_path(filename, mime_type)
        full_path = self._resolve(relative_path)
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_bytes(data)
        except OSError as exc:
            full_path.unlink(missing_ok=True)
            raise StorageError(f"failed to write file content: {exc}") from exc
        logger.info("Stored %s (%d bytes)", relative_path, len(data))
        return relative_path

    def get_file(self, path: str) -> BinaryIO:
        full_path = self._resolve(path)
        try:
            return full_path.open("rb")
        except FileNotFoundError as exc:
            raise StoredFileNotFoundError(f"file not found: {path}") from exc
        except OSError as exc:
            raise StorageError(f"failed to open file {path}: {exc}") from exc

    def delete_file(self, path: str) -> None:
        full_path = self._resolve(path)
        try:
            full_path.unlink()
        except FileNotFoundError as exc:
            raise StoredFileNotFoundError(f"file not found: {path}") from exc
        except OSError as exc:
            raise StorageError(f"failed to delete file {path}: {exc}") from exc
        logger.info("Deleted %s", path)

    def file_exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def get_file_info(self, path: str) -> FileInfo:
        full_path = self._resolve(path)
        try:
            size = full_path.stat().st_size
        except FileNotFoundError as exc:
            raise StoredFileNotFoundError(f"file not found: {path}") from exc
        except OSError as exc:
            raise StorageError(f"failed to get file info: {exc}") from exc
        return FileInfo(path=path, size=size, mime_type=mime_type_for_path(path))


class InMemoryFileStorage(FileStorage):
    """Keep files in process memory; contents are lost on restart."""

    def __init__(self) -> None:
        self._files: Dict[str, bytes] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _normalize(path: str) -> str:
        _check_path(path)
        normalized = posixpath.normpath(path.replace("\\", "/")).lstrip("/")
        if normalized in ("", ".") or normalized == ".." or normalized.startswith("../"):
            raise UnsafePathError(f"path traversal detected: {path}")
        return normalized

    def put_file(self, data: bytes, filename: str, mime_type: str = "") -> str:
        _check_put_args(data, filename)
        relative_path = _new_upload_path(filename, mime_type)
        with self._lock:
            self._files[relative_path] = bytes(data)
        return relative_path

    def get_file(self, path: str) -> BinaryIO:
        key = self._normalize(path)
        with self._lock:
            data = self._files.get(key)
        if data is None:
            raise StoredFileNotFoundError(f"file not found: {path}")
        return io.BytesIO(data)

    def delete_file(self, path: str) -> None:
        key = self._normalize(path)
        with self._lock:
            if self._files.pop(key, None) is None:
                raise StoredFileNotFoundError(f"file not found: {path}")

    def file_exists(self, path: str) -> bool:
        key = self._normalize(path)
        with self._lock:
            return key in self._files

    def get_file_info(self, path: str) -> FileInfo:
        key = self._normalize(path)
        with self._lock:
            data = self._files.get(key)
        if data is None:
            raise StoredFileNotFoundError(f"file not found: {path}")
        return FileInfo(path=path, size=len(data), mime_type=mime_type_for_path(path))


def create_storage(backend: str, base_dir=None) -> FileStorage:
    """Build the storage backend named by *backend* (``"local"`` or ``"memory"``)."""
    if backend == "memory":
        return InMemoryFileStorage()
    if backend == "local":
        return LocalFileStorage(base_dir)
    raise ValueError(f"Unknown storage backend '{backend}'. Use 'local' or 'memory'.")
