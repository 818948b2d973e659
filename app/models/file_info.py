from pydantic import BaseModel


class FileInfo(BaseModel):
    """Metadata about a file held by a storage backend."""

    path: str  # relative storage path, always "/"-separated
    size: int
    mime_type: str
