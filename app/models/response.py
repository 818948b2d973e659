from typing import List

from pydantic import BaseModel


class ProcessMarkdownResponse(BaseModel):
    title: str
    description: str
    html_content: str
    """Sanitized HTML, safe to embed in the public itinerary page."""
    internal_images: List[str]
    """Image targets that must be resolved against the service's own storage."""


class UploadFileResponse(BaseModel):
    file_path: str
    filename: str
    size: int
    mime_type: str
