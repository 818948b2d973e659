"""Markdown processing pipeline: one document in, one ProcessedContent out."""

import logging
from typing import Optional

from app.errors import StorageError
from app.models.processed_content import ProcessedContent
from app.services.converter import markdown_to_html
from app.services.extractor import extract_title_and_description
from app.services.images import find_internal_images
from app.services.storage import FileStorage

logger = logging.getLogger(__name__)


class MarkdownProcessor:
    """Turn itinerary markdown into sanitized HTML plus its metadata.

    The processor holds no per-call state; one instance is built at startup
    and shared by every request. *storage* is only needed for
    :meth:`process_stored_file`.
    """

    def __init__(self, storage: Optional[FileStorage] = None) -> None:
        self.storage = storage

    def process(self, markdown: str) -> ProcessedContent:
        """Convert *markdown* and extract its title, description and images.

        Raises:
            ConversionError: if the markdown parser fails internally.
        """
        html_content = markdown_to_html(markdown)
        title, description = extract_title_and_description(markdown)
        internal_images = find_internal_images(markdown)

        logger.debug(
            "Processed markdown document",
            extra={"chars": len(markdown), "internal_images": len(internal_images)},
        )
        return ProcessedContent(
            title=title,
            description=description,
            html_content=html_content,
            internal_images=internal_images,
        )

    def process_stored_file(self, path: str) -> ProcessedContent:
        """Read the markdown file at *path* from storage and process it.

        The whole file is read before parsing; undecodable bytes are replaced.

        Raises:
            StorageError: if no storage is configured or the file cannot be read.
            ConversionError: if the markdown parser fails internally.
        """
        if self.storage is None:
            raise StorageError("no file storage configured")

        with self.storage.get_file(path) as stream:
            try:
                data = stream.read()
            except OSError as exc:
                raise StorageError(f"failed to read file content: {exc}") from exc

        return self.process(data.decode("utf-8", errors="replace"))
