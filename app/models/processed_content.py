from typing import Tuple

from pydantic import BaseModel, ConfigDict


class ProcessedContent(BaseModel):
    """Result of running one markdown document through the pipeline."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    html_content: str = ""  # sanitized, safe to embed
    internal_images: Tuple[str, ...] = ()
