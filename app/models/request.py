from pydantic import BaseModel, Field


class PreviewRequest(BaseModel):
    markdown: str = Field(
        default="",
        description="Raw markdown source of the itinerary.",
        examples=["# Kyoto in 3 days\n\nTemples, tea and trains.\n\n![map](maps/kyoto.png)"],
    )


class ProcessFileRequest(BaseModel):
    file_path: str = Field(
        min_length=1,
        description="Relative storage path returned by the upload endpoint.",
        examples=["uploads/0b6f2f4e-8f53-4c1e-9d0c-7a1d2f4b5c6d.md"],
    )
