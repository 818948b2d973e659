from fastapi import Request

from app.services.processor import MarkdownProcessor
from app.services.storage import FileStorage


def get_processor(request: Request) -> MarkdownProcessor:
    return request.app.state.processor


def get_storage(request: Request) -> FileStorage:
    return request.app.state.storage
