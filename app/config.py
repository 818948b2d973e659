import os
import tempfile
from pathlib import Path


# Storage backend used by the API: "local" (filesystem) or "memory".
STORAGE_BACKEND = os.environ.get("TRIPFLOW_STORAGE_BACKEND", "local").strip().lower()

# Where the local backend keeps uploaded files.
# Serverless deployments (VERCEL=1) only have /tmp writable.
_base_dir_raw = os.environ.get("FILE_STORAGE_BASE_DIR")
if _base_dir_raw and _base_dir_raw.strip():
    FILE_STORAGE_BASE_DIR = Path(_base_dir_raw)
elif os.environ.get("VERCEL") == "1":
    FILE_STORAGE_BASE_DIR = Path("/tmp")
else:
    FILE_STORAGE_BASE_DIR = Path(tempfile.gettempdir()) / "tripflow-files"

MAX_UPLOAD_SIZE = int(os.environ.get("TRIPFLOW_MAX_UPLOAD_SIZE", str(10 * 1024 * 1024)))  # 10 MB

# Only markdown itineraries are accepted for upload.
ALLOWED_UPLOAD_EXTS = {".md", ".markdown"}

PREVIEW_RATE_LIMIT = os.environ.get("TRIPFLOW_PREVIEW_RATE_LIMIT", "30/minute")
UPLOAD_RATE_LIMIT = os.environ.get("TRIPFLOW_UPLOAD_RATE_LIMIT", "10/minute")

LOG_LEVEL = os.environ.get("TRIPFLOW_LOG_LEVEL", "INFO").upper()
