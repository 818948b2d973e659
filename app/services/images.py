import re
from typing import List

# Markdown image syntax: ![alt](target)
_IMAGE_RE = re.compile(r"!\[.*?\]\(([^)]+)\)")

# Targets with these exact prefixes are hosted elsewhere and need no resolution
_EXTERNAL_PREFIXES = ("http://", "https://")


def is_external(target: str) -> bool:
    """Return True when *target* is an absolute http(s) URL (case-sensitive)."""
    return target.startswith(_EXTERNAL_PREFIXES)


def find_internal_images(markdown: str) -> List[str]:
    """Return image targets in *markdown* that point at internally hosted files.

    Order follows the document and duplicates are kept, so the result can be
    zipped back against the source positions.
    """
    return [
        target for target in _IMAGE_RE.findall(markdown) if not is_external(target)
    ]
