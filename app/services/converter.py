"""Markdown → safe HTML conversion."""

import logging

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from app.errors import ConversionError
from app.services.sanitizer import sanitize_html

logger = logging.getLogger(__name__)

# CommonMark plus GFM tables and ~~strikethrough~~, both common in trip plans.
# The instance is never reconfigured after import, so it is shared by all calls.
_md = MarkdownIt("commonmark").enable("table").enable("strikethrough")


def parse_tree(markdown: str) -> SyntaxTreeNode:
    """Parse *markdown* into a block/inline syntax tree.

    Raises:
        ConversionError: if the parser fails internally.
    """
    try:
        return SyntaxTreeNode(_md.parse(markdown))
    except Exception as exc:
        logger.error("Markdown parsing failed: %s", exc)
        raise ConversionError(f"failed to parse markdown: {exc}") from exc


def render_html(markdown: str) -> str:
    """Render *markdown* to unsanitized HTML."""
    try:
        return _md.render(markdown)
    except Exception as exc:
        logger.error("Markdown rendering failed: %s", exc)
        raise ConversionError(f"failed to convert markdown to HTML: {exc}") from exc


def markdown_to_html(markdown: str) -> str:
    """Convert *markdown* to HTML that is safe to embed in a page.

    Empty input produces an empty string. Malformed constructs are rendered
    as far as the parser understands them; only internal parser failures
    raise :class:`~app.errors.ConversionError`.
    """
    if not markdown:
        return ""
    return sanitize_html(render_html(markdown))
