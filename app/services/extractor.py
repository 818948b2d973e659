from typing import Iterator, Optional, Tuple

from markdown_it.tree import SyntaxTreeNode

from app.services.converter import parse_tree

# Inline node types that contribute visible text
_TEXT_TYPES = {"text", "code_inline"}
_BREAK_TYPES = {"softbreak", "hardbreak"}


def _walk(node: SyntaxTreeNode) -> Iterator[SyntaxTreeNode]:
    """Yield *node* and all of its descendants in document order."""
    yield node
    for child in node.children:
        yield from _walk(child)


def _flatten_text(node: SyntaxTreeNode) -> str:
    """Return the plain text of *node*'s inline content."""
    parts = []
    for child in _walk(node):
        if child.type in _TEXT_TYPES:
            parts.append(child.content)
        elif child.type in _BREAK_TYPES:
            parts.append(" ")
    return "".join(parts).strip()


def _is_title(node: SyntaxTreeNode) -> bool:
    return node.type == "heading" and node.tag == "h1"


def _is_description(node: SyntaxTreeNode) -> bool:
    # Tight list items wrap their text in hidden paragraphs; those are list
    # content, not paragraphs.
    return node.type == "paragraph" and not node.hidden


def _first_text(tree: SyntaxTreeNode, predicate) -> str:
    match: Optional[SyntaxTreeNode] = next(
        (node for node in _walk(tree) if predicate(node)), None
    )
    return _flatten_text(match) if match is not None else ""


def extract_title_and_description(markdown: str) -> Tuple[str, str]:
    """Infer a title and a description from the structure of *markdown*.

    The title is the text of the first level-1 heading and the description
    the text of the first paragraph, wherever each appears in the document.
    Either is ``""`` when the document has no such block.

    Raises:
        ConversionError: if the markdown parser fails internally.
    """
    if not markdown:
        return "", ""
    tree = parse_tree(markdown)
    return _first_text(tree, _is_title), _first_text(tree, _is_description)


def extract_title(markdown: str) -> str:
    return extract_title_and_description(markdown)[0]


def extract_description(markdown: str) -> str:
    return extract_title_and_description(markdown)[1]
