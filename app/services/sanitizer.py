import bleach
from bs4 import BeautifulSoup, Comment

# Tags whose entire subtree should be removed (scripting / embedded / active content)
_REMOVE_TAGS = {
    "script",
    "style",
    "noscript",
    "iframe",
    "object",
    "embed",
    "applet",
    "link",
    "meta",
    "svg",
    "canvas",
    # Template elements may contain raw JS template markup
    "template",
    "form",
}

# Formatting and structural elements a rendered itinerary may contain
ALLOWED_TAGS = frozenset(
    {
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "p",
        "br",
        "hr",
        "em",
        "strong",
        "b",
        "i",
        "s",
        "del",
        "ul",
        "ol",
        "li",
        "a",
        "img",
        "code",
        "pre",
        "blockquote",
        "table",
        "thead",
        "tbody",
        "tr",
        "th",
        "td",
    }
)

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title"],
    "img": ["src", "alt", "title"],
    # fenced code blocks carry their language as ``language-xxx``
    "code": ["class"],
    "ol": ["start"],
}

# Relative URLs carry no scheme and are always kept
ALLOWED_PROTOCOLS = frozenset({"http", "https"})


def _prune(html: str) -> str:
    """Drop active-content subtrees and comments from *html*."""
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(_REMOVE_TAGS):
        tag.decompose()

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    return soup.decode(formatter="minimal")


def sanitize_html(html: str) -> str:
    """Return *html* reduced to the user-generated-content allow-list.

    Script-capable elements are removed together with their content, any
    other tag outside :data:`ALLOWED_TAGS` is unwrapped (its text survives,
    escaped), event-handler and style attributes are dropped, and ``href`` /
    ``src`` values using a scheme other than http(s) are removed.

    Sanitizing the output again yields the same string.
    """
    if not html:
        return ""
    pruned = _prune(html)
    return bleach.clean(
        pruned,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )
