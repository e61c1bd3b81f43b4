"""
HTML sanitization for post bodies.

Post bodies arrive as rich-text HTML from the editor. Before anything is
written to the database the markup is reduced to a small allow-list, and
list responses only ever carry a plain-text preview.
"""

from bs4 import BeautifulSoup
from nh3 import clean

ALLOWED_TAGS: frozenset[str] = frozenset(
    {
        "h1",
        "h2",
        "b",
        "i",
        "u",
        "s",
        "p",
        "ul",
        "li",
        "blockquote",
        "a",
        "img",
    },
)

ALLOWED_ATTRIBUTES: dict[str, set[str]] = {
    "a": {"href", "name", "target"},
    "img": {"src"},
    "li": {"class"},
}

ALLOWED_SCHEMES: frozenset[str] = frozenset({"data", "http"})

# Dropped together with everything inside them
CONTENT_TAGS: frozenset[str] = frozenset({"script", "style", "textarea", "option", "noscript"})

PREVIEW_LENGTH = 200
ELLIPSIS = "..."


def sanitize_html(html: str) -> str:
    """
    Restrict `html` to the allowed tags, attributes and URL schemes.

    Disallowed tags are unwrapped (their text survives) except for
    `CONTENT_TAGS`, which are removed with their content. No attribute is
    allowed on every tag.

    Args:
        html: Raw HTML from the request body.

    Returns:
        str: Sanitized HTML safe to persist and render.

    Examples:
    --------
    >>> sanitize_html("<b>hi</b><script>alert(1)</script>")
    '<b>hi</b>'
    """
    return clean(
        html,
        tags=set(ALLOWED_TAGS),
        clean_content_tags=set(CONTENT_TAGS),
        attributes={tag: set(attrs) for tag, attrs in ALLOWED_ATTRIBUTES.items()},
        generic_attributes=set(),
        url_schemes=set(ALLOWED_SCHEMES),
        strip_comments=True,
        link_rel=None,
    )


def html_to_text(html: str) -> str:
    """Return the text content of `html` with every tag removed."""
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")
    for node in soup.find_all(sorted(CONTENT_TAGS)):
        node.decompose()
    return soup.get_text()


def remove_html_and_shorten(html: str, limit: int = PREVIEW_LENGTH) -> str:
    """
    Build the list preview of a post body.

    Args:
        html: Stored (already sanitized) post body.
        limit: Maximum number of characters kept.

    Returns:
        str: Plain text, cut to `limit` characters plus ``...`` when longer.
    """
    text = html_to_text(html)
    return text if len(text) < limit else f"{text[:limit]}{ELLIPSIS}"
