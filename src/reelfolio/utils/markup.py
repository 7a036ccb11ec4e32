"""HTML sanitising and escaping for rich-text fields and outgoing email."""

import html
import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Comment

ALLOWED_TAGS = frozenset(
    {
        "a", "b", "blockquote", "br", "code", "div", "em", "h1", "h2", "h3",
        "h4", "hr", "i", "li", "ol", "p", "pre", "s", "span", "strong", "sub",
        "sup", "u", "ul",
    }
)

ALLOWED_ATTRIBUTES: dict[str, frozenset[str]] = {
    "a": frozenset({"href", "title", "target", "rel"}),
}

# Removed together with everything inside them
DROPPED_TAGS = [
    "script", "style", "iframe", "object", "embed", "noscript", "template",
    "svg", "math", "form", "input", "button", "textarea", "select", "link",
    "meta", "base",
]

SAFE_URL_SCHEMES = frozenset({"", "http", "https", "mailto"})

_CONTROL_CHARS = re.compile(r"[\x00-\x20\x7f]+")


def is_safe_url(url: str) -> bool:
    """Return True if ``url`` is relative or uses an http(s)/mailto scheme."""
    # Browsers ignore embedded whitespace/control chars, e.g. "java\tscript:"
    cleaned = _CONTROL_CHARS.sub("", url).lower()
    return urlparse(cleaned).scheme in SAFE_URL_SCHEMES


def sanitize_html(markup: str | None) -> str:
    """
    Reduce rich-text markup to a small allow-list of formatting tags.

    - Script-bearing elements (``script``, ``iframe``, ``style``...) are
      removed along with their content
    - Other unknown tags are unwrapped, keeping their text
    - Attributes outside the allow-list (including every ``on*`` handler)
      are dropped, as are ``javascript:``/``data:`` links
    - Comments are removed

    Args:
        markup: HTML produced by the admin rich-text editor

    Returns:
        Sanitised HTML, or an empty string for blank input
    """
    if not markup or not markup.strip():
        return ""

    soup = BeautifulSoup(markup, "html.parser")

    for tag in soup.find_all(DROPPED_TAGS):
        tag.decompose()

    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue

        allowed = ALLOWED_ATTRIBUTES.get(tag.name, frozenset())
        for attr in list(tag.attrs):
            if attr not in allowed:
                del tag.attrs[attr]

        href = tag.get("href")
        if href is not None and not is_safe_url(href):
            del tag.attrs["href"]

        if tag.get("target") == "_blank":
            tag["rel"] = "noopener noreferrer"

    return str(soup).strip()


def escape_html(text: str) -> str:
    """Escape ``& < > " '`` for interpolation into HTML markup."""
    return html.escape(text, quote=True)
