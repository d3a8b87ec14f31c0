"""Cleaning of rich-text HTML saved by the admin editor before it is rendered."""

import re

from bs4 import BeautifulSoup, Comment, Tag

# Tags whose entire subtree should be removed (scripting / embedded content)
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
    "base",
    "form",
    "template",
}

# Attributes that carry CSS or JavaScript
_JUNK_ATTRS = re.compile(r"^(style|on\w+)$", re.IGNORECASE)

_URL_ATTRS = ("href", "src")

_UNSAFE_URL_RE = re.compile(r"^\s*(javascript|vbscript|data):", re.IGNORECASE)


def sanitize(html: str) -> str:
    """Return *html* with scripts, embeds, event handlers and script URLs removed.

    Editor formatting (headings, lists, emphasis, links, images) survives.
    """
    if not html or not html.strip():
        return ""

    soup = BeautifulSoup(html, "lxml")

    for tag in soup.find_all(_REMOVE_TAGS):
        tag.decompose()

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    for tag in soup.find_all(True):
        if not isinstance(tag, Tag):
            continue
        junk = [attr for attr in tag.attrs if _JUNK_ATTRS.match(attr)]
        for attr in junk:
            del tag[attr]
        for attr in _URL_ATTRS:
            value = tag.get(attr)
            if isinstance(value, str) and _UNSAFE_URL_RE.match(value):
                del tag[attr]

    body = soup.body
    if body is None:
        return ""
    return "".join(str(child) for child in body.contents).strip()
