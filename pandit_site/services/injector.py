import json
from typing import Dict, Optional

from bs4 import BeautifulSoup, Tag
from bs4.element import Script

from pandit_site.models.metadata import EffectiveMetadata

JSON_LD_TYPE = "application/ld+json"

_DOCUMENT_SHELL = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title></title>
</head>
<body>
<main id="root"></main>
</body>
</html>
"""


def new_document() -> BeautifulSoup:
    """Return an empty page shell with a ``<head>`` ready for injection."""
    return BeautifulSoup(_DOCUMENT_SHELL, "lxml")


def _head(document: BeautifulSoup) -> Tag:
    head = document.head
    if head is None:
        head = document.new_tag("head")
        html = document.html or document
        html.insert(0, head)
    return head


def _set_meta(document: BeautifulSoup, attribute: str, key: str, content: str) -> None:
    """Find or create ``<meta {attribute}="{key}">`` and set its content."""
    head = _head(document)
    tag = head.find("meta", attrs={attribute: key})
    if tag is None:
        tag = document.new_tag("meta")
        tag[attribute] = key
        head.append(tag)
    tag["content"] = content


def _set_title(document: BeautifulSoup, title: str) -> None:
    head = _head(document)
    tags = head.find_all("title")
    for extra in tags[1:]:
        extra.decompose()
    tag = tags[0] if tags else None
    if tag is None:
        tag = document.new_tag("title")
        head.append(tag)
    tag.string = title


def _set_canonical(document: BeautifulSoup, href: str) -> None:
    head = _head(document)
    tag = head.find("link", rel="canonical")
    if tag is None:
        tag = document.new_tag("link", rel="canonical")
        head.append(tag)
    tag["href"] = href


def _replace_structured_data(document: BeautifulSoup, data: Dict) -> None:
    for script in document.find_all("script", attrs={"type": JSON_LD_TYPE}):
        script.decompose()
    script = document.new_tag("script", attrs={"type": JSON_LD_TYPE})
    # "</" would terminate the script element early
    script.string = Script(json.dumps(data, ensure_ascii=False).replace("</", "<\\/"))
    _head(document).append(script)


def apply_metadata(document: BeautifulSoup, metadata: EffectiveMetadata) -> None:
    """Write *metadata* into the document head, replacing previous values.

    Open Graph tags are only written for non-empty fields; an empty field
    leaves any existing tag as it was. Repeated calls with the same value
    leave the head unchanged.
    """
    _set_title(document, metadata.title)

    for name, content in (
        ("description", metadata.description),
        ("keywords", metadata.keywords),
        ("robots", metadata.robots),
        ("author", metadata.author),
    ):
        _set_meta(document, "name", name, content)

    for prop, content in (
        ("og:title", metadata.og_title),
        ("og:description", metadata.og_description),
        ("og:image", metadata.og_image),
    ):
        if content:
            _set_meta(document, "property", prop, content)

    _set_canonical(document, metadata.canonical_url)
    _replace_structured_data(document, metadata.structured_data)


def read_metadata(document: BeautifulSoup) -> Dict[str, Optional[str]]:
    """Return the injected head values keyed by tag name/property."""
    values: Dict[str, Optional[str]] = {
        "title": document.title.string if document.title else None,
    }
    for tag in document.find_all("meta"):
        key = tag.get("name") or tag.get("property")
        if key:
            values[key] = tag.get("content")
    canonical = document.find("link", rel="canonical")
    values["canonical"] = canonical.get("href") if canonical else None
    script = document.find("script", attrs={"type": JSON_LD_TYPE})
    values["structured_data"] = script.string if script else None
    return values
