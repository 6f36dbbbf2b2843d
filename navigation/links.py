# backend/navigation/links.py
from django.utils.text import slugify

from .tree import LinkTarget

LINK_KIND_EXTERNAL = "external"
LINK_KIND_PRODUCT = "product"
LINK_KIND_COLLECTION = "collection"
LINK_KIND_BLOG = "blog"
LINK_KIND_PAGE = "page"
LINK_KIND_CUSTOM = "custom"

TITLE_REPLACEMENTS = {
    "faq": "FAQ",
    "products": "Shop",
    "collections": "Collections",
    "about": "About Us",
    "contact": "Contact Us",
}


def title_from_link(link: str) -> str:
    """Suggest a label from the last path segment, e.g. '/pages/faq' -> 'FAQ'."""
    path = (link or "").strip().strip("/")
    if not path:
        return "Home"
    last = path.split("/")[-1]
    if last in TITLE_REPLACEMENTS:
        return TITLE_REPLACEMENTS[last]
    return " ".join(word[:1].upper() + word[1:] for word in last.split("-"))


def detect_link_kind(link: str) -> str:
    link = link or ""
    if link.startswith(("http://", "https://")):
        return LINK_KIND_EXTERNAL
    if "/products/" in link:
        return LINK_KIND_PRODUCT
    if "/collections/" in link:
        return LINK_KIND_COLLECTION
    if "/blogs/" in link or "/blog/" in link:
        return LINK_KIND_BLOG
    if "/pages/" in link:
        return LINK_KIND_PAGE
    return LINK_KIND_CUSTOM


def default_link_target(link: str) -> str:
    if detect_link_kind(link) == LINK_KIND_EXTERNAL:
        return LinkTarget.NEW_WINDOW.value
    return LinkTarget.SAME_WINDOW.value


def menu_handle(name: str) -> str:
    return slugify(name or "") or "menu"
