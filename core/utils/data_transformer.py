# core/utils/data_transformer.py
import re
from typing import Any, Dict, List, Optional

from core.models.book import BookInfo

# Tag strings from the provider use ASCII or full-width separators
TAG_SEPARATORS = re.compile(r'[,，;；、]')


def split_tags(raw: Any) -> List[str]:
    """Turn free-form provider tag data into a list of tag names.

    Accepts a separated string ("a,b"), a list of strings, or a list of
    objects with a ``name`` (or ``title``) key. Anything else, including
    None, yields an empty list. Order is kept and duplicates dropped.
    """
    if raw is None:
        return []

    if isinstance(raw, str):
        candidates = TAG_SEPARATORS.split(raw)
    elif isinstance(raw, (list, tuple)):
        candidates = []
        for item in raw:
            if isinstance(item, str):
                candidates.append(item)
            elif isinstance(item, dict):
                name = item.get('name') or item.get('title')
                if isinstance(name, str):
                    candidates.append(name)
    else:
        return []

    tags: List[str] = []
    for candidate in candidates:
        tag = candidate.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def join_names(value: Any) -> Optional[str]:
    """Join a provider name list (authors, translators) into one string"""
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (list, tuple)):
        names = [str(v).strip() for v in value if v is not None and str(v).strip()]
        return ", ".join(names) or None
    return str(value)


def parse_pages(value: Any) -> Optional[int]:
    """Read a page count such as 320, "320" or "320 pages" """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    match = re.search(r'\d+', str(value))
    if not match:
        return None
    pages = int(match.group())
    return pages if pages > 0 else None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _image_url(payload: Dict[str, Any]) -> Optional[str]:
    images = payload.get('images')
    if isinstance(images, dict):
        for size in ('large', 'medium', 'small'):
            if images.get(size):
                return images[size]
    return _text(payload.get('image') or payload.get('image_url'))


def map_provider_payload(isbn: str, payload: Dict[str, Any]) -> BookInfo:
    """Map a metadata provider payload onto the canonical book shape.

    The requested ISBN is used as the key even if the provider reports the
    book under another form of it, so later lookups hit the cache.

    Raises:
        ValueError: If the payload is not an object or has no title
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Provider payload for {isbn} is not an object")

    title = _text(payload.get('title'))
    if not title:
        raise ValueError(f"Provider payload for {isbn} has no title")

    return BookInfo(
        isbn=isbn,
        title=title,
        author=join_names(payload.get('author') or payload.get('authors')),
        translator=join_names(payload.get('translator')),
        publisher=_text(payload.get('publisher')),
        pub_date=_text(payload.get('pubdate') or payload.get('pub_date')),
        pages=parse_pages(payload.get('pages')),
        price=_text(payload.get('price')),
        image_url=_image_url(payload),
        summary=_text(payload.get('summary')),
        tags=split_tags(payload.get('tags')),
    )


def tags_for_relation(book: Optional[BookInfo]) -> List[str]:
    """Tags to copy onto a collection entry for the book"""
    if book is None or not book.tags:
        return []
    return list(book.tags)
