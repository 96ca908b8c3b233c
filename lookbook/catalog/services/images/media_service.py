"""
Grouping of parsed images into per (model ref, colour) galleries.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from .color_service import normalize_color_token
from .filename_service import ParsedImage

GroupKey = Tuple[str, str]


@dataclass(frozen=True)
class ImageGroup:
    """
    Ordered images for one model ref / colour token.

    Attributes:
        model_ref: Upper-cased model reference.
        color_token: Normalised colour token.
        urls: Image URLs, primary-marker images first.
    """

    model_ref: str
    color_token: str
    urls: Tuple[str, ...]

    @property
    def key(self) -> GroupKey:
        return (self.model_ref, self.color_token)

    @property
    def image_url(self) -> str:
        return self.urls[0]

    @property
    def gallery(self) -> List[str]:
        return list(self.urls)


def image_group_key(model_ref: str, color: str) -> GroupKey:
    """Key used on both sides of the join."""
    return ((model_ref or "").strip().upper(), normalize_color_token(color))


def _ordered_urls(entries: List[ParsedImage]) -> Tuple[str, ...]:
    """
    Primary-marker entries first, listing order otherwise; repeated URLs dropped.
    """
    ordered = sorted(entries, key=lambda entry: not entry.is_primary)
    seen = set()
    urls: List[str] = []
    for entry in ordered:
        url = entry.url or entry.filename
        if url in seen:
            continue
        seen.add(url)
        urls.append(url)
    return tuple(urls)


def group_images(entries: Iterable[ParsedImage]) -> Dict[GroupKey, ImageGroup]:
    """
    Group parsed images by ``(model_ref, colour token)``.

    The returned dict iterates in sorted key order. Calling it twice on the
    same entries yields equal results.
    """
    buckets: Dict[GroupKey, List[ParsedImage]] = {}
    for entry in entries:
        buckets.setdefault(image_group_key(entry.model_ref, entry.color), []).append(entry)

    return {
        key: ImageGroup(model_ref=key[0], color_token=key[1], urls=_ordered_urls(buckets[key]))
        for key in sorted(buckets)
    }
