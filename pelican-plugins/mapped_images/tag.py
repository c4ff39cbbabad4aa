"""Build ``<img>`` tags from image index entries.

Single images render as::

    <img width="100" height="50" src="/images/cat.png" class="hero" alt="A cat" />

Grouped images render with a ``srcset`` listing every variant::

    <img loading="lazy" sizes="auto" width="800" height="400"
         srcset="/images/a_w200.png 200w, /images/a_w800.png 800w"
         src="/images/a_w800.png" alt="A" />

Non-lazy images carry no ``loading`` attribute at all. ``sizes="auto"`` only
works together with lazy loading, so grouped images using it are always lazy.
"""
from __future__ import annotations

from collections.abc import Mapping
from html import escape
from typing import List, Optional, Tuple

from .errors import MissingAltError, MissingIndexError, MissingMetadataError, MissingSrcError
from .metadata import GroupedImage, SingleImage, parse_metadata
from .paths import join_posix_path

AUTO_SIZES = 'auto'


def _render(attrs: List[Tuple[str, object]]) -> str:
    parts = [f'{name}="{escape(str(value))}"' for name, value in attrs]
    return f"<img {' '.join(parts)} />"


def generate_image_tag(
    image_index: Optional[Mapping],
    base_url: str,
    src: Optional[str],
    class_attr: Optional[str] = None,
    alt: Optional[str] = None,
    lazy: bool = False,
    sizes: Optional[str] = AUTO_SIZES,
    default_image: Optional[str] = None,
) -> str:
    if image_index is None:
        raise MissingIndexError()
    # An empty alt marks a decorative image and is fine; a missing one is not.
    if alt is None:
        raise MissingAltError(src)
    if not src:
        raise MissingSrcError(src)
    # A key holding null counts as missing, like an absent key.
    if image_index.get(src) is None:
        raise MissingMetadataError(src)

    data = parse_metadata(src, image_index[src])
    if sizes is None:
        sizes = AUTO_SIZES
    attrs: List[Tuple[str, object]] = []

    if isinstance(data, SingleImage):
        if lazy:
            attrs.append(('loading', 'lazy'))
        attrs += [
            ('width', data.width),
            ('height', data.height),
            ('src', join_posix_path(base_url, src)),
        ]
    elif isinstance(data, GroupedImage):
        srcset = ', '.join(
            f'{join_posix_path(base_url, path)} {dims.width}w' for path, dims in data.files.items()
        )
        largest_path, largest = data.largest()
        # The dimensions always follow the largest variant, even when another
        # file is picked as the fallback src.
        full_src = join_posix_path(base_url, default_image or largest_path)
        if lazy or sizes == AUTO_SIZES:
            attrs.append(('loading', 'lazy'))
        attrs += [
            ('sizes', sizes),
            ('width', largest.width),
            ('height', largest.height),
            ('srcset', srcset),
            ('src', full_src),
        ]
    else:
        raise TypeError(f'Unsupported image metadata: {data!r}')

    if class_attr:
        attrs.append(('class', class_attr))
    attrs.append(('alt', alt))
    return _render(attrs)
