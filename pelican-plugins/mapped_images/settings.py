"""Build image shortcodes from Pelican settings.

Configuration (in pelicanconf.py)::

    MAPPED_IMAGES_SHORTCODES = [
        # one zone: every src is a key of the index
        {'name': 'mimage', 'index': 'images/imdex.json', 'root_path': '/images/'},
        # several zones, picked by the prefix of src
        {'name': 'zimage', 'zones': [
            {'prefix': 'apps/', 'base_url': 'https://cdn.example.com/apps/', 'index': 'apps.json'},
            {'prefix': 'site/', 'base_url': '/img/', 'index': 'site.json'},
        ]},
    ]

``index`` is either a mapping or a path to the JSON index file. Relative
paths are resolved against the Pelican ``PATH`` setting. Each file is loaded
once even when several zones share it.
"""
from __future__ import annotations

from collections.abc import Mapping
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from .errors import ConfigurationError
from .metadata import ImageMetadata, load_index, parse_index
from .shortcodes import SHORTCODE_NAME, ShortcodeRegistry, add_image_shortcode
from .zones import Zone

logger = logging.getLogger(__name__)

SETTINGS_KEY = 'MAPPED_IMAGES_SHORTCODES'

IndexCache = Dict[Path, Dict[str, ImageMetadata]]


def _load_index(value, base_path: Path, cache: IndexCache) -> Optional[Dict[str, ImageMetadata]]:
    if value is None:
        return None
    if isinstance(value, Mapping):
        return parse_index(value)
    if isinstance(value, (str, os.PathLike)):
        path = Path(value)
        if not path.is_absolute():
            path = base_path / path
        path = path.resolve()
        if path not in cache:
            cache[path] = load_index(path)
        return cache[path]
    raise ConfigurationError(f'Image index must be a mapping or a file path, got {type(value).__name__}')


def _text_option(entry: Mapping, key: str, name: str) -> str:
    value = entry.get(key, '')
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ConfigurationError(f'Shortcode {name!r}: `{key}` must be a string')
    return value


def build_zones(entry: Mapping, base_path: Path, cache: IndexCache) -> List[Zone]:
    name = entry.get('name')
    if 'zones' not in entry:
        # Single index without prefixes.
        return [Zone('', _text_option(entry, 'root_path', name), _load_index(entry.get('index'), base_path, cache))]

    mixed = sorted(key for key in ('index', 'root_path') if key in entry)
    if mixed:
        raise ConfigurationError(
            f"Shortcode {name!r}: {', '.join(mixed)} cannot be combined with `zones`; set them per zone"
        )
    raw_zones = entry['zones']
    if isinstance(raw_zones, (str, bytes)) or not isinstance(raw_zones, (list, tuple)) or not raw_zones:
        raise ConfigurationError(f'Shortcode {name!r}: `zones` must be a non-empty list')
    zones = []
    for raw in raw_zones:
        if not isinstance(raw, Mapping):
            raise ConfigurationError(f'Shortcode {name!r}: each zone must be a mapping')
        zones.append(
            Zone(
                _text_option(raw, 'prefix', name),
                _text_option(raw, 'base_url', name),
                _load_index(raw.get('index'), base_path, cache),
            )
        )
    return zones


def build_registry(settings: Mapping) -> ShortcodeRegistry:
    """Create a registry holding every shortcode configured in *settings*."""
    registry = ShortcodeRegistry()
    entries = settings.get(SETTINGS_KEY, [])
    if not entries:
        logger.debug('mapped_images: no %s configured', SETTINGS_KEY)
        return registry
    if not isinstance(entries, (list, tuple)):
        raise ConfigurationError(f'{SETTINGS_KEY} must be a list of shortcode definitions')

    base_path = Path(settings.get('PATH', 'content'))
    cache: IndexCache = {}
    for entry in entries:
        if not isinstance(entry, Mapping) or not entry.get('name'):
            raise ConfigurationError(f'Each {SETTINGS_KEY} entry needs a `name`: {entry!r}')
        if not SHORTCODE_NAME.match(str(entry['name'])):
            raise ConfigurationError(f'Invalid shortcode name: {entry["name"]!r}')
        zones = build_zones(entry, base_path, cache)
        add_image_shortcode(registry, entry['name'], zones)
        logger.debug('mapped_images: shortcode %r uses %d zone(s)', entry['name'], len(zones))
    return registry
