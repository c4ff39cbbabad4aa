"""Image metadata entries as stored in an image index ("imdex").

An index is a JSON object mapping a logical image key to one of two shapes::

    {
      "photos/cat.png": {"width": 1200, "height": 800},
      "photos/dog": {
        "files": {
          "photos/dog_w400.webp": {"width": 400, "height": 300},
          "photos/dog_w1600.webp": {"width": 1600, "height": 1200}
        }
      }
    }

The first is a single image whose key is also its file path, the second a
group of pre-generated variants of one logical image. Entries are parsed into
:class:`SingleImage` or :class:`GroupedImage`; anything else is rejected.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Dict, Union

from .errors import ConfigurationError, InvalidMetadataError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int


@dataclass(frozen=True)
class SingleImage:
    width: int
    height: int


@dataclass(frozen=True)
class GroupedImage:
    # File path -> dimensions, kept in index order.
    files: Dict[str, Dimensions]

    def largest(self) -> tuple[str, Dimensions]:
        """Return the widest variant; the first one wins on equal widths."""
        best_path = None
        best = None
        for path, dims in self.files.items():
            if best is None or dims.width > best.width:
                best_path, best = path, dims
        if best is None:
            raise ValueError('grouped image has no files')
        return best_path, best


ImageMetadata = Union[SingleImage, GroupedImage]


def _dimension(key: str, raw: Mapping, name: str) -> int:
    value = raw.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidMetadataError(key, f'`{name}` must be an integer, got {value!r}')
    return value


def parse_metadata(key: str, raw) -> ImageMetadata:
    """Convert a raw index entry into :data:`ImageMetadata`."""
    if isinstance(raw, (SingleImage, GroupedImage)):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidMetadataError(key, f'expected an object, got {type(raw).__name__}')

    if 'files' not in raw:
        return SingleImage(_dimension(key, raw, 'width'), _dimension(key, raw, 'height'))

    files = raw['files']
    if not isinstance(files, Mapping):
        raise InvalidMetadataError(key, '`files` must be an object')
    if not files:
        raise InvalidMetadataError(key, '`files` is empty')
    variants: Dict[str, Dimensions] = {}
    for path, dims in files.items():
        if not isinstance(dims, Mapping):
            raise InvalidMetadataError(f'{key} -> {path}', 'expected an object')
        label = f'{key} -> {path}'
        variants[path] = Dimensions(_dimension(label, dims, 'width'), _dimension(label, dims, 'height'))
    return GroupedImage(variants)


def parse_index(raw: Mapping) -> Dict[str, ImageMetadata]:
    return {key: parse_metadata(key, entry) for key, entry in raw.items()}


def read_index_file(path: Path) -> dict:
    """Read an index JSON file without validating its entries."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f'Cannot read image index {path}: {e}') from e
    except ValueError as e:
        raise ConfigurationError(f'Image index {path} is not valid JSON: {e}') from e
    if not isinstance(data, dict):
        raise ConfigurationError(f'Image index {path} must contain a JSON object')
    return data


def load_index(path: Path) -> Dict[str, ImageMetadata]:
    index = parse_index(read_index_file(path))
    logger.info('mapped_images: loaded %d image entries from %s', len(index), path)
    return index
