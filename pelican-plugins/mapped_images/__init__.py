"""Pelican plugin rendering ``<img>`` tags from a precomputed image index."""
from .errors import (
    ConfigurationError,
    InvalidMetadataError,
    MappedImagesError,
    MissingAltError,
    MissingIndexError,
    MissingMetadataError,
    MissingSrcError,
    ShortcodeSyntaxError,
    ZoneNotFoundError,
)
from .metadata import Dimensions, GroupedImage, SingleImage, load_index, parse_metadata
from .paths import join_posix_path
from .plugin import MappedImagesPlugin, register
from .shortcodes import ImageShortcode, ShortcodeRegistry, add_image_shortcode
from .tag import generate_image_tag
from .zones import ResolvedImage, Zone, resolve_zone
