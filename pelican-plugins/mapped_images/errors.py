"""Exceptions raised while rendering mapped image shortcodes.

Every error aborts the tag being rendered and is meant to reach the Pelican
build so that a broken image reference fails loudly instead of producing a
placeholder.
"""
from __future__ import annotations


class MappedImagesError(Exception):
    """Base class for all mapped_images errors."""


class ConfigurationError(MappedImagesError):
    """The plugin settings are malformed or an index file cannot be read."""


class ZoneNotFoundError(MappedImagesError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No image zone matches path: {path}")


class MissingIndexError(MappedImagesError):
    def __init__(self):
        super().__init__("mapped_images requires an image index.")


class MissingAltError(MappedImagesError):
    def __init__(self, src):
        self.src = src
        super().__init__(f"Missing `alt` attribute for image: {src}")


class MissingSrcError(MappedImagesError):
    def __init__(self, src):
        self.src = src
        super().__init__(f"Missing `src` attribute for image: {src!r}")


class MissingMetadataError(MappedImagesError):
    def __init__(self, src: str):
        self.src = src
        super().__init__(f"Missing image data for image: {src}")


class InvalidMetadataError(MappedImagesError):
    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(f"Invalid image data for {key}: {reason}")


class ShortcodeSyntaxError(MappedImagesError):
    """A shortcode marker argument could not be parsed."""
