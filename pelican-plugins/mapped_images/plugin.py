"""Pelican plugin replacing ``[[name: ...]]`` image markers with ``<img>`` tags.

Usage in Markdown::

    [[mimage: src=photos/cat.png; alt=A cat asleep on a keyboard]]

Renders (for a single image of 1200x800 under ``/images/``)::

    <img width="1200" height="800" src="/images/photos/cat.png" alt="A cat asleep on a keyboard" />

The shortcode names, their zones and image indices come from
``MAPPED_IMAGES_SHORTCODES`` (see :mod:`mapped_images.settings`). Any error
while rendering a marker stops the build.
"""
from __future__ import annotations

import logging

from pelican import signals
from pelican.contents import Article, Page

from .errors import MappedImagesError
from .settings import build_registry
from .shortcodes import ShortcodeRegistry

logger = logging.getLogger(__name__)


class MappedImagesPlugin:
    def __init__(self, registry: ShortcodeRegistry | None = None):
        self.registry = registry if registry is not None else ShortcodeRegistry()

    def configure(self, pelican_obj):
        self.registry = build_registry(pelican_obj.settings)
        if len(self.registry):
            logger.info('mapped_images: shortcodes %s ready', ', '.join(self.registry.names()))

    def render_text(self, text: str, instance=None) -> str:
        try:
            return self.registry.render_text(text)
        except MappedImagesError as e:
            source = getattr(instance, 'source_path', None) or '<unknown source>'
            logger.error('mapped_images: %s (in %s)', e, source)
            raise

    def replace_in_content(self, instance):
        if not isinstance(instance, (Article, Page)) or not len(self.registry):
            return
        content = getattr(instance, '_content', None)
        if not content:
            return
        instance._content = self.render_text(content, instance)  # noqa: SLF001

    def replace_late(self, generators):
        if not len(self.registry):
            return
        for generator in generators:
            for attr in ('articles', 'pages'):
                for instance in getattr(generator, attr, []):
                    if not isinstance(instance, (Article, Page)):
                        continue
                    content = getattr(instance, '_content', None)
                    if content:
                        instance._content = self.render_text(content, instance)  # noqa: SLF001
                    summary = getattr(instance, '_summary', None)
                    if summary:
                        instance._summary = self.render_text(summary, instance)  # noqa: SLF001

    def connect(self):
        # Bound methods would be dropped by weak references once register() returns.
        signals.initialized.connect(self.configure, weak=False)
        signals.content_object_init.connect(self.replace_in_content, weak=False)
        signals.all_generators_finalized.connect(self.replace_late, weak=False)


def register():  # Pelican entry point
    plugin = MappedImagesPlugin()
    plugin.connect()
    return plugin
