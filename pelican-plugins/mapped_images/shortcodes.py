"""Named shortcodes and the ``[[name: key=value; ...]]`` markers that call them.

Usage in Markdown::

    [[mimage: src=photos/cat.png; alt=A cat asleep on a keyboard; class=hero]]
    [[mimage: src=photos/dog; alt=; lazy; sizes=(max-width: 600px) 100vw, 600px]]

Entries are ``key=value`` pairs separated by semicolons. A bare key such as
``lazy`` is a flag set to true. ``alt=`` with nothing after it is an empty
alt text (decorative image), while leaving ``alt`` out is an error.
Unknown argument names are rejected rather than ignored.
"""
from __future__ import annotations

from collections.abc import Mapping
from html import unescape
import logging
import re
from typing import Callable, Dict, List, Sequence, Union

from .errors import ShortcodeSyntaxError
from .tag import generate_image_tag
from .zones import ResolvedImage, Zone, resolve_zone

logger = logging.getLogger(__name__)

SHORTCODE_NAME = re.compile(r'^[A-Za-z0-9_-]+$')
SHORTCODE_PATTERN = re.compile(
    r'\[\[(?P<name>[A-Za-z0-9_-]+):(?P<args>.*?)]]',
    re.DOTALL,
)

IMAGE_ARGUMENTS = {'src', 'alt', 'class', 'lazy', 'sizes', 'defaultImage'}

TRUE_VALUES = {'true', 'yes', '1', 'on'}
FALSE_VALUES = {'false', 'no', '0', 'off'}

Renderer = Callable[[Mapping], str]


def parse_arguments(text: str) -> Dict[str, Union[str, bool]]:
    args: Dict[str, Union[str, bool]] = {}
    # Entities end in `;`, so decode them before splitting entries.
    for raw in unescape(text).split(';'):
        entry = raw.strip()
        if not entry:
            continue
        if '=' in entry:
            key, value = entry.split('=', 1)
            key = key.strip()
            if not key:
                raise ShortcodeSyntaxError(f'Missing argument name in {entry!r}')
            args[key] = value.strip()
        else:
            args[entry] = True
    return args


def parse_flag(name: str, value) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ShortcodeSyntaxError(f'Invalid value for `{name}`: {value!r}')


def _text(args: Mapping, name: str):
    value = args.get(name)
    if isinstance(value, bool):
        raise ShortcodeSyntaxError(f'`{name}` needs a value, e.g. {name}=...')
    return value


class ImageShortcode:
    """Render an ``<img>`` tag for the image named by ``src`` in *zones*."""

    def __init__(self, zones: Sequence[Zone]):
        self.zones = tuple(zones)

    def __call__(self, args: Mapping) -> str:
        unknown = sorted(set(args) - IMAGE_ARGUMENTS)
        if unknown:
            raise ShortcodeSyntaxError(
                f"Unknown image argument(s) {', '.join(unknown)} for {args.get('src')!r}"
            )
        src = _text(args, 'src')
        if src or not self.zones:
            resolved = resolve_zone(src or '', self.zones)
        else:
            # Nothing to resolve; the tag generator reports the missing src.
            first = self.zones[0]
            resolved = ResolvedImage(src, first.base_url, first.image_index)

        return generate_image_tag(
            resolved.image_index,
            resolved.base_url,
            resolved.key,
            class_attr=_text(args, 'class'),
            alt=_text(args, 'alt'),
            lazy=parse_flag('lazy', args.get('lazy')),
            sizes=_text(args, 'sizes'),
            default_image=_text(args, 'defaultImage'),
        )


class ShortcodeRegistry:
    def __init__(self):
        self._shortcodes: Dict[str, Renderer] = {}

    def add(self, name: str, renderer: Renderer) -> None:
        if not SHORTCODE_NAME.match(name or ''):
            raise ShortcodeSyntaxError(f'Invalid shortcode name: {name!r}')
        if name in self._shortcodes:
            logger.warning('mapped_images: shortcode %r registered twice, keeping the last one', name)
        self._shortcodes[name] = renderer
        logger.debug('mapped_images: registered shortcode %r', name)

    def __contains__(self, name: str) -> bool:
        return name in self._shortcodes

    def __len__(self) -> int:
        return len(self._shortcodes)

    def get(self, name: str) -> Renderer:
        return self._shortcodes[name]

    def names(self) -> List[str]:
        return list(self._shortcodes)

    def render(self, name: str, args: Mapping) -> str:
        return self._shortcodes[name](args)

    def render_text(self, text: str) -> str:
        """Replace every marker with a registered name in *text*."""

        def _repl(match: re.Match) -> str:
            name = match.group('name')
            if name not in self._shortcodes:
                return match.group(0)
            return self.render(name, parse_arguments(match.group('args')))

        return SHORTCODE_PATTERN.sub(_repl, text)


def add_image_shortcode(registry: ShortcodeRegistry, name: str, zones: Sequence[Zone]) -> ImageShortcode:
    shortcode = ImageShortcode(zones)
    registry.add(name, shortcode)
    return shortcode
