"""Zones map a URL prefix to a base URL and the image index serving it."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence

from .errors import ZoneNotFoundError


@dataclass(frozen=True)
class Zone:
    prefix: str
    base_url: str
    image_index: Optional[Mapping]


class ResolvedImage(NamedTuple):
    key: str
    base_url: str
    image_index: Optional[Mapping]


def resolve_zone(path: str, zones: Sequence[Zone]) -> ResolvedImage:
    """Find the zone serving *path* and return the key inside its index.

    A single configured zone serves every path as-is, whatever its prefix.
    With several zones the first one (in configured order) whose prefix
    starts *path* wins and the prefix is stripped from the key.
    """
    if len(zones) == 1:
        zone = zones[0]
        return ResolvedImage(path, zone.base_url, zone.image_index)

    for zone in zones:
        if path.startswith(zone.prefix):
            return ResolvedImage(path[len(zone.prefix):], zone.base_url, zone.image_index)

    raise ZoneNotFoundError(path)
