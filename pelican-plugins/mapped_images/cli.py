"""Command line helpers for image indices.

Usage:
    mapped-images render --index content/images/imdex.json --src photos/cat.png --alt "A cat"
    mapped-images render --index imdex.json --base-url /images/ --src photos/dog --alt "" --sizes 600px
    mapped-images check --index content/images/imdex.json

Exit codes:
    0 = success
    1 = the tag could not be rendered, or the index has invalid entries
    2 = the index file cannot be read
"""
from __future__ import annotations

import argparse
from pathlib import Path

from .errors import ConfigurationError, MappedImagesError
from .metadata import GroupedImage, parse_metadata, read_index_file
from .tag import AUTO_SIZES, generate_image_tag


def cmd_render(args) -> int:
    try:
        index = read_index_file(args.index)
    except ConfigurationError as e:
        print(f'[ERROR] {e}')
        return 2

    try:
        tag = generate_image_tag(
            index,
            args.base_url,
            args.src,
            class_attr=args.css_class,
            alt=args.alt,
            lazy=args.lazy,
            sizes=args.sizes,
            default_image=args.default_image,
        )
    except MappedImagesError as e:
        print(f'[ERROR] {e}')
        return 1
    print(tag)
    return 0


def cmd_check(args) -> int:
    try:
        raw = read_index_file(args.index)
    except ConfigurationError as e:
        print(f'[ERROR] {e}')
        return 2

    single = grouped = 0
    invalid = []
    for key, entry in raw.items():
        try:
            data = parse_metadata(key, entry)
        except MappedImagesError as e:
            invalid.append(str(e))
            continue
        if isinstance(data, GroupedImage):
            grouped += 1
        else:
            single += 1

    print(f'[INFO] Entries in {args.index}: {len(raw)}')
    print(f'[INFO] Single images:  {single}')
    print(f'[INFO] Grouped images: {grouped}')
    if invalid:
        print(f'[WARN] Invalid entries: {len(invalid)}')
        for message in invalid[:20]:
            print(f'  - {message}')
        return 1

    print('[OK] All entries are valid.')
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='mapped-images', description='Render and check mapped image indices')
    commands = parser.add_subparsers(dest='command', required=True)

    render = commands.add_parser('render', help='Print the <img> tag for one index entry')
    render.add_argument('--index', type=Path, required=True, help='Image index JSON file')
    render.add_argument('--src', required=True, help='Key of the image in the index')
    render.add_argument('--alt', required=True, help='Alt text (may be empty for decorative images)')
    render.add_argument('--base-url', default='', help='Prefix for image URLs')
    render.add_argument('--class', dest='css_class', default=None, help='CSS class for the tag')
    render.add_argument('--lazy', action='store_true', help='Add loading="lazy"')
    render.add_argument('--sizes', default=AUTO_SIZES, help='sizes attribute for grouped images')
    render.add_argument('--default-image', default=None, help='Variant used as src of a grouped image')
    render.set_defaults(func=cmd_render)

    check = commands.add_parser('check', help='Validate every entry of an index')
    check.add_argument('--index', type=Path, required=True, help='Image index JSON file')
    check.set_defaults(func=cmd_check)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == '__main__':
    raise SystemExit(main())
