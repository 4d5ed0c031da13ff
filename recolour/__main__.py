"""recolour-tool — Fit images into a bounding box and recolour them to a fixed palette.

Usage: uv run recolour-tool <command> [options]

Commands:
  convert IMAGE OUT   resize IMAGE into the box, recolour, write OUT as PNG
  plan WIDTH HEIGHT   print the fitted size for a WIDTHxHEIGHT source
  resamplers          list resampler backends
  palettes            list built-in palettes

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, recolour-tool looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
  RECOLOUR_BOX, RECOLOUR_PALETTE, RECOLOUR_RESAMPLER and RECOLOUR_LOG_LEVEL
  set the defaults for the matching options.
"""

import argparse
import logging
import os
import sys

from recolour import registry
from recolour.core.env import Settings, load_env, settings_from_env
from recolour.core.errors import RecolourError
from recolour.core.fit import plan_fit
from recolour.core.palette import PALETTES, get_palette
from recolour.core.report import format_json, format_text
from recolour.core.types import BoundingBox, RecolourConfig
from recolour.pipeline import convert_file


def _build_parser() -> argparse.ArgumentParser:
    epilog = (
        'Examples:\n'
        '  recolour-tool convert photo.jpg out.png\n'
        '  recolour-tool convert photo.jpg out.png --box 285x160 --palette greyscale\n'
        '  recolour-tool convert sprite.png out.png --resampler nearest --json\n'
        '  recolour-tool plan 300 50 --box 285x160\n'
        '  recolour-tool resamplers\n'
    )
    parser = argparse.ArgumentParser(
        prog='recolour-tool',
        description='Fit images into a bounding box and recolour them to a fixed palette.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    # Global --env-file option before subcommand
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    p = sub.add_parser('convert', help='Resize and recolour an image, write a PNG')
    p.add_argument('image', help='Path to source image (PNG/JPG/BMP/...)')
    p.add_argument('out', help='Path of the PNG to write')
    p.add_argument('-b', '--box', help='Bounding box WIDTHxHEIGHT (default: RECOLOUR_BOX or 285x160)')
    p.add_argument('-p', '--palette', help=f'Palette name: {", ".join(sorted(PALETTES))}')
    p.add_argument('-r', '--resampler', help='Resampler backend (see `recolour-tool resamplers`)')
    p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')

    p = sub.add_parser('plan', help='Print the fitted size for a source size')
    p.add_argument('width', type=int, help='Source width in pixels')
    p.add_argument('height', type=int, help='Source height in pixels')
    p.add_argument('-b', '--box', help='Bounding box WIDTHxHEIGHT (default: RECOLOUR_BOX or 285x160)')

    sub.add_parser('resamplers', help='List resampler backends')
    sub.add_parser('palettes', help='List built-in palettes')
    return parser


def _print_resamplers() -> None:
    print('Available resamplers:\n')
    for name, impl in sorted(registry.all_resamplers().items()):
        print(f'  {name:<10} {impl.help}')


def _print_palettes() -> None:
    print('Available palettes:\n')
    for name, palette in sorted(PALETTES.items()):
        print(f'  {name:<10} {len(palette)} colours')
        print(f'             {" ".join(c.hex for c in palette)}')


def _convert(args: argparse.Namespace, settings: Settings) -> int:
    if not os.path.isfile(args.image):
        print(f'Error: image not found: {args.image}', file=sys.stderr)
        return 1

    box = BoundingBox.parse(args.box or settings.box)
    config = RecolourConfig(
        palette=get_palette(args.palette or settings.palette),
        resampler=registry.get(args.resampler or settings.resampler).name,
    )
    report = convert_file(args.image, args.out, box, config)
    if report is None:
        print(f'Error: not a readable image: {args.image}', file=sys.stderr)
        return 1

    print(format_json(report) if args.json else format_text(report))
    return 0


def _plan(args: argparse.Namespace, settings: Settings) -> int:
    box = BoundingBox.parse(args.box or settings.box)
    width, height = plan_fit(args.width, args.height, box)
    print(f'{width}x{height}')
    return 0


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=getattr(args, 'env_file', None))
    settings = settings_from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format='%(levelname)s %(name)s: %(message)s',
    )
    if env_path:
        print(f'recolour-tool: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'resamplers':
        _print_resamplers()
        return
    if args.command == 'palettes':
        _print_palettes()
        return

    try:
        if args.command == 'convert':
            code = _convert(args, settings)
        else:
            code = _plan(args, settings)
    except (RecolourError, KeyError, ValueError) as e:
        message = e.args[0] if isinstance(e, KeyError) and e.args else e
        print(f'Error: {message}', file=sys.stderr)
        sys.exit(1)

    if code:
        sys.exit(code)


if __name__ == '__main__':
    main()
